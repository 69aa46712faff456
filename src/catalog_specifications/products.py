"""
Product entity and its catalog of concrete specifications.

Each specification encapsulates one business rule, holds its parameter
from construction and implements only ``is_satisfied_by`` and
``to_dict``. Combinators come from :class:`BaseSpecification`.

Parameters are not validated: a negative price bound or an empty search
term has a well-defined (if trivial) meaning. Text rules compare
case-insensitively so client input casing never causes mismatches.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from .base import AlwaysTrueSpecification, BaseSpecification
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Callable


class Product(BaseModel):
    """Immutable product snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    price: float
    category: str
    stock: int
    tags: tuple[str, ...] = ()

    def is_in_stock(self) -> bool:
        return self.stock > 0

    def has_tag(self, tag: str) -> bool:
        wanted = tag.casefold()
        return any(t.casefold() == wanted for t in self.tags)


def _leaf(op: SpecificationOperator, attr: str, val: Any) -> dict[str, Any]:
    return {"op": op.value, "attr": attr, "val": val}


class CategorySpecification(BaseSpecification[Product]):
    """Product belongs to *category* (case-insensitive)."""

    __slots__ = ("category",)

    category: str

    def __init__(self, category: str) -> None:
        object.__setattr__(self, "category", category)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.category.casefold() == self.category.casefold()

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.IEQ, "category", self.category)


class PriceLessThanSpecification(BaseSpecification[Product]):
    """Price strictly below *max_price*."""

    __slots__ = ("max_price",)

    max_price: float

    def __init__(self, max_price: float) -> None:
        object.__setattr__(self, "max_price", max_price)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.price < self.max_price

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.LT, "price", self.max_price)


class PriceGreaterThanSpecification(BaseSpecification[Product]):
    """Price strictly above *min_price*."""

    __slots__ = ("min_price",)

    min_price: float

    def __init__(self, min_price: float) -> None:
        object.__setattr__(self, "min_price", min_price)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.price > self.min_price

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.GT, "price", self.min_price)


class NameContainsSpecification(BaseSpecification[Product]):
    """Name contains *search_term*, ignoring case."""

    __slots__ = ("search_term",)

    search_term: str

    def __init__(self, search_term: str) -> None:
        object.__setattr__(self, "search_term", search_term)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return self.search_term.casefold() in candidate.name.casefold()

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.ICONTAINS, "name", self.search_term)


class HasTagSpecification(BaseSpecification[Product]):
    """One of the product tags equals *tag*, ignoring case."""

    __slots__ = ("tag",)

    tag: str

    def __init__(self, tag: str) -> None:
        object.__setattr__(self, "tag", tag)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.has_tag(self.tag)

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.IHAS, "tags", self.tag)


class InStockSpecification(BaseSpecification[Product]):
    """At least one unit left."""

    __slots__ = ()

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.is_in_stock()

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.GT, "stock", 0)


class MinStockSpecification(BaseSpecification[Product]):
    """Stock of at least *min_stock* units (inclusive bound)."""

    __slots__ = ("min_stock",)

    min_stock: int

    def __init__(self, min_stock: int) -> None:
        object.__setattr__(self, "min_stock", min_stock)

    def is_satisfied_by(self, candidate: Product) -> bool:
        return candidate.stock >= self.min_stock

    def to_dict(self) -> dict[str, Any]:
        return _leaf(SpecificationOperator.GE, "stock", self.min_stock)


class AllProductsSpecification(AlwaysTrueSpecification):
    """Matches every product; the neutral starting point for composition."""

    __slots__ = ()


# -- Rebuilding from the serialised form ------------------------------------


def _text(val: Any) -> str:
    if not isinstance(val, str):
        raise TypeError(f"expected a string, got {type(val).__name__}")
    return val


def _number(val: Any) -> float:
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise TypeError(f"expected a number, got {type(val).__name__}")
    return val


def _integer(val: Any) -> int:
    if isinstance(val, bool) or not isinstance(val, int):
        raise TypeError(f"expected an integer, got {type(val).__name__}")
    return val


def _stock_above(val: Any) -> InStockSpecification:
    if _number(val) != 0:
        raise ValueError("only 'stock > 0' maps to a catalog specification")
    return InStockSpecification()


PRODUCT_LEAVES: dict[
    tuple[str, SpecificationOperator], Callable[[Any], BaseSpecification[Any]]
] = {
    ("category", SpecificationOperator.IEQ): lambda v: CategorySpecification(_text(v)),
    ("price", SpecificationOperator.LT): lambda v: PriceLessThanSpecification(
        _number(v)
    ),
    ("price", SpecificationOperator.GT): lambda v: PriceGreaterThanSpecification(
        _number(v)
    ),
    ("name", SpecificationOperator.ICONTAINS): lambda v: NameContainsSpecification(
        _text(v)
    ),
    ("tags", SpecificationOperator.IHAS): lambda v: HasTagSpecification(_text(v)),
    ("stock", SpecificationOperator.GT): _stock_above,
    ("stock", SpecificationOperator.GE): lambda v: MinStockSpecification(_integer(v)),
}
"""Catalog predicate for each ``(attr, op)`` pair a product leaf serialises to."""
