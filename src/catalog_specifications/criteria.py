"""
Search criteria and the builder that turns them into one specification.

``SearchCriteria`` is the flat, partially-populated set of filters a
caller asks for. ``None`` marks a criterion as absent, so "not given"
never collides with "given as zero / false".

Example::

    criteria = SearchCriteria.from_mapping(
        {"category": "electronics", "maxPrice": "1000", "inStock": "true"}
    )
    spec = CriteriaSpecificationBuilder().build(criteria)
    # → AND(AND(category ieq "electronics", price < 1000.0), stock > 0)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .base import AlwaysTrueSpecification, AndSpecification, BaseSpecification
from .exceptions import CriteriaValidationError, UnknownCriteriaError
from .products import (
    CategorySpecification,
    HasTagSpecification,
    InStockSpecification,
    MinStockSpecification,
    NameContainsSpecification,
    PriceGreaterThanSpecification,
    PriceLessThanSpecification,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    CriterionFactory = Callable[[Any], BaseSpecification[Any] | None]

logger = logging.getLogger("catalog_specifications.criteria")


class SearchCriteria(BaseModel):
    """
    Optional product filters.

    Fields may be populated by name or by the camelCase aliases HTTP
    clients send (``maxPrice``, ``minPrice``, ``inStock``, ``minStock``).
    Unknown keys are dropped by :meth:`from_mapping` unless ``strict``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    category: str | None = None
    max_price: float | None = Field(default=None, alias="maxPrice")
    min_price: float | None = Field(default=None, alias="minPrice")
    in_stock: bool | None = Field(default=None, alias="inStock")
    name: str | None = None
    tag: str | None = None
    min_stock: int | None = Field(default=None, alias="minStock")

    @classmethod
    def known_keys(cls) -> dict[str, str]:
        """Map every accepted input key (name or alias) to its field name."""
        keys: dict[str, str] = {}
        for field_name, info in cls.model_fields.items():
            keys[field_name] = field_name
            if info.alias:
                keys[info.alias] = field_name
        return keys

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        strict: bool = False,
    ) -> SearchCriteria:
        """
        Build criteria from raw caller input (query string or body).

        Values are coerced by pydantic (``"true"`` → ``True``,
        ``"1000"`` → ``1000.0``). Empty values count as absent. A criterion
        may be given by field name or by alias, not both.

        Raises:
            UnknownCriteriaError: ``strict`` is set and *data* carries keys
                that name no criterion.
            CriteriaValidationError: A value cannot be coerced, or a
                criterion is given twice.
        """
        known = cls.known_keys()
        unknown = [key for key in data if key not in known]
        if unknown:
            if strict:
                raise UnknownCriteriaError(unknown, list(cls.model_fields))
            logger.debug("Ignoring unknown search criteria: %s", ", ".join(unknown))

        values: dict[str, Any] = {}
        given_as: dict[str, str] = {}
        duplicates: dict[str, list[str]] = {}
        for key, value in data.items():
            if key not in known or value is None or value == "":
                continue
            field_name = known[key]
            if field_name in given_as:
                duplicates.setdefault(field_name, []).append(
                    f"given both as '{given_as[field_name]}' and '{key}'"
                )
                continue
            given_as[field_name] = key
            values[field_name] = value
        if duplicates:
            raise CriteriaValidationError(duplicates)

        try:
            return cls.model_validate(values)
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                loc = ".".join(str(p) for p in error.get("loc", ("__root__",)))
                msg = error.get("msg", "validation error")
                errors.setdefault(loc, []).append(msg)
            raise CriteriaValidationError(errors) from exc

    def present_fields(self) -> list[str]:
        """Names of the populated criteria, in declaration order."""
        return [
            field_name
            for field_name in type(self).model_fields
            if getattr(self, field_name) is not None
        ]


def _in_stock(flag: bool) -> BaseSpecification[Any] | None:
    # in_stock=False leaves stock unfiltered.
    return InStockSpecification() if flag else None


DEFAULT_CRITERIA: dict[str, CriterionFactory] = {
    "category": CategorySpecification,
    "max_price": PriceLessThanSpecification,
    "min_price": PriceGreaterThanSpecification,
    "in_stock": _in_stock,
    "name": NameContainsSpecification,
    "tag": HasTagSpecification,
    "min_stock": MinStockSpecification,
}


class CriteriaSpecificationBuilder:
    """
    Folds the present criteria into a single AND-composed specification.

    Each criterion maps to a factory producing its specification. Fields
    are applied in the criteria model's declaration order, so the shape of
    the resulting tree is reproducible. New criteria are plugged in with
    :meth:`register` together with a ``SearchCriteria`` subclass declaring
    the field.
    """

    def __init__(
        self,
        factories: Mapping[str, CriterionFactory] | None = None,
        *,
        criteria_type: type[SearchCriteria] = SearchCriteria,
        strict: bool = False,
    ) -> None:
        self._factories: dict[str, CriterionFactory] = dict(
            factories if factories is not None else DEFAULT_CRITERIA
        )
        self._criteria_type = criteria_type
        self._strict = strict

    def register(
        self, field: str, factory: CriterionFactory
    ) -> CriteriaSpecificationBuilder:
        """Map *field* to *factory*, replacing any previous mapping."""
        self._factories[field] = factory
        return self

    @property
    def criteria_type(self) -> type[SearchCriteria]:
        return self._criteria_type

    def parse(self, data: Mapping[str, Any]) -> SearchCriteria:
        """Build this builder's criteria type from raw input."""
        return self._criteria_type.from_mapping(data, strict=self._strict)

    def build(
        self, criteria: SearchCriteria | Mapping[str, Any]
    ) -> BaseSpecification[Any] | None:
        """
        Return the composed specification, or ``None`` when no criterion
        is present ("no filtering requested").
        """
        if not isinstance(criteria, SearchCriteria):
            criteria = self.parse(criteria)

        spec: BaseSpecification[Any] | None = None
        for field in criteria.present_fields():
            factory = self._factories.get(field)
            if factory is None:
                logger.debug("No specification registered for %r; ignoring", field)
                continue
            current = factory(getattr(criteria, field))
            if current is None:
                logger.debug("Criterion %r adds no filter", field)
                continue
            spec = current if spec is None else AndSpecification(spec, current)

        if spec is None:
            logger.debug("No criteria present; no filtering requested")
        else:
            logger.debug("Built specification %s", spec.to_dict())
        return spec

    def build_or_all(
        self, criteria: SearchCriteria | Mapping[str, Any]
    ) -> BaseSpecification[Any]:
        """Like :meth:`build` but never ``None``: falls back to always-true."""
        spec = self.build(criteria)
        return spec if spec is not None else AlwaysTrueSpecification()


def build_specification(
    criteria: SearchCriteria | Mapping[str, Any],
) -> BaseSpecification[Any] | None:
    """Build with the default product criteria."""
    return CriteriaSpecificationBuilder().build(criteria)
