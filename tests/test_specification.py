"""Tests for the combinators, tree shape and boolean laws."""

from __future__ import annotations

import pytest

from catalog_specifications import (
    AllProductsSpecification,
    AlwaysTrueSpecification,
    AndSpecification,
    BaseSpecification,
    CategorySpecification,
    HasTagSpecification,
    InStockSpecification,
    ISpecification,
    MinStockSpecification,
    NameContainsSpecification,
    NotSpecification,
    OrSpecification,
    PriceGreaterThanSpecification,
    PriceLessThanSpecification,
)

SPECS = [
    CategorySpecification("electronics"),
    PriceLessThanSpecification(1000),
    PriceGreaterThanSpecification(300),
    NameContainsSpecification("pro"),
    HasTagSpecification("APPLE"),
    InStockSpecification(),
    MinStockSpecification(10),
    AllProductsSpecification(),
    ~InStockSpecification(),
]

PAIRS = [(p, q) for p in SPECS for q in SPECS]


class _Recorder(BaseSpecification[object]):
    """Records every evaluation to observe operand order."""

    __slots__ = ("label", "result", "calls")

    def __init__(self, label: str, result: bool, calls: list[str]) -> None:
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "result", result)
        object.__setattr__(self, "calls", calls)

    def is_satisfied_by(self, candidate: object) -> bool:  # noqa: ARG002
        self.calls.append(self.label)
        return self.result

    def to_dict(self) -> dict:
        return {"op": "=", "attr": self.label, "val": self.result}


# -- combinators -------------------------------------------------------------


def test_and_requires_both(iphone, galaxy):
    spec = CategorySpecification("electronics").and_(PriceLessThanSpecification(1000))
    assert isinstance(spec, AndSpecification)
    assert spec.is_satisfied_by(galaxy) is True
    assert spec.is_satisfied_by(iphone) is False


def test_or_requires_either(iphone, desk, galaxy):
    spec = PriceGreaterThanSpecification(1000).or_(CategorySpecification("furniture"))
    assert isinstance(spec, OrSpecification)
    assert spec.is_satisfied_by(iphone) is True
    assert spec.is_satisfied_by(desk) is True
    assert spec.is_satisfied_by(galaxy) is False


def test_not_inverts(desk, iphone):
    spec = InStockSpecification().not_()
    assert isinstance(spec, NotSpecification)
    assert spec.is_satisfied_by(desk) is True
    assert spec.is_satisfied_by(iphone) is False


def test_operator_overloads_match_named_methods(catalog):
    p, q = CategorySpecification("electronics"), InStockSpecification()
    for product in catalog:
        assert (p & q).is_satisfied_by(product) == p.and_(q).is_satisfied_by(product)
        assert (p | q).is_satisfied_by(product) == p.or_(q).is_satisfied_by(product)
        assert (~p).is_satisfied_by(product) == p.not_().is_satisfied_by(product)


def test_merge_is_and(galaxy):
    merged = CategorySpecification("electronics").merge(InStockSpecification())
    assert isinstance(merged, AndSpecification)
    assert merged.is_satisfied_by(galaxy) is True


def test_combinators_return_new_nodes():
    p, q = InStockSpecification(), MinStockSpecification(3)
    combined = p & q
    assert combined is not p
    assert combined.left is p
    assert combined.right is q
    assert p.to_dict() == {"op": ">", "attr": "stock", "val": 0}


def test_tree_is_binary():
    spec = (
        CategorySpecification("electronics")
        & InStockSpecification()
        & PriceLessThanSpecification(1000)
    )
    assert isinstance(spec.left, AndSpecification)
    assert isinstance(spec.right, PriceLessThanSpecification)
    assert len(spec.to_dict()["conditions"]) == 2


def test_left_operand_evaluated_first_and_short_circuits():
    calls: list[str] = []
    left = _Recorder("left", False, calls)
    right = _Recorder("right", True, calls)

    assert (left & right).is_satisfied_by(object()) is False
    assert calls == ["left"]

    calls.clear()
    assert (right | left).is_satisfied_by(object()) is True
    assert calls == ["right"]


def test_concrete_specs_satisfy_protocol():
    for spec in SPECS:
        assert isinstance(spec, ISpecification)


# -- immutability ------------------------------------------------------------


def test_composite_nodes_are_immutable():
    spec = InStockSpecification() & CategorySpecification("toys")
    with pytest.raises(AttributeError):
        spec.left = AllProductsSpecification()
    with pytest.raises(AttributeError):
        del spec.right


def test_leaf_parameters_are_immutable():
    spec = PriceLessThanSpecification(100)
    with pytest.raises(AttributeError):
        spec.max_price = 1
    with pytest.raises(AttributeError):
        spec.extra = True


# -- serialisation / equality ------------------------------------------------


def test_to_dict_shape():
    spec = ~(CategorySpecification("books") | HasTagSpecification("sale"))
    assert spec.to_dict() == {
        "op": "not",
        "conditions": [
            {
                "op": "or",
                "conditions": [
                    {"op": "ieq", "attr": "category", "val": "books"},
                    {"op": "ihas", "attr": "tags", "val": "sale"},
                ],
            }
        ],
    }


def test_always_true_serialises_as_empty_and():
    assert AlwaysTrueSpecification().to_dict() == {"op": "and", "conditions": []}


def test_structural_equality_and_hash():
    a = CategorySpecification("books") & InStockSpecification()
    b = CategorySpecification("books") & InStockSpecification()
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != CategorySpecification("books")


# -- boolean laws ------------------------------------------------------------


@pytest.mark.parametrize("p", SPECS)
def test_always_true_is_and_identity(p, catalog):
    for product in catalog:
        assert p.and_(AlwaysTrueSpecification()).is_satisfied_by(
            product
        ) == p.is_satisfied_by(product)


@pytest.mark.parametrize("p", SPECS)
def test_double_negation(p, catalog):
    for product in catalog:
        assert p.not_().not_().is_satisfied_by(product) == p.is_satisfied_by(product)


@pytest.mark.parametrize(("p", "q"), PAIRS)
def test_de_morgan(p, q, catalog):
    for product in catalog:
        assert p.and_(q).not_().is_satisfied_by(product) == p.not_().or_(
            q.not_()
        ).is_satisfied_by(product)
        assert p.or_(q).not_().is_satisfied_by(product) == p.not_().and_(
            q.not_()
        ).is_satisfied_by(product)


@pytest.mark.parametrize(("p", "q"), PAIRS)
def test_and_or_commute(p, q, catalog):
    for product in catalog:
        assert p.and_(q).is_satisfied_by(product) == q.and_(p).is_satisfied_by(
            product
        )
        assert p.or_(q).is_satisfied_by(product) == q.or_(p).is_satisfied_by(product)
