"""
Rebuild specification trees from their ``to_dict()`` form.

Leaves are looked up by their ``(attr, op)`` pair in a table of leaf
factories, so a serialised product tree comes back as the same catalog
predicates it was written from::

    factory = SpecificationFactory()
    spec = factory.from_dict(
        {
            "op": "and",
            "conditions": [
                {"op": "ieq", "attr": "category", "val": "electronics"},
                {"op": ">", "attr": "stock", "val": 0},
            ],
        }
    )
    # → CategorySpecification("electronics") & InStockSpecification()

Validation and construction share one walk over the tree, so
:meth:`SpecificationFactory.validate` reports exactly the problems
:meth:`SpecificationFactory.from_dict` would raise on.
"""

from __future__ import annotations

import json
from functools import reduce
from typing import TYPE_CHECKING, Any

from .base import (
    AlwaysTrueSpecification,
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .exceptions import OperatorNotFoundError, ValidationError
from .operators import LOGICAL_OPERATORS, SpecificationOperator
from .products import PRODUCT_LEAVES

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Mapping

    LeafFactory = Callable[[Any], BaseSpecification[Any]]
    LeafTable = Mapping[tuple[str, SpecificationOperator | str], LeafFactory]

_ROOT = "<root>"

_TreeError = ValidationError | OperatorNotFoundError


class SpecificationFactory:
    """
    Turns serialised trees back into specifications.

    Args:
        leaves: ``(attr, op) → factory(val)`` table. Defaults to the
            product catalog leaves.
        allowed_fields: Optional whitelist of ``attr`` names.
    """

    def __init__(
        self,
        leaves: LeafTable | None = None,
        *,
        allowed_fields: Collection[str] | None = None,
    ) -> None:
        self._leaves: dict[tuple[str, SpecificationOperator], LeafFactory] = {
            (attr, SpecificationOperator(op)): factory
            for (attr, op), factory in (
                leaves if leaves is not None else PRODUCT_LEAVES
            ).items()
        }
        self._allowed_fields = (
            frozenset(allowed_fields) if allowed_fields is not None else None
        )

    def register(
        self, attr: str, op: SpecificationOperator | str, factory: LeafFactory
    ) -> SpecificationFactory:
        """Map the ``(attr, op)`` leaf to *factory*, replacing any previous one."""
        self._leaves[(attr, SpecificationOperator(op))] = factory
        return self

    @property
    def operators(self) -> set[str]:
        """Operator values this factory accepts."""
        return {op.value for _, op in self._leaves} | {
            op.value for op in LOGICAL_OPERATORS
        }

    def from_dict(self, data: dict[str, Any]) -> BaseSpecification[Any]:
        """
        Build a specification tree.

        Raises:
            OperatorNotFoundError: A node names an unknown operator.
            ValidationError: Any other structural problem (the first one
                found, with its path).
        """
        errors: list[_TreeError] = []
        spec = self._walk(data, _ROOT, errors)
        if errors:
            raise errors[0]
        assert spec is not None
        return spec

    def from_json(self, text: str) -> BaseSpecification[Any]:
        """Parse a JSON object and build a specification tree."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path=_ROOT) from exc
        if not isinstance(data, dict):
            raise ValidationError(
                "Top-level JSON value must be an object", path=_ROOT
            )
        return self.from_dict(data)

    def validate(self, data: Any) -> list[str]:
        """Every problem in *data* as ``"<path>: <message>"``; empty when valid."""
        errors: list[_TreeError] = []
        self._walk(data, _ROOT, errors)
        return [f"{err.path}: {_message(err)}" for err in errors]

    # -- tree walk -----------------------------------------------------------

    def _walk(
        self, data: Any, path: str, errors: list[_TreeError]
    ) -> BaseSpecification[Any] | None:
        if not isinstance(data, dict):
            errors.append(
                ValidationError(f"expected dict, got {type(data).__name__}", path)
            )
            return None

        raw_op = data.get("op")
        if not raw_op or not isinstance(raw_op, str):
            errors.append(ValidationError("missing or empty 'op' key", path))
            return None
        try:
            op = SpecificationOperator(raw_op.lower())
        except ValueError:
            errors.append(
                OperatorNotFoundError(raw_op.lower(), sorted(self.operators), path)
            )
            return None

        if op in LOGICAL_OPERATORS:
            return self._walk_logical(op, data, path, errors)
        return self._walk_leaf(op, data, path, errors)

    def _walk_logical(
        self,
        op: SpecificationOperator,
        data: dict[str, Any],
        path: str,
        errors: list[_TreeError],
    ) -> BaseSpecification[Any] | None:
        conditions = data.get("conditions")
        if not isinstance(conditions, list):
            errors.append(
                ValidationError(f"logical '{op.value}' requires 'conditions'", path)
            )
            return None

        failed = False
        if op is SpecificationOperator.NOT and len(conditions) != 1:
            errors.append(
                ValidationError("'not' requires exactly one condition", path)
            )
            failed = True
        if op is SpecificationOperator.OR and not conditions:
            errors.append(
                ValidationError("'or' requires at least one condition", path)
            )
            failed = True

        children = [
            self._walk(child, f"{path}.conditions[{idx}]", errors)
            for idx, child in enumerate(conditions)
        ]
        if failed or any(child is None for child in children):
            return None

        built: list[BaseSpecification[Any]] = [c for c in children if c is not None]
        if op is SpecificationOperator.NOT:
            return NotSpecification(built[0])
        if op is SpecificationOperator.OR:
            return reduce(OrSpecification, built)
        if not built:
            return AlwaysTrueSpecification()
        return reduce(AndSpecification, built)

    def _walk_leaf(
        self,
        op: SpecificationOperator,
        data: dict[str, Any],
        path: str,
        errors: list[_TreeError],
    ) -> BaseSpecification[Any] | None:
        attr = data.get("attr")
        if not attr or not isinstance(attr, str):
            errors.append(ValidationError("missing 'attr'", path))
            return None
        if self._allowed_fields is not None and attr not in self._allowed_fields:
            errors.append(ValidationError(f"field '{attr}' not allowed", path))
            return None

        factory = self._leaves.get((attr, op))
        if factory is None:
            errors.append(
                ValidationError(f"no specification for '{attr}' '{op.value}'", path)
            )
            return None
        try:
            return factory(data.get("val"))
        except (TypeError, ValueError) as exc:
            errors.append(ValidationError(f"invalid value for '{attr}': {exc}", path))
            return None


def _message(error: _TreeError) -> str:
    if isinstance(error, OperatorNotFoundError):
        return f"unknown operator '{error.operator}'"
    return error.message
