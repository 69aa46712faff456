"""Mongo query builder from specification AST.

Compiles a tree (through ``to_dict()``) into a MongoDB filter document.
Only plain dicts are produced, so no driver is needed to build or
inspect a query.
"""

from __future__ import annotations

import re
from typing import Any

from .exceptions import QueryTranslationError
from .operators import SpecificationOperator

_MONGO_OP_MAP: dict[SpecificationOperator, str] = {
    SpecificationOperator.GT: "$gt",
    SpecificationOperator.GE: "$gte",
    SpecificationOperator.LT: "$lt",
    SpecificationOperator.LE: "$lte",
}


def _icase(pattern: str) -> dict[str, str]:
    return {"$regex": pattern, "$options": "i"}


def _compile_leaf(data: dict[str, Any]) -> dict[str, Any]:
    """Compile a single attribute condition to a MongoDB query document."""
    attr = data.get("attr")
    val = data.get("val")
    if not attr:
        raise QueryTranslationError(f"Specification missing 'attr': {data}")
    try:
        op = SpecificationOperator(data.get("op", ""))
    except ValueError as exc:
        raise QueryTranslationError(
            f"Unsupported operator: {data.get('op')!r}"
        ) from exc

    mongo_op = _MONGO_OP_MAP.get(op)
    if mongo_op is not None:
        return {attr: {mongo_op: val}}

    # An array field matches a $regex when any element does, so ihas
    # compiles like ieq.
    if op in {SpecificationOperator.IEQ, SpecificationOperator.IHAS}:
        return {attr: _icase(f"^{re.escape(str(val))}$")}
    if op == SpecificationOperator.ICONTAINS:
        return {attr: _icase(re.escape(str(val)))}

    raise QueryTranslationError(f"Operator {op.value!r} cannot be used on a leaf")


def _compile_node(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively compile spec dict to MongoDB filter."""
    if not isinstance(data, dict):
        raise QueryTranslationError("Specification node must be a dict")
    op_str = str(data.get("op", "")).lower()
    conditions = data.get("conditions", [])
    if op_str == SpecificationOperator.AND:
        compiled = [c for c in (_compile_node(c) for c in conditions) if c]
        if not compiled:
            return {}
        return compiled[0] if len(compiled) == 1 else {"$and": compiled}
    if op_str == SpecificationOperator.OR:
        compiled = [_compile_node(c) for c in conditions]
        # A branch matching everything makes the whole disjunction match.
        if not compiled or any(not c for c in compiled):
            return {}
        return {"$or": compiled}
    if op_str == SpecificationOperator.NOT:
        if len(conditions) != 1:
            raise QueryTranslationError("'not' requires exactly one condition")
        inner = _compile_node(conditions[0])
        # NOT(match everything) matches nothing.
        return {"$nor": [inner]} if inner else {"$expr": False}
    return _compile_leaf(data)


class MongoQueryBuilder:
    """Compiles specifications (via ``to_dict()``) to MongoDB query documents."""

    def build_match(self, spec: Any) -> dict[str, Any]:
        """Build a ``$match`` filter from a specification or its dict AST.

        ``None`` means no filtering and yields ``{}``.
        """
        if spec is None:
            return {}
        if hasattr(spec, "to_dict"):
            data = spec.to_dict()
        elif isinstance(spec, dict):
            data = spec
        else:
            raise QueryTranslationError("spec must be a specification or dict")
        if not data:
            return {}
        return _compile_node(data)
