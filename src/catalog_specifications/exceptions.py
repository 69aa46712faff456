"""
Specification exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``SpecificationError`` and provide
``to_dict()`` for API-friendly error responses.

Evaluating, combining and executing specifications never raises; these
errors come from the edges: rebuilding trees from untrusted input,
translating trees for a backend, and turning raw request data into
criteria.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SpecificationError(Exception):
    """Base exception for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(SpecificationError):
    """Specification structure validation failed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(SpecificationError):
    """
    Unknown operator specified.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(
        self, operator: str, valid_operators: list[str], path: str | None = None
    ) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.path = path
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators)[:10])}..."
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
            "path": self.path,
        }


class QueryTranslationError(SpecificationError):
    """A specification tree could not be compiled into a backend query."""


class CriteriaError(SpecificationError):
    """Base class for errors raised while building search criteria."""


class UnknownCriteriaError(CriteriaError):
    """
    Raised in strict mode when the input carries unrecognised criteria.

    Example error message::

        Unknown search criteria: 'catgory'.
        Did you mean one of these?
          • category

        Known criteria: category, in_stock, max_price, ...
    """

    def __init__(self, fields: list[str], known_fields: list[str]) -> None:
        self.fields = fields
        self.known_fields = known_fields
        self.suggestions = {
            name: get_close_matches(name, known_fields, n=3, cutoff=0.6)
            for name in fields
        }
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        quoted = ", ".join(f"'{name}'" for name in self.fields)
        lines = [f"Unknown search criteria: {quoted}."]
        hints = sorted({s for found in self.suggestions.values() for s in found})
        if hints:
            lines.append("Did you mean one of these?")
            for hint in hints:
                lines.append(f"  • {hint}")
        lines.append(f"Known criteria: {', '.join(sorted(self.known_fields))}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_CRITERIA",
            "fields": self.fields,
            "suggestions": self.suggestions,
            "known_fields": sorted(self.known_fields),
        }


class CriteriaValidationError(CriteriaError):
    """
    Criteria values could not be coerced to their declared types.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(str(self.errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CRITERIA_VALIDATION_ERROR",
            "errors": self.errors,
        }
