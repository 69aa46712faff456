"""
Specification primitives: the predicate protocol, the shared combinator
base and the binary AND / OR / unary NOT composites.

Every node is immutable once constructed. Combinators return new nodes
wrapping their operands, so one tree can be shared freely between
callers and threads.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Generic, NoReturn, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ISpecification(Protocol[T]):
    """
    Protocol for the Specification pattern.
    Used to encapsulate business rules for querying and filtering entities.
    """

    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check whether *candidate* satisfies the rule.
        Must be deterministic and free of side effects.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Useful for serializing criteria across process boundaries or to DB drivers.
        """
        ...


class BaseSpecification(ABC, Generic[T]):
    """Base class for specifications with logic operator support.

    Concrete specifications implement ``is_satisfied_by`` and ``to_dict``;
    the combinators below are inherited unchanged.
    """

    __slots__ = ()

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    # -- combinators ---------------------------------------------------------

    def and_(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def or_(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def not_(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def merge(self, other: ISpecification[T]) -> AndSpecification[T]:
        """Merge with another specification using logical AND."""
        return AndSpecification(self, other)

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    # -- immutability --------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -- structural equality -------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseSpecification):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(json.dumps(self.to_dict(), sort_keys=True, default=str))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class AndSpecification(BaseSpecification[T]):
    """Logical AND of exactly two specifications."""

    __slots__ = ("left", "right")

    left: ISpecification[T]
    right: ISpecification[T]

    def __init__(self, left: ISpecification[T], right: ISpecification[T]) -> None:
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(
            candidate
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


class OrSpecification(BaseSpecification[T]):
    """Logical OR of exactly two specifications."""

    __slots__ = ("left", "right")

    left: ISpecification[T]
    right: ISpecification[T]

    def __init__(self, left: ISpecification[T], right: ISpecification[T]) -> None:
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(
            candidate
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "or",
            "conditions": [self.left.to_dict(), self.right.to_dict()],
        }


class NotSpecification(BaseSpecification[T]):
    """Logical NOT composite specification."""

    __slots__ = ("specification",)

    specification: ISpecification[T]

    def __init__(self, specification: ISpecification[T]) -> None:
        object.__setattr__(self, "specification", specification)

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "not",
            "conditions": [self.specification.to_dict()],
        }


class AlwaysTrueSpecification(BaseSpecification[Any]):
    """Satisfied by every candidate.

    Serialises as an empty conjunction, which every backend reads as
    "no filter".
    """

    __slots__ = ()

    def is_satisfied_by(self, candidate: Any) -> bool:  # noqa: ARG002
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"op": "and", "conditions": []}
