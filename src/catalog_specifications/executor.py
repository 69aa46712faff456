"""
In-memory query executor.

Applies an optional specification to a sequence of records and returns
the matching subset in source order. Each call is one fresh linear pass;
nothing is cached between calls.

The caller hands over a consistent snapshot of its records for the
duration of a pass. The executor never returns the caller's own
sequence object, so mutating a result cannot reach back into a store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .base import ISpecification

T = TypeVar("T")

logger = logging.getLogger("catalog_specifications.executor")


def find_all(
    records: Iterable[T],
    specification: ISpecification[T] | None = None,
) -> list[T]:
    """
    Return the records satisfying *specification*, preserving order.

    With no specification every record is returned, as a new list.
    """
    if specification is None:
        return list(records)
    return [record for record in records if specification.is_satisfied_by(record)]


def count(
    records: Iterable[T],
    specification: ISpecification[T] | None = None,
) -> int:
    """Number of records satisfying *specification*."""
    if specification is None:
        return sum(1 for _ in records)
    return sum(1 for record in records if specification.is_satisfied_by(record))


class InMemoryQueryExecutor(Generic[T]):
    """Linear-scan executor.

    Object form of :func:`find_all` / :func:`count`, for callers that inject
    the executor alongside a store. A backend that translates trees into a
    native query (see :class:`~catalog_specifications.query_builder.MongoQueryBuilder`)
    would implement the same two methods.
    """

    def find_all(
        self,
        records: Iterable[T],
        specification: ISpecification[T] | None = None,
    ) -> list[T]:
        matched = find_all(records, specification)
        logger.debug(
            "find_all matched %d record(s) (filtered=%s)",
            len(matched),
            specification is not None,
        )
        return matched

    def count(
        self,
        records: Iterable[T],
        specification: ISpecification[T] | None = None,
    ) -> int:
        return count(records, specification)
