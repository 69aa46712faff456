"""InMemoryProductRepository: dict-backed product store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .executor import InMemoryQueryExecutor

if TYPE_CHECKING:
    from .base import ISpecification
    from .products import Product

logger = logging.getLogger("catalog_specifications.repository")


@runtime_checkable
class IProductRepository(Protocol):
    """Storage seam: ``find_all`` may scan in memory or translate the tree."""

    async def save(self, product: Product) -> None: ...

    async def get(self, product_id: str) -> Product | None: ...

    async def find_all(
        self, specification: ISpecification[Product] | None = None
    ) -> list[Product]: ...


class InMemoryProductRepository:
    """In-memory implementation of :class:`IProductRepository`.

    Products are kept in insertion order, keyed by ``id``. Saving an
    existing id replaces the product in place.
    """

    def __init__(self, executor: InMemoryQueryExecutor[Any] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self._executor = executor or InMemoryQueryExecutor()

    async def save(self, product: Product) -> None:
        replaced = product.id in self._store
        self._store[product.id] = product
        logger.info(
            "%s product %s (%s)",
            "Replaced" if replaced else "Added",
            product.id,
            product.name,
        )

    async def get(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    async def find_all(
        self, specification: ISpecification[Product] | None = None
    ) -> list[Product]:
        """Products satisfying *specification*, in insertion order."""
        snapshot = list(self._store.values())
        return self._executor.find_all(snapshot, specification)

    # ── Test helpers ─────────────────────────────────────────────

    async def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
