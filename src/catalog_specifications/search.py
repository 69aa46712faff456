"""Product search and creation services on top of the repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from .criteria import CriteriaSpecificationBuilder, SearchCriteria
from .products import Product

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .repository import IProductRepository

logger = logging.getLogger("catalog_specifications.search")


class ProductDTO(BaseModel):
    """Serialisable view of a product."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float
    category: str
    stock: int
    tags: list[str]

    @classmethod
    def from_domain(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            category=product.category,
            stock=product.stock,
            tags=list(product.tags),
        )


class SearchProductsResult(BaseModel):
    """Matching products plus their count."""

    count: int
    products: list[ProductDTO]


class SearchProductsService:
    """Builds a specification from criteria and runs it against the store."""

    def __init__(
        self,
        repository: IProductRepository,
        builder: CriteriaSpecificationBuilder | None = None,
    ) -> None:
        self._repository = repository
        self._builder = builder or CriteriaSpecificationBuilder()

    async def search(
        self, criteria: SearchCriteria | Mapping[str, Any]
    ) -> SearchProductsResult:
        spec = self._builder.build(criteria)
        products = await self._repository.find_all(spec)
        dtos = [ProductDTO.from_domain(p) for p in products]
        logger.debug("Search matched %d product(s)", len(dtos))
        return SearchProductsResult(count=len(dtos), products=dtos)

    async def search_params(
        self, params: Mapping[str, Any], *, strict: bool | None = None
    ) -> SearchProductsResult:
        """Search from raw request parameters.

        *strict* overrides the builder's own setting when given.

        Raises:
            UnknownCriteriaError: ``strict`` and an unrecognised key.
            CriteriaValidationError: A value cannot be coerced.
        """
        if strict is None:
            criteria = self._builder.parse(params)
        else:
            criteria = self._builder.criteria_type.from_mapping(params, strict=strict)
        return await self.search(criteria)


class CreateProductService:
    def __init__(self, repository: IProductRepository) -> None:
        self._repository = repository

    async def create(
        self,
        *,
        name: str,
        price: float,
        category: str,
        stock: int,
        tags: Iterable[str] = (),
    ) -> ProductDTO:
        product = Product(
            name=name,
            price=price,
            category=category,
            stock=stock,
            tags=tuple(tags),
        )
        await self._repository.save(product)
        return ProductDTO.from_domain(product)
