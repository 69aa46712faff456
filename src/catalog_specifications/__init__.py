from .ast import SpecificationFactory
from .base import (
    AlwaysTrueSpecification,
    AndSpecification,
    BaseSpecification,
    ISpecification,
    NotSpecification,
    OrSpecification,
)
from .criteria import (
    CriteriaSpecificationBuilder,
    SearchCriteria,
    build_specification,
)
from .exceptions import (
    CriteriaError,
    CriteriaValidationError,
    OperatorNotFoundError,
    QueryTranslationError,
    SpecificationError,
    UnknownCriteriaError,
    ValidationError,
)
from .executor import InMemoryQueryExecutor, count, find_all
from .operators import SpecificationOperator
from .products import (
    PRODUCT_LEAVES,
    AllProductsSpecification,
    CategorySpecification,
    HasTagSpecification,
    InStockSpecification,
    MinStockSpecification,
    NameContainsSpecification,
    PriceGreaterThanSpecification,
    PriceLessThanSpecification,
    Product,
)
from .query_builder import MongoQueryBuilder
from .repository import InMemoryProductRepository, IProductRepository
from .search import (
    CreateProductService,
    ProductDTO,
    SearchProductsResult,
    SearchProductsService,
)

__all__ = [
    # Core types
    "ISpecification",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "AlwaysTrueSpecification",
    "SpecificationOperator",
    "SpecificationFactory",
    # Product catalog
    "Product",
    "PRODUCT_LEAVES",
    "CategorySpecification",
    "PriceLessThanSpecification",
    "PriceGreaterThanSpecification",
    "NameContainsSpecification",
    "HasTagSpecification",
    "InStockSpecification",
    "MinStockSpecification",
    "AllProductsSpecification",
    # Criteria
    "SearchCriteria",
    "CriteriaSpecificationBuilder",
    "build_specification",
    # Execution
    "find_all",
    "count",
    "InMemoryQueryExecutor",
    "MongoQueryBuilder",
    # Storage and services
    "IProductRepository",
    "InMemoryProductRepository",
    "ProductDTO",
    "SearchProductsResult",
    "SearchProductsService",
    "CreateProductService",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "OperatorNotFoundError",
    "QueryTranslationError",
    "CriteriaError",
    "UnknownCriteriaError",
    "CriteriaValidationError",
]
