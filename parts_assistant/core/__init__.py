# Core package
"""Core models, interfaces and settings for the parts assistant."""

from .exceptions import (
    CatalogServiceError,
    ConfigurationError,
    PartsAssistantError,
    QueryProcessingError,
    RetrievalError,
    VectorServiceError,
)
from .interfaces import ProductCatalog, VectorSearchService
from .models import ProductRecord, make_product_id
from .settings import settings

__all__ = [
    "ProductCatalog",
    "VectorSearchService",
    "ProductRecord",
    "make_product_id",
    "settings",
    # Errors
    "PartsAssistantError",
    "ConfigurationError",
    "QueryProcessingError",
    "RetrievalError",
    "CatalogServiceError",
    "VectorServiceError",
]
