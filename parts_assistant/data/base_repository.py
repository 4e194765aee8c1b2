# base_repository.py
"""Abstract base repository interface for catalog operations."""

from abc import abstractmethod
from typing import List, Optional

from ..core import ProductCatalog, ProductRecord


class BaseProductRepository(ProductCatalog):
    """Abstract base class for product repositories.

    Extends the read-only catalog lookups the router needs with the
    write and maintenance operations used when loading data.
    """

    @abstractmethod
    def add(self, product: ProductRecord) -> None:
        """Add or replace a single product"""
        pass

    @abstractmethod
    def add_many(self, products: List[ProductRecord]) -> None:
        """Add or replace multiple products"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Count products in the catalog"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all products - USE WITH CAUTION"""
        pass

    @abstractmethod
    def get_all(self, limit: Optional[int] = None) -> List[ProductRecord]:
        """Get all products - USE WITH CAUTION for large catalogs"""
        pass
