# Data package
"""Data layer for the parts catalog."""

from .base_repository import BaseProductRepository
from .database import DatabaseInitializer, init_database
from .models import (
    CompatibleModelEntry,
    DatabaseManager,
    ProductModel,
    ReplacementPartEntry,
    db_manager,
)
from .repository import InMemoryProductRepository
from .sqlalchemy_repository import SQLAlchemyProductRepository

__all__ = [
    "BaseProductRepository",
    "InMemoryProductRepository",
    "SQLAlchemyProductRepository",
    "ProductModel",
    "CompatibleModelEntry",
    "ReplacementPartEntry",
    "DatabaseManager",
    "db_manager",
    "DatabaseInitializer",
    "init_database",
]
