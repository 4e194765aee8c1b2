# Services package
"""Retrieval services for the parts assistant."""

from .context_service import ProductContextService
from .data_loader import DataLoader
from .vector_service import ProductVectorService

__all__ = ["DataLoader", "ProductContextService", "ProductVectorService"]
