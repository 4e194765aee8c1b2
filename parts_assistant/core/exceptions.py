# exceptions.py
"""Custom exceptions for the parts assistant."""


class PartsAssistantError(Exception):
    """Base exception for parts assistant errors"""
    pass


class ConfigurationError(PartsAssistantError):
    """Raised when configuration is invalid"""
    pass


class QueryProcessingError(PartsAssistantError):
    """Raised when query processing fails"""
    pass


class RetrievalError(QueryProcessingError):
    """Raised when a retrieval collaborator fails during routing.

    This is distinct from an empty result: a query that matches nothing
    returns no products, a query whose backing service is down raises this.
    """
    pass


class CatalogServiceError(RetrievalError):
    """Raised when catalog (exact-match) operations fail"""
    pass


class VectorServiceError(RetrievalError):
    """Raised when vector service operations fail"""
    pass
