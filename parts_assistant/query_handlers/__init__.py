# Query package
"""Query analysis and hybrid retrieval for the parts assistant."""

from .classifier import QueryClassifier
from .entity_config import QueryConfigLoader, get_query_config, initialize_query_config
from .extractor import EntityExtractor
from .formatter import ContextFormatter
from .fusion import fuse_results
from .router import HybridQueryRouter
from .semantic_handler import SemanticHandler
from .structured_handler import StructuredLookupHandler
from .types import (
    Confidence,
    EntityKind,
    ExtractedEntities,
    IntentPattern,
    MatchOrigin,
    MatchReason,
    QueryAnalysis,
    RetrievalResult,
    RoutedResults,
)

__all__ = [
    # Handlers
    "StructuredLookupHandler",
    "SemanticHandler",
    # Core components
    "QueryClassifier",
    "EntityExtractor",
    "ContextFormatter",
    "HybridQueryRouter",
    "QueryConfigLoader",
    "fuse_results",
    "get_query_config",
    "initialize_query_config",
    # Types
    "Confidence",
    "EntityKind",
    "ExtractedEntities",
    "IntentPattern",
    "MatchOrigin",
    "MatchReason",
    "QueryAnalysis",
    "RetrievalResult",
    "RoutedResults",
]
