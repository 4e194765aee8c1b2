# classifier.py
"""Query classification functionality for the routing system."""

import logging
from typing import Optional, Tuple

from .extractor import EntityExtractor
from .types import ExtractedEntities, IntentPattern, QueryAnalysis

logger = logging.getLogger(__name__)


class QueryClassifier:
    """Selects exactly one intent per query by first match over an ordered table"""

    def __init__(
        self,
        entity_extractor: EntityExtractor,
        patterns: Optional[Tuple[IntentPattern, ...]] = None,
    ):
        self.entity_extractor = entity_extractor
        # Shared read-only view of the configured table
        self.patterns = (
            patterns if patterns is not None else entity_extractor.query_config.patterns
        )

    def classify_query(
        self, query: str, entities: Optional[ExtractedEntities] = None
    ) -> QueryAnalysis:
        """Classify a query; the first pattern whose predicate passes wins"""
        if entities is None:
            entities = self.entity_extractor.extract_entities(query)

        pattern = self.select_pattern(query, entities)
        logger.debug(
            f"Selected intent '{pattern.query_type}' for parts={list(entities.part_numbers)} "
            f"models={list(entities.model_numbers)} brands={list(entities.brands)}"
        )
        return QueryAnalysis.from_pattern(query, entities, pattern)

    def select_pattern(self, query: str, entities: ExtractedEntities) -> IntentPattern:
        query_lower = (query or "").lower()
        for pattern in self.patterns:
            if pattern.matches(query_lower, entities):
                return pattern

        # Unreachable with a validated table; the last row accepts everything
        return self.patterns[-1]
