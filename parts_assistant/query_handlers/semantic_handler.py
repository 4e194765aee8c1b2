# semantic_handler.py
"""Handler for semantic search queries."""

import dataclasses
import logging
from typing import Dict, List, Optional

from ..core.interfaces import ProductCatalog, VectorSearchService
from ..core.settings import settings
from .structured_handler import StructuredLookupHandler
from .types import ExtractedEntities, MatchOrigin, MatchReason, RetrievalResult
from .utils import ResultUtils

logger = logging.getLogger(__name__)


class SemanticHandler:
    """Handles similarity search, layered over model-compatibility fetches"""

    def __init__(
        self,
        vector_service: VectorSearchService,
        catalog: ProductCatalog,
        default_limit: Optional[int] = None,
        oversample_factor: Optional[int] = None,
    ):
        self.vector_service = vector_service
        self.model_lookup = StructuredLookupHandler(catalog)
        self.default_limit = default_limit or settings.SEMANTIC_RESULT_LIMIT
        self.oversample_factor = oversample_factor or settings.SEMANTIC_OVERSAMPLE_FACTOR

    @staticmethod
    def build_search_text(query: str, entities: ExtractedEntities) -> str:
        """Append brand terms to bias the search toward the right manufacturer"""
        if not entities.brands:
            return query
        return f"{query} {' '.join(entities.brands)}"

    def lookup(
        self, query: str, entities: ExtractedEntities, limit: Optional[int] = None
    ) -> List[RetrievalResult]:
        """Handle semantic search; collaborator failures propagate"""
        limit = limit or self.default_limit

        # Model compatibility acts as a hard filter under the similarity ranking
        merged: Dict[str, RetrievalResult] = {}
        for model_number in entities.model_numbers:
            for result in self.model_lookup.lookup_compatible(
                model_number, MatchOrigin.SEMANTIC
            ):
                merged.setdefault(result.record_id, result)

        search_text = self.build_search_text(query, entities)
        vector = self.vector_service.embed(search_text)
        candidates = self.vector_service.similarity_search(
            vector, k=limit * self.oversample_factor
        )

        similarity_hits = 0
        for record, score in candidates:
            if entities.brands and not ResultUtils.matches_brand(record, entities.brands):
                continue
            existing = merged.get(record.id)
            if existing is not None:
                if existing.relevance_score is None:
                    merged[record.id] = dataclasses.replace(existing, relevance_score=score)
                continue
            if similarity_hits >= limit:
                continue
            merged[record.id] = RetrievalResult(
                record=record,
                origin=MatchOrigin.SEMANTIC,
                relevance_score=score,
                match_reason=MatchReason.SIMILARITY,
            )
            similarity_hits += 1

        results = ResultUtils.filter_by_brand(merged.values(), entities.brands)

        logger.info(
            f"Semantic search for '{search_text}' returned {len(results)} products "
            f"({len(candidates)} candidates, {similarity_hits} similarity hits)"
        )
        return results
