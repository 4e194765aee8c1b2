# router.py
"""Main orchestrating router for hybrid structured + semantic retrieval."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, List, Optional

from ..core.exceptions import RetrievalError
from ..core.interfaces import ProductCatalog, VectorSearchService
from ..core.settings import settings
from .classifier import QueryClassifier
from .entity_config import QueryConfigLoader
from .extractor import EntityExtractor
from .formatter import ContextFormatter
from .fusion import fuse_results
from .semantic_handler import SemanticHandler
from .structured_handler import StructuredLookupHandler
from .types import QueryAnalysis, RetrievalResult, RoutedResults

logger = logging.getLogger(__name__)


class HybridQueryRouter:
    """Decides per query between exact lookup and semantic search, then fuses both"""

    def __init__(
        self,
        catalog: ProductCatalog,
        vector_service: VectorSearchService,
        query_config: Optional[QueryConfigLoader] = None,
        semantic_limit: Optional[int] = None,
        formatter: Optional[ContextFormatter] = None,
    ):
        # Initialize components
        self.entity_extractor = EntityExtractor(query_config)
        self.query_classifier = QueryClassifier(self.entity_extractor)

        # Initialize handlers
        self.structured_handler = StructuredLookupHandler(catalog)
        self.semantic_handler = SemanticHandler(
            vector_service, catalog, default_limit=semantic_limit
        )
        self.formatter = formatter or ContextFormatter()

    def analyze_query(self, query: str) -> QueryAnalysis:
        """Extract entities and classify intent; never fails"""
        entities = self.entity_extractor.extract_entities(query)
        return self.query_classifier.classify_query(query, entities)

    def route_query(self, query: str) -> RoutedResults:
        """Route a query to the selected strategies and fuse their results.

        Raises RetrievalError when either strategy fails; an empty
        ``combined`` list means nothing matched.
        """
        analysis = self.analyze_query(query)

        logger.info(
            f"Query classified as '{analysis.query_type}' ({analysis.confidence.value}), "
            f"parts={list(analysis.part_numbers)}, models={list(analysis.model_numbers)}, "
            f"brands={list(analysis.brands)}"
        )

        run_structured = (
            analysis.use_structured_lookup and analysis.entities.has_identifiers
        )
        run_semantic = analysis.use_semantic_search

        structured_task = partial(
            self.structured_handler.lookup,
            analysis.part_numbers,
            analysis.model_numbers,
            analysis.brands,
        )
        semantic_task = partial(self.semantic_handler.lookup, query, analysis.entities)

        structured: List[RetrievalResult] = []
        semantic: List[RetrievalResult] = []

        if run_structured and run_semantic:
            with ThreadPoolExecutor(
                max_workers=settings.ROUTER_MAX_WORKERS,
                thread_name_prefix="query-router",
            ) as executor:
                structured_future = executor.submit(structured_task)
                semantic_future = executor.submit(semantic_task)
                structured = self._join(structured_future, "structured")
                semantic = self._join(semantic_future, "semantic")
        elif run_structured:
            structured = self._run(structured_task, "structured")
        elif run_semantic:
            semantic = self._run(semantic_task, "semantic")

        combined = fuse_results(structured, semantic, analysis.model_numbers)

        logger.info(
            f"Routing complete: {len(structured)} exact, {len(semantic)} semantic, "
            f"{len(combined)} combined"
        )

        return RoutedResults(
            analysis=analysis,
            structured_matches=structured,
            semantic_matches=semantic,
            combined=combined,
        )

    def format_context(self, routed: RoutedResults, query: str) -> Optional[str]:
        return self.formatter.format_context(routed, query)

    def _join(self, future: Future, strategy: str) -> List[RetrievalResult]:
        return self._run(future.result, strategy)

    @staticmethod
    def _run(task: Callable[[], List[RetrievalResult]], strategy: str) -> List[RetrievalResult]:
        try:
            return task()
        except RetrievalError:
            logger.error(f"{strategy.capitalize()} retrieval failed")
            raise
        except Exception as e:
            logger.error(f"{strategy.capitalize()} retrieval failed: {str(e)}")
            raise RetrievalError(f"{strategy} retrieval failed: {str(e)}") from e
