# main.py
"""Main entry point for the parts assistant retrieval layer."""

import logging
from typing import Optional

from .core.interfaces import ProductCatalog, VectorSearchService
from .core.settings import settings
from .data import SQLAlchemyProductRepository, init_database
from .query_handlers import HybridQueryRouter, get_query_config
from .services import DataLoader, ProductContextService, ProductVectorService

logger = logging.getLogger(__name__)


def build_router(
    catalog: Optional[ProductCatalog] = None,
    vector_service: Optional[VectorSearchService] = None,
) -> HybridQueryRouter:
    """Wire a router to the configured catalog database and vector store"""
    if catalog is None:
        settings.ensure_directories()
        catalog = SQLAlchemyProductRepository(init_database())
    if vector_service is None:
        vector_service = ProductVectorService()
    return HybridQueryRouter(catalog, vector_service, query_config=get_query_config())


def build_context_service(
    catalog: Optional[ProductCatalog] = None,
    vector_service: Optional[VectorSearchService] = None,
) -> ProductContextService:
    return ProductContextService(build_router(catalog, vector_service))


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)

    settings.ensure_directories()
    catalog = SQLAlchemyProductRepository(init_database())
    vector_service = ProductVectorService()
    if catalog.count() == 0:
        logger.info("Catalog is empty, loading sample products")
        DataLoader.populate(catalog, vector_service)

    router = build_router(catalog, vector_service)
    service = ProductContextService(router)

    print("Parts assistant ready. Ask about a part or model number (blank line to quit).")
    while True:
        try:
            query = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not query:
            break

        analysis = router.analyze_query(query)
        print(
            f"[{analysis.query_type} / {analysis.confidence.value}] "
            f"parts={list(analysis.part_numbers)} models={list(analysis.model_numbers)} "
            f"brands={list(analysis.brands)}"
        )
        context = service.get_relevant_context(query)
        print(context or "No matching products found.")


if __name__ == "__main__":
    main()
