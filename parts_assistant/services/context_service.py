# context_service.py
"""Product context lookup for the chat layer."""

import logging
from typing import Optional

from ..core.exceptions import RetrievalError
from ..query_handlers.router import HybridQueryRouter

logger = logging.getLogger(__name__)


class ProductContextService:
    """Turns a customer question into the product context block for a prompt"""

    def __init__(self, router: HybridQueryRouter):
        self.router = router

    def get_relevant_context(self, query: str) -> Optional[str]:
        """Route and format a query.

        Returns None when nothing matched or retrieval failed; a failed lookup
        should not stop the conversation, so it is logged and dropped here.
        """
        try:
            routed = self.router.route_query(query)
        except RetrievalError as e:
            logger.error(f"Error getting product context: {str(e)}")
            return None

        context = self.router.format_context(routed, query)
        if context is None:
            logger.info("No product context found for query")
        return context
