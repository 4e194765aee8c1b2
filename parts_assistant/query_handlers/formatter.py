# formatter.py
"""Renders routed results into the product context block for generation."""

from typing import List, Optional

from ..core.settings import settings
from .types import MatchOrigin, MatchReason, RetrievalResult, RoutedResults

EXACT_TAG = "[EXACT MATCH]"
SEMANTIC_TAG = "[SEMANTIC MATCH]"


class ContextFormatter:
    """Formats fused retrieval results into a bounded, provenance-annotated text block"""

    def __init__(
        self,
        max_products: Optional[int] = None,
        max_long_text_length: Optional[int] = None,
    ):
        self.max_products = max_products or settings.MAX_CONTEXT_PRODUCTS
        self.max_long_text_length = max_long_text_length or settings.MAX_LONG_TEXT_LENGTH

    def format_context(self, routed: RoutedResults, query: str) -> Optional[str]:
        """Return the context block, or None when there is no product context"""
        if routed.is_empty:
            return None

        analysis = routed.analysis
        parts = ["", "", "RELEVANT PRODUCT INFORMATION FROM PARTSELECT DATABASE:"]
        parts.append(f'Customer question: "{query}"')

        if analysis.use_structured_lookup and routed.structured_matches:
            parts.append(
                f"{EXACT_TAG} The following products match your query exactly:"
            )
        else:
            parts.append(
                f"{SEMANTIC_TAG} The following products are relevant to your query:"
            )
        parts.append(
            "Use this information to provide accurate, specific answers. "
            "Prioritize exact matches over semantic matches."
        )
        parts.append("")

        shown = routed.combined[: self.max_products]
        for index, result in enumerate(shown, start=1):
            parts.extend(self._format_result(index, result, analysis.query_type))
            parts.append("")

        omitted = len(routed.combined) - len(shown)
        if omitted > 0:
            parts.append(f"({omitted} additional lower-ranked products omitted)")
            parts.append("")

        parts.append(
            "IMPORTANT: When answering, prioritize the specific information above over "
            "general knowledge. If exact matches are found, use those. Otherwise, use "
            "semantic matches. Always cite part numbers and details from the provided "
            "context when available. When a match reason is given, ground the answer in "
            "that relationship."
        )
        return "\n".join(parts) + "\n"

    def _format_result(
        self, index: int, result: RetrievalResult, query_type: str
    ) -> List[str]:
        record = result.record
        tag = EXACT_TAG if result.origin == MatchOrigin.STRUCTURED else SEMANTIC_TAG

        lines = [f"--- {tag} Product {index} ---"]
        reason = self.describe_match(result)
        if reason:
            lines.append(f"Match Reason: {reason}")
        if result.relevance_score is not None:
            lines.append(f"Relevance: {result.relevance_score * 100:.1f}%")

        lines.append(f"Part Number: {record.part_number}")
        lines.append(f"Name: {record.name}")
        if record.description:
            lines.append(f"Description: {record.description}")
        lines.append(f"Category: {record.category}")
        lines.append(f"Brand: {record.brand}")
        if record.manufacturer_part_number:
            lines.append(f"Manufacturer Part Number: {record.manufacturer_part_number}")
        if record.replacement_parts:
            lines.append(f"Replaces Part Numbers: {', '.join(record.replacement_parts)}")
        if record.compatible_models:
            lines.append(f"Compatible Models: {', '.join(record.compatible_models)}")
        lines.append(f"Price: {record.price}")
        lines.append(f"In Stock: {'Yes' if record.in_stock else 'No'}")
        lines.append(f"Product URL: {record.url}")

        if query_type == "installation" and record.installation:
            lines.append("")
            lines.append("Installation Instructions:")
            lines.append(self._truncate(record.installation))

        if query_type == "troubleshooting" and record.troubleshooting:
            lines.append("")
            lines.append("Troubleshooting:")
            lines.append(self._truncate(record.troubleshooting))

        return lines

    @staticmethod
    def describe_match(result: RetrievalResult) -> Optional[str]:
        """Explain relationship-based matches; plain similarity needs no note"""
        identifier = result.matched_identifier
        if result.match_reason == MatchReason.REPLACEMENT:
            return (
                f"Replaces part number {identifier} "
                f"(cross-reference: {result.record.part_number} supersedes {identifier})"
            )
        if result.match_reason == MatchReason.MODEL_COMPATIBILITY:
            return f"Listed as compatible with model {identifier}"
        if result.match_reason == MatchReason.DIRECT:
            return f"Exact part number match for {identifier}"
        return None

    def _truncate(self, text: str) -> str:
        if len(text) <= self.max_long_text_length:
            return text
        return text[: self.max_long_text_length].rstrip() + "..."
