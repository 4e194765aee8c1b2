# structured_handler.py
"""Handler for exact lookups keyed by extracted identifiers."""

import logging
from typing import List, Sequence

from ..core.interfaces import ProductCatalog
from .types import MatchOrigin, MatchReason, RetrievalResult
from .utils import ResultUtils

logger = logging.getLogger(__name__)


class StructuredLookupHandler:
    """Fetches products by part number, replacement cross-reference and model"""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    def lookup(
        self,
        part_numbers: Sequence[str],
        model_numbers: Sequence[str],
        brands: Sequence[str] = (),
    ) -> List[RetrievalResult]:
        """Run every keyed fetch; an empty list is a valid outcome.

        Catalog failures propagate to the caller untouched.
        """
        results: List[RetrievalResult] = []

        for part_number in part_numbers:
            results.extend(self._lookup_part_number(part_number))

        for model_number in model_numbers:
            results.extend(self.lookup_compatible(model_number, MatchOrigin.STRUCTURED))

        results = ResultUtils.filter_by_brand(results, brands)
        results = ResultUtils.dedupe_by_record(results)

        logger.info(
            f"Structured lookup for parts={list(part_numbers)} models={list(model_numbers)} "
            f"returned {len(results)} products"
        )
        return results

    def _lookup_part_number(self, part_number: str) -> List[RetrievalResult]:
        results = []

        record = self.catalog.get_by_part_number(part_number)
        if record is not None:
            results.append(
                RetrievalResult(
                    record=record,
                    origin=MatchOrigin.STRUCTURED,
                    match_reason=MatchReason.DIRECT,
                    matched_identifier=part_number,
                )
            )

        for replacement in self.catalog.find_by_replacement_part(part_number):
            results.append(
                RetrievalResult(
                    record=replacement,
                    origin=MatchOrigin.STRUCTURED,
                    match_reason=MatchReason.REPLACEMENT,
                    matched_identifier=part_number,
                )
            )

        return results

    def lookup_compatible(
        self, model_number: str, origin: MatchOrigin
    ) -> List[RetrievalResult]:
        """Products listing the model as compatible, tagged with the given origin"""
        return [
            RetrievalResult(
                record=record,
                origin=origin,
                match_reason=MatchReason.MODEL_COMPATIBILITY,
                matched_identifier=model_number,
            )
            for record in self.catalog.find_by_compatible_model(model_number)
        ]
