# utils.py
"""Utility functions shared by the retrieval strategies and fusion."""

from typing import Iterable, List, Sequence

from ..core.models import ProductRecord
from .types import RetrievalResult


class ResultUtils:
    """Utility class for filtering and deduplicating retrieval results"""

    @staticmethod
    def matches_brand(record: ProductRecord, brands: Sequence[str]) -> bool:
        """True when the record brand contains any extracted brand"""
        record_brand = (record.brand or "").lower()
        return any(brand.lower() in record_brand for brand in brands)

    @staticmethod
    def filter_by_brand(
        results: Iterable[RetrievalResult], brands: Sequence[str]
    ) -> List[RetrievalResult]:
        if not brands:
            return list(results)
        return [r for r in results if ResultUtils.matches_brand(r.record, brands)]

    @staticmethod
    def dedupe_by_record(results: Iterable[RetrievalResult]) -> List[RetrievalResult]:
        """Keep the first occurrence of each record id"""
        seen = set()
        unique = []
        for result in results:
            if result.record_id in seen:
                continue
            seen.add(result.record_id)
            unique.append(result)
        return unique
