# fusion.py
"""Merging and ranking of structured and semantic candidates."""

from typing import List, Sequence, Tuple

from .types import RetrievalResult
from .utils import ResultUtils

MISSING_SCORE = float("-inf")


def fuse_results(
    structured: Sequence[RetrievalResult],
    semantic: Sequence[RetrievalResult],
    model_numbers: Sequence[str] = (),
) -> List[RetrievalResult]:
    """Merge both result sets into one deterministic order.

    1. structured before semantic, first occurrence of a record id wins
    2. stable sort: structured hits first; among semantic-only hits, records
       compatible with an extracted model first; then descending score with
       a missing score ranked lowest
    """
    merged = ResultUtils.dedupe_by_record([*structured, *semantic])
    structured_ids = {result.record_id for result in structured}

    def sort_key(result: RetrievalResult) -> Tuple[int, int, float]:
        if result.record_id in structured_ids:
            return (0, 0, -_score(result))
        compatible = any(
            result.record.is_compatible_with(model) for model in model_numbers
        )
        return (1, 0 if compatible else 1, -_score(result))

    return sorted(merged, key=sort_key)


def _score(result: RetrievalResult) -> float:
    if result.relevance_score is None:
        return MISSING_SCORE
    return result.relevance_score
