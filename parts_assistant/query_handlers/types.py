# types.py
"""Data types and models for the query routing system."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ..core.models import ProductRecord


class EntityKind(Enum):
    PART_NUMBER = "part_number"
    MODEL_NUMBER = "model_number"


class Confidence(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchOrigin(Enum):
    STRUCTURED = "structured"
    SEMANTIC = "semantic"


class MatchReason(Enum):
    DIRECT = "direct"
    REPLACEMENT = "replacement"
    MODEL_COMPATIBILITY = "model_compatibility"
    SIMILARITY = "similarity"


@dataclass(frozen=True)
class ExtractedEntities:
    """Structured identifiers extracted from a query"""

    part_numbers: Tuple[str, ...] = ()
    model_numbers: Tuple[str, ...] = ()
    brands: Tuple[str, ...] = ()

    def kinds(self) -> FrozenSet[EntityKind]:
        present = set()
        if self.part_numbers:
            present.add(EntityKind.PART_NUMBER)
        if self.model_numbers:
            present.add(EntityKind.MODEL_NUMBER)
        return frozenset(present)

    @property
    def has_identifiers(self) -> bool:
        return bool(self.part_numbers or self.model_numbers)


@dataclass(frozen=True)
class IntentPattern:
    """One row of the ordered intent table"""

    query_type: str
    requires: FrozenSet[EntityKind] = frozenset()
    keywords: Tuple[str, ...] = ()
    use_structured_lookup: bool = False
    use_semantic_search: bool = True
    confidence: Confidence = Confidence.LOW

    @property
    def is_fallback(self) -> bool:
        return not self.requires and not self.keywords

    def matches(self, query_lower: str, entities: ExtractedEntities) -> bool:
        """Entity requirements first, then any keyword as a substring"""
        if not self.requires <= entities.kinds():
            return False
        if not self.keywords:
            return True
        return any(keyword in query_lower for keyword in self.keywords)


@dataclass(frozen=True)
class QueryAnalysis:
    """Classification result: entities plus the selected pattern's policy"""

    query: str
    entities: ExtractedEntities
    query_type: str
    requires: FrozenSet[EntityKind]
    use_structured_lookup: bool
    use_semantic_search: bool
    confidence: Confidence

    @classmethod
    def from_pattern(
        cls, query: str, entities: ExtractedEntities, pattern: IntentPattern
    ) -> "QueryAnalysis":
        return cls(
            query=query,
            entities=entities,
            query_type=pattern.query_type,
            requires=pattern.requires,
            use_structured_lookup=pattern.use_structured_lookup,
            use_semantic_search=pattern.use_semantic_search,
            confidence=pattern.confidence,
        )

    @property
    def part_numbers(self) -> Tuple[str, ...]:
        return self.entities.part_numbers

    @property
    def model_numbers(self) -> Tuple[str, ...]:
        return self.entities.model_numbers

    @property
    def brands(self) -> Tuple[str, ...]:
        return self.entities.brands


@dataclass(frozen=True)
class RetrievalResult:
    """A candidate product plus provenance used for ranking and annotation"""

    record: ProductRecord
    origin: MatchOrigin
    relevance_score: Optional[float] = None
    match_reason: MatchReason = MatchReason.SIMILARITY
    matched_identifier: Optional[str] = None

    @property
    def record_id(self) -> str:
        return self.record.id


@dataclass
class RoutedResults:
    """Response from the query router"""

    analysis: QueryAnalysis
    structured_matches: List[RetrievalResult] = field(default_factory=list)
    semantic_matches: List[RetrievalResult] = field(default_factory=list)
    combined: List[RetrievalResult] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.combined
