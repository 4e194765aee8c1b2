# extractor.py
"""Entity extraction functionality for query routing."""

import re
from typing import List, Optional, Tuple

from .entity_config import QueryConfigLoader, get_query_config
from .types import ExtractedEntities

DEFAULT_PART_PREFIX = "PS"

# PS11752778, AP6006058, WP3392519
PREFIXED_PART_PATTERN = re.compile(r"\b([A-Za-z]{2,3})(\d{5,10})\b", re.ASCII)

# "PS 11752778", "part 11752778", "part number 11752778", or a bare 11752778
BARE_PART_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])(?:(?P<prefix>PS)\s+|part\s*(?:number|no\.?|#)?\s*)?"
    r"(?P<digits>\d{5,10})(?![A-Za-z0-9])",
    re.IGNORECASE | re.ASCII,
)

# WDT780SAEM1, KRFF305ESS01, FFHS-2622MS
ALPHA_MODEL_PATTERN = re.compile(
    r"(?<![A-Za-z0-9-])([A-Za-z]{2,4}[\d-]*\d[A-Za-z0-9-]*)", re.ASCII
)

# All-numeric models such as 10640262010
NUMERIC_MODEL_PATTERN = re.compile(
    r"(?<![A-Za-z0-9])(\d{8,12})(?![A-Za-z0-9])", re.ASCII
)


class EntityExtractor:
    """Extracts part numbers, model numbers and brands from queries"""

    def __init__(self, query_config: Optional[QueryConfigLoader] = None):
        self.query_config = query_config or get_query_config()

    def extract_entities(self, query: str) -> ExtractedEntities:
        """Extract entities from a query; absence of a match yields empty tuples"""
        query = query or ""
        part_numbers = self.extract_part_numbers(query)
        return ExtractedEntities(
            part_numbers=part_numbers,
            model_numbers=self.extract_model_numbers(query, part_numbers),
            brands=self.extract_brands(query),
        )

    def extract_part_numbers(self, query: str) -> Tuple[str, ...]:
        """Extract normalized part numbers in order of first appearance"""
        # (position, normalized, digits, has_prefix)
        candidates: List[Tuple[int, str, str, bool]] = []

        for match in PREFIXED_PART_PATTERN.finditer(query):
            prefix, digits = match.group(1).upper(), match.group(2)
            candidates.append((match.start(), f"{prefix}{digits}", digits, True))

        for match in BARE_PART_PATTERN.finditer(query):
            digits = match.group("digits")
            has_prefix = match.group("prefix") is not None
            candidates.append(
                (match.start(), f"{DEFAULT_PART_PREFIX}{digits}", digits, has_prefix)
            )

        # A prefix-bearing match owns its digit run
        prefixed_digits = {digits for _, _, digits, has_prefix in candidates if has_prefix}

        part_numbers: List[str] = []
        for _, normalized, digits, has_prefix in sorted(candidates, key=lambda c: c[0]):
            if not has_prefix and digits in prefixed_digits:
                continue
            if normalized not in part_numbers:
                part_numbers.append(normalized)

        return tuple(part_numbers)

    def extract_model_numbers(
        self, query: str, part_numbers: Optional[Tuple[str, ...]] = None
    ) -> Tuple[str, ...]:
        """Extract model numbers, excluding anything that overlaps a part number"""
        if part_numbers is None:
            part_numbers = self.extract_part_numbers(query)

        candidates: List[Tuple[int, str]] = []
        for match in ALPHA_MODEL_PATTERN.finditer(query):
            candidates.append((match.start(), match.group(1).rstrip("-").upper()))
        for match in NUMERIC_MODEL_PATTERN.finditer(query):
            candidates.append((match.start(), match.group(1)))

        model_numbers: List[str] = []
        for _, candidate in sorted(candidates, key=lambda c: c[0]):
            if self._overlaps_part_number(candidate, part_numbers):
                continue
            if candidate not in model_numbers:
                model_numbers.append(candidate)

        return tuple(model_numbers)

    def extract_brands(self, query: str) -> Tuple[str, ...]:
        """Extract brand names from a query"""
        return self.query_config.find_matching_brands(query)

    @staticmethod
    def _overlaps_part_number(candidate: str, part_numbers: Tuple[str, ...]) -> bool:
        return any(
            candidate in part_number or part_number in candidate
            for part_number in part_numbers
        )
