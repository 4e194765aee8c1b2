# entity_config.py
import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.exceptions import ConfigurationError
from ..core.settings import settings
from .types import Confidence, EntityKind, IntentPattern

logger = logging.getLogger(__name__)

DEFAULT_BRANDS = (
    "whirlpool", "frigidaire", "ge", "general electric", "samsung", "lg",
    "kitchenaid", "maytag", "bosch", "admiral", "tappan", "amana", "smeg",
    "midea", "kenmore", "electrolux", "hotpoint", "haier", "gibson",
    "crosley", "roper", "estate", "inglis", "kelvinator", "norge",
    "caloric", "dacor", "gaggenau", "thermador", "uni", "sharp", "rca",
    "blomberg", "beko",
)

# Ordered by specificity: identifier-bound rows, keyword rows, fallback last
DEFAULT_PATTERNS = (
    IntentPattern(
        query_type="compatibility",
        requires=frozenset({EntityKind.PART_NUMBER}),
        keywords=("compatible", "fit", "work with"),
        use_structured_lookup=True,
        use_semantic_search=True,
        confidence=Confidence.HIGH,
    ),
    IntentPattern(
        query_type="installation",
        requires=frozenset({EntityKind.PART_NUMBER}),
        keywords=("install", "how to", "steps"),
        use_structured_lookup=True,
        use_semantic_search=True,
        confidence=Confidence.HIGH,
    ),
    IntentPattern(
        query_type="part_lookup",
        requires=frozenset({EntityKind.PART_NUMBER}),
        use_structured_lookup=True,
        use_semantic_search=True,
        confidence=Confidence.HIGH,
    ),
    IntentPattern(
        query_type="troubleshooting",
        keywords=(
            "not working", "broken", "fix", "troubleshoot",
            "problem", "leaking", "noise", "issue",
        ),
        use_structured_lookup=False,
        use_semantic_search=True,
        confidence=Confidence.MEDIUM,
    ),
    IntentPattern(
        query_type="installation",
        keywords=("install", "how to", "replace"),
        use_structured_lookup=False,
        use_semantic_search=True,
        confidence=Confidence.MEDIUM,
    ),
    IntentPattern(
        query_type="model_query",
        requires=frozenset({EntityKind.MODEL_NUMBER}),
        use_structured_lookup=True,
        use_semantic_search=True,
        confidence=Confidence.HIGH,
    ),
    IntentPattern(
        query_type="general",
        use_structured_lookup=False,
        use_semantic_search=True,
        confidence=Confidence.LOW,
    ),
)


def _lowercase_strings(values: Any, field_name: str, owner: str) -> Tuple[str, ...]:
    # YAML reads bare on/off/yes/no as booleans and bare digits as ints
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ConfigurationError(
            f"'{field_name}' of {owner} must be a list of strings, got {values!r}"
        )
    return tuple(value.lower() for value in values)


def parse_pattern(raw: Dict[str, Any]) -> IntentPattern:
    """Build an IntentPattern from one YAML row"""
    if not isinstance(raw, dict) or not raw.get("type"):
        raise ConfigurationError(f"Intent pattern without a type: {raw}")
    raw_requires = raw.get("requires") or []
    if not isinstance(raw_requires, list):
        raise ConfigurationError(
            f"'requires' of intent pattern '{raw['type']}' must be a list, got {raw_requires!r}"
        )
    try:
        requires = frozenset(EntityKind(kind) for kind in raw_requires)
        confidence = Confidence(raw.get("confidence", "low"))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid intent pattern '{raw.get('type')}': {str(e)}"
        ) from e

    return IntentPattern(
        query_type=raw["type"],
        requires=requires,
        keywords=_lowercase_strings(
            raw.get("keywords") or [], "keywords", f"intent pattern '{raw['type']}'"
        ),
        use_structured_lookup=bool(raw.get("use_structured_lookup", False)),
        use_semantic_search=bool(raw.get("use_semantic_search", True)),
        confidence=confidence,
    )


def validate_patterns(patterns: Tuple[IntentPattern, ...]) -> None:
    """The table must end with exactly one catch-all row"""
    if not patterns:
        raise ConfigurationError("Intent pattern table is empty")
    if not patterns[-1].is_fallback:
        raise ConfigurationError(
            f"Last intent pattern '{patterns[-1].query_type}' must require nothing and have no keywords"
        )
    for pattern in patterns[:-1]:
        if pattern.is_fallback:
            raise ConfigurationError(
                f"Catch-all pattern '{pattern.query_type}' shadows every pattern after it"
            )


class QueryConfigLoader:
    """Loads the brand vocabulary and ordered intent table from YAML"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or settings.QUERY_PATTERNS_PATH
        self.brands: Tuple[str, ...] = ()
        self.patterns: Tuple[IntentPattern, ...] = ()
        self._brand_patterns: List[Tuple[str, "re.Pattern[str]"]] = []

        self._load_config()
        validate_patterns(self.patterns)
        self._compile_brand_patterns()

    def _load_config(self) -> None:
        """Load configuration from YAML file"""
        if not os.path.exists(self.config_path):
            logger.warning(
                f"Query pattern config not found at {self.config_path}, using defaults"
            )
            self._load_defaults()
            return

        try:
            with open(self.config_path, encoding="utf-8") as file:
                config = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading query pattern config: {str(e)}")
            self._load_defaults()
            return

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Query pattern config {self.config_path} must be a mapping"
            )

        self.brands = _lowercase_strings(
            config.get("brands", list(DEFAULT_BRANDS)), "brands", self.config_path
        )
        raw_patterns = config.get("intent_patterns")
        if raw_patterns and not isinstance(raw_patterns, list):
            raise ConfigurationError("'intent_patterns' must be a list of rows")
        if raw_patterns:
            self.patterns = tuple(parse_pattern(raw) for raw in raw_patterns)
        else:
            self.patterns = DEFAULT_PATTERNS

        logger.info(
            f"Loaded query config: {len(self.brands)} brands, {len(self.patterns)} intent patterns"
        )

    def _load_defaults(self) -> None:
        """Load built-in configuration if file is not available"""
        self.brands = DEFAULT_BRANDS
        self.patterns = DEFAULT_PATTERNS

    def _compile_brand_patterns(self) -> None:
        # Whole-word match so "ge" does not fire on "fridge"
        self._brand_patterns = [
            (brand, re.compile(r"\b" + re.escape(brand) + r"\b"))
            for brand in self.brands
        ]

    def find_matching_brands(self, query: str) -> Tuple[str, ...]:
        """Find brands mentioned in a query, in vocabulary order"""
        query_lower = query.lower()
        return tuple(
            brand for brand, pattern in self._brand_patterns if pattern.search(query_lower)
        )


# Global instance - loaded once, read-only afterwards
query_config: Optional[QueryConfigLoader] = None


def get_query_config() -> QueryConfigLoader:
    """Get the global query configuration instance"""
    global query_config
    if query_config is None:
        query_config = QueryConfigLoader()
    return query_config


def initialize_query_config(config_path: Optional[str] = None) -> QueryConfigLoader:
    """Initialize the global query configuration"""
    global query_config
    query_config = QueryConfigLoader(config_path)
    return query_config
