"""
Entropy Engine v1.0

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Zero-cost analysis of short messages:

- Pattern detection: a categorised regex catalog for manipulative, coercive
  and high-entropy language, reduced to one damped score.
- People extraction: names, relationship roles, pronouns and sentiment for
  contact management.

Every call is independent and stateless. No I/O, no models.
"""

__version__ = '1.0.0'


# =============================================================================
# ENTRY POINTS
# =============================================================================

from .api import (
    EntropyEngine,
    get_engine,
    detect_patterns,
    extract_keywords,
    extract_people_entities,
    summarise_findings,
    to_json,
    from_json,
)


# =============================================================================
# COMPONENTS
# =============================================================================

from .patterns import (
    Severity,
    PatternRule,
    PatternMatch,
    PATTERN_CLUSTERS,
    build_catalog,
    get_catalog,
    match_patterns,
)

from .scoring import (
    TextAnalysisResult,
    calculate_text_score,
    is_detected,
    analyse_text,
)

from .entities import (
    RelationshipCategory,
    RelationshipTag,
    ExtractedPerson,
    EntityExtractionResult,
    extract_entities,
    filter_by_category,
)

from .keywords import find_keywords


# =============================================================================
# AMBIENT
# =============================================================================

from .config import EngineConfig
from .errors import (
    EntropyEngineError,
    RuleCompileError,
    SerializationError,
    ConfigError,
)
from .logging_utils import setup_logging, Timer


__all__ = [
    "__version__",
    # Entry points
    "EntropyEngine",
    "get_engine",
    "detect_patterns",
    "extract_keywords",
    "extract_people_entities",
    "summarise_findings",
    "to_json",
    "from_json",
    # Patterns
    "Severity",
    "PatternRule",
    "PatternMatch",
    "PATTERN_CLUSTERS",
    "build_catalog",
    "get_catalog",
    "match_patterns",
    # Scoring
    "TextAnalysisResult",
    "calculate_text_score",
    "is_detected",
    "analyse_text",
    # Entities
    "RelationshipCategory",
    "RelationshipTag",
    "ExtractedPerson",
    "EntityExtractionResult",
    "extract_entities",
    "filter_by_category",
    # Keywords
    "find_keywords",
    # Ambient
    "EngineConfig",
    "EntropyEngineError",
    "RuleCompileError",
    "SerializationError",
    "ConfigError",
    "setup_logging",
    "Timer",
]
