"""
Entropy Engine - Public Entry Points

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Three stateless operations, each taking one string and returning JSON with
lower camel case keys:

- detect_patterns(text)          -> {detected, confidence, patterns, score}
- extract_keywords(text)         -> [keyword, ...]
- extract_people_entities(text)  -> {entities, relationshipCount, processingTimeUs}

If a result cannot be encoded the operation returns a fixed empty result of
the same shape instead of raising. Callers should read an empty result as
"nothing found, or nothing encodable".
"""

import json
import logging
from typing import Any, Dict, List, Optional

from .config import EngineConfig
from .entities import EntityExtractionResult, extract_entities
from .errors import SerializationError
from .keywords import find_keywords
from .logging_utils import Timer
from .scoring import TextAnalysisResult, analyse_text

logger = logging.getLogger(__name__)


EMPTY_DETECTION = '{"detected":false,"confidence":0.0,"patterns":[],"score":0.0}'
EMPTY_KEYWORDS = "[]"
EMPTY_ENTITIES = '{"entities":[],"relationshipCount":0,"processingTimeUs":0}'


# =============================================================================
# SERIALISATION
# =============================================================================

def to_json(payload: Any, operation: str = "result") -> str:
    """
    Encode a result payload compactly.

    Raises:
        SerializationError: on unencodable values, including NaN/inf and
            lone surrogates that cannot be written as UTF-8
    """
    try:
        encoded = json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
        encoded.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(operation, str(e)) from e
    return encoded


def from_json(json_str: str) -> Optional[Any]:
    """Decode an entry point's output. None for empty or invalid input."""
    if not json_str:
        return None
    try:
        return json.loads(json_str)
    except json.JSONDecodeError:
        return None


# =============================================================================
# ENGINE
# =============================================================================

class EntropyEngine:
    """
    Stateless analyser bound to one configuration.

    The structured methods (analyse, extract_people, keywords) return Python
    objects; the camelCase methods return JSON strings.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = (config or EngineConfig()).validate()

    # -------------------------------------------------------------------------
    # Structured results
    # -------------------------------------------------------------------------

    def analyse(self, text: str) -> TextAnalysisResult:
        return analyse_text(text or "", self.config)

    def extract_people(self, text: str) -> EntityExtractionResult:
        return extract_entities(text or "", self.config)

    def keywords(self, text: str) -> List[str]:
        return find_keywords(text or "")

    # -------------------------------------------------------------------------
    # Serialised results
    # -------------------------------------------------------------------------

    def detect_patterns(self, text: str) -> str:
        with Timer(logger, "detect_patterns"):
            result = self.analyse(text)
            logger.debug(
                f"Pattern scan: {len(result.matches)} matches, score {result.score:.3f}",
                extra={"match_count": len(result.matches)},
            )
            return self._encode(result.to_dict(), "detect_patterns", EMPTY_DETECTION)

    def extract_keywords(self, text: str) -> str:
        with Timer(logger, "extract_keywords"):
            return self._encode(self.keywords(text), "extract_keywords", EMPTY_KEYWORDS)

    def extract_people_entities(self, text: str) -> str:
        with Timer(logger, "extract_people_entities"):
            result = self.extract_people(text)
            logger.debug(
                f"People scan: {len(result.entities)} entities",
                extra={"entity_count": len(result.entities)},
            )
            return self._encode(result.to_dict(), "extract_people_entities", EMPTY_ENTITIES)

    @staticmethod
    def _encode(payload: Any, operation: str, fallback: str) -> str:
        try:
            return to_json(payload, operation)
        except SerializationError as e:
            logger.error(str(e), extra={"operation": operation})
            return fallback


# =============================================================================
# SUMMARY
# =============================================================================

def summarise_findings(
    analysis: Optional[TextAnalysisResult] = None,
    people: Optional[EntityExtractionResult] = None,
) -> str:
    """
    Human-readable bullet summary of one message's findings.

    Returns:
        Formatted string for logs or prompts
    """
    parts = []

    if analysis is not None and analysis.matches:
        categories = analysis.categories
        shown = ", ".join(categories[:5])
        if len(categories) > 5:
            shown += f" (+{len(categories) - 5} more)"
        parts.append(f"Patterns: {shown}")
        status = "detected" if analysis.detected else "below threshold"
        parts.append(f"Score: {analysis.score:.2f} ({status})")

    if people is not None and people.entities:
        names = []
        for person in people.entities[:5]:
            if person.relationship_hint is not None:
                names.append(f"{person.name} ({person.relationship_hint.value})")
            else:
                names.append(person.name)
        parts.append(f"People mentioned: {', '.join(names)}")

    if not parts:
        return "No significant signals detected."

    return "\n".join(f"- {p}" for p in parts)


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

# Global engine instance
_engine: Optional[EntropyEngine] = None


def get_engine() -> EntropyEngine:
    """Get the global engine with default configuration."""
    global _engine
    if _engine is None:
        _engine = EntropyEngine()
    return _engine


def detect_patterns(text: str) -> str:
    """Scan text for high-entropy patterns. Returns JSON."""
    return get_engine().detect_patterns(text)


def extract_keywords(text: str) -> str:
    """Distinct insult/manipulation keywords, sorted. Returns a JSON array."""
    return get_engine().extract_keywords(text)


def extract_people_entities(text: str) -> str:
    """Extract people mentions with relationships. Returns JSON."""
    return get_engine().extract_people_entities(text)


__all__ = [
    "EntropyEngine",
    "get_engine",
    "detect_patterns",
    "extract_keywords",
    "extract_people_entities",
    "summarise_findings",
    "to_json",
    "from_json",
    "EMPTY_DETECTION",
    "EMPTY_KEYWORDS",
    "EMPTY_ENTITIES",
]
