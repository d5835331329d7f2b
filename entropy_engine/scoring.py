"""
Entropy Engine - Score Aggregation

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Reduces a list of pattern matches to one confidence score in [0, 1].

    score = min(sum(weights) / (1 + k * count), 1.0)

More matches raise the denominator, damping runaway accumulation from
many low-weight hits without capping it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .config import EngineConfig
from .patterns import PatternMatch, match_patterns

DAMPING_COEFFICIENT = 0.1
DETECTION_THRESHOLD = 0.3


@dataclass
class TextAnalysisResult:
    """Matcher output plus aggregate score."""
    detected: bool
    confidence: float
    matches: List[PatternMatch] = field(default_factory=list)
    score: float = 0.0

    @property
    def categories(self) -> List[str]:
        """Distinct matched categories in first-seen order."""
        return list(dict.fromkeys(m.category for m in self.matches))

    def to_dict(self) -> Dict:
        return {
            "detected": self.detected,
            "confidence": self.confidence,
            "patterns": [m.to_dict() for m in self.matches],
            "score": self.score,
        }


def calculate_text_score(
    matches: Sequence[PatternMatch],
    damping: float = DAMPING_COEFFICIENT,
) -> float:
    """Aggregate match weights into a score in [0, 1]. Empty input scores 0."""
    if not matches:
        return 0.0

    total_weight = sum(m.weight for m in matches)
    normalised = total_weight / (1.0 + len(matches) * damping)

    return min(normalised, 1.0)


def is_detected(score: float, threshold: float = DETECTION_THRESHOLD) -> bool:
    """Strictly above threshold; a score equal to it is not a detection."""
    return score > threshold


def analyse_text(text: str, config: Optional[EngineConfig] = None) -> TextAnalysisResult:
    """Run the matcher and aggregator over text."""
    config = config or EngineConfig()

    matches = match_patterns(text)
    score = calculate_text_score(matches, damping=config.damping_coefficient)

    return TextAnalysisResult(
        detected=is_detected(score, config.detection_threshold),
        confidence=min(score, 1.0),
        matches=matches,
        score=score,
    )


__all__ = [
    "DAMPING_COEFFICIENT",
    "DETECTION_THRESHOLD",
    "TextAnalysisResult",
    "calculate_text_score",
    "is_detected",
    "analyse_text",
]
