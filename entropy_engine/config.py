"""
Entropy Engine - Configuration v1.0

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Tuneable constants for scoring and entity extraction.

The defaults are part of the observable behaviour: the damping coefficient
and detection threshold decide what callers see as "detected", and the
window radii and confidences flow straight into extracted entities.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any

from .errors import ConfigError


@dataclass
class EngineConfig:
    """
    Configuration for pattern scoring and people extraction.
    """

    # =========================================================================
    # SCORING
    # =========================================================================

    detection_threshold: float = 0.3     # detected iff score > threshold
    damping_coefficient: float = 0.1     # score = total / (1 + k * count)

    # =========================================================================
    # ENTITY EXTRACTION
    # =========================================================================

    possessive_window: int = 50          # chars either side of "my <relation>"
    named_window: int = 30               # chars either side of "Name, my <relation>"
    possessive_confidence: float = 0.8
    named_confidence: float = 0.85

    # =========================================================================
    # METHODS
    # =========================================================================

    def validate(self) -> "EngineConfig":
        """Check ranges. Returns self so it can be chained."""
        for name in ("detection_threshold", "possessive_confidence", "named_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(name, f"must be between 0 and 1, got {value}")

        if self.damping_coefficient < 0:
            raise ConfigError("damping_coefficient", f"must be >= 0, got {self.damping_coefficient}")

        for name in ("possessive_window", "named_window"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ConfigError(name, f"must be a non-negative integer, got {value!r}")

        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to dictionary."""
        return {
            "detection_threshold": self.detection_threshold,
            "damping_coefficient": self.damping_coefficient,
            "possessive_window": self.possessive_window,
            "named_window": self.named_window,
            "possessive_confidence": self.possessive_confidence,
            "named_confidence": self.named_confidence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# =============================================================================
# MODULE EXPORTS
# =============================================================================

__all__ = ["EngineConfig"]
