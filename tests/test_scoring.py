"""
Entropy Engine Scoring Tests

Run with: pytest tests/test_scoring.py -v
"""

import sys
from pathlib import Path

# Add parent to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from entropy_engine.config import EngineConfig
from entropy_engine.patterns import PatternMatch, Severity
from entropy_engine.scoring import (
    DAMPING_COEFFICIENT,
    DETECTION_THRESHOLD,
    analyse_text,
    calculate_text_score,
    is_detected,
)


def make_matches(*weights):
    return [
        PatternMatch(category="test", matched_text="x", start=i, severity=Severity.LOW, weight=w)
        for i, w in enumerate(weights)
    ]


def test_empty_scores_zero():
    assert calculate_text_score([]) == 0.0


def test_single_match_damped():
    assert calculate_text_score(make_matches(1.0)) == pytest.approx(1.0 / 1.1)


def test_several_low_weights():
    assert calculate_text_score(make_matches(0.4, 0.4, 0.4)) == pytest.approx(1.2 / 1.3)


def test_score_saturates_at_one():
    assert calculate_text_score(make_matches(*[1.0] * 10)) == 1.0


def test_threshold_is_strict():
    assert not is_detected(0.3)
    assert is_detected(0.3000001)
    assert not is_detected(0.0)


def test_damping_decides_detection():
    # 0.3 / 1.1 stays under the threshold, 0.4 / 1.2 clears it
    assert not is_detected(calculate_text_score(make_matches(0.3)))
    assert is_detected(calculate_text_score(make_matches(0.2, 0.2)))


def test_defaults_match_config():
    config = EngineConfig()
    assert config.damping_coefficient == DAMPING_COEFFICIENT
    assert config.detection_threshold == DETECTION_THRESHOLD


class TestAnalyseText:
    """Matcher + aggregator pipeline."""

    def test_judgment_detected(self):
        result = analyse_text("You are always so lazy and selfish")
        assert result.detected
        assert result.confidence == min(result.score, 1.0)
        assert {"character_judgment", "absolute_statement"} & set(result.categories)

    def test_empty_text(self):
        result = analyse_text("")
        assert not result.detected
        assert result.score == 0.0
        assert result.confidence == 0.0
        assert result.matches == []

    def test_single_reassurance_match(self):
        # one reassurance_seeking hit at 0.4 -> 0.4 / 1.1
        result = analyse_text("are you sure")
        assert [m.category for m in result.matches] == ["reassurance_seeking"]
        assert result.score == pytest.approx(0.4 / 1.1)
        assert result.detected

    def test_custom_threshold(self):
        strict = EngineConfig(detection_threshold=0.95)
        result = analyse_text("are you sure", strict)
        assert not result.detected

    def test_to_dict_keys(self):
        payload = analyse_text("They are just a plague of vermin").to_dict()
        assert set(payload) == {"detected", "confidence", "patterns", "score"}
        assert set(payload["patterns"][0]) == {"patternType", "matchText", "position", "severity", "weight"}
