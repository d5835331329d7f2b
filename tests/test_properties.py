"""
Property-based tests using Hypothesis.

These generate arbitrary and message-like text to check the invariants
every call must hold: bounded scores, a strict detection threshold,
unique people, sorted keywords, and no exceptions on any input.

Run with: pytest tests/test_properties.py -v
"""

import sys
import json
from pathlib import Path

# Add parent to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

# Skip all tests if hypothesis not installed
hypothesis = pytest.importorskip("hypothesis")

from hypothesis import given, settings, strategies as st

from entropy_engine.api import detect_patterns, extract_keywords, extract_people_entities
from entropy_engine.patterns import PatternMatch, Severity
from entropy_engine.scoring import calculate_text_score, is_detected


FRAGMENTS = [
    "my mom", "My dad", "Sarah, my sister,", "my boss Anna", "who is my friend",
    "you always", "that never happened", "vermin", "calm down", "she was happy",
    "he is toxic", "they hate", "Monday", "my SO", "Jake", "I love", "lazy",
    "selfish", "you're crazy", ",", ".", " ",
]

message_text = st.one_of(
    st.text(max_size=300),
    st.lists(st.sampled_from(FRAGMENTS), max_size=25).map(" ".join),
)

weights = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)


class TestScoreProperties:

    @given(ws=st.lists(weights, max_size=50))
    @settings(max_examples=100, deadline=2000)
    def test_score_bounded(self, ws):
        matches = [
            PatternMatch(category="p", matched_text="x", start=0, severity=Severity.LOW, weight=w)
            for w in ws
        ]
        score = calculate_text_score(matches)
        assert 0.0 <= score <= 1.0
        if not ws:
            assert score == 0.0

    @given(score=st.floats(min_value=0.0, max_value=1.0, allow_nan=False))
    def test_detection_threshold(self, score):
        assert is_detected(score) == (score > 0.3)


class TestEntryPointProperties:

    @given(text=message_text)
    @settings(max_examples=75, deadline=5000)
    def test_detect_patterns_well_formed(self, text):
        result = json.loads(detect_patterns(text))
        assert 0.0 <= result["score"] <= 1.0
        assert result["confidence"] == min(result["score"], 1.0)
        assert result["detected"] == (result["score"] > 0.3)
        for p in result["patterns"]:
            assert text[p["position"]:p["position"] + len(p["matchText"])] == p["matchText"]

    @given(text=message_text)
    @settings(max_examples=75, deadline=5000)
    def test_keywords_sorted_unique(self, text):
        keywords = json.loads(extract_keywords(text))
        assert keywords == sorted(set(keywords))

    @given(text=message_text)
    @settings(max_examples=75, deadline=5000)
    def test_people_unique_and_counted(self, text):
        result = json.loads(extract_people_entities(text))
        names = [e["name"].lower() for e in result["entities"]]
        assert len(names) == len(set(names))

        with_hint = sum(1 for e in result["entities"] if e["relationshipHint"] is not None)
        assert result["relationshipCount"] == with_hint

    @given(text=message_text)
    @settings(max_examples=50, deadline=5000)
    def test_idempotent(self, text):
        assert detect_patterns(text) == detect_patterns(text)
        assert extract_keywords(text) == extract_keywords(text)
        first = json.loads(extract_people_entities(text))["entities"]
        second = json.loads(extract_people_entities(text))["entities"]
        assert first == second
