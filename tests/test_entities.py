"""
Entropy Engine People Extraction Tests

Run with: pytest tests/test_entities.py -v
"""

import sys
from pathlib import Path

# Add parent to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from entropy_engine.config import EngineConfig
from entropy_engine.entities import (
    RELATIONSHIP_CATEGORIES,
    RelationshipCategory,
    RelationshipTag,
    Pronouns,
    Sentiment,
    detect_pronouns,
    detect_sentiment,
    extract_entities,
    filter_by_category,
    find_best_name_in_context,
    infer_relationship_from_word,
    is_valid_name,
    name_from_possessive,
)


def by_name(result, name):
    return next((e for e in result.entities if e.name == name), None)


def hints(result):
    return [e.relationship_hint for e in result.entities]


# =============================================================================
# SCENARIOS
# =============================================================================

def test_family_relationships():
    result = extract_entities("I talked to my mom about the situation. My dad was also there.")
    assert RelationshipTag.MOTHER in hints(result)
    assert RelationshipTag.FATHER in hints(result)
    assert by_name(result, "mom").relationship_phrase == "my mom"
    assert by_name(result, "dad").relationship_phrase == "My dad"


def test_name_after_relation():
    result = extract_entities("My husband John said we should take a vacation.")
    john = by_name(result, "John")
    assert john is not None
    assert john.relationship_hint == RelationshipTag.HUSBAND
    assert john.confidence == 0.8
    assert john.position == 0


def test_name_then_relation():
    result = extract_entities("Sarah, my sister, called yesterday.")
    sarah = by_name(result, "Sarah")
    assert sarah is not None
    assert sarah.relationship_hint == RelationshipTag.SISTER
    assert sarah.confidence == 0.85
    assert sarah.position == 0
    assert result.relationship_count == 2  # "sister" from the possessive pass, and Sarah


def test_empty_text():
    result = extract_entities("")
    assert result.entities == []
    assert result.relationship_count == 0


# =============================================================================
# NAME RESOLUTION
# =============================================================================

class TestNameResolution:
    """Possessive pass fallbacks and the named pass."""

    def test_name_after_comma(self):
        result = extract_entities("I saw my brother, Mike, at the park.")
        assert by_name(result, "Mike").relationship_hint == RelationshipTag.BROTHER

    def test_two_word_name(self):
        result = extract_entities("My boss Anna Lee is great.")
        anna = by_name(result, "Anna Lee")
        assert anna.relationship_hint == RelationshipTag.BOSS
        assert anna.sentiment == Sentiment.POSITIVE

    def test_unknown_fallback(self):
        result = extract_entities("My step-mom")
        assert by_name(result, "unknown").relationship_hint == RelationshipTag.STEP_MOTHER

    def test_who_is_my(self):
        result = extract_entities("I met Alex who is my therapist.")
        alex = by_name(result, "Alex")
        assert alex.relationship_hint == RelationshipTag.THERAPIST
        assert alex.relationship_phrase == "Alex who is my therapist"

    def test_unmapped_relation_word(self):
        result = extract_entities("Tom, my accountant, said hi.")
        tom = by_name(result, "Tom")
        assert tom is not None
        assert tom.relationship_hint is None
        assert result.relationship_count == 0

    def test_first_occurrence_per_rule(self):
        result = extract_entities("My friend Jake came. Later my friend Lily came too.")
        assert by_name(result, "Jake") is not None
        assert by_name(result, "Lily") is None

    def test_lowercase_word_before_name_not_captured(self):
        result = extract_entities("I called Sarah, my sister")
        sarah = by_name(result, "Sarah")
        assert sarah is not None
        assert sarah.relationship_hint == RelationshipTag.SISTER
        assert sarah.position == 9
        assert by_name(result, "called Sarah") is None

    def test_so_is_case_sensitive(self):
        assert extract_entities("my so called plan").entities == []
        jamie = by_name(extract_entities("Dinner with my SO Jamie"), "Jamie")
        assert jamie.relationship_hint == RelationshipTag.SIGNIFICANT_OTHER

    def test_context_window_clipped(self):
        text = "x" * 80 + " my mom " + "y" * 80
        mom = by_name(extract_entities(text), "mom")
        assert len(mom.context_window) <= len("my mom") + 100
        assert "my mom" in mom.context_window

    def test_custom_confidence(self):
        config = EngineConfig(possessive_confidence=0.5)
        result = extract_entities("My husband John called.", config)
        assert by_name(result, "John").confidence == 0.5


class TestDedup:
    """First mention of a name wins."""

    def test_later_duplicate_dropped(self):
        result = extract_entities("My friend Sarah came over. Sarah, my sister, was there too.")
        sarahs = [e for e in result.entities if e.name.lower() == "sarah"]
        assert len(sarahs) == 1
        assert sarahs[0].relationship_hint == RelationshipTag.FRIEND

    def test_names_unique_case_insensitive(self):
        text = "My mom called. Mom, my mother, was upset. my mom again."
        names = [e.name.lower() for e in extract_entities(text).entities]
        assert len(names) == len(set(names))


# =============================================================================
# HELPERS
# =============================================================================

def test_is_valid_name():
    assert is_valid_name("Sarah")
    assert not is_valid_name("sarah")
    assert not is_valid_name("Monday")
    assert not is_valid_name("Sad")
    assert not is_valid_name("J")


def test_name_from_possessive():
    assert name_from_possessive("my mom") == "mom"
    assert name_from_possessive("My dad") == "dad"
    assert name_from_possessive("my step-mom") is None


def test_find_best_name_in_context():
    assert find_best_name_in_context("yesterday with my friend Jake") == "Jake"
    assert find_best_name_in_context("went out with my cousin") == "cousin"
    assert find_best_name_in_context("nothing here") == "unknown"


def test_detect_pronouns():
    assert detect_pronouns("My sister went to the store. She was happy about the sale.") == Pronouns.SHE_HER
    assert detect_pronouns("He said his car broke") == Pronouns.HE_HIM
    assert detect_pronouns("he and she") is None
    assert detect_pronouns("he and she and they") == Pronouns.THEY_THEM
    assert detect_pronouns("The bus was late") is None


def test_detect_sentiment():
    assert detect_sentiment("I love spending time with my mom. She's so supportive.") == Sentiment.POSITIVE
    assert detect_sentiment("I'm frustrated with my boss. He's so difficult.") == Sentiment.NEGATIVE
    assert detect_sentiment("I love her but I hate the drama") == Sentiment.MIXED
    assert detect_sentiment("The bus was late") is None


def test_infer_relationship_from_word():
    assert infer_relationship_from_word("Sis") == RelationshipTag.SISTER
    assert infer_relationship_from_word("manager") == RelationshipTag.BOSS
    assert infer_relationship_from_word("accountant") is None


def test_every_tag_has_category():
    assert set(RELATIONSHIP_CATEGORIES) == set(RelationshipTag)


def test_filter_by_category():
    result = extract_entities("My boss Anna Lee met my sister Kate.")
    family = filter_by_category(result.entities, RelationshipCategory.FAMILY)
    work = filter_by_category(result.entities, RelationshipCategory.PROFESSIONAL)
    assert [e.name for e in family] == ["Kate"]
    assert [e.name for e in work] == ["Anna Lee"]
    assert by_name(result, "Kate").category == RelationshipCategory.FAMILY


def test_to_dict_keys():
    payload = extract_entities("Sarah, my sister, called yesterday.").to_dict()
    assert set(payload) == {"entities", "relationshipCount", "processingTimeUs"}
    assert set(payload["entities"][0]) == {
        "name", "relationshipHint", "relationshipContext", "pronouns",
        "mentionContext", "sentiment", "confidence", "position",
    }
    assert payload["entities"][0]["relationshipHint"] == "sister"
