"""
Entropy Engine - People Extraction v1.0

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Zero-cost extraction of people mentions for contact management:
names, relationship roles, pronouns and sentiment.

Two passes share one case-insensitive dedup set:

1. Possessive pass - "my <relation>" rules, first occurrence of each rule,
   with the name read from what follows ("my husband John") or fallbacks.
2. Named pass - "Name, my <relation>" phrasing, every occurrence.

The first entity to claim a name wins; later mentions of the same name are
dropped even if they carry richer relationship data.
"""

import re
import time
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from .config import EngineConfig

logger = logging.getLogger(__name__)


# =============================================================================
# RELATIONSHIP TAGS
# =============================================================================

class RelationshipCategory(Enum):
    """Coarse grouping of relationship tags. Used for filtering only."""
    FAMILY = "family"
    ROMANTIC = "romantic"
    FRIEND = "friend"
    PROFESSIONAL = "professional"
    SERVICE_PROVIDER = "service_provider"
    OTHER = "other"


class RelationshipTag(Enum):
    """Canonical relationship of a person to the speaker."""
    MOTHER = "mother"
    FATHER = "father"
    PARENT = "parent"
    BROTHER = "brother"
    SISTER = "sister"
    SIBLING = "sibling"
    SON = "son"
    DAUGHTER = "daughter"
    CHILD = "child"
    GRANDMOTHER = "grandmother"
    GRANDFATHER = "grandfather"
    AUNT = "aunt"
    UNCLE = "uncle"
    COUSIN = "cousin"
    NIECE = "niece"
    NEPHEW = "nephew"
    STEP_MOTHER = "step_mother"
    STEP_FATHER = "step_father"
    MOTHER_IN_LAW = "mother_in_law"
    FATHER_IN_LAW = "father_in_law"
    BROTHER_IN_LAW = "brother_in_law"
    SISTER_IN_LAW = "sister_in_law"
    CO_PARENT = "co_parent"
    EX_SPOUSE_CO_PARENT = "ex_spouse_co_parent"
    HUSBAND = "husband"
    WIFE = "wife"
    SPOUSE = "spouse"
    PARTNER = "partner"
    SIGNIFICANT_OTHER = "significant_other"
    BOYFRIEND = "boyfriend"
    GIRLFRIEND = "girlfriend"
    FIANCE = "fiance"
    FIANCEE = "fiancee"
    EX_PARTNER = "ex_partner"
    EX_SPOUSE = "ex_spouse"
    BEST_FRIEND = "best_friend"
    CLOSE_FRIEND = "close_friend"
    FRIEND = "friend"
    ROOMMATE = "roommate"
    BOSS = "boss"
    COLLEAGUE = "colleague"
    DIRECT_REPORT = "direct_report"
    MENTOR = "mentor"
    MENTEE = "mentee"
    CLIENT = "client"
    TEACHER = "teacher"
    STUDENT = "student"
    THERAPIST = "therapist"
    DOCTOR = "doctor"
    COACH = "coach"
    NEIGHBOR = "neighbor"
    LANDLORD = "landlord"
    OTHER = "other"


_FAMILY = (
    "MOTHER", "FATHER", "PARENT", "BROTHER", "SISTER", "SIBLING", "SON", "DAUGHTER",
    "CHILD", "GRANDMOTHER", "GRANDFATHER", "AUNT", "UNCLE", "COUSIN", "NIECE", "NEPHEW",
    "STEP_MOTHER", "STEP_FATHER", "MOTHER_IN_LAW", "FATHER_IN_LAW", "BROTHER_IN_LAW",
    "SISTER_IN_LAW", "CO_PARENT", "EX_SPOUSE_CO_PARENT",
)
_ROMANTIC = (
    "HUSBAND", "WIFE", "SPOUSE", "PARTNER", "SIGNIFICANT_OTHER", "BOYFRIEND",
    "GIRLFRIEND", "FIANCE", "FIANCEE", "EX_PARTNER", "EX_SPOUSE",
)
_FRIEND = ("BEST_FRIEND", "CLOSE_FRIEND", "FRIEND", "ROOMMATE")
_PROFESSIONAL = (
    "BOSS", "COLLEAGUE", "DIRECT_REPORT", "MENTOR", "MENTEE", "CLIENT", "TEACHER", "STUDENT",
)
_SERVICE_PROVIDER = ("THERAPIST", "DOCTOR", "COACH")
_OTHER = ("NEIGHBOR", "LANDLORD", "OTHER")

RELATIONSHIP_CATEGORIES: Dict[RelationshipTag, RelationshipCategory] = {
    RelationshipTag[name]: category
    for names, category in (
        (_FAMILY, RelationshipCategory.FAMILY),
        (_ROMANTIC, RelationshipCategory.ROMANTIC),
        (_FRIEND, RelationshipCategory.FRIEND),
        (_PROFESSIONAL, RelationshipCategory.PROFESSIONAL),
        (_SERVICE_PROVIDER, RelationshipCategory.SERVICE_PROVIDER),
        (_OTHER, RelationshipCategory.OTHER),
    )
    for name in names
}


# =============================================================================
# LEXICONS
# =============================================================================

# "my <relation>" phrasing, in scan order
POSSESSIVE_RELATIONSHIPS: List[Tuple[str, RelationshipTag]] = [
    # Family
    (r"\bmy (?:mom|mother|mommy|mama)\b", RelationshipTag.MOTHER),
    (r"\bmy (?:dad|father|daddy|papa)\b", RelationshipTag.FATHER),
    (r"\bmy (?:parents?)\b", RelationshipTag.PARENT),
    (r"\bmy (?:brother|bro)\b", RelationshipTag.BROTHER),
    (r"\bmy (?:sister|sis)\b", RelationshipTag.SISTER),
    (r"\bmy (?:sibling)\b", RelationshipTag.SIBLING),
    (r"\bmy (?:son)\b", RelationshipTag.SON),
    (r"\bmy (?:daughter)\b", RelationshipTag.DAUGHTER),
    (r"\bmy (?:kid|child)\b", RelationshipTag.CHILD),
    (r"\bmy (?:grandma|grandmother|nana|granny)\b", RelationshipTag.GRANDMOTHER),
    (r"\bmy (?:grandpa|grandfather|papa|gramps)\b", RelationshipTag.GRANDFATHER),
    (r"\bmy (?:aunt|auntie)\b", RelationshipTag.AUNT),
    (r"\bmy (?:uncle)\b", RelationshipTag.UNCLE),
    (r"\bmy (?:cousin)\b", RelationshipTag.COUSIN),
    (r"\bmy (?:niece)\b", RelationshipTag.NIECE),
    (r"\bmy (?:nephew)\b", RelationshipTag.NEPHEW),

    # Extended family
    (r"\bmy (?:step-?mom|step-?mother|stepmom|stepmother)\b", RelationshipTag.STEP_MOTHER),
    (r"\bmy (?:step-?dad|step-?father|stepdad|stepfather)\b", RelationshipTag.STEP_FATHER),
    (r"\bmy (?:mother-?in-?law|MIL)\b", RelationshipTag.MOTHER_IN_LAW),
    (r"\bmy (?:father-?in-?law|FIL)\b", RelationshipTag.FATHER_IN_LAW),
    (r"\bmy (?:brother-?in-?law|BIL)\b", RelationshipTag.BROTHER_IN_LAW),
    (r"\bmy (?:sister-?in-?law|SIL)\b", RelationshipTag.SISTER_IN_LAW),

    # Co-parenting
    (r"\bmy (?:co-?parent|coparent)\b", RelationshipTag.CO_PARENT),
    (r"\bmy (?:ex|ex-?husband|ex-?wife).{0,20}(?:co-?parent|parent|custody)\b", RelationshipTag.EX_SPOUSE_CO_PARENT),

    # Romantic
    (r"\bmy (?:husband|hubby)\b", RelationshipTag.HUSBAND),
    (r"\bmy (?:wife|wifey)\b", RelationshipTag.WIFE),
    (r"\bmy (?:spouse)\b", RelationshipTag.SPOUSE),
    (r"\bmy (?:partner)\b", RelationshipTag.PARTNER),
    # "SO" only in capitals, so "my so-called" stays out
    (r"\bmy (?:(?-i:SO)|significant other)\b", RelationshipTag.SIGNIFICANT_OTHER),
    (r"\bmy (?:boyfriend|bf)\b", RelationshipTag.BOYFRIEND),
    (r"\bmy (?:girlfriend|gf)\b", RelationshipTag.GIRLFRIEND),
    (r"\bmy (?:fiance|fiancé)\b", RelationshipTag.FIANCE),
    (r"\bmy (?:fiancee|fiancée)\b", RelationshipTag.FIANCEE),
    (r"\bmy (?:ex)\b", RelationshipTag.EX_PARTNER),
    (r"\bmy (?:ex-?boyfriend|ex-?girlfriend|ex-?partner)\b", RelationshipTag.EX_PARTNER),
    (r"\bmy (?:ex-?husband|ex-?wife|former spouse)\b", RelationshipTag.EX_SPOUSE),

    # Friends
    (r"\bmy (?:best friend|bestie|BFF)\b", RelationshipTag.BEST_FRIEND),
    (r"\bmy (?:close friend)\b", RelationshipTag.CLOSE_FRIEND),
    (r"\bmy (?:friend)\b", RelationshipTag.FRIEND),
    (r"\bmy (?:roommate|flatmate|housemate)\b", RelationshipTag.ROOMMATE),

    # Professional
    (r"\bmy (?:boss|manager|supervisor)\b", RelationshipTag.BOSS),
    (r"\bmy (?:coworker|co-?worker|colleague)\b", RelationshipTag.COLLEAGUE),
    (r"\bmy (?:employee|direct report|team member)\b", RelationshipTag.DIRECT_REPORT),
    (r"\bmy (?:mentor)\b", RelationshipTag.MENTOR),
    (r"\bmy (?:mentee)\b", RelationshipTag.MENTEE),
    (r"\bmy (?:client)\b", RelationshipTag.CLIENT),
    (r"\bmy (?:teacher|professor|instructor)\b", RelationshipTag.TEACHER),
    (r"\bmy (?:student)\b", RelationshipTag.STUDENT),

    # Healthcare / support
    (r"\bmy (?:therapist|counselor|psychologist|psychiatrist)\b", RelationshipTag.THERAPIST),
    (r"\bmy (?:doctor|physician|GP)\b", RelationshipTag.DOCTOR),
    (r"\bmy (?:coach)\b", RelationshipTag.COACH),

    # Other
    (r"\bmy (?:neighbor|neighbour)\b", RelationshipTag.NEIGHBOR),
    (r"\bmy (?:landlord)\b", RelationshipTag.LANDLORD),
]

# Relation word in "Name, my <word>" -> tag
RELATION_WORDS: Dict[str, RelationshipTag] = {
    "mom": RelationshipTag.MOTHER, "mother": RelationshipTag.MOTHER,
    "mama": RelationshipTag.MOTHER, "mommy": RelationshipTag.MOTHER,
    "dad": RelationshipTag.FATHER, "father": RelationshipTag.FATHER,
    "papa": RelationshipTag.FATHER, "daddy": RelationshipTag.FATHER,
    "brother": RelationshipTag.BROTHER, "bro": RelationshipTag.BROTHER,
    "sister": RelationshipTag.SISTER, "sis": RelationshipTag.SISTER,
    "husband": RelationshipTag.HUSBAND, "hubby": RelationshipTag.HUSBAND,
    "wife": RelationshipTag.WIFE, "wifey": RelationshipTag.WIFE,
    "spouse": RelationshipTag.SPOUSE,
    "partner": RelationshipTag.PARTNER,
    "boyfriend": RelationshipTag.BOYFRIEND, "bf": RelationshipTag.BOYFRIEND,
    "girlfriend": RelationshipTag.GIRLFRIEND, "gf": RelationshipTag.GIRLFRIEND,
    "friend": RelationshipTag.FRIEND,
    "boss": RelationshipTag.BOSS, "manager": RelationshipTag.BOSS,
    "coworker": RelationshipTag.COLLEAGUE, "colleague": RelationshipTag.COLLEAGUE,
    "therapist": RelationshipTag.THERAPIST, "counselor": RelationshipTag.THERAPIST,
    "doctor": RelationshipTag.DOCTOR, "physician": RelationshipTag.DOCTOR,
}

# Words that look like names when capitalised but never are
EXCLUDED_WORDS = {
    # Pronouns, articles, question words
    "my", "the", "a", "an", "i", "me", "we", "you", "he", "she", "it", "they",
    "this", "that", "these", "those", "who", "what", "when", "where", "why", "how",

    # Days and months
    "today", "yesterday", "tomorrow", "monday", "tuesday", "wednesday", "thursday",
    "friday", "saturday", "sunday", "january", "february", "march", "april", "may",
    "june", "july", "august", "september", "october", "november", "december",

    # Fillers and reporting verbs
    "just", "really", "very", "also", "too", "even", "still", "already",
    "talked", "said", "told", "asked", "called", "met", "saw", "went",

    # Affect
    "good", "great", "bad", "nice", "happy", "sad", "angry", "upset",

    # Events
    "dinner", "lunch", "breakfast", "meeting", "conversation", "call", "text",

    # Ordinals and qualifiers
    "last", "next", "first", "new", "old", "other", "another",

    # Generic relationship vocabulary
    "mom", "mum", "dad", "mother", "father", "brother", "sister", "friend",
    "husband", "wife", "partner", "boss",
}

HE_HIM = ["he", "him", "his", "himself"]
SHE_HER = ["she", "her", "hers", "herself"]
THEY_THEM = ["they", "them", "their", "theirs", "themselves"]

POSITIVE_WORDS = [
    "love", "happy", "grateful", "appreciate", "enjoy", "like", "wonderful", "great",
    "amazing", "fantastic", "supportive", "helpful", "kind", "caring",
]

NEGATIVE_WORDS = [
    "hate", "angry", "frustrated", "annoyed", "upset", "disappointed", "sad", "hurt",
    "betrayed", "difficult", "problematic", "toxic", "abusive",
]

UNKNOWN_NAME = "unknown"


# =============================================================================
# COMPILED PATTERNS
# =============================================================================

def _word_pattern(words: List[str]) -> re.Pattern:
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)


@dataclass(frozen=True)
class RelationshipRule:
    regex: re.Pattern
    tag: RelationshipTag


def _compile_relationship_rules(pairs: List[Tuple[str, RelationshipTag]]) -> Tuple[RelationshipRule, ...]:
    rules = []
    for pattern, tag in pairs:
        try:
            rules.append(RelationshipRule(re.compile(pattern, re.IGNORECASE), tag))
        except re.error as e:
            logger.warning(f"Dropping relationship rule for '{tag.value}': {e}")
    return tuple(rules)


RELATIONSHIP_RULES = _compile_relationship_rules(POSSESSIVE_RELATIONSHIPS)

# Capitalised name right after "my <relation>", optionally after a comma
NAME_AFTER_RELATION = re.compile(r"\s*,?\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\b")

CAPITALIZED_NAME = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\b")

# Name stays case-sensitive; the connecting phrase and relation word do not
NAME_THEN_RELATION = re.compile(
    r"\b((?-i:[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)),?\s+(?:my|who is my|who's my)\s+(\w+(?:-\w+)?)\b",
    re.IGNORECASE,
)

HE_HIM_PATTERN = _word_pattern(HE_HIM)
SHE_HER_PATTERN = _word_pattern(SHE_HER)
THEY_THEM_PATTERN = _word_pattern(THEY_THEM)

POSITIVE_PATTERN = _word_pattern(POSITIVE_WORDS)
NEGATIVE_PATTERN = _word_pattern(NEGATIVE_WORDS)


# =============================================================================
# RESULT TYPES
# =============================================================================

class Pronouns:
    """Pronoun signals."""
    HE_HIM = "he/him"
    SHE_HER = "she/her"
    THEY_THEM = "they/them"


class Sentiment:
    """Sentiment signals."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MIXED = "mixed"


@dataclass
class ExtractedPerson:
    """A person mentioned in the text."""
    name: str
    relationship_hint: Optional[RelationshipTag]
    relationship_phrase: str
    pronouns: Optional[str]
    context_window: str
    sentiment: Optional[str]
    confidence: float
    position: int

    @property
    def category(self) -> Optional[RelationshipCategory]:
        if self.relationship_hint is None:
            return None
        return RELATIONSHIP_CATEGORIES[self.relationship_hint]

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "relationshipHint": self.relationship_hint.value if self.relationship_hint else None,
            "relationshipContext": self.relationship_phrase,
            "pronouns": self.pronouns,
            "mentionContext": self.context_window,
            "sentiment": self.sentiment,
            "confidence": self.confidence,
            "position": self.position,
        }


@dataclass
class EntityExtractionResult:
    """All people found in one call."""
    entities: List[ExtractedPerson] = field(default_factory=list)
    relationship_count: int = 0
    processing_time_us: int = 0

    def to_dict(self) -> Dict:
        return {
            "entities": [e.to_dict() for e in self.entities],
            "relationshipCount": self.relationship_count,
            "processingTimeUs": self.processing_time_us,
        }


# =============================================================================
# HELPERS
# =============================================================================

def is_valid_name(word: str) -> bool:
    """At least two characters, capitalised, and not a stoplisted word."""
    if len(word) < 2:
        return False
    if word.lower() in EXCLUDED_WORDS:
        return False
    return word[0].isupper()


def _window(text: str, start: int, end: int, radius: int) -> str:
    return text[max(0, start - radius):min(len(text), end + radius)]


def _name_after(text: str, end: int) -> Optional[str]:
    """Valid capitalised name immediately following position end."""
    m = NAME_AFTER_RELATION.match(text[end:])
    if m and is_valid_name(m.group(1)):
        return m.group(1)
    return None


def name_from_possessive(phrase: str) -> Optional[str]:
    """'my mom' -> 'mom'. None unless the word is alphabetic."""
    words = phrase.split()
    if len(words) >= 2 and words[0].lower() == "my":
        word = words[1]
        if len(word) >= 2 and word.isalpha():
            return word
    return None


def find_best_name_in_context(context: str) -> str:
    """First valid capitalised token, else the word after 'my', else 'unknown'."""
    for m in CAPITALIZED_NAME.finditer(context):
        if is_valid_name(m.group(1)):
            return m.group(1)

    words = context.split()
    if "my" in words:
        i = words.index("my")
        if i + 1 < len(words):
            return words[i + 1]

    return UNKNOWN_NAME


def detect_pronouns(context: str) -> Optional[str]:
    """Most frequent pronoun family; they/them wins anything not strictly won."""
    he = len(HE_HIM_PATTERN.findall(context))
    she = len(SHE_HER_PATTERN.findall(context))
    they = len(THEY_THEM_PATTERN.findall(context))

    if he > 0 and he > she and he > they:
        return Pronouns.HE_HIM
    if she > 0 and she > he and she > they:
        return Pronouns.SHE_HER
    if they > 0:
        return Pronouns.THEY_THEM
    return None


def detect_sentiment(context: str) -> Optional[str]:
    positive = len(POSITIVE_PATTERN.findall(context))
    negative = len(NEGATIVE_PATTERN.findall(context))

    if positive > negative and positive > 0:
        return Sentiment.POSITIVE
    if negative > positive and negative > 0:
        return Sentiment.NEGATIVE
    if positive > 0 and negative > 0:
        return Sentiment.MIXED
    return None


def infer_relationship_from_word(word: str) -> Optional[RelationshipTag]:
    return RELATION_WORDS.get(word.lower())


def filter_by_category(
    entities: List[ExtractedPerson],
    category: RelationshipCategory,
) -> List[ExtractedPerson]:
    """Entities whose relationship falls in category, in input order."""
    return [e for e in entities if e.category == category]


# =============================================================================
# EXTRACTION
# =============================================================================

def _possessive_pass(text: str, seen: Set[str], config: EngineConfig) -> List[ExtractedPerson]:
    people = []

    # First occurrence per rule only
    for rule in RELATIONSHIP_RULES:
        m = rule.regex.search(text)
        if m is None:
            continue

        phrase = m.group(0)
        context = _window(text, m.start(), m.end(), config.possessive_window)

        name = (
            _name_after(text, m.end())
            or name_from_possessive(phrase)
            or find_best_name_in_context(context)
        )

        key = name.lower()
        if key in seen:
            continue
        seen.add(key)

        people.append(ExtractedPerson(
            name=name,
            relationship_hint=rule.tag,
            relationship_phrase=phrase,
            pronouns=detect_pronouns(context),
            context_window=context.strip(),
            sentiment=detect_sentiment(context),
            confidence=config.possessive_confidence,
            position=m.start(),
        ))

    return people


def _named_pass(text: str, seen: Set[str], config: EngineConfig) -> List[ExtractedPerson]:
    people = []

    for m in NAME_THEN_RELATION.finditer(text):
        name = m.group(1)
        key = name.lower()
        if key in seen or not is_valid_name(name):
            continue
        seen.add(key)

        context = _window(text, m.start(1), m.end(2), config.named_window)

        people.append(ExtractedPerson(
            name=name,
            relationship_hint=infer_relationship_from_word(m.group(2)),
            relationship_phrase=m.group(0),
            pronouns=detect_pronouns(context),
            context_window=context.strip(),
            sentiment=detect_sentiment(context),
            confidence=config.named_confidence,
            position=m.start(1),
        ))

    return people


def extract_entities(text: str, config: Optional[EngineConfig] = None) -> EntityExtractionResult:
    """
    Extract people mentions from text.

    Args:
        text: Message text
        config: Window radii and confidences; defaults to EngineConfig()

    Returns:
        EntityExtractionResult with names unique case-insensitively
    """
    started = time.perf_counter()
    config = config or EngineConfig()

    seen: Set[str] = set()
    entities = _possessive_pass(text, seen, config)
    entities.extend(_named_pass(text, seen, config))

    return EntityExtractionResult(
        entities=entities,
        relationship_count=sum(1 for e in entities if e.relationship_hint is not None),
        processing_time_us=int((time.perf_counter() - started) * 1_000_000),
    )


# =============================================================================
# MODULE EXPORTS
# =============================================================================

__all__ = [
    # Types
    "RelationshipCategory",
    "RelationshipTag",
    "RelationshipRule",
    "Pronouns",
    "Sentiment",
    "ExtractedPerson",
    "EntityExtractionResult",
    # Extraction
    "extract_entities",
    "is_valid_name",
    "name_from_possessive",
    "find_best_name_in_context",
    "detect_pronouns",
    "detect_sentiment",
    "infer_relationship_from_word",
    "filter_by_category",
    # Lexicons
    "RELATIONSHIP_CATEGORIES",
    "RELATIONSHIP_RULES",
    "POSSESSIVE_RELATIONSHIPS",
    "RELATION_WORDS",
    "EXCLUDED_WORDS",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
]
