"""
Entropy Engine - Pattern Library & Matcher v1.0

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Zero-cost detection of manipulative, coercive and otherwise high-entropy
language. Rules are grouped into named clusters; each rule is a
(pattern, category, severity, weight) tuple. At first use the clusters are
flattened, in registry order, into one immutable catalog of compiled rules.

Matching is a multi-label scan: every rule runs over the whole text and
every non-overlapping occurrence is reported. Overlap between different
rules is expected ("selfish" can fire both a judgment rule and an insult
rule) and is never deduplicated.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import RuleCompileError

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Author-assigned severity tier. Carried to output, not scored."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# (pattern, category, severity, weight)
RuleTuple = Tuple[str, str, str, float]


# =============================================================================
# RULE CLUSTERS
# =============================================================================

CHARACTER_JUDGMENT = [
    (r"\b(you('re|’re| are| r))\s+(\w+\s+)*(so\s+)?(lazy|selfish|stupid|pathetic|worthless|arrogant|incompetent|useless|hypocrite|narcissist|psychopath|sociopath|abuser|monster|evil|toxic|poison|parasite|fraud|fake|liar|cheat)\b",
     "character_judgment", "high", 1.0),
    (r"\b(disgrace|embarrassment|disappointment|failure|loser|clown|fool|idiot|moron|imbecile)\b", "insult", "high", 0.9),
    (r"\b(vile|disgusting|repulsive|revolting|gross|nasty|creepy)\b", "visceral_judgment", "high", 0.9),
    (r"\b(manipulative|controlling|crazy|psycho|insane|unhinged|mental)\b", "sanity_attack", "high", 1.0),
]

ABSOLUTE_STATEMENTS = [
    (r"\byou\s+(\w+\s+)?(always|never|constantly|forever|eternally)\s+\w+", "absolute_statement", "high", 0.9),
    (r"\b(undeniably|unquestionably|indisputably|obviously|clearly)\b", "absolute_certainty", "medium", 0.7),
    (r"\b(everyone|nobody|everybody|no\s+one|all\s+of\s+you)\b", "universalizing", "medium", 0.7),
    (r"\b(totally|wholly|fundamentally|inherently|purely|100%|completely)\b", "absolutism", "medium", 0.7),
    (r"\b(impossible|inconceivable|unthinkable|absurd)\b", "dismissive_absolute", "medium", 0.7),
]

DEHUMANIZATION = [
    (r"\b(animals|vermin|rats|snakes|cockroaches|infestation|plague|disease|cancer|parasites|swarm|filth|scum|trash|garbage|waste|bacteria|virus|sickness|pests|demons|subhuman|savages|aliens|invaders|tumor|infection|rot|decay|maggots|lice|leeches)\b",
     "dehumanization", "high", 1.0),
    # Context dependent, still high entropy
    (r"\b(it|thing|creature|monster|beast|brute|animal)\b", "objectification", "medium", 0.8),
]

GASLIGHTING = [
    (r"you\s+(don't|never|cannot)\s+remember", "gaslighting", "high", 1.0),
    (r"that\s+(never|didn't|obviously\s+didn't)\s+happen", "gaslighting", "high", 1.0),
    (r"you're\s+(crazy|imagining\s+things|overreacting|paranoid|delusional|hysterical|confused|misremembering)", "gaslighting", "high", 1.0),
    (r"it's\s+all\s+(in\s+your\s+head|made\s+up|fiction|fantasy)", "gaslighting", "high", 1.0),
    (r"(can't|cannot)\s+take\s+a\s+joke", "gaslighting_minimization", "high", 0.9),
    (r"you\s+are\s+being\s+(too\s+sensitive|dramatic|emotional|irrational)", "gaslighting_invalidation", "high", 0.9),
    (r"your\s+(truth|reality|perspective)\s+is\s+(wrong|flawed|twisted)", "reality_denial", "high", 1.0),
]

DOUBLE_BIND = [
    (r"if\s+you\s+(really|actually|truly)\s+(cared|loved|wanted|tried)", "double_bind", "high", 0.9),
    (r"damned\s+if\s+you\s+do", "double_bind", "medium", 0.8),
    (r"after\s+all\s+I('ve| have)\s+(done|sacrificed|given)", "emotional_blackmail", "medium", 0.8),
    (r"(prove|show)\s+me\s+you\s+(care|love)", "testing_trap", "high", 0.8),
    (r"you\s+would\s+know\s+if\s+you", "mind_reading_expectation", "medium", 0.7),
    (r"I\s+guess\s+I'm\s+just\s+a\s+(terrible|bad)\s+(person|partner|friend)", "victim_guilt_trip", "high", 0.8),
]

MORAL_DISENGAGEMENT = [
    (r"everyone\s+(does|thinks|says|agrees|knows)", "moral_disengagement", "medium", 0.7),
    (r"just\s+(business|how\s+it\s+is|following\s+orders|doing\s+my\s+job)", "moral_disengagement", "medium", 0.7),
    (r"you're\s+too\s+(sensitive|soft|weak)", "minimization", "high", 0.9),
    (r"(had|have)\s+no\s+choice", "abdication_of_responsibility", "medium", 0.7),
    (r"forced\s+(my|our)\s+hand", "abdication_of_responsibility", "medium", 0.7),
    (r"(deserved|asked\s+for)\s+it", "victim_blaming", "high", 1.0),
    (r"(greater\s+good|necessary\s+evil|collateral\s+damage)", "justification", "high", 0.8),
]

RETALIATION = [
    (r"\b(destroyed|ruined|payback|revenge|obliterated|punish|crush|annihilate|expose|humiliate|bury)\b", "retaliation", "high", 1.0),
    (r"(threw|throw)\s+it\s+in\s+my\s+face", "weaponized_vulnerability", "high", 0.9),
    (r"taught\s+(them|him|her)\s+a\s+lesson", "retaliation", "high", 0.9),
    (r"(make|made)\s+(them|him|her)\s+pay", "retaliation", "high", 1.0),
    (r"scorched\s+earth", "extreme_aggression", "high", 1.0),
    (r"burn\s+it\s+(all\s+)?down", "destructive_intent", "high", 1.0),
    (r"take\s+(them|him|her|you)\s+down", "targeted_aggression", "high", 0.9),
]

FEIGNED_IGNORANCE = [
    (r"(played|playing)\s+(dumb|stupid|innocent|naive)", "feigned_ignorance", "medium", 0.8),
    (r"pretended\s+not\s+to\s+(know|understand|hear|see)", "feigned_ignorance", "medium", 0.8),
    (r"acted\s+(confused|surprised|shocked)", "feigned_ignorance", "medium", 0.8),
    (r"(innocent|honest)\s+mistake", "minimization_tactic", "medium", 0.6),
    (r"never\s+meant\s+to", "intent_denial", "medium", 0.6),
    (r"misunderstood\s+me", "communication_blame", "medium", 0.6),
    (r"didn't\s+realize", "strategic_incompetence", "medium", 0.6),
]

PROPAGANDA = [
    (r"\b(war\s+on|battle|enemy|troops|combat|front\s+lines|battleground|assault|siege|campaign|crusade|army|soldiers|weapons|threat|danger|existential)\b", "militarization", "medium", 0.8),
    (r"(with\s+us\s+or\s+against|either\s+you|good\s+vs\s+evil|pick\s+a\s+side|no\s+middle\s+ground)", "false_polarization", "high", 0.9),
    (r"(just\s+be\s+positive|look\s+on\s+the\s+bright\s+side|good\s+vibes\s+only)", "toxic_positivity", "medium", 0.7),
    (r"\b(real\s+americans|true\s+patriots|traitors|collaborators|sympathizers|fence\s+sitters)\b", "identity_hijacking", "high", 0.9),
    (r"neutrality\s+is\s+(betrayal|complicity)", "forced_allegiance", "high", 0.8),
]

REASSURANCE_SEEKING = [
    (r"(tell|told)\s+me\s+it('s|\s+is)\s+okay", "reassurance_seeking", "low", 0.5),
    (r"are\s+you\s+(sure|certain|mad|upset)", "reassurance_seeking", "low", 0.4),
    (r"promise\s+me", "reassurance_seeking", "low", 0.5),
    (r"(do|does)\s+(you|he|she|everyone)\s+(hate|dislike)\s+me", "reassurance_seeking", "medium", 0.6),
    (r"am\s+I\s+(annoying|ugly|stupid|bad|wrong)", "reassurance_seeking", "medium", 0.6),
    (r"validate\s+(me|my\s+feelings)", "reassurance_seeking", "low", 0.4),
]

SELF_VICTIMIZATION = [
    (r"(always|constantly)\s+happens\s+to\s+me", "self_victimization", "medium", 0.7),
    (r"why\s+(does\s+this|me)", "self_victimization", "low", 0.6),
    (r"everyone\s+hates\s+me", "self_victimization", "high", 0.8),
    (r"(cursed|jinxed|unlucky|fated)", "external_locus_of_control", "medium", 0.6),
    (r"world\s+is\s+against\s+me", "self_victimization", "high", 0.8),
    (r"damaged\s+goods", "self_devaluation", "high", 0.8),
    (r"no\s+hope\s+for\s+me", "hopelessness", "high", 0.9),
]

CATASTROPHIZING = [
    (r"\b(disaster|catastrophe|ruined|hopeless|pointless|doomed|nightmare|unbearable)\b", "catastrophizing", "medium", 0.7),
    (r"end\s+of\s+the\s+world", "catastrophizing", "high", 0.8),
    (r"never\s+going\s+to\s+work", "catastrophizing", "medium", 0.7),
    (r"all\s+is\s+lost", "catastrophizing", "high", 0.9),
    (r"game\s+over", "termination_thinking", "medium", 0.6),
    (r"no\s+future", "future_loss", "high", 0.9),
]

DISPLACEMENT = [
    (r"it('s|\s+is)\s+(all\s+)?your\s+fault", "displacement", "high", 0.9),
    (r"you\s+(made|forced|provoked)\s+me", "displacement", "high", 0.9),
    (r"because\s+of\s+you", "displacement", "medium", 0.7),
    (r"look\s+what\s+you\s+(did|caused)", "blame_shifting", "high", 0.8),
    (r"you\s+started\s+it", "childish_blame", "medium", 0.6),
    (r"pushed\s+my\s+buttons", "responsibility_avoidance", "medium", 0.7),
]

WITHDRAWAL = [
    (r"leave\s+me\s+alone", "withdrawal", "medium", 0.6),
    (r"don't\s+want\s+to\s+(talk|discuss|hear\s+it)", "withdrawal", "medium", 0.6),
    (r"shut\s+(up|it)", "withdrawal", "high", 0.8),
    (r"(going|gone)\s+dark", "withdrawal", "low", 0.5),
    (r"blocking\s+you", "digital_withdrawal", "high", 0.8),
    (r"(ghosting|ghosted)", "withdrawal", "medium", 0.7),
    (r"silent\s+treatment", "punitive_silence", "high", 0.8),
    (r"walling\s+(off|up)", "emotional_barrier", "medium", 0.6),
]

SUBSTANCE_ESCAPISM = [
    (r"need\s+a\s+(drink|hit|smoke|pill|fix)", "substance_use", "medium", 0.7),
    (r"get\s+(high|drunk|wasted|smashed|hammered|stoned)", "substance_use", "medium", 0.7),
    (r"\b(numb|forget|escape|checked\s+out)\b", "escapism", "low", 0.5),
]

CLINICAL_DEFENSE = [
    (r"making\s+me\s+feel\s+(what|how)\s+you\s+feel", "projective_identification", "high", 0.9),
    (r"dumping\s+your\s+(feelings|emotions)\s+on\s+me", "projective_identification", "medium", 0.7),
    (r"(hot\s+and\s+cold|mixed\s+signals|breadcrumbs|push\s+pull)", "intermittent_reinforcement", "high", 0.9),
    (r"(best\s+person|worst\s+enemy)\s+ever", "splitting", "high", 0.9),
    (r"saint\s+or\s+(devil|sinner)", "splitting", "medium", 0.8),
    (r"(perfect|flawless)\s+to\s+(garbage|worthless)", "splitting", "high", 1.0),
]

COERCIVE_CONTROL = [
    (r"(forget|forgotten|lost)\s+who\s+I\s+am", "perspecticide", "high", 1.0),
    (r"my\s+ideas\s+aren't\s+mine", "perspecticide", "high", 1.0),
    (r"brainwashed", "perspecticide", "high", 0.9),
    (r"(monitoring|tracking)\s+my\s+(location|phone|messages)", "coercive_control", "high", 1.0),
    (r"asking\s+permission\s+to", "coercive_control", "high", 0.9),
    (r"(allowance|access)\s+to\s+money", "financial_abuse", "high", 1.0),
    (r"(isolate|cut\s+off)\s+from\s+(friends|family)", "isolation", "high", 1.0),
    (r"he\s+said\s+that\s+you", "triangulation", "medium", 0.7),
    (r"everyone\s+agrees\s+with\s+me", "triangulation", "medium", 0.7),
    (r"pitting\s+us\s+against", "triangulation", "high", 0.9),
]

BAD_FAITH = [
    # Sealioning
    (r"(just|merely)\s+asking\s+(questions|a\s+question)", "sealioning", "medium", 0.7),
    (r"debate\s+me", "bad_faith_debate", "high", 0.8),
    (r"define\s+(your\s+terms|racism|sexism|hate)", "sealioning_definitions", "medium", 0.7),
    (r"(citation|source)\s+needed", "bad_faith_pedantry", "low", 0.5),

    # Weaponized intellectualization
    (r"facts\s+(don't|do\s+not)\s+care\s+about\s+your\s+feelings", "weaponized_intellectualization", "high", 0.9),
    (r"(technically|logically)\s+correct", "bad_faith_pedantry", "low", 0.5),
    (r"you('re|r)\s+being\s+(irrational|emotional|illogical)", "weaponized_intellectualization", "medium", 0.8),

    # Concern trolling
    (r"(just|only)\s+worried\s+about\s+you", "concern_trolling", "medium", 0.7),
    (r"for\s+your\s+own\s+good", "concern_trolling", "medium", 0.7),
    (r"hate\s+to\s+see\s+you\s+like\s+this", "concern_trolling", "low", 0.6),

    # Moral grandstanding & dog whistling
    (r"I\s+would\s+never", "moral_grandstanding", "medium", 0.6),
    (r"(right|wrong)\s+side\s+of\s+history", "moral_grandstanding", "medium", 0.7),
    (r"(you\s+people|globalists|thugs|urban\s+youth)", "dog_whistling", "medium", 0.8),

    # Negging
    (r"(actually|pretty|smart)\s+for\s+a", "negging", "high", 0.9),
    (r"no\s+offense\s+but", "negging", "medium", 0.7),
    (r"don't\s+take\s+this\s+the\s+wrong\s+way", "negging", "medium", 0.6),

    # Whataboutism & tone policing
    (r"what\s+about", "whataboutism", "medium", 0.7),
    (r"double\s+standard", "whataboutism", "medium", 0.6),
    (r"calm\s+down", "tone_policing", "high", 0.8),
]

# Registry order is catalog order, which is match order.
PATTERN_CLUSTERS: Dict[str, List[RuleTuple]] = {
    "character_judgment": CHARACTER_JUDGMENT,
    "absolute_statements": ABSOLUTE_STATEMENTS,
    "dehumanization": DEHUMANIZATION,
    "gaslighting": GASLIGHTING,
    "double_bind": DOUBLE_BIND,
    "moral_disengagement": MORAL_DISENGAGEMENT,
    "retaliation": RETALIATION,
    "feigned_ignorance": FEIGNED_IGNORANCE,
    "propaganda": PROPAGANDA,
    "reassurance_seeking": REASSURANCE_SEEKING,
    "self_victimization": SELF_VICTIMIZATION,
    "catastrophizing": CATASTROPHIZING,
    "displacement": DISPLACEMENT,
    "withdrawal": WITHDRAWAL,
    "substance_escapism": SUBSTANCE_ESCAPISM,
    "clinical_defense": CLINICAL_DEFENSE,
    "coercive_control": COERCIVE_CONTROL,
    "bad_faith": BAD_FAITH,
}


# =============================================================================
# RULE / MATCH TYPES
# =============================================================================

@dataclass(frozen=True)
class PatternRule:
    """A compiled catalog entry."""
    regex: re.Pattern
    category: str
    severity: Severity
    weight: float
    cluster: str = ""


@dataclass
class PatternMatch:
    """One regex hit within a single analysis call."""
    category: str
    matched_text: str
    start: int
    severity: Severity
    weight: float

    def to_dict(self) -> Dict:
        return {
            "patternType": self.category,
            "matchText": self.matched_text,
            "position": self.start,
            "severity": self.severity.value,
            "weight": self.weight,
        }


# =============================================================================
# CATALOG CONSTRUCTION
# =============================================================================

def compile_rule(rule: RuleTuple, cluster: str = "") -> PatternRule:
    """
    Compile one (pattern, category, severity, weight) tuple.

    Raises:
        RuleCompileError: if the pattern or severity is malformed
    """
    pattern, category, severity, weight = rule
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise RuleCompileError(pattern, category, str(e)) from e

    try:
        tier = Severity(severity)
    except ValueError as e:
        raise RuleCompileError(pattern, category, f"unknown severity {severity!r}") from e

    return PatternRule(
        regex=regex,
        category=category,
        severity=tier,
        weight=float(weight),
        cluster=cluster,
    )


def build_catalog(clusters: Dict[str, List[RuleTuple]]) -> Tuple[PatternRule, ...]:
    """
    Flatten a cluster registry into an ordered tuple of compiled rules.

    Malformed rules are logged and dropped; the remaining rules keep
    their relative order.
    """
    catalog = []
    for cluster, rules in clusters.items():
        for rule in rules:
            try:
                catalog.append(compile_rule(rule, cluster))
            except RuleCompileError as e:
                logger.warning(
                    f"Dropping rule from cluster '{cluster}': {e}",
                    extra={"category": e.category},
                )
    return tuple(catalog)


# Process-wide catalog, built on first use
_catalog: Optional[Tuple[PatternRule, ...]] = None


def get_catalog() -> Tuple[PatternRule, ...]:
    """Get the global rule catalog, compiling it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = build_catalog(PATTERN_CLUSTERS)
        logger.debug(f"Compiled {len(_catalog)} pattern rules from {len(PATTERN_CLUSTERS)} clusters")
    return _catalog


def catalog_clusters() -> List[str]:
    """Cluster names in catalog order."""
    return list(PATTERN_CLUSTERS)


# =============================================================================
# MATCHING
# =============================================================================

def match_patterns(text: str, catalog: Optional[Tuple[PatternRule, ...]] = None) -> List[PatternMatch]:
    """
    Scan text against every rule in the catalog.

    Matches are ordered by rule (catalog order), then by position.

    Args:
        text: Text to scan
        catalog: Rules to use; defaults to the global catalog

    Returns:
        List of PatternMatch, empty for empty text
    """
    if not text:
        return []

    rules = catalog if catalog is not None else get_catalog()
    matches = []

    for rule in rules:
        for m in rule.regex.finditer(text):
            matches.append(PatternMatch(
                category=rule.category,
                matched_text=m.group(0),
                start=m.start(),
                severity=rule.severity,
                weight=rule.weight,
            ))

    return matches


# =============================================================================
# MODULE EXPORTS
# =============================================================================

__all__ = [
    "Severity",
    "PatternRule",
    "PatternMatch",
    "PATTERN_CLUSTERS",
    "compile_rule",
    "build_catalog",
    "get_catalog",
    "catalog_clusters",
    "match_patterns",
]
