"""
Entropy Engine - Keyword Scan

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

A narrower companion to the pattern catalog: three fixed word sets
(address and blame words, harsh adjectives, labels). Returns the distinct
hits lower-cased and sorted.

The sets match case-sensitively as written, so a sentence-initial "You"
is not a hit while "you" is.
"""

import re
import logging
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


KEYWORD_PATTERNS = [
    r"\b(you|your|always|never|constantly|selfish|lazy|stupid|idiot|hate|blame|fault)\b",
    r"\b(terrible|awful|horrible|worthless|useless|pathetic|incompetent)\b",
    r"\b(manipulative|narcissist|abuser|psycho|sociopath|liar|loser)\b",
]


def compile_keyword_patterns(patterns: List[str]) -> Tuple[re.Pattern, ...]:
    """Compile keyword sets, skipping any that fail."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning(f"Dropping keyword pattern {pattern!r}: {e}")
    return tuple(compiled)


_keyword_regexes: Optional[Tuple[re.Pattern, ...]] = None


def get_keyword_regexes() -> Tuple[re.Pattern, ...]:
    global _keyword_regexes
    if _keyword_regexes is None:
        _keyword_regexes = compile_keyword_patterns(KEYWORD_PATTERNS)
    return _keyword_regexes


def find_keywords(text: str) -> List[str]:
    """Distinct keyword hits, lower-cased, sorted ascending."""
    found = set()
    for regex in get_keyword_regexes():
        for m in regex.finditer(text):
            found.add(m.group(0).lower())
    return sorted(found)


__all__ = [
    "KEYWORD_PATTERNS",
    "compile_keyword_patterns",
    "get_keyword_regexes",
    "find_keywords",
]
