#!/usr/bin/env python3
"""
Free-text field comparison: etymology descriptions, literal meanings and
feeling tags.
"""

import re
import unicodedata
from typing import Iterable, List, Optional

from loreweaver.settings import require_setting

_ETYMOLOGY_STOP_WORDS = frozenset(require_setting("similarity.etymology.stop_words"))
_ETYMOLOGY_MIN_WORD = int(require_setting("similarity.etymology.min_word_length"))
_ETYMOLOGY_SCORES = [int(s) for s in require_setting("similarity.etymology.shared_word_scores")]
_MEANING_EXACT = int(require_setting("similarity.literal_meaning.exact"))
_MEANING_PARTIAL = int(require_setting("similarity.literal_meaning.partial"))

_WHITESPACE = re.compile(r'\s+')
_DIGITS = re.compile(r'(\d+)')


def etymology_words(text: str) -> List[str]:
    """Significant words of an etymology: long enough and not a stop word."""
    return [
        w for w in _WHITESPACE.split(text.lower())
        if len(w) >= _ETYMOLOGY_MIN_WORD and w not in _ETYMOLOGY_STOP_WORDS
    ]


def etymology_score(etymology1: Optional[str], etymology2: Optional[str]) -> int:
    """
    Score word overlap between two etymology descriptions.

    Returns:
        75 for 3+ shared words, 50 for 2, 25 for 1, otherwise 0
    """
    if not etymology1 or not etymology2:
        return 0

    words1 = etymology_words(etymology1)
    words2 = set(etymology_words(etymology2))
    if not words1 or not words2:
        return 0

    shared = sum(1 for w in words1 if w in words2)
    return _ETYMOLOGY_SCORES[min(shared, len(_ETYMOLOGY_SCORES) - 1)]


def literal_meaning_score(meaning1: Optional[str], meaning2: Optional[str]) -> int:
    """60 for identical literal meanings, 40 if one contains the other."""
    if not meaning1 or not meaning2:
        return 0

    m1 = meaning1.lower().strip()
    m2 = meaning2.lower().strip()
    if not m1 or not m2:
        return 0

    if m1 == m2:
        return _MEANING_EXACT
    if m1 in m2 or m2 in m1:
        return _MEANING_PARTIAL
    return 0


def natural_sort_key(text: Optional[str]) -> tuple:
    """
    Sort key that ignores case and accents and orders digit runs numerically
    ("Name2" before "Name10", "Émile" next to "Emile").
    """
    decomposed = unicodedata.normalize('NFKD', text or '')
    folded = ''.join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    # re.split with a capture group alternates text, digits, text, ...
    return tuple(
        int(part) if i % 2 else part
        for i, part in enumerate(_DIGITS.split(folded))
    )


def feelings_overlap(feelings1: Iterable[str], feelings2: Iterable[str]) -> bool:
    # "calm" matches "calm", "calming" and "very calm"
    folded2 = [f.lower() for f in feelings2 or ()]
    for feeling in feelings1 or ():
        f1 = feeling.lower()
        if any(f1 == f2 or f1 in f2 or f2 in f1 for f2 in folded2):
            return True
    return False


__all__ = [
    "etymology_words",
    "etymology_score",
    "literal_meaning_score",
    "natural_sort_key",
    "feelings_overlap",
]
