#!/usr/bin/env python3
"""
Phonetic Comparison for Catalog Names
======================================

Compares names by how they sound and how they are spelled.

Pronunciations use a simplified notation with hyphens between syllables:
- "BROWN" = 1 syllable
- "AY-bruhmz" = 2 syllables (Abrams)
- "ih-LIZ-uh-beth" = 4 syllables (Elizabeth)

Algorithms:
- Levenshtein: character-level edit distance (shared by spelling and
  pronunciation scoring)
- Syllable counting and prefix/suffix sound matching (phonetic filters)
- Rhyme detection on the final syllable
- Pronunciation and spelling similarity signals for the similarity engine
"""

import re
from functools import lru_cache
from typing import Iterable, List, Optional

from loreweaver.settings import get_setting

_SIMILARITY_CFG = get_setting("similarity", {}) or {}
if not _SIMILARITY_CFG:
    raise ValueError("Missing similarity config in app.yaml")

_CACHE_MAXSIZE = _SIMILARITY_CFG.get("cache_maxsize")
if _CACHE_MAXSIZE is None:
    raise ValueError("similarity.cache_maxsize must be set in app.yaml")


def _require_cfg(section: str, key: str):
    cfg = _SIMILARITY_CFG.get(section, {}) or {}
    if key not in cfg:
        raise ValueError(f"similarity.{section}.{key} must be set in app.yaml")
    return cfg[key]


SYLLABLE_DELIMITER = "-"
_VOWEL = re.compile(r'[aeiouy]', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')
_NOTATION_MARKS = re.compile(r'[/\[\]]')


# =============================================================================
# Levenshtein Distance
# =============================================================================

@lru_cache(maxsize=int(_CACHE_MAXSIZE))
def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Compute Levenshtein edit distance between two strings.

    Counts minimum number of single-character edits (insertions,
    deletions, substitutions) to transform s1 into s2. Case-sensitive;
    callers fold case first when they need to.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = range(len(s2) + 1)

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


# =============================================================================
# Syllables and Sound Matching
# =============================================================================

def syllable_count(pronunciation: Optional[str]) -> int:
    """
    Count syllables in a pronunciation string (hyphens + 1).

    Examples:
        >>> syllable_count("ih-LIZ-uh-beth")
        4
        >>> syllable_count("BROWN")
        1
        >>> syllable_count(None)
        0
    """
    if not pronunciation or not pronunciation.strip():
        return 0
    return pronunciation.count(SYLLABLE_DELIMITER) + 1


def normalize_pronunciation(text: str) -> str:
    """Lower-case and remove all whitespace ("AY - bruhmz" -> "ay-bruhmz")."""
    return _WHITESPACE.sub('', text.lower())


def starts_with_sound(pronunciation: Optional[str], sound: Optional[str]) -> bool:
    """True if the pronunciation begins with the given sound."""
    if not pronunciation or not sound:
        return False
    return normalize_pronunciation(pronunciation).startswith(normalize_pronunciation(sound))


def ends_with_sound(pronunciation: Optional[str], sound: Optional[str]) -> bool:
    """True if the pronunciation ends with the given sound."""
    if not pronunciation or not sound:
        return False
    return normalize_pronunciation(pronunciation).endswith(normalize_pronunciation(sound))


def _split_onset(syllable: str):
    """Split a syllable into (onset, rhyme) at its first vowel."""
    match = _VOWEL.search(syllable)
    if match is None:
        return '', syllable
    return syllable[:match.start()], syllable[match.start():]


def rhymes(pronunciation1: Optional[str], pronunciation2: Optional[str]) -> bool:
    """
    Check if two pronunciations rhyme.

    Two names rhyme when their final syllables share the vowel and everything
    after it, but start with different consonants. Identical pronunciations
    do not rhyme.

    Examples:
        KATE / NATE            -> True  ("ate" with onsets k / n)
        ih-LIZ-uh-beth / SETH  -> True  ("eth" with onsets b / s)
        KATE / KATE            -> False (same word)
        ROZE / LIL-ee          -> False ("oze" vs "ee")
    """
    if not pronunciation1 or not pronunciation2:
        return False

    normalized1 = normalize_pronunciation(pronunciation1)
    normalized2 = normalize_pronunciation(pronunciation2)
    if normalized1 == normalized2:
        return False

    last1 = normalized1.split(SYLLABLE_DELIMITER)[-1]
    last2 = normalized2.split(SYLLABLE_DELIMITER)[-1]
    if len(last1) < 2 or len(last2) < 2:
        return False

    onset1, rhyme1 = _split_onset(last1)
    onset2, rhyme2 = _split_onset(last2)

    return rhyme1 == rhyme2 and onset1 != onset2 and len(rhyme1) >= 2


def unique_syllable_counts(names: Iterable) -> List[int]:
    """
    Sorted distinct syllable counts across names and their related forms.

    Names without a pronunciation are skipped. Used to build the syllable
    filter's option list from what is actually in the catalog.
    """
    counts = set()
    for name in names:
        count = syllable_count(name.pronunciation)
        if count > 0:
            counts.add(count)
        for related in name.related_names or ():
            related_count = syllable_count(related.pronunciation)
            if related_count > 0:
                counts.add(related_count)
    return sorted(counts)


# =============================================================================
# Similarity Signals
# =============================================================================

def _clean_pronunciation(text: str) -> str:
    return _NOTATION_MARKS.sub('', text.lower()).strip()


def pronunciation_score(pronunciation1: Optional[str],
                        pronunciation2: Optional[str]) -> int:
    """
    Score how close two pronunciations are.

    Returns:
        80 for identical pronunciations (ignoring case and / [ ] marks)
        60 if at most 20% of characters differ
        40 if at most 40% of characters differ
        0 otherwise, or if either side is missing
    """
    if not pronunciation1 or not pronunciation2:
        return 0

    p1 = _clean_pronunciation(pronunciation1)
    p2 = _clean_pronunciation(pronunciation2)

    if p1 == p2:
        return int(_require_cfg("pronunciation", "exact"))

    # unequal strings, so max_len > 0
    max_len = max(len(p1), len(p2))
    distance = levenshtein_distance(p1, p2)
    if distance <= max_len * float(_require_cfg("pronunciation", "close_ratio")):
        return int(_require_cfg("pronunciation", "close"))
    if distance <= max_len * float(_require_cfg("pronunciation", "loose_ratio")):
        return int(_require_cfg("pronunciation", "loose"))
    return 0


def spelling_similar(name1: Optional[str], name2: Optional[str]) -> bool:
    """
    True if two spellings are close but not identical.

    Lengths may differ by at most 3 characters and the edit distance must be
    between 1 and 30% of the longer spelling (Catherine / Katherine).
    """
    if not name1 or not name2:
        return False

    n1 = name1.lower()
    n2 = name2.lower()

    if abs(len(n1) - len(n2)) > int(_require_cfg("spelling", "max_length_gap")):
        return False

    distance = levenshtein_distance(n1, n2)
    max_len = max(len(n1), len(n2))
    return 0 < distance <= max_len * float(_require_cfg("spelling", "max_distance_ratio"))


__all__ = [
    "SYLLABLE_DELIMITER",
    "levenshtein_distance",
    "syllable_count",
    "normalize_pronunciation",
    "starts_with_sound",
    "ends_with_sound",
    "rhymes",
    "unique_syllable_counts",
    "pronunciation_score",
    "spelling_similar",
]
