#!/usr/bin/env python3
"""
Etymological Root Comparison
============================

Root descriptors are free text written by the catalog owner. Common shapes:

    "philos (love)"                    identifier + explanation
    "Greek: philos"                    identifier only
    "sieg (victory) + fried (peace)"   compound, joined with +
    "el / ella"                        alternatives, joined with /

Each part is parsed into a ParsedRootElement and elements are compared
pairwise. Two roots sharing an identifier but explaining it differently are
homographs and score lower than a confirmed shared meaning.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from loreweaver.settings import get_setting

_ROOTS_CFG = get_setting("similarity.roots", {}) or {}
if not _ROOTS_CFG:
    raise ValueError("Missing similarity.roots config in app.yaml")


def _require_roots_cfg(key: str):
    if key not in _ROOTS_CFG:
        raise ValueError(f"similarity.roots.{key} must be set in app.yaml")
    return _ROOTS_CFG[key]


_ELEMENT_PATTERN = re.compile(r'^([^(]+?)(?:\s*\((.+)\))?$')
_COMPOUND_SEPARATOR = re.compile(r'\s*[+/]\s*')
_QUOTES = re.compile(r'[\'"]')


@dataclass(frozen=True)
class ParsedRootElement:
    """One component of a root descriptor."""
    identifier: str                     # lower-cased, trimmed
    explanation: Optional[str] = None   # lower-cased, trimmed
    full_text: str = ""                 # original text for display


@dataclass(frozen=True)
class SharedRoot:
    """Best root match between two root lists."""
    score: int
    shared_root: str


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_root_element(element: str) -> ParsedRootElement:
    """
    Parse "identifier (explanation)" into its parts.

    Text that does not fit the pattern becomes an identifier with no
    explanation.

    Examples:
        >>> parse_root_element("Philos (Love)")
        ParsedRootElement(identifier='philos', explanation='love', full_text='Philos (Love)')
    """
    text = element.strip()
    match = _ELEMENT_PATTERN.match(text)
    if match:
        explanation = match.group(2)
        return ParsedRootElement(
            identifier=match.group(1).strip().lower(),
            explanation=explanation.strip().lower() if explanation is not None else None,
            full_text=text,
        )
    return ParsedRootElement(identifier=text.lower(), full_text=text)


def extract_root_elements(root: str) -> List[ParsedRootElement]:
    """Split a compound root on + or / and parse each part."""
    return [parse_root_element(part) for part in _COMPOUND_SEPARATOR.split(root)]


def compare_root_elements(elem1: ParsedRootElement, elem2: ParsedRootElement) -> int:
    """
    Score two parsed elements.

    Returns:
        0 if the identifiers differ
        80 if both explanations match (quotes ignored)
        70 if one explanation contains the other
        50 if the explanations differ (homograph)
        60 if either side has no explanation
    """
    if elem1.identifier != elem2.identifier:
        return 0

    if elem1.explanation and elem2.explanation:
        exp1 = _QUOTES.sub('', elem1.explanation).strip()
        exp2 = _QUOTES.sub('', elem2.explanation).strip()
        if exp1 == exp2:
            return int(_require_roots_cfg("same_explanation"))
        if exp1 in exp2 or exp2 in exp1:
            return int(_require_roots_cfg("overlapping_explanation"))
        return int(_require_roots_cfg("homograph"))

    return int(_require_roots_cfg("identifier_only"))


def _score_compound(elements1: Sequence[ParsedRootElement],
                    elements2: Sequence[ParsedRootElement]):
    """Combine element matches of two compound roots into one score."""
    matches = []
    matched_identifiers = []
    for elem1 in elements1:
        for elem2 in elements2:
            element_score = compare_root_elements(elem1, elem2)
            if element_score > 0:
                matches.append(element_score)
                matched_identifiers.append(elem1.identifier)

    if not matches:
        return 0, None

    ratio = len(matches) / max(len(elements1), len(elements2))
    mean = sum(matches) / len(matches)

    if ratio >= float(_require_roots_cfg("strong_ratio")):
        score = _round_half_up(mean)
    elif ratio >= float(_require_roots_cfg("partial_ratio")):
        score = _round_half_up(mean * float(_require_roots_cfg("partial_factor")))
    else:
        weak = _round_half_up(max(matches) * float(_require_roots_cfg("weak_factor")))
        score = min(int(_require_roots_cfg("weak_ceiling")),
                    max(int(_require_roots_cfg("weak_floor")), weak))

    return score, matched_identifiers[0]


def check_shared_roots(roots1: Sequence[str], roots2: Sequence[str]) -> Optional[SharedRoot]:
    """
    Find the strongest root shared by two root lists.

    Identical root strings (ignoring case) score 80. Otherwise compound roots
    are broken into elements and scored by how many elements match:
    at least 80% matched gives the mean element score, 50-80% gives 75% of
    the mean, and anything less gives 60% of the best element clamped to
    30-50.

    Returns:
        SharedRoot with the best score, or None if nothing matched
    """
    best_score = 0
    best_root = ''

    for root1 in roots1 or ():
        for root2 in roots2 or ():
            if root1.lower().strip() == root2.lower().strip():
                exact = int(_require_roots_cfg("exact"))
                if exact > best_score:
                    best_score = exact
                    best_root = root1.split('(')[0].strip().lower()
                continue

            elements1 = extract_root_elements(root1)
            elements2 = extract_root_elements(root2)
            score, identifier = _score_compound(elements1, elements2)
            if score > best_score:
                best_score = score
                best_root = identifier

    if best_score <= 0:
        return None
    return SharedRoot(score=best_score, shared_root=best_root)


__all__ = [
    "ParsedRootElement",
    "SharedRoot",
    "parse_root_element",
    "extract_root_elements",
    "compare_root_elements",
    "check_shared_roots",
]
