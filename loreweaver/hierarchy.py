#!/usr/bin/env python3
"""
Hierarchical Path Matching
==========================

Categories and origins are stored as paths of taxonomy segments joined by
" > ", for example:

    "Nature > Botanical > Flowers"
    "Europe > Western Europe > France > Brittany"

This module owns the one splitter for that format and two ways of comparing
paths:

- Scoring mode: classify_path() grades the relationship between two paths
  (exact / sibling / parent-child / cousin / unrelated) with caller-supplied
  tier scores. Used by the similarity engine.
- Filter mode: is_descendant_or_equal() and matches_any() answer "does this
  path fall under the selected node?". Used by the catalog filters.

The delimiter is the exact token " > ". Segments are never trimmed.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

PATH_DELIMITER = " > "


@dataclass(frozen=True)
class TierScores:
    """Points awarded for each hierarchical relationship."""
    exact: int
    sibling: int
    parent_child: int
    cousin: int


# =============================================================================
# Path Parsing
# =============================================================================

def split_path(path: str) -> Tuple[str, ...]:
    """Split a path into its ordered segments."""
    if not path:
        return ()
    return tuple(path.split(PATH_DELIMITER))


def join_path(segments: Iterable[str]) -> str:
    return PATH_DELIMITER.join(segments)


def ancestor_paths(path: str) -> Tuple[str, ...]:
    """
    All prefixes of a path, shallowest first, including the path itself.

    Examples:
        >>> ancestor_paths("A > B > C")
        ('A', 'A > B', 'A > B > C')
    """
    segments = split_path(path)
    return tuple(join_path(segments[:i + 1]) for i in range(len(segments)))


def leaf(path: str) -> str:
    """Last segment of a path."""
    segments = split_path(path)
    return segments[-1] if segments else ""


def common_depth(path_a: str, path_b: str) -> int:
    """Number of leading segments the two paths share."""
    depth = 0
    for seg_a, seg_b in zip(split_path(path_a), split_path(path_b)):
        if seg_a != seg_b:
            break
        depth += 1
    return depth


# =============================================================================
# Scoring Mode
# =============================================================================

EXACT = "exact"
SIBLING = "sibling"
PARENT_CHILD = "parent_child"
COUSIN = "cousin"


def relationship(path_a: str, path_b: str) -> Optional[str]:
    """
    Name the relationship between two paths.

    Rules (c = shared depth, m = depth of the shallower path):
        c == 0                          -> None (unrelated)
        identical paths                 -> "exact"
        c == m                          -> "parent_child"
        c == m - 1, same depth          -> "sibling"
        c == m - 1, different depth     -> "cousin"
        c == m - 2, same depth          -> "cousin"
        anything more distant           -> None

    Examples:
        "A > B > C" vs "A > B > C"  -> exact
        "A > B > X" vs "A > B > Y"  -> sibling
        "A > B"     vs "A > B > C"  -> parent_child
        "A > B > X" vs "A > C > Y"  -> cousin
        "A > B"     vs "X > Y"      -> None
    """
    segments_a = split_path(path_a)
    segments_b = split_path(path_b)

    shared = common_depth(path_a, path_b)
    if shared == 0:
        return None

    if path_a == path_b:
        return EXACT

    shallow = min(len(segments_a), len(segments_b))
    same_depth = len(segments_a) == len(segments_b)

    if shared == shallow:
        return PARENT_CHILD
    if shared == shallow - 1:
        return SIBLING if same_depth else COUSIN
    if shared == shallow - 2 and same_depth:
        return COUSIN
    return None


def classify_path(path_a: str, path_b: str, tiers: TierScores) -> int:
    """Tier score for the relationship between two paths (0 if unrelated)."""
    relation = relationship(path_a, path_b)
    if relation is None:
        return 0
    return getattr(tiers, relation)


def best_path_score(paths_a: Iterable[str], paths_b: Iterable[str],
                    tiers: TierScores) -> int:
    """Highest classify_path() score over every pair of paths."""
    paths_b = tuple(paths_b or ())
    best = 0
    for path_a in paths_a or ():
        for path_b in paths_b:
            best = max(best, classify_path(path_a, path_b, tiers))
    return best


# =============================================================================
# Filter Mode
# =============================================================================

def is_descendant_or_equal(path: str, selector: str) -> bool:
    """True if path is the selector itself or lies somewhere beneath it."""
    return path == selector or path.startswith(selector + PATH_DELIMITER)


def most_specific(selectors: Iterable[str]) -> Tuple[str, ...]:
    """
    Drop selectors that are ancestors of another selected path.

    Selecting "Europe" and "Europe > France" means "France", not "anywhere
    in Europe".
    """
    selectors = tuple(selectors or ())
    ancestors = set()
    for other in selectors:
        ancestors.update(ancestor_paths(other)[:-1])
    return tuple(s for s in selectors if s not in ancestors)


def matches_any(paths: Iterable[str], selectors: Iterable[str]) -> bool:
    """
    Filter-mode match of a record's paths against a selector set.

    An empty selector set means the filter is inactive and everything matches.
    """
    active = most_specific(selectors)
    if not active:
        return True
    return any(
        is_descendant_or_equal(path, selector)
        for path in paths or ()
        for selector in active
    )


__all__ = [
    "PATH_DELIMITER",
    "TierScores",
    "split_path",
    "join_path",
    "ancestor_paths",
    "leaf",
    "common_depth",
    "EXACT",
    "SIBLING",
    "PARENT_CHILD",
    "COUSIN",
    "relationship",
    "classify_path",
    "best_path_score",
    "is_descendant_or_equal",
    "most_specific",
    "matches_any",
]
