#!/usr/bin/env python3
"""
Name Similarity Detection
=========================
Finds catalog names that are related to a target name but not declared as
related.

Each pair of names is compared on eight criteria. Every criterion that fires
adds points and a human-readable reason:

    Criterion          Points     Reason
    roots              30-80      "shared root (<root>)"
    pronunciation      40-80      "similar pronunciation"
    etymology          25-75      "shared etymology"
    category           10-70      "similar category"
    literal meaning    40-60      "similar literal meaning"
    spelling           50         "similar spelling"
    origin             8-45       "related origin"
    feelings           8          "similar feeling"

Only candidates reaching the threshold (60 by default) are reported, so a
shared feeling or a loosely related origin alone never makes two names
"similar". Names declared in relatedNames (diminutives, other-language forms,
...) are shown elsewhere and are never reported here.

Usage:
    finder = NameSimilarityFinder()
    for result in finder.find(target, catalog):
        print(result.candidate.name, result.score, result.reason)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from loreweaver.config import get_tier_scores
from loreweaver.hierarchy import best_path_score
from loreweaver.models import Name
from loreweaver.phonetics import pronunciation_score, spelling_similar
from loreweaver.roots import check_shared_roots
from loreweaver.settings import get_setting, require_setting
from loreweaver.text_fields import (
    etymology_score,
    feelings_overlap,
    literal_meaning_score,
    natural_sort_key,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = int(require_setting("similarity.default_threshold"))
REASON_SEPARATOR = get_setting("similarity.reason_separator", ", ")
SPELLING_POINTS = int(require_setting("similarity.weights.spelling"))
FEELINGS_POINTS = int(require_setting("similarity.weights.feelings"))

CATEGORY_TIERS = get_tier_scores("category")
ORIGIN_TIERS = get_tier_scores("origin")

REASON_SHARED_ROOT = "shared root ({})"
REASON_PRONUNCIATION = "similar pronunciation"
REASON_ETYMOLOGY = "shared etymology"
REASON_CATEGORY = "similar category"
REASON_LITERAL_MEANING = "similar literal meaning"
REASON_SPELLING = "similar spelling"
REASON_ORIGIN = "related origin"
REASON_FEELING = "similar feeling"


# =============================================================================
# Result Types
# =============================================================================

@dataclass(frozen=True)
class Signal:
    """Points and reason contributed by one criterion"""
    criterion: str
    score: int
    reason: str


@dataclass(frozen=True)
class SimilarityResult:
    """A catalog name found to be similar to the target"""
    candidate: Name
    reasons: Tuple[str, ...]
    score: int

    @property
    def reason(self) -> str:
        """Reasons joined for display ("shared root (philos), related origin")."""
        return REASON_SEPARATOR.join(self.reasons)

    def to_dict(self) -> dict:
        return {
            'id': self.candidate.id,
            'name': self.candidate.name,
            'score': self.score,
            'reasons': list(self.reasons),
            'reason': self.reason,
        }


# =============================================================================
# Criteria
# =============================================================================

def _signal(criterion: str, score: int, reason: str) -> Optional[Signal]:
    return Signal(criterion, score, reason) if score > 0 else None


def roots_signal(target: Name, candidate: Name) -> Optional[Signal]:
    if not target.roots or not candidate.roots:
        return None
    shared = check_shared_roots(target.roots, candidate.roots)
    if shared is None:
        return None
    return _signal("roots", shared.score, REASON_SHARED_ROOT.format(shared.shared_root))


def pronunciation_signal(target: Name, candidate: Name) -> Optional[Signal]:
    score = pronunciation_score(target.pronunciation, candidate.pronunciation)
    return _signal("pronunciation", score, REASON_PRONUNCIATION)


def etymology_signal(target: Name, candidate: Name) -> Optional[Signal]:
    score = etymology_score(target.etymology, candidate.etymology)
    return _signal("etymology", score, REASON_ETYMOLOGY)


def category_signal(target: Name, candidate: Name) -> Optional[Signal]:
    score = best_path_score(target.meanings, candidate.meanings, CATEGORY_TIERS)
    return _signal("category", score, REASON_CATEGORY)


def literal_meaning_signal(target: Name, candidate: Name) -> Optional[Signal]:
    score = literal_meaning_score(target.meaning, candidate.meaning)
    return _signal("literal_meaning", score, REASON_LITERAL_MEANING)


def spelling_signal(target: Name, candidate: Name) -> Optional[Signal]:
    if not spelling_similar(target.name, candidate.name):
        return None
    return _signal("spelling", SPELLING_POINTS, REASON_SPELLING)


def origin_signal(target: Name, candidate: Name) -> Optional[Signal]:
    score = best_path_score(target.origin, candidate.origin, ORIGIN_TIERS)
    return _signal("origin", score, REASON_ORIGIN)


def feelings_signal(target: Name, candidate: Name) -> Optional[Signal]:
    if not feelings_overlap(target.feelings, candidate.feelings):
        return None
    return _signal("feelings", FEELINGS_POINTS, REASON_FEELING)


Criterion = Callable[[Name, Name], Optional[Signal]]

# Order here is the order reasons are reported in.
CRITERIA: Tuple[Tuple[str, Criterion], ...] = (
    ("roots", roots_signal),
    ("pronunciation", pronunciation_signal),
    ("etymology", etymology_signal),
    ("category", category_signal),
    ("literal_meaning", literal_meaning_signal),
    ("spelling", spelling_signal),
    ("origin", origin_signal),
    ("feelings", feelings_signal),
)


# =============================================================================
# Pair Rules
# =============================================================================

def is_declared_relation(target: Name, candidate: Name) -> bool:
    """True if either name lists the other in its relatedNames."""
    return (candidate.name in target.related_name_strings or
            target.name in candidate.related_name_strings)


def shares_exact_origin(origin1: Sequence[str], origin2: Sequence[str]) -> bool:
    folded = {o.lower() for o in origin2 or ()}
    return any(o.lower() in folded for o in origin1 or ())


def is_false_cognate(target: Name, candidate: Name) -> bool:
    """
    Same spelling, unrelated origins (Korean "Kim" vs Germanic "Kim").

    Spelling alone must not make such names look related.
    """
    return (target.name.lower() == candidate.name.lower() and
            not shares_exact_origin(target.origin, candidate.origin))


def collect_signals(target: Name, candidate: Name,
                    criteria: Sequence[Tuple[str, Criterion]] = CRITERIA) -> List[Signal]:
    """
    Evaluate every criterion for a pair and apply the false-cognate rule.

    For false cognates the spelling bonus only counts when some other
    criterion already found a connection.
    """
    signals = [s for s in (fn(target, candidate) for _, fn in criteria) if s is not None]

    if is_false_cognate(target, candidate):
        other_points = sum(s.score for s in signals if s.criterion != "spelling")
        if other_points <= 0:
            signals = [s for s in signals if s.criterion != "spelling"]

    return signals


def _fold(candidate: Name, signals: Iterable[Signal]) -> SimilarityResult:
    score = 0
    reasons = []
    for signal in signals:
        score += signal.score
        reasons.append(signal.reason)
    return SimilarityResult(candidate=candidate, reasons=tuple(reasons), score=score)


def result_sort_key(result: SimilarityResult):
    return (-result.score, natural_sort_key(result.candidate.name))


# =============================================================================
# Finder
# =============================================================================

class NameSimilarityFinder:
    """
    Finds names in a catalog that are similar to a target name.

    Usage:
        finder = NameSimilarityFinder(threshold=60)
        results = finder.find(target, catalog)
        for r in results:
            print(f"{r.candidate.name}: {r.score} ({r.reason})")
    """

    def __init__(self, threshold: Optional[int] = None,
                 criteria: Sequence[Tuple[str, Criterion]] = CRITERIA):
        """
        Args:
            threshold: Minimum total score to report (default from app.yaml)
            criteria: Ordered (name, function) pairs to evaluate
        """
        self.threshold = DEFAULT_THRESHOLD if threshold is None else threshold
        self.criteria = tuple(criteria)

    def score_pair(self, target: Name, candidate: Name) -> Optional[SimilarityResult]:
        """
        Score one pair without applying the threshold.

        Returns:
            SimilarityResult, or None for the same record, a declared
            relation, or a pair with no criterion firing
        """
        if candidate.id == target.id:
            return None
        if is_declared_relation(target, candidate):
            return None

        result = _fold(candidate, collect_signals(target, candidate, self.criteria))
        if not result.reasons:
            return None
        return result

    def find(self, target: Name, corpus: Iterable[Name],
             threshold: Optional[int] = None) -> List[SimilarityResult]:
        """
        Rank the corpus by similarity to the target.

        Returns:
            Results at or above the threshold, highest score first, ties
            broken by name
        """
        if threshold is None:
            threshold = self.threshold

        results = []
        for candidate in corpus:
            result = self.score_pair(target, candidate)
            if result is None:
                continue
            logger.debug("%s vs %s: %d (%s)", target.name, candidate.name,
                         result.score, result.reason)
            if result.score >= threshold:
                results.append(result)

        results.sort(key=result_sort_key)
        return results

    def find_batch(self, targets: Iterable[Name],
                   corpus: Sequence[Name]) -> dict:
        """Similar names for several targets, keyed by target id."""
        corpus = list(corpus)
        return {t.id: self.find(t, corpus) for t in targets}


# Convenience function
def find_similar(target: Name, corpus: Iterable[Name],
                 threshold: Optional[int] = None) -> List[SimilarityResult]:
    """Similar names for one target (threshold defaults to 60)."""
    return NameSimilarityFinder(threshold=threshold).find(target, corpus)


__all__ = [
    'DEFAULT_THRESHOLD',
    'Signal',
    'SimilarityResult',
    'CRITERIA',
    'NameSimilarityFinder',
    'find_similar',
    'collect_signals',
    'is_declared_relation',
    'is_false_cognate',
    'shares_exact_origin',
]
