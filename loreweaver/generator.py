#!/usr/bin/env python3
"""
Random Name Generator
=====================
Draws random names from the catalog, either one at a time or as a
first name + surname pair.

Candidates go through the record filters (name type, status, gender,
origins, categories, literal meaning, feelings); each candidate is then
expanded into its spellings (the name plus its related names) and the
phonetic filters choose which spellings may be shown. A related spelling
is returned as a full Name carrying the related name's overrides.

Paired draws retry up to generator.max_attempts (app.yaml) times per side
to avoid combinations on the blocked-pairs list, then fall back to any
candidate.

Usage:
    from loreweaver.generator import NameGenerator, GeneratorOptions

    gen = NameGenerator(names, seed=7)
    name = gen.generate(GeneratorOptions(origins=("Europe",)))
    pair = gen.generate_pair(GeneratorOptions(), GeneratorOptions(),
                             blocked=load_blocked_pairs())
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from loreweaver.blocked_pairs import is_pair_blocked
from loreweaver.filters import NameEntry, NameFilter, expand_entries, matches, matches_phonetics
from loreweaver.hierarchy import is_descendant_or_equal
from loreweaver.models import BlockedPair, Gender, Name, NameStatus, NameType
from loreweaver.settings import require_setting

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = int(require_setting("generator.max_attempts"))

LOGIC_ALL = "and"
LOGIC_ANY = "any"


@dataclass(frozen=True)
class GeneratorOptions:
    """Generator filters; None / empty means the filter is off."""
    gender: Optional[Gender] = None          # ignored for surnames
    only_available: bool = True              # skip names marked used
    origins: Tuple[str, ...] = ()
    categories: Tuple[str, ...] = ()         # full category paths
    category_logic: str = LOGIC_ALL
    literal_meaning: Optional[str] = None
    feelings: Tuple[str, ...] = ()
    feeling_logic: str = LOGIC_ALL

    # Phonetic filters (applied per spelling)
    syllables: Optional[int] = None
    starts_with: Optional[str] = None
    ends_with: Optional[str] = None
    rhymes_with: Optional[str] = None

    def __post_init__(self):
        for field_name in ("category_logic", "feeling_logic"):
            value = getattr(self, field_name)
            if value not in (LOGIC_ALL, LOGIC_ANY):
                raise ValueError(f"{field_name} must be '{LOGIC_ALL}' or '{LOGIC_ANY}', got {value!r}")

    def to_name_filter(self, name_type: Optional[NameType] = None) -> NameFilter:
        """The parts shared with the catalog filters."""
        return NameFilter(
            origins=self.origins,
            name_type=name_type,
            literal_meaning=self.literal_meaning,
            syllables=self.syllables,
            starts_with=self.starts_with,
            ends_with=self.ends_with,
            rhymes_with=self.rhymes_with,
        )


@dataclass(frozen=True)
class NamePair:
    first: Optional[Name] = None
    surname: Optional[Name] = None

    @property
    def full_name(self) -> str:
        return " ".join(n.name for n in (self.first, self.surname) if n)

    def to_dict(self) -> dict:
        return {
            'first': self.first.to_dict() if self.first else None,
            'surname': self.surname.to_dict() if self.surname else None,
            'fullName': self.full_name,
        }


def _combine(parent: Optional[str], own: Optional[str]) -> Optional[str]:
    if not own:
        return parent
    return f"{parent}\n\n{own}" if parent else own


def generated_name(entry: NameEntry) -> Name:
    """
    The Name shown for one spelling.

    A related spelling keeps the parent record and takes the related
    name's spelling, falling back to the parent for pronunciation, script
    and gender. An alternate origin replaces the parent's origins; etymology
    and notes are appended to the parent's.
    """
    if entry.is_primary or entry.related is None:
        return entry.name

    parent, related = entry.name, entry.related
    return replace(
        parent,
        name=related.name,
        pronunciation=entry.pronunciation,
        script=entry.script,
        gender=entry.gender,
        origin=(related.alternate_origin,) if related.alternate_origin else parent.origin,
        etymology=_combine(parent.etymology, related.etymology),
        notes=_combine(parent.notes, related.notes),
        feelings=related.feelings or parent.feelings,
    )


def _matches_taxonomy(values: Sequence[str], selected: Sequence[str], logic: str,
                      match: Callable[[str, str], bool]) -> bool:
    if not selected:
        return True
    check = all if logic == LOGIC_ALL else any
    return check(any(match(v, s) for v in values) for s in selected)


def is_candidate(name: Name, opts: GeneratorOptions,
                 name_type: Optional[NameType] = None) -> bool:
    """Record-level generator filters for one name."""
    if name.status == NameStatus.BLOCKED:
        return False
    if opts.only_available and name.status == NameStatus.USED:
        return False

    # Surnames are drawn regardless of gender
    if (opts.gender not in (None, Gender.ANY) and name_type != NameType.SURNAME
            and name.gender not in (opts.gender, Gender.ANY)):
        return False

    if not matches(name, opts.to_name_filter(name_type)):
        return False

    if not _matches_taxonomy(name.meanings, opts.categories, opts.category_logic,
                             is_descendant_or_equal):
        return False

    return _matches_taxonomy(name.feelings, opts.feelings, opts.feeling_logic,
                             lambda value, wanted: value == wanted)


class NameGenerator:
    """
    Random draws from a name catalog.

    Pass rng (a random.Random) or seed for reproducible draws.
    """

    def __init__(self, names: Iterable[Name], rng: random.Random = None, seed: int = None):
        self.names = list(names)
        self.rng = rng or random.Random(seed)

    def candidates(self, opts: GeneratorOptions,
                   name_type: Optional[NameType] = None) -> List[Name]:
        return [n for n in self.names if is_candidate(n, opts, name_type)]

    def forms(self, name: Name, opts: GeneratorOptions) -> List[NameEntry]:
        """Spellings of one name that pass the phonetic filters."""
        flt = opts.to_name_filter()
        return [e for e in expand_entries([name]) if matches_phonetics(e, flt)]

    def generate(self, opts: GeneratorOptions = None,
                 name_type: Optional[NameType] = NameType.FIRST_NAME) -> Optional[Name]:
        """
        One random name, or None if nothing matches.

        The name is chosen among candidates that have at least one matching
        spelling, then one of those spellings is chosen.
        """
        opts = opts or GeneratorOptions()
        pool = []
        for name in self.candidates(opts, name_type):
            forms = self.forms(name, opts)
            if forms:
                pool.append(forms)
        if not pool:
            logger.debug("No names match the generator filters")
            return None
        return generated_name(self.rng.choice(self.rng.choice(pool)))

    def _draw(self, opts: GeneratorOptions, name_type: NameType,
              accept: Callable[[Name], bool], max_attempts: int) -> Optional[Name]:
        candidates = self.candidates(opts, name_type)
        if not candidates:
            return None

        attempts = 0
        while attempts < max_attempts:
            attempts += 1
            forms = self.forms(self.rng.choice(candidates), opts)
            if not forms:
                continue
            name = generated_name(self.rng.choice(forms))
            if accept(name):
                return name

        logger.debug("No acceptable %s after %d attempts, using any candidate",
                     name_type.value, max_attempts)
        return self.rng.choice(candidates)

    def generate_pair(
        self,
        first_opts: GeneratorOptions = None,
        surname_opts: GeneratorOptions = None,
        blocked: Iterable[BlockedPair] = (),
        first: Name = None,
        surname: Name = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> NamePair:
        """
        Draw a first name and a surname.

        A side passed in as first / surname is locked and kept as is; the
        other side is drawn so the combination is not blocked. When no
        acceptable spelling turns up within max_attempts, a random candidate
        is used unchecked. A side with no candidates comes back as None.
        """
        first_opts = first_opts or GeneratorOptions()
        surname_opts = surname_opts or GeneratorOptions()
        blocked = list(blocked)

        if first is None:
            def accept_first(name):
                return surname is None or not is_pair_blocked(blocked, name.name, surname.name)
            first = self._draw(first_opts, NameType.FIRST_NAME, accept_first, max_attempts)

        if surname is None:
            def accept_surname(name):
                return first is None or not is_pair_blocked(blocked, first.name, name.name)
            surname = self._draw(surname_opts, NameType.SURNAME, accept_surname, max_attempts)

        return NamePair(first=first, surname=surname)


def generate_name(names: Iterable[Name], opts: GeneratorOptions = None,
                  name_type: Optional[NameType] = NameType.FIRST_NAME,
                  seed: int = None) -> Optional[Name]:
    """
    Convenience function to draw one name.

    Args:
        names: Catalog to draw from
        opts: Generator filters (defaults: available names, no filters)
        name_type: FIRST_NAME, SURNAME or None for any type
        seed: Random seed for a reproducible draw

    Returns:
        A Name, or None when nothing matches
    """
    return NameGenerator(names, seed=seed).generate(opts, name_type)


__all__ = [
    'GeneratorOptions',
    'NamePair',
    'NameGenerator',
    'generated_name',
    'is_candidate',
    'generate_name',
    'MAX_ATTEMPTS',
]
