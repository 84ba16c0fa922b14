#!/usr/bin/env python3
"""
Catalog filtering for the name list.

Record filters (search text, gender, origin, status, name type, category,
literal meaning, feelings) select names; every surviving name is then
expanded into one entry per spelling (the name itself plus each related
name) and the phonetic filters (syllables, starts with, ends with, rhymes
with) run on those entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from loreweaver.hierarchy import is_descendant_or_equal, join_path, matches_any
from loreweaver.models import Gender, Name, NameStatus, NameType, RelatedName
from loreweaver.phonetics import ends_with_sound, rhymes, starts_with_sound, syllable_count
from loreweaver.text_fields import natural_sort_key


@dataclass
class NameFilter:
    """Active filters; None / empty means the filter is off."""
    search: Optional[str] = None
    gender: Optional[Gender] = None
    origins: Tuple[str, ...] = ()
    status: Optional[NameStatus] = None
    name_type: Optional[NameType] = None
    category: Tuple[str, ...] = ()          # main, sub, subsub segments
    literal_meaning: Optional[str] = None
    feelings: Tuple[str, ...] = ()          # all must be present

    # Phonetic filters (applied per spelling)
    syllables: Optional[int] = None
    starts_with: Optional[str] = None
    ends_with: Optional[str] = None
    rhymes_with: Optional[str] = None


@dataclass(frozen=True)
class NameEntry:
    """One displayed spelling of a catalog name."""
    name: Name
    display_name: str
    is_primary: bool = True
    related: Optional[RelatedName] = None
    pronunciation: Optional[str] = None
    script: Optional[str] = None
    etymology: Optional[str] = None
    gender: Optional[Gender] = None


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def matches_search(name: Name, search: str) -> bool:
    term = search.lower()
    return (
        _contains(name.name, term) or
        _contains(name.script, term) or
        any(_contains(m, term) for m in name.meanings) or
        _contains(name.etymology, term) or
        any(_contains(o, term) for o in name.origin) or
        any(_contains(f, term) for f in name.feelings) or
        any(_contains(r.name, term) for r in name.related_names)
    )


def matches(name: Name, flt: NameFilter) -> bool:
    """Apply the record-level filters to one name."""
    if flt.search and not matches_search(name, flt.search):
        return False

    if flt.gender is not None and name.gender != flt.gender:
        return False

    if not matches_any(name.origin, flt.origins):
        return False

    if flt.status is not None and (name.status or NameStatus.AVAILABLE) != flt.status:
        return False

    # "either" names show up under every name-type filter
    if flt.name_type is not None and name.name_type not in (flt.name_type, NameType.EITHER):
        return False

    if flt.category:
        selector = join_path(flt.category)
        if not any(is_descendant_or_equal(m, selector) for m in name.meanings):
            return False

    if flt.literal_meaning and not _contains(name.meaning, flt.literal_meaning.lower()):
        return False

    if flt.feelings and not all(f in name.feelings for f in flt.feelings):
        return False

    return True


def expand_entries(names: Iterable[Name]) -> List[NameEntry]:
    """
    One entry per spelling.

    Related names inherit pronunciation, script, etymology and gender from
    their parent when they do not declare their own.
    """
    entries = []
    for name in names:
        entries.append(NameEntry(
            name=name,
            display_name=name.name,
            pronunciation=name.pronunciation,
            script=name.script,
            etymology=name.etymology,
            gender=name.gender,
        ))
        for related in name.related_names:
            entries.append(NameEntry(
                name=name,
                display_name=related.name,
                is_primary=False,
                related=related,
                pronunciation=related.pronunciation or name.pronunciation,
                script=related.script or name.script,
                etymology=related.etymology or name.etymology,
                gender=related.gender or name.gender,
            ))
    return entries


def matches_phonetics(entry: NameEntry, flt: NameFilter) -> bool:
    if flt.syllables is not None and syllable_count(entry.pronunciation) != flt.syllables:
        return False
    if flt.starts_with and not starts_with_sound(entry.pronunciation, flt.starts_with):
        return False
    if flt.ends_with and not ends_with_sound(entry.pronunciation, flt.ends_with):
        return False
    if flt.rhymes_with and not rhymes(entry.pronunciation, flt.rhymes_with):
        return False
    return True


def apply_filter(names: Iterable[Name], flt: Optional[NameFilter] = None) -> List[NameEntry]:
    """Filter, expand and sort the catalog for display."""
    flt = flt or NameFilter()
    selected = [n for n in names if matches(n, flt)]
    entries = [e for e in expand_entries(selected) if matches_phonetics(e, flt)]
    entries.sort(key=lambda e: natural_sort_key(e.display_name))
    return entries


__all__ = [
    "NameFilter",
    "NameEntry",
    "matches",
    "matches_search",
    "expand_entries",
    "matches_phonetics",
    "apply_filter",
]
