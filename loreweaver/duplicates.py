#!/usr/bin/env python3
"""
Duplicate spellings across the catalog.

Two records can carry the same spelling for unrelated names (Korean "Kim"
and Germanic "Kim"). These helpers find such records and give each a short
label so they can be told apart.
"""

from typing import List

from loreweaver.hierarchy import leaf, most_specific, split_path
from loreweaver.models import Name

NO_LABEL = "No distinguishing info"


def find_duplicate_names(target: Name, names: List[Name]) -> List[Name]:
    """Other records whose name, or one of whose related names, is spelled like target."""
    target_lower = target.name.lower()
    duplicates = []
    for other in names:
        if other.id == target.id:
            continue
        if other.name.lower() == target_lower:
            duplicates.append(other)
        elif any(r.name.lower() == target_lower for r in other.related_names):
            duplicates.append(other)
    return duplicates


def has_duplicates(target: Name, names: List[Name]) -> bool:
    return len(find_duplicate_names(target, names)) > 0


def distinguishing_label(name: Name) -> str:
    """
    Short label telling same-spelled names apart.

    Priority: most specific origins (leaf segments), first main category,
    first three words of the literal meaning.
    """
    if name.origin:
        return ', '.join(leaf(o) for o in most_specific(name.origin))

    if name.meanings:
        return split_path(name.meanings[0])[0]

    if name.meaning:
        words = ' '.join(name.meaning.split(' ')[:3])
        return words + '...' if len(words) < len(name.meaning) else words

    return NO_LABEL


__all__ = [
    "NO_LABEL",
    "find_duplicate_names",
    "has_duplicates",
    "distinguishing_label",
]
