#!/usr/bin/env python3
"""
Blocked Name Pairs
==================
First name + surname combinations the paired generator must never produce
together (e.g. "Kate Tate"). Comparison ignores case.

The list is held as an immutable sequence of BlockedPair records; each
operation returns a new list that the caller persists with
catalog.save_blocked_pairs().
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Optional

from loreweaver.models import BlockedPair

logger = logging.getLogger(__name__)


def is_pair_blocked(pairs: Iterable[BlockedPair], first_name: str, surname: str) -> bool:
    """True if the combination is on the blocked list."""
    return any(p.matches(first_name, surname) for p in pairs)


def find_blocked_pair(pairs: Iterable[BlockedPair], pair_id: str) -> Optional[BlockedPair]:
    for pair in pairs:
        if pair.id == pair_id:
            return pair
    return None


def add_blocked_pair(
    pairs: Iterable[BlockedPair],
    first_name: str,
    surname: str,
    reason: Optional[str] = None,
    notes: Optional[str] = None,
) -> List[BlockedPair]:
    """
    Block a combination.

    Names are trimmed before storing; blank reason/notes are dropped.

    Raises:
        ValueError: If either name is blank or the pair is already blocked
    """
    pairs = list(pairs)
    first_name = (first_name or '').strip()
    surname = (surname or '').strip()
    if not first_name or not surname:
        raise ValueError("Both a first name and a surname are required")
    if is_pair_blocked(pairs, first_name, surname):
        raise ValueError(f"'{first_name} {surname}' is already blocked")

    pair = BlockedPair(
        id=str(uuid.uuid4()),
        first_name=first_name,
        surname=surname,
        reason=(reason or '').strip() or None,
        notes=(notes or '').strip() or None,
        created_at=datetime.now().isoformat(),
    )
    logger.info("Blocked pair %s %s", first_name, surname)
    return pairs + [pair]


def remove_blocked_pair(pairs: Iterable[BlockedPair], pair_id: str) -> List[BlockedPair]:
    """
    Unblock a combination by id.

    Raises:
        KeyError: If no pair has that id
    """
    pairs = list(pairs)
    remaining = [p for p in pairs if p.id != pair_id]
    if len(remaining) == len(pairs):
        raise KeyError(pair_id)
    return remaining


def update_blocked_pair(pairs: Iterable[BlockedPair], pair_id: str, **changes) -> List[BlockedPair]:
    """
    Replace fields (first_name, surname, reason, notes) of one pair.

    Raises:
        KeyError: If no pair has that id
    """
    pairs = list(pairs)
    if find_blocked_pair(pairs, pair_id) is None:
        raise KeyError(pair_id)
    return [replace(p, **changes) if p.id == pair_id else p for p in pairs]


__all__ = [
    'is_pair_blocked',
    'find_blocked_pair',
    'add_blocked_pair',
    'remove_blocked_pair',
    'update_blocked_pair',
]
