#!/usr/bin/env python3
"""
Name Catalog File
=================
Reads and writes the names.json catalog kept by the file-storage server:
a JSON array of name records with camelCase keys, and the blocked-pairs
list stored the same way.

Storage: JSON files (data/names.json and data/blocked-pairs.json by default,
see app.yaml / LOREWEAVER_CATALOG / LOREWEAVER_BLOCKED_PAIRS)
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from loreweaver.config import config
from loreweaver.models import BlockedPair, Name

logger = logging.getLogger(__name__)


def default_catalog_path() -> Path:
    path = config().catalog_path
    if path is None:
        raise ValueError("catalog.path must be set in app.yaml or LOREWEAVER_CATALOG")
    return path


def default_blocked_pairs_path() -> Path:
    path = config().blocked_pairs_path
    if path is None:
        raise ValueError(
            "catalog.blocked_pairs_path must be set in app.yaml or LOREWEAVER_BLOCKED_PAIRS"
        )
    return path


def _read_array(path: Path, what: str) -> list:
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected an array of {what}")
    return data


def _write_array(path: Path, payload: list) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + '\n', encoding='utf-8')
    return path


def parse_catalog(records: list) -> List[Name]:
    """
    Convert raw records to Names.

    Records that cannot be parsed are skipped with a warning so one bad
    entry does not hide the rest of the catalog.
    """
    names = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping catalog entry %d: expected an object", index)
            continue
        try:
            names.append(Name.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping catalog entry %d (%s): %s",
                           index, record.get('name', '?'), e)
    return names


def load_catalog(path: Optional[Union[str, Path]] = None) -> List[Name]:
    """
    Load names from a catalog file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON array
    """
    path = Path(path) if path else default_catalog_path()
    names = parse_catalog(_read_array(path, 'names'))
    logger.debug("Loaded %d names from %s", len(names), path)
    return names


def save_catalog(names: Iterable[Name], path: Optional[Union[str, Path]] = None) -> Path:
    """Write names to a catalog file (2-space indent, trailing newline)."""
    path = Path(path) if path else default_catalog_path()
    payload = [n.to_dict() for n in names]
    _write_array(path, payload)
    logger.debug("Wrote %d names to %s", len(payload), path)
    return path


def load_blocked_pairs(path: Optional[Union[str, Path]] = None) -> List[BlockedPair]:
    """
    Load blocked first name + surname pairs.

    A missing file means nothing is blocked yet. Malformed entries are
    skipped with a warning, like catalog records.
    """
    path = Path(path) if path else default_blocked_pairs_path()
    if not path.exists():
        logger.debug("No blocked pairs file at %s", path)
        return []

    pairs = []
    for index, record in enumerate(_read_array(path, 'blocked pairs')):
        try:
            pairs.append(BlockedPair.from_dict(record))
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning("Skipping blocked pair %d: %s", index, e)
    return pairs


def save_blocked_pairs(pairs: Iterable[BlockedPair],
                       path: Optional[Union[str, Path]] = None) -> Path:
    """Write blocked pairs (same JSON layout as the catalog)."""
    path = Path(path) if path else default_blocked_pairs_path()
    payload = [p.to_dict() for p in pairs]
    _write_array(path, payload)
    logger.debug("Wrote %d blocked pairs to %s", len(payload), path)
    return path


def sort_catalog(names: Iterable[Name]) -> List[Name]:
    """Names in alphabetical order, ignoring case."""
    return sorted(names, key=lambda n: n.name.lower())


def find_by_name(names: Iterable[Name], query: str) -> Optional[Name]:
    """First name whose id equals query or whose name matches it ignoring case."""
    query_lower = query.lower()
    by_name = None
    for name in names:
        if name.id == query:
            return name
        if by_name is None and name.name.lower() == query_lower:
            by_name = name
    return by_name


__all__ = [
    'default_catalog_path',
    'parse_catalog',
    'load_catalog',
    'save_catalog',
    'default_blocked_pairs_path',
    'load_blocked_pairs',
    'save_blocked_pairs',
    'sort_catalog',
    'find_by_name',
]
