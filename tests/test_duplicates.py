"""
Tests for Duplicate Spellings
=============================
Tests same-spelled record lookup and distinguishing labels in
loreweaver/duplicates.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from loreweaver.duplicates import (
    NO_LABEL,
    find_duplicate_names,
    has_duplicates,
    distinguishing_label,
)
from loreweaver.models import Name, RelatedName, RelationType


@pytest.fixture
def kims():
    return [
        Name(id="1", name="Kim", origin=("Asia > East Asia > Korea",)),
        Name(id="2", name="kim", origin=("Europe > Germanic",)),
        Name(
            id="3", name="Kimberly",
            related_names=(RelatedName(type=RelationType.DIMINUTIVE, name="Kim"),),
        ),
        Name(id="4", name="Karen"),
    ]


class TestFindDuplicates:
    """Tests for same-spelled record lookup."""

    def test_finds_names_and_related_names(self, kims):
        """Same spelling as a name or a related name counts."""
        duplicates = find_duplicate_names(kims[0], kims)
        assert [d.id for d in duplicates] == ["2", "3"]

    def test_excludes_self(self, kims):
        """The record itself is never its own duplicate."""
        assert kims[0] not in find_duplicate_names(kims[0], kims)

    def test_has_duplicates(self, kims):
        """has_duplicates() agrees with find_duplicate_names()."""
        assert has_duplicates(kims[0], kims)
        assert not has_duplicates(kims[3], kims)


class TestDistinguishingLabel:
    """Tests for the short label shown next to duplicates."""

    def test_origin_leaf(self, kims):
        """Origin leaf is the preferred label."""
        assert distinguishing_label(kims[0]) == "Korea"
        assert distinguishing_label(kims[1]) == "Germanic"

    def test_most_specific_origins(self):
        """Only the most specific origins are used."""
        name = Name(
            id="1", name="Morgan",
            origin=("Europe", "Europe > France > Brittany", "Asia > Japan"),
        )
        assert distinguishing_label(name) == "Brittany, Japan"

    def test_main_category(self):
        """Falls back to the main category."""
        name = Name(id="1", name="River", meanings=("Nature > Water",))
        assert distinguishing_label(name) == "Nature"

    def test_literal_meaning_truncated(self):
        """Long literal meanings are truncated."""
        name = Name(id="1", name="Aurora", meaning="the light of the morning")
        assert distinguishing_label(name) == "the light of..."

    def test_literal_meaning_short(self):
        """Short literal meanings are shown whole."""
        name = Name(id="1", name="Marina", meaning="of the sea")
        assert distinguishing_label(name) == "of the sea"

    def test_nothing_to_show(self):
        """Records without detail get the placeholder label."""
        assert distinguishing_label(Name(id="1", name="X")) == NO_LABEL
