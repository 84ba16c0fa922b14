"""
Tests for the Name Generator
============================
Tests candidate filtering, related-name overrides, single draws and
first name + surname pairs in loreweaver/generator.py.
"""

import random

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from loreweaver.filters import expand_entries
from loreweaver.generator import (
    MAX_ATTEMPTS,
    GeneratorOptions,
    NameGenerator,
    generate_name,
    generated_name,
)
from loreweaver.models import (
    BlockedPair,
    Gender,
    Name,
    NameStatus,
    NameType,
    RelatedName,
    RelationType,
)

SEEDS = range(20)


@pytest.fixture
def catalog():
    """First names, surnames and one name of each status."""
    return [
        Name(
            id="1", name="Elizabeth", name_type=NameType.FIRST_NAME,
            gender=Gender.FEMININE, origin=("Europe > England",),
            meanings=("Religion > Biblical",), meaning="God is my oath",
            etymology="Hebrew elisheba", notes="Queen",
            pronunciation="ih-LIZ-uh-beth", feelings=("regal", "classic"),
            related_names=(
                RelatedName(type=RelationType.DIMINUTIVE, name="Liz", pronunciation="LIZ"),
                RelatedName(type=RelationType.DIMINUTIVE, name="Beth"),
                RelatedName(
                    type=RelationType.OTHER_LANGUAGE, name="Elisa",
                    pronunciation="eh-LEE-zah", etymology="Italian form",
                    feelings=("warm",), alternate_origin="Europe > Italy",
                ),
            ),
        ),
        Name(
            id="2", name="Kate", name_type=NameType.EITHER, gender=Gender.FEMININE,
            origin=("Europe > Ireland",), pronunciation="KATE",
            feelings=("bright",), status=NameStatus.USED,
        ),
        Name(
            id="3", name="Tate", name_type=NameType.SURNAME,
            origin=("Europe > England",), meanings=("Nature > Land",), pronunciation="TATE",
        ),
        Name(
            id="4", name="Brown", name_type=NameType.SURNAME,
            origin=("Europe > England",), meanings=("Nature > Colors",), pronunciation="BROWN",
        ),
        Name(
            id="5", name="Mira", name_type=NameType.FIRST_NAME, gender=Gender.ANY,
            pronunciation="MEER-uh", status=NameStatus.BLOCKED,
        ),
        Name(
            id="6", name="Jon", name_type=NameType.FIRST_NAME, gender=Gender.MASCULINE,
            origin=("Europe > Scandinavia",), pronunciation="JON",
            meanings=("Religion > Biblical", "Virtue > Grace"), feelings=("bold", "classic"),
        ),
        Name(
            id="7", name="Robin", name_type=NameType.FIRST_NAME, gender=Gender.ANY,
            pronunciation="ROB-in",
        ),
    ]


def by_name(catalog, name):
    return next(n for n in catalog if n.name == name)


def candidate_ids(catalog, opts, name_type=NameType.FIRST_NAME):
    return {n.id for n in NameGenerator(catalog).candidates(opts, name_type)}


class TestCandidates:
    """Tests for record-level generator filters."""

    def test_blocked_never_drawn(self, catalog):
        """Blocked names are excluded even when used names are allowed."""
        assert "5" not in candidate_ids(catalog, GeneratorOptions(only_available=False))

    def test_only_available(self, catalog):
        """Used names are skipped unless asked for."""
        assert candidate_ids(catalog, GeneratorOptions()) == {"1", "6", "7"}
        assert candidate_ids(catalog, GeneratorOptions(only_available=False)) == {"1", "2", "6", "7"}

    def test_surname_type(self, catalog):
        """Surname draws include surnames and available "either" names."""
        assert candidate_ids(catalog, GeneratorOptions(), NameType.SURNAME) == {"3", "4"}

    def test_gender_includes_any(self, catalog):
        """Gender matches the chosen gender or names for any gender."""
        opts = GeneratorOptions(gender=Gender.FEMININE)
        assert candidate_ids(catalog, opts) == {"1", "7"}

    def test_gender_ignored_for_surnames(self, catalog):
        """Surnames are drawn regardless of gender."""
        opts = GeneratorOptions(gender=Gender.MASCULINE)
        assert candidate_ids(catalog, opts, NameType.SURNAME) == {"3", "4"}

    def test_origins_most_specific(self, catalog):
        """Origins select descendants of the most specific selection."""
        assert candidate_ids(catalog, GeneratorOptions(origins=("Europe",))) == {"1", "6"}
        opts = GeneratorOptions(origins=("Europe", "Europe > Scandinavia"))
        assert candidate_ids(catalog, opts) == {"6"}

    def test_categories_all(self, catalog):
        """By default every selected category must match."""
        opts = GeneratorOptions(categories=("Religion", "Virtue"))
        assert candidate_ids(catalog, opts) == {"6"}

    def test_categories_any(self, catalog):
        """With any-logic one category is enough."""
        opts = GeneratorOptions(categories=("Religion", "Virtue"), category_logic="any")
        assert candidate_ids(catalog, opts) == {"1", "6"}

    def test_category_segment_prefix_does_not_match(self, catalog):
        """A partial segment does not select a category."""
        assert candidate_ids(catalog, GeneratorOptions(categories=("Relig",))) == set()

    def test_feelings_all(self, catalog):
        """By default every selected feeling must be present."""
        opts = GeneratorOptions(feelings=("classic", "regal"))
        assert candidate_ids(catalog, opts) == {"1"}

    def test_feelings_any(self, catalog):
        """With any-logic one feeling is enough."""
        opts = GeneratorOptions(feelings=("bold", "regal"), feeling_logic="any")
        assert candidate_ids(catalog, opts) == {"1", "6"}

    def test_literal_meaning(self, catalog):
        """Literal meaning is a case-insensitive substring match."""
        assert candidate_ids(catalog, GeneratorOptions(literal_meaning="OATH")) == {"1"}

    def test_invalid_logic(self):
        """Only 'and' and 'any' are accepted."""
        with pytest.raises(ValueError):
            GeneratorOptions(category_logic="or")


class TestGeneratedName:
    """Tests for the Name shown for each spelling."""

    def _entry(self, catalog, display_name):
        entries = expand_entries([by_name(catalog, "Elizabeth")])
        return next(e for e in entries if e.display_name == display_name)

    def test_primary_unchanged(self, catalog):
        """The primary spelling is the record itself."""
        entry = self._entry(catalog, "Elizabeth")
        assert generated_name(entry) is entry.name

    def test_related_falls_back_to_parent(self, catalog):
        """Missing related fields come from the parent."""
        beth = generated_name(self._entry(catalog, "Beth"))
        assert beth.name == "Beth"
        assert beth.id == "1"
        assert beth.pronunciation == "ih-LIZ-uh-beth"
        assert beth.origin == ("Europe > England",)
        assert beth.etymology == "Hebrew elisheba"
        assert beth.notes == "Queen"
        assert beth.feelings == ("regal", "classic")
        assert beth.gender == Gender.FEMININE

    def test_related_overrides(self, catalog):
        """Related fields override or extend the parent's."""
        elisa = generated_name(self._entry(catalog, "Elisa"))
        assert elisa.pronunciation == "eh-LEE-zah"
        assert elisa.origin == ("Europe > Italy",)
        assert elisa.etymology == "Hebrew elisheba\n\nItalian form"
        assert elisa.feelings == ("warm",)
        assert elisa.meaning == "God is my oath"


class TestGenerate:
    """Tests for single draws."""

    def test_phonetic_filter_picks_spelling(self, catalog):
        """Only spellings passing the sound filters are shown."""
        opts = GeneratorOptions(origins=("Europe > England",), syllables=1)
        assert NameGenerator(catalog, seed=1).generate(opts).name == "Liz"

    def test_rhyme_uses_inherited_pronunciation(self, catalog):
        """Related names without a pronunciation rhyme through the parent's."""
        opts = GeneratorOptions(rhymes_with="SETH")
        for seed in SEEDS:
            assert NameGenerator(catalog, seed=seed).generate(opts).name in {"Elizabeth", "Beth"}

    def test_candidates_without_matching_spelling_skipped(self, catalog):
        """A draw succeeds whenever some spelling matches."""
        opts = GeneratorOptions(starts_with="LIZ")
        for seed in SEEDS:
            assert NameGenerator(catalog, seed=seed).generate(opts).name == "Liz"

    def test_no_match(self, catalog):
        """Nothing matching gives None."""
        assert NameGenerator(catalog).generate(GeneratorOptions(syllables=9)) is None

    def test_name_type_any(self, catalog):
        """name_type None draws from every type."""
        opts = GeneratorOptions(starts_with="TAT")
        gen = NameGenerator(catalog, seed=2)
        assert gen.generate(opts, name_type=None).name == "Tate"
        assert gen.generate(opts) is None

    def test_seed_is_reproducible(self, catalog):
        """The same seed draws the same names."""
        first = NameGenerator(catalog, seed=3)
        second = NameGenerator(catalog, seed=3)
        assert [first.generate().name for _ in range(10)] == [second.generate().name for _ in range(10)]

    def test_injected_rng(self, catalog):
        """A caller-supplied random.Random is used as is."""
        rng = random.Random(5)
        assert NameGenerator(catalog, rng=rng).rng is rng

    def test_generate_name(self, catalog):
        """Convenience function."""
        assert generate_name(catalog, GeneratorOptions(starts_with="LIZ"), seed=1).name == "Liz"


class TestGeneratePair:
    """Tests for first name + surname draws."""

    def test_default_attempts(self):
        """Attempts per side come from app.yaml."""
        assert MAX_ATTEMPTS == 100

    def test_types(self, catalog):
        """Each side is drawn from its own name type."""
        pair = NameGenerator(catalog, seed=4).generate_pair()
        assert pair.first.id in {"1", "6", "7"}
        assert pair.surname.name in {"Tate", "Brown"}
        assert pair.full_name == f"{pair.first.name} {pair.surname.name}"

    def test_blocked_surname_avoided(self, catalog):
        """The surname is redrawn when the pair is blocked."""
        blocked = [BlockedPair(id="a", first_name="jon", surname="TATE")]
        jon = by_name(catalog, "Jon")
        for seed in SEEDS:
            pair = NameGenerator(catalog, seed=seed).generate_pair(blocked=blocked, first=jon)
            assert pair.first is jon
            assert pair.surname.name == "Brown"

    def test_blocked_first_name_avoided(self, catalog):
        """With a locked surname the first name is redrawn."""
        blocked = [BlockedPair(id="a", first_name="Jon", surname="Tate")]
        tate = by_name(catalog, "Tate")
        opts = GeneratorOptions(gender=Gender.MASCULINE)
        for seed in SEEDS:
            pair = NameGenerator(catalog, seed=seed).generate_pair(opts, blocked=blocked, surname=tate)
            assert pair.first.name == "Robin"
            assert pair.surname is tate

    def test_unlocked_pair_never_blocked(self, catalog):
        """Unlocked draws check the surname against the drawn first name."""
        first_forms = ["Elizabeth", "Liz", "Beth", "Elisa", "Jon", "Robin"]
        blocked = [BlockedPair(id=f, first_name=f, surname="Tate") for f in first_forms]
        for seed in SEEDS:
            pair = NameGenerator(catalog, seed=seed).generate_pair(blocked=blocked)
            assert pair.surname.name == "Brown"

    def test_fallback_after_max_attempts(self, catalog):
        """When every combination is blocked a candidate is still returned."""
        blocked = [
            BlockedPair(id="a", first_name="Jon", surname="Tate"),
            BlockedPair(id="b", first_name="Jon", surname="Brown"),
        ]
        pair = NameGenerator(catalog, seed=6).generate_pair(
            blocked=blocked, first=by_name(catalog, "Jon"), max_attempts=5,
        )
        assert pair.surname.name in {"Tate", "Brown"}

    def test_side_without_candidates(self, catalog):
        """A side with no candidates is None."""
        pair = NameGenerator(catalog, seed=7).generate_pair(
            surname_opts=GeneratorOptions(origins=("Asia",)),
        )
        assert pair.surname is None
        assert pair.full_name == pair.first.name

    def test_both_locked(self, catalog):
        """Two locked names are returned unchanged."""
        jon, tate = by_name(catalog, "Jon"), by_name(catalog, "Tate")
        pair = NameGenerator(catalog).generate_pair(first=jon, surname=tate)
        assert (pair.first, pair.surname) == (jon, tate)
        assert pair.to_dict()["fullName"] == "Jon Tate"
