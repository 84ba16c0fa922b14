#!/usr/bin/env python3
"""
LoreWeaver - Name Catalog Relatedness Engine
============================================

Finds related names in a personal name catalog and classifies taxonomy
paths (categories, geographic origins).

Quick Start
-----------
    from loreweaver import load_catalog, find_similar, find_by_name

    names = load_catalog("data/names.json")
    philip = find_by_name(names, "Philip")

    for result in find_similar(philip, names):
        print(result.candidate.name, result.score, result.reason)

    from loreweaver import classify_path, get_tier_scores
    classify_path("Europe > France", "Europe > France > Brittany",
                  get_tier_scores("origin"))   # 20 (parent/child)

Modules
-------
    loreweaver.similarity  - Relatedness aggregator (find_similar)
    loreweaver.hierarchy   - Hierarchical path matcher
    loreweaver.roots       - Etymological root parsing and comparison
    loreweaver.phonetics   - Edit distance, syllables, rhymes
    loreweaver.text_fields - Etymology / literal meaning / feelings
    loreweaver.filters     - Catalog filters
    loreweaver.duplicates  - Same-spelled records
    loreweaver.generator   - Random names and first + surname pairs
    loreweaver.blocked_pairs - Combinations the pair generator avoids
    loreweaver.catalog     - names.json I/O
    loreweaver.config      - Tier profiles and .env configuration

CLI Usage
---------
    python -m loreweaver similar "Philip"
    python -m loreweaver classify "A > B > X" "A > B > Y"
    python -m loreweaver phonetics "KATE" --rhymes "NATE"
"""

__version__ = "0.1.0"
__author__ = "LoreWeaver"

# =============================================================================
# Data Model
# =============================================================================

from .models import (
    Name,
    RelatedName,
    NameType,
    Gender,
    NameStatus,
    RelationType,
    BlockedPair,
)

# =============================================================================
# Engine
# =============================================================================

from .hierarchy import (
    TierScores,
    split_path,
    relationship,
    classify_path,
    best_path_score,
    is_descendant_or_equal,
    most_specific,
    matches_any,
)
from .phonetics import (
    levenshtein_distance,
    syllable_count,
    starts_with_sound,
    ends_with_sound,
    rhymes,
    unique_syllable_counts,
    pronunciation_score,
    spelling_similar,
)
from .roots import (
    ParsedRootElement,
    SharedRoot,
    parse_root_element,
    extract_root_elements,
    compare_root_elements,
    check_shared_roots,
)
from .text_fields import (
    etymology_score,
    literal_meaning_score,
    feelings_overlap,
)
from .similarity import (
    SimilarityResult,
    NameSimilarityFinder,
    find_similar,
)

# =============================================================================
# Catalog Tools
# =============================================================================

from .config import get_tier_scores, get_config
from .catalog import (
    load_catalog,
    save_catalog,
    sort_catalog,
    find_by_name,
    load_blocked_pairs,
    save_blocked_pairs,
)
from .filters import NameFilter, NameEntry, apply_filter
from .duplicates import find_duplicate_names, has_duplicates, distinguishing_label

# =============================================================================
# Generator
# =============================================================================

from .generator import GeneratorOptions, NamePair, NameGenerator, generate_name
from .blocked_pairs import is_pair_blocked, add_blocked_pair, remove_blocked_pair


__all__ = [
    # Version
    '__version__',
    # Data model
    'Name',
    'RelatedName',
    'NameType',
    'Gender',
    'NameStatus',
    'RelationType',
    'BlockedPair',
    # Hierarchy
    'TierScores',
    'split_path',
    'relationship',
    'classify_path',
    'best_path_score',
    'is_descendant_or_equal',
    'most_specific',
    'matches_any',
    'get_tier_scores',
    # Phonetics
    'levenshtein_distance',
    'syllable_count',
    'starts_with_sound',
    'ends_with_sound',
    'rhymes',
    'unique_syllable_counts',
    'pronunciation_score',
    'spelling_similar',
    # Roots
    'ParsedRootElement',
    'SharedRoot',
    'parse_root_element',
    'extract_root_elements',
    'compare_root_elements',
    'check_shared_roots',
    # Text fields
    'etymology_score',
    'literal_meaning_score',
    'feelings_overlap',
    # Similarity
    'SimilarityResult',
    'NameSimilarityFinder',
    'find_similar',
    # Catalog
    'get_config',
    'load_catalog',
    'save_catalog',
    'sort_catalog',
    'find_by_name',
    'NameFilter',
    'NameEntry',
    'apply_filter',
    'find_duplicate_names',
    'has_duplicates',
    'distinguishing_label',
    'load_blocked_pairs',
    'save_blocked_pairs',
    # Generator
    'GeneratorOptions',
    'NamePair',
    'NameGenerator',
    'generate_name',
    'is_pair_blocked',
    'add_blocked_pair',
    'remove_blocked_pair',
]
