"""
Tests for Configuration
=======================
Tests app.yaml settings access, tier profiles and .env handling in
loreweaver/settings.py and loreweaver/config.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from loreweaver.config import get_config, get_tier_scores, list_profiles
from loreweaver.hierarchy import TierScores
from loreweaver.settings import (
    APP_CONFIG_PATH,
    PROJECT_ROOT,
    catalog_file,
    get_setting,
    require_setting,
    resolve_path,
)


class TestSettings:
    """Tests for dotted app.yaml lookups."""

    def test_nested_setting(self):
        """Dotted paths reach nested settings."""
        assert get_setting("similarity.default_threshold") == 60
        assert get_setting("similarity.weights.spelling") == 50

    def test_default_for_missing(self):
        """Missing settings return the default."""
        assert get_setting("similarity.no_such_key", "fallback") == "fallback"

    def test_require_missing_raises(self):
        """require_setting() names app.yaml when a key is missing."""
        with pytest.raises(ValueError, match="must be set in app.yaml"):
            require_setting("similarity.no_such_key")

    def test_require_missing_names_config_file(self):
        """The error points at the app.yaml that was read."""
        with pytest.raises(ValueError) as exc:
            require_setting("generator.no_such_key")
        assert str(APP_CONFIG_PATH) in str(exc.value)

    def test_resolve_relative_path(self):
        """Relative paths resolve against the project root."""
        assert resolve_path("data/names.json") == (PROJECT_ROOT / "data" / "names.json").resolve()

    def test_resolve_absolute_path(self, tmp_path):
        """Absolute paths are kept."""
        assert resolve_path(str(tmp_path)) == tmp_path

    def test_catalog_file(self):
        """Catalog data files resolve against the project root."""
        assert catalog_file() == (PROJECT_ROOT / "data" / "names.json").resolve()
        assert catalog_file("blocked_pairs_path") == (
            PROJECT_ROOT / "data" / "blocked-pairs.json"
        ).resolve()

    def test_catalog_file_missing_key(self):
        """Unknown catalog keys give None."""
        assert catalog_file("no_such_file") is None


class TestTierProfiles:
    """Tests for tier score resolution."""

    def test_category_profile(self):
        """Category tier scores."""
        assert get_tier_scores("category") == TierScores(70, 40, 30, 10)

    def test_origin_profile(self):
        """Origin tier scores."""
        assert get_tier_scores("origin") == TierScores(45, 25, 20, 8)

    def test_tuple(self):
        """A 4-tuple becomes TierScores."""
        assert get_tier_scores((4, 3, 2, 1)) == TierScores(4, 3, 2, 1)

    def test_passthrough(self):
        """TierScores pass through unchanged."""
        tiers = TierScores(1, 1, 1, 1)
        assert get_tier_scores(tiers) is tiers

    def test_unknown_profile(self):
        """Unknown profile names are rejected."""
        with pytest.raises(ValueError, match="Unknown tier profile"):
            get_tier_scores("colour")

    def test_wrong_length(self):
        """Tuples must have four values."""
        with pytest.raises(ValueError):
            get_tier_scores((1, 2, 3))

    def test_invalid_type(self):
        """Other types are rejected."""
        with pytest.raises(ValueError):
            get_tier_scores(42)

    def test_list_profiles(self):
        """Both profiles are listed."""
        assert set(list_profiles()) == {"category", "origin"}


class TestGetConfig:
    """Tests for catalog location from .env / environment / app.yaml."""

    def test_env_file_wins(self, tmp_path, monkeypatch):
        """.env values win over the environment."""
        monkeypatch.setenv("LOREWEAVER_CATALOG", str(tmp_path / "from-env.json"))
        env_file = tmp_path / ".env"
        env_file.write_text(f"# local\nLOREWEAVER_CATALOG={tmp_path / 'from-file.json'}\n")
        cfg = get_config(env_file)
        assert cfg.catalog_path == tmp_path / "from-file.json"

    def test_environment(self, tmp_path, monkeypatch):
        """Environment variables are used without a .env file."""
        monkeypatch.setenv("LOREWEAVER_CATALOG", str(tmp_path / "from-env.json"))
        monkeypatch.setenv("LOREWEAVER_LOG_LEVEL", "debug")
        cfg = get_config(tmp_path / "missing.env")
        assert cfg.catalog_path == tmp_path / "from-env.json"
        assert cfg.log_level == "DEBUG"
        assert not cfg.has_catalog

    def test_app_yaml_default(self, tmp_path, monkeypatch):
        """app.yaml supplies the default catalog path."""
        monkeypatch.delenv("LOREWEAVER_CATALOG", raising=False)
        monkeypatch.delenv("LOREWEAVER_LOG_LEVEL", raising=False)
        cfg = get_config(tmp_path / "missing.env")
        assert cfg.catalog_path == (PROJECT_ROOT / "data" / "names.json").resolve()
        assert cfg.log_level == "WARNING"

    def test_blocked_pairs_from_environment(self, tmp_path, monkeypatch):
        """LOREWEAVER_BLOCKED_PAIRS overrides app.yaml."""
        monkeypatch.setenv("LOREWEAVER_BLOCKED_PAIRS", str(tmp_path / "pairs.json"))
        cfg = get_config(tmp_path / "missing.env")
        assert cfg.blocked_pairs_path == tmp_path / "pairs.json"

    def test_blocked_pairs_default(self, tmp_path, monkeypatch):
        """app.yaml supplies the default blocked pairs path."""
        monkeypatch.delenv("LOREWEAVER_BLOCKED_PAIRS", raising=False)
        cfg = get_config(tmp_path / "missing.env")
        assert cfg.blocked_pairs_path == (PROJECT_ROOT / "data" / "blocked-pairs.json").resolve()
