#!/usr/bin/env python3
"""
Configuration Management
========================
Loads the catalog location from a .env file or the environment.
Provides the tier-score profiles used when classifying taxonomy paths.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from loreweaver.hierarchy import TierScores
from loreweaver.settings import catalog_file, get_setting, require_setting, resolve_path


# =============================================================================
# Tier Score Profiles
# =============================================================================
# Each taxonomy domain awards its own points for the exact / sibling /
# parent-child / cousin relationships. Values live in app.yaml under
# similarity.tiers.

_PROFILE_DESCRIPTIONS = {
    "category": "Meaning categories (main > sub > subsub)",
    "origin": "Geographic origins (continent > region > country > subregion)",
}


def _load_tier_profiles() -> dict:
    profiles = {}
    for name, description in _PROFILE_DESCRIPTIONS.items():
        raw = require_setting(f"similarity.tiers.{name}")
        missing = [k for k in ("exact", "sibling", "parent_child", "cousin") if k not in raw]
        if missing:
            raise ValueError(
                f"similarity.tiers.{name} is missing {', '.join(missing)} in app.yaml"
            )
        profiles[name] = {
            "tiers": TierScores(
                exact=int(raw["exact"]),
                sibling=int(raw["sibling"]),
                parent_child=int(raw["parent_child"]),
                cousin=int(raw["cousin"]),
            ),
            "description": description,
        }
    return profiles


TIER_PROFILES = _load_tier_profiles()


def get_tier_scores(profile_or_tiers) -> TierScores:
    """
    Resolve tier scores from a profile name or explicit values.

    Args:
        profile_or_tiers: Either:
            - str: Profile name ("category" or "origin")
            - TierScores: Returned unchanged
            - tuple/list: (exact, sibling, parent_child, cousin)

    Returns:
        TierScores

    Raises:
        ValueError: If the profile name is unknown or the tuple is malformed
    """
    if isinstance(profile_or_tiers, TierScores):
        return profile_or_tiers

    if isinstance(profile_or_tiers, str):
        profile = TIER_PROFILES.get(profile_or_tiers)
        if profile is None:
            available = ', '.join(sorted(TIER_PROFILES.keys()))
            raise ValueError(
                f"Unknown tier profile '{profile_or_tiers}'. "
                f"Available profiles: {available}"
            )
        return profile["tiers"]

    if isinstance(profile_or_tiers, (list, tuple)):
        if len(profile_or_tiers) != 4:
            raise ValueError(
                f"Expected 4 tier scores (exact, sibling, parent_child, cousin), "
                f"got {len(profile_or_tiers)}"
            )
        return TierScores(*(int(v) for v in profile_or_tiers))

    raise ValueError(f"Invalid tier scores: {profile_or_tiers}")


def list_profiles() -> dict:
    """List all tier profiles with descriptions."""
    return {
        name: {
            "tiers": p["tiers"],
            "description": p["description"],
        }
        for name, p in TIER_PROFILES.items()
    }


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration"""
    catalog_path: Optional[Path] = None
    blocked_pairs_path: Optional[Path] = None
    log_level: Optional[str] = None

    @property
    def has_catalog(self) -> bool:
        return bool(self.catalog_path and self.catalog_path.exists())


def load_env(env_path: Path = None) -> dict:
    """Load environment variables from .env file."""
    if env_path is None:
        env_path = Path(__file__).parent.parent / '.env'

    env_vars = {}
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            line = line.strip()
            if '=' in line and not line.startswith('#'):
                key, value = line.split('=', 1)
                env_vars[key.strip()] = value.strip()
                os.environ.setdefault(key.strip(), value.strip())

    return env_vars


def get_config(env_path: Path = None) -> Config:
    """Get configuration from .env, the environment and app.yaml."""
    env = load_env(env_path)

    catalog = (env.get('LOREWEAVER_CATALOG')
               or os.environ.get('LOREWEAVER_CATALOG'))
    blocked = (env.get('LOREWEAVER_BLOCKED_PAIRS')
               or os.environ.get('LOREWEAVER_BLOCKED_PAIRS'))
    log_level = (env.get('LOREWEAVER_LOG_LEVEL')
                 or os.environ.get('LOREWEAVER_LOG_LEVEL')
                 or get_setting('logging.level', 'WARNING'))

    return Config(
        catalog_path=resolve_path(catalog) if catalog else catalog_file('path'),
        blocked_pairs_path=(resolve_path(blocked) if blocked
                            else catalog_file('blocked_pairs_path')),
        log_level=str(log_level).upper(),
    )


# Singleton config
_config = None

def config() -> Config:
    """Get the singleton config instance."""
    global _config
    if _config is None:
        _config = get_config()
    return _config
