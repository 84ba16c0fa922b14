#!/usr/bin/env python3
"""Settings loader for LoreWeaver (configs/app.yaml)."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent
CONFIG_DIR = PACKAGE_DIR / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    if not APP_CONFIG_PATH.exists():
        raise FileNotFoundError(f"Missing app config: {APP_CONFIG_PATH}")
    data = yaml.safe_load(APP_CONFIG_PATH.read_text(encoding="utf-8"))
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"{APP_CONFIG_PATH}: expected a mapping at the top level")
    return data or {}


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def require_setting(path: str) -> Any:
    """Get a nested setting, raising if it is missing from app.yaml."""
    value = get_setting(path)
    if value is None:
        raise ValueError(
            f"{path} must be set in {APP_CONFIG_PATH.name} ({APP_CONFIG_PATH})"
        )
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to project root (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    expanded = os.path.expanduser(str(value))
    path = Path(expanded)
    if not path.is_absolute():
        base = base or PROJECT_ROOT
        path = (base / path).resolve()
    return path


def catalog_file(key: str = "path") -> Optional[Path]:
    """
    Location of a catalog data file named under the catalog section.

    catalog.path is the names.json array; catalog.blocked_pairs_path holds
    the blocked first name + surname combinations. Returns None when the
    key is absent.
    """
    value = get_setting(f"catalog.{key}")
    return resolve_path(value) if value else None


__all__ = [
    "load_app_config",
    "get_setting",
    "require_setting",
    "resolve_path",
    "catalog_file",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
]
