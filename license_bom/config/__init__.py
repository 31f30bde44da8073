"""Configuration handling for license-bom."""
from __future__ import annotations

from license_bom.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_bom.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
    load_override_file,
)
from license_bom.models.config import BomConfig, OverrideLicense, ProjectOverride

__all__ = [
    "BomConfig",
    "DEFAULT_CONFIG_NAMES",
    "OverrideLicense",
    "ProjectOverride",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
    "load_override_file",
]
