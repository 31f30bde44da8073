"""Default configuration values for license-bom."""

from __future__ import annotations

from license_bom.models.config import BomConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-bom.yaml", ".license-bom.yml"]


def get_default_config() -> BomConfig:
    """Get the default configuration.

    Returns:
        BomConfig with all defaults (all fields None).
    """
    return BomConfig()
