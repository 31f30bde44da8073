"""Configuration and override file loading for license-bom."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from license_bom.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_bom.exceptions import ConfigurationError
from license_bom.models.config import BomConfig, ProjectOverride

logger = logging.getLogger(__name__)

_OVERRIDES_ADAPTER = TypeAdapter(list[ProjectOverride])


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in the specified directory.

    Searches for `.license-bom.yaml` first, then `.license-bom.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def load_config_file(path: Path) -> BomConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated BomConfig instance.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or fails Pydantic validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    if not content.strip():
        return get_default_config()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in '{path}': {e}"
        ) from e

    # YAML holding only comments parses to None
    if data is None:
        return get_default_config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        config = BomConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {_format_validation_errors(e)}"
        ) from e

    logger.debug("Loaded configuration from %s", path)
    return config


def _format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


def load_config(config_path: str | None = None) -> BomConfig:
    """Load configuration from file or use defaults.

    If a config_path is provided, loads from that file.
    Otherwise, searches for a configuration file in the current directory.
    If no file is found, returns default configuration.

    Args:
        config_path: Optional path to configuration file.

    Returns:
        BomConfig with loaded or default values.

    Raises:
        ConfigurationError: If the selected configuration file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file()
    if discovered is not None:
        return load_config_file(discovered)

    return get_default_config()


def load_override_file(path: Path) -> list[ProjectOverride]:
    """Load override entries from a JSON file.

    The file holds an array of ``{"project": ..., "licenses": [{"name": ...}]}``
    objects, the same shape as the ``projects`` of a JSON report.

    Args:
        path: Path to the override file.

    Returns:
        Override entries in file order.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read override file '{path}': {e}") from e

    if not content.strip():
        return []

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in override file '{path}': {e}") from e

    try:
        overrides = _OVERRIDES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid override file '{path}': {_format_validation_errors(e)}"
        ) from e

    logger.debug("Loaded %d overrides from %s", len(overrides), path)
    return overrides
