"""Configuration management for timeline-converter."""

import logging
import os
import tomllib

from pathlib import Path
from typing import Any

import tomli_w

from pydantic import ValidationError

from timeline_converter.constants import (
    APP_DIR,
    DEFAULT_OUTPUT_BASENAME,
    DEFAULT_OUTPUT_DIR,
)
from timeline_converter.models.results import ProcessingOptions

logger = logging.getLogger(__name__)

# "section.key" -> value type accepted by `config set`
SETTINGS: dict[str, type] = {
    "processing.remove_activities": bool,
    "processing.remove_duplicates": bool,
    "processing.split_files": bool,
    "output.directory": str,
    "output.basename": str,
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.timeline-converter/config.toml
    """
    return APP_DIR / "config.toml"


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if file doesn't exist
        or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Save configuration to TOML file using atomic write.

    Creates the parent directory if it doesn't exist.
    Uses temp file + rename for atomic operation.

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def parse_setting_value(key: str, raw: str) -> bool | str:
    """
    Convert a command-line string into the type a setting expects.

    Raises:
        KeyError: If the setting is unknown
        ValueError: If the value does not fit the setting's type
    """
    if key not in SETTINGS:
        known = ", ".join(sorted(SETTINGS))
        raise KeyError(f"Unknown setting '{key}'. Known settings: {known}")

    if SETTINGS[key] is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"'{key}' expects true/false, got '{raw}'")
    return raw


def set_setting(key: str, raw: str) -> None:
    """Validate and persist a single ``section.key`` setting."""
    value = parse_setting_value(key, raw)
    section, name = key.split(".", 1)

    config = load_config()
    config.setdefault(section, {})[name] = value
    save_config(config)


def unset_setting(key: str) -> bool:
    """
    Remove a ``section.key`` setting.

    Empty sections are dropped; an empty config deletes the file.

    Returns:
        True if the setting existed
    """
    section, _, name = key.partition(".")
    config = load_config()

    if section not in config or name not in config[section]:
        return False

    del config[section][name]
    if not config[section]:
        del config[section]

    if not config:
        config_path = get_config_path()
        if config_path.exists():
            config_path.unlink()
    else:
        save_config(config)
    return True


def get_processing_defaults() -> ProcessingOptions:
    """
    Build ProcessingOptions from the [processing] section.

    Invalid values are ignored with a warning and built-in defaults used.
    """
    section = load_config().get("processing", {})
    if not isinstance(section, dict):
        return ProcessingOptions()

    known = {k: v for k, v in section.items() if k in ProcessingOptions.model_fields}
    try:
        return ProcessingOptions(**known)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid [processing] config: {e}")
        return ProcessingOptions()


def get_output_defaults() -> tuple[str, str]:
    """
    Get the default output directory and basename from [output].

    Returns:
        (directory, basename)
    """
    section = load_config().get("output", {})
    if not isinstance(section, dict):
        section = {}
    directory = str(section.get("directory") or DEFAULT_OUTPUT_DIR)
    basename = str(section.get("basename") or DEFAULT_OUTPUT_BASENAME)
    return directory, basename
