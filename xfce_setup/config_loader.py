# Gentoo-Xfce-Setup/xfce_setup/config_loader.py

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from xfce_setup.config import DEFAULT_CONFIG
from xfce_setup.logger_utils import app_logger


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be used."""


def load_configuration(
    config_file: Optional[Union[str, Path]] = None,
    must_exist: bool = False
) -> Dict[str, Any]:
    """
    Loads the JSON configuration and merges it over DEFAULT_CONFIG.

    A missing file falls back to the defaults, which describe a complete Xfce install,
    unless must_exist is set (an explicitly requested file), in which case ConfigError is raised.
    Unknown keys are logged and ignored.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_file is None:
        app_logger.info("No configuration file given, using built-in defaults.")
        return config

    config_path = Path(config_file)
    if not config_path.is_file():
        if must_exist:
            raise ConfigError(f"Configuration file '{config_path}' not found.")
        app_logger.warning(f"Configuration file '{config_path}' not found, using built-in defaults.")
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        app_logger.error(f"Error loading configuration file '{config_path}': {e}")
        raise ConfigError(f"Could not load configuration file '{config_path}': {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file '{config_path}' must contain a JSON object.")

    for key, value in loaded.items():
        if key not in DEFAULT_CONFIG:
            app_logger.warning(f"Ignoring unknown configuration key '{key}' in '{config_path}'.")
            continue
        config[key] = value

    _validate(config, config_path)
    app_logger.info(f"Configuration loaded from '{config_path}'.")
    return config


def _validate(config: Dict[str, Any], config_path: Path):
    for key in ("packages", "emerge_args", "groups", "legacy_groups", "services"):
        value = config[key]
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError(f"'{key}' in '{config_path}' must be a list of strings.")
    for key in ("profile", "make_conf_path", "use_flags_line", "xinitrc_content"):
        if not isinstance(config[key], str) or not config[key]:
            raise ConfigError(f"'{key}' in '{config_path}' must be a non-empty string.")
    for key in ("strict", "idempotent_use_flags", "assume_yes"):
        if not isinstance(config[key], bool):
            raise ConfigError(f"'{key}' in '{config_path}' must be true or false.")
    if config["skip_installed"] is not None and not isinstance(config["skip_installed"], bool):
        raise ConfigError(f"'skip_installed' in '{config_path}' must be true, false or null.")


def skip_installed_enabled(config: Dict[str, Any]) -> bool:
    """The pre-installation query is on in strict mode unless configured explicitly."""
    skip = config.get("skip_installed")
    return bool(config.get("strict")) if skip is None else bool(skip)


def groups_for(config: Dict[str, Any]):
    """Strict mode manages the extra 'audio' group; legacy mode manages cdrom, cdrw and usb only."""
    return list(config["groups"] if config.get("strict") else config["legacy_groups"])
