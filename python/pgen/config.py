"""
Configuration file discovery and persistence for PGen.

Rules are stored as a JSON object in the user's application directory,
normally ``~/.config/PGen/PGen.json`` on Linux.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

import click

from .exceptions import ConfigurationError
from .rules import DEFAULT_RULES, Rules

logger = logging.getLogger(__name__)

APP_NAME = "PGen"
CONFIG_FILE_NAME = "PGen.json"
CONFIG_DIR_ENV = "PGEN_CONFIG_DIR"


def get_config_dir() -> Path:
    """Directory holding the user configuration, PGEN_CONFIG_DIR wins when set."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(click.get_app_dir(APP_NAME))


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def load_rules(path: Union[str, Path]) -> Rules:
    """
    Load rules from a JSON configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated rules

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)

    if not path.exists():
        raise ConfigurationError(f"{path} does not exist.")
    if not path.is_file():
        raise ConfigurationError(f"{path} is not a file.")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Couldn't read {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Couldn't parse {path}: {e}") from e

    try:
        rules = Rules.from_dict(data)
    except ConfigurationError as e:
        raise ConfigurationError(f"Couldn't parse {path}: {e}") from e

    logger.debug(f"Loaded rules from {path}")
    return rules


def save_rules(rules: Rules, path: Union[str, Path]) -> None:
    """
    Write rules to a JSON configuration file, creating parent directories.

    Raises:
        ConfigurationError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(rules.to_dict(), indent=4) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Couldn't write to file {path}: {e}") from e

    logger.debug(f"Saved rules to {path}")


def load_or_create_config(path: Optional[Union[str, Path]] = None) -> Rules:
    """
    Load the user configuration, writing the defaults first if it is missing.

    Args:
        path: Configuration file (defaults to get_config_path())
    """
    path = Path(path) if path is not None else get_config_path()

    if not path.exists():
        logger.info(f"Creating default configuration at {path}")
        save_rules(DEFAULT_RULES, path)
        return DEFAULT_RULES

    return load_rules(path)


def resolve_config_argument(value: Union[str, Path]) -> Path:
    """
    Resolve a configuration path given on the command line.

    The value is used as-is when it exists, otherwise it is looked up
    relative to the current working directory.

    Raises:
        ConfigurationError: If neither location exists
    """
    path = Path(value).expanduser()
    if path.exists():
        return path

    candidate = Path.cwd() / path
    if candidate.exists():
        return candidate

    raise ConfigurationError(f"File {value} does not exist")
