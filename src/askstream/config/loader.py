"""
Session configuration management utilities.

This module provides functions to load session settings from a YAML
configuration file at the project root. Each top-level key names one
session profile; fields left out fall back to SessionConfig defaults.
"""

import logging
import os
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from askstream.session.types import SessionConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "askstream_config.yaml"

_FIELD_TYPES: dict[str, type] = {
    "max_context_messages": int,
    "default_model": str,
    "user_id": str,
    "title_max_length": int,
    "share_path_prefix": str,
}


def get_config_path() -> Path:
    """
    Get the path to the session configuration file.

    Looks for askstream_config.yaml in the current working directory (project root).
    """
    return Path(os.getcwd()) / CONFIG_FILENAME


def load_session_config(config_key: str = "default") -> SessionConfig:
    """
    Load a session profile from YAML file at project root.

    Args:
        config_key: The key identifying the profile in the config file

    Returns:
        SessionConfig built from the profile

    Raises:
        FileNotFoundError: If askstream_config.yaml doesn't exist
        ValueError: If the profile is missing, has unknown fields or wrong types
        RuntimeError: If the file cannot be read or parsed
    """
    config_path = get_config_path()
    logger.debug(f"Loading config from: {config_path}")

    if not config_path.exists():
        raise FileNotFoundError(
            f"{CONFIG_FILENAME} not found at {config_path}. "
            f"Copy {CONFIG_FILENAME}.example to {CONFIG_FILENAME} and configure your sessions."
        )

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}

        profile = config.get(config_key)

        if profile is None:
            raise ValueError(
                f"Session config '{config_key}' not found in {config_path}. "
                f"Please add the session configuration."
            )
        if not isinstance(profile, dict):
            raise ValueError(
                f"Session config '{config_key}' in {config_path} must be a mapping"
            )

        _validate_profile(config_key, profile)
        return SessionConfig(**profile)
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading session config: {e}")


def _validate_profile(config_key: str, profile: dict[str, Any]) -> None:
    known = {f.name for f in fields(SessionConfig)}
    unknown = sorted(set(profile) - known)
    if unknown:
        raise ValueError(
            f"Unknown fields for session config '{config_key}': {', '.join(unknown)}"
        )

    wrong_types = []
    for name, value in profile.items():
        expected = _FIELD_TYPES[name]
        # bool is an int subclass; YAML true/false is never a valid count
        if isinstance(value, bool) or not isinstance(value, expected):
            wrong_types.append(f"{name} (expected {expected.__name__})")

    if wrong_types:
        raise ValueError(
            f"Invalid fields for session config '{config_key}': {', '.join(wrong_types)}"
        )
