"""
Session configuration utilities.

Usage:
    from askstream.config import load_session_config

    config = load_session_config("default")
"""

from askstream.config.loader import get_config_path, load_session_config

__all__ = ["load_session_config", "get_config_path"]
