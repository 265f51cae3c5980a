"""
Model provider availability, read from environment variables.

A provider is enabled when every variable it needs is set and non-empty.
Values from a .env file are merged under the process environment (the
process environment wins, like load_dotenv without override).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)

PROVIDER_REQUIREMENTS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "google": ("GOOGLE_GENERATIVE_AI_API_KEY",),
    "groq": ("GROQ_API_KEY",),
    "ollama": ("OLLAMA_BASE_URL",),
    "azure": ("AZURE_API_KEY", "AZURE_RESOURCE_NAME"),
    "deepseek": ("DEEPSEEK_API_KEY",),
    "fireworks": ("FIREWORKS_API_KEY",),
    "openai-compatible": (
        "OPENAI_COMPATIBLE_API_KEY",
        "OPENAI_COMPATIBLE_API_BASE_URL",
    ),
}


class ProviderRegistry:
    """
    Environment-backed provider check.

    Example:
        registry = ProviderRegistry.from_env()
        if not registry.is_provider_enabled("openai"):
            ...
    """

    def __init__(self, environ: Mapping[str, str | None] | None = None):
        self._environ: dict[str, str | None] = dict(
            os.environ if environ is None else environ
        )

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "ProviderRegistry":
        """Build from a .env file (searched for when no path is given) plus os.environ."""
        if dotenv_path is None:
            dotenv_path = find_dotenv(usecwd=True)
        values: dict[str, str | None] = dict(dotenv_values(dotenv_path)) if dotenv_path else {}
        values.update(os.environ)
        return cls(values)

    def is_provider_enabled(self, provider_id: str) -> bool:
        required = PROVIDER_REQUIREMENTS.get(provider_id)
        if required is None:
            logger.warning(f"Unknown model provider: {provider_id}")
            return False

        missing = [name for name in required if not self._environ.get(name)]
        if missing:
            logger.debug(f"Provider {provider_id} disabled, missing: {', '.join(missing)}")
            return False
        return True

    def enabled_providers(self) -> list[str]:
        return [p for p in PROVIDER_REQUIREMENTS if self.is_provider_enabled(p)]


def is_provider_enabled(provider_id: str) -> bool:
    """Check a provider against the current process environment."""
    return ProviderRegistry().is_provider_enabled(provider_id)
