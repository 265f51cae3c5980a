"""
Model provider availability.

Usage:
    from askstream.providers import ProviderRegistry

    registry = ProviderRegistry.from_env()
    registry.is_provider_enabled("openai")
"""

from .registry import PROVIDER_REQUIREMENTS, ProviderRegistry, is_provider_enabled

__all__ = ["ProviderRegistry", "is_provider_enabled", "PROVIDER_REQUIREMENTS"]
