"""Tests for provider availability."""

import pytest

from askstream.providers import PROVIDER_REQUIREMENTS, ProviderRegistry, is_provider_enabled
from askstream.session import ProviderAvailability


class TestProviderRegistry:
    def test_implements_protocol(self):
        assert isinstance(ProviderRegistry({}), ProviderAvailability)

    def test_enabled_when_key_set(self):
        registry = ProviderRegistry({"OPENAI_API_KEY": "sk-test"})

        assert registry.is_provider_enabled("openai") is True
        assert registry.is_provider_enabled("anthropic") is False

    def test_empty_value_counts_as_missing(self):
        registry = ProviderRegistry({"OPENAI_API_KEY": ""})

        assert registry.is_provider_enabled("openai") is False

    @pytest.mark.parametrize("provider", ["azure", "openai-compatible"])
    def test_all_variables_required(self, provider):
        first, second = PROVIDER_REQUIREMENTS[provider]

        assert ProviderRegistry({first: "x"}).is_provider_enabled(provider) is False
        assert ProviderRegistry({first: "x", second: "y"}).is_provider_enabled(provider) is True

    def test_ollama_needs_base_url(self):
        registry = ProviderRegistry({"OLLAMA_BASE_URL": "http://localhost:11434"})

        assert registry.is_provider_enabled("ollama") is True

    def test_unknown_provider(self):
        assert ProviderRegistry({"OPENAI_API_KEY": "x"}).is_provider_enabled("mystery") is False

    def test_enabled_providers(self):
        registry = ProviderRegistry({"GROQ_API_KEY": "g", "OPENAI_API_KEY": "o"})

        assert registry.enabled_providers() == ["openai", "groq"]


class TestFromEnv:
    def test_reads_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ANTHROPIC_API_KEY=from-file\n")

        registry = ProviderRegistry.from_env(env_file)

        assert registry.is_provider_enabled("anthropic") is True

    def test_process_env_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "")
        env_file = tmp_path / ".env"
        env_file.write_text("GROQ_API_KEY=from-file\n")

        registry = ProviderRegistry.from_env(env_file)

        assert registry.is_provider_enabled("groq") is False

    def test_missing_dotenv_uses_process_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DEEPSEEK_API_KEY", "d")

        registry = ProviderRegistry.from_env()

        assert registry.is_provider_enabled("deepseek") is True


class TestModuleHelper:
    def test_uses_process_environment(self, monkeypatch):
        monkeypatch.setenv("FIREWORKS_API_KEY", "f")

        assert is_provider_enabled("fireworks") is True

        monkeypatch.delenv("FIREWORKS_API_KEY")
        assert is_provider_enabled("fireworks") is False
