import pytest

from mechanic_core.providers import create_provider
from mechanic_core.providers.gemini_client import GeminiClient
from mechanic_core.providers.openai_client import OpenAIClient
from mechanic_core.providers.registry import get_provider_config


def test_create_provider_default(monkeypatch):
    class DummySettings:
        default_provider = "gemini"
        gemini_api_key = "g" * 12
        http_timeout = 1.0
        gemini_base_url = "https://generativelanguage.googleapis.com/v1beta"
        openai_api_key = None

    monkeypatch.setattr("mechanic_core.providers.settings", DummySettings())
    provider = create_provider()
    assert isinstance(provider, GeminiClient)
    assert provider.display_name == "Gemini AI"


def test_create_provider_explicit(monkeypatch):
    class DummySettings:
        default_provider = "gemini"
        openai_api_key = "o" * 12
        http_timeout = 1.0
        openai_base_url = "https://api.openai.com/v1"
        gemini_api_key = None

    monkeypatch.setattr("mechanic_core.providers.settings", DummySettings())
    provider = create_provider("OpenAI")
    assert isinstance(provider, OpenAIClient)
    assert provider.display_name == "OpenAI"


def test_registry_lookup_case_insensitive():
    assert get_provider_config("GEMINI").models["chat-reply"].provider_model == "gemini-1.5-pro"


def test_create_provider_unknown_name_fails(monkeypatch):
    class DummySettings:
        default_provider = "claude"

    monkeypatch.setattr("mechanic_core.providers.settings", DummySettings())
    with pytest.raises(KeyError):
        create_provider()
    with pytest.raises(KeyError):
        create_provider("mistral")
