import pytest
from pydantic import ValidationError

from mechanic_core.config.settings import Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("MECHANIC_CONFIG_FILE", "/nonexistent/config.yaml")
    s = Settings(_env_file=None)
    assert s.history_limit == 20
    assert s.generation_max_output_tokens == 15
    assert s.generation_top_k == 5
    assert "car wash" in s.domain_keywords


def test_settings_from_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("default_provider: OpenAI\nhistory_limit: 5\nservice_keywords: [tow]\n", encoding="utf-8")
    monkeypatch.setenv("MECHANIC_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("DEFAULT_PROVIDER", raising=False)
    monkeypatch.delenv("HISTORY_LIMIT", raising=False)
    s = Settings(_env_file=None)
    assert s.default_provider == "openai"
    assert s.history_limit == 5
    assert s.service_keywords == ["tow"]


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("port: 5000\n", encoding="utf-8")
    monkeypatch.setenv("MECHANIC_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("PORT", "6000")
    assert Settings(_env_file=None).port == 6000


def test_short_api_key_rejected(monkeypatch):
    monkeypatch.setenv("MECHANIC_CONFIG_FILE", "/nonexistent/config.yaml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, gemini_api_key="short")
