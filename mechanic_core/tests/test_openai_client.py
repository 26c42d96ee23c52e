import pytest

from mechanic_core.domain.exceptions import ApiError, AuthenticationError, MalformedResponseError, UnknownModelError
from mechanic_core.domain.models import GenerationConfig, GenerationRequest
from mechanic_core.providers.openai_client import OpenAIClient


class SettingsStub:
    openai_api_key = "sk-" + "o" * 12
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


def _req():
    return GenerationRequest(
        provider="openai",
        model="chat-reply",
        prompt="Reply in a short, friendly sentence: how often to change oil",
        config=GenerationConfig(max_output_tokens=15, temperature=0.4, top_k=5),
    )


def test_openai_client_basic(monkeypatch):
    captured = {}

    class Resp:
        status_code = 200

        def json(self):
            return {
                "choices": [{"index": 0, "message": {"role": "assistant", "content": "Every 5,000 miles.\n"}}],
                "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
            }

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            captured["url"] = url
            captured["payload"] = json
            captured["headers"] = headers
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    res = OpenAIClient(SettingsStub()).generate(_req())

    assert res.text == "Every 5,000 miles."
    assert res.model == "gpt-3.5-turbo"
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == f"Bearer {SettingsStub.openai_api_key}"
    payload = captured["payload"]
    assert payload["messages"] == [{"role": "user", "content": _req().prompt}]
    assert payload["max_tokens"] == 15
    assert payload["temperature"] == 0.4
    assert "top_k" not in payload


def test_openai_client_no_choices_uses_fallback(monkeypatch):
    class Resp:
        status_code = 200

        def json(self):
            return {"choices": [], "usage": {}}

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    res = OpenAIClient(SettingsStub()).generate(_req())
    assert res.text == "I'm here to help! How can I assist?"
    assert res.usage is None


@pytest.mark.parametrize("status, exc_type", [(403, AuthenticationError), (502, ApiError)])
def test_openai_client_http_errors(monkeypatch, status, exc_type):
    class Resp:
        status_code = status
        text = "error"

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    with pytest.raises(exc_type):
        OpenAIClient(SettingsStub()).generate(_req())


@pytest.mark.parametrize(
    "body",
    [
        {"choices": [{"message": "oops"}]},
        {"choices": [], "usage": ["x"]},
        {"choices": {"0": {}}},
    ],
)
def test_openai_client_malformed_shapes(monkeypatch, body):
    class Resp:
        status_code = 200

        def json(self):
            return body

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    with pytest.raises(MalformedResponseError):
        OpenAIClient(SettingsStub()).generate(_req())


def test_openai_client_unknown_model():
    req = GenerationRequest(provider="openai", model="gpt-4", prompt="hi", config=GenerationConfig())
    with pytest.raises(UnknownModelError):
        OpenAIClient(SettingsStub()).generate(req)
