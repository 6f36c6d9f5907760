"""Provider adapters with the vendor SDK clients replaced by in-memory fakes."""

from types import SimpleNamespace

import openai
import pytest

from api import google_gemini_client, openai_client
from api.factory import create_llm_client
from api.google_gemini_client import GeminiClient
from api.openai_client import OpenAIClient
from config.config import Config
from models.errors import UpstreamError
from models.research import Report

pytestmark = pytest.mark.unit


# -------------------------------------------------------------------
# Fake SDK clients
# -------------------------------------------------------------------


class FakeGenaiModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return self.response


def _gemini_response(text, finish="STOP"):
    return SimpleNamespace(
        text=text,
        usage_metadata=SimpleNamespace(prompt_token_count=11, candidates_token_count=7, total_token_count=18),
        candidates=[SimpleNamespace(finish_reason=SimpleNamespace(name=finish))],
    )


@pytest.fixture
def genai_models(monkeypatch):
    models = FakeGenaiModels(response=_gemini_response('{"ok": true}'))
    monkeypatch.setattr(
        google_gemini_client.genai, "Client", lambda api_key: SimpleNamespace(models=models)
    )
    return models


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def create(self, **params):
        self.calls.append(params)
        if self.error:
            raise self.error
        return self.response


def _openai_response(content, finish_reason="stop"):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=5, completion_tokens=6, total_tokens=11),
    )


@pytest.fixture
def completions(monkeypatch):
    fake = FakeCompletions(response=_openai_response('{"ok": true}'))
    monkeypatch.setattr(
        openai_client.openai,
        "OpenAI",
        lambda api_key: SimpleNamespace(chat=SimpleNamespace(completions=fake)),
    )
    return fake


# -------------------------------------------------------------------
# Gemini
# -------------------------------------------------------------------


def test_gemini_structured_request_uses_json_mode(genai_models):
    client = GeminiClient(api_key="key", model_name="gemini-2.5-flash", temperature=0.1)

    result = client.generate("PROMPT", response_schema=Report)

    call = genai_models.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert call["contents"] == "PROMPT"
    assert call["config"]["response_mime_type"] == "application/json"
    assert call["config"]["response_schema"] is Report
    assert call["config"]["temperature"] == 0.1
    assert result.text == '{"ok": true}'
    assert result.provider == "gemini"
    assert result.token_usage.total_tokens == 18
    assert result.finish_reason == "stop"


def test_gemini_plain_request_has_no_schema(genai_models):
    GeminiClient(api_key="key").generate("PROMPT")
    assert "response_schema" not in genai_models.calls[0]["config"]


def test_gemini_truncation_is_reported(genai_models):
    genai_models.response = _gemini_response('{"partial": ', finish="MAX_TOKENS")
    assert GeminiClient(api_key="key").generate("PROMPT").is_truncated


def test_gemini_failure_becomes_upstream(genai_models):
    genai_models.error = RuntimeError("403 PERMISSION_DENIED")

    with pytest.raises(UpstreamError, match="PERMISSION_DENIED"):
        GeminiClient(api_key="key").generate("PROMPT")


def test_gemini_empty_text_becomes_upstream(genai_models):
    genai_models.response = _gemini_response(None)

    with pytest.raises(UpstreamError, match="empty"):
        GeminiClient(api_key="key").generate("PROMPT")


# -------------------------------------------------------------------
# OpenAI
# -------------------------------------------------------------------


def test_openai_structured_request_sends_schema(completions):
    client = OpenAIClient(api_key="sk-test")

    result = client.generate("PROMPT", response_schema=Report)

    params = completions.calls[0]
    assert params["response_format"] == {"type": "json_object"}
    assert params["messages"][0]["role"] == "system"
    assert "key_takeaways" in params["messages"][0]["content"]
    assert params["messages"][1] == {"role": "user", "content": "PROMPT"}
    assert result.token_usage.total_tokens == 11
    assert result.model == "gpt-4o-mini"


def test_openai_failure_becomes_upstream(completions):
    completions.error = openai.OpenAIError("rate limited")

    with pytest.raises(UpstreamError, match="rate limited"):
        OpenAIClient(api_key="sk-test").generate("PROMPT")


def test_openai_empty_reply_becomes_upstream(completions):
    completions.response = _openai_response("")

    with pytest.raises(UpstreamError, match="empty"):
        OpenAIClient(api_key="sk-test").generate("PROMPT")


# -------------------------------------------------------------------
# Factory
# -------------------------------------------------------------------


def test_factory_builds_selected_client(monkeypatch, completions):
    monkeypatch.setenv("MODEL_TYPE", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    assert isinstance(create_llm_client(Config()), OpenAIClient)


def test_factory_builds_gemini(mock_env, genai_models):
    client = create_llm_client(Config())
    assert isinstance(client, GeminiClient)
    assert client.model_name == "gemini-2.5-flash"


def test_factory_requires_key():
    with pytest.raises(ValueError, match="GOOGLE_GEMINI_API_KEY"):
        create_llm_client(Config())


def test_factory_rejects_unknown_model_type(monkeypatch):
    monkeypatch.setenv("MODEL_TYPE", "llama")
    with pytest.raises(ValueError, match="Unsupported MODEL_TYPE"):
        create_llm_client(Config())


def test_base_client_requires_api_key():
    with pytest.raises(ValueError, match="API key is required"):
        OpenAIClient(api_key="")
