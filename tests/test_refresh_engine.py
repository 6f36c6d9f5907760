import asyncio

import pytest

from models.errors import SchemaViolationError, UpstreamError
from models.research import RefreshDecision, RefreshResult
from orchestrator.refresh import AnswerRefreshEngine, resolve_refresh
from orchestrator.structured_output import StructuredOutputPolicy, StructuredOutputRunner
from tests.fakes import FakeFetcher, FakeLLMClient

pytestmark = pytest.mark.unit

QUESTION = "What are the effects of microplastics on marine ecosystems?"


def _engine(fetcher, replies):
    client = FakeLLMClient(replies)
    runner = StructuredOutputRunner(client, StructuredOutputPolicy(max_attempts=2, timeout_s=5))
    return client, AnswerRefreshEngine(fetcher, runner)


# -------------------------------------------------------------------
# resolve_refresh
# -------------------------------------------------------------------


def test_resolve_keeps_current_answer_when_no_update_needed():
    result = resolve_refresh("X", RefreshDecision(needs_update=False, updated_answer="something else"))
    assert result == RefreshResult(updated_answer="X", is_updated=False)


def test_resolve_applies_update():
    result = resolve_refresh("X", RefreshDecision(needs_update=True, updated_answer="X, revised"))
    assert result == RefreshResult(updated_answer="X, revised", is_updated=True)


def test_resolve_ignores_blank_or_identical_update():
    blank = resolve_refresh("X", RefreshDecision(needs_update=True, updated_answer="   "))
    same = resolve_refresh("X", RefreshDecision(needs_update=True, updated_answer=" X "))

    assert blank == RefreshResult(updated_answer="X", is_updated=False)
    assert same == RefreshResult(updated_answer="X", is_updated=False)


# -------------------------------------------------------------------
# Engine
# -------------------------------------------------------------------


def test_refresh_without_update_returns_answer_unchanged(fake_fetcher):
    client, engine = _engine(fake_fetcher, [{"needs_update": False, "updated_answer": "ignored"}])

    result = asyncio.run(engine.refresh(QUESTION, "X", ["a.pdf"]))

    assert result.updated_answer == "X"
    assert result.is_updated is False
    assert fake_fetcher.calls == [(QUESTION, ["a.pdf"])]


def test_refresh_with_update():
    fetcher = FakeFetcher(content="A 2026 survey found microplastics in deep-sea sediments.")
    client, engine = _engine(
        fetcher, [{"needs_update": True, "updated_answer": "Revised summary covering deep-sea sediments."}]
    )

    result = asyncio.run(engine.refresh(QUESTION, "Original summary.", ["a.pdf"]))

    assert result.is_updated is True
    assert result.updated_answer == "Revised summary covering deep-sea sediments."
    prompt = client.prompts[0]
    assert "Current Answer: Original summary." in prompt
    assert "A 2026 survey found microplastics in deep-sea sediments." in prompt
    assert "Source URLs: a.pdf" in prompt


def test_refresh_without_sources_says_so(fake_fetcher):
    client, engine = _engine(fake_fetcher, [{"needs_update": False, "updated_answer": "X"}])

    asyncio.run(engine.refresh(QUESTION, "X"))

    assert "Source URLs: No source URLs provided." in client.prompts[0]
    assert fake_fetcher.calls == [(QUESTION, [])]


def test_fetch_failure_becomes_upstream_error():
    client, engine = _engine(FakeFetcher(error=RuntimeError("feed offline")), [])

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(engine.refresh(QUESTION, "X"))
    assert exc_info.value.source == "fetcher"
    assert client.prompts == []


def test_malformed_decision_raises_schema_violation(fake_fetcher):
    _, engine = _engine(fake_fetcher, ['{"needs_update": "maybe"}', "no"])

    with pytest.raises(SchemaViolationError):
        asyncio.run(engine.refresh(QUESTION, "X"))
