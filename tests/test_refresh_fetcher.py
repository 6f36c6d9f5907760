import asyncio
import random
from datetime import date

import pytest

from tools.web.contracts import SearchResult
from tools.web.factory import create_refresh_fetcher
from tools.web.refresh_fetcher import MockContentRefreshFetcher, SearchBackedRefreshFetcher
from tests.fakes import FakeSearchProvider, mock_search_results

pytestmark = pytest.mark.unit

QUESTION = "What are the effects of microplastics on marine ecosystems?"


def test_mock_templates_interpolate_question_date_and_sources():
    fetcher = MockContentRefreshFetcher(delay_s=0)
    templates = fetcher.templates(QUESTION, ["a.pdf", "https://example.com/result1"])

    assert len(templates) == 3
    assert date.today().isoformat() in templates[0]
    assert f'"{QUESTION}"' in templates[0]
    assert f'"{QUESTION}"' in templates[1]
    assert "(a.pdf, https://example.com/result1)" in templates[2]


def test_mock_fetch_returns_one_of_the_templates():
    fetcher = MockContentRefreshFetcher(delay_s=0, rng=random.Random(7))
    templates = fetcher.templates(QUESTION, ["a.pdf"])

    for _ in range(5):
        assert asyncio.run(fetcher.fetch(QUESTION, ["a.pdf"])) in templates


def test_mock_fetch_is_reproducible_with_seeded_rng():
    first = MockContentRefreshFetcher(delay_s=0, rng=random.Random(42))
    second = MockContentRefreshFetcher(delay_s=0, rng=random.Random(42))

    picks_a = [asyncio.run(first.fetch(QUESTION, [])) for _ in range(4)]
    picks_b = [asyncio.run(second.fetch(QUESTION, [])) for _ in range(4)]
    assert picks_a == picks_b


def test_search_backed_fetch_reports_only_unknown_links():
    provider = FakeSearchProvider(results=mock_search_results())
    fetcher = SearchBackedRefreshFetcher(provider)

    text = asyncio.run(fetcher.fetch(QUESTION, ["https://example.com/result1/"]))

    assert provider.queries == [QUESTION]
    assert text.startswith(f'New material found for "{QUESTION}":')
    assert "[1] Mock Search Result 2 (https://example.com/result2)" in text
    assert "result1" not in text
    assert "    snippet two" in text


def test_search_backed_fetch_with_nothing_new():
    provider = FakeSearchProvider(results=[SearchResult("Known", "https://known.example")])
    fetcher = SearchBackedRefreshFetcher(provider)

    text = asyncio.run(fetcher.fetch(QUESTION, ["https://known.example"]))
    assert text == f'No new material was found for "{QUESTION}" beyond the sources already analyzed.'


def test_refresh_fetcher_factory_modes():
    provider = FakeSearchProvider()
    mock = create_refresh_fetcher("mock", provider, delay_s=0.25)
    assert isinstance(mock, MockContentRefreshFetcher)
    assert mock.delay_s == 0.25
    assert isinstance(create_refresh_fetcher("SEARCH", provider), SearchBackedRefreshFetcher)

    with pytest.raises(ValueError, match="REFRESH_FETCHER_MODE"):
        create_refresh_fetcher("rss", provider)
