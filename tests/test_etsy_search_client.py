"""
Tests for the Etsy search result-count client.

No network: the requests session is replaced by a fake.
"""

import threading
import time
from unittest.mock import patch

import pytest
import requests

from src.data.config import EtsySearchConfig
from src.data.etsy_search_client import EtsySearchClient, parse_results_count


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Records calls and replays canned responses (or raises)."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def config():
    return EtsySearchConfig(
        search_url="https://etsy.test/search",
        request_timeout=3.0,
        rate_limit_seconds=0.0,
    )


class TestParseResultsCount:

    @pytest.mark.parametrize("html,expected", [
        ("<span>12,345 results</span>", 12345),
        ("<span>1 result</span>", 1),
        ("<span>1 234 résultats</span>", 1234),
        ('{"total_results": 8812, "page": 1}', 8812),
        ("window.data = {results_count: 450}", 450),
    ])
    def test_counts_parsed(self, html, expected):
        assert parse_results_count(html) == expected

    def test_many_results_marker(self):
        assert parse_results_count("<p>Many results for your search</p>") == 50_000
        assert parse_results_count("<p>many results</p>", many_results_estimate=None) is None

    def test_implausible_count_rejected(self):
        assert parse_results_count("99,999,999 results", max_plausible_count=10_000_000) is None

    def test_no_count(self):
        assert parse_results_count("<html><body>Nothing here</body></html>") is None


class TestEtsySearchClient:

    def test_fetch_result_count(self, config):
        session = FakeSession([FakeResponse(200, "<span>5,120 results</span>")])
        client = EtsySearchClient(config, session=session)

        assert client.fetch_result_count("bracelet silver", market="FR") == 5120

        call = session.calls[0]
        assert call["url"] == "https://etsy.test/search"
        assert call["params"] == {"q": "bracelet silver", "ref": "search_bar"}
        assert call["timeout"] == 3.0
        assert call["headers"]["Accept-Language"].startswith("fr-FR")

    def test_unknown_market_falls_back_to_english(self, config):
        session = FakeSession([FakeResponse(200, "10 results")])
        EtsySearchClient(config, session=session).fetch_result_count("mug", market="JP")
        assert session.calls[0]["headers"]["Accept-Language"].startswith("en-US")

    def test_http_error_returns_none(self, config):
        session = FakeSession([FakeResponse(503, "")])
        client = EtsySearchClient(config, session=session)
        assert client.fetch_result_count("mug") is None
        assert client.get_stats() == {"requests_made": 1, "failures": 1}

    def test_unparseable_page_returns_none(self, config):
        session = FakeSession([FakeResponse(200, "<html>captcha</html>")])
        assert EtsySearchClient(config, session=session).fetch_result_count("mug") is None

    def test_timeout_returns_none(self, config):
        session = FakeSession([requests.Timeout("timed out")])
        client = EtsySearchClient(config, session=session)
        assert client.fetch_result_count("mug") is None
        assert client.get_stats()["failures"] == 1


class TestEtsySearchConfig:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ETSY_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("ETSY_MANY_RESULTS_ESTIMATE", "1000")
        config = EtsySearchConfig()
        assert config.request_timeout == 2.5
        assert config.many_results_estimate == 1000

    def test_invalid_timeout_rejected(self):
        with pytest.raises(ValueError):
            EtsySearchConfig(request_timeout=0)

    def test_non_numeric_env_rejected(self, monkeypatch):
        monkeypatch.setenv("ETSY_MAX_PLAUSIBLE_COUNT", "lots")
        with pytest.raises(ValueError, match="ETSY_MAX_PLAUSIBLE_COUNT"):
            EtsySearchConfig()


class TestRateLimit:

    def test_waits_between_requests(self):
        config = EtsySearchConfig(rate_limit_seconds=0.5)
        session = FakeSession([FakeResponse(200, "10 results"), FakeResponse(200, "20 results")])
        client = EtsySearchClient(config, session=session)

        with patch("src.data.etsy_search_client.time.sleep") as sleep:
            client.fetch_result_count("mug")
            client.fetch_result_count("cup")

        assert sleep.call_count == 1
        assert 0 < sleep.call_args[0][0] <= 0.5

    def test_concurrent_fetches_keep_minimum_delay(self):
        config = EtsySearchConfig(rate_limit_seconds=0.2)
        call_times = []

        class TimingSession:
            def get(self, url, params=None, headers=None, timeout=None):
                call_times.append(time.monotonic())
                return FakeResponse(200, "10 results")

        client = EtsySearchClient(config, session=TimingSession())
        barrier = threading.Barrier(3)

        def fetch():
            barrier.wait()
            client.fetch_result_count("mug")

        threads = [threading.Thread(target=fetch) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        call_times.sort()
        gaps = [b - a for a, b in zip(call_times, call_times[1:])]
        assert len(gaps) == 2
        assert min(gaps) >= 0.15
        assert client.get_stats() == {"requests_made": 3, "failures": 0}
