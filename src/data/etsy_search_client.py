"""
Etsy Search Client - Result Count Signal Source
===============================================

Fetches the approximate number of results Etsy displays for a search query.
This is the signal source consumed by the competition estimator:

    client = EtsySearchClient()
    estimator = CompetitionEstimator(signal_source=client.fetch_result_count)

The client never raises on network problems: HTTP errors, timeouts and
unparseable pages are logged and return None, so the pipeline marks the
sample invalid and keeps going. No retries.

Configuration:
    See EtsySearchConfig in src/data/config.py (ETSY_* environment variables).
"""

import logging
import re
import threading
import time
from typing import Any, Dict, Optional

import requests

from .config import EtsySearchConfig

logger = logging.getLogger(__name__)


# "12,345 results", "12 345 résultats", embedded JSON counters
RESULTS_PATTERNS = (
    re.compile(r"(\d[\d,]*)\s+results?", re.IGNORECASE),
    re.compile(r"(\d[\d,\s]*?)\s*r[ée]sultats?", re.IGNORECASE),
    re.compile(r'"total_results":\s*(\d+)', re.IGNORECASE),
    re.compile(r"results_count[\"']?\s*[:=]\s*(\d+)", re.IGNORECASE),
)

MANY_RESULTS_MARKERS = ("many results", "beaucoup de résultats")

# Market (language code) → Accept-Language header
ACCEPT_LANGUAGES = {
    "EN": "en-US,en;q=0.9",
    "FR": "fr-FR,fr;q=0.9,en;q=0.8",
    "DE": "de-DE,de;q=0.9,en;q=0.8",
    "ES": "es-ES,es;q=0.9,en;q=0.8",
    "IT": "it-IT,it;q=0.9,en;q=0.8",
}


def parse_results_count(
    html: str,
    max_plausible_count: int = 10_000_000,
    many_results_estimate: Optional[int] = 50_000,
) -> Optional[int]:
    """
    Extract the result count from an Etsy search page.

    Returns the first count with 0 < count < max_plausible_count, the
    "many results" estimate when Etsy does not show a number, else None.
    """
    for pattern in RESULTS_PATTERNS:
        match = pattern.search(html)
        if not match:
            continue
        digits = re.sub(r"\D", "", match.group(1))
        if not digits:
            continue
        count = int(digits)
        if 0 < count < max_plausible_count:
            return count

    lowered = html.lower()
    if many_results_estimate and any(marker in lowered for marker in MANY_RESULTS_MARKERS):
        return many_results_estimate

    return None


class EtsySearchClient:
    """
    Client for Etsy search result counts.

    Rate limited to one request every `rate_limit_seconds` (default 0.5s).
    """

    def __init__(
        self,
        config: Optional[EtsySearchConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Search configuration (default: from ETSY_* env vars)
            session: Optional requests session (shared connection pool)
        """
        self.config = config or EtsySearchConfig()
        self.session = session or requests.Session()
        self._last_request_time: float = 0
        self._rate_limit_lock = threading.Lock()

        # Stats
        self._requests_made = 0
        self._failures = 0

    def _wait_for_rate_limit(self):
        """Enforce rate limiting between requests (shared across threads)."""
        with self._rate_limit_lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self.config.rate_limit_seconds:
                time.sleep(self.config.rate_limit_seconds - elapsed)
            self._last_request_time = time.time()

    def _count_request(self):
        with self._rate_limit_lock:
            self._requests_made += 1

    def _count_failure(self):
        with self._rate_limit_lock:
            self._failures += 1

    def _headers(self, market: str) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": ACCEPT_LANGUAGES.get(market.upper(), ACCEPT_LANGUAGES["EN"]),
        }

    def fetch_result_count(self, query: str, market: str = "EN") -> Optional[int]:
        """
        Fetch the number of Etsy results for a query.

        Args:
            query: Search string
            market: Market language code (EN, FR, ...)

        Returns:
            Result count, or None if the page could not be fetched or parsed.
        """
        self._wait_for_rate_limit()

        try:
            logger.debug(f"Etsy search request: query='{query}', market={market}")

            response = self.session.get(
                self.config.search_url,
                params={"q": query, "ref": "search_bar"},
                headers=self._headers(market),
                timeout=self.config.request_timeout,
            )
            self._count_request()

            if response.status_code != 200:
                self._count_failure()
                logger.warning(f"Etsy search failed for '{query}': HTTP {response.status_code}")
                return None

            count = parse_results_count(
                response.text,
                max_plausible_count=self.config.max_plausible_count,
                many_results_estimate=self.config.many_results_estimate,
            )
            if count is None:
                self._count_failure()
                logger.warning(f"No result count found on Etsy page for '{query}'")
                return None

            logger.info(f"Etsy: {count:,} results for '{query}'", extra={"query": query})
            return count

        except requests.RequestException as e:
            self._count_failure()
            logger.warning(f"Error fetching Etsy results for '{query}': {e}")
            return None

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        with self._rate_limit_lock:
            return {
                "requests_made": self._requests_made,
                "failures": self._failures,
            }
