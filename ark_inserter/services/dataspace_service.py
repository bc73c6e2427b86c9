"""DataSpace simple-search client returning candidate entries for a title."""

import logging

import httpx

from ark_inserter.config import DEFAULT_DSPACE_URL, DSPACE_RESULTS_SELECTOR
from ark_inserter.errors import TransportError
from ark_inserter.models.catalog import CandidateEntry
from ark_inserter.services.candidate_extractor import extract_candidates
from ark_inserter.services.dataspace_html_parser import parse_search_results
from ark_inserter.utils.rate_limiter import TokenBucketRateLimiter

logger = logging.getLogger(__name__)

_SEARCH_PATH = "/simple-search"
_SEARCH_TIMEOUT = 30.0  # seconds


class DataSpaceSearchService:
    """Search DataSpace by title and return the scraped result rows.

    Args:
        client: Caller-owned ``httpx.Client``; this service never closes it.
        rate_limiter: Token bucket shared by every DataSpace request.
        base_url: DataSpace root, e.g. ``https://dataspace.princeton.edu``.
        results_selector: CSS selector of the results table.
        quote_query: Send the title as a quoted phrase.
    """

    def __init__(
        self,
        client: httpx.Client,
        rate_limiter: TokenBucketRateLimiter,
        base_url: str = DEFAULT_DSPACE_URL,
        results_selector: str = DSPACE_RESULTS_SELECTOR,
        quote_query: bool = False,
        timeout: float = _SEARCH_TIMEOUT,
    ) -> None:
        self.client = client
        self.rate_limiter = rate_limiter
        self.base_url = base_url
        self.results_selector = results_selector
        self.quote_query = quote_query
        self.timeout = timeout

    @property
    def search_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{_SEARCH_PATH}"

    def search(self, title: str) -> list[CandidateEntry]:
        """Query DataSpace for *title*.

        Returns:
            Candidates in results-table order; empty when the page has no
            results table.

        Raises:
            TransportError: On a transport failure or a non-2xx response.
        """
        url = self.search_url
        query = f'"{title}"' if self.quote_query else title
        message = f"Failed to receive a response from the DSpace URI: {url}"

        try:
            self.rate_limiter.acquire()
            response = self.client.get(
                url, params={"query": query}, timeout=self.timeout
            )
        except httpx.HTTPError as exc:
            logger.error(
                "[DataSpaceService] HTTP error searching title='%s': %s",
                title[:80],
                exc,
            )
            raise TransportError(message, url) from exc

        if not response.is_success:
            logger.error(
                "[DataSpaceService] HTTP %d searching title='%s'",
                response.status_code,
                title[:80],
            )
            raise TransportError(message, url)

        rows = parse_search_results(
            response.content, self.results_selector, encoding=response.encoding
        )
        candidates = list(extract_candidates(rows))
        logger.debug(
            "[DataSpaceService] %d candidates for title='%s'",
            len(candidates),
            title[:80],
        )
        return candidates
