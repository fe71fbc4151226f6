"""
JSearch Client - Fetch job listings from the JSearch API (RapidAPI)

Returns raw job records exactly as the API sends them; all normalization
happens in the filters package. Failures never propagate to callers: they are
logged and surface as an empty result page.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from constants import JSEARCH_HOST, JSEARCH_NUM_PAGES, JSEARCH_TIMEOUT_SECONDS
from jobsift.resilience import RateLimiter, RetryError, resilient_call

logger = logging.getLogger(__name__)


class TransientAPIError(Exception):
    """A failure worth retrying (rate limited, server error, network issue)."""


# HTTP statuses worth retrying
RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


@dataclass
class SearchResult:
    """One page of search results."""
    jobs: List[Dict[str, Any]] = field(default_factory=list)
    total_pages: int = 1
    error: Optional[str] = None


def build_query(query: str, location: str = '', job_type: str = '') -> str:
    """Join the search box, location and job type into one query string."""
    return f"{query or ''} {location or ''} {job_type or ''}".strip()


def _total_pages(payload: Dict[str, Any]) -> int:
    metadata = payload.get('metadata')
    if isinstance(metadata, dict):
        total = metadata.get('total_pages')
        if isinstance(total, int) and not isinstance(total, bool) and total > 0:
            return total
    return 1


class JSearchClient:
    """Thin client for the JSearch /search endpoint."""

    def __init__(
        self,
        api_key: str,
        host: str = JSEARCH_HOST,
        base_url: Optional[str] = None,
        num_pages: int = JSEARCH_NUM_PAGES,
        timeout: float = JSEARCH_TIMEOUT_SECONDS,
        max_retries: int = 3,
        calls_per_minute: int = 30,
        session: Optional[requests.Session] = None,
        retry_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.host = host
        self.base_url = (base_url or f"https://{host}").rstrip('/')
        self.num_pages = num_pages
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.session = session or requests.Session()
        self.rate_limiter = RateLimiter(calls_per_minute=calls_per_minute)

    @classmethod
    def from_config(cls, config: Any) -> 'JSearchClient':
        """Build a client from a Config object."""
        return cls(
            api_key=config.api_key,
            host=config.api_host,
            base_url=config.api_base_url,
            num_pages=config.num_pages,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            calls_per_minute=config.calls_per_minute,
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            'X-RapidAPI-Key': self.api_key,
            'X-RapidAPI-Host': self.host,
        }

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Single GET; raises TransientAPIError for retryable failures."""
        try:
            response = self.session.get(
                f"{self.base_url}/search",
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise TransientAPIError(f"Network error: {e}") from e

        if response.status_code in RETRYABLE_STATUSES:
            raise TransientAPIError(f"HTTP {response.status_code}")

        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Unexpected response body")
        return payload

    def search(self, query: str, location: str = '', job_type: str = '', page: int = 1) -> SearchResult:
        """
        Fetch one page of job listings.

        Args:
            query: Job title or keywords
            location: Optional location text
            job_type: Optional job type keyword (e.g. "remote", "fulltime")
            page: 1-based page number

        Returns:
            SearchResult; on any failure an empty result with `error` set
        """
        if not self.api_key:
            logger.error("RAPIDAPI_KEY is not set")
            return SearchResult(error='API key not configured')

        params = {
            'query': build_query(query, location, job_type),
            'page': str(max(1, page)),
            'num_pages': str(self.num_pages),
        }

        try:
            payload = resilient_call(
                self._get,
                params,
                max_retries=self.max_retries,
                base_delay=self.retry_delay,
                retryable_exceptions=(TransientAPIError,),
                rate_limiter=self.rate_limiter,
            )
        except RetryError as e:
            logger.error(f"JSearch request failed after retries: {e}")
            return SearchResult(error=str(e))
        except requests.HTTPError as e:
            logger.error(f"JSearch HTTP error: {e}")
            return SearchResult(error=str(e))
        except (requests.RequestException, ValueError) as e:
            logger.error(f"JSearch request failed: {e}")
            return SearchResult(error=str(e))

        jobs = payload.get('data') or []
        if not isinstance(jobs, list):
            logger.warning("JSearch returned non-list data; treating as empty")
            jobs = []

        logger.info(f"JSearch query '{params['query'][:50]}' page {params['page']} returned {len(jobs)} jobs")
        return SearchResult(jobs=jobs, total_pages=_total_pages(payload))
