"""Runtime content loader fetching JSON over HTTP with bounded retry.

Requests are sequential: an attempt completes before the next is scheduled,
with a fixed delay in between (no jitter, no growth).
"""

import logging
import time
from typing import Any, Optional
from urllib.parse import quote

import requests

from config import settings
from .base import ContentLoader
from .errors import ContentFetchError

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-store"}


class HttpContentLoader(ContentLoader):
    """Fetches `{base_url}/content/{collection}/{name}.json`."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        retry_count: Optional[int] = None,
        retry_delay: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the loader.

        Args:
            base_url: Origin serving /content. Defaults to config setting.
            retry_count: Retries after the first failed attempt (default 3).
            retry_delay: Seconds between attempts (default 1.0).
            timeout: Per-request timeout in seconds.
        """
        self.base_url = (base_url if base_url is not None else settings.base_url).rstrip("/")
        self.retry_count = settings.fetch_retry_count if retry_count is None else retry_count
        self.retry_delay = settings.fetch_retry_delay_seconds if retry_delay is None else retry_delay
        self.timeout = settings.request_timeout_seconds if timeout is None else timeout

    @property
    def source(self) -> str:
        return f"{self.base_url or '(same origin)'}/content"

    def document_url(self, collection: str, name: str) -> str:
        return f"{self.base_url}/content/{collection}/{quote(name, safe='')}.json"

    def fetch_with_retry(self, url: str) -> requests.Response:
        """GET a URL, retrying failures up to `retry_count` times.

        A non-success status counts as a failure.

        Returns:
            The first successful response.

        Raises:
            ContentFetchError: When every attempt failed.
        """
        last_error: Optional[Exception] = None
        attempts = self.retry_count + 1

        for attempt in range(attempts):
            try:
                response = requests.get(url, headers=NO_CACHE_HEADERS, timeout=self.timeout)
                if not response.ok:
                    raise ContentFetchError(
                        url,
                        f"HTTP error! status: {response.status_code}",
                        status_code=response.status_code,
                    )
                return response
            except (requests.RequestException, ContentFetchError) as e:
                last_error = e
                remaining = attempts - attempt - 1
                if remaining > 0:
                    logger.warning(
                        "Retrying fetch for %s, %d attempts remaining...", url, remaining
                    )
                    time.sleep(self.retry_delay)

        status = getattr(last_error, "status_code", None)
        raise ContentFetchError(
            url, f"failed after {attempts} attempts: {last_error}", status_code=status
        ) from last_error

    def read_document(self, collection: str, name: str) -> Any:
        response = self.fetch_with_retry(self.document_url(collection, name))
        return response.json()
