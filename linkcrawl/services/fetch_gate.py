from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from linkcrawl.domain.http_response import HttpResponse
from linkcrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)


class FetchGate:
    """Admission-controlled wrapper around the blocking HTTP transport.

    At most `max_concurrent` fetches are in flight at once; further callers
    wait on the semaphore. The transport runs on a private thread pool sized
    to the same limit so a slow server never blocks the event loop.

    Only HTML bodies come back. Transport failures and non-HTML responses
    both yield None, so the caller has exactly one "no page" case to handle.
    """

    def __init__(self, http_service, max_concurrent: int = 100):
        if max_concurrent is None or int(max_concurrent) < 1:
            raise ValueError("max_concurrent must be >= 1")
        self.http_service = http_service
        self.max_concurrent = int(max_concurrent)
        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._executor = ThreadPoolExecutor(max_workers=self.max_concurrent, thread_name_prefix="fetch")
        # Only touched from the event loop thread.
        self.in_flight = 0
        self.peak_in_flight = 0

    async def fetch(self, url: str) -> Optional[str]:
        """Fetch `url` once a slot is free; return the HTML body or None."""
        async with self._semaphore:
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                return await self._fetch_admitted(url)
            finally:
                self.in_flight -= 1

    async def _fetch_admitted(self, url: str) -> Optional[str]:
        logger.debug("Fetching %s", url)
        loop = asyncio.get_running_loop()
        try:
            response: HttpResponse = await loop.run_in_executor(self._executor, self.http_service.fetch, url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e.original)
            return None

        status = response.status_code
        if 300 <= status < 400:
            logger.debug("HTTP warning %s for %s", status, url)
        elif status >= 400:
            logger.debug("HTTP error %s for %s", status, url)

        content_type = (response.content_type or "").lower()
        if "text/html" not in content_type:
            logger.debug("Skipping (not HTML: %s) %s", response.content_type, url)
            return None
        return response.text

    def close(self) -> None:
        """Release the worker threads. Fetches still queued are cancelled."""
        self._executor.shutdown(wait=False, cancel_futures=True)
