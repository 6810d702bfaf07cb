# schema_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with per-request timeout and retry/backoff.

Every network access of a crawl run (robots.txt, sitemaps, pages) goes
through :class:`Fetcher`, so failures surface uniformly as
:class:`~schema_scout.errors.FetchError`.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from schema_scout.config import CrawlOptions
from schema_scout.crawler.models import PageData
from schema_scout.errors import FetchError

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


def build_session(options: CrawlOptions) -> ClientSession:
    """ClientSession with the run's User-Agent and total timeout per request."""
    return ClientSession(
        timeout=ClientTimeout(total=options.timeout),
        headers={"User-Agent": options.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Handles HTTP fetching with retries/backoff and timeout."""

    def __init__(
        self,
        session: ClientSession,
        options: CrawlOptions,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.session = session
        self.options = options
        self._retry_status = retry_status
        self.logger = logging.getLogger("SchemaScout")

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its body.

        Retries transport errors and 5xx/429 responses up to
        ``options.retry_times`` times. Raises FetchError on any other
        status >= 400, on timeout, or once retries are exhausted.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    if status in self._retry_status:
                        raise ClientError(f"retryable status {status}")
                    if status >= 400:
                        raise FetchError(url, f"HTTP {status}", status=status)
                    raw = await resp.read()
                    text = await resp.text(errors="replace")
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    return PageData(url=url, content=text, status=status, content_type=mime, raw=raw)
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, f"timed out after {self.options.timeout}s") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.options.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                backoff = min(60.0, self.options.retry_backoff * 2 ** attempts + random.random() * self.options.retry_backoff)
                self.logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.options.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)
