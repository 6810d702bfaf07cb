# === FILE: schema_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from aiohttp import ClientSession

from schema_scout.cache import UrlCache
from schema_scout.config import CrawlOptions
from schema_scout.crawler.fetcher import Fetcher, build_session
from schema_scout.crawler.models import CrawledSet, CrawlState, CrawlSummary
from schema_scout.crawler.pipeline import PagePipeline, SchemaPagePipeline
from schema_scout.crawler.robots import fetch_robots_policy
from schema_scout.crawler.sitemap import SitemapResolver
from schema_scout.parser.robots_parser import RobotsPolicy
from schema_scout.utils import remove_duplicates

__all__ = ("CrawlOrchestrator",)


class CrawlOrchestrator:
    """
    Асинхронный обход сайта: sitemap → фильтр robots.txt и кэша → пул воркеров → кэш.

    Один экземпляр обслуживает один запуск. Сбой страницы изолирован в своем
    воркере; кэш сохраняется ровно один раз, даже после отмены или ошибок.
    """

    def __init__(
        self,
        options: CrawlOptions,
        *,
        pipeline: Optional[PagePipeline] = None,
        cache: Optional[UrlCache] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.options = options
        self.cache = cache if cache is not None else UrlCache(options.cache_file)
        self.session = session
        self._own_session = session is None
        self.pipeline: Optional[PagePipeline] = pipeline
        self.fetcher: Optional[Fetcher] = None
        self.robots: Optional[RobotsPolicy] = None
        self.state = CrawlState.INIT
        self.logger = logging.getLogger("SchemaScout")

    async def __aenter__(self) -> CrawlOrchestrator:
        if self.session is None:
            self.session = build_session(self.options)
        self.fetcher = Fetcher(self.session, self.options)
        if self.pipeline is None:
            self.pipeline = SchemaPagePipeline(self.fetcher)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, stop_event: Optional[asyncio.Event] = None) -> CrawlSummary:
        """Полный прогон INIT → DONE. Поднимает StorageError, если кэш нельзя прочитать или записать."""
        if self.fetcher is None or self.pipeline is None:
            raise RuntimeError("Session not initialized")
        stop = stop_event if stop_event is not None else asyncio.Event()
        summary = CrawlSummary(seed=self.options.url)
        start = time.monotonic()

        self._enter(CrawlState.INIT)
        crawled = CrawledSet(self.cache.load())
        self.logger.info("Старт обхода: %s", self.options.url)

        try:
            self._enter(CrawlState.DISCOVER)
            candidates = await self._discover(summary)

            self._enter(CrawlState.FILTER)
            queue_urls = self._filter(candidates, crawled, summary)

            if not queue_urls:
                self.logger.info("No URLs to crawl after filtering")
            elif stop.is_set():
                summary.not_dispatched = len(queue_urls)
            else:
                await self._dispatch(queue_urls, crawled, summary, stop)
        except asyncio.CancelledError:
            summary.cancelled = True
            raise
        finally:
            summary.cancelled = summary.cancelled or stop.is_set()
            self._enter(CrawlState.PERSIST)
            self.cache.save(crawled.snapshot())

        summary.duration = time.monotonic() - start
        self._enter(CrawlState.DONE)
        self.logger.info(
            "Завершено за %.2f с: attempted=%d succeeded=%d failed=%d skipped_cache=%d skipped_robots=%d%s",
            summary.duration, summary.attempted, summary.succeeded, summary.failed,
            summary.skipped_cache, summary.skipped_robots,
            " (cancelled)" if summary.cancelled else "",
        )
        return summary

    # ------------------------------------------------------------------ #
    # Stages                                                             #
    # ------------------------------------------------------------------ #

    async def _discover(self, summary: CrawlSummary) -> List[str]:
        base_url = self.options.base_url
        hints: List[str] = []
        if self.options.respect_robots:
            self.robots, warning = await fetch_robots_policy(self.fetcher, base_url)
            summary.robots_available = self.robots.available
            if warning:
                summary.warnings.append(warning)
            hints = self.robots.sitemaps

        resolver = SitemapResolver(self.fetcher)
        targets = await resolver.resolve(base_url, hints)
        summary.warnings.extend(resolver.warnings)
        summary.sitemap_used = bool(targets)
        if not targets:
            self.logger.info("No sitemap URLs, falling back to seed %s", self.options.url)
            targets = [self.options.url]
        summary.discovered = len(targets)
        return targets

    def _filter(self, candidates: List[str], crawled: CrawledSet, summary: CrawlSummary) -> List[str]:
        result = []
        for url in remove_duplicates(candidates):
            # cached URLs stay skipped even if robots.txt now forbids them
            if url in crawled:
                summary.skipped_cache += 1
            elif not self._is_allowed(url):
                summary.skipped_robots += 1
                self.logger.info("Skipping disallowed URL by robots.txt: %s", url)
            else:
                result.append(url)
        summary.candidates = len(result)
        self.logger.info("Number of URLs to crawl after filtering: %d", len(result))
        return result

    async def _dispatch(
        self, urls: List[str], crawled: CrawledSet, summary: CrawlSummary, stop: asyncio.Event
    ) -> None:
        self._enter(CrawlState.DISPATCH)
        queue: asyncio.Queue[str] = asyncio.Queue()
        for url in urls:
            queue.put_nowait(url)
        workers = [
            asyncio.create_task(self._worker(queue, crawled, summary, stop))
            for _ in range(min(self.options.concurrency, len(urls)))
        ]
        try:
            self._enter(CrawlState.DRAIN)
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    async def _worker(
        self, queue: asyncio.Queue[str], crawled: CrawledSet, summary: CrawlSummary, stop: asyncio.Event
    ) -> None:
        while True:
            try:
                url = await queue.get()
            except asyncio.CancelledError:
                break
            try:
                if stop.is_set():
                    summary.not_dispatched += 1
                    continue
                await self._crawl_url(url, crawled, summary, stop)
            finally:
                queue.task_done()

    async def _crawl_url(self, url: str, crawled: CrawledSet, summary: CrawlSummary, stop: asyncio.Event) -> None:
        if url in crawled:
            summary.skipped_cache += 1
            return
        if not self._is_allowed(url):
            summary.skipped_robots += 1
            self.logger.info("Skipping disallowed URL by robots.txt: %s", url)
            return

        self.logger.info("Processing URL: %s", url)
        summary.attempted += 1
        try:
            artifact = await self.pipeline.process(url, self.options)
        except Exception as exc:
            summary.failed += 1
            summary.failures[url] = str(exc)
            self.logger.error("Error processing %s: %s", url, exc)
        else:
            await crawled.add(url)
            summary.succeeded += 1
            if artifact is not None:
                summary.artifacts[url] = str(artifact)

        await self._pace(stop)

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _is_allowed(self, url: str) -> bool:
        if not self.options.respect_robots or self.robots is None:
            return True
        return self.robots.is_allowed(url, self.options.user_agent)

    def _delay(self) -> float:
        delay = self.options.delay_seconds
        if self.options.respect_robots and self.robots is not None:
            delay = max(delay, self.robots.crawl_delay(self.options.user_agent) or 0.0)
        return delay

    async def _pace(self, stop: asyncio.Event) -> None:
        delay = self._delay()
        if delay <= 0 or stop.is_set():
            return
        try:
            await asyncio.wait_for(stop.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    def _enter(self, state: CrawlState) -> None:
        self.state = state
        self.logger.debug("Crawl state -> %s", state.value)

