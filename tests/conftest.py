# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import pytest
import pytest_asyncio
from aiohttp import web

from schema_scout.config import CrawlOptions
from schema_scout.crawler.models import PageData
from schema_scout.logger import init_logging

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@pytest.fixture(autouse=True)
def reset_logger():
    """CliRunner swaps stdout; rebind the logger handlers after every test."""
    yield
    init_logging("WARNING")


@pytest.fixture()
def make_options(tmp_path: Path) -> Callable[..., CrawlOptions]:
    """
    Factory for CrawlOptions tuned for tests: no pacing, no retries,
    artifacts and cache under *tmp_path*.
    """

    def _make(url: str, **overrides) -> CrawlOptions:
        params = dict(
            url=url,
            output=tmp_path / "schemas",
            cache_file=tmp_path / "cache" / "crawledUrls.json",
            delay_ms=0,
            retry_times=0,
            timeout=2.0,
        )
        params.update(overrides)
        return CrawlOptions(**params)

    return _make


class FakePipeline:
    """Records processed URLs, fails selected ones and tracks peak concurrency."""

    def __init__(self, fail: Iterable[str] = (), sleep: float = 0.0, on_process=None) -> None:
        self.fail: Set[str] = set(fail)
        self.sleep = sleep
        self.on_process = on_process
        self.processed: List[str] = []
        self.active = 0
        self.peak = 0

    async def process(self, url: str, options: CrawlOptions) -> Optional[Path]:
        self.processed.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            if self.sleep:
                await asyncio.sleep(self.sleep)
            if self.on_process is not None:
                self.on_process(url)
            if url in self.fail:
                raise RuntimeError(f"boom: {url}")
            return None
        finally:
            self.active -= 1


@pytest.fixture()
def fake_pipeline() -> FakePipeline:
    return FakePipeline()


def text_response(body: str, content_type: str = "text/html", status: int = 200) -> Handler:
    async def handler(_: web.Request) -> web.Response:
        return web.Response(text=body, content_type=content_type, status=status)

    return handler


def status_response(status: int) -> Handler:
    async def handler(_: web.Request) -> web.Response:
        return web.Response(status=status)

    return handler


def urlset_response(*paths: str) -> Handler:
    """Sitemap <urlset> with absolute locations on the serving host."""

    async def handler(request: web.Request) -> web.Response:
        origin = str(request.url.origin())
        entries = "".join(f"<url><loc>{origin}{p}</loc></url>" for p in paths)
        body = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'
        )
        return web.Response(text=body, content_type="application/xml")

    return handler


def sitemap_index_response(*paths: str) -> Handler:
    async def handler(request: web.Request) -> web.Response:
        origin = str(request.url.origin())
        entries = "".join(f"<sitemap><loc>{origin}{p}</loc></sitemap>" for p in paths)
        body = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
        )
        return web.Response(text=body, content_type="application/xml")

    return handler


@pytest_asyncio.fixture
async def serve(unused_tcp_port: int) -> AsyncIterator[Callable[[Dict[str, Handler]], Awaitable[str]]]:
    """Start an aiohttp app with the given GET routes; yields a starter returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(routes: Dict[str, Handler]) -> str:
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "localhost", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://localhost:{unused_tcp_port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = (
        '<html lang="en"><head><title>Home | Acme</title>'
        '<meta name="description" content="Acme widgets"></head>'
        '<body><h1>Home</h1><a href="/about">About</a>'
        '<a href="https://facebook.com/acme">fb</a>'
        '<a href="tel:+1 555 123 4567">call</a></body></html>'
    )
    return PageData(url="http://example.com/", content=html, content_type="text/html")
