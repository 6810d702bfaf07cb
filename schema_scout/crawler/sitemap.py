# schema_scout/crawler/sitemap.py
"""
Sitemap Resolver: turns ``{base_url}/sitemap.xml`` into a flat list of crawl targets.

A ``urlset`` yields its ``<loc>`` entries; a ``sitemapindex`` is expanded one
level: each referenced ``urlset`` is fetched and concatenated in document
order. Nothing here raises: a missing or broken sitemap gives an empty list,
and a broken nested sitemap is logged and skipped.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from urllib.parse import urljoin

from schema_scout.crawler.fetcher import Fetcher
from schema_scout.errors import DiscoveryError, FetchError
from schema_scout.parser.sitemap_parser import SitemapDocument, parse_sitemap
from schema_scout.utils import to_crawl_target

logger = logging.getLogger("SchemaScout")


def sitemap_url(base_url: str) -> str:
    return urljoin(base_url, "/sitemap.xml")


class SitemapResolver:
    """Resolves sitemap documents of one site into CrawlTargets."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher
        self.warnings: List[str] = []

    async def resolve(self, base_url: str, fallbacks: Iterable[str] = ()) -> List[str]:
        """Targets from ``{base_url}/sitemap.xml``.

        When that yields nothing, each location in *fallbacks* (``Sitemap:``
        lines of robots.txt) is tried in turn with the same rules.
        """
        targets = await self._resolve_root(sitemap_url(base_url), base_url)
        if targets:
            return targets
        for location in fallbacks:
            candidate = to_crawl_target(location, base_url)
            if candidate is None or candidate == sitemap_url(base_url):
                continue
            targets = await self._resolve_root(candidate, base_url)
            if targets:
                return targets
        return []

    async def _resolve_root(self, url: str, base_url: str) -> List[str]:
        document = await self._load(url)
        if document is None:
            return []
        if not document.is_index:
            targets = self._targets(document.locations, url)
            logger.info("Fetched %d URL(s) from sitemap %s", len(targets), url)
            return targets

        targets: List[str] = []
        for location in document.locations:
            nested_url = to_crawl_target(location, url)
            if nested_url is None:
                continue
            nested = await self._load(nested_url)
            if nested is None:
                continue
            if nested.is_index:
                self._warn(nested_url, "nested sitemap index skipped (one level of indirection only)")
                continue
            targets.extend(self._targets(nested.locations, nested_url))
        logger.info(
            "Fetched %d URL(s) from sitemap index %s (%d sitemap(s))",
            len(targets), url, len(document.locations),
        )
        return targets

    async def _load(self, url: str) -> Optional[SitemapDocument]:
        try:
            page = await self.fetcher.fetch(url)
            return parse_sitemap(page.raw or page.content)
        except (FetchError, DiscoveryError) as exc:
            self._warn(url, f"could not fetch or parse sitemap: {exc}")
            return None

    @staticmethod
    def _targets(locations: Iterable[str], source_url: str) -> List[str]:
        return [t for t in (to_crawl_target(loc, source_url) for loc in locations) if t is not None]

    def _warn(self, url: str, message: str) -> None:
        logger.warning("%s: %s", url, message)
        self.warnings.append(f"{url}: {message}")


async def resolve_sitemap(fetcher: Fetcher, base_url: str) -> List[str]:
    """Shortcut for a one-off resolution without fallbacks."""
    return await SitemapResolver(fetcher).resolve(base_url)
