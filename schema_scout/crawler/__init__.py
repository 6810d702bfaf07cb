# File: schema_scout/crawler/__init__.py
"""schema_scout.crawler: Оркестратор обхода и его сетевые компоненты."""

from .crawler import CrawlOrchestrator
from .fetcher import Fetcher
from .models import CrawledSet, CrawlState, CrawlSummary, PageData
from .pipeline import PagePipeline, SchemaPagePipeline
from .robots import fetch_robots_policy
from .sitemap import SitemapResolver, resolve_sitemap

__all__ = [
    "CrawlOrchestrator",
    "Fetcher",
    "CrawledSet",
    "CrawlState",
    "CrawlSummary",
    "PageData",
    "PagePipeline",
    "SchemaPagePipeline",
    "fetch_robots_policy",
    "SitemapResolver",
    "resolve_sitemap",
]
