# schema_scout/crawler/robots.py
"""
Loading of robots.txt for a crawl run.

robots.txt unavailability never blocks crawling: every failure yields a
permissive policy and a warning for the caller.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple
from urllib.parse import urljoin, urlsplit

from schema_scout.crawler.fetcher import Fetcher
from schema_scout.errors import FetchError
from schema_scout.parser.robots_parser import RobotsPolicy

logger = logging.getLogger("SchemaScout")


def robots_url(base_url: str) -> str:
    return urljoin(base_url, "/robots.txt")


async def fetch_robots_policy(fetcher: Fetcher, base_url: str) -> Tuple[RobotsPolicy, Optional[str]]:
    """Fetch and compile ``{base_url}/robots.txt``.

    Returns the policy and a warning message (``None`` when robots.txt was
    read successfully).
    """
    url = robots_url(base_url)
    host = urlsplit(base_url).netloc
    try:
        page = await fetcher.fetch(url)
    except FetchError as exc:
        warning = f"Could not fetch robots.txt ({exc.reason}), allowing all URLs"
        logger.warning("%s: %s", url, warning)
        return RobotsPolicy.allow_all(host), warning

    if page.content_type and not page.content_type.startswith("text/"):
        warning = f"robots.txt served as {page.content_type}, allowing all URLs"
        logger.warning("%s: %s", url, warning)
        return RobotsPolicy.allow_all(host), warning

    policy = RobotsPolicy(page.content, host)
    logger.debug("robots.txt loaded from %s (%d sitemap hint(s))", url, len(policy.sitemaps))
    return policy, None
