# File: schema_scout/parser/__init__.py
"""schema_scout.parser: Чистые парсеры robots.txt, sitemap.xml и HTML."""

from .html_parser import ParsedPage, parse_html
from .robots_parser import RobotsPolicy
from .sitemap_parser import SitemapDocument, parse_sitemap

__all__ = ["ParsedPage", "parse_html", "RobotsPolicy", "SitemapDocument", "parse_sitemap"]
