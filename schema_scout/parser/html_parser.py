# === FILE: schema_scout/parser/html_parser.py ===
"""HTML parsing utilities for SchemaScout.

:func:`parse_html` turns a fetched page into a :class:`ParsedPage` that the
page classifiers and field extractors work on:

* title: document <title> text or ``""`` if absent.
* headings: ``h1``/``h2`` texts in document order.
* meta: ``name``/``property`` → ``content`` of <meta> tags.
* links: absolute URLs found in <a href="…"> tags.
* text: visible text (usable for regex-based field extraction).
* json_ld: bodies of existing ``<script type="application/ld+json">`` blocks.

The soup is kept on the dataclass so extractors can run CSS selectors without
re-parsing the document.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup

__all__: Sequence[str] = ("ParsedPage", "parse_html")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    url: str
    title: str
    headings: dict[str, list[str]]
    meta: dict[str, str]
    links: list[str]
    text: str
    json_ld: list[str] = field(default_factory=list)
    soup: BeautifulSoup | None = field(default=None, repr=False)

    # Convenience helpers ---------------------------------------------------
    @property
    def has_structured_data(self) -> bool:
        """True when the page already carries JSON-LD markup."""
        return bool(self.json_ld)

    def heading_texts(self) -> list[str]:
        """Title followed by all h1 and h2 texts; used for page-type detection."""
        return [self.title, *self.headings.get("h1", []), *self.headings.get("h2", [])]

    def absolute(self, href: str | None) -> str | None:
        """Resolve *href* against the page URL."""
        if not href:
            return None
        return urljoin(self.url, href.strip())


# ---------------------------------------------------------------------------
# Public function
# ---------------------------------------------------------------------------


def parse_html(page: Any) -> ParsedPage:
    """Parse raw HTML (string) or :class:`~schema_scout.crawler.models.PageData`.

    Parameters
    ----------
    page
        Either a *str* (HTML markup) **or** a ``PageData`` object with
        ``url`` and ``content`` attributes.
    """
    if hasattr(page, "content") and hasattr(page, "url"):
        html = page.content
        base_url = str(page.url)
    else:
        html = str(page)
        base_url = ""

    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    headings = {
        level: [h.get_text(" ", strip=True) for h in soup.find_all(level)]
        for level in ("h1", "h2")
    }

    meta: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        key = tag.get("name") or tag.get("property")
        content = tag.get("content")
        if key and content is not None and key.lower() not in meta:
            meta[key.lower()] = content.strip()

    json_ld = [
        script.get_text() or ""
        for script in soup.find_all("script", attrs={"type": "application/ld+json"})
    ]

    # Absolute links, deduplicated, stable ordering
    seen: set[str] = set()
    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        href = tag["href"].strip()  # type: ignore[index,union-attr]
        if not href or href.startswith(("mailto:", "javascript:", "tel:", "#")):
            continue
        abs_url = urljoin(base_url, href)
        if abs_url not in seen:
            seen.add(abs_url)
            links.append(abs_url)

    # Visible text without touching the soup kept for extractors
    text_soup = BeautifulSoup(html, "html.parser")
    for element in text_soup(["script", "style", "noscript", "template"]):
        element.decompose()
    text = " ".join(t.strip() for t in text_soup.stripped_strings)

    return ParsedPage(
        url=base_url,
        title=title,
        headings=headings,
        meta=meta,
        links=links,
        text=text,
        json_ld=json_ld,
        soup=soup,
    )
