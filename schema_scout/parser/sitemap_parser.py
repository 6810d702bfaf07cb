# File: schema_scout/parser/sitemap_parser.py
"""schema_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

import gzip
from dataclasses import dataclass, field
from typing import List, Literal, Union

from lxml import etree

from schema_scout.errors import DiscoveryError

__all__ = ("SitemapDocument", "parse_sitemap")

SitemapKind = Literal["urlset", "sitemapindex"]

_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(slots=True)
class SitemapDocument:
    """Разобранный sitemap: тип корня и <loc> записи в порядке документа."""

    kind: SitemapKind
    locations: List[str] = field(default_factory=list)

    @property
    def is_index(self) -> bool:
        return self.kind == "sitemapindex"


def parse_sitemap(content: Union[str, bytes]) -> SitemapDocument:
    """Разбирает XML sitemap (или sitemap index) и возвращает SitemapDocument.

    Args:
        content: содержимое sitemap.xml; gzip-сжатые байты распаковываются.

    Returns:
        SitemapDocument с типом корня и списком URL из тегов <loc>.

    Raises:
        DiscoveryError: документ не является корректным urlset/sitemapindex.

    Пример:
    ```python
    from schema_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        doc = parse_sitemap(f.read())
    print(doc.kind, doc.locations)
    ```
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    if data[:2] == _GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError) as exc:
            raise DiscoveryError(f"битый gzip sitemap: {exc}") from exc

    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise DiscoveryError(f"некорректный XML: {exc}") from exc
    if root is None:
        raise DiscoveryError("пустой или некорректный XML")

    kind = etree.QName(root).localname
    if kind == "urlset":
        locs = root.findall("{*}url/{*}loc")
    elif kind == "sitemapindex":
        locs = root.findall("{*}sitemap/{*}loc")
    else:
        raise DiscoveryError(f"неожиданный корневой элемент <{kind}>")

    return SitemapDocument(kind=kind, locations=[loc.text.strip() for loc in locs if loc.text and loc.text.strip()])
