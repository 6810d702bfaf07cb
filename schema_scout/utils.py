# File: schema_scout/utils.py
"""schema_scout.utils: Утилитарные функции для работы с URL обхода и именами артефактов."""

from __future__ import annotations

from typing import Collection, List, Optional, Sequence
from urllib.parse import quote, urljoin, urlsplit

from schema_scout.logger import logger

__all__: Sequence[str] = (
    "to_crawl_target",
    "is_valid_url",
    "remove_duplicates",
    "artifact_name",
)

def to_crawl_target(location: str, base_url: str) -> Optional[str]:
    """Разрешает location относительно base_url; возвращает None, если результат не http(s)."""
    raw = (location or "").strip()
    if not raw:
        return None
    absolute = urljoin(base_url, raw)
    if not is_valid_url(absolute):
        logger.debug("Skipping non-http location: %s", raw)
        return None
    return absolute

def is_valid_url(url: str) -> bool:
    """Проверяет, что URL абсолютный и использует http(s)."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique

def artifact_name(url: str) -> str:
    """Имя файла артефакта: URL без схемы, '/' -> '_', percent-encoding, суффикс .json."""
    parts = urlsplit(url)
    stripped = url[len(parts.scheme) + 3:] if parts.scheme else url
    return quote(stripped.replace("/", "_"), safe="") + ".json"
