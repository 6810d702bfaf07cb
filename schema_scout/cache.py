# File: schema_scout/cache.py
"""schema_scout.cache: Персистентное множество уже обойденных URL.

Файл кэша содержит JSON-список строк. Отсутствие файла равносильно пустому кэшу,
битое содержимое превращается в пустой кэш с предупреждением, а ошибки ввода-вывода
поднимаются как :class:`~schema_scout.errors.StorageError`.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, Iterable, Set, Union

from schema_scout.errors import StorageError
from schema_scout.logger import logger
from schema_scout.utils import is_valid_url

__all__ = ["UrlCache"]


class UrlCache:
    """Хранилище CrawledSet в одном файле."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> Set[str]:
        """Читает кэш; пустое множество, если файла нет или он поврежден."""
        if not self.path.exists():
            logger.debug("Cache file %s not found, starting empty", self.path)
            return set()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Не удалось прочитать кэш {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Cache file %s is corrupt (%s), starting with empty cache", self.path, exc)
            return set()
        if not isinstance(data, list) or not all(isinstance(u, str) for u in data):
            logger.warning("Cache file %s is not a list of URLs, starting with empty cache", self.path)
            return set()

        logger.info("Loaded %d crawled URL(s) from %s", len(data), self.path)
        return set(data)

    def save(self, crawled: Iterable[str]) -> None:
        """Перезаписывает кэш атомарно (временный файл + rename)."""
        urls = sorted(crawled)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(urls, fh, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Не удалось записать кэш {self.path}: {exc}") from exc
        logger.info("Saved %d crawled URL(s) to %s", len(urls), self.path)

    @staticmethod
    def prune(crawled: Iterable[str], is_valid: Callable[[str], bool] = is_valid_url) -> Set[str]:
        """Возвращает новое множество без записей, не прошедших проверку."""
        kept: Set[str] = set()
        for url in crawled:
            if is_valid(url):
                kept.add(url)
            else:
                logger.info("Removing invalid URL from cache: %s", url)
        return kept

    def clear(self) -> bool:
        """Удаляет файл кэша. True, если файл существовал."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Не удалось удалить кэш {self.path}: {exc}") from exc
        logger.info("Cleared crawled URLs cache %s", self.path)
        return True
