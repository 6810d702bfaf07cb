# File: schema_scout/errors.py
"""schema_scout.errors: Иерархия исключений SchemaScout.

* ``ConfigurationError`` – фатальна до начала сетевой активности.
* ``StorageError`` – проблемы с файлом кэша (при сохранении фатальна).
* ``FetchError`` / ``DiscoveryError`` – сетевые и парсинговые сбои, поглощаются на месте.
* ``PipelineError`` – сбой обработки одной страницы, изолирован воркером.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "SchemaScoutError",
    "ConfigurationError",
    "StorageError",
    "FetchError",
    "DiscoveryError",
    "PipelineError",
]


class SchemaScoutError(Exception):
    """Базовое исключение проекта."""


class ConfigurationError(SchemaScoutError, ValueError):
    """Неверные параметры запуска (seed URL, числовые опции, формат конфига)."""


class StorageError(SchemaScoutError):
    """Файл кэша не читается или не может быть записан."""


class FetchError(SchemaScoutError):
    """HTTP-запрос завершился ошибкой транспорта, таймаутом или статусом >= 400."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class DiscoveryError(SchemaScoutError):
    """Sitemap или robots.txt недоступен либо некорректен."""


class PipelineError(SchemaScoutError):
    """Страница не была обработана конвейером."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
