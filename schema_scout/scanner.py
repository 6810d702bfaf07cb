# === FILE: schema_scout/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
import asyncio
from typing import Optional

from schema_scout.cache import UrlCache
from schema_scout.config import CrawlOptions
from schema_scout.crawler.crawler import CrawlOrchestrator
from schema_scout.crawler.models import CrawlSummary
from schema_scout.crawler.pipeline import PagePipeline


async def start_crawl(
    options: CrawlOptions,
    *,
    pipeline: Optional[PagePipeline] = None,
    cache: Optional[UrlCache] = None,
    stop_event: Optional[asyncio.Event] = None,
) -> CrawlSummary:
    """
    Запускает оркестратор в контексте и возвращает итоговую сводку.

    Parameters
    ----------
    options : CrawlOptions
        Параметры запуска.
    pipeline : PagePipeline, optional
        Обработчик страниц; по умолчанию SchemaPagePipeline.
    cache : UrlCache, optional
        Хранилище кэша; по умолчанию файл options.cache_file.
    stop_event : asyncio.Event, optional
        Событие отмены: новые URL больше не берутся, кэш всё равно сохраняется.

    Returns
    -------
    CrawlSummary
        Счётчики attempted / succeeded / failed / skipped.
    """
    async with CrawlOrchestrator(options, pipeline=pipeline, cache=cache) as orchestrator:
        return await orchestrator.crawl(stop_event)

__all__ = ["start_crawl"]
