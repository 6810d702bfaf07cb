# schema_scout/crawler/models.py
"""
Data models for the SchemaScout crawler.
"""
from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set


@dataclass(slots=True)
class PageData:
    """Body of a fetched document: decoded text plus the raw bytes."""

    url: str
    content: str
    status: int = 200
    content_type: str = ""
    raw: bytes = b""


class CrawlState(str, Enum):
    """Stages of one crawl run."""

    INIT = "init"
    DISCOVER = "discover"
    FILTER = "filter"
    DISPATCH = "dispatch"
    DRAIN = "drain"
    PERSIST = "persist"
    DONE = "done"


class CrawledSet:
    """Set of crawled URLs owned by one run; insertions go through a lock."""

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: Set[str] = set(urls)
        self._lock = asyncio.Lock()

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    async def add(self, url: str) -> None:
        async with self._lock:
            self._urls.add(url)

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._urls)


@dataclass(slots=True)
class CrawlSummary:
    """Aggregate outcome of a crawl run."""

    seed: str
    discovered: int = 0
    candidates: int = 0
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped_cache: int = 0
    skipped_robots: int = 0
    not_dispatched: int = 0
    cancelled: bool = False
    sitemap_used: bool = False
    robots_available: Optional[bool] = None
    duration: float = 0.0
    failures: Dict[str, str] = field(default_factory=dict)
    artifacts: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)
