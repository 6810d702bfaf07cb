# schema_scout/crawler/pipeline.py
"""
Page Pipeline: everything that happens to one URL after dispatch.

The orchestrator only relies on :class:`PagePipeline`: ``process`` either
returns (success) or raises (failure, usually :class:`PipelineError`).
:class:`SchemaPagePipeline` is the default implementation: fetch the page,
stop if it already carries JSON-LD, otherwise classify it and write the
generated schema as a JSON artifact.
"""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Sequence

from schema_scout.config import CrawlOptions
from schema_scout.crawler.fetcher import Fetcher
from schema_scout.crawler.models import PageData
from schema_scout.errors import FetchError, PipelineError
from schema_scout.parser.html_parser import parse_html
from schema_scout.schema import DEFAULT_CLASSIFIERS, PageClassifier, generate_schema
from schema_scout.schema.validator import schema_problems
from schema_scout.utils import artifact_name

__all__ = ("PagePipeline", "SchemaPagePipeline", "write_artifact")


class PagePipeline(Protocol):
    """Per-URL processing step consumed by the crawl orchestrator."""

    async def process(self, url: str, options: CrawlOptions) -> Optional[Path]:
        """Process *url*; raise on failure. Returns the artifact path, if one was written."""
        ...


def write_artifact(schema: Dict[str, Any], url: str, output: Path) -> Path:
    """Write *schema* as pretty JSON into *output*; returns the file path."""
    output.mkdir(parents=True, exist_ok=True)
    path = output / artifact_name(url)
    path.write_text(json.dumps(schema, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


class SchemaPagePipeline:
    """Fetch → detect existing JSON-LD → classify → write artifact."""

    def __init__(self, fetcher: Fetcher, classifiers: Sequence[PageClassifier] = DEFAULT_CLASSIFIERS) -> None:
        self.fetcher = fetcher
        self.classifiers = classifiers
        self.logger = logging.getLogger("SchemaScout")

    async def process(self, url: str, options: CrawlOptions) -> Optional[Path]:
        try:
            page = await self.fetcher.fetch(url)
        except FetchError as exc:
            raise PipelineError(url, f"fetch failed: {exc.reason}") from exc

        # parsing and inference are CPU-bound, keep them off the event loop
        return await asyncio.to_thread(self._generate, page, options.output)

    def _generate(self, page: PageData, output: Path) -> Optional[Path]:
        url = page.url
        if page.content_type and "html" not in page.content_type:
            raise PipelineError(url, f"unsupported content type {page.content_type!r}")

        parsed = parse_html(page)
        if parsed.has_structured_data:
            self.logger.info("Schema already exists for: %s", url)
            return None

        self.logger.info("Generating schema for: %s", url)
        schema = generate_schema(parsed, self.classifiers)
        problems = schema_problems(schema)
        if problems:
            raise PipelineError(url, "invalid schema: " + ", ".join(problems))

        try:
            path = write_artifact(schema, url, output)
        except OSError as exc:
            raise PipelineError(url, f"could not write artifact: {exc}") from exc
        self.logger.info("Schema saved for: %s at %s", url, path)
        return path
