# File: schema_scout/schema/__init__.py
"""schema_scout.schema: Эвристическое построение JSON-LD разметки для страницы."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from .classifiers import DEFAULT_CLASSIFIERS, PageClassifier, classify
from .extractors import breadcrumb_list, publisher
from .validator import validate_schema

__all__ = ["generate_schema", "classify", "validate_schema", "PageClassifier", "DEFAULT_CLASSIFIERS"]


def generate_schema(page, classifiers: Sequence[PageClassifier] = DEFAULT_CLASSIFIERS) -> Dict[str, Any]:
    """Классифицирует ParsedPage и возвращает JSON-LD документ для нее."""
    classifier = classify(page, classifiers)
    schema = classifier.build(page)

    breadcrumbs = breadcrumb_list(page)
    if breadcrumbs:
        schema["breadcrumb"] = breadcrumbs

    if schema.get("@type") == "WebPage":
        site = publisher(page)
        schema["isPartOf"] = {
            "@type": "WebSite",
            "name": site["name"],
            "url": site["url"],
            "publisher": site,
        }
    return schema
