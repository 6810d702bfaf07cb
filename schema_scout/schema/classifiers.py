# File: schema_scout/schema/classifiers.py
"""Page classifiers: one strategy per page type.

A classifier decides whether it recognises a page (:meth:`PageClassifier.matches`)
and builds the JSON-LD document for it (:meth:`PageClassifier.build`). The
first matching classifier of the registry wins, so register specific types
before the catch-all :class:`DefaultClassifier`. New page types are added by
subclassing and passing a custom registry to
:func:`~schema_scout.schema.generate_schema`.
"""
from __future__ import annotations

import re
from typing import Any, ClassVar, Dict, Sequence, Tuple

from schema_scout.parser.html_parser import ParsedPage
from schema_scout.schema import extractors as ex

__all__ = [
    "PageClassifier",
    "HomeClassifier",
    "AboutClassifier",
    "FaqClassifier",
    "ServicesClassifier",
    "ContactClassifier",
    "BlogClassifier",
    "DefaultClassifier",
    "DEFAULT_CLASSIFIERS",
    "classify",
]

SCHEMA_CONTEXT = "https://schema.org"


class PageClassifier:
    """Base strategy. Subclasses set the class attributes and may override :meth:`extra`."""

    page_type: ClassVar[str] = "Default"
    schema_type: ClassVar[str] = "WebPage"
    keywords: ClassVar[Tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._patterns = [re.compile(rf"{re.escape(k)}\b", re.I) for k in self.keywords]

    def matches(self, page: ParsedPage) -> bool:
        """True when a title/h1/h2 text starts with one of the keywords."""
        return any(p.match(text) for text in page.heading_texts() if text for p in self._patterns)

    def build(self, page: ParsedPage) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "@context": SCHEMA_CONTEXT,
            "@type": self.schema_type,
            "name": ex.page_title(page) or page.url,
            "description": ex.meta_description(page),
            "url": page.url,
            "publisher": ex.publisher(page),
        }
        schema.update(self.extra(page))
        return ex.compact(schema)

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.page_type}>"


class HomeClassifier(PageClassifier):
    page_type = "Home"
    keywords = ("home",)

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {
            "image": ex.first_image(page),
            "contactPoint": ex.contact_point(page),
            "address": ex.postal_address(page),
            "geo": ex.geo_coordinates(page),
            "sameAs": ex.social_links(page),
            "potentialAction": ex.search_action(page),
            "openingHours": ex.opening_hours(page),
            "inLanguage": _language(page),
        }


class AboutClassifier(PageClassifier):
    page_type = "About"
    schema_type = "AboutPage"
    keywords = ("about",)


class FaqClassifier(PageClassifier):
    page_type = "FAQ"
    schema_type = "FAQPage"
    keywords = ("faq", "frequently asked")

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {"mainEntity": ex.faq_entries(page)}


class ServicesClassifier(PageClassifier):
    page_type = "Services"
    schema_type = "Service"
    keywords = ("services",)

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {
            "provider": ex.publisher(page),
            "aggregateRating": ex.aggregate_rating(page),
            "review": ex.reviews(page),
        }


class ContactClassifier(PageClassifier):
    page_type = "Contact"
    schema_type = "ContactPage"
    keywords = ("contact",)

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {
            "contactPoint": ex.contact_point(page),
            "address": ex.postal_address(page),
            "openingHours": ex.opening_hours(page),
        }


class BlogClassifier(PageClassifier):
    page_type = "Blog"
    schema_type = "Blog"
    keywords = ("blog",)

    def extra(self, page: ParsedPage) -> Dict[str, Any]:
        return {"blogPost": ex.blog_posts(page)}


class DefaultClassifier(PageClassifier):
    """Catch-all: plain WebPage."""

    def matches(self, page: ParsedPage) -> bool:
        return True


DEFAULT_CLASSIFIERS: Sequence[PageClassifier] = (
    HomeClassifier(),
    AboutClassifier(),
    FaqClassifier(),
    ServicesClassifier(),
    ContactClassifier(),
    BlogClassifier(),
    DefaultClassifier(),
)


def classify(page: ParsedPage, classifiers: Sequence[PageClassifier] = DEFAULT_CLASSIFIERS) -> PageClassifier:
    for classifier in classifiers:
        if classifier.matches(page):
            return classifier
    return DefaultClassifier()


def _language(page: ParsedPage) -> str | None:
    if page.soup is None or page.soup.html is None:
        return None
    lang = page.soup.html.get("lang")
    return lang.strip() if isinstance(lang, str) and lang.strip() else None
