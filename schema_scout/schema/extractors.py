# File: schema_scout/schema/extractors.py
"""Field extractors shared by the page classifiers.

Each helper takes a :class:`~schema_scout.parser.html_parser.ParsedPage` and
returns a JSON-LD fragment, or ``None``/empty when nothing was found. All of
them are heuristics: regular expressions over visible text plus a few CSS
selectors.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from schema_scout.parser.html_parser import ParsedPage

JsonLd = Dict[str, Any]

PHONE_RE = re.compile(r"(?:\+?\d{1,2}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
ADDRESS_RE = re.compile(
    r"(?P<street>\d{1,5}\s+(?:[A-Z][A-Za-z]*\.?\s+){1,4}"
    r"(?:St|Street|Ave|Avenue|Rd|Road|Blvd|Boulevard|Dr|Drive|Ln|Lane|Way|Ct|Court|Pl|Place)\.?)"
    r",?\s+(?P<locality>[A-Z][A-Za-z]+(?:\s[A-Z][A-Za-z]+)*)"
    r",\s+(?P<region>[A-Z]{2})\s+(?P<postal>\d{5}(?:-\d{4})?)"
)
LAT_RE = re.compile(r"lat(?:itude)?\s*[:=]\s*(-?\d+(?:\.\d+)?)", re.I)
LON_RE = re.compile(r"(?:lon|lng|longitude)\s*[:=]\s*(-?\d+(?:\.\d+)?)", re.I)
HOURS_RE = re.compile(
    r"(?P<days>(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*(?:\s*[-–]\s*(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*)?)"
    r"\s*:?\s*(?P<open>\d{1,2}(?::\d{2})?\s*[ap]\.?m\.?)\s*[-–]\s*(?P<close>\d{1,2}(?::\d{2})?\s*[ap]\.?m\.?)",
    re.I,
)
RATING_RE = re.compile(r"(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)")

SOCIAL_HOSTS = ("facebook.com", "linkedin.com", "instagram.com", "twitter.com", "x.com", "youtube.com")

_DAY_CODES = {"mon": "Mo", "tue": "Tu", "wed": "We", "thu": "Th", "fri": "Fr", "sat": "Sa", "sun": "Su"}


def page_title(page: ParsedPage) -> str:
    return page.title or page.meta.get("og:title", "") or (page.headings.get("h1") or [""])[0]


def meta_description(page: ParsedPage) -> Optional[str]:
    return page.meta.get("description") or page.meta.get("og:description") or None


def first_image(page: ParsedPage) -> Optional[str]:
    if page.meta.get("og:image"):
        return page.absolute(page.meta["og:image"])
    img = page.soup.find("img", src=True) if page.soup is not None else None
    return page.absolute(img["src"]) if img else None


def _hrefs(page: ParsedPage, prefix: str) -> List[str]:
    if page.soup is None:
        return []
    return [
        a["href"][len(prefix):].split("?", 1)[0].strip()
        for a in page.soup.find_all("a", href=True)
        if a["href"].lower().startswith(prefix)
    ]


def phone_number(page: ParsedPage) -> Optional[str]:
    tel = _hrefs(page, "tel:")
    if tel:
        return tel[0]
    match = PHONE_RE.search(page.text)
    return match.group(0).strip() if match else None


def email_address(page: ParsedPage) -> Optional[str]:
    mail = _hrefs(page, "mailto:")
    if mail:
        return mail[0]
    match = EMAIL_RE.search(page.text)
    return match.group(0) if match else None


def contact_point(page: ParsedPage) -> Optional[JsonLd]:
    phone = phone_number(page)
    email = email_address(page)
    if not (phone or email):
        return None
    return compact({
        "@type": "ContactPoint",
        "telephone": phone,
        "email": email,
        "contactType": "customer service",
    })


def postal_address(page: ParsedPage) -> Optional[JsonLd]:
    match = ADDRESS_RE.search(page.text)
    if not match:
        return None
    return {
        "@type": "PostalAddress",
        "streetAddress": match.group("street").strip(),
        "addressLocality": match.group("locality").strip(),
        "addressRegion": match.group("region"),
        "postalCode": match.group("postal"),
    }


def geo_coordinates(page: ParsedPage) -> Optional[JsonLd]:
    source = page.soup.decode() if page.soup is not None else page.text
    lat = LAT_RE.search(source)
    lon = LON_RE.search(source)
    if not (lat and lon):
        return None
    return {"@type": "GeoCoordinates", "latitude": float(lat.group(1)), "longitude": float(lon.group(1))}


def social_links(page: ParsedPage) -> List[str]:
    found = []
    for link in page.links:
        host = urlsplit(link).netloc.lower()
        if host.startswith("www."):
            host = host[4:]
        if host in SOCIAL_HOSTS and link not in found:
            found.append(link)
    return found


def opening_hours(page: ParsedPage) -> List[str]:
    """Opening hours in schema.org text form, e.g. ``"Mo-Fr 9am-5pm"``."""
    hours = []
    for match in HOURS_RE.finditer(page.text):
        days = "-".join(
            _DAY_CODES.get(part.strip()[:3].lower(), part.strip())
            for part in re.split(r"[-–]", match.group("days"))
        )
        span = f"{days} {match.group('open').replace(' ', '')}-{match.group('close').replace(' ', '')}"
        if span not in hours:
            hours.append(span)
    return hours


def publisher(page: ParsedPage) -> JsonLd:
    root = f"{urlsplit(page.url).scheme}://{urlsplit(page.url).netloc}"
    name = page.meta.get("og:site_name") or page.title or urlsplit(page.url).netloc
    return compact({
        "@type": "Organization",
        "name": name,
        "url": root,
        "@id": root,
        "logo": first_image(page),
        "sameAs": social_links(page),
    })


def breadcrumb_list(page: ParsedPage) -> Optional[JsonLd]:
    if page.soup is None:
        return None
    crumbs = page.soup.select("nav.breadcrumb a, .breadcrumb a, nav[aria-label=breadcrumb] a")
    items = []
    for crumb in crumbs:
        name = crumb.get_text(" ", strip=True)
        target = page.absolute(crumb.get("href"))
        if not name or any(i["item"] == target for i in items):
            continue
        items.append({"@type": "ListItem", "position": len(items) + 1, "name": name, "item": target})
    if not items:
        return None
    return {"@type": "BreadcrumbList", "itemListElement": items}


def search_action(page: ParsedPage) -> Optional[JsonLd]:
    if page.soup is None:
        return None
    form = page.soup.select_one('form[action*="search"], form[role="search"]')
    has_input = page.soup.select_one('input[type="search"]') is not None
    if form is None and not has_input:
        return None
    target = page.absolute(form.get("action")) if form is not None and form.get("action") else page.url
    return {
        "@type": "SearchAction",
        "target": f"{target}?s={{search_term_string}}",
        "query-input": "required name=search_term_string",
    }


def faq_entries(page: ParsedPage) -> List[JsonLd]:
    """Question/Answer pairs from ``dl``/``dt``/``dd`` lists and ``details``/``summary`` blocks."""
    if page.soup is None:
        return []
    pairs = []
    for dl in page.soup.find_all("dl"):
        for dt, dd in zip(dl.find_all("dt", recursive=False), dl.find_all("dd", recursive=False)):
            pairs.append((dt.get_text(" ", strip=True), dd.get_text(" ", strip=True)))
    for details in page.soup.find_all("details"):
        summary = details.find("summary")
        if summary is None:
            continue
        question = summary.get_text(" ", strip=True)
        parts = (
            child.get_text(" ", strip=True) if hasattr(child, "get_text") else str(child).strip()
            for child in details.children
            if child is not summary
        )
        answer = " ".join(p for p in parts if p)
        pairs.append((question, answer))
    return [
        {"@type": "Question", "name": q, "acceptedAnswer": {"@type": "Answer", "text": a}}
        for q, a in pairs
        if q and a
    ]


def blog_posts(page: ParsedPage) -> List[JsonLd]:
    if page.soup is None:
        return []
    posts = []
    for article in page.soup.find_all("article"):
        heading = article.find(["h2", "h3"])
        link = article.find("a", href=True)
        if heading is None or link is None:
            continue
        time_tag = article.find("time")
        image = article.find("img", src=True)
        posts.append(compact({
            "@type": "BlogPosting",
            "headline": heading.get_text(" ", strip=True),
            "url": page.absolute(link["href"]),
            "datePublished": time_tag.get("datetime") if time_tag else None,
            "image": page.absolute(image["src"]) if image else None,
        }))
    return posts


def reviews(page: ParsedPage) -> List[JsonLd]:
    if page.soup is None:
        return []
    return [
        {"@type": "Review", "reviewBody": body}
        for body in (el.get_text(" ", strip=True) for el in page.soup.select(".review"))
        if body
    ]


def aggregate_rating(page: ParsedPage) -> Optional[JsonLd]:
    if page.soup is None:
        return None
    values = []
    best = None
    for el in page.soup.select(".rating"):
        match = RATING_RE.search(el.get_text(" ", strip=True))
        if match:
            values.append(float(match.group(1)))
            best = float(match.group(2))
    if not values:
        return None
    return {
        "@type": "AggregateRating",
        "ratingValue": round(sum(values) / len(values), 2),
        "bestRating": best,
        "ratingCount": len(values),
    }


def compact(data: JsonLd) -> JsonLd:
    """Drop keys whose value is None or an empty container."""
    return {k: v for k, v in data.items() if v is not None and v != [] and v != {}}
