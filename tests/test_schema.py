# File: tests/test_schema.py
import pytest
from schema_scout.parser.html_parser import parse_html
from schema_scout.schema import DEFAULT_CLASSIFIERS, PageClassifier, classify, generate_schema, validate_schema
from schema_scout.schema import extractors as ex
from schema_scout.crawler.models import PageData


def page(html: str, url: str = "https://ex.com/page"):
    return parse_html(PageData(url=url, content=html))


@pytest.mark.parametrize(
    "html,expected",
    [
        ("<title>Home</title>", "Home"),
        ("<h1>About our team</h1>", "About"),
        ("<h2>Frequently asked questions</h2>", "FAQ"),
        ("<title>FAQ</title>", "FAQ"),
        ("<h1>Services</h1>", "Services"),
        ("<title>Contact us</title>", "Contact"),
        ("<h1>Blog</h1>", "Blog"),
        ("<h1>Homework tips</h1>", "Default"),
        ("<h1>Pricing</h1>", "Default"),
    ],
)
def test_classification(html, expected):
    assert classify(page(html)).page_type == expected


def test_home_page_fields(mock_page_data):
    schema = generate_schema(parse_html(mock_page_data))
    assert schema["@type"] == "WebPage"
    assert schema["name"] == "Home | Acme"
    assert schema["description"] == "Acme widgets"
    assert schema["inLanguage"] == "en"
    assert schema["sameAs"] == ["https://facebook.com/acme"]
    assert schema["contactPoint"]["telephone"].startswith("+1")
    assert schema["isPartOf"]["@type"] == "WebSite"
    assert schema["isPartOf"]["url"] == "http://example.com"


def test_faq_entries():
    html = """<h1>FAQ</h1>
    <dl><dt>Do you ship?</dt><dd>Yes, worldwide.</dd></dl>
    <details><summary>Can I return?</summary><p>Within 30 days.</p></details>"""
    parsed = page(html)
    schema = generate_schema(parsed)

    assert schema["@type"] == "FAQPage"
    questions = [(q["name"], q["acceptedAnswer"]["text"]) for q in schema["mainEntity"]]
    assert questions == [("Do you ship?", "Yes, worldwide."), ("Can I return?", "Within 30 days.")]
    # extraction leaves the parsed page untouched
    assert parsed.soup.find("summary") is not None


def test_blog_posts():
    html = """<h1>Blog</h1>
    <article><h2>First post</h2><a href="/blog/first">read</a><time datetime="2024-05-01">May 1</time></article>
    <article><p>no heading</p></article>"""
    schema = generate_schema(page(html, "https://ex.com/blog"))
    assert schema["@type"] == "Blog"
    assert schema["blogPost"] == [
        {
            "@type": "BlogPosting",
            "headline": "First post",
            "url": "https://ex.com/blog/first",
            "datePublished": "2024-05-01",
        }
    ]


def test_services_rating_and_reviews():
    html = """<h1>Services</h1>
    <div class="rating">4/5</div><div class="rating">5/5</div>
    <div class="review">Great job</div>"""
    schema = generate_schema(page(html))
    assert schema["aggregateRating"]["ratingValue"] == 4.5
    assert schema["aggregateRating"]["ratingCount"] == 2
    assert schema["review"] == [{"@type": "Review", "reviewBody": "Great job"}]


def test_breadcrumbs_added():
    html = """<h1>Pricing</h1><nav class="breadcrumb"><a href="/">Home</a><a href="/pricing">Pricing</a></nav>"""
    schema = generate_schema(page(html))
    items = schema["breadcrumb"]["itemListElement"]
    assert [i["position"] for i in items] == [1, 2]
    assert items[1]["item"] == "https://ex.com/pricing"


def test_empty_values_dropped():
    schema = generate_schema(page("<h1>About</h1>"))
    assert "description" not in schema
    assert all(v not in (None, [], {}) for v in schema.values())


def test_custom_classifier_registry():
    class CareersClassifier(PageClassifier):
        page_type = "Careers"
        schema_type = "CollectionPage"
        keywords = ("careers", "jobs")

    registry = (CareersClassifier(), *DEFAULT_CLASSIFIERS)
    schema = generate_schema(page("<h1>Jobs at Acme</h1>"), registry)
    assert schema["@type"] == "CollectionPage"


def test_existing_json_ld_detected():
    parsed = page('<script type="application/ld+json">{}</script>')
    assert parsed.has_structured_data


def test_validate_schema():
    assert validate_schema({"@context": "https://schema.org", "@type": "WebPage"}) is True
    assert validate_schema({"@type": "WebPage"}) is False
    assert validate_schema([]) is False


def test_contact_page_address_and_hours():
    html = """<title>Contact us</title>
    <p>Visit 12 Main Street, Springfield, IL 62701</p>
    <p>Mon-Fri 9am-5pm</p>
    <a href="mailto:hello@ex.com?subject=hi">mail</a>"""
    schema = generate_schema(page(html))
    assert schema["@type"] == "ContactPage"
    assert schema["address"]["streetAddress"] == "12 Main Street"
    assert schema["address"]["postalCode"] == "62701"
    assert schema["openingHours"] == ["Mo-Fr 9am-5pm"]
    assert schema["contactPoint"]["email"] == "hello@ex.com"
    assert ex.phone_number(page(html)) is None
