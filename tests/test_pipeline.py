# File: tests/test_pipeline.py
"""Tests for the default page pipeline: fetch, JSON-LD detection, schema artifact."""
import json

import pytest
from schema_scout.crawler.fetcher import Fetcher, build_session
from schema_scout.crawler.pipeline import SchemaPagePipeline
from schema_scout.errors import PipelineError
from schema_scout.utils import artifact_name

from conftest import status_response, text_response

WITH_JSON_LD = """<html><head><title>Shop</title>
<script type="application/ld+json">{"@context": "https://schema.org", "@type": "Store"}</script>
</head><body><h1>Shop</h1></body></html>"""

ABOUT_PAGE = """<html><head><title>About us</title>
<meta name="description" content="Who we are"></head>
<body><h1>About Acme</h1><p>Since 1999.</p></body></html>"""


async def _process(options, url):
    async with build_session(options) as session:
        pipeline = SchemaPagePipeline(Fetcher(session, options))
        return await pipeline.process(url, options)


@pytest.mark.asyncio()
async def test_existing_json_ld_is_left_alone(serve, make_options):
    base = await serve({"/shop": text_response(WITH_JSON_LD)})
    options = make_options(base)

    assert await _process(options, f"{base}/shop") is None
    assert not options.output.exists() or not any(options.output.iterdir())


@pytest.mark.asyncio()
async def test_schema_artifact_written(serve, make_options):
    base = await serve({"/about": text_response(ABOUT_PAGE)})
    options = make_options(base)
    url = f"{base}/about"

    path = await _process(options, url)

    assert path == options.output / artifact_name(url)
    schema = json.loads(path.read_text(encoding="utf-8"))
    assert schema["@context"] == "https://schema.org"
    assert schema["@type"] == "AboutPage"
    assert schema["description"] == "Who we are"
    assert schema["url"] == url


@pytest.mark.asyncio()
@pytest.mark.parametrize("status", [404, 500])
async def test_http_error_raises_pipeline_error(serve, make_options, status):
    base = await serve({"/gone": status_response(status)})
    options = make_options(base)

    with pytest.raises(PipelineError) as info:
        await _process(options, f"{base}/gone")
    assert info.value.url == f"{base}/gone"


@pytest.mark.asyncio()
async def test_non_html_content_rejected(serve, make_options):
    base = await serve({"/data.json": text_response('{"a": 1}', "application/json")})
    options = make_options(base)

    with pytest.raises(PipelineError):
        await _process(options, f"{base}/data.json")


def test_artifact_name():
    assert artifact_name("https://ex.com/a/b") == "ex.com_a_b.json"
    assert artifact_name("https://ex.com/search?q=a b") == "ex.com_search%3Fq%3Da%20b.json"
