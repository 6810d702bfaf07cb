# File: tests/test_robots.py
import pytest
from schema_scout.crawler.fetcher import Fetcher, build_session
from schema_scout.crawler.robots import fetch_robots_policy
from schema_scout.parser.robots_parser import RobotsPolicy, ua_token

from conftest import status_response, text_response

UA = "SchemaCrawlerBot/1.0"

ROBOTS = """
# sample
User-agent: *
Disallow: /private
Allow: /private/open
Disallow: /*.pdf$
Crawl-delay: 2

User-agent: SchemaCrawlerBot
Disallow: /drafts

Sitemap: https://ex.com/sitemap-main.xml
"""


def test_ua_token():
    assert ua_token("SchemaCrawlerBot/1.0 (+https://ex.com)") == "schemacrawlerbot"
    assert ua_token("") == "*"


def test_specific_group_wins_over_wildcard():
    policy = RobotsPolicy(ROBOTS, "ex.com")
    # the bot has its own group, so the * rules do not apply to it
    assert policy.is_allowed("https://ex.com/private/x", UA) is True
    assert policy.is_allowed("https://ex.com/drafts/1", UA) is False
    assert policy.crawl_delay(UA) is None


def test_wildcard_group_rules():
    policy = RobotsPolicy(ROBOTS, "ex.com")
    other = "OtherBot/2.0"
    assert policy.is_allowed("https://ex.com/", other) is True
    assert policy.is_allowed("https://ex.com/private/x", other) is False
    assert policy.is_allowed("https://ex.com/private/open/y", other) is True
    assert policy.is_allowed("https://ex.com/docs/a.pdf", other) is False
    assert policy.is_allowed("https://ex.com/docs/a.pdf?x=1", other) is True
    assert policy.crawl_delay(other) == 2.0


def test_sitemap_lines_collected():
    assert RobotsPolicy(ROBOTS).sitemaps == ["https://ex.com/sitemap-main.xml"]


def test_allow_wins_tie():
    policy = RobotsPolicy("User-agent: *\nDisallow: /page\nAllow: /page")
    assert policy.is_allowed("https://ex.com/page", UA) is True


def test_empty_disallow_allows_everything():
    policy = RobotsPolicy("User-agent: *\nDisallow:")
    assert policy.is_allowed("https://ex.com/anything", UA) is True


def test_groups_for_same_agent_are_merged():
    text = "User-agent: *\nDisallow: /a\n\nUser-agent: *\nDisallow: /b\n"
    policy = RobotsPolicy(text)
    assert not policy.is_allowed("https://ex.com/a", UA)
    assert not policy.is_allowed("https://ex.com/b", UA)


def test_other_host_not_governed():
    policy = RobotsPolicy("User-agent: *\nDisallow: /", "ex.com")
    assert policy.is_allowed("https://ex.com/x", UA) is False
    assert policy.is_allowed("https://cdn.ex.com/x", UA) is True


def test_host_match_uses_effective_port():
    policy = RobotsPolicy("User-agent: *\nDisallow: /private", "ex.com")
    assert policy.is_allowed("https://ex.com:443/private", UA) is False
    assert policy.is_allowed("http://EX.com/private", UA) is False
    assert policy.is_allowed("https://ex.com:8443/private", UA) is True


def test_empty_disallow_group_for_bot_is_kept_separate():
    text = "User-agent: SchemaCrawlerBot\nDisallow:\n\nUser-agent: *\nDisallow: /\n"
    policy = RobotsPolicy(text, "ex.com")
    assert policy.is_allowed("https://ex.com/page", UA) is True
    assert policy.is_allowed("https://ex.com/page", "OtherBot/2.0") is False


def test_consecutive_agents_share_group():
    text = "User-agent: SchemaCrawlerBot\nUser-agent: OtherBot\nDisallow: /x\n\nUser-agent: *\nDisallow:\n"
    policy = RobotsPolicy(text)
    assert policy.is_allowed("https://ex.com/x", UA) is False
    assert policy.is_allowed("https://ex.com/x", "OtherBot/2.0") is False
    assert policy.is_allowed("https://ex.com/x", "ThirdBot") is True


def test_allow_all_policy():
    policy = RobotsPolicy.allow_all("ex.com")
    assert policy.available is False
    assert policy.is_allowed("https://ex.com/private", UA) is True


@pytest.mark.asyncio()
async def test_fetch_robots_policy(serve, make_options):
    base = await serve({"/robots.txt": text_response("User-agent: *\nDisallow: /b", "text/plain")})
    options = make_options(base)
    async with build_session(options) as session:
        policy, warning = await fetch_robots_policy(Fetcher(session, options), base)
    assert warning is None
    assert policy.available is True
    assert policy.is_allowed(f"{base}/a", UA)
    assert not policy.is_allowed(f"{base}/b", UA)


@pytest.mark.asyncio()
@pytest.mark.parametrize("status", [404, 500])
async def test_missing_robots_is_permissive(serve, make_options, status):
    base = await serve({"/robots.txt": status_response(status)})
    options = make_options(base)
    async with build_session(options) as session:
        policy, warning = await fetch_robots_policy(Fetcher(session, options), base)
    assert warning is not None
    assert policy.available is False
    assert policy.is_allowed(f"{base}/b", UA)


@pytest.mark.asyncio()
async def test_unreachable_robots_is_permissive(unused_tcp_port, make_options):
    base = f"http://localhost:{unused_tcp_port}"
    options = make_options(base)
    async with build_session(options) as session:
        policy, warning = await fetch_robots_policy(Fetcher(session, options), base)
    assert warning is not None
    assert policy.is_allowed(f"{base}/anything", UA)
