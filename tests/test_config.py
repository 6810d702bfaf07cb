# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from schema_scout.config import CrawlOptions, load_config
from schema_scout.errors import ConfigurationError


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("url: http://example.com\nconcurrency: 3", ".yaml", None),
        (json.dumps({"url": "http://example.com", "concurrency": 3}), ".json", None),
        ("{}", ".json", ConfigurationError),
        ("- just\n- a list", ".yaml", ConfigurationError),
        ("url: [unclosed", ".yaml", ConfigurationError),
        ("url = 'x'", ".toml", ConfigurationError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlOptions)
        assert cfg.url == "http://example.com"
        assert cfg.concurrency == 3


def test_defaults():
    cfg = load_config(url="https://ex.com")
    assert cfg.output == Path("schemas")
    assert cfg.delay_ms == 1000
    assert cfg.delay_seconds == 1.0
    assert cfg.respect_robots is True
    assert cfg.concurrency == 5
    assert cfg.user_agent == "SchemaCrawlerBot/1.0"
    assert cfg.cache_file == Path("cache/crawledUrls.json")


def test_seed_kept_verbatim():
    cfg = load_config(url="  https://ex.com/shop?page=2  ")
    assert cfg.url == "https://ex.com/shop?page=2"
    assert cfg.base_url == "https://ex.com"


def test_overrides_win_over_file_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "url: http://example.com\ndelay_ms: 200\nconcurrency: 4", ".yaml")
    cfg = load_config(cfg_path, concurrency=9, delay_ms=None)
    assert cfg.concurrency == 9
    assert cfg.delay_ms == 200


@pytest.mark.parametrize(
    "overrides",
    [
        {"url": "example.com"},
        {"url": "ftp://example.com/file"},
        {"url": "/relative/path"},
        {"url": "https://ex.com", "concurrency": 0},
        {"url": "https://ex.com", "concurrency": 101},
        {"url": "https://ex.com", "delay_ms": -1},
        {"url": "https://ex.com", "unknown_option": 1},
    ],
)
def test_invalid_options_rejected(overrides):
    with pytest.raises(ConfigurationError):
        load_config(**overrides)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        load_config(url="not a url")


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_options_are_frozen():
    cfg = load_config(url="https://ex.com")
    with pytest.raises(Exception):
        cfg.concurrency = 10  # type: ignore[misc]
