# File: schema_scout/parser/robots_parser.py
"""schema_scout.parser.robots_parser: Компиляция robots.txt в неизменяемую политику доступа."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import SplitResult, urlsplit

__all__ = ("RobotsGroup", "RobotsPolicy", "ua_token")

_Directive = Tuple[str, str]


def ua_token(user_agent: str) -> str:
    """Product token of a User-Agent: ``"SchemaCrawlerBot/1.0 (+url)"`` -> ``"schemacrawlerbot"``."""
    words = user_agent.split("/", 1)[0].split()
    return words[0].lower() if words else "*"


@dataclass(slots=True)
class RobotsGroup:
    agents: List[str] = field(default_factory=list)
    directives: List[_Directive] = field(default_factory=list)
    crawl_delay: Optional[float] = None


class RobotsPolicy:
    """
    Rule set compiled from one robots.txt (RFC 9309).

    The most specific ``User-agent`` group wins (groups naming the same agent
    are merged), then the longest matching ``Allow``/``Disallow`` pattern;
    ``Allow`` wins a tie. An empty ``Disallow`` allows everything. A policy
    without rules, or built with :meth:`allow_all`, permits every URL.
    """

    _WILDCARD_RE = re.compile(r"(\*|\$)")
    _DEFAULT_PORTS = {"http": 80, "https": 443}

    def __init__(self, text: str = "", host: Optional[str] = None, *, available: bool = True) -> None:
        self.host: Optional[str] = None
        self.port: Optional[int] = None
        if host:
            parsed = urlsplit(host if "//" in host else f"//{host}")
            self.host = parsed.hostname
            self.port = parsed.port
        self.available = available
        self.sitemaps: List[str] = []
        self._groups: List[RobotsGroup] = []
        self._regex_cache: Dict[str, re.Pattern[str]] = {}
        self._parse(text)

    @classmethod
    def allow_all(cls, host: Optional[str] = None) -> RobotsPolicy:
        """Permissive policy used when robots.txt could not be obtained."""
        return cls("", host, available=False)

    def is_allowed(self, url: str, user_agent: str) -> bool:
        parts = urlsplit(url)
        if self.host and parts.hostname and not self._same_origin(parts):
            return True
        group = self._match_group(user_agent)
        if group is None:
            return True
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        best_len = -1
        allow: Optional[bool] = None
        for directive, pattern in group.directives:
            if not self._match_path(path, pattern):
                continue
            length = self._rule_len(pattern)
            if length > best_len or (length == best_len and directive == "allow" and allow is False):
                best_len = length
                allow = directive == "allow"
        return True if allow is None else allow

    def crawl_delay(self, user_agent: str) -> Optional[float]:
        group = self._match_group(user_agent)
        return None if group is None else group.crawl_delay

    def _same_origin(self, parts: SplitResult) -> bool:
        """Hostname match plus effective port, so ``ex.com`` and ``ex.com:443`` agree over https."""
        if parts.hostname != self.host:
            return False
        default = self._DEFAULT_PORTS.get(parts.scheme.lower())
        url_port = parts.port or default
        return url_port == (self.port or default)

    def _parse(self, text: str) -> None:
        current: Optional[RobotsGroup] = None
        after_agent = False
        for raw in text.splitlines():
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            key, sep, val = line.partition(":")
            if not sep:
                continue
            key = key.lower().strip()
            val = val.strip()
            if key == "sitemap":
                if val:
                    self.sitemaps.append(val)
                continue
            if key == "user-agent":
                # consecutive User-agent lines share one group; any rule line closes it
                if current is None or not after_agent:
                    current = RobotsGroup()
                    self._groups.append(current)
                current.agents.append(val.lower())
                after_agent = True
                continue
            if key not in ("allow", "disallow", "crawl-delay"):
                continue
            after_agent = False
            if current is None:
                current = RobotsGroup(agents=["*"])
                self._groups.append(current)
            if key == "crawl-delay":
                try:
                    current.crawl_delay = float(val)
                except ValueError:
                    pass
            elif val:
                current.directives.append((key, val))

    def _match_group(self, user_agent: str) -> Optional[RobotsGroup]:
        token = ua_token(user_agent)
        best = ""
        for group in self._groups:
            for agent in group.agents:
                if agent != "*" and token.startswith(agent) and len(agent) > len(best):
                    best = agent
        wanted = best or "*"
        matched = [g for g in self._groups if wanted in g.agents]
        if not matched:
            return None
        if len(matched) == 1:
            return matched[0]
        merged = RobotsGroup(agents=[wanted])
        for group in matched:
            merged.directives.extend(group.directives)
            if group.crawl_delay is not None:
                merged.crawl_delay = group.crawl_delay
        return merged

    def _match_path(self, path: str, pattern: str) -> bool:
        if pattern not in self._regex_cache:
            esc = re.escape(pattern).replace(r"\*", ".*")
            if pattern.endswith("$"):
                esc = esc[:-2] + "$"
            else:
                esc += ".*"
            self._regex_cache[pattern] = re.compile(f"^{esc}")
        return bool(self._regex_cache[pattern].match(path))

    @classmethod
    def _rule_len(cls, pattern: str) -> int:
        return len(cls._WILDCARD_RE.sub("", pattern))
