# File: schema_scout/report/__init__.py
"""schema_scout.report: Отчёты о запуске обхода (JSON и HTML), используемые CLI."""

from __future__ import annotations

from .html_report import render_html
from .json_report import render_json

__all__ = ["render_json", "render_html"]
