# File: schema_scout/report/html_report.py
"""schema_scout.report.html_report: HTML-отчёт о запуске обхода (Jinja2)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from schema_scout.crawler.models import CrawlSummary
from schema_scout.report.json_report import build_report

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    summary: CrawlSummary,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит ``report.html.j2`` для сводки обхода.

    Args:
        summary: CrawlSummary запуска.
        template_dir: каталог со своим ``report.html.j2``; None означает встроенный шаблон.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    env = Environment(
        loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    html_content = env.get_template(TEMPLATE_NAME).render(
        report=build_report(summary),
        failures=sorted(summary.failures.items()),
        artifacts=sorted(summary.artifacts.items()),
    )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html_content, encoding="utf-8")
    return output
