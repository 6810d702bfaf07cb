# schema_scout/report/json_report.py

"""
Генерация JSON-отчёта о запуске обхода SchemaScout.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from schema_scout.crawler.models import CrawlSummary


def build_report(summary: CrawlSummary) -> Dict[str, Any]:
    """Словарь отчёта: поля CrawlSummary плюс итоговый статус и время генерации."""
    data = summary.to_dict()
    data["status"] = "cancelled" if summary.cancelled else "completed"
    data["generated_at"] = datetime.now(timezone.utc).isoformat(timespec="seconds")
    return data


def render_json(summary: CrawlSummary, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт о запуске в формате JSON по указанному пути.

    :param summary: CrawlSummary завершённого (или отменённого) обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from schema_scout.report.json_report import render_json
    report_path = render_json(summary, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(build_report(summary), ensure_ascii=False, indent=2), encoding="utf-8")
    return output
