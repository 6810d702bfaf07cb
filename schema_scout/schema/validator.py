# File: schema_scout/schema/validator.py
"""schema_scout.schema.validator: Минимальная проверка JSON-LD документа."""

from __future__ import annotations

from typing import Any, List

from schema_scout.logger import logger


def schema_problems(schema: Any) -> List[str]:
    """Список проблем документа; пустой список означает, что документ пригоден."""
    if not isinstance(schema, dict):
        return [f"ожидается объект, получено {type(schema).__name__}"]
    problems = []
    if not schema.get("@context"):
        problems.append("нет @context")
    if not schema.get("@type"):
        problems.append("нет @type")
    return problems


def validate_schema(schema: Any) -> bool:
    """True, если у документа есть @context и @type; иначе логирует ошибку."""
    problems = schema_problems(schema)
    if problems:
        logger.error("Schema validation failed: %s", ", ".join(problems))
        return False
    return True
