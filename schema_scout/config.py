# === FILE: schema_scout/config.py ===
"""
Модуль для загрузки и валидации параметров обхода SchemaScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import json
import os
import errno
from pathlib import Path
from typing import Any, Dict, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from schema_scout.errors import ConfigurationError

_HTTP_URL = TypeAdapter(HttpUrl)


class CrawlOptions(BaseModel):
    """Неизменяемый снимок настроек одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., description="Стартовый URL (абсолютный, http или https).")
    output: Path = Field(Path("schemas"), description="Каталог для JSON-LD артефактов.")
    delay_ms: int = Field(1000, ge=0, description="Пауза после каждой страницы в слоте воркера (мс).")
    respect_robots: bool = Field(True, description="Учитывать robots.txt.")
    concurrency: int = Field(5, ge=1, le=100, description="Число одновременно обрабатываемых страниц.")
    user_agent: str = Field("SchemaCrawlerBot/1.0", min_length=1, description="Заголовок User-Agent.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при 5xx/429.")
    retry_backoff: float = Field(0.5, ge=0, description="Базовая пауза экспоненциального backoff (секунд).")
    cache_file: Path = Field(Path("cache/crawledUrls.json"), description="Файл кэша обойденных URL.")

    @field_validator("url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("url")
    def _check_absolute_http(cls, v: str) -> str:
        # HttpUrl only validates; the seed itself is kept verbatim
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError as exc:
            raise ValueError(f"некорректный URL {v!r}") from exc
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"ожидается абсолютный http(s) URL, получено {v!r}")
        return v

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @property
    def base_url(self) -> str:
        """Корень сайта (scheme://host) для robots.txt и sitemap.xml."""
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML/JSON файл конфигурации в словарь без валидации."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ConfigurationError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlOptions:
    """
    Собирает CrawlOptions из необязательного файла YAML/JSON и переопределений (флаги CLI).
    Переопределения со значением None игнорируются.
    При отсутствии файла бросает FileNotFoundError, при неверных данных – ConfigurationError.
    """
    data: Dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CrawlOptions(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Неверная конфигурация: {exc}") from exc
