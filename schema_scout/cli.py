# === FILE: schema_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SchemaScout через командную строку.

Команды:
  crawl         Обойти сайт и сгенерировать JSON-LD разметку для страниц
  config        Показать итоговую конфигурацию
  cache show    Показать содержимое кэша обойденных URL
  cache prune   Удалить из кэша некорректные URL
  cache clear   Удалить файл кэша

Общие опции:
  --config PATH       Путь к YAML/JSON конфигу (необязателен)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  -l, --log-dir DIR   Каталог для app.log и error.log (по умолчанию logs)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  -u, --url URL              Стартовый URL (если не указан – будет запрошен)
  -o, --output DIR           Каталог для схем
  -d, --delay MS             Пауза между запросами (мс)
  --respect-robots / --no-respect-robots
  -c, --concurrency N        Число одновременных запросов
  --clear-cache              Очистить кэш перед обходом
  --json PATH / --html PATH  Сохранить отчёт о запуске

Дополнительно:
  --version, -v       Показать версию SchemaScout

Пример:
  schema-scout crawl -u https://example.com -o schemas -d 500 -c 10 --json report.json
"""
import asyncio
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import click

from schema_scout import __version__
from schema_scout.cache import UrlCache
from schema_scout.config import load_config, read_config_file
from schema_scout.errors import ConfigurationError, StorageError
from schema_scout.logger import configure
from schema_scout.report.html_report import render_html
from schema_scout.report.json_report import render_json
from schema_scout.scanner import start_crawl
from schema_scout.utils import is_valid_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
DEFAULT_CACHE_FILE = Path("cache/crawledUrls.json")


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _prompt_url(value: str) -> str:
    value = value.strip()
    if not value.startswith(("http://", "https://")):
        raise click.BadParameter('Введите корректный URL (начинается с http:// или https://)')
    return value


async def _crawl_with_signals(options) -> Any:
    """Запускает обход; SIGINT/SIGTERM только останавливают выдачу новых URL."""
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError):
            pass
    try:
        return await start_crawl(options, stop_event=stop)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SchemaScout, version %(version)s')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-dir', '-l', 'log_dir',
    default='logs', show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для app.log и error.log'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s [%(levelname)s]: %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_dir, log_format):
    """Группа команд SchemaScout CLI."""
    configure(level=log_level, log_dir=log_dir, log_format=log_format)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL сайта')
@click.option('--output', '-o', 'output', default=None, type=click.Path(file_okay=False, path_type=Path),
              help='Каталог для JSON-LD схем [schemas]')
@click.option('--delay', '-d', 'delay_ms', type=int, default=None, help='Пауза между запросами, мс [1000]')
@click.option('--respect-robots/--no-respect-robots', 'respect_robots', default=None,
              help='Учитывать robots.txt [да]')
@click.option('--concurrency', '-c', 'concurrency', type=int, default=None, help='Число одновременных запросов [5]')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут одного запроса, секунд [10]')
@click.option('--cache-file', 'cache_file', default=None, type=click.Path(dir_okay=False, path_type=Path),
              help='Файл кэша обойденных URL [cache/crawledUrls.json]')
@click.option('--clear-cache', is_flag=True, help='Очистить кэш перед обходом')
@click.option('--json', '-j', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path), help='Сохранить JSON-отчёт в файл')
@click.option('--html', 'html_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path), help='Сохранить HTML-отчёт в файл')
@click.option('--template', '-t', 'template_dir', default=None,
              type=click.Path(exists=True, file_okay=False, path_type=Path), help='Папка с Jinja2-шаблонами')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def crawl(ctx, url, output, delay_ms, respect_robots, concurrency, user_agent, timeout, cache_file,
          clear_cache, json_output, html_output, template_dir, pretty):
    """Обойти сайт и сгенерировать схемы для страниц без JSON-LD."""
    config_path: Optional[Path] = ctx.obj['config_path']
    overrides = dict(
        url=url, output=output, delay_ms=delay_ms, respect_robots=respect_robots,
        concurrency=concurrency, user_agent=user_agent, timeout=timeout, cache_file=cache_file,
    )
    try:
        if url is None and (config_path is None or 'url' not in read_config_file(config_path)):
            overrides['url'] = click.prompt('Enter the website URL to crawl', value_proc=_prompt_url)
        options = load_config(config_path, **overrides)
    except (ConfigurationError, FileNotFoundError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        if clear_cache and UrlCache(options.cache_file).clear():
            click.echo('Cleared crawled URLs cache.')
        summary = asyncio.run(_crawl_with_signals(options))
    except StorageError as e:
        print_error(f'Ошибка кэша: {e}')

    if json_output:
        click.echo(f'JSON report: {render_json(summary, json_output)}')
    if html_output:
        click.echo(f'HTML report: {render_html(summary, template_dir, html_output)}')
    if not json_output and not html_output:
        click.echo(summary.json(pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL сайта')
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    try:
        options = load_config(ctx.obj['config_path'], url=url)
    except (ConfigurationError, FileNotFoundError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    click.echo(options.model_dump_json(indent=2))


@cli.group('cache', context_settings=CONTEXT_SETTINGS)
@click.option('--cache-file', 'cache_file', default=str(DEFAULT_CACHE_FILE), show_default=True,
              type=click.Path(dir_okay=False, path_type=Path), help='Файл кэша обойденных URL')
@click.pass_context
def cache_group(ctx, cache_file):
    """Обслуживание кэша обойденных URL."""
    ctx.obj['cache'] = UrlCache(cache_file)


@cache_group.command('show')
@click.pass_context
def cache_show(ctx):
    """Вывести URL из кэша."""
    try:
        urls = ctx.obj['cache'].load()
    except StorageError as e:
        print_error(f'Ошибка кэша: {e}')
    for url in sorted(urls):
        click.echo(url)


@cache_group.command('prune')
@click.pass_context
def cache_prune(ctx):
    """Удалить некорректные URL из кэша."""
    cache: UrlCache = ctx.obj['cache']
    try:
        urls = cache.load()
        kept = cache.prune(urls, is_valid_url)
        cache.save(kept)
    except StorageError as e:
        print_error(f'Ошибка кэша: {e}')
    click.echo(f'Removed {len(urls) - len(kept)} invalid URL(s), {len(kept)} kept.')


@cache_group.command('clear')
@click.pass_context
def cache_clear(ctx):
    """Удалить файл кэша."""
    try:
        removed = ctx.obj['cache'].clear()
    except StorageError as e:
        print_error(f'Ошибка кэша: {e}')
    click.echo('Cleared crawled URLs cache.' if removed else 'Cache is already empty.')


if __name__ == "__main__":
    cli()
