#!/usr/bin/env python3
"""
CLI для построения блок-схем из веб-страниц

Использование:
    python -m page_flowchart.cli text article.txt --title "Заголовок" --output flow.json
    python -m page_flowchart.cli html page.html --format html --output flow.html
    python -m page_flowchart.cli crawl https://example.com/article --output flow.json
    python -m page_flowchart.cli serve --port 5000
"""

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .models import FlowGraph


def _write_graph(graph: FlowGraph, args, title: str) -> None:
    """Вывести схему: в файл (json/html) или в stdout"""
    from .export import export_json, export_html, graph_to_json

    print(f"📊 Узлов: {len(graph.nodes)}, Связей: {len(graph.edges)}", file=sys.stderr)

    if not args.output:
        print(graph_to_json(graph))
        return

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if args.format == 'html':
        export_html(graph, output_path, title=title or "Flowchart")
        print(f"✅ HTML: {output_path}", file=sys.stderr)
    else:
        export_json(graph, output_path)
        print(f"✅ JSON: {output_path}", file=sys.stderr)


def _read_input(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    return Path(path).read_text(encoding='utf-8')


def cmd_text(args):
    """Схема из плоского текста"""
    from .pipeline import build_flowchart

    if args.input != '-' and not Path(args.input).exists():
        print(f"❌ Файл не найден: {args.input}", file=sys.stderr)
        return 1

    graph = build_flowchart(text=_read_input(args.input), title=args.title or "")
    _write_graph(graph, args, args.title)
    return 0


def cmd_html(args):
    """Схема из HTML файла"""
    from .pipeline import build_flowchart_from_html

    if args.input != '-' and not Path(args.input).exists():
        print(f"❌ Файл не найден: {args.input}", file=sys.stderr)
        return 1

    graph = build_flowchart_from_html(_read_input(args.input), title=args.title or "")
    _write_graph(graph, args, args.title)
    return 0


def cmd_crawl(args):
    """Загрузить страницу и построить схему"""
    from .crawler import PageFetcher
    from .errors import FlowchartError, classify_error
    from .pipeline import build_flowchart

    print(f"🌐 Загрузка: {args.url}", file=sys.stderr)
    try:
        with PageFetcher(timeout=args.timeout) as fetcher:
            result = fetcher.crawl(args.url)
    except FlowchartError as e:
        info = classify_error(e, "crawl")
        print(f"❌ {info.type}: {info.message}", file=sys.stderr)
        return 1

    print(f"📄 {result.title or 'Untitled'}: {result.stats}", file=sys.stderr)
    graph = build_flowchart(
        text=result.content,
        title=result.title,
        structured_items=result.structured_content,
    )
    _write_graph(graph, args, result.title)
    return 0


def cmd_serve(args):
    """Запустить HTTP сервис"""
    import uvicorn

    uvicorn.run("page_flowchart.app:app", host=args.host, port=args.port)
    return 0


def _add_output_args(parser):
    parser.add_argument('--output', '-o', help='Файл результата (по умолчанию stdout)')
    parser.add_argument('--format', '-f', choices=['json', 'html'], default='json',
                        help='Формат результата (default: json)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Построение блок-схем из веб-страниц")
    parser.add_argument('--log-level', default=config.LOG_LEVEL, help='Уровень логирования')
    subparsers = parser.add_subparsers(dest='command', help='Команды')

    text_parser = subparsers.add_parser('text', help='Схема из текстового файла')
    text_parser.add_argument('input', help='Путь к файлу ("-" для stdin)')
    text_parser.add_argument('--title', '-t', default='', help='Заголовок страницы')
    _add_output_args(text_parser)

    html_parser = subparsers.add_parser('html', help='Схема из HTML файла')
    html_parser.add_argument('input', help='Путь к файлу ("-" для stdin)')
    html_parser.add_argument('--title', '-t', default='', help='Заголовок (по умолчанию из <title>)')
    _add_output_args(html_parser)

    crawl_parser = subparsers.add_parser('crawl', help='Загрузить страницу по URL')
    crawl_parser.add_argument('url', help='URL страницы')
    crawl_parser.add_argument('--timeout', type=float, default=config.FETCH_TIMEOUT,
                              help=f'Таймаут в секундах (default: {config.FETCH_TIMEOUT:g})')
    _add_output_args(crawl_parser)

    serve_parser = subparsers.add_parser('serve', help='Запустить HTTP сервис')
    serve_parser.add_argument('--host', default=config.HOST)
    serve_parser.add_argument('--port', type=int, default=config.PORT)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    commands = {
        'text': cmd_text,
        'html': cmd_html,
        'crawl': cmd_crawl,
        'serve': cmd_serve,
    }

    if args.command not in commands:
        parser.print_help()
        return 1

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
