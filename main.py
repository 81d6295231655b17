#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GrowthTracker - точка входа

    python main.py serve [--host HOST] [--port PORT] [--reload] [--dev]
    python main.py report --user ID [--period week|month|year|all] [--today YYYY-MM-DD]
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from config import config
from database.history import HistoryStore
from database.manager import DatabaseError, JsonDocumentStore
from services.analysis import analyze
from ui.charts import ChartPresenter
from ui.messages import summary_message
from utils.datetime_utils import parse_date_key, today
from utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='GrowthTracker - трекер ежедневных целей')
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Запуск веб-дашборда')
    serve.add_argument('--port', type=int, default=config.server.port, help='Порт сервера')
    serve.add_argument('--host', default=config.server.host, help='Хост сервера')
    serve.add_argument('--dev', action='store_true', help='Режим разработки')
    serve.add_argument('--reload', action='store_true', help='Автоперезагрузка при изменениях')

    report = subparsers.add_parser('report', help='Сводка по истории пользователя')
    report.add_argument('--user', required=True, help='Идентификатор пользователя')
    report.add_argument('--period', default=config.analysis.default_period,
                        choices=['week', 'month', 'year', 'all'], help='Период сравнения')
    report.add_argument('--today', help='Дата анализа YYYY-MM-DD (по умолчанию сегодня)')
    report.add_argument('--json', action='store_true', help='Вывод полной нагрузки графиков в JSON')

    return parser


def run_server(args: argparse.Namespace) -> int:
    import uvicorn

    if args.dev:
        logger.info("🔧 Режим разработки активирован")

    logger.info(f"🚀 Запуск веб-сервера на http://{args.host}:{args.port}")
    try:
        uvicorn.run(
            "dashboard.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=None,
            server_header=False,
        )
    except KeyboardInterrupt:
        logger.info("👋 Сервер остановлен пользователем")
    return 0


def run_report(args: argparse.Namespace) -> int:
    try:
        analysis_day = parse_date_key(args.today) if args.today else today(config.analysis.timezone)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    try:
        store = JsonDocumentStore(config.storage.data_dir, config.storage.collection)
        document = store.read(args.user)
    except DatabaseError as e:
        logger.error(f"❌ Ошибка чтения истории: {e}")
        print(f"❌ {e}", file=sys.stderr)
        return 1

    history = HistoryStore.from_document(document)
    payload = ChartPresenter().present(analyze(history, args.period, analysis_day))

    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(summary_message(payload["summary"]))
        for name, averages in payload["categories"].items():
            print(f"  {name}: {averages['currentAvg']}% (было {averages['previousAvg']}%)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=getattr(args, 'dev', False))

    if args.command == 'serve':
        return run_server(args)
    return run_report(args)


if __name__ == "__main__":
    sys.exit(main())
