# src/esg_signals/cli/run.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from esg_signals.config import load_config, setup_logging
from esg_signals.core.errors import DocumentDecodeError
from esg_signals.pipeline.pipeline import handle_news_request, handle_report_request
from esg_signals.storage.memory_store import InMemoryStore
from esg_signals.utils.text_reader import read_document_pages, read_json_file

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="ESG signal engine: report scoring and news alerts."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Analyze a sustainability report (PDF or text).")
    report.add_argument("input", help="Path to the report (.pdf or plain text).")
    report.add_argument("--report-id", default="local-report")
    report.add_argument("--company-id", default="local-company")
    report.add_argument("--output", "-o", help="Where to save the result as JSON.")

    news = sub.add_parser("news", help="Analyze a news article request (JSON).")
    news.add_argument("input", help="Path to a JSON file with companyId, title, content, ...")
    news.add_argument("--company-name", help="Display name used in alert titles.")
    news.add_argument(
        "--subscribers",
        default="",
        help="Comma-separated user ids watching the company.",
    )
    news.add_argument("--output", "-o", help="Where to save the result as JSON.")

    return parser.parse_args(argv)


def _run_report(args: argparse.Namespace) -> tuple[int, Dict[str, Any]]:
    pages = read_document_pages(Path(args.input))

    store = InMemoryStore()
    store.register_report(args.report_id, args.company_id)

    payload = {
        "reportId": args.report_id,
        "reportText": "\n\n".join(pages),
        "companyId": args.company_id,
    }
    status, body = handle_report_request(payload, store, pages=pages)
    if status == 200:
        body["indicator_records"] = store.indicators
        body["flag_records"] = store.flags
    return status, body


def _run_news(args: argparse.Namespace) -> tuple[int, Dict[str, Any]]:
    payload = read_json_file(Path(args.input))
    company_id = payload.get("companyId") if isinstance(payload, dict) else None

    subscribers = [s.strip() for s in args.subscribers.split(",") if s.strip()]
    store = InMemoryStore(
        companies={company_id: args.company_name} if args.company_name else None,
        watchers={company_id: subscribers},
    )

    status, body = handle_news_request(payload, store, store)
    if status == 200:
        body["alerts"] = store.alerts
    return status, body


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(load_config().log_level)

    try:
        if args.command == "report":
            status, body = _run_report(args)
        else:
            status, body = _run_news(args)
    except DocumentDecodeError as exc:
        logger.error("%s", exc)
        status, body = 500, {"error": str(exc)}

    text = json.dumps(body, indent=2, ensure_ascii=False)
    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("Saved results to %s", out_path)
    else:
        print(text)

    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
