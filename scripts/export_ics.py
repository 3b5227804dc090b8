#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from core.calendar import build_ics
from core.dataset import DatasetLoadError, load_dataset
from core.logging import get_logger
from core.query import FixtureQuery, filter_fixtures

log = get_logger("scripts.export_ics")


def _logs_to_stderr() -> None:
    # stdout è riservato al documento ICS
    for name in ("core.dataset", "scripts.export_ics"):
        for handler in get_logger(name).handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Export filtered fixtures as an iCalendar (.ics) file")
    ap.add_argument("--source", default=None, type=str, help="Dataset path or http(s) URL (default: FIXTURES_SOURCE)")
    ap.add_argument("--from", dest="date_from", default=None, type=str, help="YYYY-MM-DD")
    ap.add_argument("--to", dest="date_to", default=None, type=str, help="YYYY-MM-DD")
    ap.add_argument("--format", dest="fmt", default=None, type=str, help="Comma separated, e.g. Test,ODI")
    ap.add_argument("--opponent", default=None, type=str)
    ap.add_argument("--home-away", dest="home_away", default=None, type=str, help="home | away")
    ap.add_argument("--limit", default=None, type=str, help="1..500 (default 50)")
    ap.add_argument("--output", default=None, type=str, help="Output file (default: stdout)")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)

    args = _parser().parse_args(argv)
    if not args.output:
        _logs_to_stderr()
    try:
        dataset = load_dataset(args.source)
    except DatasetLoadError as exc:
        log.error("Export ICS fallito: %s", exc)
        return 1

    query = FixtureQuery.from_params(
        {
            "from": args.date_from,
            "to": args.date_to,
            "format": args.fmt,
            "opponent": args.opponent,
            "homeAway": args.home_away,
            "limit": args.limit,
        }
    )
    fixtures = filter_fixtures(dataset.fixtures, query)
    ics = build_ics(fixtures)

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        # newline="" preserva i CRLF del documento
        with out.open("w", encoding="utf-8", newline="") as fh:
            fh.write(ics)
        log.info("ICS scritto: %s", out, extra={"count": len(fixtures)})
    else:
        sys.stdout.write(ics)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(1)
