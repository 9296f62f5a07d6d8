import argparse
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from sales_trends.lib.logger import setup_logging, log
from sales_trends.schemas.trends import TrendsRequest
from sales_trends.services.storage.factory import get_storage
from sales_trends.services.trends.factory import TrendsServiceFactory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="predict-trends",
        description="Forecast daily revenue from the sales history and persist the result",
    )
    parser.add_argument("--start", help="first day of history (YYYY-MM-DD)")
    parser.add_argument("--end", help="last day of history (YYYY-MM-DD), defaults to today")
    parser.add_argument("--granularity")
    parser.add_argument("--horizon", type=int)
    parser.add_argument("--method", help="auto | holt-winters-weekly | anything else for moving average")
    parser.add_argument("--min-history", type=int, dest="min_history")
    parser.add_argument("--threshold-increase", type=float, dest="threshold_increase")
    parser.add_argument("--threshold-decrease", type=float, dest="threshold_decrease")
    parser.add_argument("--store-db", action="store_true", dest="store_db")
    parser.add_argument("--notify", action="store_true")
    parser.add_argument("--output", help="also write the payload to this file")
    return parser


def request_from_args(args: argparse.Namespace) -> TrendsRequest:
    """Only flags given on the command line override the request defaults."""
    fields: Dict[str, Any] = {
        name: getattr(args, name)
        for name in ("start", "end", "granularity", "horizon", "method", "min_history")
        if getattr(args, name) is not None
    }
    thresholds = {}
    if args.threshold_increase is not None:
        thresholds["increase"] = args.threshold_increase
    if args.threshold_decrease is not None:
        thresholds["decrease"] = args.threshold_decrease
    if thresholds:
        fields["thresholds"] = thresholds
    if args.store_db:
        fields["store_db"] = True
    if args.notify:
        fields["notify"] = True
    return TrendsRequest.model_validate(fields)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout carries the payload only
    setup_logging(sys.stderr)

    try:
        params = request_from_args(args)
        with contextmanager(get_storage)() as storage:
            payload = TrendsServiceFactory.get_service(storage).predict_trends(params)

        output = json.dumps(payload.to_json_dict(), indent=2)
        if args.output:
            Path(args.output).write_text(output, encoding="utf-8")
        print(output)
        return 0
    except Exception as e:
        log.exception(f"predict-trends error: {e}")
        return 1
    finally:
        log.complete()


if __name__ == "__main__":
    sys.exit(main())
