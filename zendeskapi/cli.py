"""
Command line interface for Zendesk search and job inspection.

Results are written to stdout as JSON lines, one result per line; logs and
progress go to stderr.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional, TextIO

from .client import ZendeskClient
from .core.errors import ZendeskError, format_error_details
from .core.logging import configure_logging, get_logger
from .core.types import BulkSearchCriteria, ExportSearchOptions, SearchCriteria
from .presentation.progress import LoggingProgressObserver, TqdmProgressObserver


logger = get_logger(__name__)

RESOURCE_TYPES = ("ticket", "user", "organization")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zendeskapi",
        description="Search and inspect a Zendesk account from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  zendeskapi search "status:open" --type ticket
  zendeskapi search-all "priority:urgent" --type ticket --progress
  zendeskapi date-range "status:solved" --start 2024-01-01 --end 2024-04-01
  zendeskapi export "created>2024-01-01" --filter-type ticket --all
  zendeskapi job 8b726e606741012ffc2d782bcb7848fe --wait
        """,
    )
    parser.add_argument("--env-file", help="Path to a .env file with ZENDESK_* credentials")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--debug", action="store_true", help="Verbose log format")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_criteria_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("query", help="Search expression")
        sub.add_argument("--type", choices=RESOURCE_TYPES, help="Restrict to one resource type")
        sub.add_argument("--sort-by", help="Field to sort by")
        sub.add_argument("--sort-order", choices=("asc", "desc"))
        sub.add_argument("--per-page", type=int, help="Page size (max 100)")
        sub.add_argument("--include", action="append", default=[], help="Sideload (repeatable)")

    search = subparsers.add_parser("search", help="Run a single search call")
    add_criteria_args(search)
    search.add_argument("--page", type=int, help="Page number")

    search_all = subparsers.add_parser("search-all", help="Fetch every page of a search")
    add_criteria_args(search_all)
    search_all.add_argument("--progress", action="store_true", help="Show a progress bar")

    date_range = subparsers.add_parser("date-range", help="Search a date interval in partitions")
    add_criteria_args(date_range)
    date_range.add_argument("--start", required=True, help="Inclusive start date (YYYY-MM-DD)")
    date_range.add_argument("--end", required=True, help="Exclusive end date (YYYY-MM-DD)")
    date_range.add_argument("--field", help="created or updated (default: from settings)")
    date_range.add_argument("--chunk-days", type=int, help="Partition width in days (default: from settings)")
    date_range.add_argument("--max-results", type=int)
    date_range.add_argument("--strict", action="store_true", help="Abort on the first failed partition")
    date_range.add_argument("--progress", action="store_true", help="Show a progress bar")

    export = subparsers.add_parser("export", help="Use the cursor based export endpoint")
    export.add_argument("query", help="Search expression")
    export.add_argument("--filter-type", choices=RESOURCE_TYPES + ("group",))
    export.add_argument("--page-size", type=int, help="Batch size (max 1000)")
    export.add_argument("--cursor", help="Resume from this cursor")
    export.add_argument("--all", action="store_true", help="Follow the cursor to the end")

    job = subparsers.add_parser("job", help="Show or wait for a job status")
    job.add_argument("job_id")
    job.add_argument("--wait", action="store_true", help="Poll until the job is finished")
    job.add_argument("--interval", type=float, default=None, help="Seconds between polls")
    job.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")

    return parser


def _criteria_from_args(args: argparse.Namespace) -> SearchCriteria:
    return SearchCriteria(
        query=args.query,
        sort_by=args.sort_by,
        sort_order=args.sort_order,
        page=getattr(args, "page", None),
        per_page=args.per_page,
        include=tuple(args.include),
    )


def _search_func(client: ZendeskClient, resource_type: Optional[str]) -> Callable:
    if resource_type == "ticket":
        return client.search.search_tickets
    if resource_type == "user":
        return client.search.search_users
    if resource_type == "organization":
        return client.search.search_organizations
    return client.search.search


def _emit(items: List[Any], out: TextIO) -> int:
    for item in items:
        out.write(json.dumps(item, default=str))
        out.write("\n")
    out.flush()
    return len(items)


def _observer(enabled: bool, unit: str):
    if enabled:
        return TqdmProgressObserver(unit=unit)
    return LoggingProgressObserver()


async def run_command(client: ZendeskClient, args: argparse.Namespace, out: TextIO) -> int:
    """Execute the parsed command; returns the number of emitted records."""
    if args.command == "search":
        response = await _search_func(client, args.type)(_criteria_from_args(args))
        return _emit((response or {}).get("results", []), out)

    if args.command == "search-all":
        observer = _observer(args.progress, "page")
        iterator = client.search.search_all(
            _search_func(client, args.type), _criteria_from_args(args), observer
        )
        total = 0
        try:
            async for batch in iterator:
                total += _emit(batch, out)
        finally:
            if isinstance(observer, TqdmProgressObserver):
                observer.close()
        return total

    if args.command == "date-range":
        criteria = BulkSearchCriteria(
            query=args.query,
            start_date=args.start,
            end_date=args.end,
            date_field=args.field,
            chunk_days=args.chunk_days,
            max_results=args.max_results,
            sort_by=args.sort_by,
            sort_order=args.sort_order,
            per_page=args.per_page,
            include=tuple(args.include),
        )
        observer = _observer(args.progress, "partition")
        partitioner = client.search.search_by_date_range(
            _search_func(client, args.type), criteria, observer, strict=args.strict or None
        )
        total = 0
        try:
            async for batch in partitioner:
                total += _emit(batch, out)
        finally:
            if isinstance(observer, TqdmProgressObserver):
                observer.close()
        for failure in partitioner.failures:
            logger.error(f"Partition {failure.start} - {failure.end} failed: {failure.error}")
        return total

    if args.command == "export":
        options = ExportSearchOptions(
            filter_type=args.filter_type, page_size=args.page_size, cursor=args.cursor
        )
        if not args.all:
            response = await client.search.export_search(args.query, options)
            return _emit((response or {}).get("results", []), out)
        total = 0
        async for batch in client.search.export_search_all(args.query, options):
            total += _emit(batch, out)
        return total

    if args.command == "job":
        if args.wait:
            handle = await client.job_statuses.wait_for_completion(
                args.job_id, args.interval, args.timeout
            )
        else:
            handle = await client.job_statuses.show(args.job_id)
        record: Dict[str, Any] = {
            "id": handle.id,
            "status": handle.status.value,
            "total": handle.total,
            "progress": handle.progress,
            "message": handle.message,
            "results": [asdict(r) for r in handle.results],
        }
        return _emit([record], out)

    raise ValueError(f"Unknown command: {args.command}")


async def main_async(args: argparse.Namespace, out: TextIO = sys.stdout) -> int:
    async with ZendeskClient.from_env(args.env_file) as client:
        count = await run_command(client, args, out)
    logger.info(f"Emitted {count} records")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, debug=args.debug)

    try:
        return asyncio.run(main_async(args))
    except ZendeskError as e:
        logger.error(format_error_details(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
