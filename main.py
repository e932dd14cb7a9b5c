"""CLI entry point for the business dashboard core."""

import argparse
import logging
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from bizdash.core.config import Settings
from bizdash.core.db import get_job, init_db
from bizdash.core.loader import load_records_yaml, store_bundle
from bizdash.core.schemas import RECORD_KINDS
from bizdash.pipeline.dashboard import export_results_json, progress_report, search_records
from bizdash.pipeline.jobs import SORT_MODES, active_jobs, job_stats, paginate, sort_jobs
from bizdash.pipeline.progress import compute_progress, job_progress
from bizdash.sources.sqlite import SqliteSource

DEFAULT_CONFIG = "config/settings.yaml"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Business dashboard - job progress, record search and job lists",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- load subcommand ---
    load_parser = subparsers.add_parser("load", help="Load records from a YAML file")
    load_parser.add_argument("--data", required=True, help="Path to records YAML file")
    _add_common(load_parser)

    # --- search subcommand ---
    search_parser = subparsers.add_parser("search", help="Search records of one kind")
    search_parser.add_argument("kind", choices=list(RECORD_KINDS))
    search_parser.add_argument("--query", "-q", default="", help="Free-text query")
    search_parser.add_argument(
        "--category",
        default=None,
        help="Exact category value to keep (default: all categories)",
    )
    search_parser.add_argument("--export", choices=["json"], help="Export results to format (json)")
    _add_common(search_parser)

    # --- progress subcommand ---
    progress_parser = subparsers.add_parser("progress", help="Show job progress")
    progress_parser.add_argument("--job-id", help="Job to report on (default: all jobs)")
    progress_parser.add_argument("--start", type=int, help="Start, epoch milliseconds")
    progress_parser.add_argument("--end", type=int, help="End, epoch milliseconds")
    progress_parser.add_argument(
        "--now",
        type=int,
        help="Reference time, epoch milliseconds (default: current time)",
    )
    _add_common(progress_parser)

    # --- jobs subcommand ---
    jobs_parser = subparsers.add_parser("jobs", help="List jobs")
    jobs_parser.add_argument("--sort", choices=list(SORT_MODES), help="Sort order")
    jobs_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    jobs_parser.add_argument("--active", action="store_true", help="Only active jobs")
    _add_common(jobs_parser)

    # --- stats subcommand ---
    stats_parser = subparsers.add_parser("stats", help="Show job summary counts")
    _add_common(stats_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default file is absent."""
    if path == DEFAULT_CONFIG and not Path(path).exists():
        return Settings()
    return Settings.from_yaml(path)


def _now_millis() -> int:
    return int(datetime.now().timestamp() * 1000)


def cmd_load(args: argparse.Namespace, conn: sqlite3.Connection) -> None:
    """Handle load subcommand."""
    bundle = load_records_yaml(args.data)
    counts = store_bundle(conn, bundle)
    print(f"Loaded records from {args.data}")
    for kind, count in counts.items():
        print(f"  {kind}: {count}")


def cmd_search(args: argparse.Namespace, conn: sqlite3.Connection, settings: Settings) -> None:
    """Handle search subcommand."""
    matches = search_records(SqliteSource(conn), args.kind, args.query, args.category, settings)

    if args.export == "json":
        print(export_results_json(matches))
        return

    fields = settings.search.entities[args.kind].fields
    print(f"{len(matches)} {args.kind} found")
    for m in matches:
        shown = m.highlighted_fields or {f: getattr(m.entity, f, "") for f in fields}
        print("  " + " | ".join(str(shown[f]) for f in fields))


def cmd_progress(args: argparse.Namespace, conn: sqlite3.Connection, settings: Settings) -> None:
    """Handle progress subcommand."""
    now = args.now if args.now is not None else _now_millis()

    if args.start is not None or args.end is not None:
        result = compute_progress(args.start, args.end, now)
        print(f"{result.progress_percentage:.1f}% complete, "
              f"{result.elapsed_days} days elapsed, {result.days_left} days left")
        return

    if args.job_id:
        job = get_job(conn, args.job_id)
        if job is None:
            msg = f"Job not found: {args.job_id}"
            raise ValueError(msg)
        result = job_progress(job, now, settings.jobs.timezone)
        print(f"{job.job_name}: {result.progress_percentage:.1f}% complete, "
              f"{result.elapsed_days} days elapsed, {result.days_left} days left")
        return

    for entry in progress_report(SqliteSource(conn), now, settings):
        p = entry.progress
        print(f"  {entry.job.job_name}: {p.progress_percentage:.1f}% "
              f"({p.elapsed_days} elapsed, {p.days_left} left)")


def cmd_jobs(args: argparse.Namespace, conn: sqlite3.Connection, settings: Settings) -> None:
    """Handle jobs subcommand."""
    jobs = SqliteSource(conn).fetch("jobs")
    if args.active:
        jobs = active_jobs(jobs)  # type: ignore[arg-type]
    if args.sort:
        jobs = sort_jobs(jobs, args.sort)  # type: ignore[arg-type]

    page = paginate(jobs, args.page, settings.jobs.page_size)  # type: ignore[arg-type]
    print(f"Page {page.page} of {page.total_pages}")
    for job in page.items:
        print(f"  [{job.status}] {job.job_name} ({job.id})")


def cmd_stats(conn: sqlite3.Connection) -> None:
    """Handle stats subcommand."""
    stats = job_stats(SqliteSource(conn).fetch("jobs"))  # type: ignore[arg-type]
    print(f"Total jobs: {stats.total_jobs}")
    print(f"Active jobs: {stats.active_jobs}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    conn = init_db(settings.database.path)
    try:
        if args.command == "load":
            cmd_load(args, conn)
        elif args.command == "search":
            cmd_search(args, conn, settings)
        elif args.command == "progress":
            cmd_progress(args, conn, settings)
        elif args.command == "jobs":
            cmd_jobs(args, conn, settings)
        else:
            cmd_stats(conn)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
