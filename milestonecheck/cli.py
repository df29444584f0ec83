import argparse
import sys
from datetime import date, datetime
from pathlib import Path

from milestonecheck.clock import FixedClock, SystemClock
from milestonecheck.config import ConfigError, get_runs_dir, load_config
from milestonecheck.errors import MilestoneLookupError
from milestonecheck.evaluator import is_milestone_due_today
from milestonecheck.github.client import GitHubClient
from milestonecheck.trace.store_jsonl import JsonlTraceStore

EXIT_LOOKUP_FAILED = 1
EXIT_BAD_CONFIG = 2


def generate_run_id() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def _trace_path(value: str) -> Path:
    if value:
        return Path(value)
    return get_runs_dir() / generate_run_id() / "trace" / "events.jsonl"


def cmd_check(args):
    try:
        config = load_config(
            args.repo,
            version=args.version,
            version_file=args.version_file,
            token=args.token,
            api_url=args.api_url,
            timeout=args.timeout,
        )
    except ConfigError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(EXIT_BAD_CONFIG)

    clock = FixedClock(args.today) if args.today else SystemClock()
    trace_store = None
    if args.trace is not None:
        try:
            trace_store = JsonlTraceStore(_trace_path(args.trace))
            trace_store.open()
        except OSError as e:
            print(f"✗ Error: cannot write trace: {e}", file=sys.stderr)
            sys.exit(EXIT_BAD_CONFIG)

    try:
        with GitHubClient(
            credential=config.credential, base_url=config.api_url, timeout=config.timeout
        ) as client:
            due = is_milestone_due_today(
                config.repository,
                config.credential,
                config.version,
                clock=clock,
                client=client,
                trace_store=trace_store,
            )
    except MilestoneLookupError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(EXIT_LOOKUP_FAILED)
    finally:
        if trace_store is not None:
            trace_store.close()
            print(f"  Trace: {trace_store.path}", file=sys.stderr)

    print("true" if due else "false")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="milestonecheck: is a GitHub release milestone due?"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    check_parser = subparsers.add_parser(
        "check", help="Print true if the milestone is due today or past due, else false"
    )
    check_parser.add_argument("--repo", required=True, help="Repository (owner/name)")
    version_group = check_parser.add_mutually_exclusive_group()
    version_group.add_argument("--version", help="Milestone title, e.g. 1.2.0")
    version_group.add_argument(
        "--version-file", type=Path, help="File whose first line is the milestone title"
    )
    check_parser.add_argument("--token", help="GitHub access token (default: $GITHUB_TOKEN)")
    check_parser.add_argument("--api-url", help="GitHub API URL (default: https://api.github.com)")
    check_parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: 10)")
    check_parser.add_argument(
        "--today", type=_parse_date, help="Evaluate as if today were YYYY-MM-DD"
    )
    check_parser.add_argument(
        "--trace",
        nargs="?",
        const="",
        help="Write a JSONL trace (default path: runs/<run-id>/trace/events.jsonl)",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "check":
        cmd_check(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
