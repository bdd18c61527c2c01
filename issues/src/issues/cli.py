"""Command line entry point: print the last N issues of a GitHub project as a table.

Usage:
    issues <owner> <project> [count]    # count defaults to 4
    issues --config path/to/config.json <owner> <project>

Exit codes:
    0  Table printed, or usage shown
    1  Invalid configuration, or a configured column holds nested values
    2  Fetch failed
"""

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from issues.config import Config
from issues.github_issues import FetchResult, error_message, fetch
from issues.table_formatter import print_table_for_columns, unprintable_fields

PROG = "issues"
ERROR_SOURCE = "Github"


@dataclass
class IssuesRequest:
    user: str
    project: str
    count: int


@dataclass
class HelpRequest:
    pass


Request = IssuesRequest | HelpRequest


@dataclass
class Success:
    pass


@dataclass
class UsageRequested:
    pass


@dataclass
class FetchFailed:
    source: str
    message: str


@dataclass
class InvalidColumns:
    fields: list[str]


Outcome = Success | UsageRequested | FetchFailed | InvalidColumns


def usage(default_count: int) -> str:
    return f"usage: {PROG} <owner> <project> [ count | {default_count} ]"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False, exit_on_error=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("args", nargs="*")
    return parser


def _parse_options(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]] | None:
    """Split ``argv`` into known options and leftovers; None if an option is malformed."""
    try:
        return _build_parser().parse_known_args(list(argv))
    except argparse.ArgumentError:
        return None


def _parse_count(value: str) -> int | None:
    try:
        count = int(value)
    except ValueError:
        return None
    if count < 0:
        return None
    return count


def args_to_internal_representation(args: Sequence[str], default_count: int) -> Request:
    """Map positional arguments to a request; any other shape asks for help."""
    if len(args) == 3:
        user, project, raw_count = args
        count = _parse_count(raw_count)
        if count is None:
            return HelpRequest()
        return IssuesRequest(user, project, count)
    if len(args) == 2:
        user, project = args
        return IssuesRequest(user, project, default_count)
    return HelpRequest()


def parse_args(argv: Sequence[str], default_count: int) -> Request:
    """Parse ``argv`` into ``IssuesRequest(user, project, count)`` or ``HelpRequest``.

    Unrecognized options are treated as a request for help.
    """
    parsed = _parse_options(argv)
    if parsed is None:
        return HelpRequest()
    args, unknown = parsed
    if args.help or unknown:
        return HelpRequest()
    return args_to_internal_representation(args.args, default_count)


def sort_into_descending_order(list_of_issues: Sequence[dict]) -> list[dict]:
    """Newest first by ``created_at``; ISO-8601 strings sort lexicographically."""
    return sorted(list_of_issues, key=lambda issue: issue.get("created_at") or "", reverse=True)


def last(list_of_issues: Sequence[dict], count: int) -> list[dict]:
    """Keep the first ``count`` issues of a newest-first list, oldest first."""
    return list(reversed(list_of_issues[:count]))


def decode_response(result: FetchResult) -> list[dict] | FetchFailed:
    if not result.ok:
        return FetchFailed(ERROR_SOURCE, error_message(result.body))
    if not isinstance(result.body, list):
        return FetchFailed(ERROR_SOURCE, f"expected a list of issues, got {type(result.body).__name__}")
    return result.body


def process(request: Request, config: Config, out: IO[str] | None = None) -> Outcome:
    """Run one request; the caller decides how to exit."""
    if out is None:
        out = sys.stdout

    if isinstance(request, HelpRequest):
        print(usage(config.default_count), file=out)
        return UsageRequested()

    decoded = decode_response(fetch(request.user, request.project, config))
    if isinstance(decoded, FetchFailed):
        print(f"Error fetching from {decoded.source}: {decoded.message}", file=out)
        return decoded

    issues = last(sort_into_descending_order(decoded), request.count)
    bad_fields = unprintable_fields(issues, config.columns)
    if bad_fields:
        print(f"ERROR: columns hold nested values and cannot be printed: {', '.join(bad_fields)}", file=sys.stderr)
        return InvalidColumns(bad_fields)

    print_table_for_columns(issues, config.columns, out=out, fit_headers=config.fit_headers)
    return Success()


def exit_code(outcome: Outcome) -> int:
    if isinstance(outcome, FetchFailed):
        return 2
    if isinstance(outcome, InvalidColumns):
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, load config, fetch and print. Returns the exit code."""
    if argv is None:
        argv = sys.argv[1:]

    # --config must be known before the default count is
    parsed = _parse_options(argv)
    config = Config(config_file=parsed[0].config if parsed else None)
    try:
        config.load_config()
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    request = parse_args(argv, config.default_count)
    return exit_code(process(request, config))


if __name__ == "__main__":
    sys.exit(main())
