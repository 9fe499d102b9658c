"""Command line interface for jsoncompare."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import get_default_options, load_options
from .engine import JsonComparer
from .exceptions import JsonCompareError
from .models import NameComparison, NullComparison, ValueComparison
from .runner import run_cases

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsoncompare",
        description="Structural JSON comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsoncompare diff expected.json actual.json
  jsoncompare diff expected.json actual.json -i meta.etag -i items.updatedAt
  jsoncompare diff expected.json actual.json --config compare.yaml --exact
  jsoncompare run tests/cases --report report.json
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    diff = commands.add_parser("diff", help="Compare two JSON files")
    diff.add_argument("left", help="Path to the left (expected) JSON file")
    diff.add_argument("right", help="Path to the right (actual) JSON file")
    diff.add_argument("-c", "--config", help="YAML/JSON file with options and ignore_paths")
    diff.add_argument(
        "-i", "--ignore", action="append", default=[], metavar="PATH",
        help="Path to ignore (repeatable), e.g. items.price or $.items[0].price"
    )
    diff.add_argument("--exact", action="store_true", help="Compare numbers and strings by raw text")
    diff.add_argument(
        "--semantic-nulls", action="store_true",
        help="Treat a null member as equal to a missing one"
    )
    diff.add_argument(
        "--ignore-case-names", action="store_true",
        help="Match object member names case-insensitively"
    )
    diff.add_argument(
        "--case-sensitive-paths", action="store_true",
        help="Match ignore paths case-sensitively"
    )
    diff.add_argument("-m", "--max-differences", type=int, help="Stop after this many differences")
    diff.add_argument("--json", action="store_true", help="Print the result as JSON")

    run = commands.add_parser("run", help="Run a folder of comparison case files")
    run.add_argument("folder", help="Path to folder containing case files")
    run.add_argument("-c", "--config", help="YAML/JSON file with default options")
    run.add_argument("-r", "--report", help="Path to output JSON report file")
    run.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    return parser


def _diff(args) -> int:
    if args.config:
        options, ignore_paths = load_options(args.config)
    else:
        options, ignore_paths = get_default_options(), []

    changes = {}
    if args.exact:
        changes["value_comparison"] = ValueComparison.EXACT
    if args.semantic_nulls:
        changes["null_comparison"] = NullComparison.SEMANTIC
    if args.ignore_case_names:
        changes["property_name_comparison"] = NameComparison.IGNORE_CASE
    if args.case_sensitive_paths:
        changes["path_comparison"] = NameComparison.ORDINAL
    if args.max_differences is not None:
        changes["max_differences"] = args.max_differences
    if changes:
        options = options.clone(**changes)

    left = Path(args.left).read_text(encoding="utf-8")
    right = Path(args.right).read_text(encoding="utf-8")
    result = JsonComparer(options).compare_json(left, right, ignore_paths + args.ignore)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(result.to_display_string())

    return EXIT_DIFFERENT if result.has_differences() else EXIT_EQUAL


def _run(args) -> int:
    options = load_options(args.config)[0] if args.config else None
    report = run_cases(args.folder, options, print_report=not args.quiet)

    if args.report:
        with open(args.report, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, default=str)
        if not args.quiet:
            print(f"\nReport saved to: {args.report}")

    return EXIT_EQUAL if report.failed == 0 else EXIT_DIFFERENT


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.command == "diff":
            return _diff(args)
        return _run(args)
    except (JsonCompareError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
