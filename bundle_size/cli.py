"""Command-line interface for measuring and comparing bundle sizes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bundle_size.errors import BundleSizeError
from bundle_size.report import render_comparison, render_single
from bundle_size.sizes import (
    dump_snapshot,
    get_dynamic_bundle_sizes,
    get_static_bundle_sizes,
    load_snapshot,
    save_snapshot,
)

logger = logging.getLogger(__name__)

MEASURERS = {
    "static": get_static_bundle_sizes,
    "dynamic": get_dynamic_bundle_sizes,
}


def get_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description="Measure gzipped bundle sizes of a build and report changes as markdown",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # measure command
    measure_parser = subparsers.add_parser("measure", help="Measure page sizes and write a snapshot")
    measure_parser.add_argument(
        "--working-dir",
        "-w",
        default=".",
        help="Project directory containing the build output (default: current directory)",
    )
    measure_parser.add_argument(
        "--kind",
        choices=sorted(MEASURERS),
        default="static",
        help="Measure static pages or dynamically loaded chunks (default: static)",
    )
    measure_parser.add_argument("--output", "-o", help="Snapshot JSON file path (default: stdout)")

    # compare command
    compare_parser = subparsers.add_parser("compare", help="Render changes between two snapshots")
    compare_parser.add_argument("--name", "-n", required=True, help="Table heading, e.g. 'Static pages'")
    compare_parser.add_argument("--current", "-c", required=True, help="Snapshot of the build under review")
    compare_parser.add_argument("--reference", "-r", help="Snapshot of the reference build (omit for a first build)")
    compare_parser.add_argument("--output", "-o", help="Markdown file path (default: stdout)")

    # table command
    table_parser = subparsers.add_parser("table", help="Render a single snapshot")
    table_parser.add_argument("--name", "-n", required=True, help="Table heading, e.g. 'Static pages'")
    table_parser.add_argument("snapshot", help="Snapshot JSON file")
    table_parser.add_argument("--output", "-o", help="Markdown file path (default: stdout)")

    return parser


def write_output(content: str, output: str | None) -> None:
    """Write ``content`` to ``output``, or to stdout when no path is given."""
    if output is None:
        sys.stdout.write(content)
        return
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote report to {output_path}")


def run(args: argparse.Namespace) -> None:
    """Execute the parsed subcommand."""
    if args.command == "measure":
        sizes = MEASURERS[args.kind](args.working_dir)
        if args.output:
            save_snapshot(sizes, args.output)
        else:
            sys.stdout.write(dump_snapshot(sizes).decode("utf-8"))

    elif args.command == "compare":
        reference = load_snapshot(args.reference) if args.reference else []
        current = load_snapshot(args.current)
        markdown = render_comparison(args.name, reference, current)
        if markdown is None:
            logger.info(f"No significant changes for {args.name}")
            return
        write_output(markdown + "\n", args.output)

    elif args.command == "table":
        write_output(render_single(args.name, load_snapshot(args.snapshot)) + "\n", args.output)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
    -------
        Exit code (0 for success, 1 for failure)

    """
    parser = get_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        run(args)
    except BundleSizeError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
