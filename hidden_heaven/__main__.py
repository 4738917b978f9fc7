#!/usr/bin/env python3
"""
hidden-heaven - CLI Entry Point
===============================

Usage:
    python -m hidden_heaven                       # hide items of the current package
    python -m hidden_heaven packages/a packages/b --link-folder-name stash
    python -m hidden_heaven packages/a --reset
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import Mode, RunConfig, resolve_link_folder_name, resolve_policy
from .errors import InvalidArgument
from .orchestrator import run
from .utils import console, print_header, print_error, print_warning, print_success, print_report_table


def report_results(report) -> None:
    """Print per-package outcomes, then the summary table."""
    for result in report.results:
        if result.ok:
            for warning in result.warnings:
                print_warning(f"{result.root}: dangling link {warning}")
            state = "updated" if result.changed else "already up to date"
            if report.mode == Mode.HIDE:
                print_success(f"{result.root}: {len(result.linked)} items hidden ({state})")
            else:
                print_success(f"{result.root}: reset ({state})")
        else:
            kind = type(result.error).__name__
            print_error(f"{result.root}: {kind}: {result.error}")

    print_report_table(report)

    if report.failed:
        print_error(f"{len(report.failed)} of {len(report.results)} packages failed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hidden-heaven",
        description="Hide package items in a link folder and from the VS Code file tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("packages", type=Path, nargs="*", default=[Path(".")],
                        help="Package root directories (default: current directory)")
    parser.add_argument("--link-folder-name", type=str, metavar="NAME",
                        help="Link folder name (default: $HIDDEN_HEAVEN_LINK_FOLDER_NAME or hidden-heaven)")
    parser.add_argument("--reset", action="store_true",
                        help="Remove link folders and clear the editor exclusions")
    parser.add_argument("--policy", type=Path, metavar="FILE",
                        help="JSON policy file with include/exclude lists")
    parser.add_argument("--include", type=str, metavar="NAMES",
                        help="Items to hide, replaces the default list (comma-separated, globs allowed)")
    parser.add_argument("--exclude", type=str, metavar="NAMES",
                        help="Items never to hide (comma-separated, globs allowed)")
    parser.add_argument("--no-progress", action="store_true",
                        help="Disable the progress bar")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = RunConfig(
            link_folder_name=resolve_link_folder_name(args.link_folder_name),
            mode=Mode.RESET if args.reset else Mode.HIDE,
            policy=resolve_policy(args.policy, args.include, args.exclude),
        )
    except InvalidArgument as e:
        print_error(str(e))
        return 2

    print_header(
        "hidden-heaven",
        f"Mode: {config.mode.value}\nLink folder: {config.link_folder_name}\nPackages: {len(args.packages)}"
    )

    try:
        report = run(args.packages, config, show_progress=not args.no_progress)
    except KeyboardInterrupt:
        console.print("\n[bold red][ABORT] Operation cancelled by user[/bold red]")
        return 130

    report_results(report)
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
