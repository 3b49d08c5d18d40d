"""CLI entrypoint for removing emoji from files or standard input."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from nomoji import __version__
from nomoji.assembly.report_assembler import assemble_report, assemble_stdin_report, write_report
from nomoji.config import NomojiConfig
from nomoji.services.file_service import OutputMode, process_files, process_stdin

load_dotenv()
load_dotenv(Path(__file__).resolve().parent / ".env")

LOGGER = logging.getLogger("nomoji")

STDIN_MARKER = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nomoji",
        description="Remove emoji characters from text files",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Input file(s) to process (omit or use - for stdin)",
    )
    parser.add_argument(
        "-b",
        "--backup",
        action="store_true",
        help="Create backup files with .bak extension before editing in place",
    )
    parser.add_argument(
        "-i",
        "--inplace",
        action="store_true",
        help="Edit files in place",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Count emojis without removing them",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        help="Number of files to process concurrently",
    )
    parser.add_argument(
        "--encoding",
        help="Text encoding of the input (default: utf-8)",
    )
    parser.add_argument(
        "--no-report",
        action="store_true",
        help="Do not print the summary report to stderr",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_mode(args: argparse.Namespace) -> OutputMode:
    if args.backup:
        return OutputMode.BACKUP
    if args.inplace:
        return OutputMode.INPLACE
    return OutputMode.STDOUT


def run(args: argparse.Namespace, config: NomojiConfig) -> int:
    """Process the requested inputs and return the process exit status."""

    files: List[str] = list(args.files)
    if not files or files == [STDIN_MARKER]:
        if args.backup or args.inplace:
            LOGGER.warning("--backup/--inplace have no effect on standard input")
        result = process_stdin(dry_run=args.dry_run, config=config)
        if not args.no_report:
            write_report(assemble_stdin_report(result, dry_run=args.dry_run, title=config.report.title))
        return 0 if result.success else 1

    results = process_files(
        files,
        mode=resolve_mode(args),
        dry_run=args.dry_run,
        config=config,
        max_workers=args.jobs,
    )
    if not args.no_report:
        write_report(assemble_report(results, dry_run=args.dry_run, title=config.report.title))

    failures = sum(1 for result in results if not result.success)
    if failures:
        LOGGER.error("%d of %d file(s) failed", failures, len(results))
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if STDIN_MARKER in args.files and len(args.files) > 1:
        parser.error("'-' (standard input) cannot be combined with file arguments")
    if args.jobs is not None and args.jobs < 1:
        parser.error("--jobs must be at least 1")

    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = NomojiConfig.from_env()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2
    if args.encoding:
        config.processing.encoding = args.encoding

    return run(args, config)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
