# src/main.py - v1
"""CLI entry point.

Usage:
    treecopy -s <source> -t <target> [-w <workers>] [options]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from treecopy.version import __version__

if TYPE_CHECKING:
    from treecopy.config.settings import Settings
    from treecopy.core.models import CopyResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 3
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FATAL

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(_cmd_copy(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_FATAL


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="treecopy",
        description=f"treecopy v{__version__} - parallel directory tree copier",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-s", "--source", type=Path, required=True,
        help="Source directory path",
    )
    parser.add_argument(
        "-t", "--target", type=Path, required=True,
        help="Target directory path (created if absent)",
    )
    parser.add_argument(
        "-w", "-mt", "--workers", type=_positive_int, default=None,
        help="Number of worker threads (default: TREECOPY_WORKERS or 4)",
    )
    parser.add_argument(
        "--no-progress", action="store_true",
        help="Disable the live progress bar",
    )
    parser.add_argument(
        "--log-format", choices=["text", "json"], default=None,
        help="Log output format (default: TREECOPY_LOG_FORMAT or text)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _load_settings(args: argparse.Namespace) -> Settings:
    from treecopy.config.settings import load_settings

    overrides: dict[str, object] = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.no_progress:
        overrides["progress_enabled"] = False
    if args.log_format is not None:
        overrides["log_format"] = args.log_format
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return load_settings(**overrides)


async def _cmd_copy(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a copy run and print its summary."""
    from treecopy.api.facade import copy_tree_async

    source: Path = args.source
    if not source.is_dir():
        logger.error("Source must be a directory: %s", source)
        return EXIT_FATAL

    result = await copy_tree_async(
        source, args.target, workers=settings.workers, settings=settings,
    )
    _print_result_summary(result)
    return EXIT_OK if result.succeeded else EXIT_PARTIAL


def _print_result_summary(result: CopyResult) -> None:
    """Print a human-readable summary of a CopyResult."""
    from treecopy.engine.orchestrator import format_bytes

    print("\nCopy complete:")
    print(f"  Files:        {result.files_completed}/{result.file_count}")
    print(f"  Folders:      {result.folder_count}")
    print(f"  Size:         {format_bytes(result.total_bytes)}")
    print(f"  Copied:       {format_bytes(result.bytes_copied)}")
    if not result.succeeded:
        print(f"  Failed:       {result.files_failed} files, {result.folders_failed} folders")
    for timing in result.phases:
        print(f"  {timing.name + ':':<13} {timing.elapsed_seconds:.3f}s")
    print(f"  Total:        {result.elapsed_seconds:.3f}s")


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from treecopy.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
