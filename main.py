"""
Main entry point for the ContentDiff command line tool.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Report formatting
- Exit codes
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from contentdiff import __version__
from contentdiff.core.models import CompareResult, DiffLineType, FileDescriptor
from contentdiff.services.comparison import ComparisonError, ComparisonService
from contentdiff.services.settings import SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "contentdiff"
APP_VERSION = __version__

EXIT_OK = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: str = ""
    right_path: str = ""
    config_file: Optional[str] = None
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    as_json: bool = False
    show_unchanged: Optional[bool] = None
    exit_code: bool = False


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr so that reports on stdout stay clean.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # chardet is chatty at DEBUG
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[list[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Classify two files as text or binary and reconcile them line by line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt               Compare two files
  %(prog)s --json old.json new.json      Print the full result as JSON
  %(prog)s --exit-code a.cfg b.cfg       Exit with 1 when the files differ
        """
    )

    # Positional arguments
    parser.add_argument('left', help='Original file')
    parser.add_argument('right', help='Comparison file')

    # Output options
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )
    unchanged_group = parser.add_mutually_exclusive_group()
    unchanged_group.add_argument(
        '--show-unchanged',
        dest='show_unchanged',
        action='store_true',
        default=None,
        help='Include unchanged lines in the text report'
    )
    unchanged_group.add_argument(
        '--changes-only',
        dest='show_unchanged',
        action='store_false',
        help='Only list changed lines in the text report'
    )
    parser.add_argument(
        '--exit-code',
        action='store_true',
        help='Exit with status 1 when the inputs differ'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.left_path = parsed.left
    result.right_path = parsed.right
    result.config_file = parsed.config
    result.log_file = parsed.log_file
    result.as_json = parsed.json
    result.show_unchanged = parsed.show_unchanged
    result.exit_code = parsed.exit_code
    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


# =============================================================================
# Report Formatting
# =============================================================================

def _describe(label: str, descriptor: FileDescriptor) -> str:
    return (f"{label} {descriptor.name}: {descriptor.kind.value}, "
            f"{descriptor.media_type}, {descriptor.size} bytes, "
            f"sha256 {descriptor.hash[:12]}")


def format_report(result: CompareResult, show_unchanged: bool = True) -> Iterator[str]:
    """
    Format a comparison result as plain text lines.

    Changed lines use the prefixes ``+`` (added), ``-`` (removed) and
    ``!`` (modified); modified lines show both texts.
    """
    left, right = result.files
    yield _describe('---', left)
    yield _describe('+++', right)

    summary = result.summary
    if summary.identical:
        yield "Files are identical"
    else:
        yield (f"{summary.total_lines} lines, +{summary.added} -{summary.removed} "
               f"~{summary.modified}, {summary.change_percent}% changed")

    for warning in result.warnings:
        yield f"warning: {warning}"

    if result.text_diff is None:
        return

    for line in result.text_diff:
        old = line.old_line_number or ''
        new = line.new_line_number or ''
        numbers = f"{old:>5} {new:>5}"

        if line.line_type == DiffLineType.UNCHANGED:
            if show_unchanged:
                yield f"{numbers} {line.prefix} {line.before_text}"
        elif line.line_type == DiffLineType.MODIFIED:
            yield f"{numbers} {line.prefix} {line.before_text}"
            yield f"{'':>11} > {line.after_text}"
        elif line.line_type == DiffLineType.REMOVED:
            yield f"{numbers} {line.prefix} {line.before_text}"
        else:
            yield f"{numbers} {line.prefix} {line.after_text}"


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_arguments(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = setup_logging(args.log_level, log_file)
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    config_path = Path(args.config_file) if args.config_file else None
    settings = SettingsManager(config_path).settings
    show_unchanged = (settings.comparison.show_unchanged
                      if args.show_unchanged is None else args.show_unchanged)

    service = ComparisonService(settings)
    try:
        result = service.compare_files(args.left_path, args.right_path)
    except ComparisonError as e:
        logger.error(f"Comparison failed: {e}")
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.as_json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        for line in format_report(result, show_unchanged):
            print(line)

    if args.exit_code and result.has_differences:
        return EXIT_DIFFERENT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
