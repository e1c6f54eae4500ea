#!/usr/bin/env python3
"""
Code Analyzer - Main Entry Point

Runs a local heuristic syntax check over pasted source code, asks a
generative model for deeper analysis when an API key is configured, and
prints or exports the merged report.

Usage:
    code-analyzer analyze Example.java
    cat Example.java | code-analyzer analyze --format json
    code-analyzer analyze Example.java --pdf report.pdf
"""

import argparse
import logging
import sys
from pathlib import Path

from .analyzer import CodeAnalyzer, describe_failure
from .config import AnalyzerConfig
from .errors import InputValidationError
from .tools import DEFAULT_PDF_NAME, export_pdf, format_report_markdown, report_to_json
from .utils import setup_logging, get_logger


def read_source(path: str) -> str:
    """Read source text from a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_analyze(args):
    """Handle 'analyze' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    # Build config
    config = AnalyzerConfig.from_env()

    if args.local_only:
        config.use_remote = False
    if args.timeout is not None:
        config.request_timeout = args.timeout
    if args.min_interval is not None:
        config.min_request_interval = args.min_interval
    if args.model:
        config.model = args.model
    if args.language:
        config.language = args.language

    try:
        source = read_source(args.path)
    except OSError as e:
        logger.error(f"Cannot read {args.path}: {e}")
        sys.exit(1)

    # Run
    try:
        report = CodeAnalyzer(config).analyze_sync(source)
    except InputValidationError as e:
        logger.error(describe_failure(e))
        sys.exit(1)
    except Exception as e:
        logger.debug("Analysis error", exc_info=True)
        logger.error(describe_failure(e))
        sys.exit(1)

    if args.format == "json":
        print(report_to_json(report))
    else:
        print(format_report_markdown(report), end="")

    if args.pdf:
        written = export_pdf(report, args.pdf)
        logger.info(f"PDF report written to {written}")

    summary = report.summary
    logger.info(
        f"Analysis complete: {summary.total_issues} issues, "
        f"quality {summary.overall_code_quality.value}"
    )
    sys.exit(0)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Heuristic and model-assisted source code analyzer"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze source code")
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Source file to analyze (default: read stdin)"
    )
    analyze_parser.add_argument(
        "--format",
        type=str,
        default="markdown",
        choices=["markdown", "json"],
        help="Report format printed to stdout (default: markdown)"
    )
    analyze_parser.add_argument(
        "--pdf",
        type=str,
        metavar="FILE",
        help=f"Also export a PDF report to FILE (e.g. {DEFAULT_PDF_NAME})"
    )
    analyze_parser.add_argument(
        "--local-only",
        action="store_true",
        help="Skip remote analysis even if an API key is configured"
    )
    analyze_parser.add_argument(
        "--timeout",
        type=float,
        help="Remote analysis timeout in seconds (default: 10)"
    )
    analyze_parser.add_argument(
        "--min-interval",
        type=float,
        help="Minimum seconds between remote requests (default: 20)"
    )
    analyze_parser.add_argument(
        "--model",
        type=str,
        help="Model used for remote analysis"
    )
    analyze_parser.add_argument(
        "--language",
        type=str,
        help="Language named in the remote prompt (default: Java)"
    )
    analyze_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # Route to subcommand
    if args.command == "analyze":
        cmd_analyze(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
