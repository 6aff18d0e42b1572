"""Markdown+LaTeX to HTML renderer."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from mdlatex.core.models import RenderOptions
from mdlatex.progress import ProgressHandler
from mdlatex.render import render_animated, render_once
from mdlatex.targets import FileTarget

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for mdlatex CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 document failed to render, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Render Markdown with \\( \\) and \\[ \\] math to HTML"
    )
    parser.add_argument(
        "source",
        help="Markdown file, or - for stdin",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="HTML output file (default: stdout)",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="render chunk by chunk, splitting on blank lines",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="seconds to wait between chunks with --animate (default: 0)",
    )
    parser.add_argument(
        "--no-smart",
        action="store_true",
        help="disable typographic quotes and dashes",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show progress bar with --animate",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress summary output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    if args.delay < 0:
        logger.error("Delay must not be negative: %s", args.delay)
        return 2

    if args.source == "-":
        markdown = sys.stdin.read()
    else:
        source_path = Path(args.source)
        if not source_path.is_file():
            logger.error("Source not found: %s", args.source)
            return 2
        markdown = source_path.read_text(encoding="utf-8")

    options = RenderOptions(smart=not args.no_smart, chunk_delay=args.delay)

    try:
        if args.output:
            with open(args.output, "w", encoding="utf-8") as stream:
                return _render(markdown, stream, options, args)
        return _render(markdown, sys.stdout, options, args)
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2


def _render(
    markdown: str, stream: TextIO, options: RenderOptions, args: argparse.Namespace
) -> int:
    """renders markdown into stream, one-shot or animated."""
    if args.animate:
        with ProgressHandler(quiet=args.quiet, show_progress=args.progress) as handler:
            render_animated(markdown, FileTarget(stream), options, handler)
        return 0

    html = render_once(markdown, FileTarget(stream, wrap=False), options)
    if not html and markdown.strip():
        logger.error("Failed to render %s", args.source)
        return 1
    return 0
