"""markdown to HTML conversion."""

from typing import cast

from markdown_it import MarkdownIt

from mdlatex.errors import ConversionError


def _build_parser(allow_raw_html: bool, smart: bool) -> MarkdownIt:
    """builds a plain CommonMark parser (no GFM tables)."""
    md = MarkdownIt("commonmark", {"html": allow_raw_html, "typographer": smart})
    if smart:
        md.enable(["replacements", "smartquotes"])
    return md


def markdown_to_html(text: str, allow_raw_html: bool = True, smart: bool = True) -> str:
    """
    converts markdown to HTML.

    Args:
        text: markdown text
        allow_raw_html: passes raw HTML blocks and inline tags through
        smart: enables typographic quotes, dashes and ellipses

    Returns:
        rendered HTML

    Raises:
        ConversionError: if markdown-it fails on the input
    """
    md = _build_parser(allow_raw_html, smart)
    try:
        return cast(str, md.render(text))
    except Exception as e:
        raise ConversionError(f"Failed to render markdown: {e}") from e
