"""Markdown+LaTeX to HTML pipeline shared by the one-shot and chunked renderers."""

import logging
from typing import Optional

from mdlatex.core.models import RenderOptions
from mdlatex.errors import ConversionError
from mdlatex.renderers.cells import render_cell
from mdlatex.renderers.latex import extract_latex_segments, restore_latex_segments
from mdlatex.renderers.markdown import markdown_to_html
from mdlatex.renderers.tables import preprocess_tables_in_markdown

logger = logging.getLogger(__name__)


def convert_markdown_latex(text: str, options: Optional[RenderOptions] = None) -> str:
    """
    converts Markdown+LaTeX to HTML.

    Math is swapped for placeholders first, so neither the per-cell table
    rendering nor the document pass ever sees it, and is put back once at
    the end. Tables are converted before the document pass since the
    converter has no table support of its own.

    Args:
        text: markdown document or chunk
        options: render options (defaults to RenderOptions())

    Returns:
        HTML with math literals restored

    Raises:
        ConversionError: if the document pass fails
    """
    options = options or RenderOptions()

    def convert(markdown: str) -> str:
        return markdown_to_html(
            markdown, allow_raw_html=options.allow_raw_html, smart=options.smart
        )

    def convert_cell(cell_text: str) -> str:
        return render_cell(cell_text, converter=convert)

    stripped, segments = extract_latex_segments(text)
    expanded = preprocess_tables_in_markdown(stripped, convert_cell)
    html = convert(expanded)
    return restore_latex_segments(html, segments)


def render_markdown_latex(text: str, options: Optional[RenderOptions] = None) -> str:
    """renders Markdown+LaTeX to HTML, returning "" if conversion fails."""
    try:
        return convert_markdown_latex(text, options)
    except ConversionError as e:
        logger.error("Failed to render markdown: %s", e)
        return ""


def split_into_chunks(text: str) -> list[str]:
    """splits markdown on blank lines ("\\n\\n") for chunked rendering."""
    return text.split("\n\n")


class RenderCache:
    """memoizes rendered HTML keyed by the exact markdown source."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()
        self._html: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._html)

    def __contains__(self, markdown: object) -> bool:
        return markdown in self._html

    def render(self, markdown: str) -> str:
        """returns cached HTML for markdown, rendering it on first use."""
        cached = self._html.get(markdown)
        if cached is not None:
            logger.debug("Using cached HTML (%d chars)", len(cached))
            return cached

        html = render_markdown_latex(markdown, self.options)
        self._html[markdown] = html
        return html

    def clear(self) -> None:
        """drops all cached HTML."""
        self._html.clear()
