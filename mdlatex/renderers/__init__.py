"""text renderers used by the Markdown+LaTeX pipeline."""

from mdlatex.renderers.cells import render_cell
from mdlatex.renderers.latex import (
    extract_latex_segments,
    restore_latex_segments,
)
from mdlatex.renderers.markdown import markdown_to_html
from mdlatex.renderers.tables import convert_table, preprocess_tables

__all__ = [
    "extract_latex_segments",
    "restore_latex_segments",
    "markdown_to_html",
    "render_cell",
    "convert_table",
    "preprocess_tables",
]
