"""markdown rendering for single table cells."""

import logging
from typing import Callable, Optional

from mdlatex.errors import ConversionError
from mdlatex.renderers.markdown import markdown_to_html

logger = logging.getLogger(__name__)


def render_cell(
    cell_text: str, converter: Optional[Callable[[str], str]] = None
) -> str:
    """
    renders a cell's markdown as inline HTML.

    Args:
        cell_text: raw cell text
        converter: markdown to HTML function (defaults to markdown_to_html)

    Returns:
        HTML without the wrapping <p>, or cell_text itself when it is blank
        or the converter fails
    """
    trimmed = cell_text.strip()
    if not trimmed:
        return cell_text

    convert = converter or markdown_to_html
    try:
        html = convert(trimmed)
    except ConversionError as e:
        logger.debug("Cell rendering failed, using raw text: %s", e)
        return cell_text

    return html.strip().removeprefix("<p>").removesuffix("</p>")
