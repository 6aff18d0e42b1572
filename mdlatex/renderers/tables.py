"""pipe table to HTML conversion.

The grammar is line based: a header line, a delimiter line, then every
following non-blank line that contains a pipe. Each physical line is one
row, so cells can never span lines.
"""

from typing import Callable

from mdlatex.core.models import TableBlock
from mdlatex.renderers.cells import render_cell

CellRenderer = Callable[[str], str]


def _is_row(line: str) -> bool:
    return "|" in line and bool(line.strip())


def split_row(line: str) -> list[str]:
    """splits a row on pipes, dropping pieces that are empty once trimmed."""
    cells = (piece.strip() for piece in line.split("|"))
    return [cell for cell in cells if cell]


def is_table_start(lines: list[str], i: int) -> bool:
    """returns True if lines[i] is a header followed by a delimiter line."""
    if i + 1 >= len(lines) or not _is_row(lines[i]):
        return False
    delimiter = lines[i + 1]
    return "|" in delimiter and "-" in delimiter


def parse_table(lines: list[str], i: int) -> TableBlock:
    """
    parses the table starting at lines[i].

    The delimiter line is skipped without validation. Data rows run until
    the first blank or pipe-less line, which is left unconsumed.

    Args:
        lines: source lines
        i: index of the header line (is_table_start must hold)

    Returns:
        parsed table block
    """
    block = TableBlock(start=i, consumed=2, header=split_row(lines[i]))

    j = i + 2
    while j < len(lines) and _is_row(lines[j]):
        cells = split_row(lines[j])
        # a row of bare pipes has no cells and ends the table
        if not cells:
            break
        block.rows.append(cells)
        j += 1

    block.consumed = j - i
    return block


def render_table(block: TableBlock, cell_renderer: CellRenderer = render_cell) -> str:
    """renders a parsed table as a table/thead/tbody HTML block."""
    header = "".join(f"<th>{cell_renderer(cell)}</th>" for cell in block.header)
    body = [
        "<tr>" + "".join(f"<td>{cell_renderer(cell)}</td>" for cell in row) + "</tr>"
        for row in block.rows
    ]
    return "\n".join(
        ["<table>", "<thead>", f"<tr>{header}</tr>", "</thead>", "<tbody>"]
        + body
        + ["</tbody>", "</table>"]
    )


def convert_table(
    lines: list[str], i: int, cell_renderer: CellRenderer = render_cell
) -> tuple[str, int]:
    """
    converts the table starting at lines[i] to HTML.

    Args:
        lines: source lines
        i: index of the header line
        cell_renderer: renders one cell's text to inline HTML

    Returns:
        tuple of (table HTML, number of lines consumed)
    """
    block = parse_table(lines, i)
    return render_table(block, cell_renderer), block.consumed


def preprocess_tables(
    lines: list[str], cell_renderer: CellRenderer = render_cell
) -> list[str]:
    """replaces every pipe table in lines with its HTML, keeping other lines."""
    output: list[str] = []
    i = 0
    while i < len(lines):
        if is_table_start(lines, i):
            html, consumed = convert_table(lines, i, cell_renderer)
            output.append(html)
            i += consumed
        else:
            output.append(lines[i])
            i += 1
    return output


def preprocess_tables_in_markdown(
    markdown: str, cell_renderer: CellRenderer = render_cell
) -> str:
    """converts pipe tables in a markdown string to HTML blocks."""
    return "\n".join(preprocess_tables(markdown.split("\n"), cell_renderer))
