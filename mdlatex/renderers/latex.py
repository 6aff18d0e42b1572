"""LaTeX protection utilities for markdown processing."""

import logging
import re

from mdlatex.core.models import MathSegment

logger = logging.getLogger(__name__)

OPENER_PATTERN = re.compile(r"\\[(\[]")
CLOSERS = {"\\(": "\\)", "\\[": "\\]"}

# markdown-it escapes < and > in text, so placeholders come back as entities
_LT = r"(?i:<|&lt;|&#0*60;|&#x0*3c;)"
_GT = r"(?i:>|&gt;|&#0*62;|&#x0*3e;)"
PLACEHOLDER_PATTERN = re.compile(_LT * 3 + r"LATEX_(\d+)" + _GT * 3)


def placeholder(index: int) -> str:
    """returns the placeholder text standing in for segment `index`."""
    return f"<<<LATEX_{index}>>>"


def extract_latex_segments(text: str) -> tuple[str, list[MathSegment]]:
    """
    replaces \\( \\) and \\[ \\] math with placeholders.

    Each opener is paired with the first closer of the same kind; math may
    span lines. An opener without a closer stays in the text as-is.

    Args:
        text: input markdown containing LaTeX

    Returns:
        tuple of (stripped text, segments in order of appearance)
    """
    segments: list[MathSegment] = []
    pieces: list[str] = []
    pos = 0

    while True:
        opener = OPENER_PATTERN.search(text, pos)
        if opener is None:
            break

        closer = CLOSERS[opener.group(0)]
        end = text.find(closer, opener.end())
        if end == -1:
            # unterminated: keeps the opener as plain text and moves past it
            pieces.append(text[pos : opener.end()])
            pos = opener.end()
            continue

        end += len(closer)
        pieces.append(text[pos : opener.start()])
        pieces.append(placeholder(len(segments)))
        segments.append(MathSegment(len(segments), text[opener.start() : end]))
        pos = end

    pieces.append(text[pos:])
    return "".join(pieces), segments


def restore_latex_segments(text: str, segments: list[MathSegment]) -> str:
    """
    puts math literals back in place of their placeholders.

    Placeholders are matched whether or not their angle brackets were
    escaped to HTML entities. The scan runs once over the text, so restored
    literals are never rescanned.

    Args:
        text: HTML containing placeholders
        segments: segments returned by extract_latex_segments

    Returns:
        text with every known placeholder replaced by its literal
    """
    if not segments:
        return text

    literals = {str(segment.index): segment.literal for segment in segments}
    found: set[str] = set()

    def replacer(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in literals:
            return match.group(0)
        found.add(key)
        return literals[key]

    result = PLACEHOLDER_PATTERN.sub(replacer, text)

    for segment in segments:
        if str(segment.index) not in found:
            logger.warning(
                "Placeholder for math segment %d not found; dropping %r",
                segment.index,
                segment.literal,
            )

    return result
