"""Data models for the Markdown+LaTeX rendering pipeline."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MathSegment:
    """A math literal lifted out of the source text."""

    index: int  # 0-based order of appearance within one extraction
    literal: str  # full text including \( \) or \[ \] delimiters


@dataclass
class TableBlock:
    """A parsed pipe table covering lines [start, start + consumed)."""

    start: int
    consumed: int
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class RenderOptions:
    """Options shared by the one-shot and chunked renderers."""

    allow_raw_html: bool = True
    smart: bool = True
    chunk_delay: float = 0.0  # seconds between chunk appends
    use_cache: bool = True
