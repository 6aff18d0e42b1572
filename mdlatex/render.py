"""Render module tying the pipeline, render targets and progress together."""

import logging
import time
from typing import Callable, Optional

from mdlatex.animate import ChunkSequencer, StepResult, run_sequence
from mdlatex.core.models import RenderOptions
from mdlatex.pipeline import RenderCache, render_markdown_latex, split_into_chunks
from mdlatex.progress import ProgressHandler
from mdlatex.targets import RenderTarget

logger = logging.getLogger(__name__)


def render_once(
    markdown: str,
    target: RenderTarget,
    options: Optional[RenderOptions] = None,
    cache: Optional[RenderCache] = None,
) -> str:
    """
    renders a whole document and appends it to target in one go.

    Args:
        markdown: the document
        target: where the HTML goes
        options: render options
        cache: optional cache of rendered HTML keyed by markdown

    Returns:
        the rendered HTML, or "" if conversion failed (nothing is appended)
        or the target rejected it
    """
    options = options or RenderOptions()
    if cache is not None and options.use_cache:
        html = cache.render(markdown)
    else:
        html = render_markdown_latex(markdown, options)

    if html and not target.append(html):
        logger.warning("Render target rejected the document")
        return ""
    return html


def render_animated(
    markdown: str,
    target: RenderTarget,
    options: Optional[RenderOptions] = None,
    handler: Optional[ProgressHandler] = None,
    on_chunk: Optional[Callable[[str, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ChunkSequencer:
    """
    renders a document chunk by chunk, pausing options.chunk_delay between appends.

    Args:
        markdown: the document
        target: where each chunk's HTML goes
        options: render options
        handler: progress handler (a quiet one is used when omitted)
        on_chunk: called with (chunk, index) after each chunk is appended
        sleep: sleep function (injectable for tests)

    Returns:
        the sequencer after it finished, for inspecting retries
    """
    options = options or RenderOptions()
    handler = handler or ProgressHandler(quiet=True)
    chunks = split_into_chunks(markdown)

    def chunk_rendered(chunk: str, index: int) -> None:
        handler.update(f"chunk {index + 1}/{len(chunks)}")
        if on_chunk:
            on_chunk(chunk, index)

    handler.log_info(f"Rendering {len(chunks)} chunk(s)")
    handler.set_total(len(chunks))
    sequencer = ChunkSequencer(chunks, target, options, on_chunk=chunk_rendered)
    result = run_sequence(sequencer, options.chunk_delay, sleep)

    if result is StepResult.DETACHED:
        handler.log_error(
            f"Render target closed after {sequencer.index} of {len(chunks)} chunk(s)"
        )
    handler.finish(sequencer.index, sequencer.retries)
    return sequencer
