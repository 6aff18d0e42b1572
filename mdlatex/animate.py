"""chunk-by-chunk rendering into a render target.

Chunks are appended strictly in order. A chunk that fails to convert or
to append is retried after the same delay, with no limit, so a target
that keeps failing stalls the sequence. Once the target is closed every
step is a no-op.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from mdlatex.core.models import RenderOptions
from mdlatex.errors import AppendError, ConversionError
from mdlatex.pipeline import convert_markdown_latex
from mdlatex.targets import RenderTarget

logger = logging.getLogger(__name__)


class StepResult(Enum):
    """outcome of a single ChunkSequencer.step() call."""

    APPENDED = "appended"
    RETRY = "retry"
    DONE = "done"
    DETACHED = "detached"


TERMINAL = (StepResult.DONE, StepResult.DETACHED)


class ChunkSequencer:
    """state machine feeding chunks to a render target one step at a time."""

    def __init__(
        self,
        chunks: list[str],
        target: RenderTarget,
        options: Optional[RenderOptions] = None,
        on_chunk: Optional[Callable[[str, int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self.chunks = list(chunks)
        self.options = options or RenderOptions()
        self.on_chunk = on_chunk
        self.on_complete = on_complete
        self.index = 0
        self.attempts = 0  # failed attempts on the current chunk
        self.retries = 0  # failed attempts over the whole sequence
        self.done = False
        self.target = target

    def step(self) -> StepResult:
        """
        attempts the current chunk, or completes the sequence.

        Returns:
            APPENDED when the chunk was accepted, RETRY when it must be
            attempted again, DONE once all chunks are in, DETACHED if the
            target has been closed
        """
        if self.done:
            return StepResult.DONE

        target = self.target
        if target.closed:
            logger.debug("Render target closed; skipping chunk %d", self.index)
            return StepResult.DETACHED

        if self.index >= len(self.chunks):
            logger.debug("All chunks rendered.")
            self.done = True
            if self.on_complete:
                self.on_complete()
            return StepResult.DONE

        chunk = self.chunks[self.index]
        logger.debug("Rendering chunk %d: %r", self.index, chunk)

        if not self._append(target, chunk):
            self.attempts += 1
            self.retries += 1
            logger.debug("Retrying chunk %d (attempt %d)", self.index, self.attempts)
            return StepResult.RETRY

        if self.on_chunk:
            self.on_chunk(chunk, self.index)
        self.index += 1
        self.attempts = 0
        return StepResult.APPENDED

    def _append(self, target: RenderTarget, chunk: str) -> bool:
        try:
            html = convert_markdown_latex(chunk, self.options)
        except ConversionError as e:
            logger.debug("Failed to render chunk %d: %s", self.index, e)
            return False

        try:
            return target.append(html)
        except AppendError as e:
            logger.debug("Failed to append chunk %d: %s", self.index, e)
            return False


def run_sequence(
    sequencer: ChunkSequencer,
    delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> StepResult:
    """
    drives a sequencer until it is done or detached.

    The first chunk goes out immediately; every later step, including
    retries and the final completion, waits `delay` seconds first.

    Args:
        sequencer: the sequencer to drive
        delay: pacing delay in seconds
        sleep: sleep function (injectable for tests)

    Returns:
        the terminal step result (DONE or DETACHED)
    """
    while True:
        result = sequencer.step()
        if result in TERMINAL:
            return result
        sleep(delay)
