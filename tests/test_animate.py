"""tests for chunk-by-chunk rendering."""

from unittest.mock import MagicMock, patch

from mdlatex.animate import ChunkSequencer, StepResult, run_sequence
from mdlatex.errors import AppendError, ConversionError
from mdlatex.targets import MemoryTarget, RenderTarget


class RaisingTarget(RenderTarget):  # pylint: disable=too-few-public-methods
    """target whose first appends raise AppendError."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.fragments: list[str] = []

    def append(self, html: str) -> bool:
        if self.failures > 0:
            self.failures -= 1
            raise AppendError("not ready")
        self.fragments.append(html)
        return True


def test_appends_chunks_in_order() -> None:
    """chunks are rendered and appended one per step."""
    target = MemoryTarget()
    on_chunk = MagicMock()
    on_complete = MagicMock()
    sequencer = ChunkSequencer(
        ["a", "*b*"], target, on_chunk=on_chunk, on_complete=on_complete
    )

    assert sequencer.step() is StepResult.APPENDED
    assert sequencer.step() is StepResult.APPENDED
    on_complete.assert_not_called()
    assert sequencer.step() is StepResult.DONE

    assert target.fragments == ["<p>a</p>\n", "<p><em>b</em></p>\n"]
    assert [c.args for c in on_chunk.call_args_list] == [("a", 0), ("*b*", 1)]
    on_complete.assert_called_once()


def test_done_is_sticky() -> None:
    """steps after completion do nothing."""
    on_complete = MagicMock()
    sequencer = ChunkSequencer([], MemoryTarget(), on_complete=on_complete)
    assert sequencer.step() is StepResult.DONE
    assert sequencer.step() is StepResult.DONE
    on_complete.assert_called_once()


def test_rejected_append_is_retried() -> None:
    """a rejected chunk is attempted again without advancing."""
    target = MemoryTarget(failures=2)
    sequencer = ChunkSequencer(["a", "b"], target)

    assert sequencer.step() is StepResult.RETRY
    assert sequencer.step() is StepResult.RETRY
    assert sequencer.index == 0
    assert sequencer.attempts == 2
    assert sequencer.step() is StepResult.APPENDED
    assert sequencer.attempts == 0
    assert sequencer.retries == 2
    assert target.rejected == 2


def test_append_error_is_retried() -> None:
    """AppendError from the target counts as a failed attempt."""
    target = RaisingTarget(failures=1)
    sequencer = ChunkSequencer(["a"], target)
    assert sequencer.step() is StepResult.RETRY
    assert sequencer.step() is StepResult.APPENDED
    assert target.fragments == ["<p>a</p>\n"]


def test_conversion_failure_is_retried() -> None:
    """a chunk that fails to convert is retried like a failed append."""
    target = MemoryTarget()
    sequencer = ChunkSequencer(["a"], target)
    with patch(
        "mdlatex.animate.convert_markdown_latex",
        side_effect=[ConversionError("bad"), "<p>a</p>\n"],
    ):
        assert sequencer.step() is StepResult.RETRY
        assert sequencer.step() is StepResult.APPENDED
    assert target.fragments == ["<p>a</p>\n"]


def test_retries_without_limit() -> None:
    """a target that always fails stalls the sequence indefinitely."""
    target = MemoryTarget(failures=10_000)
    sequencer = ChunkSequencer(["a", "b"], target)
    results = {sequencer.step() for _ in range(500)}
    assert results == {StepResult.RETRY}
    assert sequencer.index == 0
    assert sequencer.attempts == 500


def test_closed_target_makes_steps_no_ops() -> None:
    """once the target is closed, steps do nothing."""
    target = MemoryTarget()
    on_chunk = MagicMock()
    sequencer = ChunkSequencer(["a", "b"], target, on_chunk=on_chunk)
    assert sequencer.step() is StepResult.APPENDED

    target.close()

    assert sequencer.step() is StepResult.DETACHED
    assert sequencer.index == 1
    on_chunk.assert_called_once()


def test_run_sequence_paces_every_step_after_the_first() -> None:
    """the delay precedes each retry, each later chunk and completion."""
    target = MemoryTarget(failures=1)
    sleep = MagicMock()
    sequencer = ChunkSequencer(["a", "b"], target)

    result = run_sequence(sequencer, delay=0.25, sleep=sleep)

    assert result is StepResult.DONE
    # after the retry and after each appended chunk
    assert sleep.call_count == 3
    sleep.assert_called_with(0.25)
    assert len(target.fragments) == 2


def test_run_sequence_with_no_chunks_completes_immediately() -> None:
    """an empty chunk list completes without waiting."""
    sleep = MagicMock()
    on_complete = MagicMock()
    sequencer = ChunkSequencer([], MemoryTarget(), on_complete=on_complete)
    assert run_sequence(sequencer, delay=1.0, sleep=sleep) is StepResult.DONE
    sleep.assert_not_called()
    on_complete.assert_called_once()


def test_sequencer_keeps_its_target_alive() -> None:
    """a target referenced only by the sequencer still receives every chunk."""
    on_chunk = MagicMock()
    on_complete = MagicMock()
    sequencer = ChunkSequencer(
        ["a", "b"], MemoryTarget(), on_chunk=on_chunk, on_complete=on_complete
    )

    assert run_sequence(sequencer, sleep=MagicMock()) is StepResult.DONE

    assert on_chunk.call_count == 2
    on_complete.assert_called_once()
    assert isinstance(sequencer.target, MemoryTarget)
    assert sequencer.target.fragments == ["<p>a</p>\n", "<p>b</p>\n"]


def test_run_sequence_stops_when_target_closes() -> None:
    """closing the target mid-sequence ends the run without completing."""
    target = MemoryTarget()
    on_complete = MagicMock()
    sequencer = ChunkSequencer(
        ["a", "b", "c"],
        target,
        on_chunk=lambda _chunk, _index: target.close(),
        on_complete=on_complete,
    )

    assert run_sequence(sequencer, sleep=MagicMock()) is StepResult.DETACHED

    assert target.fragments == ["<p>a</p>\n"]
    on_complete.assert_not_called()
