"""render targets that receive HTML fragments."""

from abc import ABC, abstractmethod
from typing import TextIO

from mdlatex.errors import AppendError


class RenderTarget(ABC):  # pylint: disable=too-few-public-methods
    """abstract base class for surfaces that rendered HTML is appended to."""

    closed = False

    def close(self) -> None:
        """marks the target as torn down; nothing more will be appended."""
        self.closed = True

    @abstractmethod
    def append(self, html: str) -> bool:
        """
        Append an HTML fragment.

        Args:
            html: rendered fragment

        Returns:
            True if the fragment was accepted, False to have it retried

        Raises:
            AppendError: if the target failed in a way the caller may retry
        """
        ...  # pylint: disable=unnecessary-ellipsis


class MemoryTarget(RenderTarget):
    """collects fragments in memory; can be told to reject the first appends."""

    def __init__(self, failures: int = 0) -> None:
        self.fragments: list[str] = []
        self.rejected = 0
        self._failures = failures

    def append(self, html: str) -> bool:
        if self._failures > 0:
            self._failures -= 1
            self.rejected += 1
            return False
        self.fragments.append(html)
        return True

    @property
    def html(self) -> str:
        """all accepted fragments joined together."""
        return "".join(self.fragments)


class FileTarget(RenderTarget):
    """writes fragments to a text stream, one <div> per chunk when wrapping."""

    def __init__(self, stream: TextIO, wrap: bool = True) -> None:
        self.stream = stream
        self.wrap = wrap

    def append(self, html: str) -> bool:
        fragment = f"<div>{html}</div>\n" if self.wrap else html
        try:
            self.stream.write(fragment)
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise AppendError(f"Failed to write fragment: {e}") from e
        return True
