"""Line sources and output channels used by the prompt engine."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Protocol, TextIO

from typed_prompt.errors import InputExhausted, IOFailure


class LineSource(Protocol):
    """Supplies one line of raw text per call.

    Implementations raise ``InputExhausted`` at end of input and
    ``IOFailure`` when the underlying stream errors. An empty line is
    returned as ``"\\n"`` or ``""`` depending on the source, never as an error.
    """

    def read_line(self) -> str: ...


class OutputChannel(Protocol):
    """Anything text can be written to."""

    def write(self, text: str) -> object: ...


class StreamLineSource:
    """Read lines from a text stream, ``sys.stdin`` by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so test harnesses that swap sys.stdin are honoured
        return self._stream if self._stream is not None else sys.stdin

    def read_line(self) -> str:
        try:
            line = self.stream.readline()
        except OSError as e:
            raise IOFailure(f"Failed to read line: {e}") from e
        if line == "":
            raise InputExhausted()
        return line


class ScriptedLineSource:
    """Serve pre-collected lines in order, then report end of input."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self._position = 0

    @property
    def consumed(self) -> int:
        """Number of lines handed out so far."""
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._lines) - self._position

    def read_line(self) -> str:
        if self._position >= len(self._lines):
            raise InputExhausted()
        line = self._lines[self._position]
        self._position += 1
        return line


def write_text(channel: OutputChannel, text: str) -> None:
    """Write text and flush when the channel supports it."""
    if not text:
        return
    channel.write(text)
    flush = getattr(channel, "flush", None)
    if callable(flush):
        flush()
