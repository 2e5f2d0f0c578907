"""Error handlers invoked once per failed parse attempt."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from typed_prompt.errors import ParseFailure
from typed_prompt.line_source import OutputChannel, write_text

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[ParseFailure], None]

DEFAULT_DIAGNOSTIC = (
    "Invalid input '{text}'. Expected type: {expected}. Error: {reason}"
)


class DiagnosticHandler:
    """Write a one-line diagnostic naming the input and expected type.

    This is the engine's default handler. The template may use the
    ``{text}``, ``{expected}`` and ``{reason}`` fields.
    """

    def __init__(
        self,
        channel: OutputChannel | None = None,
        template: str = DEFAULT_DIAGNOSTIC,
    ) -> None:
        self._channel = channel
        self.template = template

    @property
    def channel(self) -> OutputChannel:
        return self._channel if self._channel is not None else sys.stderr

    def __call__(self, failure: ParseFailure) -> None:
        message = self.template.format(
            text=failure.text,
            expected=failure.expected,
            reason=failure.reason or "not parseable",
        )
        write_text(self.channel, message + "\n")


def log_failure(failure: ParseFailure) -> None:
    """Report the failure through logging instead of the console."""
    logger.warning(
        "Rejected input %r for %s: %s",
        failure.text,
        failure.expected,
        failure.reason,
    )


def chain(*handlers: ErrorHandler) -> ErrorHandler:
    """Combine handlers so each one sees every failure, in order."""

    def _chained(failure: ParseFailure) -> None:
        for handler in handlers:
            handler(failure)

    return _chained
