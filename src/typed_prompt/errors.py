"""Exception taxonomy for typed-prompt.

Parse failures are recovered inside the engine and never reach the caller.
Stream failures are fatal and always propagate.
"""

from __future__ import annotations

from typing import Any


class PromptError(Exception):
    """Base class for all typed-prompt errors."""


class ParseFailure(PromptError):
    """A line of text could not be converted to the requested type."""

    def __init__(self, text: str, expected: str, reason: str = "") -> None:
        self.text = text
        self.expected = expected
        self.reason = reason
        message = f"'{text}' is not a valid {expected}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StreamFatal(PromptError):
    """The input stream can no longer supply lines."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        # Values obtained earlier in a multi-value request
        self.partial: list[Any] = []


class InputExhausted(StreamFatal):
    """End of input was reached before a valid value was read."""

    def __init__(self, message: str = "End of input reached") -> None:
        super().__init__(message)


class IOFailure(StreamFatal):
    """Reading from the input stream raised an I/O error."""


class AttemptsExhausted(PromptError):
    """An explicitly bounded request ran out of attempts."""

    def __init__(self, expected: str, attempts: int) -> None:
        self.expected = expected
        self.attempts = attempts
        super().__init__(f"No valid {expected} after {attempts} attempt(s)")


class ConfigError(PromptError):
    """Configuration file could not be read or validated."""
