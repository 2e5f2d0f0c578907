"""Prompt-parse-retry engine.

Prints a prompt, reads one line, parses it into the requested type and on
failure hands the problem to an error handler before asking again. Parse
failures never escape; stream failures always do.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import Iterable
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any

from typed_prompt.config import PromptConfig
from typed_prompt.errors import AttemptsExhausted, ParseFailure, StreamFatal
from typed_prompt.handlers import DiagnosticHandler, ErrorHandler
from typed_prompt.line_source import (
    LineSource,
    OutputChannel,
    StreamLineSource,
    write_text,
)
from typed_prompt.parsers import Parser, parser_for
from typed_prompt.requests import ValueRequest

logger = logging.getLogger(__name__)

# Serializes console requests across threads
INPUT_LOCK = threading.RLock()

_RETRY = object()


class PromptState(Enum):
    """States of a single value request."""

    PROMPTING = "prompting"
    READING = "reading"
    PARSING = "parsing"
    RETRYING = "retrying"
    SUCCESS = "success"
    FATAL = "fatal"


class PromptEngine:
    """Ask for typed values until they parse.

    Engines created without an explicit source read the process console
    and share ``INPUT_LOCK``. Engines given their own source get a private
    lock. Either way a request holds the lock for its whole loop, so a
    custom ``lock`` must be reentrant.
    """

    def __init__(
        self,
        source: LineSource | None = None,
        output: OutputChannel | None = None,
        errors: OutputChannel | None = None,
        config: PromptConfig | None = None,
        lock: AbstractContextManager[Any] | None = None,
    ) -> None:
        self.source: LineSource = source if source is not None else StreamLineSource()
        self._output = output
        self._errors = errors
        self.config = config if config is not None else PromptConfig()
        if lock is None:
            lock = INPUT_LOCK if source is None else threading.RLock()
        self._lock = lock

    @property
    def output(self) -> OutputChannel:
        return self._output if self._output is not None else sys.stdout

    def default_handler(self) -> ErrorHandler:
        """Diagnostic handler writing to this engine's error channel."""
        return DiagnosticHandler(self._errors, self.config.diagnostic_template)

    def render_prompt(self, prompt: str, parser: Parser[Any]) -> str:
        if not self.config.show_type_hint:
            return prompt
        if not prompt:
            return f"({parser.type_name}): "
        return f"{prompt} ({parser.type_name}): "

    def clean(self, line: str) -> str:
        """Drop the line terminator and, if configured, surrounding blanks."""
        line = line.rstrip("\r\n")
        if self.config.strip_whitespace:
            line = line.strip()
        return line

    def request_value(
        self,
        target: Any,
        prompt: str = "",
        handler: ErrorHandler | None = None,
        *,
        max_attempts: int | None = None,
    ) -> Any:
        """Prompt until a line parses as ``target`` and return the value.

        Args:
            target: Type, type tag or ``Parser`` describing the value.
            prompt: Text written before every read; empty writes nothing.
            handler: Called once per rejected line. Defaults to a diagnostic
                on the error channel.
            max_attempts: Give up after this many reads. Unbounded when None
                and not set in the engine config.

        Returns:
            The parsed value.

        Raises:
            StreamFatal: Input ended or failed; never retried.
            AttemptsExhausted: Only when an attempt limit is in effect.
        """
        parser = parser_for(target)
        active = handler if handler is not None else self.default_handler()
        limit = max_attempts if max_attempts is not None else self.config.max_attempts

        with self._lock:
            attempts = 0
            while True:
                self._transition(PromptState.PROMPTING, parser)
                write_text(self.output, self.render_prompt(prompt, parser))

                raw = self._read(parser)
                attempts += 1

                result = self._parse(parser, raw, active)
                if result is not _RETRY:
                    logger.info(
                        "Accepted %s value after %d attempt(s)",
                        parser.type_name,
                        attempts,
                    )
                    return result

                if limit is not None and attempts >= limit:
                    raise AttemptsExhausted(parser.type_name, attempts)

    def request_values(
        self, requests: Iterable[ValueRequest | tuple[Any, ...]]
    ) -> list[Any]:
        """Answer several requests in order, each with its own retry loop.

        A fatal stream error stops the sequence where it happens. Values
        already obtained are attached to the error as ``partial``.
        """
        values: list[Any] = []
        with self._lock:
            for item in requests:
                request = ValueRequest.coerce(item)
                try:
                    values.append(
                        self.request_value(
                            request.target, request.prompt, request.handler
                        )
                    )
                except StreamFatal as e:
                    e.partial = list(values)
                    raise
        return values

    async def request_value_async(
        self,
        target: Any,
        prompt: str = "",
        handler: ErrorHandler | None = None,
        *,
        max_attempts: int | None = None,
    ) -> Any:
        """Run ``request_value`` in a worker thread for asyncio callers."""
        return await asyncio.to_thread(
            self.request_value, target, prompt, handler, max_attempts=max_attempts
        )

    async def request_values_async(
        self, requests: Iterable[ValueRequest | tuple[Any, ...]]
    ) -> list[Any]:
        return await asyncio.to_thread(self.request_values, list(requests))

    def _read(self, parser: Parser[Any]) -> str:
        self._transition(PromptState.READING, parser)
        try:
            return self.source.read_line()
        except StreamFatal as e:
            self._transition(PromptState.FATAL, parser)
            logger.warning("Aborting %s request: %s", parser.type_name, e)
            raise

    def _parse(self, parser: Parser[Any], raw: str, handler: ErrorHandler) -> Any:
        self._transition(PromptState.PARSING, parser)
        text = self.clean(raw)
        try:
            value = parser.parse(text)
        except ParseFailure as failure:
            self._transition(PromptState.RETRYING, parser)
            handler(failure)
            return _RETRY
        self._transition(PromptState.SUCCESS, parser)
        return value

    @staticmethod
    def _transition(state: PromptState, parser: Parser[Any]) -> None:
        logger.debug("%s request -> %s", parser.type_name, state.value)


def request_value(
    target: Any, prompt: str = "", handler: ErrorHandler | None = None
) -> Any:
    """Ask the console for one value of type ``target``."""
    return PromptEngine().request_value(target, prompt, handler)


def request_values(requests: Iterable[ValueRequest | tuple[Any, ...]]) -> list[Any]:
    """Ask the console for several values in order."""
    return PromptEngine().request_values(requests)
