"""Shared test fixtures and configuration."""

import io
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from typed_prompt.config import PromptConfig
from typed_prompt.engine import PromptEngine
from typed_prompt.errors import ParseFailure
from typed_prompt.line_source import ScriptedLineSource


@dataclass
class Harness:
    """Engine wired to scripted input and in-memory output."""

    engine: PromptEngine
    source: ScriptedLineSource
    output: io.StringIO
    errors: io.StringIO
    failures: list[ParseFailure] = field(default_factory=list)

    def record(self, failure: ParseFailure) -> None:
        self.failures.append(failure)


@pytest.fixture
def harness() -> Callable[..., Harness]:
    """Build a Harness from a list of input lines."""

    def _make(lines: list[str], config: PromptConfig | None = None) -> Harness:
        source = ScriptedLineSource(lines)
        output = io.StringIO()
        errors = io.StringIO()
        engine = PromptEngine(
            source=source, output=output, errors=errors, config=config
        )
        return Harness(engine, source, output, errors)

    return _make
