"""Request value primitive with Pydantic contracts."""

from __future__ import annotations

import io
import json
import sys
from typing import Any

from pydantic import BaseModel, Field, field_validator

from typed_prompt.config import PromptConfig
from typed_prompt.engine import PromptEngine
from typed_prompt.errors import AttemptsExhausted, ParseFailure, StreamFatal
from typed_prompt.handlers import chain
from typed_prompt.line_source import ScriptedLineSource
from typed_prompt.parsers import TYPE_TAGS


class RequestValueInput(BaseModel):
    """Input contract for request_value."""

    prompt: str
    type: str = "str"
    pre_collected: list[str] | None = None
    max_attempts: int | None = Field(default=None, ge=1)

    @field_validator("type")
    @classmethod
    def type_must_be_registered(cls, v: str) -> str:
        if v not in TYPE_TAGS:
            msg = f"unknown type '{v}', expected one of {sorted(TYPE_TAGS)}"
            raise ValueError(msg)
        return v


class RequestValueOutput(BaseModel):
    """Output contract for request_value."""

    success: bool
    value: Any = None
    type: str = ""
    attempts: int = 0
    failures: list[str] = Field(default_factory=list)
    error: str | None = None


def execute(params: RequestValueInput) -> RequestValueOutput:
    """Execute request_value against pre-collected or interactive input."""
    failures: list[str] = []

    def record(failure: ParseFailure) -> None:
        failures.append(failure.text)

    source = (
        ScriptedLineSource(params.pre_collected)
        if params.pre_collected is not None
        else None
    )
    # Prompts go to stderr so stdout stays a single JSON document
    engine = PromptEngine(
        source=source,
        output=io.StringIO() if source is not None else sys.stderr,
        config=PromptConfig(max_attempts=params.max_attempts),
    )
    # At the console the user still needs to see why a line was rejected
    handler = (
        record if source is not None else chain(record, engine.default_handler())
    )

    try:
        value = engine.request_value(params.type, params.prompt, handler)
    except (StreamFatal, AttemptsExhausted) as e:
        return RequestValueOutput(
            success=False,
            type=params.type,
            attempts=len(failures),
            failures=failures,
            error=str(e),
        )
    except KeyboardInterrupt:
        return RequestValueOutput(
            success=False,
            type=params.type,
            attempts=len(failures),
            failures=failures,
            error="User cancelled input",
        )

    if isinstance(value, complex):
        value = str(value)

    return RequestValueOutput(
        success=True,
        value=value,
        type=params.type,
        attempts=len(failures) + 1,
        failures=failures,
    )


def main() -> None:
    """Entry point for subprocess execution."""
    if not sys.stdin.isatty():
        config: dict[str, object] = json.loads(sys.stdin.read())
    else:
        config = {}

    parameters = config.get("parameters", config)
    if not isinstance(parameters, dict):
        parameters = config

    pre_collected = config.get("input")
    if isinstance(pre_collected, str):
        parameters["pre_collected"] = pre_collected.splitlines()
    elif isinstance(pre_collected, list):
        parameters["pre_collected"] = [str(line) for line in pre_collected]

    params = RequestValueInput(
        prompt=str(parameters.get("prompt", "Enter value:")),
        type=str(parameters.get("type", "str")),
        pre_collected=parameters.get("pre_collected"),  # type: ignore[arg-type]
        max_attempts=parameters.get("max_attempts"),  # type: ignore[arg-type]
    )
    result = execute(params)
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
