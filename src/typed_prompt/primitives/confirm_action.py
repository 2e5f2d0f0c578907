"""Confirm action primitive with Pydantic contracts."""

from __future__ import annotations

import io
import json
import sys

from pydantic import BaseModel, field_validator

from typed_prompt.engine import PromptEngine
from typed_prompt.errors import AttemptsExhausted, StreamFatal
from typed_prompt.line_source import ScriptedLineSource
from typed_prompt.parsers import BoolParser


class ConfirmActionInput(BaseModel):
    """Input contract for confirm_action."""

    prompt: str
    default: str = "n"
    pre_collected: str | None = None

    @field_validator("default")
    @classmethod
    def default_must_be_yes_or_no(cls, v: str) -> str:
        if v.lower() not in ("y", "n"):
            msg = "default must be 'y' or 'n'"
            raise ValueError(msg)
        return v.lower()


class ConfirmActionOutput(BaseModel):
    """Output contract for confirm_action."""

    success: bool
    confirmed: bool = False
    input: str = ""
    prompt: str = ""
    error: str | None = None


class ConfirmParser(BoolParser):
    """Yes/no parser where an empty answer means the default."""

    def __init__(self, default: bool) -> None:
        self.default = default
        self.answers: list[str] = []

    def parse(self, text: str) -> bool:
        self.answers.append(text.strip().lower())
        if text.strip() == "":
            return self.default
        return super().parse(text)


def confirm_prompt(prompt: str, default: str) -> str:
    suffix = "[Y/n]" if default == "y" else "[y/N]"
    return f"{prompt} {suffix}: "


def execute(params: ConfirmActionInput) -> ConfirmActionOutput:
    """Execute confirm_action with pre-collected or interactive input."""
    if params.pre_collected is not None:
        # Only the first line counts; there is nothing to retry against
        source = ScriptedLineSource(params.pre_collected.splitlines() or [""])
        engine = PromptEngine(
            source=source, output=io.StringIO(), errors=io.StringIO()
        )
    else:
        engine = PromptEngine(output=sys.stderr)

    parser = ConfirmParser(params.default == "y")

    try:
        confirmed = engine.request_value(
            parser,
            confirm_prompt(params.prompt, params.default),
            max_attempts=1 if params.pre_collected is not None else None,
        )
    except (StreamFatal, KeyboardInterrupt):
        return ConfirmActionOutput(
            success=False,
            confirmed=False,
            error="User cancelled confirmation",
            input="",
        )
    except AttemptsExhausted as e:
        return ConfirmActionOutput(
            success=False,
            confirmed=False,
            error=str(e),
            input=parser.answers[-1] if parser.answers else "",
            prompt=params.prompt,
        )

    user_input = parser.answers[-1] if parser.answers else ""
    return ConfirmActionOutput(
        success=True,
        confirmed=confirmed,
        input=user_input or params.default,
        prompt=params.prompt,
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
    if pre_collected is not None and isinstance(pre_collected, str):
        parameters["pre_collected"] = pre_collected

    params = ConfirmActionInput(
        prompt=str(parameters.get("prompt", "Continue?")),
        default=str(parameters.get("default", "n")),
        pre_collected=parameters.get("pre_collected"),  # type: ignore[arg-type]
    )
    result = execute(params)
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
