"""Engine configuration loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from typed_prompt.errors import ConfigError
from typed_prompt.handlers import DEFAULT_DIAGNOSTIC

CONFIG_ENV_VAR = "TYPED_PROMPT_CONFIG"


class PromptConfig(BaseModel):
    """Settings shared by every request an engine serves."""

    show_type_hint: bool = False
    strip_whitespace: bool = True
    max_attempts: int | None = None
    diagnostic_template: str = DEFAULT_DIAGNOSTIC

    @field_validator("max_attempts")
    @classmethod
    def max_attempts_must_be_positive(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            msg = "max_attempts must be >= 1"
            raise ValueError(msg)
        return v

    @field_validator("diagnostic_template")
    @classmethod
    def diagnostic_template_must_format(cls, v: str) -> str:
        try:
            v.format(text="", expected="", reason="")
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            msg = (
                "diagnostic_template may only use {text}, {expected} and "
                f"{{reason}} fields: {e!r}"
            )
            raise ValueError(msg) from e
        return v


def load_config(path: Path | str | None = None) -> PromptConfig:
    """Load configuration from a YAML file.

    Args:
        path: File to read. Falls back to ``$TYPED_PROMPT_CONFIG`` when None.

    Returns:
        Parsed configuration; defaults when no file is given or it is missing.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return PromptConfig()
        path = env_path

    file_path = Path(path)
    if not file_path.exists():
        return PromptConfig()

    try:
        with open(file_path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML file {file_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read file {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {file_path}")

    # Allow settings to be nested under a top-level "prompt" key
    settings = data.get("prompt", data)
    try:
        return PromptConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {file_path}: {e}") from e
