"""typed-prompt - Ask for typed values on the console until they parse."""

from importlib.metadata import PackageNotFoundError, version

from typed_prompt.config import PromptConfig, load_config
from typed_prompt.engine import PromptEngine, request_value, request_values
from typed_prompt.errors import (
    AttemptsExhausted,
    ConfigError,
    InputExhausted,
    IOFailure,
    ParseFailure,
    PromptError,
    StreamFatal,
)
from typed_prompt.handlers import DiagnosticHandler, chain, log_failure
from typed_prompt.line_source import ScriptedLineSource, StreamLineSource
from typed_prompt.parsers import Parser, parser_for
from typed_prompt.requests import RequestList, ValueRequest

try:
    __version__ = version("typed-prompt")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"

__all__ = [
    "AttemptsExhausted",
    "ConfigError",
    "DiagnosticHandler",
    "IOFailure",
    "InputExhausted",
    "ParseFailure",
    "Parser",
    "PromptConfig",
    "PromptEngine",
    "PromptError",
    "RequestList",
    "ScriptedLineSource",
    "StreamFatal",
    "StreamLineSource",
    "ValueRequest",
    "chain",
    "load_config",
    "log_failure",
    "parser_for",
    "request_value",
    "request_values",
]
