"""Parse capability: per-type conversion of a line of text into a value.

Every target type handed to the engine is resolved to a ``Parser`` through
``parser_for``. Built-in scalar types get explicit parsers, classes that
know how to build themselves from text expose ``from_text``, and anything
else is validated by a Pydantic ``TypeAdapter`` in string mode.
"""

from __future__ import annotations

import datetime
import decimal
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from typed_prompt.errors import ParseFailure

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

TRUE_WORDS = frozenset({"y", "yes", "true", "1", "on"})
FALSE_WORDS = frozenset({"n", "no", "false", "0", "off"})


@runtime_checkable
class Parser(Protocol[T_co]):
    """Converts text into a value or raises ``ParseFailure``."""

    type_name: str

    def parse(self, text: str) -> T_co: ...


@runtime_checkable
class FromText(Protocol):
    """Domain types that construct themselves from a line of text."""

    @classmethod
    def from_text(cls, text: str) -> Any: ...


class CallableParser(Generic[T]):
    """Wrap a converter callable; ``ValueError`` and friends mean bad input."""

    def __init__(
        self,
        type_name: str,
        convert: Callable[[str], T],
        errors: tuple[type[Exception], ...] = (ValueError, TypeError),
    ) -> None:
        self.type_name = type_name
        self._convert = convert
        self._errors = errors

    def parse(self, text: str) -> T:
        try:
            return self._convert(text)
        except self._errors as e:
            raise ParseFailure(text, self.type_name, str(e)) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_name!r})"


class BoolParser:
    """Accept the usual yes/no spellings, case-insensitively."""

    type_name = "bool"

    def parse(self, text: str) -> bool:
        word = text.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ParseFailure(text, self.type_name, "expected yes/no, true/false or 1/0")


class TypeAdapterParser(Generic[T]):
    """Validate text against an arbitrary type using Pydantic."""

    def __init__(self, target: Any, type_name: str | None = None) -> None:
        self.type_name = type_name or _type_name(target)
        self._adapter: TypeAdapter[T] = TypeAdapter(target)

    def parse(self, text: str) -> T:
        try:
            return self._adapter.validate_strings(text)
        except ValidationError as e:
            errors = e.errors()
            reason = errors[0]["msg"] if errors else str(e)
            raise ParseFailure(text, self.type_name, reason) from e


def _decimal(text: str) -> decimal.Decimal:
    try:
        return decimal.Decimal(text)
    except decimal.InvalidOperation as e:
        raise ValueError(f"invalid decimal literal: {text!r}") from e


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


_BUILTIN_PARSERS: dict[type, Callable[[], Parser[Any]]] = {
    int: lambda: CallableParser("int", int),
    float: lambda: CallableParser("float", float),
    str: lambda: CallableParser("str", str),
    bool: BoolParser,
    complex: lambda: CallableParser("complex", complex),
    decimal.Decimal: lambda: CallableParser("decimal", _decimal),
}

TYPE_TAGS: dict[str, Any] = {
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "complex": complex,
    "decimal": decimal.Decimal,
    "date": datetime.date,
    "datetime": datetime.datetime,
}


def parser_for(target: Any) -> Parser[Any]:
    """Resolve a type, type tag or parser object to a ``Parser``.

    Args:
        target: A ``Parser`` instance, a registered type tag such as
            ``"int"``, a class exposing ``from_text``, or any type Pydantic
            can validate from a string.

    Returns:
        A parser whose ``parse`` raises ``ParseFailure`` on bad input.

    Raises:
        KeyError: If ``target`` is an unknown type tag.
    """
    if isinstance(target, str):
        return parser_for(TYPE_TAGS[target])

    if not isinstance(target, type) and isinstance(target, Parser):
        return target

    if isinstance(target, type):
        factory = _BUILTIN_PARSERS.get(target)
        if factory is not None:
            return factory()
        if isinstance(target, FromText):
            return CallableParser(target.__name__, target.from_text)

    return TypeAdapterParser(target)


def type_tags() -> list[str]:
    """Names accepted by ``parser_for`` in place of a type."""
    return sorted(TYPE_TAGS)
