"""Tests for the parse capability."""

import datetime
import enum
from decimal import Decimal
from typing import Literal

import pytest

from typed_prompt.errors import ParseFailure
from typed_prompt.parsers import (
    BoolParser,
    CallableParser,
    Parser,
    TypeAdapterParser,
    parser_for,
    type_tags,
)


class Point:
    """Domain type that parses itself."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    @classmethod
    def from_text(cls, text: str) -> "Point":
        x, y = text.split(",")
        return cls(int(x), int(y))


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class TestBuiltinParsers:
    """Explicit parsers for scalar types."""

    def test_int(self) -> None:
        assert parser_for(int).parse("17") == 17

    def test_int_rejects_float_text(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            parser_for(int).parse("2.5")

        assert exc_info.value.text == "2.5"
        assert exc_info.value.expected == "int"
        assert "invalid literal" in exc_info.value.reason

    def test_float(self) -> None:
        assert parser_for(float).parse("-0.25") == -0.25

    def test_float_rejects_word(self) -> None:
        with pytest.raises(ParseFailure):
            parser_for(float).parse("xyz")

    def test_str_accepts_anything(self) -> None:
        assert parser_for(str).parse("") == ""
        assert parser_for(str).parse("any text") == "any text"

    def test_complex(self) -> None:
        assert parser_for(complex).parse("1+2j") == complex(1, 2)

    def test_decimal(self) -> None:
        assert parser_for(Decimal).parse("3.14") == Decimal("3.14")

    def test_decimal_rejects_garbage(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            parser_for(Decimal).parse("pi")

        assert exc_info.value.expected == "decimal"


class TestBoolParser:
    @pytest.mark.parametrize("word", ["y", "YES", "True", "1", "on"])
    def test_true_words(self, word: str) -> None:
        assert BoolParser().parse(word) is True

    @pytest.mark.parametrize("word", ["n", "No", "FALSE", "0", "off"])
    def test_false_words(self, word: str) -> None:
        assert BoolParser().parse(word) is False

    def test_rejects_other_words(self) -> None:
        with pytest.raises(ParseFailure):
            BoolParser().parse("maybe")


class TestResolution:
    """parser_for picks the right capability for a target."""

    def test_parser_instance_used_as_is(self) -> None:
        parser = CallableParser("upper", str.upper)

        assert parser_for(parser) is parser

    def test_type_tag(self) -> None:
        assert parser_for("float").parse("1.5") == 1.5

    def test_unknown_type_tag(self) -> None:
        with pytest.raises(KeyError):
            parser_for("quaternion")

    def test_from_text_class(self) -> None:
        parser = parser_for(Point)

        point = parser.parse("3,4")

        assert (point.x, point.y) == (3, 4)
        assert parser.type_name == "Point"

    def test_from_text_errors_become_parse_failures(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            parser_for(Point).parse("3;4")

        assert exc_info.value.expected == "Point"

    def test_builtin_parsers_satisfy_protocol(self) -> None:
        assert isinstance(parser_for(int), Parser)
        assert isinstance(BoolParser(), Parser)

    def test_type_tags_listed(self) -> None:
        assert {"int", "float", "str", "bool", "date"} <= set(type_tags())


class TestTypeAdapterParser:
    """Arbitrary types validated by Pydantic."""

    def test_date(self) -> None:
        assert parser_for(datetime.date).parse("2024-02-29") == datetime.date(
            2024, 2, 29
        )

    def test_bad_date(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            parser_for(datetime.date).parse("2024-02-30")

        assert exc_info.value.expected == "date"
        assert exc_info.value.reason

    def test_enum(self) -> None:
        assert parser_for(Color).parse("green") is Color.GREEN

    def test_enum_rejects_unknown_member(self) -> None:
        with pytest.raises(ParseFailure):
            parser_for(Color).parse("blue")

    def test_literal_with_explicit_name(self) -> None:
        parser = TypeAdapterParser(Literal["a", "b"], type_name="choice")

        assert parser.parse("a") == "a"
        with pytest.raises(ParseFailure) as exc_info:
            parser.parse("c")
        assert exc_info.value.expected == "choice"
