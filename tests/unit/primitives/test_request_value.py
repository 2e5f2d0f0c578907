"""Tests for request_value primitive."""

import io
import json

import pytest
from pydantic import ValidationError

from typed_prompt.primitives import get_output_schema, list_primitives
from typed_prompt.primitives.request_value import (
    RequestValueInput,
    RequestValueOutput,
    execute,
)


class TestRequestValueInput:
    """Test input model validation."""

    def test_defaults(self) -> None:
        model = RequestValueInput(prompt="Enter:")
        assert model.type == "str"
        assert model.pre_collected is None
        assert model.max_attempts is None

    def test_prompt_required(self) -> None:
        with pytest.raises(ValidationError):
            RequestValueInput()  # type: ignore[call-arg]

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequestValueInput(prompt="Enter:", type="quaternion")

    @pytest.mark.parametrize("max_attempts", [0, -3])
    def test_non_positive_max_attempts_rejected(self, max_attempts: int) -> None:
        with pytest.raises(ValidationError):
            RequestValueInput(
                prompt="", type="int", pre_collected=["1"], max_attempts=max_attempts
            )


class TestRequestValueExecute:
    """Test execute function."""

    def test_first_line_valid(self) -> None:
        result = execute(
            RequestValueInput(prompt="N:", type="int", pre_collected=["42"])
        )
        assert result.success is True
        assert result.value == 42
        assert result.attempts == 1
        assert result.failures == []

    def test_retries_until_valid(self) -> None:
        result = execute(
            RequestValueInput(
                prompt="N:", type="float", pre_collected=["abc", "x", "2.5"]
            )
        )
        assert result.success is True
        assert result.value == 2.5
        assert result.attempts == 3
        assert result.failures == ["abc", "x"]

    def test_exhausted_input(self) -> None:
        result = execute(
            RequestValueInput(prompt="N:", type="int", pre_collected=["abc"])
        )
        assert result.success is False
        assert result.error == "End of input reached"
        assert result.failures == ["abc"]

    def test_attempt_limit(self) -> None:
        result = execute(
            RequestValueInput(
                prompt="N:", type="int", pre_collected=["a", "b", "3"], max_attempts=2
            )
        )
        assert result.success is False
        assert result.error == "No valid int after 2 attempt(s)"

    def test_date_serializes_to_json(self) -> None:
        result = execute(
            RequestValueInput(prompt="When:", type="date", pre_collected=["2024-05-01"])
        )
        data = json.loads(result.model_dump_json())
        assert data["value"] == "2024-05-01"

    def test_complex_serialized_as_text(self) -> None:
        result = execute(
            RequestValueInput(prompt="z:", type="complex", pre_collected=["1+2j"])
        )
        assert result.value == "(1+2j)"

    def test_interactive_bad_input_is_explained(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("abc\n5\n"))

        result = execute(RequestValueInput(prompt="N:", type="int"))

        assert result.success is True
        assert result.value == 5
        assert result.failures == ["abc"]
        err = capsys.readouterr().err
        assert "Invalid input 'abc'. Expected type: int" in err

    def test_pre_collected_bad_input_stays_quiet(self, capsys) -> None:
        execute(RequestValueInput(prompt="N:", type="int", pre_collected=["x", "1"]))

        assert capsys.readouterr().err == ""


class TestRegistry:
    def test_lists_primitives(self) -> None:
        assert list_primitives() == ["confirm_action", "request_value"]

    def test_output_schema(self) -> None:
        assert get_output_schema("request-value.py") is RequestValueOutput

    def test_unknown_primitive(self) -> None:
        assert get_output_schema("read_file") is None
