"""Tests for result formatting in human, quiet, and JSON modes."""

from __future__ import annotations

import json

from fieldcheck.output.formatters import OutputSettings, format_result
from fieldcheck.services.result import ServiceError, ServiceResult

_ERRORS = {"name": "This field is required.", "user.profile.age": "Must be at least 18."}

_FAILED = ServiceResult(
    ok=False,
    op="validate",
    data={"valid": False, "fields_checked": 3, "errors": _ERRORS},
    error=ServiceError(
        code="VALIDATION_FAILED",
        message="2 fields failed validation",
        detail={"errors": _ERRORS},
    ),
    meta={"duration_ms": 0.25},
)

_PASSED = ServiceResult(
    ok=True,
    op="validate",
    data={"valid": True, "fields_checked": 3, "errors": {}},
)


class TestHumanOutput:
    def test_passed(self) -> None:
        out = format_result(_PASSED)
        assert "OK" in out
        assert "validate" in out
        assert "3 fields passed validation" in out

    def test_failed_lists_each_field(self) -> None:
        out = format_result(_FAILED)
        assert out.startswith("ERROR")
        assert "2 fields failed validation" in out
        assert "user.profile.age" in out
        assert "Must be at least 18." in out
        assert "This field is required." in out

    def test_input_error_without_field_errors(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(code="INVALID_INPUT", message="Cannot read x.json", detail={"path": "x.json"}),
        )
        out = format_result(result)
        assert "Cannot read x.json" in out
        assert "path" not in out

    def test_verbose_shows_detail_and_meta(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            error=ServiceError(code="INVALID_INPUT", message="bad", detail={"path": "x.json"}),
            meta={"duration_ms": 1.5},
        )
        out = format_result(result, settings=OutputSettings(verbose=True))
        assert "path: x.json" in out
        assert "duration_ms: 1.5" in out

    def test_list_rules(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_rules",
            data={"builtin": ["required", "email"], "plugin": ["postcode"], "count": 3},
        )
        out = format_result(result)
        assert "required" in out
        assert "postcode" in out
        assert "plugin" in out

    def test_generic_op(self) -> None:
        out = format_result(ServiceResult(ok=True, op="other", data={"answer": 42}))
        assert "answer: 42" in out


class TestQuietOutput:
    def test_passed(self) -> None:
        assert format_result(_PASSED, settings=OutputSettings(quiet=True)) == "OK: validate"

    def test_failed_prints_field_lines(self) -> None:
        out = format_result(_FAILED, settings=OutputSettings(quiet=True))
        assert out.splitlines() == [
            "name: This field is required.",
            "user.profile.age: Must be at least 18.",
        ]

    def test_input_error(self) -> None:
        result = ServiceResult(
            ok=False, op="validate", error=ServiceError(code="INVALID_INPUT", message="bad")
        )
        assert format_result(result, settings=OutputSettings(quiet=True)) == "ERROR: validate: bad"


class TestJsonOutput:
    def test_round_trips_result(self) -> None:
        out = format_result(_FAILED, settings=OutputSettings(json_output=True, quiet=True))
        parsed = json.loads(out)
        assert parsed["ok"] is False
        assert parsed["error"]["detail"]["errors"] == _ERRORS
