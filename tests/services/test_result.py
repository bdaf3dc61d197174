"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from fieldcheck.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="validate", data={"valid": True})
        assert result.ok is True
        assert result.op == "validate"
        assert result.data == {"valid": True}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="VALIDATION_FAILED", message="1 field failed validation")
        result = ServiceResult(ok=False, op="validate", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate",
            data={"errors": {"user.profile.age": "Must be at least 18."}},
            error=ServiceError(code="VALIDATION_FAILED", message="failed"),
            meta={"duration_ms": 0.1},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["data"]["errors"]["user.profile.age"] == "Must be at least 18."
        assert parsed["error"]["code"] == "VALIDATION_FAILED"
        assert parsed["meta"]["duration_ms"] == 0.1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="validate")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_frozen(self) -> None:
        error = ServiceError(code="INVALID_INPUT", message="bad")
        with pytest.raises(Exception):
            error.code = "OTHER"  # type: ignore[misc]
