"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from erdomain.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="link")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("link", ErrorCode.NOT_FOUND, "missing", index=3)
        assert not result.ok
        assert result.error == ServiceError(code="NOT_FOUND", message="missing")
        assert result.data == {"index": 3}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="link")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="edges", data={"count": 0, "items": []})
        parsed = json.loads(result.model_dump_json())
        assert parsed["op"] == "edges"
        assert parsed["data"] == {"count": 0, "items": []}


class TestErrorCode:
    def test_codes_are_strings(self) -> None:
        assert ErrorCode.ALREADY_EXISTS == "ALREADY_EXISTS"
        assert f"{ErrorCode.SCRIPT_PARTIAL}" == "SCRIPT_PARTIAL"
