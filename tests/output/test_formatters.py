"""Tests for the format_result dispatcher and OutputSettings."""

import json

from streamspike.output.formatters import OutputSettings, format_result
from streamspike.services.result import ServiceError, ServiceResult


def _ok(op: str = "copy", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "print", msg: str = "fail") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="RESOURCE_NOT_FOUND", message=msg),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("copy", chars=12), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "copy"
        assert data["data"]["chars"] == 12

    def test_json_mode_error(self) -> None:
        output = format_result(_err(msg="Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["code"] == "RESOURCE_NOT_FOUND"
        assert data["error"]["message"] == "Bad"

    def test_defaults_to_human_output(self) -> None:
        assert format_result(_ok()).startswith("OK")


class TestFormatResultHuman:
    def test_quiet_success(self) -> None:
        assert format_result(_ok("fetch"), settings=OutputSettings(quiet=True)) == "OK: fetch"

    def test_quiet_error(self) -> None:
        output = format_result(_err("print", "No such file"), settings=OutputSettings(quiet=True))
        assert output == "ERROR: print — No such file"

    def test_human_default(self) -> None:
        output = format_result(_ok("copy", source="Input.txt", chars=3))
        assert "OK" in output
        assert "copy" in output
        assert "Input.txt" in output
