"""Unit tests for structured logging."""

import json
import logging

import pytest

from config_fetcher.core.logging import JsonFormatter, _redact, _redact_dict, structured_log


def test_redacts_query_credentials() -> None:
    url = "https://api.test/servers?token=abc123&limit=20"
    assert _redact(url) == "https://api.test/servers?token=***REDACTED***&limit=20"


def test_redact_dict_masks_secret_keys() -> None:
    out = _redact_dict({"url": "https://x?api_key=zzz", "password": "hunter2", "count": 3})
    assert out["password"] == "***REDACTED***"
    assert out["url"] == "https://x?api_key=***REDACTED***"
    assert out["count"] == 3


def test_readable_assignment_entry(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("LOG_FORMAT", "readable")
    with caplog.at_level(logging.INFO):
        structured_log("INFO", "set a for alice", node_id="alice", hostname="a", operation="assignment.claim")
    assert len(caplog.records) == 1
    text = caplog.records[0].getMessage()
    assert "[INFO] set a for alice" in text
    assert "node_id='alice'" in text
    assert "hostname=a" in text


def test_json_entry_keeps_empty_node_id(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("LOG_FORMAT", "json")
    with caplog.at_level(logging.ERROR):
        structured_log(
            "ERROR",
            "failed to serve config",
            node_id="",
            error={"type": "NoAvailableHostError", "message": "failed to find available vpn hostname"},
        )
    payload = json.loads(caplog.records[0].getMessage())
    assert payload["severity"] == "ERROR"
    assert payload["node_id"] == ""
    assert payload["error"]["type"] == "NoAvailableHostError"
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_plain_record() -> None:
    record = logging.LogRecord("uvicorn.error", logging.WARNING, __file__, 1, "slow %s", ("client",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload == {
        "severity": "WARNING",
        "message": "slow client",
        "timestamp": payload["timestamp"],
        "logger": "uvicorn.error",
    }


def test_json_formatter_passes_structured_payload_through() -> None:
    msg = json.dumps({"severity": "INFO", "message": "set a for alice"})
    record = logging.LogRecord("x", logging.INFO, __file__, 1, msg, None, None)
    assert JsonFormatter().format(record) == msg
