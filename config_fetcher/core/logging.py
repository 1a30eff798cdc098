"""Structured JSON logging with trace correlation."""

import json
import logging
import os
import re
import sys
from datetime import UTC, datetime
from typing import Any, Optional

from config_fetcher.core.telemetry import get_trace_context

# Patterns to redact from log output (upstream URLs may carry credentials in the query)
SECRET_PATTERNS = (
    re.compile(r"(api_key|token|secret|password)\s*[:=]\s*['\"]?[^&\s'\"]+['\"]?", re.I),
)

_SECRET_KEYS = ("api_key", "token", "secret", "password", "authorization")


def _redact(message: str) -> str:
    def repl(m: re.Match[str]) -> str:
        return f"{m.group(1)}=***REDACTED***"

    for pat in SECRET_PATTERNS:
        message = pat.sub(repl, message)
    return message


def _redact_dict(obj: Any) -> Any:
    if isinstance(obj, dict):
        redacted = {}
        for k, v in obj.items():
            if any(s in str(k).lower() for s in _SECRET_KEYS):
                redacted[k] = "***REDACTED***"
            else:
                redacted[k] = _redact_dict(v)
        return redacted
    if isinstance(obj, list):
        return [_redact_dict(i) for i in obj]
    if isinstance(obj, str):
        return _redact(obj)
    return obj


def _now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def structured_log(
    level: str,
    message: str,
    *,
    node_id: Optional[str] = None,
    hostname: Optional[str] = None,
    operation: Optional[str] = None,
    duration_ms: Optional[int | float] = None,
    metadata: Optional[dict[str, Any]] = None,
    error: Optional[dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Emit a structured log entry."""
    log = logger or logging.getLogger(__name__)
    payload: dict[str, Any] = {
        "severity": level.upper(),
        "message": _redact(message),
        "timestamp": _now_iso(),
    }
    # node_id may legitimately be "" (request for "/")
    if node_id is not None:
        payload["node_id"] = node_id
    if hostname:
        payload["hostname"] = hostname
    payload.update(get_trace_context())
    if operation:
        payload["operation"] = operation
    if duration_ms is not None:
        payload["duration_ms"] = round(duration_ms, 2)
    if metadata:
        payload["metadata"] = _redact_dict(metadata)
    if error:
        payload["error"] = _redact_dict(error)

    msg = json.dumps(payload) if _use_json() else _format_readable(payload)
    getattr(log, level.lower(), log.info)(msg)


def _use_json() -> bool:
    """Use JSON format unless LOG_FORMAT=readable (local development)."""
    return os.getenv("LOG_FORMAT", "json").lower() == "json"


def _format_readable(payload: dict[str, Any]) -> str:
    parts = [payload.get("timestamp", ""), f"[{payload.get('severity', 'INFO')}]", payload.get("message", "")]
    if "node_id" in payload:
        parts.append(f"node_id={payload['node_id']!r}")
    if payload.get("hostname"):
        parts.append(f"hostname={payload['hostname']}")
    if payload.get("operation"):
        parts.append(f"operation={payload['operation']}")
    if payload.get("duration_ms") is not None:
        parts.append(f"duration_ms={payload['duration_ms']}")
    if payload.get("error"):
        err = payload["error"]
        parts.append(f"error={err.get('type', '')}: {err.get('message', '')}")
    return " ".join(parts)


def configure_logging(log_level: str = "INFO") -> None:
    """Configure root logger with JSON or readable format."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        if _use_json():
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON.

    Messages that are already structured_log payloads pass through untouched.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith("{") and '"severity"' in message:
            return message
        payload: dict[str, Any] = {
            "severity": record.levelname,
            "message": _redact(message),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat().replace("+00:00", "Z"),
            "logger": record.name,
        }
        if getattr(record, "node_id", None) is not None:
            payload["node_id"] = record.node_id
        if getattr(record, "operation", None):
            payload["operation"] = record.operation
        if record.exc_info:
            payload["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else "",
                "message": str(record.exc_info[1]) if record.exc_info[1] else "",
                "stack_trace": self.formatException(record.exc_info) if record.exc_info[2] else "",
            }
        return json.dumps(payload)
