"""Unit tests for the process entry point."""

import socket

import pytest

from config_fetcher.core.errors import ListenFailureError
from config_fetcher.run import bind_socket, build_parser, build_settings, main


def test_flags_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEB_PORT", "9000")
    monkeypatch.setenv("API_URL", "http://env.local/recs")
    args = build_parser().parse_args(
        ["--host", "127.0.0.1", "--config-url-template", "http://cfg.local/{hostname}.ovpn"]
    )
    s = build_settings(args)
    assert s.web_host == "127.0.0.1"
    assert s.web_port == 9000
    assert s.api_url == "http://env.local/recs"
    assert s.config_url_template == "http://cfg.local/{hostname}.ovpn"


def test_invalid_flag_value_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config-url-template", "http://cfg.local/static.ovpn"])
    assert exc_info.value.code == 2


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert "nordvpn-config-fetcher 0.0.1" in capsys.readouterr().out


def test_bind_socket_failure_is_listen_failure() -> None:
    with socket.create_server(("127.0.0.1", 0)) as taken:
        port = taken.getsockname()[1]
        with pytest.raises(ListenFailureError) as exc_info:
            bind_socket("127.0.0.1", port)
    assert exc_info.value.address == f"127.0.0.1:{port}"


def test_listen_failure_is_fatal() -> None:
    with socket.create_server(("127.0.0.1", 0)) as taken:
        port = taken.getsockname()[1]
        with pytest.raises(SystemExit) as exc_info:
            main(["--host", "127.0.0.1", "--port", str(port)])
    assert exc_info.value.code == 1
