"""Programmatic uvicorn entry point.

Usage:
    python -m config_fetcher.run --port 8080
    config-fetcher                    # via pyproject.toml [project.scripts]

Flags override the matching environment variables (WEB_HOST, WEB_PORT,
API_URL, CONFIG_URL_TEMPLATE, LOG_LEVEL).
"""

import argparse
import socket
import sys
from typing import Optional, Sequence

import uvicorn
from pydantic import ValidationError

from config_fetcher import __version__
from config_fetcher.core.config import Settings
from config_fetcher.core.errors import ListenFailureError
from config_fetcher.core.logging import configure_logging, structured_log
from config_fetcher.main import create_app

PROG = "nordvpn-config-fetcher"

# Uvicorn keep-alive timeout in seconds
UVICORN_TIMEOUT_KEEP_ALIVE: int = 5

# flag dest -> Settings field
_FLAG_FIELDS = {
    "host": "web_host",
    "port": "web_port",
    "api_url": "api_url",
    "config_url_template": "config_url_template",
    "log_level": "log_level",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Runs NordVPN Config Fetcher")
    parser.add_argument("--host", help="listening host [$WEB_HOST]")
    parser.add_argument("--port", type=int, help="http listening port [$WEB_PORT]")
    parser.add_argument("--api-url", help="fetch url [$API_URL]")
    parser.add_argument("--config-url-template", help="config url template [$CONFIG_URL_TEMPLATE]")
    parser.add_argument("--log-level", help="log level [$LOG_LEVEL]")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment/.env first, explicit flags on top."""
    overrides = {
        field: getattr(args, dest)
        for dest, field in _FLAG_FIELDS.items()
        if getattr(args, dest) is not None
    }
    return Settings(**overrides)


def bind_socket(host: str, port: int) -> socket.socket:
    address = f"{host}:{port}"
    try:
        return socket.create_server((host, port))
    except OSError as e:
        raise ListenFailureError(address, f"failed to listen to tcp connection on {address}: {e}") from e


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = build_settings(args)
    except ValidationError as e:
        parser.error(str(e))

    configure_logging(settings.log_level)
    try:
        sock = bind_socket(settings.web_host, settings.web_port)
    except ListenFailureError as e:
        structured_log(
            "CRITICAL",
            "failed to serve application",
            operation="web.listen",
            metadata=e.details,
            error={"type": e.error_code, "message": e.message},
        )
        sys.exit(1)

    structured_log("INFO", f"serving Web at {settings.listen_address}", operation="web.serve")
    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=UVICORN_TIMEOUT_KEEP_ALIVE,
    )
    try:
        uvicorn.Server(config).run(sockets=[sock])
    finally:
        structured_log("INFO", "closing Web", operation="web.close")
        sock.close()
        structured_log("INFO", "Web closed", operation="web.close")


if __name__ == "__main__":
    main()
