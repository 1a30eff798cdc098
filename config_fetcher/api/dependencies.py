"""FastAPI dependencies."""

from fastapi import Request

from config_fetcher.core.config import Settings
from config_fetcher.services.proxy import AssignmentProxy


def get_proxy(request: Request) -> AssignmentProxy:
    """Return the process-wide AssignmentProxy built at startup."""
    return request.app.state.proxy


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def request_path(request: Request) -> str:
    """Percent-decoded request path, exactly as received.

    ``request.url.path`` re-parses a URL rebuilt from the decoded path, which
    truncates node ids containing an encoded ``?`` or ``#``.
    """
    return request.scope["path"]
