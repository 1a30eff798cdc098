"""Pytest configuration and shared fixtures."""

import os

import pytest
import respx
from fastapi.testclient import TestClient

os.environ.setdefault("LOG_FORMAT", "readable")

API_URL = "https://api.test/v1/servers/recommendations"
CONFIG_URL_TEMPLATE = "https://cdn.test/configs/{hostname}.udp1194.ovpn"


def config_url(hostname: str) -> str:
    return CONFIG_URL_TEMPLATE.replace("{hostname}", hostname)


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    from config_fetcher.core.telemetry import reset_metrics

    reset_metrics()


@pytest.fixture
def settings():
    from config_fetcher.core.config import Settings

    return Settings(
        api_url=API_URL,
        config_url_template=CONFIG_URL_TEMPLATE,
        upstream_timeout_seconds=5,
        request_timeout_seconds=10,
        gcp_project_id="",
    )


@pytest.fixture
def upstream():
    """respx router for both upstreams; unmocked outbound requests fail the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def proxy(settings):
    from config_fetcher.services.proxy import AssignmentProxy

    return AssignmentProxy.from_settings(settings)


@pytest.fixture
def client(settings, upstream):
    """Test client running the app lifespan with test settings."""
    from config_fetcher.main import create_app

    with TestClient(create_app(settings)) as c:
        yield c
