"""Core configuration, logging, errors, and telemetry."""

from config_fetcher.core.config import Settings, get_settings
from config_fetcher.core.errors import (
    ConfigFetcherError,
    ListenFailureError,
    MalformedRecommendationError,
    NoAvailableHostError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from config_fetcher.core.logging import configure_logging, structured_log
from config_fetcher.core.telemetry import (
    get_metrics,
    get_trace_context,
    init_telemetry,
    instrument_fastapi,
    span,
)

__all__ = [
    "Settings",
    "get_settings",
    "ConfigFetcherError",
    "UpstreamUnavailableError",
    "UpstreamTimeoutError",
    "UpstreamStatusError",
    "MalformedRecommendationError",
    "NoAvailableHostError",
    "ListenFailureError",
    "configure_logging",
    "structured_log",
    "get_metrics",
    "get_trace_context",
    "init_telemetry",
    "instrument_fastapi",
    "span",
]
