"""Recommendation source client: ordered candidate hostnames."""

from config_fetcher.core.errors import MalformedRecommendationError
from config_fetcher.core.logging import structured_log
from config_fetcher.core.telemetry import record_malformed_recommendation, span
from config_fetcher.models.schemas import parse_recommendations
from config_fetcher.services.upstream import get_bytes

SOURCE = "recommendation source"


async def fetch_recommendations(url: str, timeout: float) -> list[str]:
    """Fetch the current recommendation list. Fresh on every call, never cached."""
    with span("recommendations.fetch", {"url": url}):
        payload = await get_bytes(SOURCE, url, timeout)
        try:
            hostnames = parse_recommendations(payload)
        except MalformedRecommendationError:
            record_malformed_recommendation()
            raise
        structured_log(
            "DEBUG",
            "Fetched recommendations",
            operation="recommendations.fetch",
            metadata={"count": len(hostnames)},
        )
        return hostnames
