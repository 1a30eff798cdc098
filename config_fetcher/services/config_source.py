"""Config source client: raw configuration file for a hostname."""

from config_fetcher.core.config import HOSTNAME_PLACEHOLDER
from config_fetcher.core.telemetry import span
from config_fetcher.services.upstream import get_bytes

SOURCE = "config source"


def build_config_url(template: str, hostname: str) -> str:
    """Literal substitution of every {hostname}; no URL escaping."""
    return template.replace(HOSTNAME_PLACEHOLDER, hostname)


async def fetch_config(url: str, timeout: float) -> bytes:
    """Download config bytes; returned verbatim."""
    with span("config.fetch", {"url": url}):
        return await get_bytes(SOURCE, url, timeout)
