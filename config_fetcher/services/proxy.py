"""Assignment proxy: node id -> unique recommended hostname -> config bytes."""

import asyncio
import time
from typing import Optional

from config_fetcher.core.config import Settings
from config_fetcher.core.errors import NoAvailableHostError, UpstreamTimeoutError
from config_fetcher.core.logging import structured_log
from config_fetcher.core.telemetry import record_assignment, record_no_available_host, span
from config_fetcher.services.assignment_table import AssignmentTable
from config_fetcher.services.config_source import SOURCE as CONFIG_SOURCE
from config_fetcher.services.config_source import build_config_url, fetch_config
from config_fetcher.services.recommendations import SOURCE as RECOMMENDATION_SOURCE
from config_fetcher.services.recommendations import fetch_recommendations

# Browser favicon probes must not consume an assignment
FAVICON = "favicon.ico"


def node_id_from_path(path: str) -> str:
    return path.strip("/")


class AssignmentProxy:
    """Serves config files, keeping every tracked node on a distinct hostname."""

    def __init__(
        self,
        api_url: str,
        config_url_template: str,
        *,
        upstream_timeout_seconds: float = 10.0,
        request_timeout_seconds: float = 30.0,
        table: Optional[AssignmentTable] = None,
    ) -> None:
        self.api_url = api_url
        self.config_url_template = config_url_template
        self.upstream_timeout_seconds = upstream_timeout_seconds
        self.request_timeout_seconds = request_timeout_seconds
        self.table = table if table is not None else AssignmentTable()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AssignmentProxy":
        return cls(
            settings.api_url,
            settings.config_url_template,
            upstream_timeout_seconds=settings.upstream_timeout_seconds,
            request_timeout_seconds=settings.request_timeout_seconds,
        )

    async def handle_request(self, path: str) -> bytes:
        """
        Assign a free hostname to the node named by ``path`` and return its config.

        The recommendation list is fetched before the table is touched, so a
        failed fetch leaves the node's previous assignment in place. Once a
        hostname is claimed the config download runs outside the table lock.
        """
        node_id = node_id_from_path(path)
        if node_id == FAVICON:
            return b""

        deadline = asyncio.get_running_loop().time() + self.request_timeout_seconds
        started = time.perf_counter()
        with span("proxy.handle_request", {"node_id": node_id}):
            candidates = await fetch_recommendations(
                self.api_url, self._budget(deadline, RECOMMENDATION_SOURCE, self.api_url)
            )

            with span("assignment.claim", {"node_id": node_id, "candidates": len(candidates)}):
                try:
                    assignment = await self.table.claim_first_available(node_id, candidates)
                except NoAvailableHostError:
                    record_no_available_host()
                    raise
            record_assignment()
            structured_log(
                "INFO",
                f"set {assignment.hostname} for {node_id}",
                node_id=node_id,
                hostname=assignment.hostname,
                operation="assignment.claim",
                duration_ms=(time.perf_counter() - started) * 1000,
            )

            url = build_config_url(self.config_url_template, assignment.hostname)
            return await fetch_config(url, self._budget(deadline, CONFIG_SOURCE, url))

    def _budget(self, deadline: float, source: str, url: str) -> float:
        """Per-call timeout: the upstream limit, capped by what is left of the request deadline."""
        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise UpstreamTimeoutError(source, url, self.request_timeout_seconds)
        return min(self.upstream_timeout_seconds, remaining)
