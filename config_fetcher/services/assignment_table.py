"""In-memory node -> hostname assignment table (non-persistent).

No two nodes ever hold the same hostname. Every accessor runs under a single
asyncio.Lock, so a claim (drop own entry, compute exclusions, first-fit pick,
store) is one atomic step.
"""

import asyncio
from collections.abc import Iterable
from typing import Optional

from config_fetcher.core.errors import NoAvailableHostError
from config_fetcher.models.entities import Assignment


class AssignmentTable:
    def __init__(self) -> None:
        self._entries: dict[str, Assignment] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, node_id: str) -> Optional[Assignment]:
        async with self._lock:
            return self._entries.get(node_id)

    async def remove(self, node_id: str) -> Optional[Assignment]:
        async with self._lock:
            return self._entries.pop(node_id, None)

    async def claimed_hostnames(self, exclude: Optional[str] = None) -> set[str]:
        """Hostnames held by every node except ``exclude``."""
        async with self._lock:
            return self._claimed_by_others(exclude)

    async def snapshot(self) -> dict[str, str]:
        async with self._lock:
            return {node_id: a.hostname for node_id, a in self._entries.items()}

    async def claim_first_available(self, node_id: str, candidates: Iterable[str]) -> Assignment:
        """
        Re-draw a hostname for ``node_id``.

        The node's previous entry is dropped first, so its old hostname is
        eligible again if nobody else holds it. Candidates are scanned in order
        and the first one not held by another node wins. When none is free the
        node is left without an entry and NoAvailableHostError is raised.
        """
        candidates = list(candidates)
        async with self._lock:
            self._entries.pop(node_id, None)
            taken = self._claimed_by_others(node_id)
            for hostname in candidates:
                if hostname in taken:
                    continue
                assignment = Assignment(node_id=node_id, hostname=hostname)
                self._entries[node_id] = assignment
                return assignment
        raise NoAvailableHostError(node_id, candidates=len(candidates))

    def _claimed_by_others(self, node_id: Optional[str]) -> set[str]:
        return {a.hostname for other, a in self._entries.items() if other != node_id}
