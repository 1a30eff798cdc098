"""In-memory entity models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Assignment:
    """A node's current hostname binding."""

    node_id: str
    hostname: str
    assigned_at: str = field(default_factory=_utc_now_iso)  # ISO format

    def to_dict(self) -> dict[str, Any]:
        return {"node_id": self.node_id, "hostname": self.hostname, "assigned_at": self.assigned_at}
