"""
Metrics collection for the polling fetcher.

Counters are kept per fetcher and exposed as a dictionary for structured
log output.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass
class FetchMetrics:
    """Counters for one fetcher."""

    probes: int = 0
    probe_failures: int = 0
    unchanged: int = 0
    retrievals: int = 0
    retrieval_failures: int = 0
    decoded: int = 0
    decode_failures: int = 0
    last_change_token: str = ""
    last_update_time: datetime | None = None

    def record_probe(self, success: bool) -> None:
        self.probes += 1
        if not success:
            self.probe_failures += 1

    def record_unchanged(self) -> None:
        self.unchanged += 1

    def record_retrieval(self, change_token: str, success: bool) -> None:
        self.retrievals += 1
        if success:
            self.last_change_token = change_token
            self.last_update_time = datetime.now()
        else:
            self.retrieval_failures += 1

    def record_decode(self, success: bool) -> None:
        if success:
            self.decoded += 1
        else:
            self.decode_failures += 1

    @property
    def updates(self) -> int:
        """Retrievals that produced content."""
        return self.retrievals - self.retrieval_failures

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        data = asdict(self)
        data["updates"] = self.updates
        if self.last_update_time:
            data["last_update_time"] = self.last_update_time.isoformat()
        return data
