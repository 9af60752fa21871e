"""In-process metrics for HelixGate request handling.

Counters are plain integers keyed by dotted name. Summaries keep count,
total and extremes for values such as row counts and store latency.
"""

from dataclasses import dataclass
from threading import Lock
from typing import Any


@dataclass
class Summary:
    count: int = 0
    total: float = 0.0
    minimum: float | None = None
    maximum: float | None = None

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.minimum = value if self.minimum is None else min(self.minimum, value)
        self.maximum = value if self.maximum is None else max(self.maximum, value)

    def as_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "total": self.total,
            "min": self.minimum,
            "max": self.maximum,
            "avg": self.total / self.count if self.count else 0.0,
        }


class MetricsRegistry:
    """Lock-guarded counters and summaries for the proxy and its store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._counters: dict[str, int] = {}
        self._summaries: dict[str, Summary] = {}

    def _increment(self, name: str, amount: int = 1) -> None:
        self._counters[name] = self._counters.get(name, 0) + amount

    def _add(self, name: str, value: float) -> None:
        self._summaries.setdefault(name, Summary()).add(value)

    def record_proxy_request(self) -> None:
        with self._lock:
            self._increment("proxy.requests")

    def record_proxy_outcome(self, outcome: str, row_total: int | None = None) -> None:
        """Count one finished proxy request.

        ``outcome`` is one of validation_failed, success, zero_rows, failed.
        Row totals are only tracked for queries that reached the store.
        """
        with self._lock:
            self._increment(f"proxy.{outcome}")
            if row_total is not None:
                self._add("proxy.rows", row_total)

    def record_store_query(self, statement: str, duration_ms: float) -> None:
        """Count a store round trip by its leading SQL keyword."""
        keyword = statement.lstrip().split(None, 1)[0].lower() if statement.strip() else "unknown"
        with self._lock:
            self._increment("db.statements")
            self._increment(f"db.statements.{keyword}")
            self._add("db.duration_ms", duration_ms)

    def count(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._summaries.clear()

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "summaries": {name: s.as_dict() for name, s in self._summaries.items()},
            }


metrics = MetricsRegistry()
