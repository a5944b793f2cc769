"""
Metrics sink: monotonic elapsed-time capture and named operation counters.

Every algorithm entry point takes a Metrics instance as an argument; there is
no module-level or shared default sink.
"""

from __future__ import annotations

import time
from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class Metrics(Protocol):
    """Recording contract consumed by the analysis algorithms."""

    def start_timing(self) -> None: ...

    def stop_timing(self) -> None: ...

    @property
    def elapsed_nanos(self) -> int: ...

    @property
    def elapsed_millis(self) -> float: ...

    def increment_counter(self, operation: str) -> None: ...

    def get_counter(self, operation: str) -> int: ...

    def counters(self) -> Mapping[str, int]: ...

    def reset(self) -> None: ...

    def summary(self) -> str: ...


class BasicMetrics:
    """Default Metrics implementation backed by time.perf_counter_ns and a dict."""

    def __init__(self) -> None:
        self._start_ns = 0
        self._stop_ns = 0
        self._counters: dict[str, int] = {}

    def start_timing(self) -> None:
        self._start_ns = time.perf_counter_ns()

    def stop_timing(self) -> None:
        self._stop_ns = time.perf_counter_ns()

    @property
    def elapsed_nanos(self) -> int:
        return self._stop_ns - self._start_ns

    @property
    def elapsed_millis(self) -> float:
        return self.elapsed_nanos / 1_000_000.0

    def increment_counter(self, operation: str) -> None:
        self._counters[operation] = self._counters.get(operation, 0) + 1

    def get_counter(self, operation: str) -> int:
        return self._counters.get(operation, 0)

    def counters(self) -> Mapping[str, int]:
        """Copy of all counters."""
        return dict(self._counters)

    def reset(self) -> None:
        self._start_ns = 0
        self._stop_ns = 0
        self._counters.clear()

    def summary(self) -> str:
        """
        Human-readable summary: elapsed milliseconds, then every non-zero
        counter in name order.
        """
        lines = [
            f"Execution Time: {self.elapsed_millis:.3f} ms",
            "Operation Counters:",
        ]
        for name, count in sorted(self._counters.items()):
            if count:
                lines.append(f"  {name}: {count}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"BasicMetrics(elapsed_nanos={self.elapsed_nanos}, counters={self._counters!r})"


def metrics_to_dict(metrics: Metrics) -> dict:
    """
    Return a JSON-serializable dict for a metrics sink; counter keys are sorted.
    """
    counters = metrics.counters()
    return {
        "elapsed_ms": round(metrics.elapsed_millis, 3),
        "counters": {name: counters[name] for name in sorted(counters)},
    }
