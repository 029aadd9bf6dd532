"""Per-stage timing for one pipeline run."""

import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PerformanceMetrics:
    """Timing summary.

    Attributes:
        total_time_ms: Time since start(), in milliseconds
        extension_times: Accumulated milliseconds per extension or stage key
        concept_count: Number of concepts processed
        memory_usage: Bytes currently traced by tracemalloc, if tracing
    """

    total_time_ms: float = 0.0
    extension_times: dict[str, float] = field(default_factory=dict)
    concept_count: int = 0
    memory_usage: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_time_ms": self.total_time_ms,
            "extension_times": dict(self.extension_times),
            "concept_count": self.concept_count,
            "memory_usage": self.memory_usage,
        }


class PerformanceTracker:
    """Accumulates elapsed time per extension key."""

    def __init__(self) -> None:
        self._start: float | None = None
        self._running: dict[str, float] = {}
        self._times: dict[str, float] = {}
        self._concept_count = 0

    def start(self) -> None:
        """Reset and start overall timing."""
        self._start = time.perf_counter()
        self._running.clear()
        self._times.clear()
        self._concept_count = 0

    def start_extension(self, key: str) -> None:
        self._running[key] = time.perf_counter()

    def end_extension(self, key: str) -> float:
        """Stop timing a key; returns the elapsed ms of this interval."""
        started = self._running.pop(key, None)
        if started is None:
            return 0.0
        elapsed = (time.perf_counter() - started) * 1000
        self._times[key] = self._times.get(key, 0.0) + elapsed
        return elapsed

    def increment_concept_count(self, count: int = 1) -> None:
        self._concept_count += count

    def get_metrics(self) -> PerformanceMetrics:
        total = 0.0
        if self._start is not None:
            total = (time.perf_counter() - self._start) * 1000
        memory = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else None
        return PerformanceMetrics(
            total_time_ms=total,
            extension_times=dict(self._times),
            concept_count=self._concept_count,
            memory_usage=memory,
        )

    def format_metrics(self) -> str:
        metrics = self.get_metrics()
        lines = [
            f"Total time: {metrics.total_time_ms:.2f}ms",
            f"Concepts processed: {metrics.concept_count}",
        ]
        if metrics.extension_times:
            lines.append("Extension times:")
            lines.extend(
                f"  {key}: {elapsed:.2f}ms" for key, elapsed in metrics.extension_times.items()
            )
        if metrics.memory_usage is not None:
            lines.append(f"Memory usage: {metrics.memory_usage / 1024:.1f}KB")
        return "\n".join(lines)
