"""
GamePalette Metrics Collection
In-process counters and value series for extraction requests.
"""
import time
from collections import Counter, defaultdict
from threading import Lock
from typing import Any, Dict, List, Optional

SAMPLED_PIXELS_SERIES = "sampled_pixels"
DURATION_SUFFIX = "_duration_ms"


def percentile(ordered: List[float], pct: float) -> float:
    """Linear interpolation between the closest ranks of a sorted list."""
    if not ordered:
        return 0.0
    rank = (len(ordered) - 1) * pct / 100
    low = int(rank)
    high = min(low + 1, len(ordered) - 1)
    return ordered[low] + (rank - low) * (ordered[high] - ordered[low])


def summarize(values: List[float]) -> Dict[str, float]:
    ordered = sorted(values)
    return {
        "count": len(ordered),
        "mean": sum(ordered) / len(ordered),
        "min": ordered[0],
        "max": ordered[-1],
        "p50": percentile(ordered, 50),
        "p95": percentile(ordered, 95),
    }


class MetricsCollector:
    """
    Thread-safe counters and numeric series.

    Counters follow the ``extract_*_total`` naming; series hold raw
    observations (stage durations, sampled pixel counts) and are summarized
    on read.
    """

    REQUESTS = "extract_requests_total"
    DEGENERATE = "extract_degenerate_total"
    FAILED = "extract_failed_total"

    def __init__(self):
        self._lock = Lock()
        self._counters: Counter = Counter()
        self._series: Dict[str, List[float]] = defaultdict(list)
        self._started = time.time()

    def increment_counter(self, name: str, amount: int = 1):
        with self._lock:
            self._counters[name] += amount

    def record_extraction(self, method: str, degenerate: bool):
        """Count one successful extraction, by engine."""
        with self._lock:
            self._counters[self.REQUESTS] += 1
            self._counters[f"extract_method_total_{method}"] += 1
            if degenerate:
                self._counters[self.DEGENERATE] += 1

    def record_failure(self, error_type: str):
        with self._lock:
            self._counters[self.FAILED] += 1
            self._counters[f"{self.FAILED}_{error_type}"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        self._observe(f"{operation}{DURATION_SUFFIX}", duration_ms)

    def record_sample_size(self, pixel_count: int):
        self._observe(SAMPLED_PIXELS_SERIES, pixel_count)

    def _observe(self, series: str, value: float):
        with self._lock:
            self._series[series].append(float(value))

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                name: summarize(values)
                for name, values in self._series.items()
                if name.endswith(DURATION_SUFFIX) and values
            }

    def get_sample_size_stats(self) -> Dict[str, float]:
        with self._lock:
            values = self._series.get(SAMPLED_PIXELS_SERIES)
            return summarize(values) if values else {}

    def get_summary(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": time.time() - self._started,
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "sample_size_stats": self.get_sample_size_stats(),
        }

    def reset(self):
        """Clear everything and restart the uptime clock (tests)."""
        with self._lock:
            self._counters.clear()
            self._series.clear()
            self._started = time.time()


_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Process-wide collector, created lazily."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    if _metrics is not None:
        _metrics.reset()
