"""
Palette Studio Metrics Collection
In-process counters and timings for extraction and palette traffic.
"""
import time
from collections import Counter, defaultdict
from threading import Lock
from typing import Any, Dict, List, Optional


def _summarize(values: List[float]) -> Dict[str, float]:
    ordered = sorted(values)
    return {
        "count": len(ordered),
        "mean": sum(ordered) / len(ordered),
        "min": ordered[0],
        "max": ordered[-1],
        "p50": _percentile(ordered, 50),
        "p95": _percentile(ordered, 95)
    }


def _percentile(ordered: List[float], percentile: int) -> float:
    """Linear interpolation between closest ranks of an already sorted list."""
    position = (len(ordered) - 1) * percentile / 100
    lower = int(position)
    if lower + 1 >= len(ordered):
        return ordered[lower]
    return ordered[lower] + (position - lower) * (ordered[lower + 1] - ordered[lower])


class MetricsCollector:
    """Thread-safe metrics shared by all request handlers."""

    def __init__(self):
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._palette_sizes: List[int] = []
        self._start_time = time.time()

    def increment_counter(self, name: str, amount: int = 1):
        with self._lock:
            self._counters[name] += amount

    def record_timing(self, operation: str, duration_ms: float):
        with self._lock:
            self._timings[operation].append(duration_ms)

    def record_extraction(self, mode: str, returned_colors: int, kmeans_used: bool,
                          total_ms: float, core_ms: float):
        """Account for one successful extraction request."""
        with self._lock:
            self._counters["color_extract_requests_total"] += 1
            self._counters[f"color_extract_mode_total_{mode}"] += 1
            if kmeans_used:
                self._counters["color_extract_kmeans_runs_total"] += 1
            if returned_colors == 0:
                self._counters["color_extract_empty_total"] += 1
            self._timings["color_extract_duration_ms"].append(total_ms)
            self._timings["color_extract_core_duration_ms"].append(core_ms)
            self._palette_sizes.append(returned_colors)

    def record_extraction_failure(self, error_type: str):
        """Count a failed extraction, overall and per exception type."""
        with self._lock:
            self._counters["color_extract_failed_total"] += 1
            self._counters[f"color_extract_error_{error_type.lower()}"] += 1

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Count, mean, min, max, p50 and p95 per recorded operation."""
        with self._lock:
            return {
                operation: _summarize(timings)
                for operation, timings in self._timings.items() if timings
            }

    def get_palette_size_stats(self) -> Dict[str, float]:
        """Distribution of how many colors extractions returned."""
        with self._lock:
            if not self._palette_sizes:
                return {}
            return _summarize([float(size) for size in self._palette_sizes])

    def get_uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "palette_size_stats": self.get_palette_size_stats()
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._palette_sizes.clear()
            self._start_time = time.time()


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()
