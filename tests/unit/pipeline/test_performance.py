"""Tests for PerformanceTracker."""

from stencil_core.pipeline import PerformanceTracker


class TestPerformanceTracker:
    def test_times_accumulate_per_key(self):
        tracker = PerformanceTracker()
        tracker.start()
        tracker.start_extension("react")
        first = tracker.end_extension("react")
        tracker.start_extension("react")
        second = tracker.end_extension("react")

        metrics = tracker.get_metrics()
        assert metrics.extension_times["react"] == first + second
        assert metrics.total_time_ms >= 0

    def test_end_without_start(self):
        tracker = PerformanceTracker()
        assert tracker.end_extension("never") == 0.0
        assert tracker.get_metrics().extension_times == {}

    def test_start_resets(self):
        tracker = PerformanceTracker()
        tracker.start()
        tracker.increment_concept_count(5)
        tracker.start_extension("a")
        tracker.end_extension("a")

        tracker.start()
        metrics = tracker.get_metrics()
        assert metrics.concept_count == 0
        assert metrics.extension_times == {}

    def test_format_metrics(self):
        tracker = PerformanceTracker()
        tracker.start()
        tracker.increment_concept_count(3)
        tracker.start_extension("bem")
        tracker.end_extension("bem")

        text = tracker.format_metrics()
        assert "Concepts processed: 3" in text
        assert "Extension times:" in text
        assert "  bem: " in text

    def test_metrics_to_dict(self):
        tracker = PerformanceTracker()
        tracker.start()
        data = tracker.get_metrics().to_dict()
        assert set(data) == {"total_time_ms", "extension_times", "concept_count", "memory_usage"}
