"""Unit tests for mood history statistics."""

from conftest import make_entries
from mindmate.services.metrics.mood_statistics import (
    compute_trend,
    summarize_history,
    summarize_recent,
)


class TestComputeTrend:
    def test_ten_or_fewer_values_is_stable(self):
        assert compute_trend([5] * 10) == "stable"
        assert compute_trend([]) == "stable"

    def test_recent_higher_than_older_is_increasing(self):
        assert compute_trend([1] * 10 + [5] * 5) == "increasing"

    def test_equal_means_is_decreasing(self):
        assert compute_trend([3] * 15) == "decreasing"

    def test_partial_older_window(self):
        # 12 values: older window is the first two
        levels = [4, 4] + [1] * 5 + [2] * 5
        assert compute_trend(levels) == "decreasing"


class TestSummarizeHistory:
    def test_empty_history(self):
        assert summarize_history([]) is None

    def test_aggregates(self):
        stats = summarize_history(make_entries([(1, 2), (3, 4), (2, 3)]))

        assert stats.avg_mood == 2.0
        assert stats.avg_stress == 3.0
        assert stats.max_stress == 4.0
        assert stats.min_mood == 1.0
        assert stats.latest_mood == 2.0
        assert stats.latest_stress == 3.0
        assert stats.total_entries == 3
        assert stats.trend == "stable"

    def test_missing_values_count_as_zero(self):
        stats = summarize_history([{"mood": 4}, {"stress": 2}])

        assert stats.avg_mood == 2.0
        assert stats.avg_stress == 1.0


class TestSummarizeRecent:
    def test_distribution_and_direction(self):
        stats = summarize_recent(make_entries([(1, 4), (3, 2), (3, 1)])).to_dict()

        assert stats["entriesCount"] == 3
        assert stats["moodDistribution"] == {"0": 0, "1": 1, "2": 0, "3": 2, "4": 0}
        assert stats["trendDirection"] == "improving"
        assert stats["maxStress"] == 4.0
        assert stats["avgStress"] == 2.33

    def test_single_entry_is_stable(self):
        assert summarize_recent(make_entries([(2, 2)])).trend_direction == "stable"

    def test_empty(self):
        stats = summarize_recent([])

        assert stats.entries_count == 0
        assert stats.avg_mood == 0.0
        assert stats.max_mood == 0
