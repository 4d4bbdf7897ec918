"""Unit tests for MetricsEvaluator stress rules."""

import pytest

from conftest import make_entries
from mindmate.services.metrics.metrics_evaluator import MetricsEvaluator, to_number


# ─────────────────────────────────────────────────────────────────
# to_number
# ─────────────────────────────────────────────────────────────────


class TestToNumber:
    def test_numeric_string_is_parsed(self):
        assert to_number(" 3 ") == 3.0

    @pytest.mark.parametrize("value", [None, True, False, "abc", float("nan"), float("inf"), [], {}])
    def test_non_numbers_are_none(self, value):
        assert to_number(value) is None


# ─────────────────────────────────────────────────────────────────
# evaluate
# ─────────────────────────────────────────────────────────────────


class TestEvaluate:
    def test_average_stress_four_is_very_high(self):
        result = MetricsEvaluator.evaluate(make_entries([(2, 4)] * 12))

        assert result.severity == "very_high"
        assert result.avg_stress == 4.0
        assert "Average stress is high (4)" in result.reasons

    def test_average_stress_three_and_a_half_is_high(self):
        result = MetricsEvaluator.evaluate(make_entries([(2, 3), (2, 4)]))

        assert result.severity == "high"
        assert "Average stress is elevated (3.5)" in result.reasons

    @pytest.mark.parametrize("stress_pairs,expected", [
        ([(2, 2), (2, 3)], "moderate"),
        ([(2, 1), (2, 2)], "low"),
        ([(2, 1), (2, 1)], "none"),
    ])
    def test_lower_tiers(self, stress_pairs, expected):
        assert MetricsEvaluator.evaluate(make_entries(stress_pairs)).severity == expected

    def test_resting_heart_rate_raises_severity(self):
        entries = make_entries([(3, 0)] * 3)

        assert MetricsEvaluator.evaluate(entries, {"restingHeartRate": 90}).severity == "high"
        assert MetricsEvaluator.evaluate(entries, {"restingHeartRateAvg": 95}).severity == "very_high"

    def test_only_last_twelve_entries_count(self):
        entries = make_entries([(0, 5)] * 8 + [(3, 1)] * 12)

        result = MetricsEvaluator.evaluate(entries)

        assert result.avg_stress == 1.0
        assert result.severity == "none"

    def test_missing_heart_points_is_a_reason(self):
        result = MetricsEvaluator.evaluate(make_entries([(3, 1)]))
        assert "No heart points detected recently" in result.reasons

        result = MetricsEvaluator.evaluate(make_entries([(3, 1)]), {"heartPoints": 12})
        assert "No heart points detected recently" not in result.reasons

    def test_non_numeric_values_are_skipped(self):
        entries = make_entries([(2, 4)]) + [{"mood": "n/a", "stress": None}]

        assert MetricsEvaluator.evaluate(entries).avg_stress == 4.0

    def test_empty_history(self):
        result = MetricsEvaluator.evaluate([])

        assert result.severity == "none"
        assert result.avg_stress == 0.0

    def test_same_input_same_assessment(self):
        entries = make_entries([(1, 4), (2, 3), (3, 2)])
        fitness = {"restingHeartRate": 91, "heartPoints": 0}

        assert MetricsEvaluator.evaluate(entries, fitness) == MetricsEvaluator.evaluate(entries, fitness)

    @pytest.mark.parametrize("resting_hr", [0, 85, 92, 97])
    def test_severity_never_drops_as_stress_rises(self, resting_hr):
        fitness = {"restingHeartRate": resting_hr}
        ranks = [
            MetricsEvaluator.severity_rank(MetricsEvaluator.evaluate(make_entries([(2, stress)] * 4), fitness).severity)
            for stress in range(6)
        ]

        assert ranks == sorted(ranks)


# ─────────────────────────────────────────────────────────────────
# detect_stress
# ─────────────────────────────────────────────────────────────────


class TestDetectStress:
    def test_no_entries(self):
        assert MetricsEvaluator.detect_stress([]).triggered is False

    def test_two_spikes_in_last_three(self):
        result = MetricsEvaluator.detect_stress(make_entries([(2, 4), (2, 1), (2, 5)]))

        assert result.triggered is True
        assert result.reason == "recent stress spikes"

    def test_single_spike_does_not_trigger(self):
        assert MetricsEvaluator.detect_stress(make_entries([(2, 5), (2, 5), (2, 1), (2, 1), (2, 4)])).triggered is False

    def test_mood_swing_over_last_four(self):
        result = MetricsEvaluator.detect_stress(make_entries([(3, 1), (3, 1), (3, 1), (1, 1)]))

        assert result.triggered is True
        assert result.reason == "mood drop detected"

    def test_mood_swing_needs_four_entries(self):
        assert MetricsEvaluator.detect_stress(make_entries([(4, 1), (2, 1), (0, 1)])).triggered is False


# ─────────────────────────────────────────────────────────────────
# score_stress
# ─────────────────────────────────────────────────────────────────


class TestScoreStress:
    def test_empty_history_is_low(self):
        result = MetricsEvaluator.score_stress([])

        assert result.level == "low"
        assert result.score == 0

    def test_high_stress_and_low_mood(self):
        result = MetricsEvaluator.score_stress(make_entries([(1, 4)] * 7))

        assert result.score == 42
        assert result.level == "high"
        assert result.reasons == ["High avg stress: 4.0/5", "Low mood: 1.0/4"]

    def test_elevated_resting_heart_rate(self):
        result = MetricsEvaluator.score_stress(make_entries([(1, 4)] * 7), {"restingHeartRate": 100})

        assert result.score == 62
        assert result.level == "very_high"
        assert "Elevated RHR: 100 bpm (resting)" in result.reasons

    def test_heart_minutes_take_points_off(self):
        result = MetricsEvaluator.score_stress(
            make_entries([(1, 4)] * 7),
            {"restingHeartRate": 100, "heartMinutes": 15},
        )

        assert result.score == 54
        assert result.level == "high"

    def test_mood_trending_down(self):
        result = MetricsEvaluator.score_stress(make_entries([(3, 0)] * 6 + [(1, 0)]))

        assert result.reasons == ["Mood trending downward"]
        assert result.score == 15

    def test_low_steps(self):
        result = MetricsEvaluator.score_stress(make_entries([(3, 0)]), {"steps": 2000})

        assert "Very low activity: 2000 steps today" in result.reasons
        assert result.score == 8

    def test_to_dict_reports_data_points(self):
        result = MetricsEvaluator.score_stress(make_entries([(3, 1)] * 10), {"steps": 9000}).to_dict()

        assert result["dataPoints"] == {"entries": 7, "googleFit": 1}
