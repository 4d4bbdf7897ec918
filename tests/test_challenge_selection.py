"""Unit tests for challenge templates, rule-based selection and AI generation."""

import json
import pytest

from conftest import make_entries, make_provider
from common.ai import UpstreamUnavailableError
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.challenges.catalog import (
    DEFAULT,
    HIGH_STRESS,
    HIGH_STRESS_LOW_MOOD,
    INCREASING_STRESS,
    LOW_ACTIVITY_OR_SLEEP,
    LOW_MOOD,
    ChallengeCatalog,
)
from mindmate.services.challenges.generator import ChallengeGenerator
from mindmate.services.challenges.selector import ChallengeSelector
from mindmate.services.metrics.mood_statistics import MoodStatistics
from mindmate.services.metrics.user_context import UserContext


def make_stats(avg_stress, avg_mood, trend="stable"):
    return MoodStatistics(
        avg_stress=avg_stress,
        avg_mood=avg_mood,
        max_stress=avg_stress,
        min_mood=avg_mood,
        latest_mood=avg_mood,
        latest_stress=avg_stress,
        total_entries=5,
        trend=trend,
    )


# ─────────────────────────────────────────────────────────────────
# ChallengeCatalog
# ─────────────────────────────────────────────────────────────────


class TestChallengeCatalog:
    def test_patterns_end_with_default(self):
        patterns = ChallengeCatalog().patterns()

        assert patterns[0] == HIGH_STRESS_LOW_MOOD
        assert patterns[-1] == DEFAULT

    def test_returned_template_is_an_independent_copy(self):
        catalog = ChallengeCatalog()

        first = catalog.get(HIGH_STRESS)
        first["days"][0]["tasks"][0]["name"] = "changed"
        first["tips"].append("extra")

        second = catalog.get(HIGH_STRESS)
        assert second["days"][0]["tasks"][0]["name"] != "changed"
        assert "extra" not in second["tips"]

    def test_task_ids_are_assigned_per_day(self):
        challenge = ChallengeCatalog().get(LOW_MOOD)

        for day in challenge["days"]:
            ids = [task["id"] for task in day["tasks"]]
            assert ids == [f"d{day['day']}-t{i}" for i in range(1, len(ids) + 1)]

    def test_text_is_filled_with_statistics(self):
        challenge = ChallengeCatalog().get(HIGH_STRESS, avg_stress=4.25, avg_mood=1.0, trend="increasing")

        assert "4.2/5" in challenge["description"] or "4.3/5" in challenge["description"]
        assert "increasing" in challenge["overview"]
        assert "pattern" not in challenge
        assert "recommendation" not in challenge

    def test_data_driven_templates_get_common_fields(self):
        catalog = ChallengeCatalog()

        assert catalog.get(HIGH_STRESS)["successRate"] == "70-80%"
        assert catalog.get(LOW_MOOD)["successRate"] == "80-90%"
        assert catalog.get(DEFAULT)["successRate"] == "85%+"
        assert "followUp" in catalog.get(INCREASING_STRESS)

    def test_unknown_pattern(self):
        with pytest.raises(KeyError):
            ChallengeCatalog().get("Nope")


# ─────────────────────────────────────────────────────────────────
# ChallengeSelector.classify
# ─────────────────────────────────────────────────────────────────


class TestClassify:
    def test_threshold_boundaries_are_inclusive(self):
        assert ChallengeSelector.classify(make_stats(4.0, 2.0)) == HIGH_STRESS_LOW_MOOD

    def test_just_inside_thresholds(self):
        assert ChallengeSelector.classify(make_stats(3.99, 2.01)) == DEFAULT

    def test_priority_order(self):
        assert ChallengeSelector.classify(make_stats(4.5, 3.0)) == HIGH_STRESS
        assert ChallengeSelector.classify(make_stats(1.0, 1.5)) == LOW_MOOD
        assert ChallengeSelector.classify(make_stats(2.0, 3.0, trend="increasing")) == INCREASING_STRESS

    def test_low_activity_or_sleep(self):
        stats = make_stats(2.0, 3.0)

        assert ChallengeSelector.classify(stats, {"stepsToday": 2999}) == LOW_ACTIVITY_OR_SLEEP
        assert ChallengeSelector.classify(stats, {"sleepHours": 5.5}) == LOW_ACTIVITY_OR_SLEEP
        assert ChallengeSelector.classify(stats, {"stepsToday": 3000, "sleepHours": 6}) == DEFAULT

    def test_zero_fitness_values_are_ignored(self):
        assert ChallengeSelector.classify(make_stats(2.0, 3.0), {"stepsToday": 0, "sleepHours": 0}) == DEFAULT


# ─────────────────────────────────────────────────────────────────
# ChallengeSelector.select_challenge
# ─────────────────────────────────────────────────────────────────


class TestSelectChallenge:
    def test_empty_history_gives_default(self):
        challenge = ChallengeSelector().select_challenge([])

        assert challenge["challengeName"] == "3-Day Wellness Foundation"
        assert challenge["generatedBy"] == "Default"
        assert challenge["basedOnEntries"] == 0
        assert "personalization" not in challenge

    def test_high_stress_low_mood_history(self):
        challenge = ChallengeSelector().select_challenge(make_entries([(0, 5)] * 3))

        assert challenge["challengeName"] == "Deep Recovery: High Stress + Low Mood Reset"
        assert challenge["generatedBy"] == "DataDriven"
        assert challenge["basedOnEntries"] == 3
        assert "5.0/5" in challenge["overview"]
        assert challenge["personalization"] == {
            "avgStress": 5.0,
            "avgMood": 0.0,
            "trend": "stable",
            "patternKey": HIGH_STRESS_LOW_MOOD,
            "pattern": "High stress + Low mood",
            "recommendation": "Intensive approach with nervous system reset + mood elevation",
        }

    def test_balanced_history_is_data_driven_default(self):
        challenge = ChallengeSelector().select_challenge(make_entries([(3, 1)] * 4))

        assert challenge["challengeName"] == "3-Day Wellness Foundation"
        assert challenge["generatedBy"] == "DataDriven"
        assert challenge["personalization"]["pattern"] == "Balanced"
        assert challenge["personalization"]["patternKey"] == DEFAULT

    def test_fitness_context_is_used(self):
        challenge = ChallengeSelector().select_challenge(make_entries([(3, 1)] * 4), {"stepsToday": 1200})

        assert challenge["challengeName"] == "Energy & Restoration Challenge"


# ─────────────────────────────────────────────────────────────────
# ChallengeGenerator
# ─────────────────────────────────────────────────────────────────


AI_CHALLENGE = {
    "challengeName": "Calm Week",
    "days": [
        {"day": 1, "tasks": [{"name": "Breathe"}, {"name": "Walk"}]},
        {"tasks": [{"name": "Journal"}]},
    ],
}


class TestChallengeGenerator:
    @pytest.mark.asyncio
    async def test_ai_challenge_is_used_when_valid(self):
        reply = "Here is your plan:\n" + json.dumps(AI_CHALLENGE) + "\nEnjoy!"
        provider = make_provider("groq", reply=reply)
        generator = ChallengeGenerator(LLMService({"groq": provider}))
        history = make_entries([(2, 3)] * 4)

        challenge = await generator.generate(history, UserContext.build(history))

        assert challenge["challengeName"] == "Calm Week"
        assert challenge["generatedBy"] == "AI"
        assert challenge["basedOnEntries"] == 4
        assert challenge["days"][1]["day"] == 2
        assert provider.chat.call_args.kwargs["max_tokens"] == 2000

    @pytest.mark.asyncio
    async def test_challenge_without_tasks_falls_back(self):
        reply = json.dumps({"challengeName": "Broken", "days": [{"day": 1, "tasks": []}]})
        generator = ChallengeGenerator(LLMService({"groq": make_provider("groq", reply=reply)}))
        history = make_entries([(0, 5)] * 3)

        challenge = await generator.generate(history, UserContext.build(history))

        assert challenge["generatedBy"] == "DataDriven"
        assert challenge["challengeName"] == "Deep Recovery: High Stress + Low Mood Reset"

    @pytest.mark.asyncio
    async def test_string_tasks_and_day_numbers_are_normalized(self):
        reply = json.dumps({
            "challengeName": "Reset",
            "days": [
                {"day": "1", "tasks": ["Breathe 4-7-8", "Walk"]},
                {"day": "two", "tasks": [{"name": "Journal"}]},
            ],
        })
        generator = ChallengeGenerator(LLMService({"groq": make_provider("groq", reply=reply)}))

        challenge = await generator.generate([], UserContext.build([]))

        assert challenge["generatedBy"] == "AI"
        assert challenge["days"][0] == {"day": 1, "tasks": [{"name": "Breathe 4-7-8"}, {"name": "Walk"}]}
        assert challenge["days"][1]["day"] == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tasks", [[42], [{"duration": "5 min"}], [{"name": "  "}]])
    async def test_unnamed_tasks_fall_back(self, tasks):
        reply = json.dumps({"challengeName": "Broken", "days": [{"day": 1, "tasks": tasks}]})
        generator = ChallengeGenerator(LLMService({"groq": make_provider("groq", reply=reply)}))

        challenge = await generator.generate([], UserContext.build([]))

        assert challenge["generatedBy"] == "Default"

    @pytest.mark.asyncio
    async def test_duplicate_day_numbers_fall_back(self):
        reply = json.dumps({
            "challengeName": "Broken",
            "days": [{"day": 1, "tasks": ["a"]}, {"day": "1", "tasks": ["b"]}],
        })
        generator = ChallengeGenerator(LLMService({"groq": make_provider("groq", reply=reply)}))

        challenge = await generator.generate([], UserContext.build([]))

        assert challenge["generatedBy"] == "Default"

    @pytest.mark.asyncio
    async def test_unparseable_reply_falls_back(self):
        generator = ChallengeGenerator(LLMService({"groq": make_provider("groq", reply="no json here")}))

        challenge = await generator.generate([], UserContext.build([]))

        assert challenge["generatedBy"] == "Default"

    @pytest.mark.asyncio
    async def test_provider_failure_falls_back(self):
        provider = make_provider("groq", error=UpstreamUnavailableError("down"))
        generator = ChallengeGenerator(LLMService({"groq": provider}))
        history = make_entries([(3, 1)] * 2)

        challenge = await generator.generate(history, UserContext.build(history))

        assert challenge["generatedBy"] == "DataDriven"

    @pytest.mark.asyncio
    async def test_no_provider_skips_ai(self, offline_llm):
        challenge = await ChallengeGenerator(offline_llm).generate([], UserContext.build([]))

        assert challenge["generatedBy"] == "Default"
