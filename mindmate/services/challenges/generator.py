"""
Recovery challenge generation: AI first, data-driven selection as fallback.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from common.ai import MalformedUpstreamResponse
from mindmate.services.ai.fallback import parse_json_object, try_ai_then_fallback
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.challenges.selector import ChallengeSelector
from mindmate.services.metrics.metrics_evaluator import to_number
from mindmate.services.metrics.user_context import UserContext

logger = logging.getLogger(__name__)

CHALLENGE_MAX_TOKENS = 2000
PROMPT_HISTORY_WINDOW = 14

CHALLENGE_PROMPT_TEMPLATE = """You are an expert corporate wellness coach. Generate a HIGHLY PERSONALIZED 3-day stress recovery challenge.

{context}

Recent mood history (last 14): {recent_moods}

IMPORTANT: Create a challenge that is:
1. SPECIFIC to this user's historical patterns (not generic)
2. PRACTICAL for a working professional (office/remote/hybrid work)
3. TIME-EFFICIENT (15-40 min total per day)
4. ACTIONABLE with clear steps they can do at work or home
5. PROGRESSIVE (each day builds on previous)

Consider if needed:
- High stress? Focus on nervous system reset and emotional release
- Low mood? Focus on activation, movement, and connection
- Increasing stress? Early intervention to prevent burnout
- Low activity? Include movement-based challenges
- Sleep issues? Include restorative practices

Respond with ONLY valid JSON (no markdown, no extra text):
{{
  "challengeName": "Specific, personalized name reflecting their situation",
  "difficulty": "easy/medium/hard",
  "description": "1-2 sentences about this personalized challenge",
  "overview": "3-4 sentences explaining why these practices are chosen for THEM specifically",
  "targetReduction": "expected % reduction",
  "duration": "total time estimate",
  "prerequisites": "what they need (quiet space, etc)",
  "workContext": "considerations for their work situation",
  "days": [
    {{
      "day": 1,
      "theme": "day theme",
      "tagline": "motivational phrase",
      "objective": "specific goal",
      "workCompatibility": "how to fit this into work/remote schedule",
      "tasks": [
        {{
          "name": "task name",
          "duration": "time",
          "technique": "specific method",
          "impact": "%",
          "steps": ["step1", "step2", "step3"],
          "workTip": "how to do at work or during work breaks",
          "alternatives": "options for different situations"
        }}
      ],
      "expectedReduction": 15,
      "affirmation": "personalized affirmation"
    }}
  ],
  "totalExpectedReduction": 35,
  "successRate": "80%+",
  "companyBenefits": ["productivity boost", "reduced burnout", "better focus"],
  "tips": ["tip1", "tip2", "tip3", "tip4"],
  "followUp": "what to do after 3 days",
  "personalization": {{
    "basedOnEntries": {entries},
    "lastStressLevel": {latest_stress},
    "recommendation": "why this specific challenge for them"
  }}
}}"""


def build_challenge_prompt(history: Sequence[Dict[str, Any]], context: UserContext) -> str:
    recent = list(history)[-PROMPT_HISTORY_WINDOW:]
    recent_moods = " | ".join(f"mood={e.get('mood')},stress={e.get('stress')}" for e in recent)
    latest_stress = recent[-1].get("stress", 3) if recent else 3

    return CHALLENGE_PROMPT_TEMPLATE.format(
        context=context.describe(),
        recent_moods=recent_moods or "no data",
        entries=len(history),
        latest_stress=latest_stress,
    )


def day_number(value: Any, index: int) -> int:
    """Positive integer day number, or the 1-based position when unusable."""
    number = to_number(value)
    if number is None or number < 1 or number != int(number):
        return index
    return int(number)


def _normalize_task(task: Any, day_index: int) -> Dict[str, Any]:
    if isinstance(task, str):
        task = {"name": task}
    if not isinstance(task, dict) or not isinstance(task.get("name"), str) or not task["name"].strip():
        raise MalformedUpstreamResponse(f"Challenge day {day_index} has a task without a name")
    return task


def validate_challenge(challenge: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check an AI challenge has the shape the progress tracker needs.

    Plain string tasks become {"name": ...}; day numbers become integers.

    Raises:
        MalformedUpstreamResponse: If days or tasks are missing or malformed
    """
    days = challenge.get("days")
    if not isinstance(days, list) or not days:
        raise MalformedUpstreamResponse("Challenge has no days")

    for index, day in enumerate(days, start=1):
        if not isinstance(day, dict) or not isinstance(day.get("tasks"), list) or not day["tasks"]:
            raise MalformedUpstreamResponse(f"Challenge day {index} has no tasks")
        day["tasks"] = [_normalize_task(task, index) for task in day["tasks"]]
        day["day"] = day_number(day.get("day"), index)

    numbers = [day["day"] for day in days]
    if len(set(numbers)) != len(numbers):
        raise MalformedUpstreamResponse("Challenge has duplicate day numbers")

    if not challenge.get("challengeName"):
        raise MalformedUpstreamResponse("Challenge has no name")

    return challenge


class ChallengeGenerator:
    """
    Produces challenge drafts for the recovery flow.
    """

    def __init__(self, llm_service: LLMService, selector: Optional[ChallengeSelector] = None):
        """
        Initialize ChallengeGenerator.

        Args:
            llm_service: Provider chain for the AI path
            selector: Deterministic fallback
        """
        self._llm = llm_service
        self._selector = selector or ChallengeSelector()

    async def generate(
        self,
        history: Sequence[Dict[str, Any]],
        context: UserContext,
    ) -> Dict[str, Any]:
        """
        Build a challenge for the given history.

        Args:
            history: Mood entries, oldest first
            context: Statistics, fitness snapshot and work setting

        Returns:
            Challenge draft; generatedBy is AI, DataDriven or Default
        """
        history = list(history)

        async def from_ai() -> Dict[str, Any]:
            prompt = build_challenge_prompt(history, context)
            logger.info("Generating recovery challenge from historical data...")
            reply = await self._llm.generate_text(prompt, max_tokens=CHALLENGE_MAX_TOKENS)
            challenge = validate_challenge(parse_json_object(reply))
            challenge["generatedBy"] = "AI"
            challenge["basedOnEntries"] = len(history)
            logger.info(f"Generated AI challenge: {challenge['challengeName']}")
            return challenge

        def from_data() -> Dict[str, Any]:
            return self._selector.select_challenge(history, context.fitness)

        primary = from_ai if self._llm.is_available() else None
        return await try_ai_then_fallback(primary, from_data, label="Recovery")
