"""
Recommendation Service

Personalized wellness recommendations in two modes:

- full: AI-generated set of six, falling back to a curated static set
- lightweight: one quick heuristic recommendation, never calls the AI
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from common.database import DocumentStore
from mindmate.services.ai.fallback import parse_json_object, try_ai_then_fallback
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.document_layout import mood_entries
from mindmate.services.metrics.user_context import UserContext

logger = logging.getLogger(__name__)

MODE_FULL = "full"
MODE_LIGHTWEIGHT = "lightweight"

PROMPT_HISTORY_WINDOW = 14
RECOMMENDATION_MAX_TOKENS = 2000

FALLBACK_RECOMMENDATIONS: List[Dict[str, str]] = [
    {
        "priority": "high",
        "category": "Quick Wins",
        "title": "5-Minute Breathing Reset",
        "description": "Short breathing breaks reduce acute stress and reset attention.",
        "technique": "Find a quiet spot. Inhale 4s, hold 4s, exhale 6s. Repeat 5 times.",
        "duration": "5 min",
        "timeOfDay": "afternoon",
        "expectedBenefit": "Reduce peak stress by ~10%",
        "effort": "easy",
        "when": "When feeling overwhelmed",
        "alternatives": "Try humming (activates vagus nerve)",
        "workTip": "Use during a work break or bathroom break",
    },
    {
        "priority": "high",
        "category": "Movement",
        "title": "Energizing 10-Minute Walk",
        "description": "Movement improves mood, circulation, and reduces stress hormones.",
        "technique": "Walk at brisk pace, swing arms, notice surroundings.",
        "duration": "10 min",
        "timeOfDay": "morning or midday",
        "expectedBenefit": "Improve mood by ~12%",
        "effort": "easy",
        "when": "Energy slump or afternoon anxiety",
        "alternatives": "Dancing, stretching, or jumping jacks",
        "workTip": "Take a walk during lunch break or between meetings",
    },
    {
        "priority": "medium",
        "category": "Mindfulness",
        "title": "Body Scan Meditation",
        "description": "Increases body awareness and releases muscle tension.",
        "technique": "Lie down, slowly scan from toes to head, noticing sensations.",
        "duration": "10-15 min",
        "timeOfDay": "evening",
        "expectedBenefit": "Improve sleep quality by ~15%",
        "effort": "easy",
        "when": "Before bed or during anxious moments",
        "alternatives": "Guided meditation app (Calm, Headspace)",
        "workTip": "Practice after work to decompress",
    },
    {
        "priority": "medium",
        "category": "Social Connection",
        "title": "Reach Out to Someone",
        "description": "Social connection reduces stress and improves mental health.",
        "technique": "Call, text, or meet a friend. Share how you're feeling.",
        "duration": "15-30 min",
        "timeOfDay": "flexible",
        "expectedBenefit": "Reduce loneliness, boost mood by ~15%",
        "effort": "medium",
        "when": "Feeling isolated or overwhelmed",
        "alternatives": "Join online community, attend group class",
        "workTip": "Connect with a colleague or team member",
    },
    {
        "priority": "medium",
        "category": "Self-Care",
        "title": "Hydration & Nutrition Check",
        "description": "Dehydration and poor nutrition amplify stress. Small changes matter.",
        "technique": "Drink 1-2 glasses of water. Eat protein-rich snack (nuts, yogurt).",
        "duration": "5 min",
        "timeOfDay": "anytime",
        "expectedBenefit": "Stabilize mood and energy by ~8%",
        "effort": "easy",
        "when": "Before/after stressful tasks",
        "alternatives": "Green tea, herbal tea, fresh fruit",
        "workTip": "Keep water and healthy snacks at your desk",
    },
    {
        "priority": "low",
        "category": "Creative",
        "title": "Journaling or Art",
        "description": "Creative expression processes emotions and reduces anxiety.",
        "technique": "Write freely for 10 min, or sketch/paint without judgment.",
        "duration": "15-20 min",
        "timeOfDay": "evening",
        "expectedBenefit": "Process emotions, clarify thoughts",
        "effort": "medium",
        "when": "Feeling confused, overwhelmed, or creative",
        "alternatives": "Music, photography, crafting",
        "workTip": "Journal during lunch or after work",
    },
]

FALLBACK_SUMMARY = (
    "Start with ONE high-priority recommendation today. Small, consistent actions "
    "compound into big changes. You've got this!"
)

FALLBACK_NEXT_STEPS = [
    "Pick your top 3 from above",
    "Schedule them in your calendar",
    "Track how you feel before and after",
    "Adjust based on what works for you",
]

RECOMMENDATION_PROMPT_TEMPLATE = """{context}
Recent mood history (last 14): {recent_moods}

Generate 6 HIGHLY PERSONALIZED wellness recommendations based on this user's mood patterns, stress levels, activity, and work situation.
Categories: quick wins, movement, mindfulness, social connection, self-care, creative.

IMPORTANT: Make each recommendation:
1. SPECIFIC to their current situation (not generic)
2. PRACTICAL for a working professional
3. TIME-EFFICIENT (5-30 min total)
4. ACTIONABLE with clear steps
5. INCLUDE work-compatible tips

Respond ONLY with valid JSON (no other text):
{{
  "recommendations": [
    {{
      "priority": "high/medium/low",
      "category": "category name",
      "title": "specific title",
      "description": "why this matters for THEM specifically",
      "technique": "how to do it",
      "duration": "time estimate",
      "timeOfDay": "when to do it",
      "expectedBenefit": "expected outcome",
      "effort": "easy/medium/hard",
      "when": "when to use this",
      "alternatives": "other options",
      "workTip": "how to fit this into work or work breaks"
    }}
  ],
  "summary": "personalized encouraging summary",
  "nextSteps": ["step 1", "step 2", "step 3", "step 4"],
  "personalization": {{
    "basedOnMood": "why these recommendations",
    "companyBenefit": "how this helps at work"
  }}
}}"""


class RecommendationService:
    """
    Generates wellness recommendations from mood history.
    """

    def __init__(
        self,
        store: DocumentStore,
        llm_service: LLMService,
        history_window: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize RecommendationService.

        Args:
            store: Document store holding mood history
            llm_service: Provider chain for the AI path
            history_window: Mood entries considered per request
            clock: Returns the current UTC time
        """
        self._store = store
        self._llm = llm_service
        self._history_window = history_window
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def generate(
        self,
        user_id: str,
        mode: str = MODE_FULL,
        work_context: Optional[str] = None,
        company_role: Optional[str] = None,
        google_fit: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Build recommendations for a user.

        Returns:
            Dict with recommendations, summary, nextSteps, generatedBy,
            basedOnEntries and generatedAt
        """
        document = await self._store.read()
        history = mood_entries(document, user_id)[-self._history_window:]

        if mode == MODE_LIGHTWEIGHT:
            result = self.lightweight(history)
        else:
            context = UserContext.build(history, google_fit, work_context, company_role)
            primary = (lambda: self._from_ai(history, context)) if self._llm.is_available() else None
            result = await try_ai_then_fallback(
                primary,
                lambda: self.fallback(history),
                label="Recommendations",
            )

        result.setdefault("generatedAt", self._clock().isoformat())
        return result

    async def _from_ai(self, history: Sequence[Dict[str, Any]], context: UserContext) -> Dict[str, Any]:
        recent = list(history)[-PROMPT_HISTORY_WINDOW:]
        prompt = RECOMMENDATION_PROMPT_TEMPLATE.format(
            context=context.describe(),
            recent_moods="; ".join(f"mood:{e.get('mood')},stress:{e.get('stress')}" for e in recent),
        )

        logger.info("Generating recommendations from historical data...")
        reply = await self._llm.generate_text(prompt, max_tokens=RECOMMENDATION_MAX_TOKENS)
        result = parse_json_object(reply)
        if not isinstance(result.get("recommendations"), list):
            result["recommendations"] = []

        result["generatedBy"] = "AI"
        result["basedOnEntries"] = len(history)
        logger.info(f"Generated {len(result['recommendations'])} personalized recommendations")
        return result

    @staticmethod
    def fallback(history: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Curated static set used when the AI path fails."""
        return {
            "recommendations": copy.deepcopy(FALLBACK_RECOMMENDATIONS),
            "summary": FALLBACK_SUMMARY,
            "nextSteps": list(FALLBACK_NEXT_STEPS),
            "generatedBy": "Fallback",
            "basedOnEntries": len(history),
        }

    @staticmethod
    def lightweight(history: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """One quick recommendation based on the latest entry."""
        history = list(history)
        latest_mood = history[-1].get("mood") if history else None

        if latest_mood is not None:
            analysis = (
                f"Latest mood: {latest_mood}/4. Consider immediate quick wins "
                f"(breathing, hydration)."
            )
        else:
            analysis = "No mood entries. Try a short breathing pause."

        return {
            "summary": (
                "Quick coaching: small, immediate actions can help. Try a 3-5 minute "
                "breathing break and a short walk."
            ),
            "analysis": analysis,
            "recommendations": [copy.deepcopy(FALLBACK_RECOMMENDATIONS[0])],
            "nextSteps": ["Try the breathing reset now", "Take a 5-10 minute walk"],
            "generatedBy": "heuristic",
            "basedOnEntries": len(history),
        }
