"""
Library of 3-day recovery challenge templates.

One template per detected pattern plus a balanced default. Content is
static; expected-reduction percentages are motivational estimates, not
measured outcomes. ``ChallengeCatalog.get`` always returns a fresh copy.
"""

import copy
from typing import Any, Dict, List, Tuple

HIGH_STRESS_LOW_MOOD = "HighStressLowMood"
HIGH_STRESS = "HighStress"
LOW_MOOD = "LowMood"
INCREASING_STRESS = "IncreasingStress"
LOW_ACTIVITY_OR_SLEEP = "LowActivityOrSleep"
DEFAULT = "Default"


def _task(name, duration, technique, impact, steps, work_tip, alternatives) -> Dict[str, Any]:
    return {
        "name": name,
        "duration": duration,
        "technique": technique,
        "impact": impact,
        "steps": list(steps),
        "workTip": work_tip,
        "alternatives": alternatives,
    }


def _day(day, theme, tagline, objective, work_compatibility, tasks, expected_reduction, affirmation) -> Dict[str, Any]:
    return {
        "day": day,
        "theme": theme,
        "tagline": tagline,
        "objective": objective,
        "workCompatibility": work_compatibility,
        "tasks": list(tasks),
        "expectedReduction": expected_reduction,
        "affirmation": affirmation,
    }


# ─────────────────────────────────────────────────────────────────
# Day plans
# ─────────────────────────────────────────────────────────────────

INTENSIVE_DAYS = [
    _day(
        1, "Release", "Let out what's been building",
        "Full nervous system reset through safe release",
        "Best done after work or on weekend",
        [
            _task(
                "Power Release (Shaking)", "10 min",
                "Controlled shaking to release trapped energy", "30%",
                ["Stand comfortably", "Shake entire body vigorously", "Let tension flow out", "Take deep breaths"],
                "Do privately, maybe in car or at home",
                "Vigorous exercise like dancing or running",
            ),
            _task(
                "Extended Exhale Breathing", "8 min",
                "Exhale longer than inhale to calm nervous system", "20%",
                ["Breathe in 4 counts", "Exhale 8 counts", "Repeat 10 times"],
                "Can do at desk with eyes closed",
                "Box breathing or 4-7-8 technique",
            ),
        ],
        25, "I release what I cannot control",
    ),
    _day(
        2, "Reground", "Find your center",
        "Reconnect to present moment and build resilience",
        "Lunch break or after work",
        [
            _task(
                "Mindful Movement", "15 min",
                "Slow, intentional movement like walk or yoga", "20%",
                ["Move slowly", "Notice sensations", "Engage all senses", "Stay present"],
                "Walk outside during lunch, notice surroundings",
                "Yoga, tai chi, stretching",
            ),
            _task(
                "Connection", "10 min",
                "Meaningful interaction with someone", "15%",
                ["Call or meet someone", "Be honest about feelings", "Listen genuinely"],
                "Coffee with colleague or quick call to friend",
                "Journal, meditation, or gratitude practice",
            ),
        ],
        20, "I am grounded and resilient",
    ),
    _day(
        3, "Reflect & Reset", "Learn and plan forward",
        "Process patterns and create sustainable change",
        "Evening reflection",
        [
            _task(
                "Pattern Journal", "12 min",
                "Write about stress triggers and patterns", "15%",
                ["What triggered stress?", "What helped most?", "What will I do differently?"],
                "Identify work triggers specifically",
                "Voice memo or discussion with trusted person",
            ),
            _task(
                "Action Planning", "8 min",
                "Define 2-3 concrete changes", "10%",
                ["Pick one work boundary to set", "Choose one daily practice", "Schedule it"],
                "Set calendar reminders for daily practices",
                "Create accountability with colleague",
            ),
        ],
        15, "I am learning, growing, and taking control",
    ),
]

STRESS_RELEASE_DAYS = [
    _day(
        1, "Physical Release", "Move stress out of your body",
        "Discharge stress through vigorous movement",
        "After work or morning routine",
        [
            _task(
                "Vigorous Exercise", "15 min",
                "High-intensity activity of choice", "25%",
                ["Choose activity you enjoy", "Go at 70% intensity", "Push yourself", "Breathe deeply"],
                "Gym, run, cycling, or home workout",
                "HIIT, dance, sports",
            ),
            _task(
                "Cold Reset", "2 min",
                "Cold splash or cold shower", "10%",
                ["Cold water on face or full shower", "Breathe through it", "Notice the reset"],
                "Splash face at sink if at office",
                "Breathing exercise",
            ),
        ],
        18, "My body is strong and capable",
    ),
    _day(
        2, "Recentering", "Return to calm",
        "Stabilize nervous system and find peace",
        "Lunch or evening",
        [
            _task(
                "Nature or Grounding", "15 min",
                "Be outside, preferably barefoot on earth", "18%",
                ["Go outside", "Barefoot if possible", "Engage senses", "Breathe naturally"],
                "Park walk during lunch, notice trees and sky",
                "Indoor meditation or indoor plants",
            ),
            _task(
                "Guided Meditation", "10 min",
                "Follow guided audio", "12%",
                ["Use app (Calm, Headspace, Insight Timer)", "Follow along", "Let thoughts pass"],
                "Use headphones at desk or after work",
                "Peaceful music and breathing",
            ),
        ],
        15, "I am calm and grounded",
    ),
    _day(
        3, "Planning & Prevention", "Build resilience",
        "Create sustainable practices",
        "Weekly planning session",
        [
            _task(
                "Trigger Identification", "10 min",
                "Identify stress sources you can control", "12%",
                ["List top 3 stressors", "Which can you control?", "Plan actions for those"],
                "Identify work-specific triggers and boundaries",
                "Discussion with manager/mentor",
            ),
            _task(
                "Daily Practice Commitment", "5 min",
                "Choose and schedule one practice", "8%",
                ["Pick 1 practice from days 1-2", "Schedule daily (same time)", "Set reminder", "Commit for 21 days"],
                "Morning or lunch break practice",
                "Weekly team wellness activity",
            ),
        ],
        12, "I am building a resilient, balanced life",
    ),
]

MOOD_ELEVATION_DAYS = [
    _day(
        1, "Activation", "Wake up and feel alive",
        "Break inertia and activate body and mind",
        "Morning routine",
        [
            _task(
                "Sunlight + Movement", "15 min",
                "Get natural light and move your body", "20%",
                ["Get outside in morning light", "Move for 10 minutes", "Breathe fresh air", "Feel the aliveness"],
                "Walk to work or morning jog, or stand by window",
                "Light therapy lamp + indoor movement",
            ),
            _task(
                "Cold Water Activation", "3 min",
                "Cold water splash", "10%",
                ["Splash face with cold water", "Feel the jolt", "Notice alertness increase"],
                "Cold shower or splash at sink",
                "Splash with cool water",
            ),
        ],
        15, "I am awake and alive",
    ),
    _day(
        2, "Connection", "Feel supported and valued",
        "Elevate mood through genuine connection",
        "Work relationships",
        [
            _task(
                "Meaningful Interaction", "20 min",
                "Quality time with someone you value", "20%",
                ["Connect with colleague or friend", "Have real conversation", "Share authentically", "Listen deeply"],
                "Lunch with colleague, team coffee, or phone call",
                "Online group, community activity",
            ),
            _task(
                "Acts of Kindness", "10 min",
                "Help someone or do something kind", "15%",
                ["Help colleague", "Buy coffee for someone", "Give genuine compliment"],
                "Help team member, give recognition, mentor junior",
                "Volunteer, community service",
            ),
        ],
        17, "I am connected and valued",
    ),
    _day(
        3, "Momentum", "Build positive energy",
        "Create momentum toward joy",
        "Weekly planning",
        [
            _task(
                "Small Wins Planning", "10 min",
                "Plan 3 small, enjoyable activities this week", "12%",
                ["List things you WANT to do", "Make them achievable", "Schedule them", "Anticipate enjoyment"],
                "Include work social events or hobbies",
                "Create vision board or goals",
            ),
            _task(
                "Gratitude & Vision", "10 min",
                "Gratitude + positive future vision", "12%",
                ["List 3 things you're grateful for", "Include small wins from this week", "Visualize good future", "Feel the shift"],
                "Include appreciation for colleagues/work wins",
                "Write thank you notes, appreciation emails",
            ),
        ],
        14, "I am building momentum and moving toward joy",
    ),
]

PREVENTATIVE_DAYS = [
    _day(
        1, "Interrupt", "Stop the spiral before it escalates",
        "Immediate de-escalation",
        "During work as needed",
        [
            _task(
                "Quick Reset", "10 min",
                "Immediate stress interrupt", "15%",
                ["Box breathing 5 min", "Quick walk 5 min", "Notice the shift"],
                "Do in office bathroom, quiet space, or during break",
                "Cold water splash, step outside",
            ),
            _task(
                "Boundary Setting", "5 min",
                "Set one boundary TODAY", "10%",
                ["Identify what's adding stress", "Say no to one non-essential thing", "Protect your energy"],
                "Decline a meeting, delegate a task, or set office hours",
                "Talk to manager about workload",
            ),
        ],
        12, "I am taking control now",
    ),
    _day(
        2, "Protect", "Build daily defenses",
        "Create daily practices",
        "Built into work day",
        [
            _task(
                "Morning Centering", "10 min",
                "Start day with intention", "12%",
                ["Before email/messages", "Breathing + intention", "Visualize handling day calmly"],
                "Before opening computer or arriving at office",
                "Journaling or meditation",
            ),
            _task(
                "Midday Reset", "5 min",
                "Quick reset in afternoon", "8%",
                ["Lunch time pause", "Quick walk or breathing", "Reset before afternoon"],
                "During lunch or 3pm slump",
                "Micro-meditation, stretch break",
            ),
        ],
        10, "I am protecting my peace",
    ),
    _day(
        3, "Sustain", "Build long-term resilience",
        "Design sustainable practices",
        "Weekly practice",
        [
            _task(
                "Weekly Review", "15 min",
                "Plan week with stress buffers", "8%",
                ["Look at week", "Identify peak stress times", "Schedule breaks before them", "Add 2-3 self-care activities"],
                "Friday afternoon or Sunday evening planning",
                "Use calendar to block recovery time",
            ),
            _task(
                "Practice Commitment", "5 min",
                "Commit to daily 15-min practice", "8%",
                ["Choose one practice", "Schedule daily", "Set phone reminder", "Track for 21 days"],
                "Calendar block, team accountability, or app reminder",
                "Team wellness challenge",
            ),
        ],
        8, "I am committed to my wellbeing",
    ),
]

BALANCED_DAYS = [
    _day(
        1, "Ground", "Find your center",
        "Baseline centering practice",
        "Anytime",
        [
            _task(
                "Grounding Meditation", "10 min",
                "5-4-3-2-1 sensory technique", "15%",
                ["5 things you see", "4 things you feel", "3 things you hear", "2 things you smell", "1 thing you taste"],
                "Can do at desk or break room",
                "Mindful walking",
            ),
            _task(
                "Breathing Practice", "5 min",
                "Simple box breathing", "10%",
                ["Inhale 4, hold 4, exhale 4, hold 4", "Repeat 5 times"],
                "Morning or before important meetings",
                "Other breathing techniques",
            ),
        ],
        12, "I am grounded and calm",
    ),
    _day(
        2, "Move", "Energize and reset",
        "Movement for mental clarity",
        "Work break or after work",
        [
            _task(
                "Mindful Movement", "15 min",
                "Yoga, walking, or stretching", "15%",
                ["Choose activity", "Move with intention", "Notice how you feel"],
                "Lunch walk or after-work yoga",
                "Dance, sports, or gym",
            ),
            _task(
                "Hydration & Nutrition", "5 min",
                "Nourish your body", "8%",
                ["Drink water", "Eat nutritious snack", "Notice energy shift"],
                "Mid-morning or afternoon snack",
                "Tea break with healthy options",
            ),
        ],
        11, "I am energized and clear",
    ),
    _day(
        3, "Reflect", "Plan your week",
        "Integration and planning",
        "Weekly planning",
        [
            _task(
                "Journaling", "10 min",
                "Reflect on week and feelings", "10%",
                ["What went well?", "What was challenging?", "What will I focus on next week?"],
                "Sunday evening or Friday afternoon",
                "Voice memo or discussion",
            ),
            _task(
                "Commitment", "5 min",
                "Choose one practice to continue", "7%",
                ["Pick favorite from days 1-2", "Schedule for next week", "Commit to daily practice"],
                "Calendar reminder or app",
                "Share commitment with colleague",
            ),
        ],
        9, "I am planning for wellbeing",
    ),
]

# ─────────────────────────────────────────────────────────────────
# Templates
# ─────────────────────────────────────────────────────────────────

DATA_DRIVEN_COMMON: Dict[str, Any] = {
    "duration": "3 days (30-60 min total)",
    "prerequisites": "Quiet space, commitment to 15-20 min daily",
    "tips": [
        "Progress over perfection - adapt to your schedule",
        "Track your mood before and after each session",
        "Repeat this monthly or when stress rises",
        "Combine with 20+ min movement for better results",
    ],
    "companyBenefits": ["Improved focus", "Better productivity", "Reduced burnout", "Enhanced wellbeing"],
    "followUp": "After day 3, maintain 1-2 daily practices. Repeat this challenge monthly.",
}

# description/overview are format strings filled with avg_stress, avg_mood and trend
TEMPLATES: Dict[str, Dict[str, Any]] = {
    HIGH_STRESS_LOW_MOOD: {
        "challengeName": "Deep Recovery: High Stress + Low Mood Reset",
        "difficulty": "medium",
        "description": (
            "Your data shows sustained high stress with low mood. This intensive plan "
            "focuses on nervous system reset and mood elevation."
        ),
        "overview": (
            "You've been experiencing average stress of {avg_stress:.1f}/5 with mood around "
            "{avg_mood:.1f}/5. This 3-day challenge combines physical release, emotional "
            "processing, and mood activation."
        ),
        "targetReduction": "30-40%",
        "totalExpectedReduction": 35,
        "workContext": "Can be done before/after work or during weekend",
        "pattern": "High stress + Low mood",
        "recommendation": "Intensive approach with nervous system reset + mood elevation",
        "days": INTENSIVE_DAYS,
    },
    HIGH_STRESS: {
        "challengeName": "Stress Release Intensive",
        "difficulty": "medium",
        "description": (
            "Your stress levels are elevated at {avg_stress:.1f}/5. This plan focuses on "
            "physical release and nervous system calming."
        ),
        "overview": (
            "Recent stress trend is {trend}. We're designing a focused 3-day intervention "
            "to discharge stress and build resilience."
        ),
        "targetReduction": "25-35%",
        "totalExpectedReduction": 30,
        "workContext": "Includes work-break compatible exercises and end-of-day rituals",
        "pattern": "High stress",
        "recommendation": "Physical release + nervous system reset",
        "days": STRESS_RELEASE_DAYS,
    },
    LOW_MOOD: {
        "challengeName": "Mood Elevation: Connection + Activation Challenge",
        "difficulty": "easy",
        "description": (
            "Your mood has been low recently at {avg_mood:.1f}/5. This plan combines "
            "movement, social connection, and gratitude."
        ),
        "overview": (
            "Let's focus on natural mood elevators: movement, sunlight, connection, and "
            "purpose. This 3-day challenge builds momentum toward joy."
        ),
        "targetReduction": "20-30%",
        "totalExpectedReduction": 25,
        "workContext": "Includes lunch break activities and social connections with colleagues",
        "pattern": "Low mood",
        "recommendation": "Activation + social connection + movement",
        "days": MOOD_ELEVATION_DAYS,
    },
    INCREASING_STRESS: {
        "challengeName": "Early Intervention: Stop Stress Spiral",
        "difficulty": "easy",
        "description": "Your stress is trending upward. Early intervention now prevents burnout later.",
        "overview": (
            "Your stress trend is {trend}. This 3-day challenge helps you interrupt the "
            "spiral with boundary-setting, daily practices, and stress awareness."
        ),
        "targetReduction": "15-25%",
        "totalExpectedReduction": 20,
        "workContext": "Quick wins that fit into busy schedules",
        "pattern": "Increasing stress",
        "recommendation": "Early intervention + boundary setting + daily practices",
        "days": PREVENTATIVE_DAYS,
    },
    LOW_ACTIVITY_OR_SLEEP: {
        "challengeName": "Energy & Restoration Challenge",
        "difficulty": "easy",
        "description": (
            "Your activity and sleep patterns suggest need for restoration. This plan "
            "restores energy through movement and sleep optimization."
        ),
        "overview": "We're focusing on sustainable energy through better sleep, movement, and daily rhythms.",
        "targetReduction": "20-25%",
        "totalExpectedReduction": 22,
        "workContext": "Focus on work schedule optimization",
        "pattern": "Low activity/sleep",
        "recommendation": "Movement + sleep + energy restoration",
        "days": BALANCED_DAYS,
    },
    DEFAULT: {
        "challengeName": "3-Day Wellness Foundation",
        "difficulty": "easy",
        "description": "A balanced 3-day introduction to stress recovery practices.",
        "overview": (
            "This foundational challenge teaches core wellness techniques: grounding, "
            "movement, and reflection."
        ),
        "targetReduction": "15-20%",
        "duration": "3 days (20-30 min per day)",
        "prerequisites": "Quiet space, commitment to 15 min daily",
        "totalExpectedReduction": 18,
        "successRate": "85%+",
        "workContext": "Designed for working professionals",
        "days": BALANCED_DAYS,
        "tips": [
            "Pick practices you enjoy - consistency matters",
            "Adapt timing to your schedule",
            "Track your mood before and after",
            "Share with colleagues for accountability",
        ],
        "companyBenefits": [
            "Improved focus",
            "Better decision-making",
            "Enhanced collaboration",
            "Reduced absenteeism",
        ],
        "followUp": "After day 3, choose 1-2 practices to continue daily. Repeat challenge monthly.",
    },
}


def task_id(day: int, index: int) -> str:
    """Stable identifier for the index-th task (1-based) of a day."""
    return f"d{day}-t{index}"


class ChallengeCatalog:
    """
    Read-only access to the challenge templates.
    """

    PATTERNS: Tuple[str, ...] = (
        HIGH_STRESS_LOW_MOOD,
        HIGH_STRESS,
        LOW_MOOD,
        INCREASING_STRESS,
        LOW_ACTIVITY_OR_SLEEP,
    )

    def patterns(self) -> List[str]:
        """Pattern names in selection priority order, Default last."""
        return list(self.PATTERNS) + [DEFAULT]

    def get(
        self,
        pattern: str,
        avg_stress: float = 0.0,
        avg_mood: float = 0.0,
        trend: str = "stable",
    ) -> Dict[str, Any]:
        """
        Build a challenge document from a template.

        Args:
            pattern: One of PATTERNS or "Default"
            avg_stress: Filled into the description/overview text
            avg_mood: Filled into the description/overview text
            trend: Filled into the description/overview text

        Returns:
            Independent copy of the template with task ids assigned

        Raises:
            KeyError: If the pattern is unknown
        """
        template = copy.deepcopy(TEMPLATES[pattern])
        values = {"avg_stress": avg_stress, "avg_mood": avg_mood, "trend": trend}

        template.pop("pattern", None)
        template.pop("recommendation", None)
        template["description"] = template["description"].format(**values)
        template["overview"] = template["overview"].format(**values)

        if pattern != DEFAULT:
            for key, value in DATA_DRIVEN_COMMON.items():
                template[key] = copy.deepcopy(value)
            template["successRate"] = "80-90%" if template["difficulty"] == "easy" else "70-80%"

        for day in template["days"]:
            for index, task in enumerate(day["tasks"], start=1):
                task["id"] = task_id(day["day"], index)

        return template

    def describe(self, pattern: str) -> Dict[str, str]:
        """Pattern label and rationale used in personalization metadata."""
        template = TEMPLATES[pattern]
        return {
            "pattern": template.get("pattern", "Balanced"),
            "recommendation": template.get("recommendation", "Grounding + movement + reflection"),
        }
