"""
Recovery challenge services - catalog, selection, generation and lifecycle.
"""

from mindmate.services.challenges.catalog import ChallengeCatalog, task_id
from mindmate.services.challenges.selector import ChallengeSelector
from mindmate.services.challenges.generator import ChallengeGenerator, validate_challenge
from mindmate.services.challenges.challenge_service import ChallengeService

__all__ = [
    "ChallengeCatalog",
    "task_id",
    "ChallengeSelector",
    "ChallengeGenerator",
    "validate_challenge",
    "ChallengeService",
]
