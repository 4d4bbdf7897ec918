"""
Mind Mate Schemas.

Pydantic models for request/response validation.
"""

from mindmate.schemas.mood import *
from mindmate.schemas.stress_recovery import *
from mindmate.schemas.alerts import *
from mindmate.schemas.recommendations import *
from mindmate.schemas.chat import *
from mindmate.schemas.auth import *
