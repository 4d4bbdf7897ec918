"""
Common library for reusable infrastructure components.

- database: Whole-document store (JSON file or MongoDB via Beanie)
- ai: Pluggable LLM providers (Groq, OpenAI, Claude)
- utils: Standard responses and HTTP exceptions
- config: Base settings class
"""

from common.database import DocumentStore, JsonFileDocumentStore, MongoDocumentStore, MongoDB
from common.ai import AIProvider, ClaudeProvider, OpenAIProvider
from common.utils import (
    success_response,
    error_response,
    APIException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "DocumentStore",
    "JsonFileDocumentStore",
    "MongoDocumentStore",
    "MongoDB",
    # AI
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
