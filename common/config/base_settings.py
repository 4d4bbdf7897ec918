"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        GOOGLE_CLIENT_ID: str = ""

    settings = Settings()
    print(settings.DOCUMENT_STORE)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # Storage Settings
    # ==========================================================================
    DOCUMENT_STORE: str = "json"  # "json" (single file) or "mongodb"
    DATA_FILE_PATH: str = "data/data.json"

    # MongoDB Settings (used when DOCUMENT_STORE = "mongodb")
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "mindmate"
    MONGODB_STATE_KEY: str = "default"

    # ==========================================================================
    # AI Settings
    # ==========================================================================
    LLM_PROVIDER: str = "auto"  # "auto", "groq", "openai" or "claude"

    # Groq Settings (OpenAI-compatible API)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # OpenAI Settings
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Claude Settings
    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-3-5-haiku-latest"

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # CORS Settings
    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = False

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        """Parse CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def uses_mongodb(self) -> bool:
        """Check whether state is kept in MongoDB instead of the JSON file."""
        return self.DOCUMENT_STORE.lower() == "mongodb"

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if self.DOCUMENT_STORE.lower() not in ("json", "mongodb"):
            errors.append("DOCUMENT_STORE must be 'json' or 'mongodb'")

        if self.LLM_PROVIDER.lower() not in ("auto", "groq", "openai", "claude"):
            errors.append("LLM_PROVIDER must be one of auto, groq, openai, claude")

        if self.LLM_PROVIDER == "groq" and not self.GROQ_API_KEY:
            errors.append("GROQ_API_KEY is required when using Groq")

        if self.LLM_PROVIDER == "openai" and not self.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY is required when using OpenAI")

        if self.LLM_PROVIDER == "claude" and not self.CLAUDE_API_KEY:
            errors.append("CLAUDE_API_KEY is required when using Claude")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
