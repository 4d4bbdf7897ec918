"""
Configuration module - Base settings class for environment configuration.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
