"""
Error types raised by the AI layer.

These never reach HTTP clients directly: callers catch them at the
orchestration boundary and degrade to deterministic output.
"""


class AIProviderError(Exception):
    """Base class for LLM failures."""


class UpstreamUnavailableError(AIProviderError):
    """No configured provider produced a reply (missing key, timeout, API error)."""


class MalformedUpstreamResponse(AIProviderError):
    """The provider replied, but not with the structure we asked for."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
