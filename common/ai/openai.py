"""
OpenAI-compatible chat provider implementation.

Provides chat completions using the OpenAI SDK. Groq exposes
the same API, so it is served by this provider with a different base URL.

Example:
    from common.ai import OpenAIProvider

    openai = OpenAIProvider(api_key="your-api-key", model="gpt-4o-mini")
    response = await openai.chat(
        message="Hello, how are you?",
        system_prompt="You are a helpful assistant."
    )

    groq = OpenAIProvider(
        api_key="your-groq-key",
        model="llama-3.1-8b-instant",
        base_url=GROQ_BASE_URL,
        name="groq",
    )
"""

from typing import Optional, List, Dict, Any

from common.ai.base import AIProvider

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class OpenAIProvider(AIProvider):
    """
    OpenAI GPT provider.

    Uses the OpenAI async client for API calls.
    Works with any OpenAI-compatible endpoint through ``base_url``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        name: str = "openai",
        max_retries: int = 2,
        timeout: float = 60.0,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI (or Groq) API key
            model: Chat model to use (default: gpt-4o-mini)
            base_url: Alternate API root for OpenAI-compatible services
            name: Provider name reported in logs and provider info
            max_retries: Number of retries for failed requests
            timeout: Request timeout in seconds
        """
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ImportError(
                "openai package is required for OpenAI and Groq. "
                "Install with: pip install openai"
            )

        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=max_retries,
            timeout=timeout,
        )
        self.model = model
        self.name = name

    def _build_messages(
        self,
        message: str,
        system_prompt: Optional[str],
        conversation_history: Optional[List[Dict[str, str]]],
    ) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        if conversation_history:
            messages.extend(conversation_history)

        messages.append({"role": "user", "content": message})
        return messages

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_history: Optional[List[Dict[str, str]]] = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send message and get response from the chat completions API."""
        params: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "messages": self._build_messages(message, system_prompt, conversation_history),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        for key in ["stop", "top_p", "seed"]:
            if key in kwargs:
                params[key] = kwargs[key]

        response = await self.client.chat.completions.create(**params)
        return (response.choices[0].message.content or "").strip()
