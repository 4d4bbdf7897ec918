"""
LLM Service

Routes prompts through the configured provider chain and supplies canned
replies when every provider fails.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from common.ai import (
    AIProvider,
    ClaudeProvider,
    GROQ_BASE_URL,
    OpenAIProvider,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

PROVIDER_ORDER = ("groq", "openai", "claude")

SYSTEM_PROMPT = """You are Mind Mate, an empathetic workplace wellness assistant.
Your role is to:
- Listen actively and validate emotions
- Provide supportive, non-medical guidance
- Keep responses concise (under 70 words) and warm
- Suggest breathing exercises or brief breaks when appropriate
- Never provide medical diagnosis or treatment
- Maintain a calm, understanding tone
- Focus on emotional wellbeing and workplace stress management

IMPORTANT FORMATTING GUIDELINES:
- If the user asks for a list, use markdown bullet points (-)
- If the user asks for numbered steps, use markdown ordered lists (1. 2. 3.)
- If the user asks for a table/comparison, use markdown tables (| header | header |)
- Use **bold** for emphasis and important keywords
- Use clear markdown formatting for readability
- Keep markdown simple and clean
- Always maintain empathetic tone even in formatted content"""

SUMMARY_SYSTEM_PROMPT = """You are a wellness insights analyst. Analyze mood entries and provide a 4-part summary:
1. Overview (1-2 sentences about overall pattern)
2. Trends (observable patterns or changes)
3. Suggestions (practical, brief wellness tips)
4. Resources (encourage use of breathing exercise or break)

Keep each section to 1-2 sentences. Be supportive and non-clinical."""

FALLBACK_REPLIES = [
    "Thanks for sharing, I hear you. Take a moment to notice your breath. If you'd like, "
    "tell me more and I can help reflect on what might help next.",
    "It sounds like you're going through something. Remember, it's okay to feel this way. "
    "What's one small thing that usually helps you feel better?",
    "I appreciate you opening up. Your feelings are valid. Consider taking a short break, "
    "even 2 minutes of deep breathing can help reset your mind.",
    "Thank you for trusting me with this. You're doing great by checking in with yourself. "
    "What would feel most supportive right now?",
]

FALLBACK_SUMMARY = (
    "Overview: I reviewed your last {count} entries and noticed some patterns in your mood "
    "and stress levels.\n\n"
    "Trends: Overall mood shows gentle fluctuations; stress has occasional spikes. You seem "
    "to have good and challenging moments throughout your week.\n\n"
    "Suggestions: Try short breathing breaks (2-3 min) during peak stress times. A quick walk "
    "or stretch can help reset your mind and energy.\n\n"
    "Resources: A guided breathing exercise is available in the app. Use it anytime you need "
    "to pause and recenter."
)

CHAT_MAX_TOKENS = 500
SUMMARY_MAX_TOKENS = 600
SUMMARY_WINDOW = 12


class LLMService:
    """
    Ordered chain of AI providers.

    With preferred="auto" providers are tried groq, openai, claude; a
    named preference restricts the chain to that provider.
    """

    def __init__(self, providers: Dict[str, AIProvider], preferred: str = "auto"):
        """
        Initialize LLMService.

        Args:
            providers: Configured providers keyed by name (groq/openai/claude)
            preferred: "auto" or a single provider name
        """
        self._providers = providers
        self._preferred = (preferred or "auto").lower()

    def _chain(self) -> List[AIProvider]:
        names = PROVIDER_ORDER if self._preferred == "auto" else (self._preferred,)
        return [self._providers[name] for name in names if name in self._providers]

    def is_available(self) -> bool:
        return bool(self._chain())

    async def generate_text(
        self,
        prompt: str,
        max_tokens: int = CHAT_MAX_TOKENS,
        system_prompt: Optional[str] = SYSTEM_PROMPT,
        temperature: float = 0.7,
    ) -> str:
        """
        Get the first non-empty reply from the provider chain.

        Raises:
            UpstreamUnavailableError: If no provider produced a reply
        """
        for provider in self._chain():
            try:
                logger.info(f"[{provider.name}] Attempting to generate reply...")
                reply = await provider.chat(
                    prompt,
                    system_prompt=system_prompt,
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
            except Exception as e:
                logger.warning(f"[{provider.name}] Request failed: {e}")
                continue

            if reply and reply.strip():
                logger.info(f"[{provider.name}] Reply received ({len(reply)} chars)")
                return reply.strip()
            logger.warning(f"[{provider.name}] Empty reply")

        raise UpstreamUnavailableError("No LLM provider produced a reply")

    async def generate_chat_reply(self, message: str) -> str:
        """Chat reply, or one of the canned supportive replies."""
        try:
            return await self.generate_text(message, max_tokens=CHAT_MAX_TOKENS)
        except UpstreamUnavailableError:
            logger.info("Using fallback chat reply")
            return random.choice(FALLBACK_REPLIES)

    async def generate_summary(self, entries: Sequence[Dict[str, Any]]) -> str:
        """Four-part written summary of recent mood entries."""
        entries = list(entries)
        lines = [
            f"Entry {i}: Mood {e.get('mood')}/5, Stress {e.get('stress')}/5"
            for i, e in enumerate(entries[-SUMMARY_WINDOW:], start=1)
        ]
        prompt = "Please analyze these mood entries:\n\n" + "\n".join(lines)

        try:
            return await self.generate_text(
                prompt,
                max_tokens=SUMMARY_MAX_TOKENS,
                system_prompt=SUMMARY_SYSTEM_PROMPT,
                temperature=0.5,
            )
        except UpstreamUnavailableError:
            logger.info("Using fallback summary")
            return FALLBACK_SUMMARY.format(count=len(entries))

    def provider_info(self) -> Dict[str, Any]:
        """Active provider, model and whether it is configured."""
        chain = self._chain()
        if chain:
            active = chain[0]
            return {
                "provider": active.name,
                "model": active.model,
                "status": "connected",
                "apiKeyConfigured": True,
            }

        provider = "fallback" if self._preferred == "auto" else self._preferred
        return {
            "provider": provider,
            "model": None,
            "status": "disconnected",
            "apiKeyConfigured": False,
        }


def build_llm_service(settings) -> LLMService:
    """
    Create providers for every API key present in settings.

    Args:
        settings: Application settings (GROQ_*, OPENAI_*, CLAUDE_*, LLM_PROVIDER)
    """
    providers: Dict[str, AIProvider] = {}

    if settings.GROQ_API_KEY:
        providers["groq"] = OpenAIProvider(
            api_key=settings.GROQ_API_KEY,
            model=settings.GROQ_MODEL,
            base_url=GROQ_BASE_URL,
            name="groq",
        )
        logger.info(f"Groq AI integration enabled (model: {settings.GROQ_MODEL})")

    if settings.OPENAI_API_KEY:
        providers["openai"] = OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
        )
        logger.info(f"OpenAI integration enabled (model: {settings.OPENAI_MODEL})")

    if settings.CLAUDE_API_KEY:
        providers["claude"] = ClaudeProvider(
            api_key=settings.CLAUDE_API_KEY,
            model=settings.CLAUDE_MODEL,
        )
        logger.info(f"Claude integration enabled (model: {settings.CLAUDE_MODEL})")

    if not providers:
        logger.warning("No LLM API keys configured, using fallback responses")

    return LLMService(providers, preferred=settings.LLM_PROVIDER)
