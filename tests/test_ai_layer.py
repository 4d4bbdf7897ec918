"""Unit tests for LLM provider chaining and AI fallback helpers."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from conftest import make_entries, make_provider
from common.ai import MalformedUpstreamResponse, UpstreamUnavailableError
from mindmate.services.ai.fallback import parse_json_object, try_ai_then_fallback
from mindmate.services.ai.llm_service import (
    FALLBACK_REPLIES,
    SUMMARY_SYSTEM_PROMPT,
    LLMService,
    build_llm_service,
)


# ─────────────────────────────────────────────────────────────────
# parse_json_object
# ─────────────────────────────────────────────────────────────────


class TestParseJsonObject:
    def test_object_surrounded_by_prose(self):
        text = 'Sure! Here it is:\n```json\n{"a": 1, "b": {"c": [2]}}\n```\nHope this helps.'

        assert parse_json_object(text) == {"a": 1, "b": {"c": [2]}}

    def test_raw_newlines_inside_strings_are_cleaned(self):
        text = '{"summary": "line one\nline two", "n": 3}'

        assert parse_json_object(text) == {"summary": "line one line two", "n": 3}

    @pytest.mark.parametrize("text", ["", "no braces at all", "} backwards {", "{broken: json,}"])
    def test_unrecoverable_text(self, text):
        with pytest.raises(MalformedUpstreamResponse):
            parse_json_object(text)


# ─────────────────────────────────────────────────────────────────
# try_ai_then_fallback
# ─────────────────────────────────────────────────────────────────


class TestTryAiThenFallback:
    @pytest.mark.asyncio
    async def test_primary_result_is_returned(self):
        fallback = MagicMock(return_value="fallback")

        result = await try_ai_then_fallback(AsyncMock(return_value="ai"), fallback)

        assert result == "ai"
        fallback.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_primary_uses_fallback(self):
        assert await try_ai_then_fallback(None, lambda: "fallback") == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        UpstreamUnavailableError("down"),
        MalformedUpstreamResponse("bad"),
        KeyError("days"),
    ])
    async def test_any_failure_uses_fallback(self, error):
        primary = AsyncMock(side_effect=error)

        assert await try_ai_then_fallback(primary, lambda: "fallback") == "fallback"
        primary.assert_awaited_once()


# ─────────────────────────────────────────────────────────────────
# LLMService
# ─────────────────────────────────────────────────────────────────


class TestLLMService:
    @pytest.mark.asyncio
    async def test_first_working_provider_wins(self):
        groq = make_provider("groq", error=RuntimeError("rate limited"))
        openai = make_provider("openai", reply="  hello  ")
        claude = make_provider("claude", reply="unused")
        service = LLMService({"claude": claude, "openai": openai, "groq": groq})

        assert await service.generate_text("hi") == "hello"
        groq.chat.assert_awaited_once()
        claude.chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_reply_moves_to_next_provider(self):
        service = LLMService({
            "groq": make_provider("groq", reply="   "),
            "openai": make_provider("openai", reply="answer"),
        })

        assert await service.generate_text("hi") == "answer"

    @pytest.mark.asyncio
    async def test_all_providers_failing_raises(self):
        service = LLMService({"groq": make_provider("groq", error=RuntimeError("x"))})

        with pytest.raises(UpstreamUnavailableError):
            await service.generate_text("hi")

    @pytest.mark.asyncio
    async def test_named_preference_restricts_chain(self):
        groq = make_provider("groq", reply="from groq")
        claude = make_provider("claude", reply="from claude")
        service = LLMService({"groq": groq, "claude": claude}, preferred="claude")

        assert await service.generate_text("hi") == "from claude"
        groq.chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_chat_reply_falls_back_to_canned_text(self, offline_llm):
        assert await offline_llm.generate_chat_reply("I feel tired") in FALLBACK_REPLIES

    @pytest.mark.asyncio
    async def test_summary_uses_summary_prompt(self):
        provider = make_provider("groq", reply="Overview: fine")
        service = LLMService({"groq": provider})

        summary = await service.generate_summary(make_entries([(3, 2), (1, 4)]))

        assert summary == "Overview: fine"
        kwargs = provider.chat.call_args.kwargs
        assert kwargs["system_prompt"] == SUMMARY_SYSTEM_PROMPT
        assert kwargs["temperature"] == 0.5
        assert "Entry 2: Mood 1/5, Stress 4/5" in provider.chat.call_args.args[0]

    @pytest.mark.asyncio
    async def test_summary_fallback_mentions_entry_count(self, offline_llm):
        summary = await offline_llm.generate_summary(make_entries([(3, 2)] * 4))

        assert "last 4 entries" in summary

    def test_provider_info(self):
        service = LLMService({"openai": make_provider("openai", model="gpt-4o-mini")})

        assert service.provider_info() == {
            "provider": "openai",
            "model": "gpt-4o-mini",
            "status": "connected",
            "apiKeyConfigured": True,
        }

    def test_provider_info_without_providers(self, offline_llm):
        info = offline_llm.provider_info()

        assert info["provider"] == "fallback"
        assert info["status"] == "disconnected"
        assert offline_llm.is_available() is False


class TestBuildLLMService:
    def test_no_keys_gives_offline_service(self):
        settings = MagicMock(
            GROQ_API_KEY=None,
            OPENAI_API_KEY=None,
            CLAUDE_API_KEY=None,
            LLM_PROVIDER="auto",
        )

        assert build_llm_service(settings).is_available() is False
