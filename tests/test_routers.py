"""Tests for router handlers and request schemas, called without an HTTP server."""

import json
import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from common.utils.exceptions import BadRequestException, UnauthorizedException
from mindmate.routers import alerts as alerts_routes
from mindmate.routers import auth as auth_routes
from mindmate.routers import google_fit as google_fit_routes
from mindmate.routers import mood as mood_routes
from mindmate.routers import recommendations as recommendation_routes
from mindmate.routers import stress_recovery as stress_recovery_routes
from mindmate.schemas.alerts import TeamAlertRequest
from mindmate.schemas.auth import LoginRequest
from mindmate.schemas.mood import MoodEntryRequest
from mindmate.schemas.recommendations import RecommendationRequest
from mindmate.schemas.stress_recovery import StartChallengeRequest
from mindmate.services.auth.login_service import LoginService


# ─────────────────────────────────────────────────────────────────
# Request schemas
# ─────────────────────────────────────────────────────────────────


class TestMoodEntryRequest:
    @pytest.mark.parametrize("values", [
        {"mood": "3", "stress": 1},
        {"mood": 3.0, "stress": 1},
        {"mood": 5, "stress": 1},
        {"mood": 2, "stress": 6},
        {"stress": 1},
    ])
    def test_rejects_invalid_values(self, values):
        with pytest.raises(ValidationError):
            MoodEntryRequest(**values)

    def test_accepts_bounds(self):
        body = MoodEntryRequest(mood=0, stress=5, feeling="tired")

        assert body.userId is None
        assert body.context is None


class TestOtherSchemas:
    def test_team_alert_level(self):
        with pytest.raises(ValidationError):
            TeamAlertRequest(teamId="t1", message="x", level="panic")

    def test_recommendation_mode(self):
        assert RecommendationRequest().mode == "full"
        with pytest.raises(ValidationError):
            RecommendationRequest(mode="turbo")


# ─────────────────────────────────────────────────────────────────
# Mood routes
# ─────────────────────────────────────────────────────────────────


class TestMoodRoutes:
    @pytest.mark.asyncio
    async def test_submit_requires_user_id(self):
        mood_service = MagicMock()
        mood_service.add_entry = AsyncMock()

        with pytest.raises(UnauthorizedException):
            await mood_routes.submit_mood(body=MoodEntryRequest(mood=3, stress=1), mood_service=mood_service, userId=None)

        mood_service.add_entry.assert_not_called()

    @pytest.mark.asyncio
    async def test_submit_accepts_query_user_id(self):
        entry = {"mood": 3, "stress": 1}
        mood_service = MagicMock()
        mood_service.add_entry = AsyncMock(return_value=[entry])

        response = await mood_routes.submit_mood(
            body=MoodEntryRequest(mood=3, stress=1),
            mood_service=mood_service,
            userId="alice",
        )

        assert response["success"] is True
        assert response["data"]["entries"] == [entry]
        assert mood_service.add_entry.call_args.args == ("alice",)

    @pytest.mark.asyncio
    async def test_summary_requires_user_id(self, offline_llm):
        with pytest.raises(UnauthorizedException):
            await mood_routes.get_summary(mood_service=MagicMock(), llm_service=offline_llm, userId=None)


# ─────────────────────────────────────────────────────────────────
# Stress recovery / recommendations
# ─────────────────────────────────────────────────────────────────


class TestChallengeRoutes:
    @pytest.mark.asyncio
    async def test_start_message(self):
        service = MagicMock()
        service.start = AsyncMock(return_value={"id": "c1"})

        response = await stress_recovery_routes.start_challenge(
            body=StartChallengeRequest(userId="alice", challenge={"title": "Reset"}),
            challenge_service=service,
        )

        assert response == {
            "success": True,
            "data": {"challengeId": "c1", "challenge": {"id": "c1"}},
            "message": "Challenge started",
        }

    @pytest.mark.asyncio
    async def test_recommendations_default_to_anonymous(self):
        service = MagicMock()
        service.generate = AsyncMock(return_value={"generatedBy": "heuristic"})

        response = await recommendation_routes.generate_recommendations(
            body=RecommendationRequest(mode="lightweight"),
            recommendation_service=service,
        )

        assert response["data"] == {"recommendations": {"generatedBy": "heuristic"}}
        assert service.generate.call_args.args == ("anonymous",)
        assert service.generate.call_args.kwargs["mode"] == "lightweight"


# ─────────────────────────────────────────────────────────────────
# Alerts
# ─────────────────────────────────────────────────────────────────


class TestAlertRoutes:
    @pytest.mark.asyncio
    async def test_stream_response(self, broadcaster):
        response = await alerts_routes.stream_team_alerts(
            broadcaster=broadcaster,
            userId="alice",
            teamId="t1",
            isAdmin="TRUE",
        )

        assert response.media_type == "text/event-stream"
        assert response.headers["Cache-Control"] == "no-cache, no-transform"
        assert response.headers["X-Accel-Buffering"] == "no"
        assert broadcaster.subscriber_count == 1

        subscription = next(iter(broadcaster._subscribers.values()))
        assert subscription.meta == {"userId": "alice", "teamId": "t1", "isAdmin": True}

    @pytest.mark.asyncio
    async def test_publish(self, broadcaster):
        broadcaster.subscribe({"userId": "alice", "teamId": "t1"})

        response = await alerts_routes.publish_team_alert(
            body=TeamAlertRequest(teamId="t1", message="Stand up and stretch"),
            broadcaster=broadcaster,
        )

        assert response == {"success": True, "data": {"delivered": 1}}


# ─────────────────────────────────────────────────────────────────
# Auth / Google Fit
# ─────────────────────────────────────────────────────────────────


class TestAuthRoutes:
    @pytest.mark.asyncio
    async def test_login(self):
        response = await auth_routes.login(
            body=LoginRequest(email="demo@mindmate.com", password="password123"),
            login_service=LoginService(),
        )

        assert response["message"] == "Login successful"
        assert response["data"]["userId"] == "demo"

    @pytest.mark.asyncio
    async def test_login_rejects_bad_password(self):
        with pytest.raises(UnauthorizedException):
            await auth_routes.login(
                body=LoginRequest(email="demo@mindmate.com", password="wrong"),
                login_service=LoginService(),
            )


class TestGoogleFitRoutes:
    @pytest.mark.asyncio
    async def test_heart_points_without_token(self):
        response = await google_fit_routes.get_heart_points(
            fit_service=MagicMock(),
            accessToken=None,
            refreshToken=None,
            days=1,
        )

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["success"] is False
        assert body["error"]["code"] == "ACCESS_TOKEN_REQUIRED"
        assert body["data"]["hasData"] is False

    @pytest.mark.asyncio
    async def test_steps_without_token(self):
        with pytest.raises(BadRequestException) as exc:
            await google_fit_routes.get_steps(fit_service=MagicMock(), accessToken=None, refreshToken=None, days=1)

        assert exc.value.code == "ACCESS_TOKEN_REQUIRED"

    @pytest.mark.asyncio
    async def test_target_steps(self):
        fit_service = MagicMock()
        fit_service.target_steps.return_value = {"targetSteps": 10000, "dailyTarget": 10000}

        response = await google_fit_routes.get_target_steps(fit_service=fit_service)

        assert response["data"]["targetSteps"] == 10000
