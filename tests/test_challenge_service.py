"""Unit tests for ChallengeService (lifecycle stored in the JSON document)."""

import json
import pytest

from conftest import FIXED_NOW, make_entries, make_provider
from common.utils.exceptions import ConflictException, NotFoundException, ValidationException
from mindmate.services.ai.llm_service import LLMService
from mindmate.services.challenges.catalog import DEFAULT, ChallengeCatalog
from mindmate.services.challenges.challenge_service import ChallengeService
from mindmate.services.challenges.generator import ChallengeGenerator


FIXED_MS = int(FIXED_NOW.timestamp() * 1000)


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def service(store, offline_llm, broadcaster, fixed_clock):
    return ChallengeService(
        store=store,
        generator=ChallengeGenerator(offline_llm),
        broadcaster=broadcaster,
        clock=fixed_clock,
    )


@pytest.fixture
def draft():
    challenge = ChallengeCatalog().get(DEFAULT)
    challenge["generatedBy"] = "Default"
    return challenge


def drain(subscription):
    events = []
    while not subscription.queue.empty():
        events.append(subscription.queue.get_nowait())
    return events


def read_file(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


# ─────────────────────────────────────────────────────────────────
# generate
# ─────────────────────────────────────────────────────────────────


class TestGenerate:
    @pytest.mark.asyncio
    async def test_no_history_gives_default(self, service, sample_user_id):
        challenge = await service.generate(sample_user_id)

        assert challenge["generatedBy"] == "Default"

    @pytest.mark.asyncio
    async def test_uses_stored_history(self, service, store, sample_user_id):
        async with store.transaction() as document:
            document[sample_user_id] = make_entries([(1, 5)] * 40)

        challenge = await service.generate(sample_user_id)

        assert challenge["generatedBy"] == "DataDriven"
        assert challenge["basedOnEntries"] == 30

    @pytest.mark.asyncio
    async def test_generate_does_not_persist(self, service, data_path, sample_user_id):
        await service.generate(sample_user_id)

        with pytest.raises(FileNotFoundError):
            read_file(data_path)


# ─────────────────────────────────────────────────────────────────
# start
# ─────────────────────────────────────────────────────────────────


class TestStart:
    @pytest.mark.asyncio
    async def test_creates_active_instance(self, service, store, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        assert instance["id"] == str(FIXED_MS)
        assert instance["name"] == "3-Day Wellness Foundation"
        assert instance["status"] == "active"
        assert instance["startTime"] == FIXED_MS
        assert instance["generatedBy"] == "Default"
        assert len(instance["days"]) == 3
        assert instance["days"][0]["completed"] is False
        assert instance["days"][0]["completedTime"] is None
        assert instance["days"][0]["tasks"][0] == {
            "taskId": "d1-t1",
            "name": draft["days"][0]["tasks"][0]["name"],
            "completed": False,
        }

        stored = (await store.read())["challenges"][sample_user_id]
        assert stored == [instance]

    @pytest.mark.asyncio
    async def test_ids_stay_unique_within_the_same_millisecond(self, service, draft, sample_user_id):
        first = await service.start(sample_user_id, draft)
        second = await service.start(sample_user_id, draft)

        assert second["id"] == str(int(first["id"]) + 1)

    @pytest.mark.asyncio
    async def test_reserved_user_id_is_rejected(self, service, draft):
        with pytest.raises(ValidationException) as exc:
            await service.start("dashboardData", draft)
        assert exc.value.code == "RESERVED_USER_ID"

    @pytest.mark.asyncio
    async def test_missing_user_id_is_rejected(self, service, draft):
        with pytest.raises(ValidationException) as exc:
            await service.start("", draft)
        assert exc.value.code == "USER_ID_REQUIRED"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [
        "x",
        ["x"],
        [{"day": 1, "tasks": ["Breathe"]}],
        [{"day": 1, "tasks": "Breathe"}],
        [{"day": 1, "tasks": []}, {"day": "1", "tasks": []}],
    ])
    async def test_malformed_days_are_rejected(self, service, store, sample_user_id, days):
        with pytest.raises(ValidationException) as exc:
            await service.start(sample_user_id, {"challengeName": "Bad", "days": days})

        assert exc.value.code == "INVALID_CHALLENGE"
        assert await store.read() == {}

    @pytest.mark.asyncio
    async def test_text_day_numbers_are_stored_as_integers(self, service, sample_user_id):
        draft = {"challengeName": "Reset", "days": [{"day": "1", "tasks": [{"name": "Walk"}]}, {"tasks": []}]}

        instance = await service.start(sample_user_id, draft)

        assert [d["day"] for d in instance["days"]] == [1, 2]
        assert instance["days"][0]["tasks"][0]["taskId"] == "d1-t1"

    @pytest.mark.asyncio
    async def test_ai_draft_with_text_tasks_can_be_completed(self, store, broadcaster, fixed_clock, sample_user_id):
        reply = json.dumps({
            "challengeName": "Reset",
            "days": [
                {"day": "1", "tasks": ["Breathe 4-7-8", "Walk"]},
                {"day": "2", "tasks": ["Journal"]},
            ],
        })
        llm = LLMService({"groq": make_provider("groq", reply=reply)})
        service = ChallengeService(store, ChallengeGenerator(llm), broadcaster, clock=fixed_clock)

        draft = await service.generate(sample_user_id)
        instance = await service.start(sample_user_id, draft)
        await service.update_task_progress(sample_user_id, instance["id"], 1, True, task_id="d1-t2")
        await service.complete_day(sample_user_id, instance["id"], 1)
        result = await service.complete_day(sample_user_id, instance["id"], 2)

        assert draft["generatedBy"] == "AI"
        assert instance["days"][0]["tasks"][1]["name"] == "Walk"
        assert result["allComplete"] is True
        assert result["challenge"]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_start_event_goes_to_owner_and_admins(self, service, broadcaster, draft, sample_user_id):
        owner = broadcaster.subscribe({"userId": sample_user_id})
        other = broadcaster.subscribe({"userId": "bob"})
        admin = broadcaster.subscribe({"userId": "carol", "isAdmin": True})

        instance = await service.start(sample_user_id, draft)

        owner_events = drain(owner)
        assert [e["type"] for e in owner_events] == ["connected", "start"]
        assert owner_events[1]["channel"] == "stress-recovery"
        assert owner_events[1]["challengeId"] == instance["id"]
        assert owner_events[1]["challengeName"] == "3-Day Wellness Foundation"
        assert [e["type"] for e in drain(other)] == ["connected"]
        assert [e["type"] for e in drain(admin)] == ["connected", "start"]


# ─────────────────────────────────────────────────────────────────
# Progress
# ─────────────────────────────────────────────────────────────────


class TestProgress:
    @pytest.mark.asyncio
    async def test_update_task_by_id(self, service, store, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        task = await service.update_task_progress(sample_user_id, instance["id"], 1, True, task_id="d1-t1")

        assert task["completed"] is True
        stored = (await store.read())["challenges"][sample_user_id][0]
        assert stored["days"][0]["tasks"][0]["completed"] is True

    @pytest.mark.asyncio
    async def test_update_task_by_name(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)
        name = instance["days"][1]["tasks"][0]["name"]

        task = await service.update_task_progress(sample_user_id, instance["id"], 2, True, task_name=name)

        assert task["taskId"] == "d2-t1"

    @pytest.mark.asyncio
    async def test_unknown_task(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        with pytest.raises(NotFoundException) as exc:
            await service.update_task_progress(sample_user_id, instance["id"], 1, True, task_id="d1-t99")
        assert exc.value.code == "TASK_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_task_reference_required(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        with pytest.raises(ValidationException):
            await service.update_task_progress(sample_user_id, instance["id"], 1, True)

    @pytest.mark.asyncio
    async def test_unknown_challenge_leaves_store_untouched(self, service, draft, data_path, sample_user_id):
        await service.start(sample_user_id, draft)
        before = read_file(data_path)

        with pytest.raises(NotFoundException) as exc:
            await service.complete_day(sample_user_id, "missing", 1)

        assert exc.value.code == "CHALLENGE_NOT_FOUND"
        assert exc.value.details["challengeId"] == "missing"
        assert read_file(data_path) == before

    @pytest.mark.asyncio
    async def test_unknown_day(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        with pytest.raises(NotFoundException) as exc:
            await service.complete_day(sample_user_id, instance["id"], 9)
        assert exc.value.code == "DAY_NOT_FOUND"


# ─────────────────────────────────────────────────────────────────
# Completion cascade
# ─────────────────────────────────────────────────────────────────


class TestCompleteDay:
    @pytest.mark.asyncio
    async def test_last_day_completes_challenge_once(
        self, service, store, broadcaster, draft, sample_user_id
    ):
        instance = await service.start(sample_user_id, draft)
        owner = broadcaster.subscribe({"userId": sample_user_id})

        results = [await service.complete_day(sample_user_id, instance["id"], day) for day in (1, 2, 3)]

        assert [r["allComplete"] for r in results] == [False, False, True]
        assert results[-1]["challenge"]["status"] == "completed"
        assert results[-1]["challenge"]["completedTime"] == FIXED_MS

        document = await store.read()
        records = document["dashboardData"][sample_user_id]["completedChallenges"]
        assert records == [{
            "challengeId": instance["id"],
            "name": "3-Day Wellness Foundation",
            "completedDate": FIXED_NOW.isoformat(),
            "completedTime": FIXED_MS,
            "daysCompleted": 3,
        }]

        events = [e["type"] for e in drain(owner)]
        assert events == ["connected", "complete"]

    @pytest.mark.asyncio
    async def test_completed_challenge_rejects_more_progress(self, service, store, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)
        for day in (1, 2, 3):
            await service.complete_day(sample_user_id, instance["id"], day)

        with pytest.raises(ConflictException) as exc:
            await service.complete_day(sample_user_id, instance["id"], 3)

        assert exc.value.code == "CHALLENGE_NOT_ACTIVE"
        records = (await store.read())["dashboardData"][sample_user_id]["completedChallenges"]
        assert len(records) == 1


# ─────────────────────────────────────────────────────────────────
# Forced transitions
# ─────────────────────────────────────────────────────────────────


class TestTerminate:
    @pytest.mark.asyncio
    async def test_discard(self, service, broadcaster, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)
        owner = broadcaster.subscribe({"userId": sample_user_id})

        challenge = await service.discard_challenge(sample_user_id, instance["id"])

        assert challenge["status"] == "discarded"
        assert challenge["discardedTime"] == FIXED_MS
        assert [e["type"] for e in drain(owner)] == ["connected", "discard"]

    @pytest.mark.asyncio
    async def test_discarded_challenge_is_final(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)
        await service.discard_challenge(sample_user_id, instance["id"])

        with pytest.raises(ConflictException):
            await service.update_task_progress(sample_user_id, instance["id"], 1, True, task_id="d1-t1")
        with pytest.raises(ConflictException):
            await service.complete_challenge(sample_user_id, instance["id"])

    @pytest.mark.asyncio
    async def test_forced_completion_adds_no_dashboard_record(self, service, draft, sample_user_id):
        instance = await service.start(sample_user_id, draft)

        challenge = await service.complete_challenge(sample_user_id, instance["id"])

        assert challenge["status"] == "completed"
        dashboard = await service.dashboard(sample_user_id)
        assert dashboard == {"completedChallenges": [], "totalCompleted": 1, "inProgress": 0}


# ─────────────────────────────────────────────────────────────────
# Views
# ─────────────────────────────────────────────────────────────────


class TestViews:
    @pytest.mark.asyncio
    async def test_list_active(self, service, draft, sample_user_id):
        first = await service.start(sample_user_id, draft)
        await service.start(sample_user_id, draft)
        await service.discard_challenge(sample_user_id, first["id"])

        result = await service.list_active(sample_user_id)

        assert len(result["active"]) == 1
        assert result["total"] == 2
        assert result["completed"] == 0

    @pytest.mark.asyncio
    async def test_history_limit(self, service, draft, sample_user_id):
        started = [await service.start(sample_user_id, draft) for _ in range(12)]

        history = await service.list_history(sample_user_id)

        assert len(history) == 10
        assert history[-1]["id"] == started[-1]["id"]
        assert await service.list_history(sample_user_id, 0) == []
        assert len(await service.list_history(sample_user_id, 3)) == 3

    @pytest.mark.asyncio
    async def test_views_for_unknown_user(self, service):
        assert await service.list_active("nobody") == {"active": [], "total": 0, "completed": 0}
        assert await service.dashboard("nobody") == {
            "completedChallenges": [],
            "totalCompleted": 0,
            "inProgress": 0,
        }
