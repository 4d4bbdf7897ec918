"""
Challenge Service

Lifecycle of recovery challenges: generation, start, per-task and per-day
progress, forced completion and discard, plus the read-only views used by
the dashboard.

Status transitions:
    active -> completed   (last day completed, or forced)
    active -> discarded
Completed and discarded challenges are final.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from common.database import DocumentStore
from common.utils.exceptions import ConflictException, NotFoundException, ValidationException
from mindmate.services.alerts.broadcaster import AlertBroadcaster
from mindmate.services.challenges.catalog import task_id as make_task_id
from mindmate.services.challenges.generator import ChallengeGenerator, day_number as parse_day_number
from mindmate.services.document_layout import (
    dashboard_entry,
    mood_entries,
    user_challenges,
    validate_user_id,
)
from mindmate.services.metrics.user_context import UserContext

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_DISCARDED = "discarded"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


class ChallengeService:
    """
    Orchestrates challenge state stored in the application document.

    Every mutation runs inside one store transaction. Broadcast events are
    published after the transaction commits.
    """

    CHANNEL = "stress-recovery"

    def __init__(
        self,
        store: DocumentStore,
        generator: ChallengeGenerator,
        broadcaster: AlertBroadcaster,
        history_window: int = 30,
        history_limit: int = 10,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize ChallengeService.

        Args:
            store: Document store holding all application state
            generator: AI/data-driven challenge generator
            broadcaster: SSE fan-out for lifecycle events
            history_window: Mood entries considered when generating
            history_limit: Default size of the history view
            clock: Returns the current UTC time
        """
        self._store = store
        self._generator = generator
        self._broadcaster = broadcaster
        self._history_window = history_window
        self._history_limit = history_limit
        self._clock = clock or _utc_now

    # ─────────────────────────────────────────────────────────────────
    # Generation
    # ─────────────────────────────────────────────────────────────────

    async def generate(
        self,
        user_id: str,
        work_context: Optional[str] = None,
        company_role: Optional[str] = None,
        google_fit: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Draft a challenge from the user's recent mood history.

        Nothing is persisted; the client calls start() with the draft.
        """
        document = await self._store.read()
        history = mood_entries(document, user_id)[-self._history_window:]
        context = UserContext.build(history, google_fit, work_context, company_role)
        return await self._generator.generate(history, context)

    # ─────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────

    async def start(self, user_id: str, draft: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist a new active challenge built from a draft.

        Args:
            user_id: Owner of the challenge
            draft: Challenge as returned by generate()

        Returns:
            The stored challenge instance
        """
        validate_user_id(user_id)
        if not isinstance(draft, dict):
            raise ValidationException("challenge must be an object", code="INVALID_CHALLENGE")

        now = self._clock()

        async with self._store.transaction() as document:
            challenges = user_challenges(document, user_id, create=True)
            taken = {c.get("id") for c in challenges}

            stamp = _millis(now)
            while str(stamp) in taken:
                stamp += 1

            instance = {
                "id": str(stamp),
                "name": draft.get("challengeName") or "Challenge",
                "startTime": _millis(now),
                "status": STATUS_ACTIVE,
                "days": self._seed_days(draft.get("days") or []),
                "generatedBy": draft.get("generatedBy") or "unknown",
            }
            challenges.append(instance)

        logger.info(f"Challenge started: {instance['name']} ({instance['id']}) for {user_id}")
        self._publish("start", user_id, instance, challengeName=instance["name"])
        return instance

    async def update_task_progress(
        self,
        user_id: str,
        challenge_id: str,
        day_number: int,
        completed: bool,
        task_id: Optional[str] = None,
        task_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Set a task's completed flag.

        The task is matched by taskId, or by name for older clients.

        Raises:
            NotFoundException: Challenge, day or task missing
            ConflictException: Challenge is no longer active
        """
        validate_user_id(user_id)
        if not task_id and not task_name:
            raise ValidationException("taskId or taskName required", code="TASK_REQUIRED")

        async with self._store.transaction() as document:
            challenge = self._find_challenge(document, user_id, challenge_id)
            self._require_active(challenge)
            day = self._find_day(challenge, day_number)
            task = self._find_task(challenge, day, task_id, task_name)
            task["completed"] = bool(completed)

        logger.info(f"Task updated: day {day_number}, {task['name']} = {bool(completed)}")
        return task

    async def complete_day(self, user_id: str, challenge_id: str, day_number: int) -> Dict[str, Any]:
        """
        Mark a day complete; completing the last open day completes the challenge.

        Returns:
            {"challenge": instance, "allComplete": bool}
        """
        validate_user_id(user_id)
        now = self._clock()

        async with self._store.transaction() as document:
            challenge = self._find_challenge(document, user_id, challenge_id)
            self._require_active(challenge)
            day = self._find_day(challenge, day_number)

            day["completed"] = True
            day["completedTime"] = _millis(now)

            all_complete = all(d.get("completed") for d in challenge["days"])
            if all_complete:
                challenge["status"] = STATUS_COMPLETED
                challenge["completedTime"] = _millis(now)
                dashboard_entry(document, user_id)["completedChallenges"].append({
                    "challengeId": challenge["id"],
                    "name": challenge["name"],
                    "completedDate": now.isoformat(),
                    "completedTime": _millis(now),
                    "daysCompleted": len(challenge["days"]),
                })

        if all_complete:
            logger.info(f"Challenge completed: {challenge['name']} for {user_id}")
            self._publish("complete", user_id, challenge)

        return {"challenge": challenge, "allComplete": all_complete}

    async def complete_challenge(self, user_id: str, challenge_id: str) -> Dict[str, Any]:
        """Force an active challenge to completed."""
        return await self._terminate(user_id, challenge_id, STATUS_COMPLETED, "completedTime", "complete")

    async def discard_challenge(self, user_id: str, challenge_id: str) -> Dict[str, Any]:
        """Abandon an active challenge; it stays in history as discarded."""
        return await self._terminate(user_id, challenge_id, STATUS_DISCARDED, "discardedTime", "discard")

    async def _terminate(
        self,
        user_id: str,
        challenge_id: str,
        status: str,
        time_field: str,
        event: str,
    ) -> Dict[str, Any]:
        validate_user_id(user_id)
        now = self._clock()

        async with self._store.transaction() as document:
            challenge = self._find_challenge(document, user_id, challenge_id)
            self._require_active(challenge)
            challenge["status"] = status
            challenge[time_field] = _millis(now)

        logger.info(f"Challenge {status}: {challenge['name']} for {user_id}")
        self._publish(event, user_id, challenge, challengeName=challenge["name"])
        return challenge

    # ─────────────────────────────────────────────────────────────────
    # Views
    # ─────────────────────────────────────────────────────────────────

    async def list_active(self, user_id: str) -> Dict[str, Any]:
        challenges = user_challenges(await self._store.read(), user_id)
        return {
            "active": [c for c in challenges if c.get("status") == STATUS_ACTIVE],
            "total": len(challenges),
            "completed": sum(1 for c in challenges if c.get("status") == STATUS_COMPLETED),
        }

    async def list_history(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Most recent challenges, oldest first."""
        limit = self._history_limit if limit is None else limit
        if limit <= 0:
            return []
        return user_challenges(await self._store.read(), user_id)[-limit:]

    async def dashboard(self, user_id: str) -> Dict[str, Any]:
        document = await self._store.read()
        challenges = user_challenges(document, user_id)
        dashboard = document.get("dashboardData", {}).get(user_id, {})
        return {
            "completedChallenges": dashboard.get("completedChallenges", []),
            "totalCompleted": sum(1 for c in challenges if c.get("status") == STATUS_COMPLETED),
            "inProgress": sum(1 for c in challenges if c.get("status") == STATUS_ACTIVE),
        }

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _seed_days(days: Any) -> List[Dict[str, Any]]:
        if not isinstance(days, list):
            raise ValidationException("challenge days must be a list", code="INVALID_CHALLENGE")

        seeded = []
        for index, day in enumerate(days, start=1):
            if not isinstance(day, dict):
                raise ValidationException(
                    f"challenge day {index} must be an object",
                    code="INVALID_CHALLENGE",
                    details={"day": index},
                )
            number = parse_day_number(day.get("day"), index)
            if any(d["day"] == number for d in seeded):
                raise ValidationException(
                    f"challenge day {number} appears twice",
                    code="INVALID_CHALLENGE",
                    details={"day": number},
                )

            day_tasks = day.get("tasks") or []
            if not isinstance(day_tasks, list):
                raise ValidationException(
                    f"tasks of challenge day {index} must be a list",
                    code="INVALID_CHALLENGE",
                    details={"day": number},
                )

            tasks = []
            for position, task in enumerate(day_tasks, start=1):
                if not isinstance(task, dict):
                    raise ValidationException(
                        f"task {position} of challenge day {index} must be an object",
                        code="INVALID_CHALLENGE",
                        details={"day": number, "task": position},
                    )
                tasks.append({
                    "taskId": task.get("id") or make_task_id(number, position),
                    "name": task.get("name") or f"Task {position}",
                    "completed": False,
                })
            seeded.append({
                "day": number,
                "completed": False,
                "completedTime": None,
                "tasks": tasks,
            })
        return seeded

    @staticmethod
    def _find_challenge(document: Dict[str, Any], user_id: str, challenge_id: str) -> Dict[str, Any]:
        for challenge in user_challenges(document, user_id):
            if challenge.get("id") == challenge_id:
                return challenge
        raise NotFoundException(
            message="Challenge not found",
            code="CHALLENGE_NOT_FOUND",
            details={"userId": user_id, "challengeId": challenge_id},
        )

    @staticmethod
    def _find_day(challenge: Dict[str, Any], day_number: int) -> Dict[str, Any]:
        for day in challenge.get("days", []):
            if day.get("day") == day_number:
                return day
        raise NotFoundException(
            message="Challenge day not found",
            code="DAY_NOT_FOUND",
            details={"challengeId": challenge.get("id"), "day": day_number},
        )

    @staticmethod
    def _find_task(
        challenge: Dict[str, Any],
        day: Dict[str, Any],
        task_id: Optional[str],
        task_name: Optional[str],
    ) -> Dict[str, Any]:
        for task in day.get("tasks", []):
            if task_id and task.get("taskId") == task_id:
                return task
            if not task_id and task_name and task.get("name") == task_name:
                return task
        raise NotFoundException(
            message="Task not found",
            code="TASK_NOT_FOUND",
            details={
                "challengeId": challenge.get("id"),
                "day": day.get("day"),
                "task": task_id or task_name,
            },
        )

    @staticmethod
    def _require_active(challenge: Dict[str, Any]) -> None:
        if challenge.get("status") != STATUS_ACTIVE:
            raise ConflictException(
                message=f"Challenge is already {challenge.get('status')}",
                code="CHALLENGE_NOT_ACTIVE",
                details={"challengeId": challenge.get("id"), "status": challenge.get("status")},
            )

    def _publish(self, event: str, user_id: str, challenge: Dict[str, Any], **extra: Any) -> None:
        payload = {
            "type": event,
            "userId": user_id,
            "challengeId": challenge["id"],
            "timestamp": _millis(self._clock()),
            **extra,
        }
        self._broadcaster.publish(
            self.CHANNEL,
            payload,
            lambda meta: bool(meta) and (meta.get("userId") == user_id or bool(meta.get("isAdmin"))),
        )
