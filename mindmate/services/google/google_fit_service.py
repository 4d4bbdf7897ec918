"""
Google Fit REST client.

All reads go through the dataset:aggregate endpoint with one-day buckets.
Parsing is kept in module-level functions so it can be tested against
recorded responses without any HTTP.

Daily keys for steps, heart rate and heart points are UTC dates. The
monthly view keys days by the server's local date.
"""

import calendar
import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

from mindmate.services.google.google_oauth_service import GoogleOAuthService

logger = logging.getLogger(__name__)

AGGREGATE_URL = "https://www.googleapis.com/fitness/v1/users/me/dataset:aggregate"
DAY_MS = 24 * 60 * 60 * 1000

STEPS = "com.google.step_count.delta"
HEART_RATE = "com.google.heart_rate.bpm"
HEART_MINUTES = "com.google.heart_minutes"
ACTIVE_MINUTES = "com.google.active_minutes"
CALORIES = "com.google.calories.expended"
SLEEP = "com.google.sleep.segment"

ESTIMATED_STEPS_SOURCE = "derived:com.google.step_count.delta:com.google.android.gms:estimated_steps"

HEART_POINTS_UNAVAILABLE_MESSAGE = (
    "Your device does not have a heart rate sensor. Heart Minutes require a wearable "
    "device (Apple Watch, Fitbit, etc.) or Google Pixel phone with built-in heart rate sensor."
)
HEART_POINTS_FAILED_MESSAGE = (
    "Failed to fetch Heart Minutes. This metric may not be available on your device."
)
NO_VIGOROUS_ACTIVITY_MESSAGE = (
    "No vigorous activity recorded. Heart Minutes require exercise at 70%+ max heart rate."
)


class GoogleFitError(Exception):
    """Google Fit rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_missing_datasource(self) -> bool:
        return "datasource" in self.message.lower()


# ─────────────────────────────────────────────────────────────────
# Response parsing
# ─────────────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def utc_date(ms: Any) -> str:
    return datetime.fromtimestamp(int(ms) / 1000, tz=timezone.utc).date().isoformat()


def local_date(ms: Any) -> str:
    return datetime.fromtimestamp(int(ms) / 1000).date().isoformat()


def _buckets(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    buckets = response.get("bucket")
    return buckets if isinstance(buckets, list) else []


def _points(bucket: Dict[str, Any]):
    """Yield (data type, point) for every point in a bucket."""
    for dataset in bucket.get("dataset") or []:
        for point in dataset.get("point") or []:
            data_type = point.get("dataTypeName") or dataset.get("dataTypeName") or dataset.get("dataSourceId") or ""
            yield data_type, point


def point_value(point: Dict[str, Any], *kinds: str) -> float:
    """First truthy value of the given kinds (intVal, fpVal) in the point's first value."""
    values = point.get("value") or []
    if not values:
        return 0
    for kind in kinds:
        value = values[0].get(kind)
        if value:
            return value
    return 0


def parse_steps(response: Dict[str, Any], days: int) -> Dict[str, Any]:
    daily = []
    total = 0
    for bucket in _buckets(response):
        steps = sum(point_value(p, "intVal") for _, p in _points(bucket))
        daily.append({"date": utc_date(bucket["startTimeMillis"]), "steps": steps})
        total += steps

    return {
        "totalSteps": total,
        "dailySteps": daily,
        "days": days,
        "average": round_half_up(total / days) if days else 0,
    }


def parse_heart_rate(response: Dict[str, Any], days: int) -> Dict[str, Any]:
    readings: List[float] = []
    daily = []
    for bucket in _buckets(response):
        day_readings = [v for v in (point_value(p, "fpVal") for _, p in _points(bucket)) if v > 0]
        if day_readings:
            readings.extend(day_readings)
            daily.append({
                "date": utc_date(bucket["startTimeMillis"]),
                "average": round_half_up(sum(day_readings) / len(day_readings)),
                "dataPoints": len(day_readings),
            })

    return {
        "average": round_half_up(sum(readings) / len(readings)) if readings else 0,
        "dailyAverages": daily,
        "totalDataPoints": len(readings),
        "days": days,
    }


def parse_heart_points(response: Dict[str, Any], days: int) -> Dict[str, Any]:
    total = 0
    daily = []
    has_data = False
    for bucket in _buckets(response):
        minutes = 0
        for _, point in _points(bucket):
            value = point_value(point, "intVal", "fpVal")
            if value > 0:
                minutes += value
                has_data = True
        daily.append({"date": utc_date(bucket["startTimeMillis"]), "heartMinutes": minutes})
        total += minutes

    return {
        "heartPoints": total,
        "dailyBreakdown": daily,
        "hasData": has_data,
        "days": days,
        "message": f"{total} vigorous minutes earned" if has_data else NO_VIGOROUS_ACTIVITY_MESSAGE,
    }


def parse_daily_metrics(response: Dict[str, Any]) -> Dict[str, Any]:
    steps = 0
    heart_rates: List[float] = []
    active_minutes = 0
    calories = 0.0
    dates = []

    for bucket in _buckets(response):
        dates.append(utc_date(bucket["startTimeMillis"]))
        for data_type, point in _points(bucket):
            if "step_count" in data_type:
                steps += point_value(point, "intVal")
            elif "heart_rate" in data_type:
                value = point_value(point, "fpVal")
                if value > 0:
                    heart_rates.append(value)
            elif "active_minutes" in data_type:
                active_minutes += point_value(point, "intVal")
            elif "calories" in data_type:
                calories += point_value(point, "fpVal")

    return {
        "steps": steps,
        "heartRate": heart_rates,
        "avgHeartRate": round_half_up(sum(heart_rates) / len(heart_rates)) if heart_rates else 0,
        "activeMinutes": active_minutes,
        "calories": round_half_up(calories),
        "dateRange": f"{dates[0]} to {dates[-1]}" if dates else None,
        "daysWithData": len(dates),
    }


def merge_monthly(
    daily_data: Dict[str, Dict[str, Any]],
    data_type: str,
    response: Dict[str, Any],
) -> Dict[str, Dict[str, Any]]:
    """Fold one aggregate response into the per-local-date monthly map."""
    for bucket in _buckets(response):
        date = local_date(bucket["startTimeMillis"])
        points = [p for _, p in _points(bucket)]

        if data_type == STEPS:
            daily_data.setdefault(date, {})["steps"] = sum(point_value(p, "intVal") for p in points)

        elif data_type == HEART_MINUTES:
            value = sum(point_value(p, "fpVal", "intVal") for p in points)
            daily_data.setdefault(date, {})["heartPoints"] = round_half_up(value)

        elif data_type == HEART_RATE:
            readings = [v for v in (point_value(p, "fpVal", "intVal") for p in points) if v > 0]
            if readings:
                entry = daily_data.setdefault(date, {})
                entry["restingHeartRate"] = round_half_up(min(readings))
                entry["avgHeartRate"] = round_half_up(sum(readings) / len(readings))

        elif data_type == SLEEP:
            minutes = 0.0
            for point in points:
                if point.get("startTimeNanos") and point.get("endTimeNanos"):
                    minutes += (int(point["endTimeNanos"]) - int(point["startTimeNanos"])) / (1_000_000_000 * 60)
            if minutes > 0:
                entry = daily_data.setdefault(date, {})
                entry["sleepMinutes"] = round_half_up(minutes)
                entry["sleepHours"] = round(minutes / 60, 1)

    return daily_data


def month_range(year: int, month: int) -> Sequence[int]:
    """Local-time [first day 00:00, day after last day 00:00) in epoch ms."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day)
    return int(start.timestamp() * 1000), int(end.timestamp() * 1000) + DAY_MS


# ─────────────────────────────────────────────────────────────────
# Client
# ─────────────────────────────────────────────────────────────────

@dataclass
class FitCredentials:
    access_token: str
    refresh_token: Optional[str] = None
    refreshed: bool = False


class GoogleFitService:
    """
    Reads fitness metrics for a user holding a Google access token.
    """

    def __init__(
        self,
        oauth_service: Optional[GoogleOAuthService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        target_steps: int = 10000,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize GoogleFitService.

        Args:
            oauth_service: Used to refresh expired access tokens
            transport: Optional httpx transport (tests use httpx.MockTransport)
            target_steps: Daily step goal reported by target_steps()
            clock: Returns the current time in epoch ms
        """
        self._oauth = oauth_service
        self._transport = transport
        self._target_steps = target_steps
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def _post_aggregate(self, access_token: str, body: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self._transport, timeout=30.0) as client:
            try:
                response = await client.post(
                    AGGREGATE_URL,
                    json=body,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
            except httpx.HTTPError as e:
                raise GoogleFitError(f"Google Fit request failed: {e}") from e

        if response.status_code != 200:
            try:
                message = response.json().get("error", {}).get("message") or response.text
            except ValueError:
                message = response.text
            raise GoogleFitError(message or f"Google Fit error {response.status_code}", response.status_code)

        return response.json()

    async def aggregate(
        self,
        credentials: FitCredentials,
        aggregate_by: List[Dict[str, str]],
        start_ms: int,
        end_ms: int,
    ) -> Dict[str, Any]:
        """
        Run one dataset:aggregate call with daily buckets.

        A 401 is retried once with a refreshed token when the credentials
        carry a refresh token.

        Raises:
            GoogleFitError: If Google rejects the request
        """
        body = {
            "aggregateBy": aggregate_by,
            "bucketByTime": {"durationMillis": DAY_MS},
            "startTimeMillis": start_ms,
            "endTimeMillis": end_ms,
        }

        try:
            return await self._post_aggregate(credentials.access_token, body)
        except GoogleFitError as e:
            if not (e.is_unauthorized and credentials.refresh_token and self._oauth) or credentials.refreshed:
                raise

        logger.info("Google Fit access token expired, refreshing")
        try:
            tokens = await self._oauth.refresh_token(credentials.refresh_token)
        except ValueError as e:
            raise GoogleFitError(str(e), 401) from e

        credentials.access_token = tokens["accessToken"]
        credentials.refreshed = True
        return await self._post_aggregate(credentials.access_token, body)

    def _window(self, days: int) -> Sequence[int]:
        end = self._clock()
        return end - days * DAY_MS, end

    @staticmethod
    def _finish(data: Dict[str, Any], credentials: FitCredentials) -> Dict[str, Any]:
        if credentials.refreshed:
            data["refreshedAccessToken"] = credentials.access_token
        return data

    async def get_steps(self, access_token: str, days: int = 1, refresh_token: Optional[str] = None) -> Dict[str, Any]:
        credentials = FitCredentials(access_token, refresh_token)
        start, end = self._window(days)
        response = await self.aggregate(credentials, [{"dataTypeName": STEPS}], start, end)
        return self._finish(parse_steps(response, days), credentials)

    async def get_heart_rate(self, access_token: str, days: int = 1, refresh_token: Optional[str] = None) -> Dict[str, Any]:
        credentials = FitCredentials(access_token, refresh_token)
        start, end = self._window(days)
        response = await self.aggregate(credentials, [{"dataTypeName": HEART_RATE}], start, end)
        return self._finish(parse_heart_rate(response, days), credentials)

    async def get_heart_points(self, access_token: str, days: int = 1, refresh_token: Optional[str] = None) -> Dict[str, Any]:
        """Heart minutes (vigorous activity), reported as heartPoints."""
        credentials = FitCredentials(access_token, refresh_token)
        start, end = self._window(days)
        response = await self.aggregate(credentials, [{"dataTypeName": HEART_MINUTES}], start, end)
        return self._finish(parse_heart_points(response, days), credentials)

    async def get_daily_metrics(self, access_token: str, days: int = 7, refresh_token: Optional[str] = None) -> Dict[str, Any]:
        """Steps, heart rate, active minutes and calories over the last ``days``."""
        credentials = FitCredentials(access_token, refresh_token)
        start, end = self._window(days)
        response = await self.aggregate(
            credentials,
            [
                {"dataTypeName": STEPS},
                {"dataTypeName": HEART_RATE},
                {"dataTypeName": ACTIVE_MINUTES},
                {"dataTypeName": CALORIES},
            ],
            start,
            end,
        )
        return self._finish(parse_daily_metrics(response), credentials)

    async def get_monthly(
        self,
        access_token: str,
        year: int,
        month: int,
        refresh_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Per-day steps, heart points, heart rate and sleep for one month.

        Steps are required; the other metrics are skipped when the user's
        devices do not record them.
        """
        credentials = FitCredentials(access_token, refresh_token)
        start, end = month_range(year, month)
        daily_data: Dict[str, Dict[str, Any]] = {}

        response = await self.aggregate(
            credentials,
            [{"dataTypeName": STEPS, "dataSourceId": ESTIMATED_STEPS_SOURCE}],
            start,
            end,
        )
        merge_monthly(daily_data, STEPS, response)

        for data_type in (HEART_MINUTES, HEART_RATE, SLEEP):
            try:
                response = await self.aggregate(credentials, [{"dataTypeName": data_type}], start, end)
            except GoogleFitError as e:
                logger.info(f"[Monthly] {data_type} not available: {e.message}")
                continue
            merge_monthly(daily_data, data_type, response)

        return self._finish({"year": year, "month": month, "dailyData": daily_data}, credentials)

    def target_steps(self) -> Dict[str, int]:
        return {"targetSteps": self._target_steps, "dailyTarget": self._target_steps}
