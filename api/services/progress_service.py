"""
Learning progress aggregation per (user, category, language) bucket.
"""

import math
from datetime import date, datetime
from typing import Callable, Optional

from api.config import settings
from api.errors import ConflictError, ValidationError
from api.persistence import PersistenceClient
from api.schemas.records import ProgressRecord
from api.utils.logger import configure_logging

logger = configure_logging()

TABLE = "learning_progress"


def next_streak(last_activity: Optional[date], current_streak: int, today: date) -> int:
    """Same day keeps the streak, the following day extends it, any longer gap restarts it."""
    if last_activity is None:
        return 1
    gap = (today - last_activity).days
    if gap <= 0:
        return max(current_streak, 1)
    if gap == 1:
        return current_streak + 1
    return 1


class ProgressService:
    """
    Running statistics for quiz results.

    Each bucket holds the count of quizzes taken, the sum of their percentages
    and `average_percentage = total_score / total_quizzes_taken`. Writes are
    conditional on the row's `version` (or on the bucket's unique key for the
    first write); when a concurrent writer wins, the update is recomputed from
    a fresh read, up to `max_retries` times, then `ConflictError` is raised.
    """

    def __init__(
        self,
        client: PersistenceClient,
        *,
        max_retries: Optional[int] = None,
        today: Callable[[], date] = date.today,
    ):
        self.client = client
        self.max_retries = settings.PROGRESS_MAX_RETRIES if max_retries is None else max_retries
        self.today = today

    def update_progress(
        self,
        user_id: str,
        category: str,
        language: str,
        new_percentage: float,
        time_spent_seconds: int,
        *,
        max_retries: Optional[int] = None,
    ) -> ProgressRecord:
        if isinstance(new_percentage, bool) or not isinstance(new_percentage, (int, float)) \
                or math.isnan(new_percentage) or not 0.0 <= new_percentage <= 100.0:
            raise ValidationError(f"percentage must be within [0, 100], got {new_percentage!r}", table=TABLE)
        if isinstance(time_spent_seconds, bool) or not isinstance(time_spent_seconds, int) or time_spent_seconds < 0:
            raise ValidationError(f"time_spent_seconds must be a non-negative integer, got {time_spent_seconds!r}", table=TABLE)

        retries = self.max_retries if max_retries is None else max_retries
        key = {"user_id": user_id, "category": category, "language": language}
        conflicts = 0
        while True:
            existing = self.client.select_one(TABLE, key)
            try:
                if existing is None:
                    return self._create(key, float(new_percentage), time_spent_seconds)
                return self._accumulate(existing, float(new_percentage), time_spent_seconds)
            except ConflictError:
                if conflicts >= retries:
                    logger.warning("progress conflict retries exhausted user=%s bucket=%s/%s", user_id, category, language)
                    raise
                conflicts += 1
                logger.info("progress write conflict, retrying user=%s bucket=%s/%s retry=%s", user_id, category, language, conflicts)

    def _create(self, key: dict, percentage: float, time_spent: int) -> ProgressRecord:
        record = ProgressRecord(
            **key,
            total_quizzes_taken=1,
            total_score=percentage,
            average_percentage=percentage,
            total_time_spent_seconds=time_spent,
            current_streak_days=1,
            last_activity_date=self.today(),
            version=1,
        )
        stored = self.client.insert(TABLE, record)
        logger.info("progress created user=%s bucket=%s/%s", key["user_id"], key["category"], key["language"])
        return stored

    def _accumulate(self, existing: ProgressRecord, percentage: float, time_spent: int) -> ProgressRecord:
        today = self.today()
        new_count = existing.total_quizzes_taken + 1
        new_total = existing.total_score + percentage
        patch = {
            "total_quizzes_taken": new_count,
            "total_score": new_total,
            "average_percentage": new_total / new_count,
            "total_time_spent_seconds": existing.total_time_spent_seconds + time_spent,
            "current_streak_days": next_streak(existing.last_activity_date, existing.current_streak_days, today),
            "last_activity_date": today,
            "version": existing.version + 1,
            "updated_at": datetime.utcnow(),
        }
        matched = self.client.update(TABLE, {"id": existing.id, "version": existing.version}, patch)
        if matched == 0:
            raise ConflictError(f"stale version {existing.version} for progress {existing.id}", table=TABLE)
        logger.info(
            "progress updated user=%s bucket=%s/%s count=%s avg=%.2f",
            existing.user_id, existing.category, existing.language, new_count, patch["average_percentage"],
        )
        return existing.model_copy(update=patch)

    def get_user_progress(self, user_id: str) -> list[ProgressRecord]:
        return self.client.select(TABLE, {"user_id": user_id}, order=[("category", "asc"), ("language", "asc")])

    def get_progress_by_category(self, user_id: str) -> list[ProgressRecord]:
        return self.client.select(TABLE, {"user_id": user_id}, order=[("average_percentage", "desc")])
