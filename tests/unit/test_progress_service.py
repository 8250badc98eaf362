"""Unit tests for ProgressService (running averages, streaks, conditional writes)."""
import math
import random
from datetime import date

import pytest

from api.errors import ConflictError, StorageError, ValidationError
from api.services.progress_service import ProgressService, next_streak

USER = "user-1"


def naive_update(client, user_id, category, language, percentage, time_spent):
    """Unconditional read-then-write, without a version check."""
    key = {"user_id": user_id, "category": category, "language": language}
    existing = client.select_one("learning_progress", key)
    count = existing.total_quizzes_taken + 1
    total = existing.total_score + percentage
    client.update(
        "learning_progress",
        {"id": existing.id},
        {
            "total_quizzes_taken": count,
            "total_score": total,
            "average_percentage": total / count,
            "total_time_spent_seconds": existing.total_time_spent_seconds + time_spent,
        },
    )


@pytest.mark.unit
class TestUpdateProgress:
    def test_first_then_second_attempt(self, memory_client, clock):
        service = ProgressService(memory_client, today=clock)

        first = service.update_progress(USER, "algorithms", "python", 80, 120)
        assert first.total_quizzes_taken == 1
        assert first.total_score == 80
        assert first.average_percentage == 80
        assert first.total_time_spent_seconds == 120
        assert first.last_activity_date == clock()

        second = service.update_progress(USER, "algorithms", "python", 60, 60)
        assert second.total_quizzes_taken == 2
        assert second.total_score == 140
        assert second.average_percentage == 70
        assert second.total_time_spent_seconds == 180

        stored = memory_client.select_one(
            "learning_progress", {"user_id": USER, "category": "algorithms", "language": "python"}
        )
        assert stored == second

    @pytest.mark.parametrize("seed", range(10))
    def test_average_matches_mean_of_percentages(self, memory_client, seed):
        rng = random.Random(seed)
        percentages = [rng.uniform(0, 100) for _ in range(rng.randint(1, 25))]
        service = ProgressService(memory_client)

        record = None
        for p in percentages:
            previous = record
            record = service.update_progress(USER, "web", "javascript", p, 30)
            if previous is not None:
                assert record.total_quizzes_taken > previous.total_quizzes_taken
                assert record.total_score >= previous.total_score
            assert math.isclose(record.average_percentage, record.total_score / record.total_quizzes_taken)

        assert record.total_quizzes_taken == len(percentages)
        assert math.isclose(record.average_percentage, sum(percentages) / len(percentages))
        assert record.total_time_spent_seconds == 30 * len(percentages)

    def test_buckets_are_independent(self, memory_client):
        service = ProgressService(memory_client)
        service.update_progress(USER, "algorithms", "python", 100, 10)
        service.update_progress(USER, "algorithms", "java", 50, 10)
        service.update_progress("user-2", "algorithms", "python", 0, 10)

        mine = service.get_user_progress(USER)
        assert [(p.language, p.total_quizzes_taken, p.average_percentage) for p in mine] == [
            ("java", 1, 50),
            ("python", 1, 100),
        ]

    def test_version_increments(self, memory_client):
        service = ProgressService(memory_client)
        assert service.update_progress(USER, "a", "b", 10, 0).version == 1
        assert service.update_progress(USER, "a", "b", 10, 0).version == 2

    @pytest.mark.parametrize("percentage", [-0.1, 100.5, float("nan"), "90", True])
    def test_rejects_bad_percentage(self, memory_client, percentage):
        with pytest.raises(ValidationError):
            ProgressService(memory_client).update_progress(USER, "a", "b", percentage, 10)
        assert memory_client.select("learning_progress") == []

    @pytest.mark.parametrize("seconds", [-1, 1.5])
    def test_rejects_bad_time(self, memory_client, seconds):
        with pytest.raises(ValidationError):
            ProgressService(memory_client).update_progress(USER, "a", "b", 50, seconds)

    def test_boundaries_accepted(self, memory_client):
        service = ProgressService(memory_client)
        service.update_progress(USER, "a", "b", 0, 0)
        record = service.update_progress(USER, "a", "b", 100, 0)
        assert record.average_percentage == 50


@pytest.mark.unit
class TestStorageFailures:
    def test_lookup_failure_propagates_without_write(self, failing_client):
        client = failing_client({"select"})
        with pytest.raises(StorageError):
            ProgressService(client).update_progress(USER, "a", "b", 50, 10)
        assert client.writes == 0

    def test_write_failure_propagates(self, failing_client):
        client = failing_client(set())
        service = ProgressService(client)
        service.update_progress(USER, "a", "b", 50, 10)
        client.fail_on = {"update"}
        with pytest.raises(StorageError) as exc:
            service.update_progress(USER, "a", "b", 70, 10)
        assert not isinstance(exc.value, ConflictError)
        client.fail_on = set()
        assert service.get_user_progress(USER)[0].total_quizzes_taken == 1


@pytest.mark.unit
class TestConcurrentUpdates:
    def test_unconditional_write_loses_an_update(self, interleaving_client):
        service = ProgressService(interleaving_client)
        service.update_progress(USER, "algorithms", "python", 80, 0)

        interleaving_client.after_first_read = lambda: naive_update(
            interleaving_client, USER, "algorithms", "python", 100, 0
        )
        naive_update(interleaving_client, USER, "algorithms", "python", 50, 0)

        record = service.get_user_progress(USER)[0]
        # three quizzes were taken but the racing increment was overwritten
        assert record.total_quizzes_taken == 2
        assert record.total_score == 130

    def test_versioned_write_retries_after_losing_race(self, interleaving_client):
        service = ProgressService(interleaving_client)
        racer = ProgressService(interleaving_client)
        service.update_progress(USER, "algorithms", "python", 80, 0)

        interleaving_client.after_first_read = lambda: racer.update_progress(USER, "algorithms", "python", 100, 0)
        record = service.update_progress(USER, "algorithms", "python", 50, 0)

        assert record.total_quizzes_taken == 3
        assert record.total_score == 230
        assert math.isclose(record.average_percentage, 230 / 3)
        assert record.version == 3

    def test_racing_first_writes_both_count(self, interleaving_client):
        service = ProgressService(interleaving_client)
        racer = ProgressService(interleaving_client)

        interleaving_client.after_first_read = lambda: racer.update_progress(USER, "algorithms", "python", 100, 0)
        record = service.update_progress(USER, "algorithms", "python", 50, 0)

        assert record.total_quizzes_taken == 2
        assert record.average_percentage == 75
        assert len(interleaving_client.select("learning_progress")) == 1

    def test_conflict_surfaces_when_retries_exhausted(self, interleaving_client):
        service = ProgressService(interleaving_client)
        racer = ProgressService(interleaving_client)
        service.update_progress(USER, "algorithms", "python", 80, 0)

        interleaving_client.after_first_read = lambda: racer.update_progress(USER, "algorithms", "python", 100, 0)
        with pytest.raises(ConflictError):
            service.update_progress(USER, "algorithms", "python", 50, 0, max_retries=0)

        record = service.get_user_progress(USER)[0]
        assert record.total_quizzes_taken == 2
        assert record.total_score == 180


@pytest.mark.unit
class TestStreak:
    def test_next_streak_rules(self):
        today = date(2026, 3, 10)
        assert next_streak(None, 0, today) == 1
        assert next_streak(date(2026, 3, 10), 4, today) == 4
        assert next_streak(date(2026, 3, 10), 0, today) == 1
        assert next_streak(date(2026, 3, 9), 4, today) == 5
        assert next_streak(date(2026, 3, 7), 4, today) == 1

    def test_streak_over_days(self, memory_client, clock):
        service = ProgressService(memory_client, today=clock)
        assert service.update_progress(USER, "a", "b", 50, 0).current_streak_days == 1
        assert service.update_progress(USER, "a", "b", 50, 0).current_streak_days == 1
        clock.advance()
        assert service.update_progress(USER, "a", "b", 50, 0).current_streak_days == 2
        clock.advance()
        assert service.update_progress(USER, "a", "b", 50, 0).current_streak_days == 3
        clock.advance(3)
        record = service.update_progress(USER, "a", "b", 50, 0)
        assert record.current_streak_days == 1
        assert record.last_activity_date == clock()


@pytest.mark.unit
class TestProgressQueries:
    def test_by_category_orders_by_average_desc(self, memory_client):
        service = ProgressService(memory_client)
        service.update_progress(USER, "web", "javascript", 40, 0)
        service.update_progress(USER, "algorithms", "python", 90, 0)
        service.update_progress(USER, "databases", "sql", 65, 0)
        ordered = service.get_progress_by_category(USER)
        assert [p.category for p in ordered] == ["algorithms", "databases", "web"]

    def test_empty_for_unknown_user(self, memory_client):
        assert ProgressService(memory_client).get_user_progress("nobody") == []
