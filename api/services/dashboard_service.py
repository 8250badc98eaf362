"""
Dashboard aggregation: turns stored progress and attempts into the series the
progress page plots.
"""

from typing import Sequence

from api.schemas.progress_schemas import CategoryShare, DashboardResponse, ProgressChartPoint, RecentScore
from api.schemas.quiz_schemas import AttemptSummary
from api.schemas.records import ProgressRecord
from api.services.progress_service import ProgressService
from api.services.quiz_service import QuizService
from api.utils.common import format_duration, round_half_up

RECENT_ATTEMPTS_ON_DASHBOARD = 5


def progress_chart(progress: Sequence[ProgressRecord]) -> list[ProgressChartPoint]:
    return [
        ProgressChartPoint(
            name=f"{p.category} ({p.language})",
            score=round_half_up(p.average_percentage),
            quizzes=p.total_quizzes_taken,
        )
        for p in progress
    ]


def category_distribution(progress: Sequence[ProgressRecord]) -> list[CategoryShare]:
    """Sum quizzes per category across languages, in first-seen order."""
    totals: dict[str, int] = {}
    for p in progress:
        totals[p.category] = totals.get(p.category, 0) + p.total_quizzes_taken
    return [CategoryShare(name=name, value=value) for name, value in totals.items()]


def recent_scores(attempts: Sequence[AttemptSummary]) -> list[RecentScore]:
    # attempts arrive newest first; the newest gets the highest number
    n = len(attempts)
    return [
        RecentScore(name=f"Quiz {n - idx}", score=round_half_up(a.attempt.percentage))
        for idx, a in enumerate(attempts)
    ]


class DashboardService:
    def __init__(self, quizzes: QuizService, progress: ProgressService):
        self.quizzes = quizzes
        self.progress = progress

    def build(self, user_id: str) -> DashboardResponse:
        stats = self.quizzes.get_user_stats(user_id)
        progress = self.progress.get_user_progress(user_id)
        attempts = self.quizzes.get_user_attempts(user_id, limit=RECENT_ATTEMPTS_ON_DASHBOARD)
        return DashboardResponse(
            stats=stats,
            total_time_display=format_duration(stats.total_time_spent),
            progress=progress,
            progress_chart=progress_chart(progress),
            category_distribution=category_distribution(progress),
            recent_scores=recent_scores(attempts),
            recent_attempts=attempts,
        )
