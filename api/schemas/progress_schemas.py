"""
Learning progress and dashboard schemas.
"""

from pydantic import BaseModel

from api.schemas.quiz_schemas import AttemptSummary, UserStats
from api.schemas.records import ProgressRecord


class ProgressListResponse(BaseModel):
    progress: list[ProgressRecord]


class ProgressChartPoint(BaseModel):
    """One bar per bucket: label "category (language)"."""
    name: str
    score: int
    quizzes: int


class CategoryShare(BaseModel):
    """Quizzes taken per category, summed across languages."""
    name: str
    value: int


class RecentScore(BaseModel):
    name: str
    score: int


class DashboardResponse(BaseModel):
    stats: UserStats
    total_time_display: str
    progress: list[ProgressRecord]
    progress_chart: list[ProgressChartPoint]
    category_distribution: list[CategoryShare]
    recent_scores: list[RecentScore]
    recent_attempts: list[AttemptSummary]
