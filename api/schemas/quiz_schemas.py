"""
Quiz catalogue, submission and attempt history schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional

from api.schemas.records import Attempt, ProgressRecord, Quiz


class ScoreResult(BaseModel):
    achieved_points: int
    total_points: int
    percentage: float


class QuestionResult(BaseModel):
    question_id: str
    submitted: Optional[str] = None
    correct_answer: str
    is_correct: bool
    points: int
    explanation: str


class PublicQuestion(BaseModel):
    """A question as shown while taking the quiz (no answer, no explanation)."""
    id: str
    question_text: str
    question_type: str
    options: list[str]
    points: int
    order_index: int


class QuizListResponse(BaseModel):
    quizzes: list[Quiz]


class QuizDetailResponse(BaseModel):
    quiz: Quiz
    questions: list[PublicQuestion]


class SubmitAttemptRequest(BaseModel):
    answers: dict[int, str] = {}  # question position -> submitted answer
    time_spent_seconds: int = Field(default=0, ge=0)


class SubmitAttemptResponse(BaseModel):
    attempt: Attempt
    score: ScoreResult
    results: list[QuestionResult]
    progress: ProgressRecord


class AttemptSummary(BaseModel):
    """An attempt joined with the quiz fields the dashboard shows."""
    attempt: Attempt
    quiz_title: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    language: Optional[str] = None


class AttemptListResponse(BaseModel):
    attempts: list[AttemptSummary]


class UserStats(BaseModel):
    total_attempts: int
    average_score: int  # rounded mean percentage
    total_time_spent: int  # seconds
