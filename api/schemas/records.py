"""
Typed row records, one per logical table.

These are what the persistence client accepts and returns; both client
implementations validate rows through them, so services never handle
untyped mappings.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    return str(uuid4())


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    CODE_COMPLETION = "code_completion"
    TRUE_FALSE = "true_false"


class Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True, extra="forbid")


class Quiz(Record):
    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    category: str
    difficulty: Difficulty
    language: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Question(Record):
    """A quiz question. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    quiz_id: str
    question_text: str
    question_type: QuestionType
    options: list[str] = []
    correct_answer: str
    explanation: str = ""
    points: int = Field(default=1, gt=0)
    order_index: int = 0


class AnswerEntry(BaseModel):
    question_id: str
    answer: str


class Attempt(Record):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    user_id: str
    quiz_id: str
    score: int = Field(ge=0)
    total_points: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)
    time_spent_seconds: int = Field(default=0, ge=0)
    answers: list[AnswerEntry] = []
    completed_at: datetime = Field(default_factory=datetime.utcnow)


class ProgressRecord(Record):
    """Running statistics for one (user, category, language) bucket."""
    id: str = Field(default_factory=new_id)
    user_id: str
    category: str
    language: str
    total_quizzes_taken: int = Field(default=0, ge=0)
    total_score: float = Field(default=0.0, ge=0.0)
    average_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    total_time_spent_seconds: int = Field(default=0, ge=0)
    current_streak_days: int = Field(default=0, ge=0)
    last_activity_date: Optional[date] = None
    version: int = 1
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class CodeGeneration(Record):
    id: str = Field(default_factory=new_id)
    user_id: str
    prompt: str
    language: str
    generated_code: str
    explanation: str = ""
    is_bookmarked: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("prompt must not be blank")
        return v


TABLES: dict[str, type[Record]] = {
    "quizzes": Quiz,
    "quiz_questions": Question,
    "quiz_attempts": Attempt,
    "learning_progress": ProgressRecord,
    "code_generations": CodeGeneration,
}

# Unique keys beyond the primary key, enforced by both client implementations.
UNIQUE_KEYS: dict[str, list[tuple[str, ...]]] = {
    "learning_progress": [("user_id", "category", "language")],
}
