"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- User, Quiz, QuizQuestion, QuizAttempt, LearningProgress, CodeGeneration
"""

from api.models.models import (
    User,
    Quiz,
    QuizQuestion,
    QuizAttempt,
    LearningProgress,
    CodeGeneration,
)

__all__ = [
    "User",
    "Quiz",
    "QuizQuestion",
    "QuizAttempt",
    "LearningProgress",
    "CodeGeneration",
]
