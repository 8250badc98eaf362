"""
Quiz catalogue, attempt submission and attempt history.
"""

from typing import Mapping, Optional, Sequence

from api.config import settings
from api.errors import NotFoundError, ValidationError
from api.persistence import PersistenceClient
from api.schemas.quiz_schemas import (
    AttemptSummary,
    PublicQuestion,
    SubmitAttemptResponse,
    UserStats,
)
from api.schemas.records import Attempt, Question, Quiz
from api.services import scoring
from api.services.progress_service import ProgressService
from api.utils.common import round_half_up
from api.utils.logger import configure_logging, log_request

logger = configure_logging()


def public_question(q: Question) -> PublicQuestion:
    return PublicQuestion(
        id=q.id,
        question_text=q.question_text,
        question_type=q.question_type,
        options=list(q.options),
        points=q.points,
        order_index=q.order_index,
    )


class QuizService:
    """Service for quizzes and attempts. Progress aggregation is delegated to ProgressService."""

    def __init__(self, client: PersistenceClient, progress: Optional[ProgressService] = None):
        self.client = client
        self.progress = progress or ProgressService(client)

    def list_quizzes(self, category: Optional[str] = None, difficulty: Optional[str] = None) -> list[Quiz]:
        """Active quizzes, newest first, optionally narrowed by category and difficulty."""
        filters: dict = {"is_active": True}
        if category:
            filters["category"] = category
        if difficulty:
            filters["difficulty"] = difficulty
        return self.client.select("quizzes", filters, order=[("created_at", "desc")])

    def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.client.select_one("quizzes", {"id": quiz_id})
        if quiz is None:
            raise NotFoundError(f"quiz {quiz_id} not found", table="quizzes")
        return quiz

    def get_quiz_questions(self, quiz_id: str) -> list[Question]:
        return self.client.select("quiz_questions", {"quiz_id": quiz_id}, order=[("order_index", "asc")])

    def create_quiz(self, quiz: Quiz, questions: Sequence[Question]) -> Quiz:
        """Insert a quiz and its questions. Questions must belong to the quiz."""
        for q in questions:
            if q.quiz_id != quiz.id:
                raise ValidationError(f"question {q.id} belongs to quiz {q.quiz_id}, not {quiz.id}", table="quiz_questions")
        stored = self.client.insert("quizzes", quiz)
        for q in questions:
            self.client.insert("quiz_questions", q)
        logger.info("quiz created id=%s questions=%s", stored.id, len(questions))
        return stored

    def submit_attempt(
        self,
        user_id: str,
        quiz_id: str,
        answers: Mapping[int, str],
        time_spent_seconds: int,
    ) -> SubmitAttemptResponse:
        """
        Score a submission, store the attempt, then fold its percentage into
        the user's (category, language) progress bucket.

        The attempt is stored before progress is updated; if the progress write
        fails the attempt remains and the error propagates.
        """
        if time_spent_seconds < 0:
            raise ValidationError("time_spent_seconds must be non-negative", table="quiz_attempts")
        quiz = self.get_quiz(quiz_id)
        if not quiz.is_active:
            raise ValidationError(f"quiz {quiz_id} is not active", table="quizzes")
        questions = self.get_quiz_questions(quiz_id)
        if not questions:
            raise ValidationError(f"quiz {quiz_id} has no questions", table="quiz_questions")

        with log_request(logger, f"submit_attempt quiz={quiz_id} user={user_id}"):
            result = scoring.score(questions, answers)
            attempt = self.client.insert(
                "quiz_attempts",
                Attempt(
                    user_id=user_id,
                    quiz_id=quiz_id,
                    score=result.achieved_points,
                    total_points=result.total_points,
                    percentage=result.percentage,
                    time_spent_seconds=time_spent_seconds,
                    answers=scoring.build_answer_log(questions, answers),
                ),
            )
            progress = self.progress.update_progress(
                user_id, quiz.category, quiz.language, result.percentage, time_spent_seconds
            )
        return SubmitAttemptResponse(
            attempt=attempt,
            score=result,
            results=scoring.grade(questions, answers),
            progress=progress,
        )

    def get_user_attempts(self, user_id: str, limit: Optional[int] = None) -> list[AttemptSummary]:
        """Most recent attempts first, each joined with its quiz's title, category, difficulty and language."""
        attempts = self.client.select(
            "quiz_attempts",
            {"user_id": user_id},
            order=[("completed_at", "desc")],
            limit=limit or settings.RECENT_ATTEMPTS_LIMIT,
        )
        quizzes: dict[str, Optional[Quiz]] = {}
        out: list[AttemptSummary] = []
        for a in attempts:
            if a.quiz_id not in quizzes:
                quizzes[a.quiz_id] = self.client.select_one("quizzes", {"id": a.quiz_id})
            q = quizzes[a.quiz_id]
            out.append(
                AttemptSummary(
                    attempt=a,
                    quiz_title=q.title if q else None,
                    category=q.category if q else None,
                    difficulty=q.difficulty if q else None,
                    language=q.language if q else None,
                )
            )
        return out

    def get_user_stats(self, user_id: str) -> UserStats:
        attempts = self.client.select("quiz_attempts", {"user_id": user_id})
        total = len(attempts)
        average = sum(a.percentage for a in attempts) / total if total else 0.0
        return UserStats(
            total_attempts=total,
            average_score=round_half_up(average),
            total_time_spent=sum(a.time_spent_seconds for a in attempts),
        )
