"""
Quiz catalogue, quiz submission and attempt history endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.schemas.quiz_schemas import (
    AttemptListResponse,
    QuizDetailResponse,
    QuizListResponse,
    SubmitAttemptRequest,
    SubmitAttemptResponse,
)
from api.schemas.records import Difficulty
from api.schemas.user_schemas import User
from api.services.quiz_service import QuizService, public_question
from api.utils.auth import get_current_user
from api.utils.services import get_quiz_service

quiz_routes = APIRouter()


@quiz_routes.get("/quizzes", response_model=QuizListResponse)
async def list_quizzes(
    category: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    quizzes: QuizService = Depends(get_quiz_service),
) -> QuizListResponse:
    """Active quizzes, newest first."""
    return QuizListResponse(quizzes=quizzes.list_quizzes(category, difficulty.value if difficulty else None))


@quiz_routes.get("/quizzes/{quiz_id}", response_model=QuizDetailResponse)
async def get_quiz(
    quiz_id: str,
    quizzes: QuizService = Depends(get_quiz_service),
) -> QuizDetailResponse:
    """Quiz with its ordered questions; answers and explanations are withheld until submission."""
    quiz = quizzes.get_quiz(quiz_id)
    questions = quizzes.get_quiz_questions(quiz_id)
    return QuizDetailResponse(quiz=quiz, questions=[public_question(q) for q in questions])


@quiz_routes.post("/quizzes/{quiz_id}/attempts", response_model=SubmitAttemptResponse)
async def submit_attempt(
    quiz_id: str,
    body: SubmitAttemptRequest,
    current_user: User = Depends(get_current_user),
    quizzes: QuizService = Depends(get_quiz_service),
) -> SubmitAttemptResponse:
    """Score the submitted answers, store the attempt and update learning progress."""
    return quizzes.submit_attempt(current_user.user_id, quiz_id, body.answers, body.time_spent_seconds)


@quiz_routes.get("/attempts", response_model=AttemptListResponse)
async def list_attempts(
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    quizzes: QuizService = Depends(get_quiz_service),
) -> AttemptListResponse:
    """The current user's most recent attempts."""
    return AttemptListResponse(attempts=quizzes.get_user_attempts(current_user.user_id, limit))
