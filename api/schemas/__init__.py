"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import ProgressRecord, SubmitAttemptRequest
    from api.schemas.records import Question
"""

from api.schemas.records import (
    AnswerEntry,
    Attempt,
    CodeGeneration,
    Difficulty,
    ProgressRecord,
    Question,
    QuestionType,
    Quiz,
)
from api.schemas.auth_schemas import (
    AuthTokenPayload,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
)
from api.schemas.user_schemas import User
from api.schemas.quiz_schemas import (
    AttemptListResponse,
    AttemptSummary,
    PublicQuestion,
    QuestionResult,
    QuizDetailResponse,
    QuizListResponse,
    ScoreResult,
    SubmitAttemptRequest,
    SubmitAttemptResponse,
    UserStats,
)
from api.schemas.progress_schemas import (
    CategoryShare,
    DashboardResponse,
    ProgressChartPoint,
    ProgressListResponse,
    RecentScore,
)
from api.schemas.codegen_schemas import (
    BookmarkRequest,
    GeneratedCode,
    GenerateRequest,
    GenerateResponse,
    GenerationListResponse,
)

__all__ = [
    # records
    "AnswerEntry",
    "Attempt",
    "CodeGeneration",
    "Difficulty",
    "ProgressRecord",
    "Question",
    "QuestionType",
    "Quiz",
    # auth
    "AuthTokenPayload",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    # user
    "User",
    # quiz
    "AttemptListResponse",
    "AttemptSummary",
    "PublicQuestion",
    "QuestionResult",
    "QuizDetailResponse",
    "QuizListResponse",
    "ScoreResult",
    "SubmitAttemptRequest",
    "SubmitAttemptResponse",
    "UserStats",
    # progress
    "CategoryShare",
    "DashboardResponse",
    "ProgressChartPoint",
    "ProgressListResponse",
    "RecentScore",
    # codegen
    "BookmarkRequest",
    "GeneratedCode",
    "GenerateRequest",
    "GenerateResponse",
    "GenerationListResponse",
]
