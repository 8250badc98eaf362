"""
FastAPI dependencies that wire the persistence client into the services.

Routes never import a global client: the client is built from the request's
DB session, so tests can swap `get_db` (or `get_client`) for a fake.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.persistence import PersistenceClient
from api.services.codegen_service import CodeGenService
from api.services.dashboard_service import DashboardService
from api.services.progress_service import ProgressService
from api.services.quiz_service import QuizService
from infra.persistence.sqlalchemy_client import SqlAlchemyClient


def get_client(db: Session = Depends(get_db)) -> PersistenceClient:
    return SqlAlchemyClient(db)


def get_progress_service(client: PersistenceClient = Depends(get_client)) -> ProgressService:
    return ProgressService(client)


def get_quiz_service(
    client: PersistenceClient = Depends(get_client),
    progress: ProgressService = Depends(get_progress_service),
) -> QuizService:
    return QuizService(client, progress)


def get_dashboard_service(
    quizzes: QuizService = Depends(get_quiz_service),
    progress: ProgressService = Depends(get_progress_service),
) -> DashboardService:
    return DashboardService(quizzes, progress)


def get_codegen_service(client: PersistenceClient = Depends(get_client)) -> CodeGenService:
    return CodeGenService(client)
