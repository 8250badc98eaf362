"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import os
import sys
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

# Keep the suite off the developer's database and log directory. Must run
# before anything imports api.config.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "codementor-test-logs"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ----- Persistence clients -----
@pytest.fixture
def memory_client():
    """Fresh in-memory persistence client."""
    from infra.persistence.memory_client import InMemoryClient
    return InMemoryClient()


@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine for tests."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session with every table created."""
    from api.config import Base
    import api.models  # noqa: F401
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def sql_client(db_session):
    from infra.persistence.sqlalchemy_client import SqlAlchemyClient
    return SqlAlchemyClient(db_session)


# ----- Quiz data -----
@pytest.fixture
def make_quiz():
    """
    Build a Quiz and its Questions without storing them.

    make_quiz([("A", 1), ("B", 3)], category="algorithms", language="python")
    -> (quiz, [question, question])
    """
    from api.schemas.records import Question, Quiz

    def _make(answers_and_points=(("A", 1), ("B", 3)), **quiz_fields):
        fields = {
            "title": "Sample Quiz",
            "description": "Sample",
            "category": "algorithms",
            "difficulty": "beginner",
            "language": "python",
        }
        fields.update(quiz_fields)
        quiz = Quiz(**fields)
        questions = [
            Question(
                quiz_id=quiz.id,
                question_text=f"Question {idx + 1}",
                question_type="multiple_choice",
                options=["A", "B", "C", "D"],
                correct_answer=answer,
                points=points,
                explanation=f"The answer is {answer}.",
                order_index=idx,
            )
            for idx, (answer, points) in enumerate(answers_and_points)
        ]
        return quiz, questions

    return _make


@pytest.fixture
def seeded_quiz(memory_client, make_quiz):
    """A stored two-question quiz (1 point "A", 3 points "B") in the in-memory client."""
    from api.services.quiz_service import QuizService
    quiz, questions = make_quiz()
    QuizService(memory_client).create_quiz(quiz, questions)
    return quiz, questions


class FakeClock:
    """Callable date source for streak tests."""

    def __init__(self, start):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, days: int = 1):
        self.current = self.current + timedelta(days=days)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2).date())
