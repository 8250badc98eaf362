"""
Integration test fixtures. Overrides get_db for API tests with in-memory DB.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PASSWORD = "testpass123"


@pytest.fixture
def testing_session_local():
    """Session factory bound to a fresh in-memory database with every table created."""
    from api.config import Base
    import api.models  # noqa: F401
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def override_get_db(testing_session_local):
    def _get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def api_client(override_get_db):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_db
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register():
    """register(client, email) -> response; the client keeps the auth cookie."""
    def _register(client, email="learner@codementor.dev", password=PASSWORD):
        return client.post(
            "/auth/register",
            json={"email": email, "password": password, "confirm_password": password},
        )

    return _register


@pytest.fixture
def auth_client(api_client, register):
    """API client signed in as a freshly registered user."""
    response = register(api_client)
    assert response.status_code == 200
    return api_client


@pytest.fixture
def stored_quiz(testing_session_local, make_quiz):
    """A two-question quiz (1 and 3 points) written through the SQL client."""
    from api.services.quiz_service import QuizService
    from infra.persistence.sqlalchemy_client import SqlAlchemyClient
    quiz, questions = make_quiz()
    db = testing_session_local()
    try:
        QuizService(SqlAlchemyClient(db)).create_quiz(quiz, questions)
    finally:
        db.close()
    return quiz, questions
