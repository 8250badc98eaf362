from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./codementor.db"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_CONSOLE: bool = False

    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    PROGRESS_MAX_RETRIES: int = 3
    RECENT_ATTEMPTS_LIMIT: int = 10
    CODEGEN_HISTORY_LIMIT: int = 20


settings = Settings()


def build_engine(url: str):
    """SQLite in-memory URLs share one connection so every session sees the same tables."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def reset_db():
    import api.models  # noqa: F401  (register tables on Base.metadata)
    Base.metadata.drop_all(bind=engine)
    create_db()


def create_db():
    import api.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
