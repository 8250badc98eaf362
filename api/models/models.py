from api.config import Base
from sqlalchemy import Column, Integer, String, JSON, DateTime, ForeignKey, Text, Boolean, Float, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True)
    hashed_password = Column(String)
    preferences = Column(JSON)


class Quiz(Base):
    __tablename__ = "quizzes"
    id = Column(String, primary_key=True, index=True)  # uuid
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String, index=True, nullable=False)
    difficulty = Column(String, index=True, nullable=False)  # beginner|intermediate|advanced
    language = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    questions = relationship("QuizQuestion", backref="quiz", cascade="all, delete-orphan")


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    id = Column(String, primary_key=True, index=True)  # uuid
    quiz_id = Column(String, ForeignKey("quizzes.id"), index=True, nullable=False)
    question_text = Column(Text, nullable=False)
    question_type = Column(String, nullable=False)  # multiple_choice|code_completion|true_false
    options = Column(JSON, nullable=False)  # list[str]
    correct_answer = Column(String, nullable=False)
    explanation = Column(Text, nullable=False, default="")
    points = Column(Integer, nullable=False, default=1)
    order_index = Column(Integer, nullable=False)


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(String, index=True, nullable=False)
    quiz_id = Column(String, ForeignKey("quizzes.id"), index=True, nullable=False)
    score = Column(Integer, nullable=False)
    total_points = Column(Integer, nullable=False)
    percentage = Column(Float, nullable=False)
    time_spent_seconds = Column(Integer, nullable=False, default=0)
    answers = Column(JSON, nullable=False)  # list[{question_id, answer}]
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class LearningProgress(Base):
    __tablename__ = "learning_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "language", name="uq_learning_progress_bucket"),
    )
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(String, index=True, nullable=False)
    category = Column(String, nullable=False)
    language = Column(String, nullable=False)
    total_quizzes_taken = Column(Integer, default=0, nullable=False)
    total_score = Column(Float, default=0.0, nullable=False)  # sum of percentages
    average_percentage = Column(Float, default=0.0, nullable=False)
    total_time_spent_seconds = Column(Integer, default=0, nullable=False)
    current_streak_days = Column(Integer, default=0, nullable=False)
    last_activity_date = Column(Date, nullable=True)
    version = Column(Integer, default=1, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class CodeGeneration(Base):
    __tablename__ = "code_generations"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(String, index=True, nullable=False)
    prompt = Column(Text, nullable=False)
    language = Column(String, nullable=False)
    generated_code = Column(Text, nullable=False)
    explanation = Column(Text, nullable=False, default="")
    is_bookmarked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
