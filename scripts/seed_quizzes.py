#!/usr/bin/env python3
"""
Seed the quiz catalogue with a few starter quizzes.

Run: python scripts/seed_quizzes.py
     python scripts/seed_quizzes.py --reset   # drop and recreate all tables first

Uses DATABASE_URL from the environment / .env.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from api.config import SessionLocal, create_db, reset_db  # noqa: E402
from api.persistence import PersistenceClient  # noqa: E402
from api.schemas.records import Question, Quiz  # noqa: E402
from api.services.quiz_service import QuizService  # noqa: E402
from infra.persistence.sqlalchemy_client import SqlAlchemyClient  # noqa: E402

STARTER_QUIZZES: list[dict] = [
    {
        "title": "Python Basics",
        "description": "Core syntax, built-in types and control flow.",
        "category": "fundamentals",
        "difficulty": "beginner",
        "language": "python",
        "questions": [
            {
                "question_text": "What does len([1, 2, 3]) return?",
                "question_type": "multiple_choice",
                "options": ["2", "3", "4", "An error"],
                "correct_answer": "3",
                "explanation": "len() returns the number of items in a sequence.",
            },
            {
                "question_text": "Python lists are immutable.",
                "question_type": "true_false",
                "options": ["True", "False"],
                "correct_answer": "False",
                "explanation": "Lists can be changed in place; tuples are the immutable sequence type.",
            },
            {
                "question_text": "Complete the loop header: for i in ____(5):",
                "question_type": "code_completion",
                "options": [],
                "correct_answer": "range",
                "explanation": "range(5) yields 0 through 4.",
                "points": 2,
            },
        ],
    },
    {
        "title": "Sorting Algorithms",
        "description": "Complexity and behaviour of classic sorts.",
        "category": "algorithms",
        "difficulty": "intermediate",
        "language": "javascript",
        "questions": [
            {
                "question_text": "Average time complexity of quicksort?",
                "question_type": "multiple_choice",
                "options": ["O(n)", "O(n log n)", "O(n^2)", "O(log n)"],
                "correct_answer": "O(n log n)",
                "explanation": "Balanced partitions give n log n on average.",
                "points": 2,
            },
            {
                "question_text": "Array.prototype.sort() compares numbers numerically by default.",
                "question_type": "true_false",
                "options": ["True", "False"],
                "correct_answer": "False",
                "explanation": "Without a comparator, elements are compared as strings.",
            },
        ],
    },
]


def seed(client: PersistenceClient) -> int:
    """Insert starter quizzes whose title is not present yet. Returns how many were added."""
    service = QuizService(client)
    added = 0
    for entry in STARTER_QUIZZES:
        if client.select("quizzes", {"title": entry["title"]}, limit=1):
            print(f"  skip: {entry['title']} (exists)")
            continue
        fields = {k: v for k, v in entry.items() if k != "questions"}
        quiz = Quiz(**fields)
        questions = [
            Question(quiz_id=quiz.id, order_index=idx, **q)
            for idx, q in enumerate(entry["questions"])
        ]
        service.create_quiz(quiz, questions)
        print(f"  added: {quiz.title} ({len(questions)} questions)")
        added += 1
    return added


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed starter quizzes")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()

    if args.reset:
        reset_db()
    else:
        create_db()

    db = SessionLocal()
    try:
        added = seed(SqlAlchemyClient(db))
    finally:
        db.close()
    print(f"Done. {added} quiz(zes) added.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
