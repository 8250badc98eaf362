"""
Quiz attempt scoring. Pure functions; no I/O and no timing.

Answers are keyed by question position in the ordered question list and
compared to `correct_answer` with exact string equality (no case or
whitespace normalization). A position missing from `answers` is incorrect.
A question set worth zero points (only possible when it is empty, since
questions require `points > 0`) scores 0.0 percent.
"""

from typing import Mapping, Sequence

from api.schemas.quiz_schemas import QuestionResult, ScoreResult
from api.schemas.records import AnswerEntry, Question


def is_correct(question: Question, submitted: str | None) -> bool:
    return submitted is not None and submitted == question.correct_answer


def score(questions: Sequence[Question], answers: Mapping[int, str]) -> ScoreResult:
    total = sum(q.points for q in questions)
    achieved = sum(q.points for idx, q in enumerate(questions) if is_correct(q, answers.get(idx)))
    percentage = (achieved / total) * 100 if total > 0 else 0.0
    return ScoreResult(achieved_points=achieved, total_points=total, percentage=percentage)


def grade(questions: Sequence[Question], answers: Mapping[int, str]) -> list[QuestionResult]:
    """Per-question breakdown for the results screen."""
    results: list[QuestionResult] = []
    for idx, q in enumerate(questions):
        submitted = answers.get(idx)
        results.append(
            QuestionResult(
                question_id=q.id,
                submitted=submitted,
                correct_answer=q.correct_answer,
                is_correct=is_correct(q, submitted),
                points=q.points,
                explanation=q.explanation,
            )
        )
    return results


def build_answer_log(questions: Sequence[Question], answers: Mapping[int, str]) -> list[AnswerEntry]:
    """(question_id, answer) pairs stored on the attempt, in question order. Out-of-range indices are dropped."""
    return [
        AnswerEntry(question_id=questions[idx].id, answer=answer)
        for idx, answer in sorted(answers.items())
        if 0 <= idx < len(questions)
    ]
