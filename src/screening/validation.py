"""
Required-question validation.

The screening wizard only lets an applicant submit once every question they
were shown and that is marked required has an answer. Questions hidden by
their display condition are skipped together with their follow-ups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from .answers import AnswerSet
from .display_conditions import is_displayed
from .questions import QuestionDefinition, parse_questions


@dataclass
class RequiredAnswersReport:
    valid: bool
    missing_questions: List[str] = field(default_factory=list)


def _collect_missing(
    questions: Iterable[QuestionDefinition],
    answers: AnswerSet,
    missing: List[str],
) -> None:
    for question in questions:
        if not is_displayed(question.display_condition, answers):
            continue
        if question.required and (
            not answers.is_answered(question.id) or answers[question.id].is_falsy
        ):
            missing.append(question.id)
        if question.follow_up_questions:
            _collect_missing(question.follow_up_questions, answers, missing)


def validate_required_answers(
    answers: Optional[Mapping[str, Any]],
    questions: Optional[Iterable[Any]],
) -> RequiredAnswersReport:
    """
    Check that every displayed required question, follow-ups included, has
    a truthy answer. Blank strings, empty selections and False count as
    missing, matching how the screening wizard gates submission.

    Raises:
        ValidationError: the questionnaire itself is malformed
    """
    answer_set = AnswerSet.from_raw(answers)
    missing: List[str] = []
    _collect_missing(parse_questions(questions), answer_set, missing)
    return RequiredAnswersReport(valid=not missing, missing_questions=missing)
