"""
WOTC Target Group Determination.

Reference: IRS Form 8850 and ETA Form 9061.

Eligibility is metadata-driven: any dynamically configured questionnaire
works as long as its questions carry a linked target group and a trigger
answer. On top of the questionnaire, the summer youth group is granted from
the applicant's age at hire and the hire month alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from calculator.decimal_math import ZERO, to_float
from rules.default_target_groups import SUMMER_YOUTH_CODE
from rules.target_groups import Category, RuleCatalog

from .answers import AnswerSet
from .code_normalizer import CodeNormalizer
from .primary_selector import PrimarySelector
from .questions import QuestionDefinition, flatten_questions, parse_questions
from .trigger_matcher import TriggerMatcher

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str, None]

NO_MATCH_REASON = "No qualifying target groups identified"
SUMMER_YOUTH_REASON = "Summer youth employee (age 16-17, hired during summer)"

SUMMER_YOUTH_MIN_AGE = 16
SUMMER_YOUTH_MAX_AGE = 17
SUMMER_HIRE_MONTHS = range(5, 10)  # May through September


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of one screening evaluation."""
    is_eligible: bool
    matched_categories: Tuple[str, ...] = ()  # catalog declaration order
    primary_category: Optional[str] = None
    max_potential_credit: Decimal = ZERO
    reason: str = NO_MATCH_REASON
    reasons: Tuple[str, ...] = field(default=())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_eligible": self.is_eligible,
            "matched_categories": list(self.matched_categories),
            "primary_category": self.primary_category,
            "max_potential_credit": to_float(self.max_potential_credit),
            "reason": self.reason,
            "reasons": list(self.reasons),
        }


def parse_date(value: DateInput) -> Optional[date]:
    """
    Parse a date given as date, datetime or ISO-8601 string.

    Returns None for missing or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.warning(f"Ignoring unparseable date: {value!r}")
            return None
    logger.warning(f"Ignoring date of unsupported type {type(value).__name__}")
    return None


def age_on(date_of_birth: date, on_date: date) -> int:
    """Whole years completed on ``on_date`` (last-birthday rule)."""
    age = on_date.year - date_of_birth.year
    if (on_date.month, on_date.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def qualifies_as_summer_youth(date_of_birth: DateInput, hire_date: DateInput) -> bool:
    """Age 16 or 17 on the hire date, hired May 1 through September 30."""
    dob = parse_date(date_of_birth)
    hired = parse_date(hire_date)
    if dob is None or hired is None:
        return False
    age = age_on(dob, hired)
    return (
        SUMMER_YOUTH_MIN_AGE <= age <= SUMMER_YOUTH_MAX_AGE
        and hired.month in SUMMER_HIRE_MONTHS
    )


class EligibilityEvaluator:
    """
    Walks a questionnaire against an applicant's answers.

    ``skip_falsy_answers`` keeps the historical behaviour of ignoring answers
    that are present but falsy ("", 0, False, empty selection) exactly like
    unanswered questions. Set it to False to let an explicitly recorded falsy
    answer match a trigger.

    Each target group contributes one reason, from the first question that
    matched it; further questions pointing at an already matched group add
    no reason. Malformed questions are logged and skipped so that one bad
    entry in a stored questionnaire never fails the whole evaluation.
    """

    def __init__(
        self,
        catalog: RuleCatalog,
        matcher: Optional[TriggerMatcher] = None,
        normalizer: Optional[CodeNormalizer] = None,
        selector: Optional[PrimarySelector] = None,
        skip_falsy_answers: bool = True,
    ):
        self.catalog = catalog
        self.matcher = matcher or TriggerMatcher()
        self.normalizer = normalizer or CodeNormalizer(catalog)
        self.selector = selector or PrimarySelector(catalog)
        self.skip_falsy_answers = skip_falsy_answers

    def evaluate(
        self,
        answers: Optional[Mapping[str, Any]],
        questions: Optional[Iterable[Any]],
        date_of_birth: DateInput = None,
        hire_date: DateInput = None,
    ) -> EligibilityResult:
        """
        Determine target group eligibility.

        Args:
            answers: Question id to answer (raw values or an AnswerSet)
            questions: Question definitions (parsed or raw dicts)
            date_of_birth: Applicant date of birth
            hire_date: Date of hire

        Returns:
            EligibilityResult with every matched group and the primary one
        """
        answer_set = AnswerSet.from_raw(answers)
        matched: Dict[str, Category] = {}
        reasons: List[str] = []

        for question in flatten_questions(parse_questions(questions, skip_invalid=True)):
            if not question.screens_for_category:
                continue

            if not answer_set.is_answered(question.id):
                continue  # no entry is no signal
            answer = answer_set[question.id]
            if self.skip_falsy_answers and answer.is_falsy:
                continue

            if not self.matcher.matches(answer, question.trigger):
                continue

            code = self.normalizer.normalize(question.linked_category_code)
            if code is None:
                logger.debug(
                    f"Question {question.id} links unknown target group "
                    f"{question.linked_category_code!r}, ignoring"
                )
                continue

            category = self.catalog.lookup(code)
            if code not in matched:
                matched[code] = category
                reasons.append(f"Qualified for {category.display_name}")

        if qualifies_as_summer_youth(date_of_birth, hire_date):
            youth = self.catalog.lookup(SUMMER_YOUTH_CODE)
            if youth is None:
                logger.warning("Summer youth override applies but catalog has no XI group")
            elif SUMMER_YOUTH_CODE not in matched:
                matched[SUMMER_YOUTH_CODE] = youth
                reasons.append(SUMMER_YOUTH_REASON)

        return self._build_result(matched, reasons)

    def _build_result(self, matched: Dict[str, Category], reasons: List[str]) -> EligibilityResult:
        if not matched:
            return EligibilityResult(is_eligible=False)

        ordered = tuple(sorted(matched, key=self.catalog.position))
        primary = self.selector.select(ordered)

        return EligibilityResult(
            is_eligible=True,
            matched_categories=ordered,
            primary_category=primary.code,
            max_potential_credit=primary.max_credit,
            reason="; ".join(reasons),
            reasons=tuple(reasons),
        )
