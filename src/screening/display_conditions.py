"""
Question display conditions.

A question can be shown only when earlier answers satisfy a condition, for
example the branch-of-service follow-up only when the applicant answered
"Yes" to the veteran question. Conditions are either a single predicate on
one source question or an AND/OR composite of further conditions.

Unknown operators and logic keywords evaluate to False, which hides the
question.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .answers import AnswerSet, MultiAnswer, ScalarAnswer, normalize_primitive
from .trigger_matcher import values_equal


class SimpleCondition(BaseModel):
    """Predicate on the answer to one source question."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    source_question_id: str = Field(
        validation_alias=AliasChoices("source_question_id", "sourceQuestionId"),
    )
    operator: str = Field(description="equals, notEquals, includes, greaterThan, lessThan or exists")
    value: Any = None

    @field_validator("source_question_id", mode="before")
    @classmethod
    def _coerce_source_id(cls, v: Any) -> Any:
        return v if v is None else str(v).strip()

    @field_validator("value", mode="before")
    @classmethod
    def _normalize_value(cls, v: Any) -> Any:
        return normalize_primitive(v)


class CompositeCondition(BaseModel):
    """AND/OR over nested conditions."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    logic: str
    conditions: List[Union["CompositeCondition", SimpleCondition]] = Field(default_factory=list)

    @field_validator("logic", mode="before")
    @classmethod
    def _upper_logic(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


CompositeCondition.model_rebuild()

DisplayCondition = Union[CompositeCondition, SimpleCondition]


def _as_number(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


def _compare(answer_value: Any, condition_value: Any, greater: bool) -> bool:
    left = _as_number(answer_value)
    right = _as_number(condition_value)
    if left is None or right is None:
        return False
    return left > right if greater else left < right


def _evaluate_simple(condition: SimpleCondition, answers: AnswerSet) -> bool:
    answer = answers.get(condition.source_question_id)
    operator = condition.operator

    if operator == "exists":
        if answer is None:
            return False
        return not (isinstance(answer, ScalarAnswer) and answer.value == "")

    if operator == "equals":
        return isinstance(answer, ScalarAnswer) and values_equal(answer.value, condition.value)

    if operator == "notEquals":
        return not (isinstance(answer, ScalarAnswer) and values_equal(answer.value, condition.value))

    if operator == "includes":
        if isinstance(answer, MultiAnswer):
            return any(values_equal(v, condition.value) for v in answer.values)
        if isinstance(answer, ScalarAnswer) and isinstance(answer.value, str):
            return isinstance(condition.value, str) and condition.value in answer.value
        return False

    if operator in ("greaterThan", "lessThan"):
        if not isinstance(answer, ScalarAnswer):
            return False
        return _compare(answer.value, condition.value, greater=operator == "greaterThan")

    return False


def evaluate_display_condition(condition: DisplayCondition, answers: AnswerSet) -> bool:
    """True when the condition holds for the recorded answers."""
    if isinstance(condition, CompositeCondition):
        if condition.logic == "AND":
            return all(evaluate_display_condition(c, answers) for c in condition.conditions)
        if condition.logic == "OR":
            return any(evaluate_display_condition(c, answers) for c in condition.conditions)
        return False
    return _evaluate_simple(condition, answers)


def is_displayed(condition: Optional[DisplayCondition], answers: AnswerSet) -> bool:
    """Questions without a condition are always shown."""
    if condition is None:
        return True
    return evaluate_display_condition(condition, answers)
