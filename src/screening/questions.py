"""
Questionnaire question metadata.

Questionnaires are authored in the admin UI and stored as JSON, so the same
field can arrive under the authoring names (``question``, ``type``,
``targetGroup``, ``eligibilityTrigger``) or the snake_case API names.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .answers import normalize_primitive
from .display_conditions import DisplayCondition

logger = logging.getLogger(__name__)


class AnswerType(str, Enum):
    """Kinds of answer a question collects."""
    TEXT = "text"
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    DATE = "date"
    FILE = "file"


# Widget names used by the questionnaire builder
_ANSWER_TYPE_ALIASES = {
    "text": AnswerType.TEXT,
    "number": AnswerType.TEXT,
    "free_text": AnswerType.TEXT,
    "radio": AnswerType.SINGLE_CHOICE,
    "select": AnswerType.SINGLE_CHOICE,
    "single_choice": AnswerType.SINGLE_CHOICE,
    "checkbox": AnswerType.MULTI_CHOICE,
    "multi_choice": AnswerType.MULTI_CHOICE,
    "date": AnswerType.DATE,
    "file": AnswerType.FILE,
}


class QuestionDefinition(BaseModel):
    """One screening question and its eligibility mapping."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(description="Unique within a questionnaire")
    prompt: str = Field(
        default="",
        validation_alias=AliasChoices("prompt", "question"),
        description="Question text shown to the applicant",
    )
    answer_type: AnswerType = Field(
        default=AnswerType.TEXT,
        validation_alias=AliasChoices("answer_type", "answerType", "type"),
    )
    linked_category_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("linked_category_code", "targetGroup", "target_group"),
        description="Target group this question screens for (code or display name)",
    )
    trigger_value: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices("trigger_value", "eligibilityTrigger", "eligibility_trigger"),
        description="Answer value, or list of values, that qualifies the applicant",
    )
    eligible_values: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices("eligible_values", "eligibleValues"),
        description="Older alternative to trigger_value",
    )
    required: bool = False
    options: Tuple[str, ...] = ()
    display_condition: Optional[DisplayCondition] = Field(
        default=None,
        validation_alias=AliasChoices("display_condition", "displayCondition"),
        description="Show the question only when earlier answers satisfy this",
    )
    follow_up_questions: Tuple["QuestionDefinition", ...] = Field(
        default=(),
        validation_alias=AliasChoices("follow_up_questions", "followUpQuestions"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return v if v is None else str(v).strip()

    @field_validator("answer_type", mode="before")
    @classmethod
    def _coerce_answer_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _ANSWER_TYPE_ALIASES.get(v.strip().lower().replace("-", "_"), AnswerType.TEXT)
        return v

    @field_validator("linked_category_code", mode="before")
    @classmethod
    def _blank_code_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("trigger_value", "eligible_values", mode="before")
    @classmethod
    def _normalize_trigger(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, (list, tuple, set, frozenset)):
            return tuple(normalize_primitive(item) for item in v if item is not None)
        return normalize_primitive(v)

    @field_validator("options", mode="before")
    @classmethod
    def _coerce_options(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, (list, tuple)):
            # numeric choices (ages, counts) are stored as numbers by some builders
            return tuple(str(o).strip() for o in v if o is not None)
        return v

    @property
    def trigger(self) -> Optional[Any]:
        """Effective trigger, preferring ``trigger_value`` over ``eligible_values``."""
        for candidate in (self.trigger_value, self.eligible_values):
            if candidate is None or candidate == "" or candidate == ():
                continue
            return candidate
        return None

    @property
    def screens_for_category(self) -> bool:
        return bool(self.linked_category_code) and self.trigger is not None


QuestionDefinition.model_rebuild()


_FOLLOW_UP_KEYS = ("followUpQuestions", "follow_up_questions")


def _parse_or_skip(raw: Any) -> Optional[QuestionDefinition]:
    if isinstance(raw, QuestionDefinition):
        return raw
    if isinstance(raw, Mapping):
        # a bad follow-up drops only itself, not its parent
        for key in _FOLLOW_UP_KEYS:
            if isinstance(raw.get(key), (list, tuple)):
                kept = [q for q in (_parse_or_skip(f) for f in raw[key]) if q is not None]
                raw = {**raw, key: kept}
    try:
        return QuestionDefinition.model_validate(raw)
    except ValidationError as e:
        question_id = raw.get("id") if isinstance(raw, Mapping) else None
        logger.warning(
            f"Skipping malformed question {question_id!r}: {e.error_count()} validation errors"
        )
        return None


def parse_questions(
    questions: Optional[Iterable[Any]],
    skip_invalid: bool = False,
) -> List[QuestionDefinition]:
    """
    Validate raw question dicts (or pass through parsed definitions).

    Args:
        questions: Raw question dicts or QuestionDefinition instances
        skip_invalid: Log and drop malformed questions instead of raising

    Raises:
        ValidationError: a question is malformed and ``skip_invalid`` is False
    """
    if skip_invalid:
        return [q for q in (_parse_or_skip(raw) for raw in questions or ()) if q is not None]

    parsed: List[QuestionDefinition] = []
    for question in questions or ():
        if isinstance(question, QuestionDefinition):
            parsed.append(question)
        else:
            parsed.append(QuestionDefinition.model_validate(question))
    return parsed


def flatten_questions(questions: Iterable[QuestionDefinition]) -> List[QuestionDefinition]:
    """Depth-first list of questions including nested follow-ups."""
    flat: List[QuestionDefinition] = []
    for question in questions:
        flat.append(question)
        if question.follow_up_questions:
            flat.extend(flatten_questions(question.follow_up_questions))
    return flat
