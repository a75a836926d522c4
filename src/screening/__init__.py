"""
WOTC screening: questionnaire answers to target group eligibility.
"""

from .answers import Answer, AnswerSet, MultiAnswer, ScalarAnswer, to_answer
from .code_normalizer import CodeNormalizer, TARGET_GROUP_ALIASES
from .display_conditions import (
    CompositeCondition,
    DisplayCondition,
    SimpleCondition,
    evaluate_display_condition,
    is_displayed,
)
from .eligibility import (
    EligibilityEvaluator,
    EligibilityResult,
    age_on,
    parse_date,
    qualifies_as_summer_youth,
)
from .primary_selector import PrimarySelector
from .questions import AnswerType, QuestionDefinition, parse_questions
from .trigger_matcher import TriggerMatcher
from .validation import RequiredAnswersReport, validate_required_answers

__all__ = [
    "Answer",
    "AnswerSet",
    "MultiAnswer",
    "ScalarAnswer",
    "to_answer",
    "CodeNormalizer",
    "TARGET_GROUP_ALIASES",
    "CompositeCondition",
    "DisplayCondition",
    "SimpleCondition",
    "evaluate_display_condition",
    "is_displayed",
    "EligibilityEvaluator",
    "EligibilityResult",
    "age_on",
    "parse_date",
    "qualifies_as_summer_youth",
    "PrimarySelector",
    "AnswerType",
    "QuestionDefinition",
    "parse_questions",
    "TriggerMatcher",
    "RequiredAnswersReport",
    "validate_required_answers",
]
