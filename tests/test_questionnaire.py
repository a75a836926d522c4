"""
Tests for question metadata parsing and required-answer validation.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pydantic import ValidationError

from screening.display_conditions import CompositeCondition, SimpleCondition
from screening.questions import AnswerType, QuestionDefinition, flatten_questions, parse_questions
from screening.validation import validate_required_answers


class TestQuestionDefinition:
    """Tests for parsing stored questionnaire JSON."""

    def test_authoring_field_names(self):
        question = QuestionDefinition.model_validate({
            "id": "q1",
            "question": "Do you receive SSI?",
            "type": "radio",
            "options": ["Yes", "No"],
            "targetGroup": "X",
            "eligibilityTrigger": " Yes ",
            "required": True,
        })
        assert question.prompt == "Do you receive SSI?"
        assert question.answer_type is AnswerType.SINGLE_CHOICE
        assert question.linked_category_code == "X"
        assert question.trigger == "Yes"
        assert question.options == ("Yes", "No")
        assert question.screens_for_category

    def test_api_field_names(self):
        question = QuestionDefinition.model_validate({
            "id": "q1",
            "prompt": "Assistance received",
            "answer_type": "multi_choice",
            "linked_category_code": "IX",
            "trigger_value": ["SNAP", "Food Stamps"],
        })
        assert question.answer_type is AnswerType.MULTI_CHOICE
        assert question.trigger == ("SNAP", "Food Stamps")

    @pytest.mark.parametrize("raw,expected", [
        ("checkbox", AnswerType.MULTI_CHOICE),
        ("select", AnswerType.SINGLE_CHOICE),
        ("number", AnswerType.TEXT),
        ("date", AnswerType.DATE),
        ("file", AnswerType.FILE),
        ("unheard-of", AnswerType.TEXT),
    ])
    def test_answer_type_aliases(self, raw, expected):
        assert QuestionDefinition(id="q", type=raw).answer_type is expected

    def test_numeric_id_coerced(self):
        assert QuestionDefinition.model_validate({"id": 7}).id == "7"

    def test_blank_group_is_none(self):
        question = QuestionDefinition.model_validate({"id": "q", "targetGroup": " ", "eligibilityTrigger": "Yes"})
        assert question.linked_category_code is None
        assert not question.screens_for_category

    def test_null_options(self):
        assert QuestionDefinition.model_validate({"id": "q", "options": None}).options == ()

    def test_numeric_options_coerced(self):
        question = QuestionDefinition.model_validate({"id": "q", "options": [16, 17, "18+"]})
        assert question.options == ("16", "17", "18+")

    def test_display_condition_parsed(self):
        question = QuestionDefinition.model_validate({
            "id": "q",
            "displayCondition": {
                "logic": "and",
                "conditions": [
                    {"sourceQuestionId": "vet", "operator": "equals", "value": "Yes"},
                    {"sourceQuestionId": "age", "operator": "greaterThan", "value": 17},
                ],
            },
        })
        condition = question.display_condition
        assert isinstance(condition, CompositeCondition)
        assert condition.logic == "AND"
        assert isinstance(condition.conditions[0], SimpleCondition)
        assert condition.conditions[0].source_question_id == "vet"

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            QuestionDefinition.model_validate({"question": "No id"})

    def test_frozen(self):
        question = QuestionDefinition(id="q")
        with pytest.raises(ValidationError):
            question.required = True

    def test_flatten_follow_ups(self):
        questions = parse_questions([
            {"id": "a", "followUpQuestions": [{"id": "b", "followUpQuestions": [{"id": "c"}]}]},
            {"id": "d"},
        ])
        assert [q.id for q in flatten_questions(questions)] == ["a", "b", "c", "d"]

    def test_parse_strict_by_default(self):
        with pytest.raises(ValidationError):
            parse_questions([{"id": "a"}, {"question": "No id"}])

    def test_parse_skip_invalid(self):
        questions = parse_questions(
            [{"id": "a", "followUpQuestions": [{"question": "No id"}, {"id": "b"}]}, {"question": "No id"}],
            skip_invalid=True,
        )
        assert [q.id for q in flatten_questions(questions)] == ["a", "b"]


class TestRequiredAnswers:
    """Tests for required-question validation."""

    def test_all_answered(self, standard_questions):
        answers = {"q1": "No", "q2": "No", "q3": "No", "q4": "No", "q6": "2000-01-01"}
        report = validate_required_answers(answers, standard_questions)
        assert report.valid
        assert report.missing_questions == []

    def test_missing_and_blank(self, standard_questions):
        answers = {"q1": "Yes", "q2": "", "q3": None}
        report = validate_required_answers(answers, standard_questions)
        assert not report.valid
        assert report.missing_questions == ["q2", "q3", "q4", "q6"]

    def test_optional_questions_not_required(self, standard_questions):
        answers = {"q1": "No", "q2": "No", "q3": "No", "q4": "No", "q6": "2000-01-01", "q5": []}
        assert validate_required_answers(answers, standard_questions).valid

    def test_required_follow_up(self):
        questions = [{"id": "a", "followUpQuestions": [{"id": "b", "required": True}]}]
        report = validate_required_answers({}, questions)
        assert report.missing_questions == ["b"]

    def test_empty_inputs(self):
        assert validate_required_answers(None, None).valid

    def test_hidden_required_follow_up_skipped(self):
        questions = [
            {"id": "vet", "required": True},
            {
                "id": "vet_branch",
                "required": True,
                "displayCondition": {"sourceQuestionId": "vet", "operator": "equals", "value": "Yes"},
            },
        ]
        assert validate_required_answers({"vet": "No"}, questions).valid
        report = validate_required_answers({"vet": "Yes"}, questions)
        assert report.missing_questions == ["vet_branch"]

    def test_hidden_question_hides_its_follow_ups(self):
        questions = [
            {"id": "vet", "required": True},
            {
                "id": "disabled",
                "displayCondition": {"sourceQuestionId": "vet", "operator": "equals", "value": "Yes"},
                "followUpQuestions": [{"id": "rating", "required": True}],
            },
        ]
        assert validate_required_answers({"vet": "No"}, questions).valid
        assert validate_required_answers({"vet": "Yes"}, questions).missing_questions == ["rating"]

    def test_condition_on_unanswered_source(self):
        questions = [{
            "id": "q",
            "required": True,
            "displayCondition": {"sourceQuestionId": "other", "operator": "exists"},
        }]
        assert validate_required_answers({}, questions).valid
