"""
Screening answers.

Stored questionnaire responses are loosely typed JSON: a radio button yields
a string, a checkbox group a list, some older clients send booleans. They are
normalized here into an explicit tagged union so that matching dispatches on
the tag instead of inspecting raw values.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

# Primitive answer values. bool is kept distinct from int when comparing.
Primitive = Union[str, bool, int, float]


def normalize_primitive(value: Any) -> Any:
    """Trim strings; leave other primitives untouched."""
    if isinstance(value, str):
        return value.strip()
    return value


@dataclass(frozen=True)
class ScalarAnswer:
    """Single value answer (text, radio, select, date)."""
    value: Primitive
    answered: bool = True

    @property
    def is_falsy(self) -> bool:
        return not self.value


@dataclass(frozen=True)
class MultiAnswer:
    """Multi-select answer (checkbox group)."""
    values: Tuple[Primitive, ...]
    answered: bool = True

    @property
    def is_falsy(self) -> bool:
        return len(self.values) == 0


Answer = Union[ScalarAnswer, MultiAnswer]


def to_answer(raw: Any) -> Optional[Answer]:
    """
    Wrap a raw response value.

    Returns None for a missing value (``None``); everything else is recorded
    as answered, including ``""``, ``0`` and ``False``.
    """
    if raw is None:
        return None
    if isinstance(raw, (ScalarAnswer, MultiAnswer)):
        return raw
    if isinstance(raw, (list, tuple, set, frozenset)):
        items = raw if not isinstance(raw, (set, frozenset)) else sorted(raw, key=str)
        return MultiAnswer(tuple(normalize_primitive(v) for v in items if v is not None))
    if isinstance(raw, (str, bool, int, float)):
        return ScalarAnswer(normalize_primitive(raw))
    # dates, Decimals and other objects compare by their string form
    return ScalarAnswer(str(raw).strip())


class AnswerSet(Mapping[str, Answer]):
    """Read-only mapping of question id to recorded answer."""

    def __init__(self, answers: Optional[Mapping[str, Answer]] = None):
        self._answers: Mapping[str, Answer] = MappingProxyType(dict(answers or {}))

    @classmethod
    def from_raw(cls, responses: Optional[Mapping[str, Any]]) -> "AnswerSet":
        """
        Build from a raw ``{question_id: value}`` response dict.

        Keys whose value is None are treated as not answered and dropped.
        """
        if isinstance(responses, AnswerSet):
            return responses
        answers: Dict[str, Answer] = {}
        for question_id, raw in (responses or {}).items():
            answer = to_answer(raw)
            if answer is not None:
                answers[str(question_id)] = answer
        return cls(answers)

    def is_answered(self, question_id: str) -> bool:
        answer = self._answers.get(question_id)
        return answer is not None and answer.answered

    def __getitem__(self, question_id: str) -> Answer:
        return self._answers[question_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"AnswerSet({dict(self._answers)!r})"
