"""
Trigger matching.

A question's trigger is the answer value (or any of several values) that
qualifies an applicant for the linked target group.
"""

from __future__ import annotations

from typing import Any, Iterable, Tuple

from .answers import Answer, MultiAnswer, ScalarAnswer, normalize_primitive


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def values_equal(a: Any, b: Any) -> bool:
    """Equality on trimmed primitives, without coercion across kinds."""
    a = normalize_primitive(a)
    b = normalize_primitive(b)
    if _kind(a) != _kind(b):
        return False
    return a == b


def _trigger_values(trigger: Any) -> Tuple[Any, ...]:
    if isinstance(trigger, (list, tuple, set, frozenset)):
        return tuple(trigger)
    return (trigger,)


def _contains(values: Iterable[Any], candidate: Any) -> bool:
    return any(values_equal(v, candidate) for v in values)


class TriggerMatcher:
    """Stateless predicate: does an answer satisfy a trigger?"""

    def matches(self, answer: Answer, trigger: Any) -> bool:
        """
        Args:
            answer: Recorded answer
            trigger: A single value or a collection of values

        Returns:
            True when any trigger value equals a scalar answer, or appears
            among the values of a multi-select answer
        """
        if trigger is None:
            return False
        triggers = _trigger_values(trigger)

        if isinstance(answer, MultiAnswer):
            return any(_contains(answer.values, t) for t in triggers)
        if isinstance(answer, ScalarAnswer):
            return _contains(triggers, answer.value)
        return False
