"""Evaluate a single eligibility criterion against a resolved profile value.

Malformed criteria never raise: a value of the wrong shape for the
operator makes the criterion fail (NOT_IN is the one exception, see
:func:`evaluate_criterion`).  This keeps one bad catalog record from
aborting a whole matching pass.
"""

from __future__ import annotations

import operator as op
from collections.abc import Callable
from typing import Any, Final

from src.models.enums import ComparisonOperator
from src.models.scheme import EligibilityCriterion, is_number

_ORDERING: Final[dict[ComparisonOperator, Callable[[Any, Any], bool]]] = {
    ComparisonOperator.GREATER_THAN: op.gt,
    ComparisonOperator.LESS_THAN: op.lt,
    ComparisonOperator.GREATER_THAN_OR_EQUALS: op.ge,
    ComparisonOperator.LESS_THAN_OR_EQUALS: op.le,
}


def _strict_equals(left: Any, right: Any) -> bool:
    # bool is an int subclass; True must not equal 1 here
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _membership(options: Any, value: Any) -> bool | None:
    """Membership test, or ``None`` when ``options`` is not a collection."""
    if not isinstance(options, list | tuple | set | frozenset):
        return None
    return any(_strict_equals(value, option) for option in options)


def _between(value: Any, bounds: Any) -> bool:
    if not (isinstance(bounds, list | tuple) and len(bounds) == 2 and is_number(value)):
        return False
    low, high = bounds
    if not (is_number(low) and is_number(high)):
        return False
    return low <= value <= high


def _text_contains(value: Any, needle: Any) -> bool:
    if not isinstance(needle, str):
        return False
    needle = needle.lower()
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, list | tuple):
        return any(isinstance(item, str) and needle in item.lower() for item in value)
    return False


def evaluate_criterion(criterion: EligibilityCriterion, value: Any) -> bool:
    """Return whether ``value`` satisfies ``criterion``.

    A missing value (``None``) passes optional criteria and fails
    mandatory ones.  NOT_IN against a criterion value that is not a
    collection returns ``True``, unlike IN which returns ``False``.
    Unknown operators never match.
    """
    if value is None:
        return not criterion.is_mandatory

    operator = criterion.operator
    target = criterion.value

    if operator == ComparisonOperator.EQUALS:
        return _strict_equals(value, target)
    if operator == ComparisonOperator.NOT_EQUALS:
        return not _strict_equals(value, target)
    if operator in _ORDERING:
        if not (is_number(value) and is_number(target)):
            return False
        return _ORDERING[ComparisonOperator(operator)](value, target)
    if operator == ComparisonOperator.IN:
        return _membership(target, value) is True
    if operator == ComparisonOperator.NOT_IN:
        return _membership(target, value) is not True
    if operator == ComparisonOperator.BETWEEN:
        return _between(value, target)
    if operator == ComparisonOperator.CONTAINS:
        return _text_contains(value, target)
    return False
