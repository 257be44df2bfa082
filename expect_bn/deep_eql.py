"""Structural deep equality with a pluggable per-pair comparator.

The walker visits every pair of corresponding values, containers included.
A comparator may decide a pair (EQUAL / NOT_EQUAL) or abstain
(INDETERMINATE), in which case the default rules below apply to that pair:

1. Identical objects are equal.
2. Primitive values (None, bool, numbers, str, bytes) compare with ==,
   with NaN equal to NaN. A primitive never equals a non-primitive.
3. Values of different types are unequal.
4. Mappings compare key sets plainly and walk values; lists and tuples walk
   items pairwise; sets use ==; dataclasses, pydantic models and plain
   objects walk their fields; anything else falls back to ==.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable, Mapping
from enum import Enum
from numbers import Number
from typing import Any

from pydantic import BaseModel


class Comparison(Enum):
    """Result of a per-pair comparator."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    INDETERMINATE = "indeterminate"

    @classmethod
    def of(cls, equal: bool) -> Comparison:
        return cls.EQUAL if equal else cls.NOT_EQUAL


Comparator = Callable[[Any, Any], Comparison]

_PRIMITIVES = (type(None), bool, Number, str, bytes)


def deep_equal(left: Any, right: Any, comparator: Comparator | None = None) -> bool:
    """Compare two values structurally.

    Args:
        left: First value
        right: Second value
        comparator: Optional per-pair comparator consulted before the
            default rules for every visited pair

    Returns:
        True if the values are deeply equal
    """
    return _Walker(comparator).equal(left, right)


class _Walker:
    def __init__(self, comparator: Comparator | None) -> None:
        self.comparator = comparator
        # Pairs currently being compared; a revisit means a reference cycle
        self.in_progress: set[tuple[int, int]] = set()

    def equal(self, left: Any, right: Any) -> bool:
        if self.comparator is not None:
            result = self.comparator(left, right)
            if result is not Comparison.INDETERMINATE:
                return result is Comparison.EQUAL

        simple = _simple_equal(left, right)
        if simple is not None:
            return simple

        key = (id(left), id(right))
        if key in self.in_progress:
            return True
        self.in_progress.add(key)
        try:
            return self._extensive_equal(left, right)
        finally:
            self.in_progress.discard(key)

    def _extensive_equal(self, left: Any, right: Any) -> bool:
        if type(left) is not type(right):
            return False

        if isinstance(left, BaseModel):
            return self._fields_equal(dict(left), dict(right))
        if dataclasses.is_dataclass(left):
            return self._fields_equal(
                {f.name: getattr(left, f.name) for f in dataclasses.fields(left)},
                {f.name: getattr(right, f.name) for f in dataclasses.fields(right)},
            )
        if isinstance(left, Mapping):
            return self._fields_equal(left, right)
        if isinstance(left, (list, tuple)):
            if len(left) != len(right):
                return False
            return all(self.equal(a, b) for a, b in zip(left, right))
        if isinstance(left, (set, frozenset)):
            return bool(left == right)
        if hasattr(left, "__dict__") and not callable(left):
            return self._fields_equal(vars(left), vars(right))
        return bool(left == right)

    def _fields_equal(self, left: Mapping[Any, Any], right: Mapping[Any, Any]) -> bool:
        if set(left.keys()) != set(right.keys()):
            return False
        return all(self.equal(left[k], right[k]) for k in left)


def _simple_equal(left: Any, right: Any) -> bool | None:
    """Decide equality for identical or primitive values, else None."""
    if left is right:
        return True
    left_primitive = isinstance(left, _PRIMITIVES)
    right_primitive = isinstance(right, _PRIMITIVES)
    if left_primitive and right_primitive:
        if _is_nan(left) and _is_nan(right):
            return True
        # bool is a distinct type from int/float here (True != 1)
        if isinstance(left, bool) is not isinstance(right, bool):
            return False
        return bool(left == right)
    if left_primitive or right_primitive:
        return False
    return None


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)
