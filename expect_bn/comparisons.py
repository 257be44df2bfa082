"""Comparison implementations selected per assertion chain.

Every comparison verb and predicate property of Assertion delegates to a
Comparisons object. NativeComparisons is the default behaviour for plain
Python values; extensions register their own implementation under a flag
name (see Assertion.add_comparisons) and take over only for chains where
that flag is set.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sized
from datetime import date, datetime
from numbers import Real
from typing import TYPE_CHECKING, Any

from expect_bn.deep_eql import deep_equal
from expect_bn.display import display

if TYPE_CHECKING:
    from expect_bn.assertion import Assertion


class Comparisons(ABC):
    """One method per comparison verb or predicate property.

    Each method receives the assertion being evaluated plus the verb's call
    arguments, and either returns normally or raises ExpectationError.
    """

    @abstractmethod
    def equal(self, assertion: Assertion, expected: Any) -> None: ...

    @abstractmethod
    def above(self, assertion: Assertion, expected: Any) -> None: ...

    @abstractmethod
    def least(self, assertion: Assertion, expected: Any) -> None: ...

    @abstractmethod
    def below(self, assertion: Assertion, expected: Any) -> None: ...

    @abstractmethod
    def most(self, assertion: Assertion, expected: Any) -> None: ...

    @abstractmethod
    def close_to(self, assertion: Assertion, expected: Any, delta: Any) -> None: ...

    @abstractmethod
    def negative(self, assertion: Assertion) -> None: ...

    @abstractmethod
    def zero(self, assertion: Assertion) -> None: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_date(value: Any) -> bool:
    return isinstance(value, (date, datetime))


class NativeComparisons(Comparisons):
    """Default comparisons for numbers, dates and arbitrary objects."""

    def equal(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        subject = assertion.object
        if assertion.flag("deep"):
            assertion.assert_(
                deep_equal(subject, expected),
                "expected #{this} to deeply equal #{exp}",
                "expected #{this} to not deeply equal #{exp}",
                expected,
                subject,
                show_diff=True,
            )
        else:
            assertion.assert_(
                subject == expected,
                "expected #{this} to equal #{exp}",
                "expected #{this} to not equal #{exp}",
                expected,
                subject,
                show_diff=True,
            )

    def above(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        self._check_ordered(assertion, expected, "above")
        assertion.assert_(
            assertion.object > expected,
            f"expected #{{this}} to be above {display(expected)}",
            f"expected #{{this}} to be at most {display(expected)}",
            expected,
        )

    def least(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        self._check_ordered(assertion, expected, "least")
        assertion.assert_(
            assertion.object >= expected,
            f"expected #{{this}} to be at least {display(expected)}",
            f"expected #{{this}} to be below {display(expected)}",
            expected,
        )

    def below(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        self._check_ordered(assertion, expected, "below")
        assertion.assert_(
            assertion.object < expected,
            f"expected #{{this}} to be below {display(expected)}",
            f"expected #{{this}} to be at least {display(expected)}",
            expected,
        )

    def most(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        self._check_ordered(assertion, expected, "most")
        assertion.assert_(
            assertion.object <= expected,
            f"expected #{{this}} to be at most {display(expected)}",
            f"expected #{{this}} to be above {display(expected)}",
            expected,
        )

    def close_to(self, assertion: Assertion, expected: Any, delta: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        subject = assertion.object
        if not _is_number(subject):
            assertion.fail(f"expected {display(subject)} to be a number")
        if not _is_number(expected) or not _is_number(delta):
            assertion.fail("the arguments to close_to must be numbers")
        assertion.assert_(
            abs(subject - expected) <= delta,
            f"expected #{{this}} to be close to {display(expected)} +/- {display(delta)}",
            f"expected #{{this}} not to be close to {display(expected)} +/- {display(delta)}",
        )

    def negative(self, assertion: Assertion) -> None:
        __tracebackhide__ = assertion.hide_traceback
        subject = assertion.object
        if not _is_number(subject):
            assertion.fail(f"expected {display(subject)} to be a number")
        assertion.assert_(
            subject < 0,
            "expected #{this} to be negative",
            "expected #{this} to not be negative",
        )

    def zero(self, assertion: Assertion) -> None:
        __tracebackhide__ = assertion.hide_traceback
        subject = assertion.object
        if _is_number(subject):
            assertion.assert_(
                subject == 0,
                "expected #{this} to be zero",
                "expected #{this} to not be zero",
            )
        elif isinstance(subject, Sized):
            assertion.assert_(
                len(subject) == 0,
                "expected #{this} to be empty",
                "expected #{this} not to be empty",
            )
        else:
            assertion.fail(f"expected {display(subject)} to be a number or a sized collection")

    @staticmethod
    def _check_ordered(assertion: Assertion, expected: Any, verb: str) -> None:
        __tracebackhide__ = assertion.hide_traceback
        subject = assertion.object
        if _is_date(subject):
            if not _is_date(expected):
                assertion.fail(f"the argument to {verb} must be a date")
        elif _is_number(subject):
            if not _is_number(expected):
                assertion.fail(f"the argument to {verb} must be a number")
        else:
            assertion.fail(f"expected {display(subject)} to be a number or a date")


NATIVE_COMPARISONS = NativeComparisons()
