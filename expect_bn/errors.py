"""Assertion failure types.

Both errors subclass AssertionError so test runners report them as ordinary
test failures rather than errors.
"""

from __future__ import annotations

from typing import Any


class ExpectationError(AssertionError):
    """An expectation did not hold.

    Attributes:
        message: Rendered failure message
        actual: Value reported as the actual side, if any
        expected: Value reported as the expected side, if any
        show_diff: Whether a runner should display a diff of actual/expected
    """

    def __init__(
        self,
        message: str,
        actual: Any = None,
        expected: Any = None,
        show_diff: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.actual = actual
        self.expected = expected
        self.show_diff = show_diff


class ConversionError(ExpectationError):
    """An operand could not be converted to a big number."""

    pass
