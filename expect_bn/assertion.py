"""Fluent assertion builder.

Usage:
    expect(total).to.equal(42)
    expect(items).to.deep.equal([1, 2, 3])
    expect(balance).to.be.bignumber.that.is_.above("1000000000000000000")

An Assertion carries the subject and a set of flags written by chain
properties (not_, deep, and any registered by plugins). Comparison verbs
look up the Comparisons implementation for the current flags and delegate
to it, so plugins change behaviour only for chains that opt in.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, NoReturn

import structlog

from expect_bn.comparisons import NATIVE_COMPARISONS, Comparisons
from expect_bn.config import get_config
from expect_bn.display import render
from expect_bn.errors import ExpectationError

logger = structlog.get_logger()

_MISSING: Any = object()

Plugin = Callable[[type["Assertion"]], None]


class Assertion:
    """A single assertion chain.

    Attributes:
        object: The value under test
    """

    # (flag name, implementation) pairs; later registrations take precedence
    _comparisons: ClassVar[list[tuple[str, Comparisons]]] = []

    def __init__(self, obj: Any, message: str | None = None) -> None:
        self.object = obj
        self._flags: dict[str, Any] = {"message": message}

    def __repr__(self) -> str:
        return f"Assertion({self.object!r})"

    # --- Flags ---

    def flag(self, name: str, value: Any = _MISSING) -> Any:
        """Read a flag, or set it when value is given.

        Unknown flags read as None.
        """
        if value is _MISSING:
            return self._flags.get(name)
        self._flags[name] = value
        return None

    @property
    def hide_traceback(self) -> bool:
        """Value for pytest's __tracebackhide__ in frames evaluating this chain."""
        return not get_config().include_stack

    # --- Core assertion primitive ---

    def assert_(
        self,
        expr: Any,
        message: str,
        negate_message: str,
        expected: Any = _MISSING,
        actual: Any = _MISSING,
        show_diff: bool | None = None,
    ) -> None:
        """Pass or fail this assertion.

        Args:
            expr: Truthy when the positive form holds
            message: Template used when the positive form fails
            negate_message: Template used when the negated form fails
            expected: Value substituted for #{exp} and reported as expected
            actual: Value substituted for #{act}; defaults to the subject
            show_diff: Override config.show_diff for this failure

        Raises:
            ExpectationError: If the (possibly negated) expression is false
        """
        __tracebackhide__ = self.hide_traceback
        ok = bool(expr)
        if self.flag("negate"):
            ok = not ok
        if ok:
            return

        if actual is _MISSING:
            actual = self.object
        reported_expected = None if expected is _MISSING else expected
        template = negate_message if self.flag("negate") else message
        text = render(template, self.object, actual, reported_expected)

        config = get_config()
        diff = config.show_diff if show_diff is None else show_diff and config.show_diff
        raise ExpectationError(
            self._prefixed(text),
            actual=actual,
            expected=reported_expected,
            show_diff=diff and expected is not _MISSING,
        )

    def fail(self, message: str) -> NoReturn:
        """Fail unconditionally, regardless of negation."""
        __tracebackhide__ = self.hide_traceback
        raise ExpectationError(self._prefixed(message))

    def _prefixed(self, text: str) -> str:
        custom = self.flag("message")
        return f"{custom}: {text}" if custom else text

    # --- Extension points ---

    @classmethod
    def add_property(cls, name: str, fn: Callable[[Assertion], Any]) -> None:
        """Register a chainable property.

        fn is called with the assertion on access; if it returns None the
        assertion itself is returned so the chain continues.
        """

        def getter(self: Assertion) -> Any:
            result = fn(self)
            return self if result is None else result

        setattr(cls, name, property(getter))
        logger.debug("property_registered", name=name)

    @classmethod
    def add_comparisons(cls, flag: str, comparisons: Comparisons) -> None:
        """Select comparisons for chains where flag is set.

        Registering the same flag again replaces the earlier implementation.
        """
        cls._comparisons = [(f, c) for f, c in cls._comparisons if f != flag]
        cls._comparisons.append((flag, comparisons))
        logger.debug(
            "comparisons_registered",
            flag=flag,
            implementation=type(comparisons).__name__,
        )

    def _dispatch(self) -> Comparisons:
        for flag, comparisons in reversed(self._comparisons):
            if self.flag(flag):
                return comparisons
        return NATIVE_COMPARISONS

    # --- Language chains ---

    @property
    def to(self) -> Assertion:
        return self

    @property
    def be(self) -> Assertion:
        return self

    @property
    def been(self) -> Assertion:
        return self

    @property
    def is_(self) -> Assertion:
        return self

    @property
    def that(self) -> Assertion:
        return self

    @property
    def which(self) -> Assertion:
        return self

    @property
    def and_(self) -> Assertion:
        return self

    @property
    def has(self) -> Assertion:
        return self

    @property
    def have(self) -> Assertion:
        return self

    @property
    def with_(self) -> Assertion:
        return self

    @property
    def at(self) -> Assertion:
        return self

    @property
    def of(self) -> Assertion:
        return self

    @property
    def same(self) -> Assertion:
        return self

    @property
    def but(self) -> Assertion:
        return self

    @property
    def does(self) -> Assertion:
        return self

    @property
    def still(self) -> Assertion:
        return self

    @property
    def also(self) -> Assertion:
        return self

    # --- Modifiers ---

    @property
    def not_(self) -> Assertion:
        self.flag("negate", True)
        return self

    @property
    def deep(self) -> Assertion:
        self.flag("deep", True)
        return self

    # --- Comparison verbs ---

    def equal(self, expected: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().equal(self, expected)
        return self

    equals = equal
    eq = equal

    def above(self, expected: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().above(self, expected)
        return self

    gt = above
    greater_than = above
    greaterThan = above  # noqa: N815

    def least(self, expected: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().least(self, expected)
        return self

    gte = least

    def below(self, expected: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().below(self, expected)
        return self

    lt = below
    less_than = below
    lessThan = below  # noqa: N815

    def most(self, expected: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().most(self, expected)
        return self

    lte = most

    def close_to(self, expected: Any, delta: Any) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().close_to(self, expected, delta)
        return self

    closeTo = close_to  # noqa: N815

    # --- Predicate properties ---

    @property
    def negative(self) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().negative(self)
        return self

    @property
    def zero(self) -> Assertion:
        __tracebackhide__ = self.hide_traceback
        self._dispatch().zero(self)
        return self


def expect(value: Any, message: str | None = None) -> Assertion:
    """Start an assertion chain on value.

    Args:
        value: The subject under test
        message: Optional prefix for failure messages
    """
    return Assertion(value, message)


_installed: list[Plugin] = []


def use(plugin: Plugin) -> None:
    """Install a plugin into Assertion once.

    Installing the same plugin object again is a no-op.
    """
    if plugin in _installed:
        logger.debug("plugin_already_installed", plugin=repr(plugin))
        return
    plugin(Assertion)
    _installed.append(plugin)
    logger.debug("plugin_installed", plugin=repr(plugin))
