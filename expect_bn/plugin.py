"""Big-number comparisons for the assertion builder.

Installing the plugin adds a `bignumber` chain property. Chains that access
it compare their subject and arguments as arbitrary-precision integers:

    use(bignumber())

    expect(balance).to.be.bignumber.equal("1000000000000000000000")
    expect("-3").to.be.bignumber.negative
    expect(fee).to.be.bignumber.close_to("500", "1")

Operands must be BN instances or strings. Native numbers are rejected
instead of being converted, since a float operand would already have lost
precision before reaching the comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from expect_bn.bn import BN, BNError
from expect_bn.comparisons import Comparisons
from expect_bn.config import get_config
from expect_bn.deep_eql import Comparison, deep_equal
from expect_bn.display import display
from expect_bn.errors import ConversionError

if TYPE_CHECKING:
    from expect_bn.assertion import Assertion

logger = structlog.get_logger()

MARKER = "bignumber"


class BigNumberComparisons(Comparisons):
    """Comparisons that operate on canonical big-number values.

    Attributes:
        bn_type: Big-number class used to parse string operands and to
            recognize big-number instances
    """

    def __init__(self, bn_type: type[BN] = BN) -> None:
        self.bn_type = bn_type

    def is_bn(self, value: Any) -> bool:
        """Recognize instances of bn_type or of a compatible copy of it."""
        return isinstance(value, self.bn_type) or self.bn_type.is_bn(value)

    def convert(self, value: Any) -> Any:
        """Convert an operand to a canonical big number.

        Raises:
            ConversionError: If value is not a big number or string, or the
                string does not parse as an integer
        """
        __tracebackhide__ = not get_config().include_stack
        if self.is_bn(value):
            return value
        if isinstance(value, str):
            try:
                return self.bn_type(value)
            except BNError as err:
                logger.debug("bignumber_conversion_rejected", reason="parse", value=value[:40])
                raise ConversionError(
                    f"expected {display(value)} to be a valid BN string: {err}",
                    actual=value,
                ) from err
        logger.debug("bignumber_conversion_rejected", reason="type", type=type(value).__name__)
        raise ConversionError(
            f"expected {display(value)} to be an instance of BN or string",
            actual=value,
        )

    def _parse_or_none(self, text: str) -> Any:
        try:
            return self.bn_type(text)
        except BNError:
            return None

    def _deep_comparator(self, left: Any, right: Any) -> Comparison:
        left_ok = self.is_bn(left) or isinstance(left, str)
        right_ok = self.is_bn(right) or isinstance(right, str)
        if not (left_ok and right_ok):
            # Containers and non-numeric leaves use the default rules
            return Comparison.INDETERMINATE
        if isinstance(left, str) and isinstance(right, str):
            left_bn = self._parse_or_none(left)
            right_bn = self._parse_or_none(right) if left_bn is not None else None
            if left_bn is None or right_bn is None:
                return Comparison.INDETERMINATE
            return Comparison.of(left_bn.eq(right_bn))
        return Comparison.of(self.convert(left).eq(self.convert(right)))

    def equal(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        actual = assertion.object
        if assertion.flag("deep"):
            assertion.assert_(
                deep_equal(actual, expected, self._deep_comparator),
                "expected #{this} to deeply equal #{exp}",
                "expected #{this} to not deeply equal #{exp}",
                expected,
                actual,
            )
            return

        actual = self.convert(actual)
        expected = self.convert(expected)
        assertion.assert_(
            actual.eq(expected),
            "expected #{act} to equal #{exp}",
            "expected #{act} to be different from #{exp}",
            str(expected),
            str(actual),
        )

    def above(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        actual = self.convert(assertion.object)
        expected = self.convert(expected)
        assertion.assert_(
            actual.gt(expected),
            "expected #{act} to be greater than #{exp}",
            "expected #{act} to be less than or equal to #{exp}",
            str(expected),
            str(actual),
        )

    def least(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        actual = self.convert(assertion.object)
        expected = self.convert(expected)
        assertion.assert_(
            actual.gte(expected),
            "expected #{act} to be greater than or equal to #{exp}",
            "expected #{act} to be less than #{exp}",
            str(expected),
            str(actual),
        )

    def below(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        actual = self.convert(assertion.object)
        expected = self.convert(expected)
        assertion.assert_(
            actual.lt(expected),
            "expected #{act} to be less than #{exp}",
            "expected #{act} to be greater than or equal to #{exp}",
            str(expected),
            str(actual),
        )

    def most(self, assertion: Assertion, expected: Any) -> None:
        __tracebackhide__ = assertion.hide_traceback
        actual = self.convert(assertion.object)
        expected = self.convert(expected)
        assertion.assert_(
            actual.lte(expected),
            "expected #{act} to be less than or equal to #{exp}",
            "expected #{act} to be greater than #{exp}",
            str(expected),
            str(actual),
        )

    def close_to(self, assertion: Assertion, expected: Any, delta: Any) -> None:
        """Inclusive tolerance check: expected - delta <= actual <= expected + delta."""
        __tracebackhide__ = assertion.hide_traceback
        actual = self.convert(assertion.object)
        expected = self.convert(expected)
        delta = self.convert(delta)
        assertion.assert_(
            actual.gte(expected.sub(delta)) and actual.lte(expected.add(delta)),
            f"expected #{{act}} to be within '{delta}' of #{{exp}}",
            f"expected #{{act}} to be further than '{delta}' from #{{exp}}",
            str(expected),
            str(actual),
        )

    def negative(self, assertion: Assertion) -> None:
        __tracebackhide__ = assertion.hide_traceback
        value = self.convert(assertion.object)
        assertion.assert_(
            value.is_neg(),
            "expected #{this} to be negative",
            "expected #{this} to not be negative",
            str(value),
        )

    def zero(self, assertion: Assertion) -> None:
        __tracebackhide__ = assertion.hide_traceback
        value = self.convert(assertion.object)
        assertion.assert_(
            value.is_zero(),
            "expected #{this} to be zero",
            "expected #{this} to not be zero",
            str(value),
        )


def _set_marker(assertion: Assertion) -> None:
    assertion.flag(MARKER, True)


@dataclass(frozen=True)
class BigNumberPlugin:
    """Installer for the bignumber property and comparisons.

    Instances compare equal per bn_type, so use() installs each at most once.
    """

    bn_type: type[BN] = BN

    def __call__(self, assertion_cls: type[Assertion]) -> None:
        assertion_cls.add_property(MARKER, _set_marker)
        assertion_cls.add_comparisons(MARKER, BigNumberComparisons(self.bn_type))


def bignumber(bn_type: type[BN] = BN) -> BigNumberPlugin:
    """Create the plugin for use() with the given big-number class."""
    return BigNumberPlugin(bn_type)
