"""Arbitrary-precision integer value type used by the bignumber assertions.

This module provides BN, a small immutable wrapper around Python's int that
exposes the comparison and arithmetic primitives the assertion extension
relies on:
- Construction from decimal (or other base) strings with strict parsing
- Named comparisons: eq, gt, gte, lt, lte, is_neg, is_zero
- Arithmetic: add, sub, mul, neg, abs
- Structural recognition of BN values created by other copies of this type

Usage pattern:
    from expect_bn.bn import BN

    amount = BN("1000000000000000000000")
    fee = BN(25)

    if amount.sub(fee).gte("0"):
        ...
"""

from __future__ import annotations

import math
import re
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

__all__ = [
    "BN",
    "BigNumberLike",
    "BNError",
    "InvalidBase",
    "InvalidCharacter",
]

# Digits accepted in any base up to 36 (validated per base after matching)
_NUMBER_PATTERN = re.compile(r"(-?)([0-9a-zA-Z]+)")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Chunk sizes below the interpreter's int/str conversion limit (4300 digits)
_CHUNK_DIGITS = 2000
_CHUNK_BITS = 6000


class BNError(ValueError):
    """Base class for BN construction errors."""

    pass


class InvalidCharacter(BNError):
    """String contains a character that is not a digit in the given base."""

    pass


class InvalidBase(BNError):
    """Base is outside the supported range [2, 36]."""

    pass


@runtime_checkable
class BigNumberLike(Protocol):
    """Structural interface of a big-number value.

    Any object implementing these methods is treated as a big number, which
    lets values created by an independently loaded copy of this module be
    compared with local BN instances.
    """

    def eq(self, other: Any) -> bool: ...

    def gt(self, other: Any) -> bool: ...

    def gte(self, other: Any) -> bool: ...

    def lt(self, other: Any) -> bool: ...

    def lte(self, other: Any) -> bool: ...

    def is_neg(self) -> bool: ...

    def is_zero(self) -> bool: ...

    def add(self, other: Any) -> Any: ...

    def sub(self, other: Any) -> Any: ...

    def to_string(self, base: int = 10) -> str: ...


class BN:
    """Immutable arbitrary-precision signed integer.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    # Marks the layout generation; copies with the same word size interoperate
    WORD_SIZE: ClassVar[int] = 26

    def __init__(self, value: int | str | BigNumberLike, base: int = 10) -> None:
        """Create a BN from an int, a string or another big number.

        Args:
            value: Integer, digit string (optional leading '-'), or big number
            base: Radix used when value is a string (2..36)

        Raises:
            InvalidBase: If base is outside [2, 36]
            InvalidCharacter: If the string is not a valid number in base
            TypeError: If value has an unsupported type
        """
        if isinstance(value, BN):
            self._value = value._value
        elif isinstance(value, bool):
            raise TypeError("BN does not accept bool")
        elif isinstance(value, int):
            self._value = value
        elif isinstance(value, str):
            self._value = _parse(value, base)
        elif isinstance(value, BigNumberLike):
            self._value = _parse(value.to_string(10), 10)
        else:
            raise TypeError(f"BN requires int, str or BN, got {type(value).__name__}")

    @classmethod
    def is_bn(cls, obj: object) -> bool:
        """Check whether obj is a big number, including foreign BN copies."""
        if isinstance(obj, cls):
            return True
        if isinstance(obj, (int, float, str, bytes)) or obj is None:
            return False
        return getattr(type(obj), "WORD_SIZE", None) == cls.WORD_SIZE and isinstance(obj, BigNumberLike)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"BN('{self.to_string()}')"

    def __str__(self) -> str:
        return self.to_string()

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named comparisons ---

    def cmp(self, other: BN | int | str) -> int:
        """Three-way comparison: -1, 0 or 1."""
        other_val = _extract_value(other)
        if self._value < other_val:
            return -1
        if self._value > other_val:
            return 1
        return 0

    def eq(self, other: BN | int | str) -> bool:
        return self._value == _extract_value(other)

    def gt(self, other: BN | int | str) -> bool:
        return self._value > _extract_value(other)

    def gte(self, other: BN | int | str) -> bool:
        return self._value >= _extract_value(other)

    def lt(self, other: BN | int | str) -> bool:
        return self._value < _extract_value(other)

    def lte(self, other: BN | int | str) -> bool:
        return self._value <= _extract_value(other)

    def is_neg(self) -> bool:
        return self._value < 0

    def is_zero(self) -> bool:
        return self._value == 0

    # --- Named arithmetic ---

    def add(self, other: BN | int | str) -> BN:
        return BN(self._value + _extract_value(other))

    def sub(self, other: BN | int | str) -> BN:
        return BN(self._value - _extract_value(other))

    def mul(self, other: BN | int | str) -> BN:
        return BN(self._value * _extract_value(other))

    def neg(self) -> BN:
        return BN(-self._value)

    def abs(self) -> BN:
        return BN(abs(self._value))

    def to_string(self, base: int = 10) -> str:
        """Render the value in the given base (lowercase digits)."""
        _check_base(base)
        sign = "-" if self._value < 0 else ""
        return sign + _format(abs(self._value), base)

    # --- Operators ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BN):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: BN | int) -> bool:
        return self.lt(other)

    def __le__(self, other: BN | int) -> bool:
        return self.lte(other)

    def __gt__(self, other: BN | int) -> bool:
        return self.gt(other)

    def __ge__(self, other: BN | int) -> bool:
        return self.gte(other)

    def __add__(self, other: BN | int) -> BN:
        return self.add(other)

    def __radd__(self, other: int) -> BN:
        return BN(other + self._value)

    def __sub__(self, other: BN | int) -> BN:
        return self.sub(other)

    def __rsub__(self, other: int) -> BN:
        return BN(other - self._value)

    def __mul__(self, other: BN | int) -> BN:
        return self.mul(other)

    def __rmul__(self, other: int) -> BN:
        return BN(other * self._value)

    def __neg__(self) -> BN:
        return self.neg()

    def __abs__(self) -> BN:
        return self.abs()

    # --- pydantic integration ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Allow BN as a pydantic model field (validated from str/int, dumped as str)."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> BN:
        if isinstance(value, cls):
            return value
        if cls.is_bn(value):
            return cls(value)
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"BN field requires int, str or BN, got {type(value).__name__}")


def _check_base(base: int) -> None:
    if not 2 <= base <= 36:
        raise InvalidBase(f"Base must be between 2 and 36, got {base}")


def _parse(text: str, base: int) -> int:
    """Parse a signed digit string strictly (no whitespace, no prefixes)."""
    _check_base(base)
    match = _NUMBER_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidCharacter(f"Invalid number string: '{text}'")
    sign, digits = match.groups()
    allowed = _DIGITS[:base]
    if any(c not in allowed for c in digits.lower()):
        raise InvalidCharacter(f"Invalid character in base {base} number: '{text}'")
    magnitude = _digits_to_int(digits, base)
    return -magnitude if sign else magnitude


def _digits_to_int(digits: str, base: int) -> int:
    """Convert a validated digit run by splitting it in halves.

    Keeps each int() call under the interpreter's int/str digit limit.
    """
    if len(digits) <= _CHUNK_DIGITS:
        return int(digits, base)
    low_len = len(digits) // 2
    high = _digits_to_int(digits[:-low_len], base)
    low = _digits_to_int(digits[-low_len:], base)
    return high * base**low_len + low


def _format(value: int, base: int, width: int = 0) -> str:
    """Render a non-negative int, left-padded with zeros to width."""
    if value.bit_length() <= _CHUNK_BITS:
        if base == 10:
            text = str(value)
        else:
            digits = []
            remaining = value
            while remaining:
                remaining, digit = divmod(remaining, base)
                digits.append(_DIGITS[digit])
            text = "".join(reversed(digits)) or "0"
        return text.zfill(width)
    low_len = max(1, int(value.bit_length() * math.log(2, base)) // 2)
    high, low = divmod(value, base**low_len)
    return _format(high, base, max(width - low_len, 0)) + _format(low, base, low_len)


def _extract_value(x: BN | BigNumberLike | int | str) -> int:
    """Extract integer value from BN, a foreign big number, int or digit string."""
    if isinstance(x, BN):
        return x._value
    if isinstance(x, bool):
        raise TypeError("BN does not accept bool")
    if isinstance(x, int):
        return x
    if isinstance(x, str):
        return _parse(x, 10)
    if isinstance(x, BigNumberLike):
        return _parse(x.to_string(10), 10)
    raise TypeError(f"BN operand must be int, str or BN, got {type(x).__name__}")
