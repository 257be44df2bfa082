"""Tests for the BN arbitrary-precision integer type."""

import pytest
from pydantic import BaseModel

from expect_bn.bn import BN, BigNumberLike, BNError, InvalidBase, InvalidCharacter


class TestBNConstruction:
    """Tests for BN construction and parsing."""

    def test_from_int(self):
        """BN can be constructed from int."""
        assert BN(42).value == 42

    def test_from_bn(self):
        """BN can be constructed from another BN."""
        assert BN(BN(7)).value == 7

    def test_from_decimal_string(self):
        """Decimal strings parse, including beyond 64 bits."""
        assert BN("123456789012345678901234567890").value == 123456789012345678901234567890

    def test_from_negative_string(self):
        assert BN("-15").value == -15

    def test_leading_zeros(self):
        """Leading zeros denote the same value."""
        assert BN("0005").value == 5
        assert BN("-05").value == -5

    def test_from_hex_string(self):
        assert BN("ff", 16).value == 255
        assert BN("-FF", 16).value == -255

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "1e3", " 5", "5 ", "+5", "1_000", "0x10", "5\n", "--5"])
    def test_invalid_strings_raise(self, text):
        """Strict parsing rejects anything that is not an optionally signed digit run."""
        with pytest.raises(InvalidCharacter):
            BN(text)

    def test_digit_outside_base_raises(self):
        with pytest.raises(InvalidCharacter, match="base 2"):
            BN("102", 2)

    def test_hex_prefix_rejected(self):
        with pytest.raises(InvalidCharacter):
            BN("0x10", 16)

    def test_invalid_base_raises(self):
        with pytest.raises(InvalidBase):
            BN("10", 37)

    def test_parse_errors_are_value_errors(self):
        """BNError is a ValueError so callers can catch either."""
        assert issubclass(BNError, ValueError)
        with pytest.raises(ValueError):
            BN("nope")

    def test_from_invalid_type_raises(self):
        """Floats and bools are not accepted."""
        with pytest.raises(TypeError):
            BN(3.14)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            BN(True)


class TestBNLargeValues:
    """Values beyond the interpreter's int/str digit limit."""

    def test_parse_and_format_decimal(self):
        text = "9" * 5000
        value = BN(text)
        assert value.value == 10**5000 - 1
        assert str(value) == text
        assert repr(value) == f"BN('{text}')"

    def test_leading_zero_chunks_preserved(self):
        text = "1" + "0" * 4000 + "7" + "0" * 3000
        assert BN(text).to_string() == text
        assert BN("-" + text).to_string() == "-" + text

    def test_other_bases(self):
        value = BN(3**6000)
        assert value.to_string(3) == "1" + "0" * 6000
        assert BN("1" + "0" * 6000, 3) == value
        assert BN(value.to_string(16), 16) == value


class TestBNComparison:
    """Tests for named comparisons and operators."""

    def test_named_comparisons(self):
        a, b = BN(3), BN(5)
        assert a.lt(b) and a.lte(b)
        assert b.gt(a) and b.gte(a)
        assert a.eq(BN(3))
        assert a.gte(a) and a.lte(a)
        assert not a.gt(a)

    def test_comparisons_accept_int_and_str(self):
        assert BN(10).eq(10)
        assert BN(10).eq("10")
        assert BN(10).gt("9")

    def test_cmp(self):
        assert BN(1).cmp(2) == -1
        assert BN(2).cmp(2) == 0
        assert BN(3).cmp(2) == 1

    def test_sign_predicates(self):
        assert BN(-1).is_neg()
        assert not BN(0).is_neg()
        assert BN(0).is_zero()
        assert not BN(1).is_zero()

    def test_operators(self):
        assert BN(2) < BN(3) <= BN(3)
        assert BN(4) > 3
        assert BN(4) == 4
        assert BN(4) != BN(5)

    def test_eq_with_other_types_is_false(self):
        """Equality with non-integers is not implemented, so == is False."""
        assert BN(1) != "1"

    def test_hash_matches_value(self):
        assert len({BN(1), BN("01"), BN(2)}) == 2


class TestBNArithmetic:
    """Tests for named arithmetic."""

    def test_add_sub(self):
        assert BN(10).add(5) == BN(15)
        assert BN(10).sub("15") == BN(-5)
        assert (BN(10) - 15).value == -5
        assert (5 + BN(1)).value == 6

    def test_mul_neg_abs(self):
        big = BN(10**30)
        assert big.mul(big).value == 10**60
        assert BN(5).neg().value == -5
        assert BN(-5).abs().value == 5
        assert abs(-BN(7)).value == 7

    def test_to_string(self):
        assert BN(255).to_string() == "255"
        assert BN(255).to_string(16) == "ff"
        assert BN(-5).to_string(2) == "-101"
        assert BN(0).to_string(16) == "0"
        assert str(BN(-12)) == "-12"
        assert repr(BN(3)) == "BN('3')"


class TestBNRecognition:
    """Tests for BN.is_bn, including copies loaded independently."""

    def test_native_values_are_not_bn(self):
        for value in (1, 1.0, "1", None, b"1", [1]):
            assert not BN.is_bn(value)

    def test_instance_is_bn(self):
        assert BN.is_bn(BN(1))

    def test_foreign_copy_is_recognized(self, foreign_bn):
        """A BN from another copy of the module is recognized structurally."""
        other = foreign_bn(5)
        assert not isinstance(other, BN)
        assert BN.is_bn(other)
        assert isinstance(other, BigNumberLike)

    def test_foreign_copy_interoperates(self, foreign_bn):
        other = foreign_bn("12")
        assert BN(12).eq(other)
        assert other.eq(BN(12))
        assert BN(other).value == 12


class Holding(BaseModel):
    owner: str
    amount: BN


class TestBNPydantic:
    """Tests for BN as a pydantic field type."""

    def test_validates_from_str_and_int(self):
        assert Holding(owner="a", amount="100").amount == BN(100)
        assert Holding(owner="a", amount=7).amount == BN(7)

    def test_rejects_invalid(self):
        with pytest.raises(ValueError):
            Holding(owner="a", amount="1.5")
        with pytest.raises(ValueError):
            Holding(owner="a", amount=1.5)

    def test_serializes_to_string(self):
        dumped = Holding(owner="a", amount=BN(10**30)).model_dump(mode="json")
        assert dumped == {"owner": "a", "amount": str(10**30)}
