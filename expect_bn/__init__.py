"""expect-bn - fluent assertions with big-number comparisons."""

from expect_bn.assertion import Assertion, expect, use
from expect_bn.bn import BN, BigNumberLike, BNError
from expect_bn.comparisons import Comparisons, NativeComparisons
from expect_bn.config import ExpectConfig, configure, get_config
from expect_bn.deep_eql import Comparison, deep_equal
from expect_bn.errors import ConversionError, ExpectationError
from expect_bn.plugin import BigNumberComparisons, bignumber

__version__ = "0.1.0"
__all__ = [
    "Assertion",
    "BN",
    "BNError",
    "BigNumberComparisons",
    "BigNumberLike",
    "Comparison",
    "Comparisons",
    "ConversionError",
    "ExpectConfig",
    "ExpectationError",
    "NativeComparisons",
    "__version__",
    "bignumber",
    "configure",
    "deep_equal",
    "expect",
    "get_config",
    "use",
]
