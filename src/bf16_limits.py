import enum

from bfloat16 import BF16


class DenormStyle(enum.Enum):
    INDETERMINATE = -1
    ABSENT = 0
    PRESENT = 1


class RoundStyle(enum.Enum):
    INDETERMINATE = -1
    TOWARD_ZERO = 0
    TO_NEAREST = 1
    TOWARD_INFINITY = 2
    TOWARD_NEG_INFINITY = 3


class BF16Limits:
    """Numeric traits of BF16, shaped like a float32 trait table.

    The value accessors return fixed bit patterns rather than computed
    values, so they compare bit-exact with other bfloat16 implementations.
    """

    is_specialized = True
    is_signed = True
    is_integer = False
    is_exact = False
    has_infinity = True
    has_quiet_nan = True
    has_signaling_nan = False
    has_denorm = DenormStyle.PRESENT
    has_denorm_loss = True
    round_style = RoundStyle.TO_NEAREST
    is_iec559 = False
    is_bounded = True
    is_modulo = False
    digits = 8
    digits10 = 2
    max_digits10 = 4
    radix = 2
    min_exponent = -126
    min_exponent10 = -38
    max_exponent = 127
    max_exponent10 = 38
    traps = False
    tinyness_before = False

    @staticmethod
    def min() -> BF16:
        """Smallest positive normal value."""
        return BF16.from_bits(0x0080)

    @staticmethod
    def lowest() -> BF16:
        return BF16.from_bits(0xFF7F)

    @staticmethod
    def max() -> BF16:
        return BF16.from_bits(0x7F7F)

    @staticmethod
    def epsilon() -> BF16:
        return BF16.from_bits(0x3C00)

    @staticmethod
    def round_error() -> BF16:
        return BF16(0.5)

    @staticmethod
    def infinity() -> BF16:
        return BF16.infinity()

    @staticmethod
    def quiet_nan() -> BF16:
        return BF16.nan()

    @staticmethod
    def denorm_min() -> BF16:
        return BF16.from_bits(0x0001)
