import numbers
import operator

from amaranth.lib import data

import fp32

SIGN_MASK = 0x8000
EXP_MASK = 0x7F80
MANT_MASK = 0x007F
QUIET_BIT = 0x0040
EXP_SHIFT = 7
EXP_BIAS = 127

# Added to the float32 pattern before truncation, half an ULP minus one.
ROUNDING_BIAS = 0x7FFF

# Reported by exponent() for NaN and infinity (int16 max).
EXP_SENTINEL = 0x7FFF


class BFloat16(data.Struct):
    mantissa: 7
    exponent: 8
    sign: 1

    def is_zero(self):
        return (self.exponent == 0) & (self.mantissa == 0)


class Float32(data.Struct):
    mantissa: 23
    exponent: 8
    sign: 1


def narrow_bits(fp32_bits: int) -> int:
    """Narrow a float32 bit pattern to a bfloat16 bit pattern.

    The pattern is biased by 0x7FFF and truncated to its upper half. A carry
    out of the mantissa bumps the exponent, which is how values close to the
    top of the range round up to infinity. Exact ties truncate.

    NaN inputs always produce a NaN: if biasing destroyed the payload, the
    upper half is kept as is and the quiet bit is set.
    """
    bits = ((fp32_bits + ROUNDING_BIAS) & 0xFFFFFFFF) >> 16
    if fp32.is_nan_bits(fp32_bits) and not _is_nan(bits):
        bits = (fp32_bits >> 16) | QUIET_BIT
    return bits


def widen_bits(bits: int) -> int:
    return bits << 16


def _is_nan(bits: int) -> bool:
    return (bits & EXP_MASK) == EXP_MASK and (bits & MANT_MASK) != 0


class BF16:
    """Immutable bfloat16 value.

    Arithmetic widens to float32, computes there and narrows the result.
    Equality and ordering compare the raw 16-bit patterns, not the numeric
    values: +0 and -0 are unequal, NaN patterns compare like any other
    pattern, and every negative value sorts above every positive one.
    """

    __slots__ = ("_bits",)

    def __init__(self, value: float = 0.0):
        self._bits = narrow_bits(fp32.float_to_bits(value))

    @classmethod
    def from_float(cls, f: float):
        return cls(f)

    @classmethod
    def from_bits(cls, bits: int):
        bits = operator.index(bits)
        if not 0 <= bits <= 0xFFFF:
            raise ValueError(f"bfloat16 bit pattern out of range: {bits:#x}")
        result = cls.__new__(cls)
        result._bits = bits
        return result

    @classmethod
    def from_bytes(cls, raw: bytes, byteorder: str = "little"):
        if len(raw) != 2:
            raise ValueError(f"expected 2 bytes, got {len(raw)}")
        return cls.from_bits(int.from_bytes(raw, byteorder))

    @classmethod
    def pack(cls, sign: int, exp: int, mant: int):
        if not (0 <= sign <= 1 and 0 <= exp <= 0xFF and 0 <= mant <= MANT_MASK):
            raise ValueError(f"invalid bfloat16 fields: sign={sign}, exponent={exp}, mantissa={mant}")
        return cls.from_bits((sign << 15) | (exp << EXP_SHIFT) | mant)

    # ---- Special values ----

    @classmethod
    def zero(cls):
        return cls.from_bits(0x0000)

    @classmethod
    def infinity(cls):
        return cls.from_bits(EXP_MASK)

    @classmethod
    def negative_infinity(cls):
        return cls.from_bits(SIGN_MASK | EXP_MASK)

    @classmethod
    def nan(cls):
        return cls.from_bits(EXP_MASK | 0x0001)

    # ---- Raw access ----

    @property
    def bits(self) -> int:
        return self._bits

    def to_bits(self) -> int:
        return self._bits

    def to_bytes(self, byteorder: str = "little") -> bytes:
        return self._bits.to_bytes(2, byteorder)

    def to_float(self) -> float:
        return fp32.bits_to_float(widen_bits(self._bits))

    def unpack(self) -> tuple[int, int, int]:
        sign = (self._bits >> 15) & 0x1
        exp = (self._bits >> EXP_SHIFT) & 0xFF
        mant = self._bits & MANT_MASK
        return sign, exp, mant

    # ---- Classification ----

    def is_nan(self) -> bool:
        return _is_nan(self._bits)

    def is_infinity(self) -> bool:
        return (self._bits & EXP_MASK) == EXP_MASK and (self._bits & MANT_MASK) == 0

    def is_zero(self) -> bool:
        return (self._bits & ~SIGN_MASK) == 0

    def is_negative(self) -> bool:
        return (self._bits & SIGN_MASK) != 0

    def exponent(self) -> int:
        """Unbiased exponent; 0 for zeros, 0x7FFF for NaN and infinity."""
        if self.is_zero():
            return 0
        if (self._bits & EXP_MASK) == EXP_MASK:
            return EXP_SENTINEL
        return ((self._bits & EXP_MASK) >> EXP_SHIFT) - EXP_BIAS

    def mantissa(self) -> int:
        return self._bits & MANT_MASK

    @property
    def sign(self) -> bool:
        return self.is_negative()

    def get_sign(self) -> bool:
        return self.is_negative()

    # ---- Arithmetic ----

    def _binary(self, other, op, reflected=False):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        lhs, rhs = (other, self) if reflected else (self, other)
        return BF16(fp32.apply(op, lhs.to_float(), rhs.to_float()))

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other):
        return self._binary(other, operator.truediv, reflected=True)

    def __neg__(self):
        return BF16.from_bits(self._bits ^ SIGN_MASK)

    def __pos__(self):
        return BF16.from_bits(self._bits)

    def __abs__(self):
        return BF16.from_bits(self._bits & ~SIGN_MASK)

    # ---- Bit-pattern comparison ----

    def __eq__(self, other):
        if not isinstance(other, BF16):
            return NotImplemented
        return self._bits == other._bits

    def __lt__(self, other):
        if not isinstance(other, BF16):
            return NotImplemented
        return self._bits < other._bits

    def __le__(self, other):
        if not isinstance(other, BF16):
            return NotImplemented
        return self._bits <= other._bits

    def __gt__(self, other):
        if not isinstance(other, BF16):
            return NotImplemented
        return self._bits > other._bits

    def __ge__(self, other):
        if not isinstance(other, BF16):
            return NotImplemented
        return self._bits >= other._bits

    def __hash__(self):
        return hash(self._bits)

    # ---- Conversions ----

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return format(self.to_float(), "g")

    def __repr__(self) -> str:
        if self.is_nan():
            return f"BF16.from_bits(0x{self._bits:04X})"
        return f"BF16({self.to_float()!r})"


def _coerce(value):
    if isinstance(value, BF16):
        return value
    if isinstance(value, numbers.Real):
        return BF16(value)
    return None

