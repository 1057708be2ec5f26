import logging
import math
import struct

import numpy as np

logger = logging.getLogger(__name__)

FP32_EXP_MASK = 0x7F800000
FP32_MANT_MASK = 0x007FFFFF


def float_to_bits(f: float) -> int:
    """Round ``f`` to float32 and return its bit pattern.

    Finite reals outside the float32 range, including ints and fractions
    too large for a double, saturate to a signed infinity, the same result
    a C cast would give.
    """
    try:
        packed = struct.pack(">f", float(f))
    except OverflowError:
        logger.debug("%r is outside the float32 range, saturating to infinity", f)
        packed = struct.pack(">f", math.inf if f > 0 else -math.inf)
    return struct.unpack(">I", packed)[0]


def bits_to_float(bits: int) -> float:
    return struct.unpack(">f", struct.pack(">I", bits))[0]


def is_nan_bits(bits: int) -> bool:
    return (bits & FP32_EXP_MASK) == FP32_EXP_MASK and (bits & FP32_MANT_MASK) != 0


def unpack(bits: int) -> tuple[int, int, int]:
    sign = (bits >> 31) & 0x1
    exp = (bits >> 23) & 0xFF
    mant = bits & FP32_MANT_MASK
    return sign, exp, mant


def pack(sign: int, exp: int, mant: int) -> int:
    return (sign << 31) | (exp << 23) | mant


def apply(op, *operands: float) -> float:
    """Evaluate ``op`` on float32 operands with IEEE-754 float32 semantics.

    Overflow, division by zero and invalid operations produce inf/NaN
    instead of warnings or exceptions.
    """
    with np.errstate(all="ignore"):
        result = op(*(np.float32(x) for x in operands))
        return float(np.float32(result))
