import numpy as np

import fp32
from bfloat16 import BF16, SIGN_MASK

__all__ = ["abs", "sqrt", "exp", "log", "sin", "cos", "tan", "pow"]


def _unary(ufunc, x: BF16) -> BF16:
    """Widen, evaluate the float32 ufunc and narrow.

    Domain errors give NaN and overflow gives infinity, as the ufunc does.
    """
    return BF16(fp32.apply(ufunc, x.to_float()))


def abs(x: BF16) -> BF16:
    # Clears the sign bit, NaN payloads included.
    return BF16.from_bits(x.bits & ~SIGN_MASK)


def sqrt(x: BF16) -> BF16:
    return _unary(np.sqrt, x)


def exp(x: BF16) -> BF16:
    return _unary(np.exp, x)


def log(x: BF16) -> BF16:
    return _unary(np.log, x)


def sin(x: BF16) -> BF16:
    return _unary(np.sin, x)


def cos(x: BF16) -> BF16:
    return _unary(np.cos, x)


def tan(x: BF16) -> BF16:
    return _unary(np.tan, x)


def pow(x: BF16, y: BF16) -> BF16:
    """x ** y evaluated in float32."""
    return BF16(fp32.apply(np.power, x.to_float(), y.to_float()))
