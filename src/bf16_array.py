import numpy as np

from bfloat16 import BF16, EXP_MASK, MANT_MASK, QUIET_BIT, ROUNDING_BIAS


def narrow_array(values) -> np.ndarray:
    """Narrow an array of floats to bfloat16 bit patterns (uint16).

    Bit-identical to ``BF16(x).bits`` element by element.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        f32 = np.ascontiguousarray(values, dtype=np.float32)
    u32 = f32.view(np.uint32)

    bits = ((u32 + np.uint32(ROUNDING_BIAS)) >> np.uint32(16)).astype(np.uint16)

    # NaN whose payload did not survive the rounding bias
    lost_nan = np.isnan(f32) & ~_is_nan(bits)
    fallback = ((u32 >> np.uint32(16)) | np.uint32(QUIET_BIT)).astype(np.uint16)
    return np.where(lost_nan, fallback, bits)


def widen_array(bits) -> np.ndarray:
    bits_u16 = np.asarray(bits, dtype=np.uint16)
    bits_u32 = bits_u16.astype(np.uint32) << np.uint32(16)
    return bits_u32.view(np.float32)


def _is_nan(bits: np.ndarray) -> np.ndarray:
    return ((bits & EXP_MASK) == EXP_MASK) & ((bits & MANT_MASK) != 0)


def to_bf16_list(bits) -> list[BF16]:
    return [BF16.from_bits(int(b)) for b in np.asarray(bits, dtype=np.uint16).ravel()]


def from_bf16_list(values: list[BF16]) -> np.ndarray:
    return np.array([v.bits for v in values], dtype=np.uint16)


def write_bf16(path, values) -> None:
    """Write floats as raw little-endian bfloat16 patterns, no header."""
    narrow_array(values).astype("<u2").tofile(path)


def read_bf16(path) -> np.ndarray:
    return np.fromfile(path, dtype="<u2").astype(np.uint16)
