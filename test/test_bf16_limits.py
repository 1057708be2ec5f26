from bf16_limits import BF16Limits, DenormStyle, RoundStyle
from bfloat16 import BF16


def test_limit_bit_patterns():
    test_cases = [
        ("min", BF16Limits.min(), 0x0080),
        ("lowest", BF16Limits.lowest(), 0xFF7F),
        ("max", BF16Limits.max(), 0x7F7F),
        ("epsilon", BF16Limits.epsilon(), 0x3C00),
        ("denorm_min", BF16Limits.denorm_min(), 0x0001),
        ("infinity", BF16Limits.infinity(), 0x7F80),
        ("quiet_nan", BF16Limits.quiet_nan(), 0x7F81),
        ("round_error", BF16Limits.round_error(), 0x3F00),
    ]

    for name, value, expected_bits in test_cases:
        assert value.bits == expected_bits, f"{name}: got 0x{value.bits:04X}, expected 0x{expected_bits:04X}"


def test_min_and_max_values():
    min_val = BF16Limits.min().to_float()
    max_val = BF16Limits.max().to_float()

    assert min_val > 0.0
    assert max_val > 0.0
    assert max_val > min_val
    assert BF16Limits.lowest().to_float() == -max_val
    assert max_val == 255 * 2.0**120
    assert min_val == 2.0**BF16Limits.min_exponent


def test_special_values_from_limits():
    assert BF16Limits.infinity().is_infinity()
    assert BF16Limits.quiet_nan().is_nan()
    assert BF16Limits.denorm_min().to_float() > 0.0
    assert BF16Limits.denorm_min().to_float() < BF16Limits.min().to_float()


def test_epsilon():
    epsilon = BF16Limits.epsilon()

    assert epsilon.to_float() > 0.0
    assert (BF16(1.0) + epsilon).to_float() > 1.0
    assert epsilon.to_float() == 2.0 ** (1 - BF16Limits.digits)


def test_max_is_last_finite_value():
    max_val = BF16Limits.max()
    assert not max_val.is_infinity()
    assert BF16.from_bits(max_val.bits + 1).is_infinity()


def test_descriptive_flags():
    assert BF16Limits.is_specialized
    assert BF16Limits.is_signed
    assert not BF16Limits.is_integer
    assert not BF16Limits.is_exact
    assert BF16Limits.has_infinity
    assert BF16Limits.has_quiet_nan
    assert not BF16Limits.has_signaling_nan
    assert BF16Limits.has_denorm is DenormStyle.PRESENT
    assert BF16Limits.round_style is RoundStyle.TO_NEAREST
    assert not BF16Limits.is_iec559
    assert BF16Limits.is_bounded
    assert not BF16Limits.is_modulo
    assert BF16Limits.radix == 2
    assert (BF16Limits.digits, BF16Limits.digits10, BF16Limits.max_digits10) == (8, 2, 4)
    assert (BF16Limits.min_exponent, BF16Limits.max_exponent) == (-126, 127)
    assert (BF16Limits.min_exponent10, BF16Limits.max_exponent10) == (-38, 38)
    assert not BF16Limits.traps
    assert not BF16Limits.tinyness_before
