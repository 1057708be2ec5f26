from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from bfloat16 import Float32, BFloat16, QUIET_BIT, ROUNDING_BIAS


class FP32_to_BF16(wiring.Component):
    """Narrow FP32 to BF16: add 0x7FFF, keep the upper 16 bits

    A NaN whose payload is lost to the rounding bias is truncated
    instead and gets the quiet bit.
    """

    fp32_in: In(Float32)
    bf16_out: Out(BFloat16)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        fp32_bits = self.fp32_in.as_value()

        # ---- Round ----
        biased = Signal(32)
        m.d.comb += biased.eq(fp32_bits + ROUNDING_BIAS)

        rounded = biased[16:32]
        rounded_is_nan = (rounded[7:15] == 0xFF) & (rounded[0:7] != 0)

        # ---- NaN fallback ----
        in_is_nan = (self.fp32_in.exponent == 0xFF) & (self.fp32_in.mantissa != 0)
        truncated = fp32_bits[16:32] | QUIET_BIT

        with m.If(in_is_nan & ~rounded_is_nan):
            m.d.comb += self.bf16_out.as_value().eq(truncated)
        with m.Else():
            m.d.comb += self.bf16_out.as_value().eq(rounded)

        return m


class BF16_to_FP32(wiring.Component):
    """Widen BF16 to FP32 by zero-filling the lower 16 bits"""

    bf16_in: In(BFloat16)
    fp32_out: Out(Float32)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.d.comb += self.fp32_out.sign.eq(self.bf16_in.sign)
        m.d.comb += self.fp32_out.exponent.eq(self.bf16_in.exponent)
        m.d.comb += self.fp32_out.mantissa.eq(self.bf16_in.mantissa << 16)

        return m
