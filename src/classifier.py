from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from bfloat16 import BFloat16, EXP_BIAS, EXP_SENTINEL


class BF16Classifier(wiring.Component):
    """Special-value flags and field extraction for BF16

    - exponent: unbiased, 0 for zeros, 0x7FFF for NaN/infinity
    - mantissa: raw 7-bit field
    """

    bf16_in: In(BFloat16)
    is_zero: Out(1)
    is_negative: Out(1)
    is_infinity: Out(1)
    is_nan: Out(1)
    exponent: Out(signed(16))
    mantissa: Out(7)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        exp = self.bf16_in.exponent
        mant = self.bf16_in.mantissa

        exp_all_ones = exp == 0xFF

        m.d.comb += [
            self.is_zero.eq(self.bf16_in.is_zero()),
            self.is_negative.eq(self.bf16_in.sign),
            self.is_infinity.eq(exp_all_ones & (mant == 0)),
            self.is_nan.eq(exp_all_ones & (mant != 0)),
            self.mantissa.eq(mant),
        ]

        # ---- Unbiased exponent ----
        with m.If(self.is_zero):
            m.d.comb += self.exponent.eq(0)
        with m.Elif(exp_all_ones):
            m.d.comb += self.exponent.eq(EXP_SENTINEL)
        with m.Else():
            m.d.comb += self.exponent.eq(Cat(exp, Const(0, 1)).as_signed() - EXP_BIAS)

        return m
