# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Conversions between native numbers and (numerator, denominator) pairs."""

from __future__ import annotations

from decimal import Decimal, Inexact, localcontext, MAX_EMAX, MIN_EMIN
from math import copysign, gcd, isfinite
import struct
from typing import Tuple


__all__ = ['decimal_to_ratio', 'float_to_ratio', 'float32_to_ratio',
           'to_float32', 'wrap_int']


_FLOAT32 = struct.Struct('<f')


def decimal_to_ratio(value: Decimal) -> Tuple[int, int]:
    """Return reduced (numerator, denominator) pair equal to `value`.

    The fractional part is consumed digit by digit: the residual is
    multiplied by 10, its integral part is appended to the numerator and
    the denominator is multiplied by 10, until the residual is 0.

    Raises:
        ValueError: `value` is infinite or NaN
    """
    if not value.is_finite():
        raise ValueError(f"Can't convert {value!r} to a rational number.")
    if not value:
        return 0, 1
    sign, digits, exp = value.as_tuple()
    with localcontext() as ctx:
        # wide enough to keep every step exact
        ctx.prec = len(digits) + max(exp, 0) + 2
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        residual = abs(value)
        num = int(residual)
        den = 1
        residual -= num
        while residual:
            residual *= 10
            digit = int(residual)
            num = num * 10 + digit
            den *= 10
            residual -= digit
    if sign:
        num = -num
    divisor = gcd(num, den)
    return num // divisor, den // divisor


def float_to_ratio(value: float) -> Tuple[int, int]:
    """Return reduced (numerator, denominator) pair equal to `value`.

    Raises:
        ValueError: `value` is infinite or NaN
    """
    if not isfinite(value):
        raise ValueError(f"Can't convert {value!r} to a rational number.")
    # Decimal(float) is exact
    return decimal_to_ratio(Decimal(value))


def float32_to_ratio(value: float) -> Tuple[int, int]:
    """Return reduced pair equal to `value` narrowed to single precision.

    Raises:
        ValueError: `value` is infinite or NaN
    """
    if not isfinite(value):
        raise ValueError(f"Can't convert {value!r} to a rational number.")
    return float_to_ratio(to_float32(value))


def to_float32(value: float) -> float:
    """Return `value` rounded to IEEE 754 single precision.

    Values beyond the single precision range give signed infinities.
    """
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return copysign(float('inf'), value)


def wrap_int(value: int, bits: int, signed: bool = True) -> int:
    """Return `value` truncated to `bits` bits (two's complement)."""
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value
