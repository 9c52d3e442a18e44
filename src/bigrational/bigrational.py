# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2021 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$

"""Immutable rational numbers of arbitrary length and precision."""

from __future__ import annotations

from decimal import (
    Context, Decimal, getcontext, localcontext, ROUND_DOWN)
from fractions import Fraction
import math
import numbers
import operator
import sys
from typing import Any, Callable, Optional, Tuple, Union

from .conversion import (
    decimal_to_ratio, float32_to_ratio, float_to_ratio, to_float32,
    wrap_int)
from .rounding import Rounding, div_rounded


__all__ = ['BigRational', 'ZERO', 'ONE', 'log', 'log10']


# Constants related to the hash implementation;  hash(x) is based
# on the reduction of x modulo the prime _PyHASH_MODULUS.
_PyHASH_MODULUS = sys.hash_info.modulus
# Value to be used for rationals that reduce to infinity modulo
# _PyHASH_MODULUS.
_PyHASH_INF = sys.hash_info.inf

Number = Union[numbers.Integral, numbers.Rational, Decimal, float]


def _divrem(num: int, den: int) -> Tuple[int, int]:
    """Return quotient and remainder of `num` / `den`, truncated towards
    zero."""
    quot = abs(num) // abs(den)
    if (num < 0) != (den < 0):
        quot = -quot
    return quot, num - quot * den


class BigRational:
    """Rational number of arbitrary length and precision.

    Args:
        value (Union[numbers.Integral, numbers.Rational, Decimal, float]):
            numerator or value to be converted (default: 0)
        denominator (numbers.Integral): denominator (default: None)

    If `denominator` is given, `value` and `denominator` must both be
    integral; they are stored as given, i.e. without canonicalization
    (only a negative sign of the denominator is moved to the numerator).

    If only `value` is given, it is converted exactly: an integral
    value becomes `value / 1`, a `Decimal` or `float` is expanded digit by
    digit into a decimal fraction in lowest terms.

    Raises:
        TypeError: `value` or `denominator` have an unsupported type
        ValueError: `denominator` is 0 or `value` is infinite or NaN
    """

    __slots__ = ('_numerator', '_denominator')

    def __new__(cls, value: Optional[Number] = None,
                denominator: Optional[numbers.Integral] = None) \
            -> BigRational:
        """Create and return new instance of `BigRational`."""
        if denominator is None:
            if value is None:
                return cls._from_raw(0, 1)
            if isinstance(value, cls):
                return value
            if isinstance(value, BigRational):
                return cls._from_raw(value._numerator, value._denominator)
            if isinstance(value, numbers.Integral):
                return cls._from_raw(int(value), 1)
            if isinstance(value, numbers.Rational):
                return cls._new(int(value.numerator),
                                int(value.denominator))
            if isinstance(value, Decimal):
                return cls._from_raw(*decimal_to_ratio(value))
            if isinstance(value, float):
                return cls._from_raw(*float_to_ratio(value))
            if isinstance(value, numbers.Real):
                return cls._from_raw(*float_to_ratio(float(value)))
            raise TypeError(f"Can't convert {value!r} to {cls.__name__}.")
        if not (isinstance(value, numbers.Integral) and
                isinstance(denominator, numbers.Integral)):
            raise TypeError("Numerator and denominator must be integral "
                            f"numbers, not {type(value).__name__} and "
                            f"{type(denominator).__name__}.")
        denominator = int(denominator)
        if denominator == 0:
            raise ValueError("Denominator must not be 0.")
        return cls._new(int(value), denominator)

    @classmethod
    def _from_raw(cls, num: int, den: int) -> BigRational:
        self = object.__new__(cls)
        self._numerator = num
        self._denominator = den
        return self

    @classmethod
    def _new(cls, num: int, den: int) -> BigRational:
        # denominator is kept positive
        if den < 0:
            num, den = -num, -den
        return cls._from_raw(num, den)

    @classmethod
    def from_integral(cls, value: numbers.Integral) -> BigRational:
        """Convert integral number to `BigRational`.

        Raises:
            TypeError: `value` is not an integral number
        """
        if not isinstance(value, numbers.Integral):
            raise TypeError(f"{value!r} is not an integral number.")
        return cls._from_raw(int(value), 1)

    @classmethod
    def from_decimal(cls, value: Union[Decimal, numbers.Integral]) \
            -> BigRational:
        """Convert finite decimal number to `BigRational`.

        Raises:
            TypeError: `value` is not a Decimal or an integral number
            ValueError: `value` is infinite or NaN
        """
        if isinstance(value, Decimal):
            return cls._from_raw(*decimal_to_ratio(value))
        if isinstance(value, numbers.Integral):
            return cls._from_raw(int(value), 1)
        raise TypeError(f"{value!r} is not a Decimal.")

    @classmethod
    def from_float(cls, value: Union[float, numbers.Integral]) \
            -> BigRational:
        """Convert finite float to `BigRational`.

        Raises:
            TypeError: `value` is not a float or an integral number
            ValueError: `value` is infinite or NaN
        """
        if isinstance(value, float):
            return cls._from_raw(*float_to_ratio(value))
        if isinstance(value, numbers.Integral):
            return cls._from_raw(int(value), 1)
        raise TypeError(f"{value!r} is not a float.")

    @classmethod
    def from_float32(cls, value: Union[float, numbers.Integral]) \
            -> BigRational:
        """Convert `value`, narrowed to single precision, to `BigRational`.

        Raises:
            TypeError: `value` is not a float or an integral number
            ValueError: `value` is infinite or NaN or beyond the single
                precision range
        """
        if not isinstance(value, (float, numbers.Integral)):
            raise TypeError(f"{value!r} is not a float.")
        try:
            value = float(value)
        except OverflowError:
            raise ValueError(f"Can't convert {value!r} to single "
                             "precision.") from None
        return cls._from_raw(*float32_to_ratio(value))

    @classmethod
    def from_mixed(cls, integer: numbers.Integral,
                   numerator: numbers.Integral,
                   denominator: numbers.Integral) -> BigRational:
        """Create `BigRational` from the parts of a mixed fraction.

        The result is `integer * denominator + numerator` over 1, i.e.
        `denominator` scales the integral part and is not kept as
        divisor.

        Raises:
            TypeError: an argument is not an integral number
        """
        if not all(isinstance(arg, numbers.Integral)
                   for arg in (integer, numerator, denominator)):
            raise TypeError("Parts of a mixed fraction must be integral "
                            "numbers.")
        return cls._from_raw(int(integer) * int(denominator) +
                             int(numerator), 1)

    # properties

    @property
    def numerator(self) -> int:
        """Numerator, as stored (not necessarily in lowest terms)."""
        return self._numerator

    @property
    def denominator(self) -> int:
        """Denominator, as stored (not necessarily in lowest terms)."""
        return self._denominator

    @property
    def reduced(self) -> BigRational:
        """Return `self` in lowest terms with a positive denominator."""
        num, den = self._numerator, self._denominator
        if den == 1 or den == 0:
            return self
        divisor = math.gcd(num, den)
        num //= divisor
        den //= divisor
        if den < 0:
            num, den = -num, -den
        return BigRational._from_raw(num, den)

    @property
    def quotient(self) -> int:
        """Integral part of `self`, truncated towards zero."""
        return _divrem(self._numerator, self._denominator)[0]

    @property
    def remainder(self) -> int:
        """Numerator of the fractional part of `self`."""
        return _divrem(self._numerator, self._denominator)[1]

    @property
    def is_integer(self) -> bool:
        return self._denominator == 1 or self.remainder == 0

    @property
    def is_even(self) -> bool:
        quot, rem = _divrem(self._numerator, self._denominator)
        return rem == 0 and quot % 2 == 0

    @property
    def is_zero(self) -> bool:
        return self._numerator == 0

    @property
    def is_one(self) -> bool:
        return self._numerator == self._denominator

    @property
    def is_invalid(self) -> bool:
        """True if `self` has a denominator of 0."""
        return self._denominator == 0

    # comparison

    def compare_to(self, other: Any) -> int:
        """Compare `self` with `other`.

        Returns:
            int: -1, 0 or 1, if `self` is less than, equal to or greater
                than `other`

        Raises:
            TypeError: `other` can't be converted to `BigRational`
        """
        if not isinstance(other, BigRational):
            other = BigRational(other)
        quot, rem = divmod(self._numerator, self._denominator)
        other_quot, other_rem = divmod(other._numerator, other._denominator)
        if quot != other_quot:
            return -1 if quot < other_quot else 1
        # same integral part, compare fractional parts
        lhs = rem * other._denominator
        rhs = other_rem * self._denominator
        return (lhs > rhs) - (lhs < rhs)

    def __eq__(self, other: Any) -> bool:
        """self == other"""
        if isinstance(other, complex):
            return other.imag == 0 and self == other.real
        if isinstance(other, (float, Decimal)):
            if isinstance(other, float) and not math.isfinite(other):
                return False
            if isinstance(other, Decimal) and not other.is_finite():
                return False
            other = BigRational(other)
        else:
            other = _as_rational(other)
            if other is NotImplemented:
                return NotImplemented
        reduced = self.reduced
        other = other.reduced
        return (reduced._numerator == other._numerator and
                reduced._denominator == other._denominator)

    def _richcmp(self, other: Any, op: Callable[[Any, Any], bool]) -> bool:
        if isinstance(other, float):
            if math.isnan(other) or math.isinf(other):
                return op(0.0, other)
            other = BigRational(other)
        elif isinstance(other, Decimal):
            if not other.is_finite():
                return op(0, other)
            other = BigRational(other)
        else:
            other = _as_rational(other)
            if other is NotImplemented:
                return NotImplemented
        return op(self.compare_to(other), 0)

    def __lt__(self, other: Any) -> bool:
        """self < other"""
        return self._richcmp(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        """self <= other"""
        return self._richcmp(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        """self > other"""
        return self._richcmp(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        """self >= other"""
        return self._richcmp(other, operator.ge)

    def __hash__(self) -> int:
        """hash(self)"""
        reduced = self.reduced
        num, den = reduced._numerator, reduced._denominator
        try:
            dinv = pow(den, -1, _PyHASH_MODULUS)
        except ValueError:
            # den is divisible by _PyHASH_MODULUS (or 0)
            hash_ = _PyHASH_INF
        else:
            hash_ = hash(hash(abs(num)) * dinv)
        result = hash_ if num >= 0 else -hash_
        return -2 if result == -1 else result

    def __bool__(self) -> bool:
        """bool(self)"""
        return self._numerator != 0

    # conversion

    def as_integer_ratio(self) -> Tuple[int, int]:
        """Return the pair of numerator and denominator in lowest terms."""
        reduced = self.reduced
        return reduced._numerator, reduced._denominator

    def as_fraction(self) -> Fraction:
        """Return an instance of `Fraction` equal to `self`."""
        return Fraction(self._numerator, self._denominator)

    def to_decimal(self, context: Optional[Context] = None) -> Decimal:
        """Return `self` converted to `Decimal`.

        The result is rounded according to `context`, or to the current
        decimal context if `context` is None.
        """
        if context is None:
            context = getcontext()
        reduced = self.reduced
        quot, rem = _divrem(reduced._numerator, reduced._denominator)
        return context.add(Decimal(quot),
                           context.divide(Decimal(rem),
                                          Decimal(reduced._denominator)))

    def __float__(self) -> float:
        """float(self)

        Values beyond the float range give signed infinities.
        """
        try:
            # int / int is correctly rounded
            return self._numerator / self._denominator
        except OverflowError:
            return math.copysign(math.inf, self._numerator)

    def to_float32(self) -> float:
        """Return `self` rounded to single precision."""
        return to_float32(float(self))

    def __int__(self) -> int:
        """int(self)"""
        return self.quotient

    __trunc__ = __int__

    def to_int64(self) -> int:
        """Return integral part of `self` wrapped to 64 bits (signed)."""
        return wrap_int(self.quotient, 64)

    def to_int32(self) -> int:
        """Return integral part of `self` wrapped to 32 bits (signed)."""
        return wrap_int(self.quotient, 32)

    def to_int16(self) -> int:
        """Return integral part of `self` wrapped to 16 bits (signed)."""
        return wrap_int(self.quotient, 16)

    def to_uint8(self) -> int:
        """Return integral part of `self` wrapped to 8 bits (unsigned)."""
        return wrap_int(self.quotient, 8, signed=False)

    def __floor__(self) -> int:
        """math.floor(self)"""
        return self._numerator // self._denominator

    def __ceil__(self) -> int:
        """math.ceil(self)"""
        return -(-self._numerator // self._denominator)

    # rounding

    def adjusted(self, precision: Optional[int] = None,
                 rounding: Optional[Rounding] = None) -> BigRational:
        """Return copy of `self`, rounded to `precision` fractional digits.

        Args:
            precision (int): number of fractional decimal digits (default:
                0); negative values round to tens, hundreds, ...
            rounding (Rounding): rounding mode (default: None)

        If `rounding` is None, the default rounding mode is used.

        Raises:
            TypeError: `precision` is not an integral number
        """
        if precision is None:
            precision = 0
        elif not isinstance(precision, numbers.Integral):
            raise TypeError("Precision must be of type 'numbers.Integral'.")
        precision = int(precision)
        if precision >= 0:
            scale = 10 ** precision
            num = div_rounded(self._numerator * scale, self._denominator,
                              rounding)
            return BigRational._from_raw(num, scale).reduced
        scale = 10 ** -precision
        num = div_rounded(self._numerator, self._denominator * scale,
                          rounding)
        return BigRational._from_raw(num * scale, 1)

    def quantize(self, quant: Number,
                 rounding: Optional[Rounding] = None) -> BigRational:
        """Return integer multiple of `quant` closest to `self`.

        Args:
            quant (Union[numbers.Integral, numbers.Rational, Decimal,
                float]): quantum to get a multiple from
            rounding (Rounding): rounding mode (default: None)

        If `rounding` is None, the default rounding mode is used.

        Raises:
            TypeError: `quant` is not a number
            ValueError: `quant` is 0, infinite or NaN
        """
        quant = BigRational(quant)
        if quant.is_zero:
            raise ValueError("Quantum must not be 0.")
        mult = div_rounded(self._numerator * quant._denominator,
                           self._denominator * quant._numerator,
                           rounding)
        return BigRational._new(mult * quant._numerator,
                                quant._denominator).reduced

    def __round__(self, precision: Optional[int] = None) \
            -> Union[int, BigRational]:
        """round(self [, precision])

        Round `self` to an integral number, if `precision` is None, or to
        `precision` fractional digits, using the default rounding mode.
        """
        if precision is None:
            return div_rounded(self._numerator, self._denominator)
        return self.adjusted(precision)

    # unary operators

    def __pos__(self) -> BigRational:
        """+self"""
        return self

    def __neg__(self) -> BigRational:
        """-self"""
        return BigRational._from_raw(-self._numerator, self._denominator)

    def __abs__(self) -> BigRational:
        """abs(self)"""
        return BigRational._from_raw(abs(self._numerator),
                                     abs(self._denominator))

    def incremented(self) -> BigRational:
        """Return `self` + 1."""
        return BigRational._from_raw(self._numerator + self._denominator,
                                     self._denominator)

    def decremented(self) -> BigRational:
        """Return `self` - 1."""
        return BigRational._from_raw(self._numerator - self._denominator,
                                     self._denominator)

    def __pow__(self, exponent: Any) -> Union[BigRational, float]:
        """self ** exponent

        An integral `exponent` gives an exact result; a negative one
        raises the reciprocal of `self`.
        """
        if isinstance(exponent, numbers.Integral):
            exponent = int(exponent)
            if exponent > 0:
                return BigRational._from_raw(self._numerator ** exponent,
                                             self._denominator ** exponent)
            if exponent < 0:
                if self._numerator == 0:
                    raise ZeroDivisionError("Zero can't be raised to a "
                                            "negative power.")
                exponent = -exponent
                return BigRational._new(self._denominator ** exponent,
                                        self._numerator ** exponent)
            return ONE
        if isinstance(exponent, float):
            return float(self) ** exponent
        return NotImplemented

    # formatting

    def to_str_fraction(self) -> str:
        """Return `self` formatted as fraction in lowest terms."""
        reduced = self.reduced
        if reduced._denominator == 1:
            return str(reduced._numerator)
        return f"{reduced._numerator}/{reduced._denominator}"

    def to_str_mixed_fraction(self) -> str:
        """Return `self` formatted as mixed fraction."""
        reduced = self.reduced
        quot, rem = _divrem(reduced._numerator, reduced._denominator)
        if quot == 0:
            return reduced.to_str_fraction()
        if rem == 0:
            return str(quot)
        # sign is carried by the integral part only ("-3 1/2")
        return f"{quot} {abs(rem)}/{reduced._denominator}"

    def __str__(self) -> str:
        """str(self)

        Fractional digits are those of the quotient of remainder and
        denominator, computed as `Decimal` (truncated to the precision of
        the current decimal context).
        """
        reduced = self.reduced
        num, den = reduced._numerator, reduced._denominator
        if num == 0:
            return "0"
        quot, rem = _divrem(num, den)
        if rem == 0:
            return str(quot)
        with localcontext() as ctx:
            ctx.rounding = ROUND_DOWN
            frac = Decimal(abs(rem)) / Decimal(den)
        digits = format(frac, 'f').partition('.')[2].rstrip('0')
        sign = '-' if num < 0 else ''
        return f"{sign}{abs(quot)}.{digits}"

    def __repr__(self) -> str:
        """repr(self)"""
        cls_name = self.__class__.__name__
        if self._denominator == 1:
            return f"{cls_name}({self._numerator})"
        return f"{cls_name}({self._numerator}, {self._denominator})"

    # immutable, so copies are not needed

    def __copy__(self) -> BigRational:
        return self

    def __deepcopy__(self, memo: Any) -> BigRational:
        return self


def _as_rational(value: Any) -> Union[BigRational, Any]:
    """Return `value` as `BigRational` or NotImplemented."""
    if isinstance(value, BigRational):
        return value
    if isinstance(value, numbers.Integral):
        return BigRational._from_raw(int(value), 1)
    if isinstance(value, numbers.Rational):
        return BigRational._new(int(value.numerator), int(value.denominator))
    if isinstance(value, Decimal):
        return BigRational._from_raw(*decimal_to_ratio(value))
    return NotImplemented


def _operator_fallbacks(monomorphic: Callable[[BigRational, BigRational],
                                              Any],
                        fallback: Callable[[Any, Any], Any]) \
        -> Tuple[Callable[[BigRational, Any], Any],
                 Callable[[BigRational, Any], Any]]:
    """Generate forward and reverse operator for `monomorphic`.

    `monomorphic` combines two `BigRational` instances. Integral, rational
    and decimal operands are converted to `BigRational` before; with a
    float operand, `fallback` is applied to the operands as floats.
    """

    def forward(a: BigRational, b: Any) -> Any:
        if isinstance(b, float):
            return fallback(float(a), b)
        b = _as_rational(b)
        if b is NotImplemented:
            return NotImplemented
        return monomorphic(a, b)

    forward.__name__ = '__' + fallback.__name__ + '__'
    forward.__doc__ = monomorphic.__doc__

    def reverse(b: BigRational, a: Any) -> Any:
        if isinstance(a, float):
            return fallback(a, float(b))
        a = _as_rational(a)
        if a is NotImplemented:
            return NotImplemented
        return monomorphic(a, b)

    reverse.__name__ = '__r' + fallback.__name__ + '__'
    reverse.__doc__ = monomorphic.__doc__

    return forward, reverse


def _add(a: BigRational, b: BigRational) -> BigRational:
    """a + b"""
    return BigRational._new(a._numerator * b._denominator +
                            b._numerator * a._denominator,
                            a._denominator * b._denominator)


def _sub(a: BigRational, b: BigRational) -> BigRational:
    """a - b"""
    return BigRational._new(a._numerator * b._denominator -
                            b._numerator * a._denominator,
                            a._denominator * b._denominator)


def _mul(a: BigRational, b: BigRational) -> BigRational:
    """a * b"""
    return BigRational._new(a._numerator * b._numerator,
                            a._denominator * b._denominator)


def _truediv(a: BigRational, b: BigRational) -> BigRational:
    """a / b"""
    if b._numerator == 0:
        raise ZeroDivisionError("Division by zero.")
    return BigRational._new(a._numerator * b._denominator,
                            a._denominator * b._numerator)


def _mod(a: BigRational, b: BigRational) -> int:
    """a % b

    Note: the result is an `int`, not a `BigRational`.
    """
    if b._numerator == 0:
        raise ZeroDivisionError("Division by zero.")
    return ((a._numerator * b._denominator) %
            (a._denominator * b._numerator))


BigRational.__add__, BigRational.__radd__ = \
    _operator_fallbacks(_add, operator.add)
BigRational.__sub__, BigRational.__rsub__ = \
    _operator_fallbacks(_sub, operator.sub)
BigRational.__mul__, BigRational.__rmul__ = \
    _operator_fallbacks(_mul, operator.mul)
BigRational.__truediv__, BigRational.__rtruediv__ = \
    _operator_fallbacks(_truediv, operator.truediv)
BigRational.__mod__, BigRational.__rmod__ = \
    _operator_fallbacks(_mod, operator.mod)

BigRational.ZERO = ZERO = BigRational._from_raw(0, 1)
BigRational.ONE = ONE = BigRational._from_raw(1, 1)
BigRational.INVALID = BigRational._from_raw(0, 0)


def log10(value: Number) -> float:
    """Return the base 10 logarithm of `value`.

    Raises:
        ValueError: `value` is not positive
    """
    value = BigRational(value)
    return math.log10(value.numerator) - math.log10(value.denominator)


def log(value: Number, base: Optional[float] = None) -> float:
    """Return the logarithm of `value` to the given `base`.

    If `base` is None, the natural logarithm is returned.

    Raises:
        ValueError: `value` is not positive
    """
    value = BigRational(value)
    if base is None:
        return math.log(value.numerator) - math.log(value.denominator)
    return (math.log(value.numerator, base) -
            math.log(value.denominator, base))
