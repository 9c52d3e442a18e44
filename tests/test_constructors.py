#!/usr/bin/env python
# -*- coding: utf-8 -*-
# ----------------------------------------------------------------------------
# Copyright:   (c) 2018 ff. Michael Amrhein (michael@adrhinum.de)
# License:     This program is part of a larger application. For license
#              details please read the file LICENSE.TXT provided together
#              with the application.
# ----------------------------------------------------------------------------
# $Source$
# $Revision$


"""Test driver for package 'bigrational' (constructors)."""

import copy
from decimal import Decimal
from fractions import Fraction
from numbers import Integral, Real
import sys

import pytest

from bigrational import BigRational


class IntWrapper:

    def __init__(self, i):
        assert isinstance(i, int)
        self.i = i

    def __int__(self):
        """int(self)"""
        return self.i

    __index__ = __int__

    def __eq__(self, i):
        """self == i"""
        return self.i == i


# noinspection PyUnresolvedReferences
Integral.register(IntWrapper)


class FloatWrapper:

    def __init__(self, f):
        assert isinstance(f, float)
        self.f = f

    def __float__(self):
        """float(self)"""
        return self.f

    def __eq__(self, f):
        """self == f"""
        return self.f == f


# noinspection PyUnresolvedReferences
Real.register(FloatWrapper)


class Dummy:

    def __init__(self, s):
        self.s = str(s)

    def __float__(self):
        return float(len(self.s))

    def __int__(self):
        return len(self.s)


def test_bigrational_no_value():
    rn = BigRational()
    assert isinstance(rn, BigRational)
    assert rn.numerator == 0
    assert rn.denominator == 1
    assert not rn.is_invalid


@pytest.mark.parametrize("num", [float, 3 + 2j, Dummy(17), "1/3", "0.5"],
                         ids=("num=float", "num=3+2j", "num=Dummy(17)",
                              "num='1/3'", "num='0.5'"))
def test_bigrational_wrong_num_type(num):
    with pytest.raises(TypeError):
        BigRational(num)


compact_coeff = 174
compact_prec = 1
compact_ratio = Fraction(compact_coeff, 10 ** compact_prec)
compact_str = ".174e2"
small_coeff = 123456789012345678901234567890
small_prec = 20
small_ratio = Fraction(-small_coeff, 10 ** small_prec)
small_str = "-12345678901234567890.1234567890E-10"
large_coeff = 294898 * 10 ** 2453 + 1498953
large_prec = 459
large_ratio = Fraction(large_coeff, 10 ** large_prec)
large_str = f"{large_coeff}e-{large_prec}"


@pytest.mark.parametrize(("num", "den"),
                         ((170, 10),
                          (small_coeff, 10 ** small_prec),
                          (large_coeff, 10 ** large_prec),
                          (small_coeff, large_coeff),
                          (large_coeff, small_coeff),
                          (0, 7),
                          (-4, 2)),
                         ids=("compact", "small", "large", "small/large",
                              "large/small", "zero", "int"))
def test_bigrational_from_ratio(num, den):
    rn = BigRational(num, den)
    assert isinstance(rn, BigRational)
    # stored as given
    assert rn.numerator == num
    assert rn.denominator == den
    assert rn.as_fraction() == Fraction(num, den)


@pytest.mark.parametrize(("num", "den"),
                         ((8290, -10000),
                          (-3, -4),
                          (large_coeff, -small_coeff)),
                         ids=("frac-only", "both-neg", "large"))
def test_bigrational_from_ratio_neg_den(num, den):
    rn = BigRational(num, den)
    assert rn.numerator == -num
    assert rn.denominator == -den
    assert rn.as_fraction() == Fraction(num, den)


@pytest.mark.parametrize("num", (0, 17, -large_coeff),
                         ids=("zero", "compact", "large"))
def test_bigrational_zero_den(num):
    with pytest.raises(ValueError):
        BigRational(num, 0)


@pytest.mark.parametrize(("num", "den"),
                         ((1, 2.0),
                          (1.0, 2),
                          (Fraction(1, 2), 3),
                          (Decimal(1), 3),
                          ("1", 3)),
                         ids=("den=float", "num=float", "num=Fraction",
                              "num=Decimal", "num=str"))
def test_bigrational_from_ratio_wrong_type(num, den):
    with pytest.raises(TypeError):
        BigRational(num, den)


def test_bigrational_from_bigrational():
    rn1 = BigRational(6, 4)
    rn2 = BigRational(rn1)
    assert rn2 is rn1


@pytest.mark.parametrize(("value", "ratio"),
                         ((compact_coeff, Fraction(compact_coeff, 1)),
                          (small_coeff, Fraction(small_coeff, 1)),
                          (large_coeff, Fraction(large_coeff, 1)),
                          (IntWrapper(328), Fraction(328, 1)),
                          (True, Fraction(1, 1))),
                         ids=("compact", "small", "large", "IntWrapper",
                              "bool"))
def test_bigrational_from_integral(value, ratio):
    rn = BigRational(value)
    assert isinstance(rn, BigRational)
    assert rn.denominator == 1
    assert rn.as_fraction() == ratio


@pytest.mark.parametrize("ratio",
                         (compact_ratio, small_ratio, large_ratio),
                         ids=("compact", "small", "large"))
def test_bigrational_from_fraction(ratio):
    rn = BigRational(ratio)
    assert isinstance(rn, BigRational)
    assert rn.numerator == ratio.numerator
    assert rn.denominator == ratio.denominator


@pytest.mark.parametrize("value",
                         (Decimal(compact_str),
                          Decimal(small_str),
                          Decimal(large_str),
                          Decimal("5.4e6"),
                          Decimal("-0.00014"),
                          Decimal("123.4567")),
                         ids=("compact", "small", "large", "pos-exp",
                              "fraction", "4-digits"))
def test_bigrational_from_decimal(value):
    rn = BigRational(value)
    assert isinstance(rn, BigRational)
    ratio = Fraction(value)
    # result is in lowest terms
    assert rn.numerator == ratio.numerator
    assert rn.denominator == ratio.denominator


@pytest.mark.parametrize("value",
                         (Decimal(0), Decimal("-0"), Decimal("0.000"),
                          Decimal("0e-27"), 0.0, -0.0),
                         ids=("0", "-0", "0.000", "0e-27", "0.0", "-0.0"))
def test_bigrational_from_zero(value):
    rn = BigRational(value)
    assert rn.numerator == 0
    assert rn.denominator == 1


@pytest.mark.parametrize("value",
                         (Decimal('inf'), Decimal('-inf'), Decimal('nan'),
                          Decimal('snan')),
                         ids=("inf", "-inf", "nan", "snan"))
def test_bigrational_from_incompat_decimal(value):
    with pytest.raises(ValueError):
        BigRational(value)


@pytest.mark.parametrize(("value", "ratio"),
                         ((Decimal("123.4567"), Fraction(1234567, 10000)),
                          (5, Fraction(5, 1))),
                         ids=("Decimal", "int"))
def test_bigrational_from_decimal_cls_meth(value, ratio):
    rn = BigRational.from_decimal(value)
    assert isinstance(rn, BigRational)
    assert rn.as_fraction() == ratio


@pytest.mark.parametrize("value",
                         (Fraction(12346, 100), FloatWrapper(328.5), 5.31),
                         ids=("Fraction", "FloatWrapper", "float"))
def test_bigrational_from_decimal_cls_meth_wrong_type(value):
    with pytest.raises(TypeError):
        BigRational.from_decimal(value)


@pytest.mark.parametrize(("value", "ratio"),
                         ((17.5, Fraction(175, 10)),
                          (-0.1, Fraction(-0.1)),
                          (3.14, Fraction(3.14)),
                          (5e-324, Fraction(5e-324)),
                          (sys.float_info.max,
                           Fraction(int(sys.float_info.max), 1)),
                          (FloatWrapper(328.5), Fraction(3285, 10))),
                         ids=("compact", "-0.1", "3.14", "float.min",
                              "float.max", "FloatWrapper"))
def test_bigrational_from_float(value, ratio):
    rn = BigRational(value)
    assert isinstance(rn, BigRational)
    assert rn.numerator == ratio.numerator
    assert rn.denominator == ratio.denominator


@pytest.mark.parametrize("value",
                         (float('inf'), float('-inf'), float('nan')),
                         ids=("inf", "-inf", "nan"))
def test_bigrational_from_incompat_float(value):
    with pytest.raises(ValueError):
        BigRational(value)


@pytest.mark.parametrize(("value", "ratio"),
                         ((1.5, Fraction(15, 10)),
                          (sys.float_info.max,
                           Fraction(int(sys.float_info.max), 1)),
                          (5, Fraction(5, 1))),
                         ids=("compact", "float.max", "int"))
def test_bigrational_from_float_cls_meth(value, ratio):
    rn = BigRational.from_float(value)
    assert isinstance(rn, BigRational)
    assert rn.as_fraction() == ratio


@pytest.mark.parametrize("value",
                         (Fraction(12346, 100),
                          FloatWrapper(328.5),
                          Decimal("5.31")),
                         ids=("Fraction", "FloatWrapper", "Decimal"))
def test_bigrational_from_float_cls_meth_wrong_type(value):
    with pytest.raises(TypeError):
        BigRational.from_float(value)


@pytest.mark.parametrize(("value", "ratio"),
                         ((1.5, Fraction(3, 2)),
                          (0.1, Fraction(13421773, 134217728)),
                          (-17, Fraction(-17, 1))),
                         ids=("exact", "0.1", "int"))
def test_bigrational_from_float32(value, ratio):
    rn = BigRational.from_float32(value)
    assert rn.numerator == ratio.numerator
    assert rn.denominator == ratio.denominator


@pytest.mark.parametrize("value", (1e40, float('inf'), float('nan'),
                                   10 ** 400, -10 ** 400),
                         ids=("1e40", "inf", "nan", "10**400", "-10**400"))
def test_bigrational_from_incompat_float32(value):
    with pytest.raises(ValueError):
        BigRational.from_float32(value)


def test_bigrational_from_float32_wrong_type():
    with pytest.raises(TypeError):
        BigRational.from_float32(Decimal("0.5"))


@pytest.mark.parametrize(("value", "num"),
                         ((328, 328),
                          (IntWrapper(-7), -7),
                          (large_coeff, large_coeff)),
                         ids=("compact", "IntWrapper", "large"))
def test_bigrational_from_integral_cls_meth(value, num):
    rn = BigRational.from_integral(value)
    assert rn.numerator == num
    assert rn.denominator == 1


@pytest.mark.parametrize("value", (1.0, Fraction(1, 1), Decimal(1)),
                         ids=("float", "Fraction", "Decimal"))
def test_bigrational_from_integral_cls_meth_wrong_type(value):
    with pytest.raises(TypeError):
        BigRational.from_integral(value)


@pytest.mark.parametrize(("integer", "num", "den", "result"),
                         ((3, 1, 2, 7),
                          (0, 5, 9, 5),
                          (-2, 1, 4, -7),
                          (large_coeff, 3, 10, large_coeff * 10 + 3)),
                         ids=("3 1/2", "0 5/9", "-2 1/4", "large"))
def test_bigrational_from_mixed(integer, num, den, result):
    rn = BigRational.from_mixed(integer, num, den)
    # the denominator scales the integral part, it is not kept
    assert rn.numerator == result
    assert rn.denominator == 1


def test_bigrational_from_mixed_wrong_type():
    with pytest.raises(TypeError):
        BigRational.from_mixed(1, 0.5, 2)


def test_constants():
    assert BigRational.ZERO.numerator == 0
    assert BigRational.ZERO.denominator == 1
    assert BigRational.ONE.numerator == 1
    assert BigRational.ONE.denominator == 1
    assert BigRational.INVALID.denominator == 0
    assert BigRational.INVALID.is_invalid


@pytest.mark.parametrize(("num", "den"),
                         ((178, 10),
                          (large_coeff, 10 ** large_prec),
                          (-14, 100000)),
                         ids=("compact", "large", "fraction"))
def test_copy(num, den):
    rn = BigRational(num, den)
    assert copy.copy(rn) is rn
    assert copy.deepcopy(rn) is rn
