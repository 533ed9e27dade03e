#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Tests for namigen.utils.misc.
"""
import numpy
from namigen.utils.misc import band_fraction
from namigen.utils.misc import blend
from namigen.utils.misc import clamped_blend
from namigen.utils.misc import num_decimal_digits


def test_band_fraction():
    """Test `band_fraction(...)`."""
    dist = numpy.array([2., 3., 4., 6.])
    assert numpy.allclose(band_fraction(dist, 2., 6.), [1., 0.75, 0.5, 0.])


def test_blend():
    """Both blends hit the extremes at t = 0 and t = 1."""

    for sinusoidal in (True, False):
        assert blend(0., -10., 50., sinusoidal) == -10.
        assert numpy.isclose(blend(1., -10., 50., sinusoidal), 50.)
        assert numpy.isclose(blend(0.5, -10., 50., sinusoidal), 20.)

    # the sinusoidal ease is flatter than the linear one near the ends
    assert blend(0.1, 0., 1., True) < blend(0.1, 0., 1., False)
    assert blend(0.9, 0., 1., True) > blend(0.9, 0., 1., False)


def test_clamped_blend():
    """Clamps are exact and take precedence over the blend."""
    dist = numpy.array([0., 1., 2., 3., 4., 5.])
    result = clamped_blend(dist, 1., 4., 7.5, -3.25)
    assert result[0] == -3.25
    assert result[1] == -3.25
    assert result[4] == 7.5
    assert result[5] == 7.5
    assert numpy.allclose(result[2:4], [7.5 + (2./3.) * (-10.75), 7.5 + (1./3.) * (-10.75)])


def test_clamped_blend_equal_thresholds():
    """Equal thresholds are not rejected."""
    result = clamped_blend(numpy.array([0., 2., 3.]), 2., 2., 1., 0.)
    assert result[0] == 0.
    assert result[1] == 1.
    assert result[2] == 1.


def test_num_decimal_digits():
    """Test `num_decimal_digits(...)`."""
    assert num_decimal_digits(0.) == 1
    assert num_decimal_digits(0.9) == 1
    assert num_decimal_digits(-0.5) == 1
    assert num_decimal_digits(7.2) == 1
    assert num_decimal_digits(12.) == 2
    assert num_decimal_digits(-10.) == 3
    assert num_decimal_digits(999.99) == 3
    assert num_decimal_digits(123456.) == 6
    assert num_decimal_digits(float("nan")) == 1
