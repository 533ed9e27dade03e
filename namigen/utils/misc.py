#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.me>
#
# Distributed under terms of the BSD 3-Clause license.

"""A collection of some misc stuff.
"""
import logging as _logging
import numpy as _numpy


_logger = _logging.getLogger("namigen.utils.misc")


def band_fraction(dist, lower, upper):
    """Normalize distances inside a band to [0, 1], with 1 at the lower threshold.

    Arguments
    ---------
    dist : float or numpy.ndarray
        Distances.
    lower, upper : float
        The lower and upper thresholds of the band.

    Returns
    -------
    t : float or numpy.ndarray
        `1 - (dist - lower) / (upper - lower)`.

    Notes
    -----
    `lower == upper` is not checked. The result is then inf or NaN.
    """
    return 1.0 - (dist - lower) / (upper - lower)


def blend(t, z_land, z_bottom, sinusoidal=False):
    """Interpolate between the land and the bottom elevations.

    Arguments
    ---------
    t : float or numpy.ndarray
        Fraction in [0, 1]; 0 gives `z_land` and 1 gives `z_bottom`.
    z_land, z_bottom : float
        The two extremes.
    sinusoidal : bool
        If True, ease with half a cosine period so the slopes at both ends are zero. Otherwise,
        interpolate linearly.

    Returns
    -------
    float or numpy.ndarray
    """
    if sinusoidal:
        theta = _numpy.pi * t - _numpy.pi  # [-pi, 0]
        t = _numpy.cos(theta) * 0.5 + 0.5
    return z_land + t * (z_bottom - z_land)


def clamped_blend(dist, lower, upper, z_land, z_bottom, sinusoidal=False):
    """Clamp distances to the two extremes and blend those inside the band.

    Distances greater than or equal to `upper` get `z_land`, and those less than or equal to
    `lower` get `z_bottom`. Both clamps are exact copies of the extremes.

    Arguments
    ---------
    dist : numpy.ndarray
        Distances.
    lower, upper : float
        The lower and upper thresholds of the band.
    z_land, z_bottom : float
        The elevations outside and inside the band.
    sinusoidal : bool
        See `blend`.

    Returns
    -------
    numpy.ndarray of float64
    """
    dist = _numpy.asarray(dist, dtype=_numpy.float64)

    with _numpy.errstate(divide="ignore", invalid="ignore"):
        values = blend(band_fraction(dist, lower, upper), z_land, z_bottom, sinusoidal)

    values = _numpy.where(dist <= lower, z_bottom, values)
    values = _numpy.where(dist >= upper, z_land, values)
    return values


def num_decimal_digits(value):
    """Number of characters of the integer part of a value.

    The value is truncated toward zero first. Zero counts as one digit, and a minus sign counts
    as one extra character. Non-finite values count as one character.

    Arguments
    ---------
    value : float

    Returns
    -------
    int
    """
    if not _numpy.isfinite(value):
        return 1

    number = int(value)

    if number == 0:
        return 1

    return len(str(number))
