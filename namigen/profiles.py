#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Profile functions mapping cell positions to elevations.

All profiles have the signature `profile(x, y, config)`, where `x` and `y` are integer cell
indices (scalars or numpy arrays of the same shape) and `config` is a
`namigen.utils.config.Config`. They return a float64 numpy.ndarray with the shape of the
broadcasted indices.
"""
# imports related to type hinting
from __future__ import annotations as _annotations  # allows us not using quotation marks for hints
from typing import TYPE_CHECKING as _TYPE_CHECKING  # indicates if we have type checking right now
if _TYPE_CHECKING:  # if we are having type checking, then we import corresponding classes/types
    from numpy import ndarray
    from namigen.utils.config import Config

# pylint: disable=wrong-import-position, ungrouped-imports
from functools import partial as _partial
from types import MappingProxyType as _MappingProxyType
from logging import getLogger as _getLogger

import numpy as _numpy
from namigen.utils.config import ShapeType as _ShapeType
from namigen.utils.config import get_shape_type as _get_shape_type
from namigen.utils.misc import clamped_blend as _clamped_blend


_logger = _getLogger("namigen.profiles")


def _coords(x, y):
    """Broadcast cell indices to float64 arrays."""
    return _numpy.broadcast_arrays(
        _numpy.asarray(x, dtype=_numpy.float64), _numpy.asarray(y, dtype=_numpy.float64))


def circular_profile(x, y, config: Config, sinusoidal: bool = True) -> ndarray:
    """Circular basin centered in the grid.

    The distance is measured from the center of a cell, i.e., (x+0.5, y+0.5), to the grid center
    (nx/2, ny/2). The gaps are diameters, so the band lies between gap_bottom/2 and gap_top/2.

    With gap_bottom = 0 no cell center lies at distance 0, so on small even grids the center cells
    do not reach z_bottom. In the 4x4 example with gap = (0, 4) and z = (-10, 50), the center 2x2
    cells are 28.79 rather than 50, while the corners are exactly z_land.
    """
    x, y = _coords(x, y)
    dist = _numpy.hypot(x + 0.5 - config.nx * 0.5, y + 0.5 - config.ny * 0.5)
    return _clamped_blend(
        dist, config.gap_bottom * 0.5, config.gap_top * 0.5,
        config.z_land, config.z_bottom, sinusoidal)


def edge_distance(x, y, nx: int, ny: int, direction: str):
    """Distance (in cells) used by flat profiles for a given direction.

    Arguments
    ---------
    x, y : numpy.ndarray
        Cell indices.
    nx, ny : int
        Numbers of cells.
    direction : str
        One of "right", "left", "top", or "bottom".

    Returns
    -------
    numpy.ndarray
    """
    options = {
        "right": lambda: x,
        "left": lambda: nx - 1 - x,
        "bottom": lambda: y,
        "top": lambda: ny - 1 - y,
    }

    try:
        return options[direction]()
    except KeyError as err:
        raise ValueError(f"Unrecognized direction: {direction}") from err


def flat_profile(x, y, config: Config, direction: str, sinusoidal: bool = False) -> ndarray:
    """Flat bathymetry rising toward one side of the grid."""
    x, y = _coords(x, y)
    dist = edge_distance(x, y, config.nx, config.ny, direction)
    return _clamped_blend(
        dist, config.gap_bottom, config.gap_top, config.z_land, config.z_bottom, sinusoidal)


def wedge_profile(x, y, config: Config) -> ndarray:
    """Double-wedge channel: deep along the center column, rising linearly to both side edges."""
    x, y = _coords(x, y)
    dist = _numpy.abs(x - (config.nx - 1) * 0.5)
    return _clamped_blend(
        dist, config.gap_bottom, config.gap_top, config.z_land, config.z_bottom, False)


def wave_profile(x, y, config: Config, shape: str) -> ndarray:
    """Solitary wave surface, H / cosh^2(k r), with k = sqrt(0.75 H / d^3).

    The amplitude H is |z_land| and the reference depth d is z_bottom. The gaps are the
    coordinates of the wave center: (gap_bottom, gap_top) for a circular wave, and gap_bottom
    alone for horizontal (along y) and vertical (along x) waves.

    Arguments
    ---------
    x, y : int or numpy.ndarray
        Cell indices.
    config : namigen.utils.config.Config
    shape : str
        One of "circular", "horizontal", "vertical", or "empty".

    Returns
    -------
    numpy.ndarray
    """
    x, y = _coords(x, y)

    if shape == "empty":
        return _numpy.zeros_like(x)

    if shape == "circular":
        dist = _numpy.hypot(x - config.gap_bottom, y - config.gap_top)
    elif shape == "horizontal":
        dist = _numpy.abs(y - config.gap_bottom)
    elif shape == "vertical":
        dist = _numpy.abs(x - config.gap_bottom)
    else:
        raise ValueError(f"Unrecognized wave shape: {shape}")

    amp = abs(config.z_land)
    depth = _numpy.float64(config.z_bottom)

    with _numpy.errstate(divide="ignore", invalid="ignore", over="ignore"):
        k = _numpy.sqrt(0.75 * amp / depth**3)
        return amp / _numpy.cosh(k * dist)**2


# available profiles (read-only)
PROFILES = _MappingProxyType({
    _ShapeType.CIRCULAR_SINUSOIDAL: _partial(circular_profile, sinusoidal=True),
    _ShapeType.CIRCULAR_LINEAR: _partial(circular_profile, sinusoidal=False),
    _ShapeType.LINEAR_RIGHT: _partial(flat_profile, direction="right", sinusoidal=False),
    _ShapeType.LINEAR_LEFT: _partial(flat_profile, direction="left", sinusoidal=False),
    _ShapeType.LINEAR_TOP: _partial(flat_profile, direction="top", sinusoidal=False),
    _ShapeType.LINEAR_BOTTOM: _partial(flat_profile, direction="bottom", sinusoidal=False),
    _ShapeType.SINUSOIDAL_RIGHT: _partial(flat_profile, direction="right", sinusoidal=True),
    _ShapeType.SINUSOIDAL_LEFT: _partial(flat_profile, direction="left", sinusoidal=True),
    _ShapeType.SINUSOIDAL_TOP: _partial(flat_profile, direction="top", sinusoidal=True),
    _ShapeType.SINUSOIDAL_BOTTOM: _partial(flat_profile, direction="bottom", sinusoidal=True),
    _ShapeType.DUHIS: wedge_profile,
    _ShapeType.WAVE_CIRCULAR: _partial(wave_profile, shape="circular"),
    _ShapeType.WAVE_HORIZONTAL: _partial(wave_profile, shape="horizontal"),
    _ShapeType.WAVE_VERTICAL: _partial(wave_profile, shape="vertical"),
    _ShapeType.WAVE_EMPTY: _partial(wave_profile, shape="empty"),
})


def get_profile(shape):
    """Get the profile function of a generation type.

    Arguments
    ---------
    shape : namigen.utils.config.ShapeType or str

    Returns
    -------
    A callable with signature `profile(x, y, config)`.
    """
    shape = _get_shape_type(shape)
    _logger.debug("Profile of type %s: %s", shape.value, PROFILES[shape])
    return PROFILES[shape]
