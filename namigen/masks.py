#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Cell classification and wall masking.
"""
# imports related to type hinting
from __future__ import annotations as _annotations  # allows us not using quotation marks for hints
from typing import TYPE_CHECKING as _TYPE_CHECKING  # indicates if we have type checking right now
if _TYPE_CHECKING:  # if we are having type checking, then we import corresponding classes/types
    from numpy import ndarray
    from namigen.utils.config import Config

# pylint: disable=wrong-import-position, ungrouped-imports
from logging import getLogger as _getLogger

import numpy as _numpy
from namigen.utils.config import ShapeType as _ShapeType
from namigen.profiles import get_profile as _get_profile


_logger = _getLogger("namigen.masks")


def wall_mask(x, y, config: Config) -> ndarray:
    """Get the boolean mask of cells that are forced to land elevation.

    - Solitary waves: no cell.
    - Double wedge ("duhis"): cells within `wall_width` of the top or the bottom border, no
      matter whether `has_walls` is set.
    - Other types with `has_walls`: cells within `wall_width` of any border.
    - Otherwise: no cell.

    Arguments
    ---------
    x, y : int or numpy.ndarray
        Cell indices.
    config : namigen.utils.config.Config

    Returns
    -------
    mask : numpy.ndarray of bool
    """
    x, y = _numpy.broadcast_arrays(_numpy.asarray(x), _numpy.asarray(y))
    width = config.wall_width

    if config.type.is_wave:
        return _numpy.zeros(x.shape, dtype=bool)

    ymask = (y < width) | (y >= config.ny - width)

    if config.type == _ShapeType.DUHIS:
        return ymask

    if config.has_walls:
        return ymask | (x < width) | (x >= config.nx - width)

    return _numpy.zeros(x.shape, dtype=bool)


def classify(x, y, config: Config) -> ndarray:
    """Get the final elevations of cells.

    The profile of `config.type` gives the elevations, and walls override them with `z_land`.

    Arguments
    ---------
    x, y : int or numpy.ndarray
        Cell indices.
    config : namigen.utils.config.Config

    Returns
    -------
    values : numpy.ndarray of float64
    """
    values = _get_profile(config.type)(x, y, config)
    mask = wall_mask(x, y, config)
    return _numpy.where(mask, config.z_land, values)
