#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Sampling all cells of a grid.
"""
# imports related to type hinting
from __future__ import annotations as _annotations  # allows us not using quotation marks for hints
from typing import TYPE_CHECKING as _TYPE_CHECKING  # indicates if we have type checking right now
if _TYPE_CHECKING:  # if we are having type checking, then we import corresponding classes/types
    from namigen.utils.config import Config
    from namigen.utils.data import Grid

# pylint: disable=wrong-import-position, ungrouped-imports
import time as _time
from logging import getLogger as _getLogger

import numpy as _numpy
from namigen.masks import classify as _classify
from namigen.utils.data import get_grid as _get_grid


_logger = _getLogger("namigen.sampler")


def get_cell_indices(nx: int, ny: int):
    """Get the x and y indices of all cells in row-major order.

    Arguments
    ---------
    nx, ny : int
        Numbers of cells in x and y directions.

    Returns
    -------
    x, y : 1D numpy.ndarray of int64 with length nx*ny
        Linear index i corresponds to (x[i], y[i]) = (i % nx, i // nx).
    """
    idx = _numpy.arange(nx*ny, dtype=_numpy.int64)
    return idx % nx, idx // nx


def sample_cell(x: int, y: int, config: Config) -> float:
    """Get the float32 value of a single cell, as stored in a grid."""
    return float(_numpy.float32(_classify(x, y, config)))


def sample_grid(config: Config) -> Grid:
    """Evaluate every cell of the grid described by a configuration.

    Every cell is independent of the others, so all cells are evaluated in one vectorized call.
    Values are stored as float32, and the extent is reduced from the stored values.

    Arguments
    ---------
    config : namigen.utils.config.Config

    Returns
    -------
    grid : namigen.utils.data.Grid
    """

    perf_t0 = _time.perf_counter()

    x, y = get_cell_indices(config.nx, config.ny)
    values = _classify(x, y, config).astype(_numpy.float32)
    grid = _get_grid(config.nx, config.ny, values)

    _logger.info("Sampled %d cells of type %s", values.size, config.type.value)
    _logger.info("Extent: min=%f, max=%f", grid.vmin, grid.vmax)
    _logger.debug("Sampling time: %s seconds", _time.perf_counter()-perf_t0)

    if _numpy.isnan(values).any():
        _logger.warning("%d cells are NaN; check gap and z values", _numpy.isnan(values).sum())

    return grid
