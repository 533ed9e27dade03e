#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Data model for generated grids.
"""
from logging import getLogger as _getLogger

import numpy as _numpy
from pydantic import conint as _conint
from pydantic import model_validator as _model_validator
from namigen.utils.config import BaseConfig as _BaseConfig


_logger = _getLogger("namigen.utils.data")


class Grid(_BaseConfig):
    """Data model for a generated grid.

    Attributes
    ----------
    nx, ny : int
        Numbers of cells in x and y directions.
    data : 1D numpy.ndarray of float32 with length nx*ny
        Values in row-major order, i.e., data[i] belongs to cell (i % nx, i // nx).
    vmin, vmax : float
        The minimum and the maximum of `data`.
    """
    # pylint: disable=invalid-name

    nx: _conint(strict=True, gt=0)
    ny: _conint(strict=True, gt=0)
    data: _numpy.ndarray
    vmin: float
    vmax: float

    @_model_validator(mode="after")
    def _val_data(self):
        """Validations that rely on other fields' correctness."""
        assert self.data.dtype == _numpy.float32, "data: dtype is not float32"
        assert self.data.shape == (self.nx*self.ny,), "data: shape does not match."

        # extents are reduced without NaN cells
        if not _numpy.isnan(self.data).any():
            assert self.vmin == float(self.data.min()), "vmin does not match data"
            assert self.vmax == float(self.data.max()), "vmax does not match data"
        return self

    @property
    def shape(self):
        """The shape of the 2D view, i.e., (ny, nx)."""
        return (self.ny, self.nx)

    def view2d(self):
        """A 2D view of the data with shape (ny, nx); row j holds the cells with y == j."""
        return self.data.reshape(self.shape)

    def __getitem__(self, key):
        """Get the value of cell (x, y) when `key` is a 2-tuple; otherwise a field."""
        if isinstance(key, tuple):
            x, y = key
            return self.data[y*self.nx+x]
        return super().__getitem__(key)


def get_grid(nx: int, ny: int, data):
    """Get a Grid with the extent reduced from the data.

    Arguments
    ---------
    nx, ny : int
    data : array-like of length nx*ny
        Converted to float32.

    Returns
    -------
    grid : Grid
    """
    data = _numpy.ascontiguousarray(data, dtype=_numpy.float32).reshape(-1)
    _logger.debug("Creating a %d x %d grid", nx, ny)

    # NaN cells (from invalid parameters) are left out of the extent
    if _numpy.isnan(data).all():
        vmin = vmax = float("nan")
    else:
        vmin = float(_numpy.nanmin(data))
        vmax = float(_numpy.nanmax(data))

    return Grid(nx=nx, ny=ny, data=data, vmin=vmin, vmax=vmax)
