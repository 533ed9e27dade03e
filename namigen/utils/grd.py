#! /usr/bin/env python
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2020-2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Functions related to GRD (Surfer grid) formats.

Two encodings are supported:

- DSAA: the ASCII format.
- DSBB: a packed little-endian binary format with a fixed 56-byte header followed by float32
  values in row-major order.
"""
# imports related to type hinting
from __future__ import annotations as _annotations  # allows us not using quotation marks for hints
from typing import TYPE_CHECKING as _TYPE_CHECKING  # indicates if we have type checking right now
if _TYPE_CHECKING:  # if we are having type checking, then we import corresponding classes/types
    from namigen.utils.config import Config
    from namigen.utils.data import Grid

# pylint: disable=wrong-import-position, ungrouped-imports
from pathlib import Path as _Path
from types import MappingProxyType as _MappingProxyType
from logging import getLogger as _getLogger

import numpy as _numpy
from namigen.utils.config import OutputType as _OutputType
from namigen.utils.config import get_output_type as _get_output_type
from namigen.utils.data import get_grid as _get_grid
from namigen.utils.misc import num_decimal_digits as _num_decimal_digits


_logger = _getLogger("namigen.utils.grd")

FOURCC_GRD = "DSAA"
FOURCC_GRD_BIN = "DSBB"

# values in an ASCII row are padded to this many leading characters
MOST_LEADING_SPACES = 6

# the largest number of cells per direction a binary header can hold
MAX_BIN_SIZE = 65535

# the longitude extent comes first, then the latitude extent in descending order
BIN_HEADER_DTYPE = _numpy.dtype([
    ("magic", "S4"),
    ("nx", "<u2"),
    ("ny", "<u2"),
    ("lon_min", "<f8"),
    ("lon_max", "<f8"),
    ("lat_max", "<f8"),
    ("lat_min", "<f8"),
    ("vmin", "<f8"),
    ("vmax", "<f8"),
])

BIN_DATA_DTYPE = _numpy.dtype("<f4")


class GRDFormatError(ValueError):
    """Raised when data can not be represented in, or parsed from, a GRD encoding."""


def _report(filepath, grid):
    """Print the completion notice of a writer."""
    print(f"{filepath} MM({grid.vmin:f}, {grid.vmax:f})")
    _logger.info("Done writing %s", filepath)


def write_grd_ascii(filepath, grid: Grid, config: Config):
    """Write a grid to a file with the ASCII GRD (DSAA) format.

    Arguments
    ---------
    filepath : str or path-like object
    grid : namigen.utils.data.Grid
    config : namigen.utils.config.Config
        Provides the latitude and longitude extents.
    """

    filepath = _Path(filepath).expanduser().resolve()

    with open(filepath, "w", encoding="utf-8", newline="\n") as fobj:
        write_grd_ascii_stream(fobj, grid, config)

    _report(filepath, grid)


def write_grd_ascii_stream(stream, grid: Grid, config: Config):
    """Write a grid to a text stream with the ASCII GRD (DSAA) format.

    The layout of values follows the legacy writer byte by byte: values use 7 decimals and are
    followed by spaces padding them to `MOST_LEADING_SPACES` leading characters. A line break
    follows every 10th value on a line. Additional line breaks follow the linear indices at the
    end of each `nx` block and of each `ny` block, so non-square grids get occasional blank lines.

    Arguments
    ---------
    stream : a text stream; usually an opened file's handle.
    grid : namigen.utils.data.Grid
    config : namigen.utils.config.Config
    """

    stream.write(f"{FOURCC_GRD}\n")
    stream.write(f"{grid.nx}   {grid.ny}\n")
    stream.write(f"{config.lat_min:.7f}   {config.lat_max:.7f}\n")
    stream.write(f"{config.lon_min:.7f}   {config.lon_max:.7f}\n")
    stream.write(f"{grid.vmin:.7f}  {grid.vmax:.7f}\n")

    nx, ny = grid.nx, grid.ny
    counter = 1
    for i, value in enumerate(grid.data.tolist()):
        stream.write(f"{value:.7f}")

        if i % nx == nx - 1:
            stream.write("\n")
            counter = 0

        if i % ny == ny - 1:
            stream.write("\n")
            counter = 0
        elif counter % 10 == 0:
            stream.write("\n")
        else:
            stream.write(" " * max(1, MOST_LEADING_SPACES - _num_decimal_digits(value)))

        counter += 1


def check_bin_size(nx: int, ny: int):
    """Raise GRDFormatError if the numbers of cells do not fit in the binary header."""
    if nx > MAX_BIN_SIZE or ny > MAX_BIN_SIZE:
        raise GRDFormatError(
            f"Binary GRD supports at most {MAX_BIN_SIZE} cells per direction; got {nx} x {ny}")


def get_bin_header(grid: Grid, config: Config):
    """Get the binary header of a grid as a numpy structured scalar."""
    check_bin_size(grid.nx, grid.ny)

    header = _numpy.zeros(1, dtype=BIN_HEADER_DTYPE)
    header["magic"] = FOURCC_GRD_BIN.encode("ascii")
    header["nx"] = grid.nx
    header["ny"] = grid.ny
    header["lon_min"] = config.lon_min
    header["lon_max"] = config.lon_max
    header["lat_max"] = config.lat_max
    header["lat_min"] = config.lat_min
    header["vmin"] = grid.vmin
    header["vmax"] = grid.vmax
    return header


def write_grd_binary(filepath, grid: Grid, config: Config):
    """Write a grid to a file with the binary GRD (DSBB) format.

    Arguments
    ---------
    filepath : str or path-like object
    grid : namigen.utils.data.Grid
    config : namigen.utils.config.Config
        Provides the latitude and longitude extents.

    Raises
    ------
    GRDFormatError
        If nx or ny exceeds 65535. Nothing is written in this case.
    """

    filepath = _Path(filepath).expanduser().resolve()
    check_bin_size(grid.nx, grid.ny)

    with open(filepath, "wb") as fobj:
        write_grd_binary_stream(fobj, grid, config)

    _report(filepath, grid)


def write_grd_binary_stream(stream, grid: Grid, config: Config):
    """Write a grid to a binary stream with the binary GRD (DSBB) format."""
    stream.write(get_bin_header(grid, config).tobytes())
    stream.write(grid.data.astype(BIN_DATA_DTYPE, copy=False).tobytes())


def read_grd_ascii(filepath):
    """Read an ASCII GRD (DSAA) file.

    Arguments
    ---------
    filepath : str or path-like object

    Returns
    -------
    grid : namigen.utils.data.Grid
        The extent of the grid is reduced from the values.
    header : dict
        Keys: "magic", "nx", "ny", "lat", "lon", "vmin", and "vmax", as written in the file.
    """

    filepath = _Path(filepath).expanduser().resolve()

    with open(filepath, "r", encoding="utf-8") as fobj:
        raw = fobj.read().split()

    if len(raw) < 9 or raw[0] != FOURCC_GRD:
        raise GRDFormatError(f"{filepath} is not an ASCII GRD file.")

    try:
        header = {
            "magic": raw[0],
            "nx": int(raw[1]),
            "ny": int(raw[2]),
            "lat": (float(raw[3]), float(raw[4])),
            "lon": (float(raw[5]), float(raw[6])),
            "vmin": float(raw[7]),
            "vmax": float(raw[8]),
        }
        data = _numpy.array(raw[9:], dtype=_numpy.float64)
    except ValueError as err:
        raise GRDFormatError(f"Failed to parse {filepath}: {err}") from err

    if data.size != header["nx"] * header["ny"]:
        raise GRDFormatError(
            f"{filepath}: expected {header['nx']*header['ny']} values, got {data.size}")

    return _get_grid(header["nx"], header["ny"], data), header


def read_grd_binary(filepath):
    """Read a binary GRD (DSBB) file.

    Returns
    -------
    grid : namigen.utils.data.Grid
        The extent of the grid is reduced from the values.
    header : dict
        Same keys as those from `read_grd_ascii`.
    """

    filepath = _Path(filepath).expanduser().resolve()

    with open(filepath, "rb") as fobj:
        raw = fobj.read()

    if len(raw) < BIN_HEADER_DTYPE.itemsize:
        raise GRDFormatError(f"{filepath} is too short to be a binary GRD file.")

    head = _numpy.frombuffer(raw, dtype=BIN_HEADER_DTYPE, count=1)[0]

    if head["magic"] != FOURCC_GRD_BIN.encode("ascii"):
        raise GRDFormatError(f"{filepath} is not a binary GRD file.")

    header = {
        "magic": head["magic"].decode("ascii"),
        "nx": int(head["nx"]),
        "ny": int(head["ny"]),
        "lat": (float(head["lat_min"]), float(head["lat_max"])),
        "lon": (float(head["lon_min"]), float(head["lon_max"])),
        "vmin": float(head["vmin"]),
        "vmax": float(head["vmax"]),
    }

    n = header["nx"] * header["ny"]
    if len(raw) - BIN_HEADER_DTYPE.itemsize != n * BIN_DATA_DTYPE.itemsize:
        raise GRDFormatError(f"{filepath}: the data size does not match {n} float32 values.")

    data = _numpy.frombuffer(raw, dtype=BIN_DATA_DTYPE, offset=BIN_HEADER_DTYPE.itemsize)
    return _get_grid(header["nx"], header["ny"], data), header


def read_grd(filepath):
    """Read a GRD file of either encoding, based on its leading magic characters."""

    filepath = _Path(filepath).expanduser().resolve()

    with open(filepath, "rb") as fobj:
        magic = fobj.read(4)

    if magic == FOURCC_GRD.encode("ascii"):
        return read_grd_ascii(filepath)

    if magic == FOURCC_GRD_BIN.encode("ascii"):
        return read_grd_binary(filepath)

    raise GRDFormatError(f"{filepath} has an unknown magic: {magic!r}")


# available writers (read-only)
WRITERS = _MappingProxyType({
    _OutputType.GRD: write_grd_ascii,
    _OutputType.GRD_BIN: write_grd_binary,
})


def get_writer(output):
    """Get the writer function of an output type.

    Arguments
    ---------
    output : namigen.utils.config.OutputType or str

    Returns
    -------
    A callable with signature `writer(filepath, grid, config)`.
    """
    return WRITERS[_get_output_type(output)]


def write_grd(filepath, grid: Grid, config: Config):
    """Write a grid with the encoding selected by `config.output`."""
    _logger.info("Writing %s with output type %s", filepath, config.output.value)
    return get_writer(config.output)(filepath, grid, config)
