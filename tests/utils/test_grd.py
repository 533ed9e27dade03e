#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Tests for GRD writers and readers.
"""
import io
import struct

import numpy
import pytest
from namigen.utils.config import Config
from namigen.utils.config import OutputType
from namigen.utils.data import get_grid
from namigen.sampler import sample_grid
from namigen.utils.grd import BIN_HEADER_DTYPE
from namigen.utils.grd import GRDFormatError
from namigen.utils.grd import WRITERS
from namigen.utils.grd import get_writer
from namigen.utils.grd import read_grd
from namigen.utils.grd import read_grd_ascii
from namigen.utils.grd import read_grd_binary
from namigen.utils.grd import write_grd
from namigen.utils.grd import write_grd_ascii
from namigen.utils.grd import write_grd_ascii_stream
from namigen.utils.grd import write_grd_binary
from namigen.utils.grd import write_grd_binary_stream


def test_ascii_layout():
    """Byte-level layout of a small non-square grid, including the double line breaks."""

    config = Config(lat=(0., 1.), lon=(2., 3.), size=(3, 2), gap=(0, 1))
    grid = get_grid(3, 2, numpy.arange(6))

    stream = io.StringIO()
    write_grd_ascii_stream(stream, grid, config)

    ans = (
        "DSAA\n"
        "3   2\n"
        "0.0000000   1.0000000\n"
        "2.0000000   3.0000000\n"
        "0.0000000  5.0000000\n"
        "0.0000000     1.0000000\n"
        "2.0000000\n"
        "\n"
        "3.0000000\n"
        "4.0000000     5.0000000\n"
        "\n"
    )
    assert stream.getvalue() == ans


def test_ascii_padding_and_wrap():
    """Values are padded by their integer digits and wrapped after 10 values on a line."""

    config = Config(lat=(-12.5, 40.125), lon=(100., -100.), size=(12, 12), gap=(0, 1))
    values = numpy.full(144, 3.5)
    values[1] = -10.
    values[2] = 123.25
    values[3] = 1234567.
    grid = get_grid(12, 12, values)

    stream = io.StringIO()
    write_grd_ascii_stream(stream, grid, config)
    lines = stream.getvalue().split("\n")

    assert lines[2] == "-12.5000000   40.1250000"
    assert lines[3] == "100.0000000   -100.0000000"
    assert lines[4] == "-10.0000000  1234567.0000000"

    first = lines[5]
    assert first.startswith("3.5000000     -10.0000000   123.2500000   1234567.0000000 3.5000000")
    assert len(first.split()) == 10
    assert first.endswith("3.5000000")

    # the rest of the first row; then a blank line since nx == ny
    assert lines[6].split() == ["3.5000000", "3.5000000"]
    assert lines[7] == ""
    assert len(lines[8].split()) == 10

    tokens = [float(v) for line in lines[5:] for v in line.split()]
    assert numpy.allclose(tokens, values)


def test_ascii_header_extent(tmp_path):
    """The min/max line matches the extent of the generated grid."""

    config = Config(
        size=(20, 15), gap=(2, 16), z=(-7.25, 33.), type="sint", walls=True, wall_width=1)
    grid = sample_grid(config)
    filepath = tmp_path.joinpath("extent.grd")
    write_grd_ascii(filepath, grid, config)

    with open(filepath, "r", encoding="utf-8") as fobj:
        lines = fobj.read().splitlines()

    vmin, vmax = (float(v) for v in lines[4].split())
    assert vmin == pytest.approx(float(grid.data.min()), abs=1e-7)
    assert vmax == pytest.approx(float(grid.data.max()), abs=1e-7)
    assert vmin == -7.25
    assert vmax == 33.


def test_ascii_read_back(tmp_path):
    """Values read back agree up to the printed precision."""

    config = Config(lat=(10., 11.), lon=(20., 21.5), size=(17, 9), gap=(2, 8), type="circsin")
    grid = sample_grid(config)
    filepath = tmp_path.joinpath("grid.grd")
    write_grd_ascii(filepath, grid, config)

    result, header = read_grd_ascii(filepath)
    assert header["magic"] == "DSAA"
    assert (header["nx"], header["ny"]) == (17, 9)
    assert header["lat"] == (10., 11.)
    assert header["lon"] == (20., 21.5)
    assert numpy.allclose(result.data, grid.data, atol=1e-6)


def test_binary_layout():
    """Byte-level layout of the binary header and data."""

    config = Config(lat=(-1.25, 3.5), lon=(7., 9.75), size=(3, 2), gap=(0, 1))
    grid = get_grid(3, 2, [0.1, -2., 3., 4., 5., 6.5])

    stream = io.BytesIO()
    write_grd_binary_stream(stream, grid, config)
    raw = stream.getvalue()

    assert BIN_HEADER_DTYPE.itemsize == 56
    assert len(raw) == 56 + 6 * 4
    assert raw[:4] == b"DSBB"
    assert struct.unpack("<HH", raw[4:8]) == (3, 2)
    assert struct.unpack("<4d", raw[8:40]) == (7., 9.75, 3.5, -1.25)
    assert struct.unpack("<2d", raw[40:56]) == (-2., 6.5)
    assert numpy.array_equal(numpy.frombuffer(raw[56:], "<f4"), grid.data)


def test_binary_round_trip(tmp_path):
    """Writing and reading back a binary grid reproduces every value bit by bit."""

    config = Config(
        lat=(41.0123456, 39.5), lon=(-5.5, 12.25), size=(31, 22), gap=(3, 19),
        z=(-12.5, 80.), type="circsin", output="grdbin", walls=True, wall_width=2)
    grid = sample_grid(config)
    filepath = tmp_path.joinpath("grid_bin.grd")
    write_grd_binary(filepath, grid, config)

    result, header = read_grd_binary(filepath)
    assert header["magic"] == "DSBB"
    assert (header["nx"], header["ny"]) == (31, 22)
    assert header["lat"] == (41.0123456, 39.5)
    assert header["lon"] == (-5.5, 12.25)
    assert (header["vmin"], header["vmax"]) == (grid.vmin, grid.vmax)
    assert result.data.tobytes() == grid.data.tobytes()


def test_binary_size_limit(tmp_path):
    """Sizes that do not fit in 16 bits are rejected before anything is written."""

    grid = get_grid(70000, 1, numpy.zeros(70000))
    config = Config(size=(70000, 1), gap=(0, 1))
    filepath = tmp_path.joinpath("large_bin.grd")

    with pytest.raises(GRDFormatError, match="at most 65535"):
        write_grd_binary(filepath, grid, config)

    assert not filepath.exists()


def test_completion_notice(tmp_path, capsys):
    """Both writers print the file path and the extent."""

    config = Config(size=(8, 8), gap=(1, 5), type="linl")
    grid = sample_grid(config)

    for writer, name in ((write_grd_ascii, "a.grd"), (write_grd_binary, "b_bin.grd")):
        writer(tmp_path.joinpath(name), grid, config)
        out = capsys.readouterr().out
        assert name in out
        assert f"MM({grid.vmin:f}, {grid.vmax:f})" in out


def test_write_grd_dispatch(tmp_path):
    """`write_grd(...)` picks the encoding from the configuration."""

    assert set(WRITERS.keys()) == set(OutputType)
    assert get_writer("grd") is write_grd_ascii
    assert get_writer(OutputType.GRD_BIN) is write_grd_binary

    for output in ("grd", "grdbin"):
        config = Config(size=(5, 4), gap=(1, 3), type="sinb", output=output)
        grid = sample_grid(config)
        filepath = tmp_path.joinpath(f"{output}.grd")
        write_grd(filepath, grid, config)

        result, header = read_grd(filepath)
        assert header["magic"] == ("DSAA" if output == "grd" else "DSBB")
        assert numpy.allclose(result.data, grid.data, atol=1e-6)


def test_read_errors(tmp_path):
    """Malformed files raise GRDFormatError."""

    filepath = tmp_path.joinpath("bad.grd")

    filepath.write_bytes(b"XXXX1234")
    with pytest.raises(GRDFormatError, match="unknown magic"):
        read_grd(filepath)

    filepath.write_text("DSAA\n2 2\n0 1\n0 1\n0 1\n0 1 1\n", encoding="utf-8")
    with pytest.raises(GRDFormatError, match="expected 4 values"):
        read_grd_ascii(filepath)

    filepath.write_bytes(b"DSBB" + bytes(10))
    with pytest.raises(GRDFormatError, match="too short"):
        read_grd_binary(filepath)

    filepath.write_bytes(b"DSBB" + struct.pack("<HH6d", 2, 2, 0., 1., 1., 0., 0., 1.) + bytes(4))
    with pytest.raises(GRDFormatError, match="data size"):
        read_grd_binary(filepath)
