#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Objects holding grid-generation configuraions.
"""
import enum
import math
import logging
import pathlib
from types import MappingProxyType
from typing import Tuple, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic import field_validator, model_validator, conint, confloat


_logger = logging.getLogger("namigen.utils.config")


class ConfigError(ValueError):
    """Raised when a configuration can not be resolved to valid values."""


class ShapeType(str, enum.Enum):
    """Available generation types. Values are the names used on the command line."""
    CIRCULAR_SINUSOIDAL = "circsin"
    CIRCULAR_LINEAR = "circlin"
    LINEAR_RIGHT = "linr"
    LINEAR_LEFT = "linl"
    LINEAR_TOP = "lint"
    LINEAR_BOTTOM = "linb"
    SINUSOIDAL_RIGHT = "sinr"
    SINUSOIDAL_LEFT = "sinl"
    SINUSOIDAL_TOP = "sint"
    SINUSOIDAL_BOTTOM = "sinb"
    DUHIS = "duhis"
    WAVE_CIRCULAR = "wavecirc"
    WAVE_HORIZONTAL = "wavehorizontal"
    WAVE_VERTICAL = "wavevertical"
    WAVE_EMPTY = "waveempty"

    @property
    def is_wave(self):
        """Whether this type generates a solitary wave instead of bathymetry."""
        return self in WAVE_TYPES

    @property
    def is_linear(self):
        """Whether the band of this type is blended linearly."""
        return self in LINEAR_TYPES


class OutputType(str, enum.Enum):
    """Available output encodings. Values are the names used on the command line."""
    GRD = "grd"
    GRD_BIN = "grdbin"


WAVE_TYPES = frozenset((
    ShapeType.WAVE_CIRCULAR, ShapeType.WAVE_HORIZONTAL,
    ShapeType.WAVE_VERTICAL, ShapeType.WAVE_EMPTY
))

LINEAR_TYPES = frozenset((
    ShapeType.CIRCULAR_LINEAR, ShapeType.LINEAR_RIGHT, ShapeType.LINEAR_LEFT,
    ShapeType.LINEAR_TOP, ShapeType.LINEAR_BOTTOM, ShapeType.DUHIS
))

# one-line descriptions shown by the CLI
SHAPE_DESCRIPTIONS = MappingProxyType({
    ShapeType.CIRCULAR_SINUSOIDAL: "Circular bathymetry with sinusoidal edges",
    ShapeType.CIRCULAR_LINEAR: "Circular bathymetry with linear edges",
    ShapeType.LINEAR_RIGHT: "Flat right bathymetry with linear edges",
    ShapeType.LINEAR_LEFT: "Flat left bathymetry with linear edges",
    ShapeType.LINEAR_TOP: "Flat top bathymetry with linear edges",
    ShapeType.LINEAR_BOTTOM: "Flat bottom bathymetry with linear edges",
    ShapeType.SINUSOIDAL_RIGHT: "Flat right bathymetry with sinusoidal edges",
    ShapeType.SINUSOIDAL_LEFT: "Flat left bathymetry with sinusoidal edges",
    ShapeType.SINUSOIDAL_TOP: "Flat top bathymetry with sinusoidal edges",
    ShapeType.SINUSOIDAL_BOTTOM: "Flat bottom bathymetry with sinusoidal edges",
    ShapeType.DUHIS: "Double-wedge channel closed by walls at top and bottom",
    ShapeType.WAVE_CIRCULAR: "Circular solitary wave",
    ShapeType.WAVE_HORIZONTAL: "Flat horizontal solitary wave",
    ShapeType.WAVE_VERTICAL: "Flat vertical solitary wave",
    ShapeType.WAVE_EMPTY: "Flat zero surface",
})


def get_shape_type(name):
    """Get the ShapeType corresponding to a command-line name.

    Arguments
    ---------
    name : str or ShapeType

    Returns
    -------
    ShapeType

    Raises
    ------
    ConfigError
        If the name is not a known generation type.
    """
    try:
        return ShapeType(name)
    except ValueError as err:
        raise ConfigError(
            f"Invalid generation type \"{name}\". "
            f"Choose from: {', '.join(t.value for t in ShapeType)}"
        ) from err


def get_output_type(name):
    """Get the OutputType corresponding to a command-line name.

    Raises
    ------
    ConfigError
        If the name is not a known output encoding.
    """
    try:
        return OutputType(name)
    except ValueError as err:
        raise ConfigError(
            f"Invalid output type \"{name}\". "
            f"Choose from: {', '.join(t.value for t in OutputType)}"
        ) from err


class BaseConfig(BaseModel):
    """Extending pydantic.BaseModel with __getitem__ method."""

    model_config = ConfigDict(
        validate_default=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    def __getitem__(self, key):
        return super().__getattribute__(key)

    def __setitem__(self, key, value):
        self.__setattr__(key, value)

    def check(self):
        """Manually trigger the validation of the data in this instance."""
        self.__class__.model_validate(dict(self))

        for field in dict(self).values():
            if isinstance(field, BaseConfig):
                field.check()


class Config(BaseConfig):
    """An object holding all configurations of a grid.

    Attributes
    ----------
    lat : a tuple of 2 floats
        Latitude extent (min, max). No ordering is enforced. Default: (0.0, 1.0)
    lon : a tuple of 2 floats
        Longitude extent (min, max). No ordering is enforced. Default: (0.0, 1.0)
    size : a tuple of 2 int
        Number of cells in x and y directions. Default: (256, 256)
    gap : a tuple of 2 int
        The bottom and top thresholds of the blending band in number of cells. Solitary waves use
        them as the coordinates of the wave center instead. Default: (64, 240)
    z : a tuple of 2 floats
        The elevations outside (land) and inside (bottom) the band. Default: (-10.0, 50.0)
    type : ShapeType or str
        The generation type. Default: "circsin"
    output : OutputType or str
        The output encoding. Default: "grd"
    has_walls : bool
        Whether to force land elevation along all borders. Default: False
    wall_width : int
        The width of walls in number of cells. Default: 3
    tana : float or None
        Slope tangent of the band for linear types. If set, the top gap is derived from it.
        Default: None
    """
    # pylint: disable=too-few-public-methods, no-self-argument, invalid-name

    lat: Tuple[float, float] = (0.0, 1.0)
    lon: Tuple[float, float] = (0.0, 1.0)
    size: Tuple[conint(strict=True, gt=0), conint(strict=True, gt=0)] = (256, 256)
    gap: Tuple[int, int] = (64, 240)
    z: Tuple[float, float] = (-10.0, 50.0)
    type: ShapeType = ShapeType.CIRCULAR_SINUSOIDAL
    output: OutputType = OutputType.GRD
    has_walls: bool = Field(False, alias="walls")
    wall_width: conint(ge=0) = Field(3, alias="wall width")
    tana: Optional[confloat(gt=0.)] = None

    @field_validator("type", mode="before")
    def _val_type(cls, v):
        return get_shape_type(v)

    @field_validator("output", mode="before")
    def _val_output(cls, v):
        return get_output_type(v)

    @model_validator(mode="after")
    def _val_gap(self):
        """Bathymetry types divide by the gap difference."""
        if not self.type.is_wave:
            assert self.gap[0] != self.gap[1], "gap bottom and gap top must differ"
        return self

    @property
    def nx(self):
        """Number of cells in x direction."""
        return self.size[0]

    @property
    def ny(self):
        """Number of cells in y direction."""
        return self.size[1]

    @property
    def lat_min(self):
        return self.lat[0]

    @property
    def lat_max(self):
        return self.lat[1]

    @property
    def lon_min(self):
        return self.lon[0]

    @property
    def lon_max(self):
        return self.lon[1]

    @property
    def gap_bottom(self):
        return self.gap[0]

    @property
    def gap_top(self):
        return self.gap[1]

    @property
    def z_land(self):
        return self.z[0]

    @property
    def z_bottom(self):
        return self.z[1]


def apply_slope(config: Config):
    """Derive the top gap from the slope tangent for linear types.

    The band width in cells is the elevation difference divided by `tana`, rounded up. Circular
    types measure gaps as diameters, so the width is doubled there.

    Arguments
    ---------
    config : Config

    Returns
    -------
    config : Config
        The same object, with `gap` updated if applicable.
    """

    if config.tana is None:
        return config

    if not config.type.is_linear:
        _logger.warning("tana is ignored by the non-linear type \"%s\"", config.type.value)
        return config

    width = math.ceil(abs(config.z_bottom - config.z_land) / config.tana)
    width = max(width, 1)

    if config.type == ShapeType.CIRCULAR_LINEAR:
        width *= 2

    config.gap = (config.gap_bottom, config.gap_bottom + width)
    _logger.info("Top gap derived from tana=%s: %d", config.tana, config.gap_top)

    return config


def get_config(filepath):
    """Read a YAML configuration file.

    The file may either be tagged with `--- !Config` or be a plain mapping of Config fields.

    Arguments
    ---------
    filepath : str or path-like object

    Returns
    -------
    config : Config

    Raises
    ------
    ConfigError
        If the file content can not be parsed into a valid Config.
    """

    filepath = pathlib.Path(filepath).expanduser().resolve()

    with open(filepath, "r", encoding="utf-8") as fobj:
        try:
            config = yaml.load(fobj, yaml.Loader)
        except ValidationError as err:
            raise ConfigError(f"Invalid configuration in {filepath}:\n{err}") from err
        except yaml.YAMLError as err:
            raise ConfigError(f"Failed to parse {filepath}: {err}") from err

    if config is None:
        config = {}

    if isinstance(config, Config):
        return config

    if not isinstance(config, dict):
        raise ConfigError(
            f"Failed to parse {filepath} as a Config object. " +
            "Check if `--- !Config` appears in the header of the YAML")

    try:
        return Config(**config)
    except ValidationError as err:
        raise ConfigError(f"Invalid configuration in {filepath}:\n{err}") from err
