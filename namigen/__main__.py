#! /usr/bin/env python
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2020-2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Main function.
"""
import sys
import time
import logging
import pathlib
import argparse

from pydantic import ValidationError
from namigen.sampler import sample_grid
from namigen.utils.config import Config
from namigen.utils.config import ConfigError
from namigen.utils.config import OutputType
from namigen.utils.config import ShapeType
from namigen.utils.config import SHAPE_DESCRIPTIONS
from namigen.utils.config import apply_slope
from namigen.utils.config import get_config
from namigen.utils.grd import GRDFormatError
from namigen.utils.grd import write_grd

# output file name suffixes appended to the base name
OUTPUT_SUFFIXES = {OutputType.GRD: ".grd", OutputType.GRD_BIN: "_bin.grd"}

# CLI options and the Config fields they overwrite
OVERRIDES = {
    "type": "type", "output": "output", "lat": "lat", "lon": "lon", "size": "size", "gap": "gap",
    "z": "z", "walls": "has_walls", "wall_width": "wall_width", "tana": "tana",
}


def get_cmd_parser():
    """Get the parser of CMD arguments.

    Returns
    -------
    parser : argparse.ArgumentParser
    """

    epilog = "generation types:\n" + "\n".join(
        f"  {line}" for line in get_type_listing().splitlines())

    parser = argparse.ArgumentParser(
        prog="namigen",
        description="NamiDance wave and bathymetry grid generator",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False
    )

    parser.add_argument(
        "basename", metavar="BASENAME", action="store", type=pathlib.Path, nargs="?",
        help="Output file name without extension; \".grd\" or \"_bin.grd\" is appended."
    )

    parser.add_argument(
        "-t", "--type", action="store", type=str, default=None, metavar="TYPE",
        choices=[t.value for t in ShapeType],
        help="Generation type. Default is \"circsin\" or the value in the config file."
    )

    parser.add_argument(
        "-o", "--output", action="store", type=str, default=None, metavar="OUTPUT",
        choices=[t.value for t in OutputType],
        help="Output type: \"grd\" (ASCII) or \"grdbin\" (binary). Default is \"grd\"."
    )

    parser.add_argument(
        "--lat", action="store", type=float, nargs=2, default=None, metavar=("MIN", "MAX"),
        help="Latitude extent. Default: 0.0 1.0"
    )

    parser.add_argument(
        "--lon", action="store", type=float, nargs=2, default=None, metavar=("MIN", "MAX"),
        help="Longitude extent. Default: 0.0 1.0"
    )

    parser.add_argument(
        "--size", action="store", type=int, nargs=2, default=None, metavar=("NX", "NY"),
        help="Grid size. Default: 256 256"
    )

    parser.add_argument(
        "--gap", action="store", type=int, nargs=2, default=None, metavar=("BOTTOM", "TOP"),
        help="Band thresholds in cells, or the wave center for wave types. Default: 64 240"
    )

    parser.add_argument(
        "--z", action="store", type=float, nargs=2, default=None, metavar=("LAND", "BOTTOM"),
        help="Land and bottom elevations, or amplitude and depth for wave types. Default: -10 50"
    )

    parser.add_argument(
        "--wall", action="store_const", const=True, default=None, dest="walls",
        help="Put walls on the borders."
    )

    parser.add_argument(
        "-w", "--wall-width", action="store", type=int, default=None, metavar="WIDTH",
        help="Wall width in cells. Default: 3"
    )

    parser.add_argument(
        "--tana", action="store", type=float, default=None, metavar="VALUE",
        help="Slope tangent of linear types; overwrites the top gap."
    )

    parser.add_argument(
        "--list-types", action="store_true", dest="list_types",
        help="Print the available generation types and exit."
    )

    parser.add_argument(
        "--config", action="store", type=pathlib.Path, default=None, metavar="FILE",
        help="A YAML file providing default values; CMD options take precedence."
    )

    parser.add_argument(
        "--log-level", action="store", type=str, default="normal", metavar="LEVEL",
        choices=["debug", "normal", "quiet"],
        help="Logging level: debug, normal, or quiet. Default: normal"
    )

    parser.add_argument(
        "--log-file", action="store", type=pathlib.Path, default=None, metavar="FILE",
        help="Saving log messages to a file instead of stderr."
    )

    return parser


def get_type_listing():
    """Get the generation types and their descriptions, one per line."""
    return "\n".join(f"{k.value:<16s}{v}" for k, v in SHAPE_DESCRIPTIONS.items())


def get_cmd_arguments(argv=None):
    """Parse and get CMD arguments.

    Attributes
    ----------
    argv : list or None
        By default, None means using `sys.argv`. Only explicitly use this argument for debugging.

    Returns
    -------
    args : argparse.Namespace
        CMD arguments.
    """

    args = get_cmd_parser().parse_args(argv)

    # convert log level from string to corresponding Python type
    level_options = {"quiet": logging.ERROR, "normal": logging.INFO, "debug": logging.DEBUG}
    args.log_level = level_options[args.log_level]

    # make sure the file path is absolute
    if args.log_file is not None:
        args.log_file = args.log_file.expanduser().resolve()

    if args.config is not None:
        args.config = args.config.expanduser().resolve()

    return args


def get_final_config(args: argparse.Namespace):
    """Get a Config object with values overwritten by CMD options.

    Arguments
    ---------
    args : argparse.Namespace
        The result of parsing command-line arguments.

    Returns
    -------
    config : namigen.utils.config.Config

    Raises
    ------
    namigen.utils.config.ConfigError
        If the final values are not valid.
    """

    config = Config() if args.config is None else get_config(args.config)
    values = dict(config)

    for opt, field in OVERRIDES.items():
        if getattr(args, opt) is not None:
            values[field] = getattr(args, opt)

    try:
        config = Config(**values)
    except ValidationError as err:
        raise ConfigError(f"Invalid options:\n{err}") from err

    return apply_slope(config)


def get_output_path(basename, output):
    """Append the file name suffix of an output type to a base name.

    Arguments
    ---------
    basename : str or path-like object
    output : namigen.utils.config.OutputType or str

    Returns
    -------
    pathlib.Path
    """
    basename = pathlib.Path(basename).expanduser()
    return basename.with_name(basename.name+OUTPUT_SUFFIXES[OutputType(output)])


def get_logger(filename, level):
    """Get a logger based on the debug level and whether to use log files.

    Arguments
    ---------
    filename : str or os.PathLike or None
    level : int

    Returns
    -------
    logging.Logger
    """

    # setup the top-level (i.e., package-level/namigen) logger
    logger = logging.getLogger("namigen")
    logger.setLevel(level)

    # drop handlers from previous calls
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if filename is not None:
        fmt = "%(asctime)s %(name)s %(funcName)s [%(levelname)s] %(message)s"  # format
        logger.addHandler(logging.FileHandler(filename, "w"))
        logger.handlers[-1].setFormatter(logging.Formatter(fmt, "%m-%d %H:%M:%S"))
    else:
        fmt = "%(asctime)s %(message)s"
        logger.addHandler(logging.StreamHandler())
        logger.handlers[-1].setFormatter(logging.Formatter(fmt, "%H:%M:%S"))

    # make the final & returned logger refer to this specific file (main function)
    logger = logging.getLogger("namigen.main")

    return logger


def log_options(config: Config, logger: logging.Logger):
    """Log the resolved options."""
    logger.info("Lat: %s %s", config.lat_min, config.lat_max)
    logger.info("Lon: %s %s", config.lon_min, config.lon_max)
    logger.info("Size: %d %d", config.nx, config.ny)
    logger.info("Gap: %d %d", config.gap_bottom, config.gap_top)
    logger.info("Z: %s %s", config.z_land, config.z_bottom)
    logger.info("Type: %s", config.type.value)
    logger.info("Out: %s", config.output.value)
    logger.info("Walls: %s", "true" if config.has_walls else "false")
    logger.info("Width: %d", config.wall_width)


def main(argv=None):
    """Main function.

    Arguments
    ---------
    argv : list or None
        By default, None means using `sys.argv`. Only explicitly use this argument for debugging.

    Returns
    -------
    int
        The exit code.
    """

    argv = sys.argv[1:] if argv is None else argv

    # nothing provided; show the usage
    if len(argv) == 0:
        get_cmd_parser().print_help()
        return 0

    args = get_cmd_arguments(argv)
    if args.list_types:
        print(get_type_listing())
        return 0

    logger = get_logger(args.log_file, args.log_level)

    if args.basename is None:
        logger.error("An output base name is required.")
        return 2

    try:
        config = get_final_config(args)
    except ConfigError as err:
        logger.error("%s", err)
        return 2

    log_options(config, logger)

    perf_t0 = time.time()
    grid = sample_grid(config)
    outfile = get_output_path(args.basename, config.output)

    try:
        write_grd(outfile, grid, config)
    except GRDFormatError as err:
        logger.error("%s", err)
        return 2

    logger.info("Run time (wall time): %s seconds", time.time()-perf_t0)

    return 0


if __name__ == "__main__":
    sys.exit(main())
