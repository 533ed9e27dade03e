#! /usr/bin/env python
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2020-2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""A generator of synthetic bathymetry and solitary-wave grids in GRD format.
"""
__version__ = "0.2"

import logging as _logging
_logger = _logging.getLogger("namigen")
