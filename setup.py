#! /usr/bin/env python3
# -*- coding: utf-8 -*-
# vim:fenc=utf-8
#
# Copyright © 2021 Pi-Yueh Chuang <pychuang@gwu.edu>
#
# Distributed under terms of the BSD 3-Clause license.

"""Install NamiGen.

Notes
-----
Configuration of the package/project lives in setup.cfg. NamiGen has no extension modules, so
nothing else remains here.
"""
from setuptools import setup

setup()
