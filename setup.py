#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Shim for tools that still invoke setup.py directly.

Project metadata, dependencies and package discovery are declared in
pyproject.toml; calling setuptools.setup() without arguments reads them
from there.
"""

import setuptools

if __name__ == "__main__":
    setuptools.setup()
