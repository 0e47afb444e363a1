#!/usr/bin/env python3
"""
QrBinarize - Entry point for python -m qrbinarize

This module allows the package to be run as a module:
    python -m qrbinarize
"""

import sys

from qrbinarize.cli import main

if __name__ == "__main__":
    sys.exit(main())
