# SPDX-License-Identifier: BUSL-1.1
"""Shared utilities for dv."""

import sys


def die(msg: str, code: int = 1):
    """Print error message and exit."""
    print(f"Error: {msg}")
    sys.exit(code)
