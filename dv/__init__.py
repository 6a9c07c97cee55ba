# SPDX-License-Identifier: BUSL-1.1
"""dv - Discourse agent container manager."""

__version__ = "0.3.0"
