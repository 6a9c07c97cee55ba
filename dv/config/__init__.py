# SPDX-License-Identifier: BUSL-1.1
"""Configuration system — YAML config loading and saving."""

from dv.config.resources import Config, ImageConfig
from dv.config.loader import ConfigStore, default_config_dir

__all__ = ["Config", "ImageConfig", "ConfigStore", "default_config_dir"]
