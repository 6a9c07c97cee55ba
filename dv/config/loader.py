# SPDX-License-Identifier: BUSL-1.1
"""YAML config file discovery, loading, and saving."""

import os
from pathlib import Path
from typing import Optional

import yaml

from dv.config.resources import Config, config_from_dict, config_to_dict
from dv.errors import ConfigurationError, FilesystemError


def default_config_dir() -> Path:
    """Return $XDG_CONFIG_HOME/dv, or ~/.config/dv when unset."""
    base = os.environ.get("XDG_CONFIG_HOME", "")
    if base:
        return Path(base) / "dv"
    return Path.home() / ".config" / "dv"


class ConfigStore:
    """Manages dv's config directory.

    Layout:
        ~/.config/dv/
        ├── config.yaml              # images, selections, port settings
        ├── Dockerfile               # materialized embedded Dockerfile
        ├── Dockerfile.sha256        # digest of the last materialized copy
        ├── Dockerfile.local         # optional user override
        └── Dockerfile.theme*        # same trio for the theme image
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.config_file = self.config_dir / "config.yaml"

    def load(self) -> Config:
        """Load config.yaml. Returns defaults when the file does not exist."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"cannot parse {self.config_file}: {e}") from e
        except OSError as e:
            raise FilesystemError(f"cannot read {self.config_file}: {e}", self.config_file) from e
        return config_from_dict(data)

    def save(self, cfg: Config):
        """Write config.yaml."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.dump(config_to_dict(cfg), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise FilesystemError(f"cannot write {self.config_file}: {e}", self.config_file) from e

    def load_or_create(self) -> Config:
        """Load config.yaml, writing the defaults first if it is missing."""
        if not self.config_file.exists():
            self.save(Config())
        return self.load()
