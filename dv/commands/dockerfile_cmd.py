# SPDX-License-Identifier: BUSL-1.1
"""dv dockerfile — show which Dockerfile a build would use."""

from dv.assets import resolve_dockerfile, resolve_dockerfile_theme
from dv.config import ConfigStore


def cmd_dockerfile(args):
    store = ConfigStore()
    if getattr(args, "theme", False):
        resolution = resolve_dockerfile_theme(store.config_dir)
    else:
        resolution = resolve_dockerfile(store.config_dir)

    source = "override" if resolution.used_override else "embedded"
    print(f"{resolution.path} ({source})")
