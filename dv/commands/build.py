# SPDX-License-Identifier: BUSL-1.1
"""dv build — build the image for the selected (or given) logical image."""

import sys

from dv.assets import ASSETS_BY_KIND, resolve_asset
from dv.config import ConfigStore
from dv.docker import build_image


def cmd_build(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    image_name, img = cfg.resolve_image(getattr(args, "image", "") or "")

    resolution = resolve_asset(ASSETS_BY_KIND[img.kind], store.config_dir)

    print(f"Building image '{img.tag}' for '{image_name}'...")
    if resolution.used_override:
        print(f"  Dockerfile:  {resolution.path} (override)")
    else:
        print(f"  Dockerfile:  {resolution.path}")
    print(f"  Context:     {resolution.context_dir}")
    print()

    if not build_image(resolution.path, resolution.context_dir, img.tag,
                       no_cache=getattr(args, "no_cache", False)):
        print(f"Error: failed to build image '{img.tag}'.")
        sys.exit(1)
    print(f"Built '{img.tag}'.")
