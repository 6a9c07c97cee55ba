# SPDX-License-Identifier: BUSL-1.1
"""dv start — create or start the agent container."""

from dv.config import ConfigStore
from dv.lifecycle import ensure_container_running


def cmd_start(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    name = getattr(args, "name", "") or cfg.current_agent_name()
    reset = getattr(args, "reset", False)

    if reset:
        print(f"Recreating container '{name}'...")
    else:
        print(f"Ensuring container '{name}' is running...")
    image_name, img, created = ensure_container_running(
        cfg, name, reset=reset, image=getattr(args, "image", "") or "",
    )

    # Only a container created here is known to come from image_name
    if created and cfg.container_images.get(name) != image_name:
        cfg.container_images[name] = image_name
        store.save(cfg)
    if created:
        print(f"Created container '{name}' from '{img.tag}'.")
    print(f"Container '{name}' is running.")
