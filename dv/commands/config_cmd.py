# SPDX-License-Identifier: BUSL-1.1
"""dv config — show or edit configuration."""

from dv.config import ConfigStore
from dv.ports import check_port


def cmd_config(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    changed = False

    if args.select_image:
        cfg.resolve_image(args.select_image)
        cfg.selected_image = args.select_image
        changed = True
    if args.select_agent is not None:
        cfg.selected_agent = args.select_agent
        changed = True
    if args.host_port is not None:
        cfg.host_starting_port = check_port(args.host_port, "--host-port")
        changed = True
    if args.container_port is not None:
        cfg.container_port = check_port(args.container_port, "--container-port")
        changed = True

    if changed:
        store.save(cfg)
        print("Config updated.")

    print(f"\nConfig ({store.config_file}):")
    print(f"  selectedImage:       {cfg.selected_image}")
    print(f"  selectedAgent:       {cfg.selected_agent or '(not set)'}")
    print(f"  defaultContainer:    {cfg.default_container}")
    print(f"  hostStartingPort:    {cfg.host_starting_port}")
    print(f"  containerPort:       {cfg.container_port}")
    print("  images:")
    for name, img in cfg.images.items():
        marker = " *" if name == cfg.selected_image else ""
        print(f"    {name:<16} {img.tag:<20} {img.kind:<10} {img.workdir}{marker}")
    if cfg.container_images:
        print("  containerImages:")
        for container, image_name in cfg.container_images.items():
            print(f"    {container:<16} {image_name}")
