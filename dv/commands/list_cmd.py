# SPDX-License-Identifier: BUSL-1.1
"""dv list — list containers created from the selected image."""

from dv import docker
from dv.config import ConfigStore
from dv.matching import matching_containers


def cmd_list(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    prefix = getattr(args, "prefix", "") or ""

    names = matching_containers(cfg, docker.list_containers(), prefix=prefix)
    if getattr(args, "quiet", False):
        for name in names:
            print(name)
        return

    if not names:
        print(f"No containers found for image '{cfg.selected_image}'.")
        return

    current = cfg.current_agent_name()
    print(f"{'NAME':<30} {'STATUS':<10}")
    for name in names:
        status = "running" if docker.running(name) else "stopped"
        marker = " *" if name == current else ""
        print(f"{name:<30} {status:<10}{marker}")
