# SPDX-License-Identifier: BUSL-1.1
"""dv restart — restart the agent container or its Discourse services."""

from dv.config import ConfigStore
from dv.lifecycle import restart_container, restart_services


def cmd_restart(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    name = getattr(args, "name", "") or cfg.current_agent_name()

    if getattr(args, "target", "") == "discourse":
        status = restart_services(cfg, name)
        if status is None:
            print(f"Container '{name}' does not exist. Run 'dv start' first.")
            return
        print("Service status:")
        print(status, end="" if status.endswith("\n") else "\n")
        print("Discourse services restarted.")
        return

    if not restart_container(name):
        print(f"Container '{name}' does not exist")
        return
    print(f"Container '{name}' restarted successfully")
