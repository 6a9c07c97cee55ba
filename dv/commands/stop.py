# SPDX-License-Identifier: BUSL-1.1
"""dv stop — stop the agent container."""

from dv import docker
from dv.config import ConfigStore


def cmd_stop(args):
    store = ConfigStore()
    cfg = store.load_or_create()
    name = getattr(args, "name", "") or cfg.current_agent_name()

    if not docker.running(name):
        print(f"Container '{name}' is not running.")
        return
    docker.stop(name)
    print(f"Stopped '{name}'.")
