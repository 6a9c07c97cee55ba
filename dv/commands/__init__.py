# SPDX-License-Identifier: BUSL-1.1
"""Command implementations for dv CLI."""

from dv.commands.build import cmd_build
from dv.commands.dockerfile_cmd import cmd_dockerfile
from dv.commands.start import cmd_start
from dv.commands.stop import cmd_stop
from dv.commands.restart import cmd_restart
from dv.commands.list_cmd import cmd_list
from dv.commands.config_cmd import cmd_config
__all__ = [
    "cmd_build", "cmd_dockerfile", "cmd_start", "cmd_stop", "cmd_restart",
    "cmd_list", "cmd_config",
]
