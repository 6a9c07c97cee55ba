# SPDX-License-Identifier: BUSL-1.1
"""CLI argument parsing and command dispatch."""

import argparse
import sys

from dv import __version__
from dv.errors import DvError
from dv.utils import die


def _add_name_arg(parser):
    parser.add_argument(
        "--name",
        default="",
        help="Container name (defaults to selected agent or default container)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dv",
        description="dv - Discourse agent container manager",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # build
    p_build = sub.add_parser("build", help="Build the image for the selected image config")
    p_build.add_argument("--image", default="", help="Image config name (default: selected image)")
    p_build.add_argument("--no-cache", action="store_true", help="Pass --no-cache to docker build")

    # dockerfile
    p_df = sub.add_parser("dockerfile", help="Show the Dockerfile path a build would use")
    p_df.add_argument("--theme", action="store_true", help="Resolve the theme Dockerfile")

    # start
    p_start = sub.add_parser("start", help="Create or start the agent container")
    _add_name_arg(p_start)
    p_start.add_argument("--image", default="", help="Image config name (default: recorded or selected)")
    p_start.add_argument("--reset", action="store_true",
                         help="Stop and remove an existing container before starting")

    # stop
    p_stop = sub.add_parser("stop", help="Stop the agent container")
    _add_name_arg(p_stop)

    # restart
    p_restart = sub.add_parser("restart", help="Restart the container, or its Discourse services")
    p_restart.add_argument("target", nargs="?", choices=["discourse"],
                           help="'discourse' restarts services inside the container instead")
    _add_name_arg(p_restart)

    # list
    p_list = sub.add_parser("list", help="List containers created from the selected image")
    p_list.add_argument("prefix", nargs="?", default="", help="Only names starting with prefix")
    p_list.add_argument("-q", "--quiet", action="store_true", help="Print names only")

    # config
    p_cfg = sub.add_parser("config", help="Show or edit configuration")
    p_cfg.add_argument("--select-image", help="Set the selected image config")
    p_cfg.add_argument("--select-agent", help="Set the selected agent container name")
    p_cfg.add_argument("--host-port", type=int, help="Set the first host port to try")
    p_cfg.add_argument("--container-port", type=int, help="Set the container port to publish")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Lazy import commands to keep startup fast
    from dv.commands import (
        cmd_build, cmd_dockerfile, cmd_start, cmd_stop, cmd_restart,
        cmd_list, cmd_config,
    )

    commands = {
        "build": cmd_build,
        "dockerfile": cmd_dockerfile,
        "start": cmd_start,
        "stop": cmd_stop,
        "restart": cmd_restart,
        "list": cmd_list,
        "config": cmd_config,
    }
    try:
        commands[args.command](args)
    except DvError as e:
        die(str(e))


if __name__ == "__main__":
    main()
