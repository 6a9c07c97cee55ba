# SPDX-License-Identifier: BUSL-1.1
"""Docker operations — query, run, and exec into dv containers."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from dv.errors import ContainerRuntimeError

OWNER_LABEL = "com.dv.owner"
IMAGE_NAME_LABEL = "com.dv.image-name"
IMAGE_TAG_LABEL = "com.dv.image-tag"
OWNER = "dv"


@dataclass
class ContainerInfo:
    name: str
    image: str = ""
    labels: dict = field(default_factory=dict)


def _docker(args: list, name: str = "", action: str = "") -> str:
    """Run a docker subcommand, returning combined output or raising on failure."""
    cmd = ["docker", *args]
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError as e:
        raise ContainerRuntimeError("docker executable not found", name=name) from e
    if result.returncode != 0:
        what = action or args[0]
        target = f" '{name}'" if name else ""
        raise ContainerRuntimeError(
            f"docker {what}{target} failed (exit {result.returncode})",
            name=name,
            output=result.stdout,
        )
    return result.stdout


def _query(args: list) -> subprocess.CompletedProcess:
    return subprocess.run(["docker", *args], capture_output=True, text=True)


def exists(name: str) -> bool:
    """Check if a container with the given name exists, running or not."""
    try:
        result = _query(["ps", "-aq", "--filter", f"name=^{name}$"])
    except FileNotFoundError:
        return False
    return bool(result.stdout.strip())


def running(name: str) -> bool:
    """Check if a container with the given name is running."""
    try:
        result = _query(["ps", "-q", "--filter", f"name=^{name}$"])
    except FileNotFoundError:
        return False
    return bool(result.stdout.strip())


def start(name: str):
    _docker(["start", name], name=name)


def stop(name: str):
    _docker(["stop", name], name=name)


def remove(name: str):
    _docker(["rm", name], name=name)


def run_detached(
    name: str,
    workdir: str,
    image_tag: str,
    host_port: int,
    container_port: int,
    labels: dict = None,
    envs: dict = None,
):
    """Create and start a container in the background."""
    cmd = [
        "run", "-d",
        "--name", name,
        "--hostname", name,
        "-p", f"{host_port}:{container_port}",
    ]
    if workdir:
        cmd.extend(["-w", workdir])
    for key, value in (labels or {}).items():
        cmd.extend(["--label", f"{key}={value}"])
    for key, value in (envs or {}).items():
        cmd.extend(["-e", f"{key}={value}"])
    cmd.append(image_tag)
    _docker(cmd, name=name, action="run")


def exec_as_root(name: str, workdir: str, argv: list) -> str:
    """Run argv inside the container as root and return its combined output."""
    cmd = ["exec", "--user", "root"]
    if workdir:
        cmd.extend(["-w", workdir])
    cmd.append(name)
    cmd.extend(argv)
    return _docker(cmd, name=name, action="exec")


def parse_labels(field_value: str) -> dict:
    """Parse the `k=v,k2=v2` label column printed by `docker ps`."""
    labels = {}
    for item in (field_value or "").split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        if sep:
            labels[key] = value
    return labels


def list_containers() -> list:
    """Return every container known to docker with its image and labels."""
    try:
        result = _query(["ps", "-a", "--format", "{{.Names}}\t{{.Image}}\t{{.Labels}}"])
    except FileNotFoundError:
        return []
    if result.returncode != 0:
        return []

    containers = []
    for line in result.stdout.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t", 2)
        if len(parts) < 2:
            continue
        labels = parse_labels(parts[2]) if len(parts) >= 3 else {}
        containers.append(ContainerInfo(name=parts[0], image=parts[1], labels=labels))
    return containers


def build_image(dockerfile: Path, context_dir: Path, tag: str, no_cache: bool = False) -> bool:
    """Build an image from dockerfile, streaming docker output to the terminal."""
    cmd = [
        "docker", "build",
        "-f", str(dockerfile),
        "-t", tag,
        "--label", f"{OWNER_LABEL}={OWNER}",
    ]
    if no_cache:
        cmd.append("--no-cache")
    cmd.append(str(context_dir))
    try:
        result = subprocess.run(cmd)
    except FileNotFoundError as e:
        raise ContainerRuntimeError("docker executable not found") from e
    return result.returncode == 0
