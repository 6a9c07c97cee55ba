# SPDX-License-Identifier: BUSL-1.1
"""Bring dv containers to a running state and restart their services.

Container state is always read back from docker; nothing here caches it.
"""

from dv import docker
from dv.docker import IMAGE_NAME_LABEL, IMAGE_TAG_LABEL, OWNER, OWNER_LABEL
from dv.errors import ConfigurationError, ContainerRuntimeError
from dv.ports import find_free_port

PORT_ENV = "DISCOURSE_PORT"

# runit services managed inside the Discourse image, in start order
SERVICES = ("sidekiq", "unicorn", "ember-cli")

STOP_SERVICES_SCRIPT = """set -e
has_service() { [ -d "/etc/service/$1" ]; }
if has_service unicorn; then sv stop unicorn || true; fi
if has_service ember-cli; then sv stop ember-cli || true; fi
if has_service sidekiq; then sv stop sidekiq || true; fi
sleep 1"""

# Only processes owned by discourse, so runsv itself survives
KILL_LEFTOVERS_SCRIPT = """set -e
pkill -u discourse -9 -f 'bin/unicorn' 2>/dev/null || true
pkill -u discourse -9 -f 'sidekiq' 2>/dev/null || true
sleep 1"""

START_SERVICES_SCRIPT = """set -e
has_service() { [ -d "/etc/service/$1" ]; }
if has_service sidekiq; then sv start sidekiq || true; fi
if has_service unicorn; then sv start unicorn || true; fi
if has_service ember-cli; then sv start ember-cli || true; fi
sleep 1"""

STATUS_SCRIPT = """set -e
services=()
for s in %s; do
  [ -d "/etc/service/$s" ] && services+=("$s")
done
if [ ${#services[@]} -gt 0 ]; then
  sv status "${services[@]}" || true
else
  echo "No runit services found"
fi""" % " ".join(SERVICES)


def container_labels(image_name: str, image_tag: str) -> dict:
    return {
        OWNER_LABEL: OWNER,
        IMAGE_NAME_LABEL: image_name,
        IMAGE_TAG_LABEL: image_tag,
    }


def ensure_running(cfg, name: str, workdir: str, image_tag: str, image_name: str, reset: bool = False) -> bool:
    """Make sure container `name` exists and is running.

    Returns True when a new container was created by this call.
    With reset, an existing container is stopped and removed first, so a
    fresh one is created on a newly chosen host port. Docker errors
    propagate as ContainerRuntimeError; nothing is rolled back.
    """
    if reset and docker.exists(name):
        if docker.running(name):
            docker.stop(name)
        docker.remove(name)

    if not docker.exists(name):
        host_port = find_free_port(cfg.host_starting_port)
        docker.run_detached(
            name,
            workdir,
            image_tag,
            host_port,
            cfg.container_port,
            labels=container_labels(image_name, image_tag),
            envs={PORT_ENV: str(host_port)},
        )
        return True
    if not docker.running(name):
        docker.start(name)
    return False


def image_for_container(cfg, name: str) -> tuple:
    """Return (image_name, ImageConfig) recorded for a container, else the selected image."""
    return cfg.resolve_image(cfg.container_images.get(name, ""))


def ensure_container_running(cfg, name: str, reset: bool = False, image: str = "") -> tuple:
    """ensure_running using `image`, else the image recorded for `name`, else the selected one.

    An existing container is never switched to a different image without
    reset. Returns (image_name, ImageConfig, created).
    """
    current = cfg.container_images.get(name, "") or cfg.selected_image
    image_name, img = cfg.resolve_image(image or current)
    if image_name != current and not reset and docker.exists(name):
        raise ConfigurationError(
            f"container '{name}' already exists from image '{current}'; "
            f"use --reset to recreate it from '{image_name}'"
        )
    created = ensure_running(cfg, name, img.workdir, img.tag, image_name, reset=reset)
    return image_name, img, created


def restart_container(name: str) -> bool:
    """Stop (if running) and start a container. Returns False if it does not exist."""
    if not docker.exists(name):
        return False
    if docker.running(name):
        print(f"Stopping container '{name}'...")
        docker.stop(name)
    print(f"Starting container '{name}'...")
    docker.start(name)
    return True


def _best_effort(name: str, workdir: str, script: str, label: str):
    try:
        docker.exec_as_root(name, workdir, ["bash", "-lc", script])
    except ContainerRuntimeError as e:
        print(f"  Warning: {label} failed: {e}")


def restart_services(cfg, name: str):
    """Restart Discourse's runit services inside a container.

    Returns the `sv status` output, or None when the container does not exist.
    Each step is best-effort: a service that is missing or fails to stop does
    not abort the sequence, and nothing is retried.
    """
    if not docker.exists(name):
        return None

    if not docker.running(name):
        print(f"Starting container '{name}'...")
        docker.start(name)

    _, img = image_for_container(cfg, name)
    workdir = img.workdir

    print("Stopping services (if present)...")
    _best_effort(name, workdir, STOP_SERVICES_SCRIPT, "stopping services")

    print("Killing leftover unicorn/sidekiq processes (if any)...")
    _best_effort(name, workdir, KILL_LEFTOVERS_SCRIPT, "killing leftover processes")

    print("Starting services (if present)...")
    _best_effort(name, workdir, START_SERVICES_SCRIPT, "starting services")

    try:
        return docker.exec_as_root(name, workdir, ["bash", "-lc", STATUS_SCRIPT])
    except ContainerRuntimeError as e:
        print(f"  Warning: service status query failed: {e}")
        return ""
