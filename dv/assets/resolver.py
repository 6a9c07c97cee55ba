# SPDX-License-Identifier: BUSL-1.1
"""Resolve which copy of an embedded asset to use.

Priority, first match wins:
    1. Environment variable naming an existing file (e.g. DV_DOCKERFILE)
    2. User override at <config_dir>/<name>.local
    3. Embedded default, materialized to <config_dir>/<name> and refreshed
       whenever <config_dir>/<name>.sha256 no longer matches its digest
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional

from dv.digest import digest, digest_matches
from dv.errors import ConfigurationError, FilesystemError

ASSET_MODE = 0o644
LOCAL_SUFFIX = ".local"
DIGEST_SUFFIX = ".sha256"


@dataclass(frozen=True)
class AssetDescriptor:
    """An embedded asset and the environment variable that can override it."""
    name: str
    content: bytes
    env_var: str

    @property
    def sha256(self) -> str:
        return digest(self.content)


class Resolution(NamedTuple):
    path: Path
    context_dir: Path
    used_override: bool


def _from_env(asset: AssetDescriptor, config_dir: Path) -> Optional[Resolution]:
    value = os.environ.get(asset.env_var, "")
    if not value:
        return None
    path = Path(value)
    if path.exists() and not path.is_dir():
        return Resolution(path, path.parent, True)
    raise ConfigurationError(f"{asset.env_var} path does not exist: {value}")


def _from_local_override(asset: AssetDescriptor, config_dir: Path) -> Optional[Resolution]:
    local = config_dir / f"{asset.name}{LOCAL_SUFFIX}"
    if local.exists() and not local.is_dir():
        return Resolution(local, config_dir, True)
    return None


def _from_embedded(asset: AssetDescriptor, config_dir: Path) -> Resolution:
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"cannot create config directory {config_dir}: {e}", config_dir) from e
    target = config_dir / asset.name
    sidecar = config_dir / f"{asset.name}{DIGEST_SUFFIX}"
    materialize_if_stale(target, sidecar, asset.content, asset.sha256)
    return Resolution(target, config_dir, False)


RESOLUTION_ORDER = (_from_env, _from_local_override, _from_embedded)


def resolve_asset(asset: AssetDescriptor, config_dir) -> Resolution:
    """Return the effective path for asset, materializing the embedded copy if needed."""
    config_dir = Path(config_dir)
    for candidate in RESOLUTION_ORDER:
        result = candidate(asset, config_dir)
        if result is not None:
            return result
    raise ConfigurationError(f"no usable source for {asset.name}")


def _write(path: Path, data: bytes):
    try:
        path.write_bytes(data)
        os.chmod(path, ASSET_MODE)
    except OSError as e:
        raise FilesystemError(f"cannot write {path}: {e}", path) from e


def materialize_if_stale(target: Path, sidecar: Path, content: bytes, sha256: str) -> bool:
    """Write content and its digest unless the sidecar already records sha256.

    Content is written before the sidecar, so an interrupted write leaves a
    stale digest behind and the next call writes both again.
    Returns True when the files were (re)written.
    """
    try:
        recorded = sidecar.read_bytes()
    except FileNotFoundError:
        need_write = True
    except OSError as e:
        raise FilesystemError(f"cannot read {sidecar}: {e}", sidecar) from e
    else:
        need_write = not digest_matches(recorded, sha256)

    if need_write:
        _write(target, content)
        _write(sidecar, f"{sha256}\n".encode("ascii"))
    return need_write
