# SPDX-License-Identifier: BUSL-1.1
"""Embedded Dockerfiles shipped with dv."""

from pathlib import Path

from dv.assets.resolver import (
    AssetDescriptor, Resolution, resolve_asset, materialize_if_stale,
)

ASSET_DIR = Path(__file__).resolve().parent

DOCKERFILE = AssetDescriptor(
    name="Dockerfile",
    content=(ASSET_DIR / "Dockerfile").read_bytes(),
    env_var="DV_DOCKERFILE",
)
DOCKERFILE_THEME = AssetDescriptor(
    name="Dockerfile.theme",
    content=(ASSET_DIR / "Dockerfile.theme").read_bytes(),
    env_var="DV_DOCKERFILE_THEME",
)

# Image kind (ImageConfig.kind) -> asset used to build it
ASSETS_BY_KIND = {
    "discourse": DOCKERFILE,
    "theme": DOCKERFILE_THEME,
}


def embedded_dockerfile_sha256() -> str:
    return DOCKERFILE.sha256


def embedded_dockerfile_theme_sha256() -> str:
    return DOCKERFILE_THEME.sha256


def resolve_dockerfile(config_dir) -> Resolution:
    """Resolve the Dockerfile for the main image (DV_DOCKERFILE, Dockerfile.local, embedded)."""
    return resolve_asset(DOCKERFILE, config_dir)


def resolve_dockerfile_theme(config_dir) -> Resolution:
    """Resolve the theme Dockerfile (DV_DOCKERFILE_THEME, Dockerfile.theme.local, embedded)."""
    return resolve_asset(DOCKERFILE_THEME, config_dir)


__all__ = [
    "AssetDescriptor", "Resolution", "resolve_asset", "materialize_if_stale",
    "DOCKERFILE", "DOCKERFILE_THEME", "ASSETS_BY_KIND",
    "embedded_dockerfile_sha256", "embedded_dockerfile_theme_sha256",
    "resolve_dockerfile", "resolve_dockerfile_theme",
]
