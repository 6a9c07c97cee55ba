# SPDX-License-Identifier: BUSL-1.1
"""Configuration dataclasses for dv.

The on-disk form is a single YAML mapping with camelCase keys; fields here
are snake_case and converted on load/save.
"""

from dataclasses import dataclass, field, fields, is_dataclass

from dv.errors import ConfigurationError
from dv.ports import check_port

IMAGE_KINDS = ("discourse", "theme")


@dataclass
class ImageConfig:
    """A logical image: how to tag it and where its code lives in the container."""
    tag: str = ""
    workdir: str = "/var/www/discourse"
    kind: str = "discourse"         # discourse | theme


def default_images() -> dict:
    return {
        "discourse": ImageConfig(tag="ai_agent", workdir="/var/www/discourse", kind="discourse"),
        "theme": ImageConfig(tag="ai_agent_theme", workdir="/home/discourse/theme", kind="theme"),
    }


@dataclass
class Config:
    selected_agent: str = ""
    default_container: str = "ai_agent"
    selected_image: str = "discourse"
    images: dict = field(default_factory=default_images)
    container_images: dict = field(default_factory=dict)   # container name -> image name
    host_starting_port: int = 4201
    container_port: int = 4200

    def current_agent_name(self) -> str:
        """Return the selected agent container, falling back to the default."""
        return self.selected_agent or self.default_container

    def resolve_image(self, override: str = "") -> tuple:
        """Return (image_name, ImageConfig) for override or the selected image."""
        name = override or self.selected_image
        img = self.images.get(name)
        if img is None:
            raise ConfigurationError(f"unknown image '{name}'")
        return name, img


# ── Serialization helpers ────────────────────────────────────────────────

def _camel(name: str) -> str:
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def _snake(name: str) -> str:
    out = []
    for c in name:
        if c.isupper():
            out.append("_")
            out.append(c.lower())
        else:
            out.append(c)
    return "".join(out)


def config_to_dict(cfg: Config) -> dict:
    """Convert a Config to a YAML-serializable dict with camelCase keys."""
    result = {}
    for f in fields(cfg):
        val = getattr(cfg, f.name)
        if f.name == "images":
            val = {k: {_camel(ff.name): getattr(v, ff.name) for ff in fields(v)} for k, v in val.items()}
        elif isinstance(val, dict):
            val = dict(val)
        result[_camel(f.name)] = val
    return result


def _image_from_dict(name: str, data) -> ImageConfig:
    if is_dataclass(data):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"image '{name}' must be a mapping")
    known = {f.name for f in fields(ImageConfig)}
    kwargs = {}
    for key, val in data.items():
        field_name = _snake(key)
        if field_name in known:
            kwargs[field_name] = val
    img = ImageConfig(**kwargs)
    if img.kind not in IMAGE_KINDS:
        raise ConfigurationError(
            f"image '{name}' has unknown kind '{img.kind}' (expected one of: {', '.join(IMAGE_KINDS)})"
        )
    return img


def config_from_dict(data: dict) -> Config:
    """Build a Config from a parsed YAML mapping, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError("config file must contain a YAML mapping")
    known = {f.name for f in fields(Config)}
    kwargs = {}
    for key, val in data.items():
        field_name = _snake(key)
        if field_name not in known or val is None:
            continue
        if field_name == "images":
            val = {name: _image_from_dict(name, img) for name, img in (val or {}).items()}
        elif field_name in ("host_starting_port", "container_port"):
            val = check_port(val, key)
        kwargs[field_name] = val
    return Config(**kwargs)
