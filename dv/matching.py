# SPDX-License-Identifier: BUSL-1.1
"""Match existing containers to the logical image that created them."""

from dv.docker import IMAGE_NAME_LABEL, OWNER, OWNER_LABEL


def belongs(
    container_name: str,
    container_image: str,
    container_labels: dict,
    selected_image_name: str,
    selected_image_tag: str,
    recorded_mapping: dict,
) -> bool:
    """Return True if the container was created from the selected image.

    Evidence, strongest first: the recorded name->image mapping, dv's own
    labels, then the container's image tag.
    """
    if (recorded_mapping or {}).get(container_name) == selected_image_name:
        return True
    labels = container_labels or {}
    if labels.get(OWNER_LABEL) == OWNER and labels.get(IMAGE_NAME_LABEL) == selected_image_name:
        return True
    return container_image == selected_image_tag


def matching_containers(cfg, containers: list, prefix: str = "") -> list:
    """Return names of containers belonging to cfg's selected image, filtered by prefix."""
    _, img = cfg.resolve_image()
    prefix = prefix.strip().lower()
    names = []
    for c in containers:
        if not belongs(c.name, c.image, c.labels, cfg.selected_image, img.tag, cfg.container_images):
            continue
        if not prefix or c.name.lower().startswith(prefix):
            names.append(c.name)
    return names
