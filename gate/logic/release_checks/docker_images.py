from __future__ import annotations

from typing import Iterable

from relcheck.core.errors import ReleaseCheckError

from gate.logic.base import list_dir_names

from . import tables
from .context import ReleaseInfo


def missing_images(architectures: Iterable[str], expected: Iterable[str], found: set[str]) -> list[str]:
    """Image tarballs required by (architectures x expected) that are not in found."""

    images = list(expected)
    missing: list[str] = []
    for plat in architectures:
        _, _, arch = plat.partition("/")
        for image in images:
            name = tables.image_tarball_name(image, arch)
            if name not in found:
                missing.append(name)
    return missing


def run(info: ReleaseInfo) -> None:
    docker_dir = info.release_dir / "docker"
    try:
        found = list_dir_names(docker_dir)
    except OSError as e:
        raise ReleaseCheckError(f"failed to read docker dir: {e}") from e

    missing = missing_images(info.manifest.architectures, tables.EXPECTED_IMAGES, found)
    if missing:
        raise ReleaseCheckError(f"expected docker images {missing}, but had {sorted(found)}")
