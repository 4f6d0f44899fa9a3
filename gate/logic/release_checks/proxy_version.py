from __future__ import annotations

from relcheck.core.command_exec import run_checked
from relcheck.core.errors import ReleaseCheckError

from . import tables
from .context import ReleaseInfo
from .version_info import verify_reported_version


def run(info: ReleaseInfo) -> None:
    """Load the proxy debug image and check the version it reports."""

    tarball = info.release_dir / "docker" / tables.PROXY_IMAGE_TARBALL
    try:
        run_checked(info.executor, ["docker", "load", "-i", str(tarball)])
    except ReleaseCheckError as e:
        raise ReleaseCheckError(f"failed to load {tables.PROXY_IMAGE_TARBALL} as docker image: {e}") from e

    image = f"{info.manifest.docker}/{tables.PROXY_IMAGE_NAME}:{info.manifest.version}"
    verify_reported_version(
        info.executor,
        ["docker", "run", "--rm", image, *tables.IMAGE_VERSION_ARGS],
        expected=info.manifest.version,
        what="proxy",
    )
