from __future__ import annotations

from . import tables
from .context import ReleaseInfo
from .version_info import verify_reported_version


def run(info: ReleaseInfo) -> None:
    """istioctl bundled in the platform archive reports the manifest version."""

    binary = info.archive_dir / "bin" / tables.CLI_NAME
    verify_reported_version(
        info.executor,
        [str(binary), *tables.CLI_VERSION_ARGS],
        expected=info.manifest.version,
        what=f"archive {tables.CLI_NAME}",
    )
