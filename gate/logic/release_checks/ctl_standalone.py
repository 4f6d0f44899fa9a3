from __future__ import annotations

from relcheck.core.command_exec import run_checked

from . import tables
from .context import ReleaseInfo
from .version_info import verify_reported_version


SCRATCH_NAME = "istioctl-standalone"


def run(info: ReleaseInfo) -> None:
    """Standalone istioctl archive unpacks and reports the manifest version."""

    archive = info.release_dir / tables.standalone_cli_archive_name(info.manifest.version)
    dest = info.scratch_for(SCRATCH_NAME)
    run_checked(info.executor, ["tar", "xvf", str(archive), "-C", str(dest)])

    verify_reported_version(
        info.executor,
        [str(dest / tables.CLI_NAME), *tables.CLI_VERSION_ARGS],
        expected=info.manifest.version,
        what=f"standalone {tables.CLI_NAME}",
    )
