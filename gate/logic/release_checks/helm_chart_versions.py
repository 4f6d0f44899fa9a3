from __future__ import annotations

import sys

from relcheck.core.command_exec import run_checked
from relcheck.core.errors import ReleaseCheckError

from gate.logic.base import is_valid_semver

from . import tables
from .context import ReleaseInfo
from .hub_tag import validate_hub_tag


def run(info: ReleaseInfo) -> None:
    """Packaged charts carry the manifest hub/tag in their default values.

    Only enforced for semver releases; dev builds are skipped as a pass.
    """

    version = info.manifest.version
    if not is_valid_semver(version):
        print(f"[relcheck] Skipping HelmChartVersions; not a valid semver: {version}", file=sys.stderr)
        return

    for chart, prefix in tables.CHART_HUB_TAG_PATHS.items():
        chart_archive = info.release_dir / "helm" / tables.chart_archive_name(chart, version)
        try:
            values = run_checked(info.executor, ["helm", "show", "values", str(chart_archive)])
        except ReleaseCheckError as e:
            raise ReleaseCheckError(f"helm show: {e}") from e
        if prefix == tables.NO_HUB_TAG:
            continue
        try:
            validate_hub_tag(info, values, prefix, source=f"helm show values {chart_archive.name}")
        except ReleaseCheckError as e:
            raise ReleaseCheckError(f"{chart}: {e}") from e
