from __future__ import annotations

from relcheck.core.errors import AssertionFailure, ReleaseCheckError

from gate.logic.base import list_dir_names

from . import tables
from .context import ReleaseInfo


def dashboard_stems(names: set[str]) -> set[str]:
    return {n[: -len(tables.DASHBOARD_SUFFIX)] if n.endswith(tables.DASHBOARD_SUFFIX) else n for n in names}


def run(info: ReleaseInfo) -> None:
    """Dashboards shipped in grafana/ are exactly the ones the manifest declares."""

    try:
        created = dashboard_stems(list_dir_names(info.release_dir / "grafana"))
    except OSError as e:
        raise ReleaseCheckError(f"failed to read grafana dir: {e}") from e

    declared = set(info.manifest.dashboards)
    if created != declared:
        raise AssertionFailure(
            "dashboards out of sync "
            f"(only in release: {sorted(created - declared)}, only in manifest: {sorted(declared - created)})",
            sorted(declared),
            sorted(created),
        )
