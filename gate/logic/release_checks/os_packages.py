from __future__ import annotations

from relcheck.core.errors import ReleaseCheckError

from gate.logic.base import file_exists

from . import tables
from .context import ReleaseInfo


def _require_package(info: ReleaseInfo, rel: tuple[str, str], kind: str) -> None:
    if not file_exists(info.release_dir.joinpath(*rel)):
        raise ReleaseCheckError(f"{kind} package not found: {'/'.join(rel)}")


def run_debian(info: ReleaseInfo) -> None:
    _require_package(info, tables.DEBIAN_PACKAGE, "debian")


def run_rpm(info: ReleaseInfo) -> None:
    _require_package(info, tables.RPM_PACKAGE, "rpm")
