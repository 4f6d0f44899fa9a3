from __future__ import annotations

from relcheck.core.errors import AssertionFailure, ReleaseCheckError

from gate.logic.base import list_dir_names

from . import tables
from .context import ReleaseInfo


def run(info: ReleaseInfo) -> None:
    try:
        present = list_dir_names(info.release_dir / "licenses")
    except OSError as e:
        raise ReleaseCheckError(f"failed to read licenses dir: {e}") from e

    missing = [name for name in tables.EXPECTED_LICENSES if name not in present]
    if missing:
        raise AssertionFailure(
            f"failed to find licenses for: {missing}",
            list(tables.EXPECTED_LICENSES),
            sorted(present),
        )
