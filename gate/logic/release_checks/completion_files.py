from __future__ import annotations

from relcheck.core.errors import ReleaseCheckError

from gate.logic.base import file_exists

from . import tables
from .context import ReleaseInfo


def run(info: ReleaseInfo) -> None:
    for name in tables.COMPLETION_FILES:
        path = info.archive_dir / "tools" / name
        if not file_exists(path):
            raise ReleaseCheckError(f"file not found {path}")
