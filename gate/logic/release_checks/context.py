from __future__ import annotations

import os
import shutil
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from relcheck.core.command_exec import CommandExecutor, run_checked
from relcheck.core.errors import ReleaseCheckError
from relcheck.manifest import MANIFEST_FILENAME, Manifest, load_manifest

from . import tables


TMPDIR_ENV = "RELCHECK_TMPDIR"


@dataclass(frozen=True)
class ReleaseInfo:
    manifest: Manifest
    release_dir: Path
    archive_dir: Path
    scratch_dir: Path
    tmp_dir: Path
    executor: CommandExecutor = field(repr=False, compare=False)

    def scratch_for(self, name: str) -> Path:
        """Per-check extraction directory under scratch_dir, created if missing.

        Repeated calls with the same name return the same directory.
        """

        d = self.scratch_dir / name
        d.mkdir(parents=True, exist_ok=True)
        return d


def _make_tmp_dir() -> Path:
    parent = os.environ.get(TMPDIR_ENV) or None
    if parent is not None:
        Path(parent).mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix="release-test", dir=parent))


def new_release_info(
    release_dir: Path,
    executor: CommandExecutor,
    *,
    manifest_path: Path | None = None,
) -> ReleaseInfo:
    """Load the manifest and unpack the primary archive into a fresh temp dir.

    Raises ManifestError if the manifest cannot be read. A failed extraction
    is only reported: the checks that need the archive will fail on their own.
    """

    manifest = load_manifest(manifest_path or (release_dir / MANIFEST_FILENAME))

    tmp_dir = _make_tmp_dir()
    print(f"[relcheck] test temporary dir at {tmp_dir}", file=sys.stderr)
    scratch_dir = tmp_dir / "scratch"
    scratch_dir.mkdir()

    archive = release_dir / tables.primary_archive_name(manifest.version)
    try:
        run_checked(executor, ["tar", "xvf", str(archive), "-C", str(tmp_dir)])
    except ReleaseCheckError as e:
        print(f"[relcheck] WARNING: failed to unpackage release archive: {e}", file=sys.stderr)

    return ReleaseInfo(
        manifest=manifest,
        release_dir=release_dir,
        archive_dir=tmp_dir / tables.archive_root_name(manifest.version),
        scratch_dir=scratch_dir,
        tmp_dir=tmp_dir,
        executor=executor,
    )


def cleanup_release_info(info: ReleaseInfo) -> None:
    shutil.rmtree(info.tmp_dir, ignore_errors=True)
