from __future__ import annotations

from pathlib import Path

from relcheck.core.errors import AssertionFailure, ReleaseCheckError
from relcheck.core.hash import is_hex_sha256, sha256_file

from . import tables
from .context import ReleaseInfo


def read_sidecar_digest(path: Path) -> str:
    """First field of a `sha256sum`-style line: `<hex>  <basename>`."""

    text = path.read_text(encoding="utf-8", errors="strict").strip()
    digest = text.split()[0] if text else ""
    if not is_hex_sha256(digest):
        raise ReleaseCheckError(f"{path.name}: not a sha256 digest: {digest!r}")
    return digest.lower()


def run(info: ReleaseInfo) -> None:
    """Top-level archives match their published .sha256 sidecars."""

    version = info.manifest.version
    required = (tables.primary_archive_name(version), tables.standalone_cli_archive_name(version))
    for name in required:
        if not (info.release_dir / (name + tables.CHECKSUM_SUFFIX)).is_file():
            raise ReleaseCheckError(f"missing checksum file for {name}")

    archives = sorted(
        p
        for p in info.release_dir.iterdir()
        if p.is_file() and p.name.endswith(tables.ARCHIVE_SUFFIXES)
    )
    for archive in archives:
        sidecar = archive.with_name(archive.name + tables.CHECKSUM_SUFFIX)
        if not sidecar.is_file():
            continue
        try:
            want = read_sidecar_digest(sidecar)
            got = sha256_file(archive)
        except (OSError, UnicodeDecodeError) as e:
            raise ReleaseCheckError(f"{archive.name}: {e}") from e
        if got != want:
            raise AssertionFailure(f"{archive.name} checksum mismatch", want, got)
