from __future__ import annotations

from pathlib import Path


def normalize_rel(rel: str) -> str:
    """Normalize a release-relative path to POSIX separators and reject escapes.
    """

    if not isinstance(rel, str) or not rel:
        raise ValueError("path missing/empty")
    if "\x00" in rel:
        raise ValueError("path contains NUL")
    if "\\" in rel:
        raise ValueError("path must use '/' separators")
    if rel.startswith("/"):
        raise ValueError("absolute paths are not allowed")
    if ":" in rel:
        raise ValueError("path must not contain ':'")

    parts = [p for p in rel.split("/") if p]
    if not parts:
        raise ValueError("empty path not allowed")
    if any(p in (".", "..") for p in parts):
        raise ValueError("path must not contain '.' or '..' segments")
    return "/".join(parts)


def ensure_within_root(root: Path, target: Path) -> None:
    root_resolved = root.resolve()
    target_resolved = target.resolve()
    if root_resolved not in target_resolved.parents and root_resolved != target_resolved:
        raise ValueError(f"Resolved path escapes root: {target}")


def resolve_rel_path(root: Path, rel: str) -> Path:
    """Join a fixed relative path onto root, refusing anything that leaves root."""

    rel_posix = normalize_rel(rel)
    candidate = root.joinpath(*rel_posix.split("/"))
    ensure_within_root(root, candidate)
    return candidate
