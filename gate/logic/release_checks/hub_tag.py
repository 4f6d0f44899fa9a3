from __future__ import annotations

from typing import Sequence

from relcheck.core.errors import AssertionFailure, ReleaseCheckError
from relcheck.core.jail import resolve_rel_path
from relcheck.core.values import Document, parse_values, resolve, split_prefix

from .context import ReleaseInfo


def expect_hub_tag(
    info: ReleaseInfo,
    values: Document | None,
    *,
    tag_path: Sequence[str],
    hub_path: Sequence[str],
) -> None:
    tag = resolve(values, tag_path)
    if tag != info.manifest.version:
        raise AssertionFailure("archive tag incorrect", info.manifest.version, tag)
    hub = resolve(values, hub_path)
    if hub != info.manifest.docker:
        raise AssertionFailure("hub incorrect", info.manifest.docker, hub)


def validate_hub_tag(info: ReleaseInfo, values_bytes: bytes, prefix: str, *, source: str) -> None:
    """Check `<prefix>.tag` / `<prefix>.hub` in a values document against the manifest."""

    values = parse_values(values_bytes, source=source)
    expect_hub_tag(
        info,
        values,
        tag_path=split_prefix(prefix, "tag"),
        hub_path=split_prefix(prefix, "hub"),
    )


def validate_hub_tag_from_file(info: ReleaseInfo, rel: str, prefix: str) -> None:
    path = resolve_rel_path(info.archive_dir, rel)
    try:
        data = path.read_bytes()
        validate_hub_tag(info, data, prefix, source=rel)
    except (OSError, ReleaseCheckError) as e:
        raise ReleaseCheckError(f"{rel}: {e}") from e
