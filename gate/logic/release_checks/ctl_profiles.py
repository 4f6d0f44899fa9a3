from __future__ import annotations

from relcheck.core.errors import ReleaseCheckError
from relcheck.core.jail import resolve_rel_path
from relcheck.core.values import parse_values

from . import tables
from .context import ReleaseInfo
from .hub_tag import expect_hub_tag


def run(info: ReleaseInfo) -> None:
    """Install profiles pin spec.hub / spec.tag to the release."""

    for rel in tables.INSTALL_PROFILES:
        try:
            data = resolve_rel_path(info.archive_dir, rel).read_bytes()
            values = parse_values(data, source=rel)
            expect_hub_tag(
                info,
                values,
                tag_path=tables.PROFILE_TAG_PATH,
                hub_path=tables.PROFILE_HUB_PATH,
            )
        except (OSError, ReleaseCheckError) as e:
            raise ReleaseCheckError(f"{rel}: {e}") from e
