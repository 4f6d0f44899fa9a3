from __future__ import annotations

from . import tables
from .context import ReleaseInfo
from .hub_tag import validate_hub_tag_from_file


def run(info: ReleaseInfo) -> None:
    for prefix, files in tables.SOURCE_VALUES_FILES:
        for rel in files:
            validate_hub_tag_from_file(info, rel, prefix)
