from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from relcheck.core.errors import ParseError


Status = str  # "PASS" | "FAIL"

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


@dataclass(frozen=True)
class CheckResult:
    check_id: str
    status: Status
    message: str


def is_valid_semver(version: str) -> bool:
    return isinstance(version, str) and _SEMVER_RE.match(version) is not None


def load_json_bytes(data: bytes, *, source: str) -> Any:
    try:
        return json.loads(data.decode("utf-8", errors="strict"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        line = getattr(e, "lineno", None)
        column = getattr(e, "colno", None)
        raise ParseError(source, len(data), str(e), line=line, column=column) from e


def list_dir_names(path: Path) -> set[str]:
    """Names of the direct entries of path; raises OSError if unreadable."""

    return {p.name for p in path.iterdir()}


def file_exists(path: Path) -> bool:
    return path.exists() and not path.is_dir()


def stable_unique(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out
