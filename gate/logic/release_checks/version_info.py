from __future__ import annotations

from typing import Any, Sequence

from gate.logic.base import load_json_bytes
from relcheck.core.command_exec import CommandExecutor, run_checked
from relcheck.core.errors import AssertionFailure, ReleaseCheckError


def client_version(output: bytes, *, source: str) -> str:
    """Extract clientVersion.version from `version --short -ojson` output."""

    obj: Any = load_json_bytes(output, source=source)
    if not isinstance(obj, dict):
        raise ReleaseCheckError(f"failed to unmarshal version information from {source}: not an object")
    client = obj.get("clientVersion")
    if not isinstance(client, dict):
        raise ReleaseCheckError("no client version found in version information")
    version = client.get("version")
    if not isinstance(version, str):
        raise ReleaseCheckError("clientVersion.version missing/invalid in version information")
    return version


def verify_reported_version(
    executor: CommandExecutor,
    argv: Sequence[str],
    *,
    expected: str,
    what: str,
) -> None:
    """Run argv, parse its JSON version report and compare to expected."""

    out = run_checked(executor, argv)
    got = client_version(out, source=" ".join(str(a) for a in argv))
    if got != expected:
        raise AssertionFailure(f"{what} version mismatch", expected, got)
