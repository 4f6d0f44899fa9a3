#!/usr/bin/env python3
"""Release validation gate.

Runs every registered release check (gate/logic/release_checks/registry.py)
against one unpacked release. Checks are independent: a failing check never
stops the others, so a single run reports every defect.

Exit codes:
- 0: all checks passed
- 1: at least one check failed
- 3: tool usage/internal errors
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Sequence

from gate.logic.base import CheckResult, stable_unique
from gate.logic.release_checks.context import ReleaseInfo, cleanup_release_info, new_release_info
from gate.logic.release_checks.registry import CheckFn, get_checks, select_checks
from relcheck.core.command_exec import CommandExecutor, SubprocessExecutor
from relcheck.core.errors import CheckFailed, ReleaseCheckError


VERDICT_SCHEMA_VERSION = "1.0.0"


def _walk_sorted(path: Path, lines: list[str]) -> None:
    try:
        entries = sorted(os.scandir(path), key=lambda e: e.name)
    except OSError as e:
        lines.append(f"! {e}\n")
        return
    for entry in entries:
        lines.append(f"- {entry.path}\n")
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            lines.append(f"! {e}\n")
            continue
        if is_dir:
            _walk_sorted(Path(entry.path), lines)


def list_files(root: Path) -> str:
    """Recursive listing of root, one `- <path>` line per entry.

    Best-effort diagnostics: walk errors become `! <error>` lines in the
    listing and are never raised.
    """

    lines: list[str] = []
    if not root.is_dir():
        lines.append(f"! not a directory: {root}\n")
        return "".join(lines)
    lines.append(f"- {root}\n")
    _walk_sorted(root, lines)
    return "".join(lines)


def build_report(info: ReleaseInfo) -> str:
    parts = [
        f"Checks failed. Release info: {info!r}\n",
        "Files in release: \n",
        list_files(info.release_dir),
        "\nFiles in archive: \n",
        list_files(info.archive_dir),
    ]
    return "".join(parts)


def run_all(
    info: ReleaseInfo,
    checks: Sequence[tuple[str, CheckFn]],
) -> tuple[list[str], str, list[CheckFailed]]:
    """Run every check; return (succeeded names, report, failures).

    The report is empty unless at least one check failed.
    """

    succeeded: list[str] = []
    failures: list[CheckFailed] = []
    for name, check in checks:
        try:
            check(info)
        except Exception as e:
            failures.append(CheckFailed(name, e))
            print(f"[relcheck] FAIL {name}: {e}", file=sys.stderr)
        else:
            succeeded.append(name)
            print(f"[relcheck] PASS {name}", file=sys.stderr)

    report = build_report(info) if failures else ""
    return succeeded, report, failures


def check_release(
    release: str | Path | None,
    *,
    executor: CommandExecutor | None = None,
    manifest_path: Path | None = None,
    check_names: Sequence[str] | None = None,
    keep_temp: bool = False,
) -> tuple[list[str], str, list[ReleaseCheckError]]:
    """Open the release, run the selected checks, and remove the temp tree.

    Raises ManifestError if the manifest cannot be loaded and ValueError for
    unknown check names.
    """

    if release is None or str(release) == "":
        return [], "", [ReleaseCheckError("--release must be passed")]

    checks = select_checks(stable_unique(check_names)) if check_names else get_checks()
    info = new_release_info(Path(release), executor or SubprocessExecutor(), manifest_path=manifest_path)
    try:
        succeeded, report, failures = run_all(info, checks)
    finally:
        if keep_temp:
            print(f"[relcheck] keeping temporary dir {info.tmp_dir}", file=sys.stderr)
        else:
            cleanup_release_info(info)
    return succeeded, report, list(failures)


def results_from(succeeded: Sequence[str], failures: Sequence[ReleaseCheckError]) -> list[CheckResult]:
    results = [CheckResult(check_id=name, status="PASS", message="ok") for name in succeeded]
    for f in failures:
        name = f.check_name if isinstance(f, CheckFailed) else "release"
        results.append(CheckResult(check_id=name, status="FAIL", message=str(f)))
    return results


def verdict_obj(
    *,
    release: str,
    succeeded: Sequence[str],
    failures: Sequence[ReleaseCheckError],
) -> dict[str, Any]:
    return {
        "schema_version": VERDICT_SCHEMA_VERSION,
        "release": release,
        "verdict": "NO-GO" if failures else "GO",
        "succeeded": list(succeeded),
        "failures": [str(f) for f in failures],
        "results": [
            {"check_id": r.check_id, "status": r.status, "message": r.message}
            for r in results_from(succeeded, failures)
        ],
    }


def write_json_deterministic(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    with path.open("w", encoding="utf-8", errors="strict", newline="\n") as f:
        f.write(data)


def add_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--release", default="", help="Release directory (contains manifest.yaml and archives)")
    ap.add_argument("--manifest", default=None, help="Manifest path (default: <release>/manifest.yaml)")
    ap.add_argument(
        "--check",
        action="append",
        default=[],
        help="Run only this check (repeatable; default: all registered checks)",
    )
    ap.add_argument("--out", default=None, help="Write a JSON verdict to this path")
    ap.add_argument("--report-out", default=None, help="Write the failure report to this path")
    ap.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-command timeout in seconds for external tools (default: none)",
    )
    ap.add_argument("--keep-temp", action="store_true", help="Do not remove the temporary extraction dir")


def run_gate(args: argparse.Namespace, *, prefix: str = "[relcheck]") -> int:
    release = str(args.release or "")
    if not release:
        print(f"{prefix} ERROR: --release must be passed", file=sys.stderr)
        return 3
    manifest_path = Path(args.manifest) if args.manifest else None
    try:
        succeeded, report, failures = check_release(
            release,
            executor=SubprocessExecutor(timeout=args.timeout),
            manifest_path=manifest_path,
            check_names=list(args.check or []),
            keep_temp=bool(args.keep_temp),
        )
    except (ReleaseCheckError, ValueError, OSError) as e:
        print(f"{prefix} ERROR: {e}", file=sys.stderr)
        return 3

    if args.out:
        write_json_deterministic(
            Path(args.out),
            verdict_obj(release=release, succeeded=succeeded, failures=failures),
        )
    if args.report_out and report:
        out = Path(args.report_out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(report, encoding="utf-8")

    for name in succeeded:
        print(f"{prefix} Check {name} passed")
    for f in failures:
        print(f"{prefix} {f}", file=sys.stderr)
    if failures:
        if report and not args.report_out:
            print(report, file=sys.stderr)
        print(f"{prefix} NO-GO: {len(failures)} check(s) failed", file=sys.stderr)
        return 1

    print(f"{prefix} GO: {len(succeeded)} check(s) passed")
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Release validation gate")
    add_arguments(ap)
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    return run_gate(args)


if __name__ == "__main__":
    raise SystemExit(main())
