"""Gate runner and CLI tests.

These tests verify:
- every check runs even after earlier failures
- a failing run carries a non-empty report listing release and archive files
- the temporary tree is removed after the run
- CLI exit codes: 0 GO, 1 NO-GO, 3 usage/internal error
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Callable

import pytest

pytestmark = pytest.mark.repo_local

from release_fixtures import HUB, VERSION, FakeExecutor, write_file

import gate.release_verify as release_verify
from gate.logic.release_checks.context import TMPDIR_ENV, ReleaseInfo
from gate.logic.release_checks.registry import check_names, get_checks, select_checks
from relcheck import cli
from relcheck.core.errors import CheckFailed, ManifestError, ReleaseCheckError


MANIFEST = f"""\
version: {VERSION}
docker: {HUB}
dependencies:
  api: {{sha: "0a1b"}}
  client-go: {{sha: "0a1c"}}
  istio: {{sha: "0a1d"}}
  proxy: {{sha: "0a1e"}}
"""


def _ok(_: ReleaseInfo) -> None:
    return None


def _boom(_: ReleaseInfo) -> None:
    raise ReleaseCheckError("boom")


def _crash(_: ReleaseInfo) -> None:
    raise KeyError("unexpected")


@pytest.fixture
def release_dir(tmp_path: Path) -> Path:
    d = tmp_path / "release"
    write_file(d / "manifest.yaml", MANIFEST)
    return d


@pytest.fixture
def tmp_parent(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    parent = tmp_path / "scratch-parent"
    monkeypatch.setenv(TMPDIR_ENV, str(parent))
    return parent


# ---------------------------------------------------------------------------
# run_all
# ---------------------------------------------------------------------------

def test_run_all_does_not_short_circuit(make_info: Callable[..., ReleaseInfo]) -> None:
    info = make_info()
    write_file(info.release_dir / "docker" / "pilot-debug.tar.gz")
    checks = [("A", _ok), ("B", _boom), ("C", _ok), ("D", _crash), ("E", _ok)]

    succeeded, report, failures = release_verify.run_all(info, checks)

    assert succeeded == ["A", "C", "E"]
    assert [f.check_name for f in failures] == ["B", "D"]
    assert all(isinstance(f, CheckFailed) for f in failures)
    assert "boom" in str(failures[0])
    assert isinstance(failures[1].cause, KeyError)
    assert report.startswith("Checks failed. Release info:")
    assert "Files in release" in report
    assert "pilot-debug.tar.gz" in report
    assert "Files in archive" in report


def test_run_all_clean_run_has_empty_report(make_info: Callable[..., ReleaseInfo]) -> None:
    succeeded, report, failures = release_verify.run_all(make_info(), [("A", _ok), ("B", _ok)])
    assert succeeded == ["A", "B"]
    assert report == ""
    assert failures == []


def test_list_files_reports_missing_root(tmp_path: Path) -> None:
    listing = release_verify.list_files(tmp_path / "absent")
    assert listing.startswith("! ")


def _deny_scandir(monkeypatch: pytest.MonkeyPatch, denied: str) -> None:
    real_scandir = os.scandir

    def _scandir(path):
        if Path(path).name == denied:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", _scandir)


def test_list_files_records_unreadable_subdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_file(tmp_path / "sub" / "hidden.txt")
    write_file(tmp_path / "z.txt")
    _deny_scandir(monkeypatch, "sub")

    lines = release_verify.list_files(tmp_path).splitlines()

    assert lines == [
        f"- {tmp_path}",
        f"- {tmp_path / 'sub'}",
        f"! [Errno 13] Permission denied: '{tmp_path / 'sub'}'",
        f"- {tmp_path / 'z.txt'}",
    ]


def test_run_all_report_survives_unreadable_dir(
    make_info: Callable[..., ReleaseInfo], monkeypatch: pytest.MonkeyPatch
) -> None:
    info = make_info()
    write_file(info.release_dir / "sub" / "hidden.txt")
    _deny_scandir(monkeypatch, "sub")

    succeeded, report, failures = release_verify.run_all(info, [("A", _ok), ("B", _boom)])

    assert succeeded == ["A"]
    assert [f.check_name for f in failures] == ["B"]
    assert "! [Errno 13] Permission denied" in report
    assert "hidden.txt" not in report
    assert "Files in archive" in report


def test_list_files_is_sorted_and_recursive(tmp_path: Path) -> None:
    write_file(tmp_path / "b" / "inner.txt")
    write_file(tmp_path / "a.txt")
    lines = release_verify.list_files(tmp_path).splitlines()
    assert lines == [
        f"- {tmp_path}",
        f"- {tmp_path / 'a.txt'}",
        f"- {tmp_path / 'b'}",
        f"- {tmp_path / 'b' / 'inner.txt'}",
    ]


# ---------------------------------------------------------------------------
# check_release
# ---------------------------------------------------------------------------

def test_empty_release_is_a_single_failure() -> None:
    succeeded, report, failures = release_verify.check_release("")
    assert succeeded == []
    assert report == ""
    assert [str(f) for f in failures] == ["--release must be passed"]


def test_check_release_extracts_and_cleans_up(release_dir: Path, tmp_parent: Path) -> None:
    fake = FakeExecutor()
    succeeded, report, failures = release_verify.check_release(
        release_dir, executor=fake, check_names=["Licenses", "Manifest"]
    )

    assert succeeded == ["Manifest"]
    assert [f.check_name for f in failures] == ["Licenses"]
    assert "Files in release" in report
    assert fake.calls[0][:2] == ["tar", "xvf"]
    assert fake.calls[0][2] == str(release_dir / f"istio-{VERSION}-linux-amd64.tar.gz")
    assert list(tmp_parent.iterdir()) == []


def test_check_release_extraction_failure_is_not_fatal(release_dir: Path, tmp_parent: Path) -> None:
    fake = FakeExecutor().on(["tar"], returncode=2)
    succeeded, _, failures = release_verify.check_release(release_dir, executor=fake, check_names=["Manifest"])
    assert succeeded == ["Manifest"]
    assert failures == []


def test_check_release_keep_temp(release_dir: Path, tmp_parent: Path) -> None:
    release_verify.check_release(release_dir, executor=FakeExecutor(), check_names=["Manifest"], keep_temp=True)
    kept = list(tmp_parent.iterdir())
    assert len(kept) == 1
    assert kept[0].name.startswith("release-test")


def test_check_release_missing_manifest(tmp_path: Path, tmp_parent: Path) -> None:
    (tmp_path / "empty").mkdir()
    with pytest.raises(ManifestError):
        release_verify.check_release(tmp_path / "empty", executor=FakeExecutor())


# ---------------------------------------------------------------------------
# registry
# ---------------------------------------------------------------------------

def test_registry_names_are_unique_and_ordered() -> None:
    names = check_names()
    assert len(names) == len(set(names)) == len(get_checks())
    assert names[0] == "IstioctlArchive"
    assert "ArchiveChecksums" in names


def test_select_checks_keeps_registry_order() -> None:
    assert [n for n, _ in select_checks(["Rpm", "Manifest"])] == ["Manifest", "Rpm"]


def test_select_checks_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="NoSuchCheck"):
        select_checks(["Manifest", "NoSuchCheck"])


# ---------------------------------------------------------------------------
# verdict + CLI
# ---------------------------------------------------------------------------

def test_verdict_marks_release_level_failures() -> None:
    obj = release_verify.verdict_obj(
        release="", succeeded=[], failures=[ReleaseCheckError("--release must be passed")]
    )
    assert obj["verdict"] == "NO-GO"
    assert obj["results"] == [{"check_id": "release", "status": "FAIL", "message": "--release must be passed"}]


@pytest.fixture
def fake_subprocess(monkeypatch: pytest.MonkeyPatch) -> FakeExecutor:
    fake = FakeExecutor()
    monkeypatch.setattr(release_verify, "SubprocessExecutor", lambda **_: fake)
    return fake


def test_cli_checks_lists_registry(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["checks"]) == 0
    assert capsys.readouterr().out.splitlines() == check_names()


def test_cli_validate_requires_release(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["validate"]) == 3
    assert "--release must be passed" in capsys.readouterr().err


def test_cli_validate_go_writes_verdict(
    release_dir: Path, tmp_parent: Path, tmp_path: Path, fake_subprocess: FakeExecutor
) -> None:
    out = tmp_path / "out" / "verdict.json"
    rc = cli.main(["validate", "--release", str(release_dir), "--check", "Manifest", "--out", str(out)])

    assert rc == 0
    verdict = json.loads(out.read_text(encoding="utf-8"))
    assert verdict["verdict"] == "GO"
    assert verdict["succeeded"] == ["Manifest"]
    assert verdict["results"] == [{"check_id": "Manifest", "status": "PASS", "message": "ok"}]


def test_cli_validate_no_go_writes_report(
    release_dir: Path, tmp_parent: Path, tmp_path: Path, fake_subprocess: FakeExecutor
) -> None:
    out = tmp_path / "verdict.json"
    report = tmp_path / "report.txt"
    rc = cli.main(
        [
            "validate",
            "--release",
            str(release_dir),
            "--check",
            "Licenses",
            "--check",
            "Manifest",
            "--out",
            str(out),
            "--report-out",
            str(report),
        ]
    )

    assert rc == 1
    verdict = json.loads(out.read_text(encoding="utf-8"))
    assert verdict["verdict"] == "NO-GO"
    assert verdict["failures"][0].startswith("check Licenses failed")
    assert "Files in release" in report.read_text(encoding="utf-8")


def test_cli_validate_unknown_check_is_usage_error(
    release_dir: Path, tmp_parent: Path, fake_subprocess: FakeExecutor
) -> None:
    assert cli.main(["validate", "--release", str(release_dir), "--check", "Bogus"]) == 3


def test_cli_validate_bad_manifest_is_usage_error(
    tmp_path: Path, tmp_parent: Path, fake_subprocess: FakeExecutor
) -> None:
    rel = tmp_path / "rel"
    write_file(rel / "manifest.yaml", "docker: x\n")
    assert cli.main(["validate", "--release", str(rel)]) == 3
    assert fake_subprocess.calls == []
