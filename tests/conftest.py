from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from release_fixtures import VERSION, FakeExecutor, default_manifest

from gate.logic.release_checks.context import ReleaseInfo


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def make_info(tmp_path: Path, fake_executor: FakeExecutor) -> Callable[..., ReleaseInfo]:
    """Factory for a ReleaseInfo over empty release/archive/scratch dirs under tmp_path."""

    def _make(**manifest_overrides: Any) -> ReleaseInfo:
        release_dir = tmp_path / "release"
        archive_dir = tmp_path / "work" / f"istio-{manifest_overrides.get('version', VERSION)}"
        scratch_dir = tmp_path / "work" / "scratch"
        for d in (release_dir, archive_dir, scratch_dir):
            d.mkdir(parents=True, exist_ok=True)
        return ReleaseInfo(
            manifest=default_manifest(**manifest_overrides),
            release_dir=release_dir,
            archive_dir=archive_dir,
            scratch_dir=scratch_dir,
            tmp_dir=tmp_path / "work",
            executor=fake_executor,
        )

    return _make
