from __future__ import annotations

from relcheck.core.errors import AssertionFailure, ReleaseCheckError

from . import tables
from .context import ReleaseInfo


def run(info: ReleaseInfo) -> None:
    deps = info.manifest.dependencies
    for repo in tables.REQUIRED_DEPENDENCIES:
        if repo not in deps:
            raise ReleaseCheckError(f"missing dependency: {repo}")
        dep = deps[repo]
        if dep is None or not dep.sha:
            raise ReleaseCheckError(f"got empty SHA for {repo}")

    # A build-time path must not leak into the published manifest.
    if info.manifest.directory != "":
        raise AssertionFailure("manifest directory must be hidden", "", info.manifest.directory)
