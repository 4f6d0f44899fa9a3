from __future__ import annotations

from typing import Callable, Sequence

from .context import ReleaseInfo
from . import (
    archive_checksums,
    completion_files,
    ctl_archive,
    ctl_profiles,
    ctl_standalone,
    docker_images,
    grafana,
    helm_chart_versions,
    helm_values,
    licenses,
    manifest_fields,
    os_packages,
    proxy_version,
)


CheckFn = Callable[[ReleaseInfo], None]


def get_checks() -> list[tuple[str, CheckFn]]:
    # Checks are independent; the order only fixes report ordering.
    return [
        ("IstioctlArchive", ctl_archive.run),
        ("IstioctlStandalone", ctl_standalone.run),
        ("TestDocker", docker_images.run),
        ("HelmVersionsIstio", helm_values.run),
        ("HelmChartVersions", helm_chart_versions.run),
        ("IstioctlProfiles", ctl_profiles.run),
        ("Manifest", manifest_fields.run),
        ("Licenses", licenses.run),
        ("Grafana", grafana.run),
        ("CompletionFiles", completion_files.run),
        ("ProxyVersion", proxy_version.run),
        ("Debian", os_packages.run_debian),
        ("Rpm", os_packages.run_rpm),
        ("ArchiveChecksums", archive_checksums.run),
    ]


def check_names() -> list[str]:
    return [name for name, _ in get_checks()]


def select_checks(names: Sequence[str]) -> list[tuple[str, CheckFn]]:
    """Subset of the registry in registry order; unknown names raise ValueError."""

    checks = get_checks()
    known = {name for name, _ in checks}
    unknown = [n for n in names if n not in known]
    if unknown:
        raise ValueError(f"unknown check(s): {', '.join(unknown)}")
    wanted = set(names)
    return [(name, fn) for name, fn in checks if name in wanted]
