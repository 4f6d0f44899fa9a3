from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from relcheck.core.errors import ManifestError, ParseError
from relcheck.core.values import parse_values, type_name


MANIFEST_FILENAME = "manifest.yaml"
DEFAULT_ARCHITECTURES = ("linux/amd64",)


@dataclass(frozen=True)
class Dependency:
    sha: str = ""
    git: str = ""
    branch: str = ""


@dataclass(frozen=True)
class Manifest:
    """Read-only view of the manifest.yaml emitted by the release build."""

    version: str
    docker: str
    architectures: list[str] = field(default_factory=lambda: list(DEFAULT_ARCHITECTURES))
    # None marks a dependency that is declared but carries no data.
    dependencies: dict[str, Dependency | None] = field(default_factory=dict)
    dashboards: dict[str, Any] = field(default_factory=dict)
    directory: str = ""


def _require_non_empty_string(value: Any, *, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ManifestError(f"{label} missing/invalid")
    return value.strip()


def _optional_string(value: Any, *, label: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ManifestError(f"{label} must be a string, got {type_name(value)}")
    return value


def _parse_architectures(value: Any) -> list[str]:
    if value is None:
        return list(DEFAULT_ARCHITECTURES)
    if not isinstance(value, list):
        raise ManifestError("architectures must be a list")

    out: list[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or "/" not in item:
            raise ManifestError(f"architectures[{i}] must be an os/arch string")
        out.append(item)
    return out


def _parse_dependencies(value: Any) -> dict[str, Dependency | None]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError("dependencies must be a mapping")

    out: dict[str, Dependency | None] = {}
    for name, dep in value.items():
        label = f"dependencies.{name}"
        if dep is None:
            out[str(name)] = None
            continue
        if not isinstance(dep, dict):
            raise ManifestError(f"{label} must be a mapping")
        out[str(name)] = Dependency(
            sha=_optional_string(dep.get("sha"), label=f"{label}.sha"),
            git=_optional_string(dep.get("git"), label=f"{label}.git"),
            branch=_optional_string(dep.get("branch"), label=f"{label}.branch"),
        )
    return out


def manifest_from_obj(obj: Any) -> Manifest:
    if not isinstance(obj, dict):
        raise ManifestError("manifest must be a mapping")

    dashboards = obj.get("dashboards")
    if dashboards is None:
        dashboards = {}
    if not isinstance(dashboards, dict):
        raise ManifestError("dashboards must be a mapping")

    return Manifest(
        version=_require_non_empty_string(obj.get("version"), label="version"),
        docker=_require_non_empty_string(obj.get("docker"), label="docker"),
        architectures=_parse_architectures(obj.get("architectures")),
        dependencies=_parse_dependencies(obj.get("dependencies")),
        dashboards={str(k): v for k, v in dashboards.items()},
        directory=_optional_string(obj.get("directory"), label="directory"),
    )


def load_manifest(path: Path) -> Manifest:
    if not path.exists() or not path.is_file():
        raise ManifestError(f"manifest missing/invalid: {path}")

    try:
        obj = parse_values(path.read_bytes(), source=str(path))
    except ParseError as e:
        raise ManifestError(str(e)) from e

    return manifest_from_obj(obj)
