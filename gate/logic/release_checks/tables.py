"""Expected release contents.

Pure data: the checks read these tables and carry no filenames of their own.
"""

from __future__ import annotations


PRODUCT_NAME = "istio"
CLI_NAME = "istioctl"
PRIMARY_PLATFORM = "linux-amd64"
DEFAULT_ARCH = "amd64"

CLI_VERSION_ARGS = ("version", "--remote=false", "--short", "-ojson")
IMAGE_VERSION_ARGS = ("version", "--short", "-ojson")

EXPECTED_IMAGES = (
    "pilot-distroless",
    "pilot-debug",
    "install-cni-debug",
    "ztunnel-debug",
    "ztunnel-distroless",
    "proxyv2-debug",
    "proxyv2-distroless",
)

# Image tarball loaded to check the control-plane version, and the repo it tags.
PROXY_IMAGE_TARBALL = "proxyv2-debug.tar.gz"
PROXY_IMAGE_NAME = "proxyv2"

# chart name -> values sub-path holding hub/tag ("none": chart has no hub/tag).
CHART_HUB_TAG_PATHS = {
    "cni": "_internal_defaults_do_not_set.global",
    "ztunnel": "_internal_defaults_do_not_set",
    "istiod": "_internal_defaults_do_not_set.global",
    "base": "none",
    "gateway": "none",
}
NO_HUB_TAG = "none"

# Values files inside the unpacked archive, grouped by hub/tag sub-path.
SOURCE_VALUES_FILES = (
    (
        "_internal_defaults_do_not_set.global",
        (
            "manifests/charts/gateways/istio-egress/values.yaml",
            "manifests/charts/gateways/istio-ingress/values.yaml",
            "manifests/charts/istio-cni/values.yaml",
            "manifests/charts/istio-control/istio-discovery/values.yaml",
        ),
    ),
    (
        "_internal_defaults_do_not_set",
        ("manifests/charts/ztunnel/values.yaml",),
    ),
)

INSTALL_PROFILES = ("manifests/profiles/default.yaml",)
PROFILE_TAG_PATH = ("spec", "tag")
PROFILE_HUB_PATH = ("spec", "hub")

REQUIRED_DEPENDENCIES = ("api", "client-go", "istio", "proxy")

EXPECTED_LICENSES = (
    "istio.tar.gz",
    "client-go.tar.gz",
    "tools.tar.gz",
    "test-infra.tar.gz",
    "release-builder.tar.gz",
)

COMPLETION_FILES = ("istioctl.bash", "_istioctl")

DASHBOARD_SUFFIX = ".json"

DEBIAN_PACKAGE = ("deb", "istio-sidecar.deb")
RPM_PACKAGE = ("rpm", "istio-sidecar.rpm")

ARCHIVE_SUFFIXES = (".tar.gz", ".zip")
CHECKSUM_SUFFIX = ".sha256"


def primary_archive_name(version: str) -> str:
    return f"{PRODUCT_NAME}-{version}-{PRIMARY_PLATFORM}.tar.gz"


def standalone_cli_archive_name(version: str) -> str:
    return f"{CLI_NAME}-{version}-{PRIMARY_PLATFORM}.tar.gz"


def archive_root_name(version: str) -> str:
    return f"{PRODUCT_NAME}-{version}"


def chart_archive_name(chart: str, version: str) -> str:
    return f"{chart}-{version}.tgz"


def image_tarball_name(image: str, arch: str) -> str:
    suffix = "" if arch == DEFAULT_ARCH else f"-{arch}"
    return f"{image}{suffix}.tar.gz"
