"""relcheck: release artifact validation (core library + installable CLI).

This package holds the generic pieces (document traversal, command
execution, manifest model). Release-specific checks live in `gate`.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version


def __getattr__(name: str):
    if name == "__version__":
        try:
            return version("relcheck")
        except PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)
