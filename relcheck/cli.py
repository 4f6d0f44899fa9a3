#!/usr/bin/env python3
"""relcheck CLI: release artifact validation.

This is the installable CLI entrypoint (console_scripts).

Subcommands:
- relcheck validate: Run the release checks against a built release
- relcheck checks: List registered check names
- relcheck about: Print package identity info

Exit codes:
- 0: success
- 1: check failed
- 3: usage/internal error
"""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, metadata, version


def cmd_validate(args: argparse.Namespace) -> int:
    from gate.release_verify import run_gate

    try:
        return run_gate(args, prefix="[relcheck validate]")
    except Exception as e:
        print(f"[relcheck validate] ERROR: {e}", file=sys.stderr)
        return 3


def cmd_checks(_: argparse.Namespace) -> int:
    from gate.logic.release_checks.registry import check_names

    for name in check_names():
        print(name)
    return 0


def cmd_about(_: argparse.Namespace) -> int:
    try:
        pkg_version = version("relcheck")
        summary = metadata("relcheck").get("Summary") or ""
    except PackageNotFoundError:
        pkg_version = "0.0.0"
        summary = ""

    print(f"relcheck {pkg_version}")
    if summary:
        print(summary)
    return 0


def main(argv: list[str] | None = None) -> int:
    from gate.release_verify import add_arguments

    parser = argparse.ArgumentParser(
        prog="relcheck",
        description="relcheck: validate built release artifacts against the release manifest",
    )
    subparsers = parser.add_subparsers(dest="command", help="Subcommand")

    # about
    subparsers.add_parser("about", help="Print package identity info")

    # checks
    subparsers.add_parser("checks", help="List registered check names")

    # validate
    p_validate = subparsers.add_parser("validate", help="Run release checks against a built release")
    add_arguments(p_validate)

    args = parser.parse_args(argv)

    if args.command == "about":
        return cmd_about(args)
    elif args.command == "checks":
        return cmd_checks(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 3


if __name__ == "__main__":
    sys.exit(main())
