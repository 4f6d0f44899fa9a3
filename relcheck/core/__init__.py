"""Lowest-level relcheck utilities.

Dependency direction rules:
- relcheck.core must not import gate.* or relcheck.cli
"""

from relcheck.core.command_exec import CommandExecutor, CommandResult, SubprocessExecutor, run_checked
from relcheck.core.errors import (
	AssertionFailure,
	CheckFailed,
	ExternalToolFailure,
	InvalidPath,
	ManifestError,
	ParseError,
	ReleaseCheckError,
	UnexpectedType,
)
from relcheck.core.hash import is_hex_sha256, sha256_bytes, sha256_file
from relcheck.core.jail import ensure_within_root, normalize_rel, resolve_rel_path
from relcheck.core.values import parse_values, resolve, split_prefix

__all__ = [
	"AssertionFailure",
	"CheckFailed",
	"CommandExecutor",
	"CommandResult",
	"ExternalToolFailure",
	"InvalidPath",
	"ManifestError",
	"ParseError",
	"ReleaseCheckError",
	"SubprocessExecutor",
	"UnexpectedType",
	"ensure_within_root",
	"is_hex_sha256",
	"normalize_rel",
	"parse_values",
	"resolve",
	"resolve_rel_path",
	"run_checked",
	"sha256_bytes",
	"sha256_file",
	"split_prefix",
]
