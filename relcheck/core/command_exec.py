from __future__ import annotations

import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from relcheck.core.errors import ExternalToolFailure


@dataclass(frozen=True)
class CommandResult:
    argv: list[str]
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult: ...


def format_command_string(argv: Sequence[str]) -> str:
    return shlex.join([str(a) for a in argv])


def _command_env(overrides: Mapping[str, str] | None) -> dict[str, str]:
    env = dict(os.environ)
    # Deterministic parsing: avoid localized output.
    env.setdefault("LANG", "C")
    env.setdefault("LC_ALL", "C")
    if overrides:
        env.update(overrides)
    return env


class SubprocessExecutor:
    """Runs external tools synchronously and captures their output.

    OS errors (missing binary, permission) and timeouts are raised as
    ExternalToolFailure; a non-zero exit is returned, not raised.
    """

    def __init__(self, *, timeout: float | None = None, echo: bool = True) -> None:
        self.timeout = timeout
        self.echo = echo

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        args = [str(a) for a in argv]
        if self.echo:
            print(f"[relcheck] + {format_command_string(args)}", file=sys.stderr)
        try:
            cp = subprocess.run(
                args,
                cwd=str(cwd) if cwd is not None else None,
                env=_command_env(env),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalToolFailure(
                Path(args[0]).name, args, detail=f"timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise ExternalToolFailure(Path(args[0]).name, args, detail=str(e)) from e
        return CommandResult(argv=args, returncode=cp.returncode, stdout=cp.stdout, stderr=cp.stderr)


def run_checked(
    executor: CommandExecutor,
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> bytes:
    """Run argv and return stdout; non-zero exit raises ExternalToolFailure."""

    result = executor.run(argv, cwd=cwd, env=env)
    if not result.ok:
        raise ExternalToolFailure(
            Path(str(argv[0])).name,
            argv,
            returncode=result.returncode,
            stderr=result.stderr.decode("utf-8", errors="replace"),
        )
    return result.stdout
