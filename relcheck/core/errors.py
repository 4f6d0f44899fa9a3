"""Error taxonomy shared by the document layer, the executor and the checks.

Every error a check can raise derives from ReleaseCheckError so the gate
runner can record it uniformly. Not-found is not an error: the resolver
returns None for it.
"""

from __future__ import annotations

from typing import Any, Sequence


class ReleaseCheckError(Exception):
    pass


class ParseError(ReleaseCheckError):
    """Malformed YAML/JSON input. Keeps the parser position when known."""

    def __init__(
        self,
        source: str,
        length: int,
        detail: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.source = source
        self.length = length
        self.detail = detail
        self.line = line
        self.column = column
        where = f"{source} ({length} bytes"
        if line is not None:
            where += f", line {line}"
            if column is not None:
                where += f", column {column}"
        where += ")"
        super().__init__(f"failed to parse {where}: {detail}")


class InvalidPath(ReleaseCheckError):
    def __init__(self, segment: str | None, path: Sequence[str], reason: str) -> None:
        self.segment = segment
        self.path = list(path)
        self.reason = reason
        super().__init__(f"{reason}: {segment!r} in {self.path}")


class UnexpectedType(ReleaseCheckError):
    def __init__(self, segment: str, path: Sequence[str], type_name: str) -> None:
        self.segment = segment
        self.path = list(path)
        self.type_name = type_name
        super().__init__(f"expected map or string, got {type_name} for {segment!r} in {self.path}")


class ExternalToolFailure(ReleaseCheckError):
    def __init__(
        self,
        tool: str,
        argv: Sequence[str],
        *,
        returncode: int | None = None,
        stderr: str = "",
        detail: str | None = None,
    ) -> None:
        self.tool = tool
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        if detail is None:
            detail = f"exit status {returncode}"
        msg = f"{tool} failed: {detail}"
        tail = stderr.strip()
        if tail:
            msg += f" :: {tail.splitlines()[-1]}"
        super().__init__(msg)


class AssertionFailure(ReleaseCheckError):
    """Expected-vs-actual comparison that did not hold."""

    def __init__(self, what: str, expected: Any, actual: Any) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: got {actual} expected {expected}")


class CheckFailed(ReleaseCheckError):
    def __init__(self, check_name: str, cause: BaseException) -> None:
        self.check_name = check_name
        self.cause = cause
        super().__init__(f"check {check_name} failed: {cause}")


class ManifestError(ReleaseCheckError):
    pass
