"""Error taxonomy for babel-scaffold.

Every failure during a scaffold run surfaces as one of these exceptions.
Nothing inside the scaffolder catches or retries them; they propagate to the
CLI entry point, which reports the error and exits non-zero.  A failed run
may leave a partially scaffolded directory behind.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by babel-scaffold."""


class ProcessError(ScaffoldError):
    """Raised when an external command writes anything to stderr.

    The exit code is not consulted: a command that succeeds but prints a
    warning on stderr is still treated as a failure.
    """

    def __init__(self, command: str, stderr: str, returncode: int | None = None) -> None:
        self.command = command
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(f"Command failed: {command}\n{stderr}")


class VersionLookupError(ScaffoldError, LookupError):
    """Raised when a package version cannot be looked up."""

    def __init__(self, package: str, reason: str) -> None:
        self.package = package
        self.reason = reason
        super().__init__(f"Could not resolve version of '{package}': {reason}")


class FileSystemError(ScaffoldError):
    """Raised when a scaffold file or directory cannot be created, read or written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
