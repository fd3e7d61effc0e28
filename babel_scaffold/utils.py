"""Shared utility functions for babel-scaffold.

Provides async command execution, JSON I/O for the package manifest,
file-system helpers and Rich-based console reporting.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from babel_scaffold.errors import FileSystemError, ProcessError

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    There is no timeout. If the awaiting task is cancelled, the child process
    is killed before the cancellation propagates.

    Args:
        cmd: Program and arguments; no shell is involved.
        cwd: Working directory for the child process.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


async def run_checked(
    cmd: list[str],
    cwd: str | Path | None = None,
    echo: bool = True,
) -> str:
    """Run a command and return its stdout.

    Any output on stderr counts as failure, whatever the exit code. Tools that
    print warnings to stderr (npm does) therefore fail the run as well.

    Raises:
        ProcessError: If the command wrote anything to stderr.
    """
    if echo:
        console.print(f"[dim]$ {escape(_format_command(cmd))}[/dim]")

    returncode, stdout, stderr = await run_command(cmd, cwd=cwd)
    if stderr:
        raise ProcessError(_format_command(cmd), stderr, returncode=returncode)
    return stdout


def _format_command(cmd: list[str]) -> str:
    return " ".join(cmd)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load a JSON file whose top-level value is an object.

    Key order is preserved, so a document written back with :func:`save_json`
    keeps its original layout.

    Raises:
        FileSystemError: If the file cannot be read, is not valid JSON, or
            does not contain a JSON object.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(file_path, f"cannot read file ({exc.strerror or exc})") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FileSystemError(file_path, f"malformed JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(data, dict):
        raise FileSystemError(file_path, "expected a JSON object at the top level")
    return data


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* the way npm lays out ``package.json`` (two-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    The write is performed in a worker thread so the event loop keeps running.

    Raises:
        FileSystemError: If the file cannot be written.
    """
    await write_text(path, dump_json(data))


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


async def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path* off the event loop.

    Raises:
        FileSystemError: If the file cannot be written.
    """
    file_path = Path(path)
    try:
        await asyncio.to_thread(file_path.write_text, content, "utf-8")
    except OSError as exc:
        raise FileSystemError(file_path, f"cannot write file ({exc.strerror or exc})") from exc
    return file_path


async def make_dir(path: str | Path, *, exist_ok: bool = True) -> bool:
    """Create a single directory off the event loop.

    Returns:
        ``True`` if the directory was created, ``False`` if it already existed.

    Raises:
        FileSystemError: If the directory exists and *exist_ok* is false, or
            it cannot be created.
    """
    dir_path = Path(path)
    if exist_ok and dir_path.is_dir():
        return False
    try:
        await asyncio.to_thread(dir_path.mkdir)
    except FileExistsError as exc:
        raise FileSystemError(dir_path, "directory already exists") from exc
    except OSError as exc:
        raise FileSystemError(dir_path, f"cannot create directory ({exc.strerror or exc})") from exc
    return True


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a progress line for one step of the run."""
    console.print(f"[cyan]>[/cyan] {message}")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
