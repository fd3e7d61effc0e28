"""Shared pytest fixtures for the babel-scaffold test suite.

Provides reusable fixtures for:
- Temporary project directories and matching ``Config`` objects
- A stub version lookup with fixed versions and optional per-package delays
- A recording command runner that stands in for ``npm init -y``
- A scripted prompter that answers questions from a list
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from babel_scaffold.config import Config
from babel_scaffold.errors import ProcessError, VersionLookupError
from babel_scaffold.prompts import Question


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty directory to scaffold into (auto-cleanup)."""
    project_dir = tmp_path / "my-lib"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def project_config(tmp_project_dir: Path) -> Config:
    return Config(project_dir=tmp_project_dir)


# ---------------------------------------------------------------------------
# Version lookup
# ---------------------------------------------------------------------------

class StubLookup:
    """In-memory ``VersionLookup``.

    Unknown packages resolve to ``default`` (or fail when ``default`` is
    ``None``).  ``delays`` maps package names to seconds to sleep before
    answering, which lets tests force out-of-order completion.
    """

    def __init__(
        self,
        versions: dict[str, str] | None = None,
        *,
        default: str | None = "1.0.0",
        delays: dict[str, float] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.versions = versions or {}
        self.default = default
        self.delays = delays or {}
        self.failing = failing or set()
        self.calls: list[str] = []
        self.completed: list[str] = []

    async def lookup(self, package: str) -> str:
        self.calls.append(package)
        await asyncio.sleep(self.delays.get(package, 0))
        if package in self.failing:
            raise VersionLookupError(package, "package not found in registry")
        version = self.versions.get(package, self.default)
        if version is None:
            raise VersionLookupError(package, "package not found in registry")
        self.completed.append(package)
        return version


@pytest.fixture
def stub_lookup() -> StubLookup:
    return StubLookup()


@pytest.fixture
def make_lookup():
    """Factory fixture: ``make_lookup(versions, delays=..., failing=...)``."""
    return StubLookup


# ---------------------------------------------------------------------------
# Command runner
# ---------------------------------------------------------------------------

DEFAULT_NPM_INIT_MANIFEST: dict[str, Any] = {
    "name": "my-lib",
    "version": "1.0.0",
    "description": "",
    "main": "index.js",
    "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
    "keywords": [],
    "author": "",
    "license": "ISC",
}


class RecordingRunner:
    """Stands in for the process collaborator.

    ``npm init -y`` writes ``DEFAULT_NPM_INIT_MANIFEST`` into the working
    directory, like the real command.  Set ``stderr`` to make every command
    fail the way ``run_checked`` does.
    """

    def __init__(self, stderr: str = "") -> None:
        self.stderr = stderr
        self.calls: list[tuple[list[str], Path]] = []

    async def __call__(self, cmd: list[str], cwd: Path) -> str:
        self.calls.append((cmd, cwd))
        await asyncio.sleep(0)
        if self.stderr:
            raise ProcessError(" ".join(cmd), self.stderr)
        if cmd[1:] == ["init", "-y"]:
            manifest = Path(cwd) / "package.json"
            manifest.write_text(json.dumps(DEFAULT_NPM_INIT_MANIFEST, indent=2), encoding="utf-8")
            return f"Wrote to {manifest}"
        return ""


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_runner():
    """Factory fixture: ``make_runner(stderr="...")``."""
    return RecordingRunner


# ---------------------------------------------------------------------------
# Prompting
# ---------------------------------------------------------------------------

class ScriptedPrompter:
    """Answers questions from a fixed list and records what was asked."""

    def __init__(self, answers: list[Any]) -> None:
        self.answers = list(answers)
        self.asked: list[Question] = []

    async def ask(self, question: Question) -> Any:
        self.asked.append(question)
        return self.answers.pop(0)


@pytest.fixture
def scripted_prompter():
    """Factory fixture: ``scripted_prompter([answer, ...])``."""
    return ScriptedPrompter
