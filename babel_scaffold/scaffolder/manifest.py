"""Merging resolved dependencies and derived scripts into ``package.json``.

The merge only ever adds or overwrites keys inside ``dependencies``,
``devDependencies`` and ``scripts``. Everything else in the manifest is left
exactly as it was, and running the merge again with the same inputs gives
the same document.

Scripts come from ``SCRIPT_RULES``, an ordered table of independent rules.
Each rule names a script, a predicate over the options and the command to
write when the predicate holds. Rules are applied top to bottom, so a later
rule for the same script wins: the executable ``start`` rule sits after the
UI ``start`` rule and overrides it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from babel_scaffold.errors import FileSystemError

from .models import ResolvedDependency, ScaffoldOptions

Manifest = dict[str, Any]

UI_HOST_PAGE = "public/index.html"
ENTRY_SOURCE = "src/main.js"


@dataclass(frozen=True)
class ScriptRule:
    """Writes ``scripts[script]`` when ``applies(options)`` is true."""

    script: str
    applies: Callable[[ScaffoldOptions], bool]
    command: Callable[[ScaffoldOptions], str]


# ---------------------------------------------------------------------------
# Script commands
# ---------------------------------------------------------------------------

def _babel_build(opts: ScaffoldOptions) -> str:
    sources = "src/ test/ " if opts.testing else "src/ "
    return f"rimraf ./dist && babel {sources}-d dist --copy-files"


def _prepare(opts: ScaffoldOptions) -> str:
    command = "npm run build"
    if opts.type_checking:
        # Flow sources are copied next to the build output as .js.flow files.
        command += " && flow-copy-source src dist"
    return command


def _lint(opts: ScaffoldOptions) -> str:
    command = "eslint src/**"
    if opts.testing:
        command += " test/**"
    return command


SCRIPT_RULES: tuple[ScriptRule, ...] = (
    ScriptRule("build", lambda o: o.ui_framework, lambda o: f"parcel build {UI_HOST_PAGE}"),
    ScriptRule("build", lambda o: not o.ui_framework, _babel_build),
    ScriptRule("start", lambda o: o.ui_framework, lambda o: f"parcel {UI_HOST_PAGE}"),
    # Must stay after the UI start rule.
    ScriptRule("start", lambda o: o.executable, lambda o: f"babel-watch --watch src {ENTRY_SOURCE}"),
    ScriptRule("prepare", lambda o: o.publish, _prepare),
    ScriptRule("flow", lambda o: o.type_checking, lambda o: "flow"),
    ScriptRule("lint", lambda o: o.linting, _lint),
    ScriptRule(
        "flint",
        lambda o: o.type_checking and o.linting,
        lambda o: "npm run flow && npm run lint",
    ),
    ScriptRule(
        "test",
        lambda o: o.testing,
        lambda o: "npm run build && mocha dist/**/*.test.js",
    ),
)


def build_scripts(
    options: ScaffoldOptions,
    rules: Iterable[ScriptRule] = SCRIPT_RULES,
) -> dict[str, str]:
    """Apply *rules* in order and return the resulting script table."""
    scripts: dict[str, str] = {}
    for rule in rules:
        if rule.applies(options):
            scripts[rule.script] = rule.command(options)
    return scripts


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

MERGED_SECTIONS = ("dependencies", "devDependencies", "scripts")


def _section(manifest: Manifest, key: str) -> dict[str, Any]:
    """Return ``manifest[key]``, creating an empty mapping if it is missing."""
    if key not in manifest:
        manifest[key] = {}
    return manifest[key]


def merge_manifest(
    manifest: Manifest,
    options: ScaffoldOptions,
    resolved: Iterable[ResolvedDependency],
    source: str | Path = "package.json",
) -> Manifest:
    """Merge dependencies and scripts into *manifest* in place and return it.

    Raises:
        FileSystemError: If a merged section exists but is not a JSON object.
            *source* names the manifest in the error. The manifest is left
            untouched in that case.
    """
    for key in MERGED_SECTIONS:
        if key in manifest and not isinstance(manifest[key], dict):
            raise FileSystemError(source, f"'{key}' is not an object")

    dependencies = _section(manifest, "dependencies")
    dev_dependencies = _section(manifest, "devDependencies")
    sections = {"dependencies": dependencies, "devDependencies": dev_dependencies}

    for dep in resolved:
        sections[dep.kind.manifest_key][dep.name] = dep.version

    _section(manifest, "scripts").update(build_scripts(options))
    return manifest
