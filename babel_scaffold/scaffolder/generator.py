"""Main scaffolding orchestrator.

Takes a ``ScaffoldOptions`` and turns the configured project directory into a
Babel project: source directories, ``.babelrc``, README, ``.gitignore``,
starter sources and a ``package.json`` carrying pinned dependencies and the
derived npm scripts.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

from pydantic import BaseModel, Field

from babel_scaffold.config import Config
from babel_scaffold.registry_client import NpmRegistryClient, VersionLookup
from babel_scaffold.utils import (
    load_json,
    make_dir,
    print_step,
    run_checked,
    save_json,
    write_text,
)

from .manifest import merge_manifest
from .models import ResolvedDependency, ScaffoldOptions, derive_dependencies
from .resolver import VersionResolver
from .templates import TemplateRenderer, render_project_files

CommandRunner = Callable[[list[str], Path], Awaitable[str]]


class ScaffoldResult(BaseModel):
    """What a scaffold run produced."""

    project_dir: Path
    created_manifest: bool = Field(default=False, description="package.json was created by npm init")
    directories: list[Path] = Field(default_factory=list, description="Directories created by this run")
    files: list[Path] = Field(default_factory=list, description="Files written, package.json excluded")
    dependencies: list[ResolvedDependency] = Field(default_factory=list)
    scripts: dict[str, str] = Field(default_factory=dict, description="Script table after the merge")


class ProjectGenerator:
    """Scaffolds a Babel project into ``config.project_dir``.

    A run forks two branches before awaiting either: ``npm init -y`` (only when
    there is no ``package.json`` yet) and version resolution for every derived
    dependency. Directories and template files are written while both are in
    flight. Once both settle, ``package.json`` is read, merged and written back
    a single time.

    Nothing is rolled back on failure. An error from either branch or from a
    file write aborts the run, possibly leaving some files written and the
    manifest unmerged. The other branch is cancelled and awaited first; a
    running ``npm init`` is killed.
    """

    def __init__(
        self,
        options: ScaffoldOptions,
        config: Config | None = None,
        *,
        lookup: VersionLookup | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.options = options
        self.config = config or Config()
        self.lookup = lookup or NpmRegistryClient(
            base_url=self.config.registry_url,
            timeout=self.config.registry_timeout,
        )
        self.resolver = VersionResolver(self.lookup)
        self.runner = runner or run_checked
        self.renderer = TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self) -> ScaffoldResult:
        """Run the scaffold and return a summary of what was produced."""
        root = self.config.project_dir
        manifest_path = self.config.manifest_path
        deps = derive_dependencies(self.options)

        resolution = asyncio.create_task(self.resolver.resolve_dependencies(deps))
        manifest_init: asyncio.Task[str] | None = None
        if not manifest_path.exists():
            manifest_init = asyncio.create_task(self._init_manifest(root))

        try:
            directories = await self._create_directories()
            files = await self._write_files(root)

            print_step("Getting versions of dependencies")
            resolved = await resolution
            if manifest_init is not None:
                await manifest_init
        except BaseException:
            branches = [t for t in (resolution, manifest_init) if t is not None]
            for task in branches:
                task.cancel()
            # Wait for cancelled branches to settle and retrieve their errors.
            await asyncio.gather(*branches, return_exceptions=True)
            raise

        manifest = merge_manifest(
            load_json(manifest_path), self.options, resolved, source=manifest_path
        )
        print_step("Writing dependencies to package.json")
        await save_json(manifest, manifest_path)

        return ScaffoldResult(
            project_dir=root,
            created_manifest=manifest_init is not None,
            directories=directories,
            files=files,
            dependencies=resolved,
            scripts=dict(manifest["scripts"]),
        )

    # -- Steps -------------------------------------------------------------

    async def _init_manifest(self, root: Path) -> str:
        """Create a default ``package.json`` with ``npm init -y``."""
        return await self.runner([self.config.npm_executable, "init", "-y"], root)

    async def _create_directories(self) -> list[Path]:
        """Create ``src/``, ``test/`` and ``public/`` as the options require.

        ``public/`` is created without an existence check, so scaffolding a UI
        project twice fails here with ``FileSystemError``.
        """
        created: list[Path] = []
        if await make_dir(self.config.src_dir):
            created.append(self.config.src_dir)
        if self.options.testing and await make_dir(self.config.test_dir):
            created.append(self.config.test_dir)
        if self.options.ui_framework:
            await make_dir(self.config.public_dir, exist_ok=False)
            created.append(self.config.public_dir)
        return created

    async def _write_files(self, root: Path) -> list[Path]:
        """Render every template file and write it under *root*, one at a time."""
        project_name = root.resolve().name
        written: list[Path] = []
        for rendered in render_project_files(self.options, project_name, self.renderer):
            written.append(await write_text(root / rendered.path, rendered.content))
        return written
