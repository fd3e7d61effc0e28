"""babel-scaffold configuration.

Typed settings for a scaffold run. Everything the user is asked interactively
lives in ``ScaffoldOptions``; this model only holds environment-level knobs
(where to scaffold, which registry to ask, which npm binary to run).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


class Config(BaseModel):
    """Global babel-scaffold configuration.

    Instances are typically created once by the CLI entry point (usually via
    :meth:`from_env`) and handed to ``ProjectGenerator``.
    """

    project_dir: Path = Field(default_factory=Path.cwd)
    registry_url: str = Field(default=DEFAULT_REGISTRY_URL)
    registry_timeout: float = Field(
        default=30.0, ge=1, description="Per-request registry timeout in seconds"
    )
    npm_executable: str = Field(default="npm")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def manifest_path(self) -> Path:
        """Path to the project's ``package.json``."""
        return self.project_dir / "package.json"

    @property
    def src_dir(self) -> Path:
        return self.project_dir / "src"

    @property
    def test_dir(self) -> Path:
        return self.project_dir / "test"

    @property
    def public_dir(self) -> Path:
        return self.project_dir / "public"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BABEL_SCAFFOLD_PROJECT_DIR, BABEL_SCAFFOLD_REGISTRY_URL,
            BABEL_SCAFFOLD_REGISTRY_TIMEOUT, BABEL_SCAFFOLD_NPM.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BABEL_SCAFFOLD_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["BABEL_SCAFFOLD_PROJECT_DIR"])
        if os.environ.get("BABEL_SCAFFOLD_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["BABEL_SCAFFOLD_REGISTRY_URL"]
        if os.environ.get("BABEL_SCAFFOLD_REGISTRY_TIMEOUT"):
            kwargs["registry_timeout"] = float(os.environ["BABEL_SCAFFOLD_REGISTRY_TIMEOUT"])
        if os.environ.get("BABEL_SCAFFOLD_NPM"):
            kwargs["npm_executable"] = os.environ["BABEL_SCAFFOLD_NPM"]
        return cls(**kwargs)
