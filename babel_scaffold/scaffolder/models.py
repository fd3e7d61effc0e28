"""Pydantic v2 models for a scaffold run.

Defines the option set collected from the user, the dependency descriptors
derived from it, and the resolved form that is merged into ``package.json``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class DependencyKind(str, Enum):
    """Which ``package.json`` section a dependency belongs in."""
    RUNTIME = "runtime"
    DEVELOPMENT = "development"

    @property
    def manifest_key(self) -> str:
        """Name of the manifest section for this kind."""
        if self is DependencyKind.RUNTIME:
            return "dependencies"
        return "devDependencies"


# ---------------------------------------------------------------------------
# Option set
# ---------------------------------------------------------------------------

class ScaffoldOptions(BaseModel):
    """The answers that drive a scaffold run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    type_checking: bool = Field(default=False, description="Use Flow for type checking")
    linting: bool = Field(default=False, description="Use ESLint")
    testing: bool = Field(default=False, description="Use Mocha & Chai for tests")
    publish: bool = Field(default=False, description="Package will be published on npm")
    executable: bool = Field(default=False, description="Package runs rather than being imported")
    ui_framework: bool = Field(default=False, description="Use React bundled with Parcel")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

class DependencySpec(BaseModel):
    """A package to add to the manifest, tagged with its section."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Published package name")
    kind: DependencyKind = Field(default=DependencyKind.DEVELOPMENT)

    @classmethod
    def runtime(cls, name: str) -> "DependencySpec":
        return cls(name=name, kind=DependencyKind.RUNTIME)

    @classmethod
    def dev(cls, name: str) -> "DependencySpec":
        return cls(name=name, kind=DependencyKind.DEVELOPMENT)


class ResolvedDependency(BaseModel):
    """A dependency paired with the version constraint written to the manifest."""

    model_config = ConfigDict(frozen=True)

    spec: DependencySpec
    version: str = Field(..., description="Constraint such as '^6.26.0'")

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def kind(self) -> DependencyKind:
        return self.spec.kind


def derive_dependencies(options: ScaffoldOptions) -> list[DependencySpec]:
    """Return every package the options call for, in a stable order."""
    dev = DependencySpec.dev
    deps = [dev("babel-cli"), dev("babel-preset-env"), dev("rimraf")]

    if options.type_checking:
        deps += [dev("babel-preset-flow"), dev("flow-bin")]
        if options.publish:
            deps.append(dev("flow-copy-source"))
    if options.linting:
        deps.append(dev("eslint"))
        if options.type_checking:
            deps += [dev("eslint-plugin-flowtype"), dev("babel-eslint")]
    if options.testing:
        deps += [dev("mocha"), dev("chai")]
        if options.linting:
            deps.append(dev("eslint-plugin-mocha"))
    if options.publish:
        deps.append(dev("babel-plugin-add-module-exports"))
    if options.executable:
        deps.append(dev("babel-watch"))
    if options.ui_framework:
        deps += [
            DependencySpec.runtime("react"),
            DependencySpec.runtime("react-dom"),
            dev("babel-preset-react"),
            dev("parcel-bundler"),
        ]
    return deps
