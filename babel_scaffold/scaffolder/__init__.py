"""babel-scaffold scaffolder -- turns a set of answers into a Babel project.

Quick usage::

    from babel_scaffold.scaffolder import ProjectGenerator, ScaffoldOptions

    options = ScaffoldOptions(type_checking=True, linting=True, testing=True)
    result = await ProjectGenerator(options).generate()

Key pieces:
    ScaffoldOptions    - The immutable option set collected from the user
    derive_dependencies - Packages the options call for, tagged runtime/dev
    VersionResolver    - Concurrent ``^version`` lookup for those packages
    merge_manifest     - Merges dependencies and scripts into package.json
    ProjectGenerator   - Orchestrates directories, files and the manifest
"""

from .generator import ProjectGenerator, ScaffoldResult
from .manifest import SCRIPT_RULES, ScriptRule, build_scripts, merge_manifest
from .models import (
    DependencyKind,
    DependencySpec,
    ResolvedDependency,
    ScaffoldOptions,
    derive_dependencies,
)
from .resolver import VersionResolver
from .templates import RenderedFile, TemplateRenderer, render_project_files

__all__ = [
    # Models
    "ScaffoldOptions",
    "DependencyKind",
    "DependencySpec",
    "ResolvedDependency",
    "derive_dependencies",
    # Resolution
    "VersionResolver",
    # Manifest
    "SCRIPT_RULES",
    "ScriptRule",
    "build_scripts",
    "merge_manifest",
    # Templates
    "RenderedFile",
    "TemplateRenderer",
    "render_project_files",
    # Orchestration
    "ProjectGenerator",
    "ScaffoldResult",
]
