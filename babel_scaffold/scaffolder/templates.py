"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class, which loads Jinja2 templates from the
``babel_scaffold/scaffolder/templates/`` directory, and the render functions
that turn a ``ScaffoldOptions`` into the text of each generated file.  The
render functions never touch the filesystem; writing is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from babel_scaffold.utils import dump_json

from .models import ScaffoldOptions


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class RenderedFile:
    """A generated file: path relative to the project root, plus its text."""

    path: str
    content: str


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates are ``.j2`` files under a configurable template directory and
    are rendered with a context dictionary holding the project name and the
    scaffold options.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"README.md.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Shared renderer over the bundled templates."""
    return TemplateRenderer()


def _context(options: ScaffoldOptions, project_name: str) -> dict[str, Any]:
    return {"options": options, "project_name": project_name}


# ---------------------------------------------------------------------------
# Per-file render functions
# ---------------------------------------------------------------------------


def babelrc_config(options: ScaffoldOptions) -> dict[str, Any]:
    """Babel configuration: env preset targeting the running Node version."""
    presets: list[Any] = [["env", {"targets": {"node": "current"}}]]
    if options.type_checking:
        presets.insert(0, "flow")
    if options.ui_framework:
        presets.append("react")

    config: dict[str, Any] = {"presets": presets}
    if options.publish:
        # Lets CommonJS consumers require() the default export directly.
        config["plugins"] = ["add-module-exports"]
    return config


def render_babelrc(options: ScaffoldOptions) -> RenderedFile:
    return RenderedFile(".babelrc", dump_json(babelrc_config(options)))


def render_readme(
    options: ScaffoldOptions,
    project_name: str,
    renderer: TemplateRenderer | None = None,
) -> RenderedFile:
    """README with a Todo list of the setup steps the chosen tools still need."""
    renderer = renderer or default_renderer()
    return RenderedFile(
        "README.md", renderer.render("README.md.j2", _context(options, project_name))
    )


def render_gitignore(
    options: ScaffoldOptions,
    renderer: TemplateRenderer | None = None,
) -> RenderedFile:
    renderer = renderer or default_renderer()
    return RenderedFile(".gitignore", renderer.render("gitignore.j2", _context(options, "")))


def render_entry_source(
    options: ScaffoldOptions,
    project_name: str = "",
    renderer: TemplateRenderer | None = None,
) -> list[RenderedFile]:
    """Placeholder ``src/main.js`` for executables; empty for anything else."""
    if not options.executable or options.ui_framework:
        return []
    renderer = renderer or default_renderer()
    return [RenderedFile("src/main.js", renderer.render("main.js.j2", _context(options, project_name)))]


def render_ui_scaffold(
    options: ScaffoldOptions,
    project_name: str = "",
    renderer: TemplateRenderer | None = None,
) -> list[RenderedFile]:
    """React entry component plus the host page that loads it; empty without a UI."""
    if not options.ui_framework:
        return []
    renderer = renderer or default_renderer()
    ctx = _context(options, project_name)
    return [
        RenderedFile("src/index.jsx", renderer.render("index.jsx.j2", ctx)),
        RenderedFile("public/index.html", renderer.render("index.html.j2", ctx)),
    ]


def render_project_files(
    options: ScaffoldOptions,
    project_name: str,
    renderer: TemplateRenderer | None = None,
) -> list[RenderedFile]:
    """Every file a scaffold run writes apart from ``package.json``, in write order.

    Both starter-source renderers are always called; each decides for itself
    whether it contributes anything.
    """
    renderer = renderer or default_renderer()
    return [
        render_babelrc(options),
        render_readme(options, project_name, renderer),
        *render_entry_source(options, project_name, renderer),
        *render_ui_scaffold(options, project_name, renderer),
        render_gitignore(options, renderer),
    ]
