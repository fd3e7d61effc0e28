"""babel-scaffold command-line entry point.

Fully interactive, no flags::

    babel-scaffold
    python -m babel_scaffold

Exit status is 0 when the project was scaffolded or the user quit, 1 when
the run failed and 130 when interrupted.
"""

from __future__ import annotations

import asyncio
import sys

from rich.markup import escape
from rich.panel import Panel

from babel_scaffold import __version__
from babel_scaffold.config import Config
from babel_scaffold.prompts import Prompter, RichPrompter, collect_options
from babel_scaffold.scaffolder import ProjectGenerator, ScaffoldOptions, ScaffoldResult
from babel_scaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def ask_options(prompter: Prompter) -> ScaffoldOptions | None:
    """Run the question flow to completion on a private event loop.

    ``asyncio.run`` installs a SIGINT handler that only cancels the main task,
    which cannot interrupt a prompt blocked on the terminal. A plain loop
    leaves Python's default handler in place, so Ctrl-C raises
    ``KeyboardInterrupt`` from inside the prompt.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(collect_options(prompter))
    finally:
        loop.close()


def _print_result(result: ScaffoldResult) -> None:
    summary = {
        "Project": str(result.project_dir),
        "package.json": "created" if result.created_manifest else "updated",
        "Files": ", ".join(p.name for p in result.files),
        "Dependencies": str(len(result.dependencies)),
    }
    for name, command in result.scripts.items():
        summary[f"npm run {name}"] = command
    print_summary_table(summary, title="Scaffolded project")


def main() -> None:
    """CLI entry point for ``babel-scaffold``."""
    console.print(Panel(f"[bold]babel-scaffold[/bold] {__version__}", style="cyan"))

    try:
        config = Config.from_env()
        options = ask_options(RichPrompter())
        if options is None:
            return
        result = asyncio.run(ProjectGenerator(options, config).generate())
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        sys.exit(130)
    except Exception as exc:  # noqa: BLE001
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    _print_result(result)
    print_success("Project scaffolded successfully!")


if __name__ == "__main__":
    main()
