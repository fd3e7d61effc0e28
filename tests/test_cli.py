"""Unit tests for the command-line entry point (babel_scaffold.cli).

Tests cover:
- ask_options driving the question flow on its own loop
- main() exit codes for success, quit, failure and interruption
- Ctrl-C at a terminal prompt exiting straight away
- The result summary printed after a successful run
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from babel_scaffold.cli import ask_options, main
from babel_scaffold.config import Config
from babel_scaffold.errors import ProcessError, VersionLookupError
from babel_scaffold.prompts import ACTION_CREATE, ACTION_QUIT, RichPrompter
from babel_scaffold.scaffolder import ScaffoldResult
from babel_scaffold.scaffolder.models import ScaffoldOptions

pytestmark = pytest.mark.unit

LIBRARY_ANSWERS = [ACTION_CREATE, True, True, True, True, False, False]


def _result(project_dir: Path) -> ScaffoldResult:
    return ScaffoldResult(
        project_dir=project_dir,
        created_manifest=True,
        files=[project_dir / ".babelrc", project_dir / "README.md"],
        scripts={"build": "rimraf ./dist && babel src/ -d dist --copy-files"},
    )


# ---------------------------------------------------------------------------
# ask_options
# ---------------------------------------------------------------------------

class TestAskOptions:
    def test_returns_collected_options(self, scripted_prompter):
        options = ask_options(scripted_prompter(LIBRARY_ANSWERS))
        assert options == ScaffoldOptions(
            type_checking=True, linting=True, testing=True, publish=True
        )

    def test_quit_returns_none(self, scripted_prompter):
        assert ask_options(scripted_prompter([ACTION_QUIT])) is None

    def test_interrupt_propagates(self):
        with patch("babel_scaffold.prompts.Prompt.ask", side_effect=KeyboardInterrupt):
            with pytest.raises(KeyboardInterrupt):
                ask_options(RichPrompter())


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

@pytest.fixture
def cli_env(monkeypatch, tmp_project_dir: Path) -> Path:
    monkeypatch.setenv("BABEL_SCAFFOLD_PROJECT_DIR", str(tmp_project_dir))
    return tmp_project_dir


@pytest.fixture
def answer(scripted_prompter):
    """Patch the terminal prompter with scripted answers."""
    def _answer(answers):
        return patch("babel_scaffold.cli.RichPrompter", return_value=scripted_prompter(answers))
    return _answer


class TestMain:
    def test_success_prints_summary(self, cli_env, answer, capsys):
        with answer(LIBRARY_ANSWERS), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            MockGenerator.return_value.generate = AsyncMock(return_value=_result(cli_env))
            main()

        out = capsys.readouterr().out
        assert "Scaffolded project" in out
        assert "npm run build" in out
        assert "Project scaffolded successfully!" in out

    def test_generator_gets_options_and_env_config(self, cli_env, answer):
        with answer(LIBRARY_ANSWERS), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            MockGenerator.return_value.generate = AsyncMock(return_value=_result(cli_env))
            main()

        options, config = MockGenerator.call_args.args
        assert options.type_checking and options.publish
        assert isinstance(config, Config)
        assert config.project_dir == cli_env

    def test_quit_exits_cleanly(self, cli_env, answer, capsys):
        with answer([ACTION_QUIT]), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            main()

        MockGenerator.assert_not_called()
        assert "successfully" not in capsys.readouterr().out

    @pytest.mark.parametrize(
        "error",
        [
            ProcessError("npm init -y", "npm WARN something"),
            VersionLookupError("left-pad", "package not found in registry"),
        ],
    )
    def test_failure_exits_with_1(self, cli_env, answer, capsys, error):
        with answer(LIBRARY_ANSWERS), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            MockGenerator.return_value.generate = AsyncMock(side_effect=error)
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_markup_in_error_is_printed_literally(self, cli_env, answer, capsys):
        error = ProcessError("npm init -y", "[red]not markup[/red]")
        with answer(LIBRARY_ANSWERS), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            MockGenerator.return_value.generate = AsyncMock(side_effect=error)
            with pytest.raises(SystemExit):
                main()
        assert "[red]not markup[/red]" in capsys.readouterr().out

    def test_ctrl_c_at_prompt_exits_with_130(self, cli_env):
        with patch("babel_scaffold.prompts.Prompt.ask", side_effect=KeyboardInterrupt), \
                patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 130
        MockGenerator.assert_not_called()

    def test_ctrl_c_during_generation_exits_with_130(self, cli_env, answer):
        with answer(LIBRARY_ANSWERS), patch("babel_scaffold.cli.ProjectGenerator") as MockGenerator:
            MockGenerator.return_value.generate = AsyncMock(side_effect=KeyboardInterrupt)
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 130

    def test_invalid_env_exits_with_1(self, monkeypatch, answer):
        monkeypatch.setenv("BABEL_SCAFFOLD_REGISTRY_TIMEOUT", "0")
        with answer(LIBRARY_ANSWERS) as MockPrompter:
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        MockPrompter.assert_not_called()
