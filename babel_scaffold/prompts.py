"""Interactive question flow.

``collect_options`` asks the scaffold questions one after another through an
abstract ``Prompter`` and builds a ``ScaffoldOptions`` from the answers.
``RichPrompter`` is the terminal implementation built on ``rich.prompt``;
tests drive the flow with a scripted prompter instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, Field
from rich.console import Console
from rich.prompt import Confirm, Prompt

from babel_scaffold.scaffolder.models import ScaffoldOptions
from babel_scaffold.utils import console as default_console


class QuestionKind(str, Enum):
    """How a question is presented."""
    LIST = "list"
    CONFIRM = "confirm"


class Choice(BaseModel):
    """One entry of a single-choice list question."""

    name: str
    value: Any


class Question(BaseModel):
    """A prompt shown to the user."""

    kind: QuestionKind
    message: str
    choices: list[Choice] = Field(default_factory=list)


class Prompter(Protocol):
    """Asks a single question and returns the answer's value."""

    async def ask(self, question: Question) -> Any:
        ...


# ---------------------------------------------------------------------------
# Questions, in the order they are asked
# ---------------------------------------------------------------------------

ACTION_CREATE = "create"
ACTION_QUIT = "quit"

ACTION_QUESTION = Question(
    kind=QuestionKind.LIST,
    message="What would you like to do?",
    choices=[
        Choice(name="Create a new babel project", value=ACTION_CREATE),
        Choice(name="Quit", value=ACTION_QUIT),
    ],
)
FLOW_QUESTION = Question(
    kind=QuestionKind.CONFIRM,
    message="Do you want to use flow for type checking?",
)
ESLINT_QUESTION = Question(
    kind=QuestionKind.CONFIRM,
    message="Do you want to use ESLint?",
)
MOCHA_QUESTION = Question(
    kind=QuestionKind.CONFIRM,
    message="Do you want to use mocha & chai for testing?",
)
PUBLISH_QUESTION = Question(
    kind=QuestionKind.CONFIRM,
    message="Do you plan to publish this on npm?",
)
EXECUTABLE_QUESTION = Question(
    kind=QuestionKind.LIST,
    message="Does this package execute or is it imported?",
    choices=[
        Choice(name="Executable", value=True),
        Choice(name="Imported", value=False),
    ],
)
UI_FRAMEWORK_QUESTION = Question(
    kind=QuestionKind.LIST,
    message="Which UI framework do you want to use?",
    choices=[
        Choice(name="None", value=False),
        Choice(name="React (bundled with Parcel)", value=True),
    ],
)


async def collect_options(prompter: Prompter) -> ScaffoldOptions | None:
    """Ask every scaffold question in order.

    Returns:
        The collected options, or ``None`` if the user chose to quit.
    """
    action = await prompter.ask(ACTION_QUESTION)
    if action == ACTION_QUIT:
        return None

    type_checking = await prompter.ask(FLOW_QUESTION)
    linting = await prompter.ask(ESLINT_QUESTION)
    testing = await prompter.ask(MOCHA_QUESTION)
    publish = await prompter.ask(PUBLISH_QUESTION)
    executable = await prompter.ask(EXECUTABLE_QUESTION)
    ui_framework = await prompter.ask(UI_FRAMEWORK_QUESTION)

    return ScaffoldOptions(
        type_checking=type_checking,
        linting=linting,
        testing=testing,
        publish=publish,
        executable=executable,
        ui_framework=ui_framework,
    )


# ---------------------------------------------------------------------------
# Terminal prompter
# ---------------------------------------------------------------------------


class RichPrompter:
    """Prompter that reads answers from the terminal with ``rich.prompt``.

    The prompt blocks the calling thread; nothing else runs on the loop while
    questions are asked. Ctrl-C raises ``KeyboardInterrupt`` out of the prompt
    as long as the loop was not started by ``asyncio.run`` (see
    ``cli.ask_options``).
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    async def ask(self, question: Question) -> Any:
        return self._ask_blocking(question)

    def _ask_blocking(self, question: Question) -> Any:
        if question.kind is QuestionKind.CONFIRM:
            return Confirm.ask(question.message, console=self.console, default=True)

        self.console.print(f"[bold]{question.message}[/bold]")
        for index, choice in enumerate(question.choices, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {choice.name}")
        answer = Prompt.ask(
            "Choose",
            console=self.console,
            choices=[str(i) for i in range(1, len(question.choices) + 1)],
            default="1",
        )
        return question.choices[int(answer) - 1].value
