"""Terminal rendering of configuration questions.

:class:`TyperPrompter` is the only place that talks to the terminal on
behalf of a :class:`hackpack.controller.ConfigurationSession`.  Choice
answers are restricted to the offered values with :class:`click.Choice`,
so the session only ever receives valid values.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

import click
import typer

from .catalog import LibraryChoice
from .controller import Question
from .models import PROJECT_NAME_PATTERN

__all__ = ["TyperPrompter"]

_PROJECT_NAME_RE = re.compile(PROJECT_NAME_PATTERN)


class TyperPrompter:
    """Ask :class:`Question` objects with :func:`typer.prompt` / :func:`typer.confirm`."""

    def __call__(self, question: Question) -> Any:
        if question.kind == "confirm":
            return typer.confirm(question.message, default = question.default)
        return self.choose(question.message, question.choices)

    def choose(self, message: str, choices: Sequence[LibraryChoice]) -> str:
        """List *choices* and return the value picked by number or by name."""
        typer.echo(f"\n{message}")
        for index, choice in enumerate(choices, start = 1):
            typer.echo(f"  {index}. {choice.label} [{choice.value}]")
        values = [choice.value for choice in choices]
        numbers = [str(index) for index in range(1, len(values) + 1)]
        reply = typer.prompt(
                "Your choice", type = click.Choice(values + numbers, case_sensitive = False), default = "1",
                show_choices = False, )
        if reply in numbers:
            return values[int(reply) - 1]
        return next(value for value in values if value.lower() == reply.lower())

    def project_name(self, default: str) -> str:
        """Ask for a project name made of letters, digits, hyphens and underscores."""
        while True:
            name = typer.prompt("What is your project name?", default = default).strip()
            if _PROJECT_NAME_RE.match(name):
                return name
            typer.echo("Project name can only contain letters, numbers, hyphens, and underscores")
