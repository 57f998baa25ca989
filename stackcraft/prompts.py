"""Interactive prompts built on ``rich.prompt``.

``Prompter`` is the only object that reads from the terminal.  Generators
receive one and never call ``input`` themselves, which lets the test-suite
substitute a scripted prompter.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from .utils import console as default_console
from .utils import print_warning

K = TypeVar("K")

# Returned by ``Prompter.select`` when no option was picked.
NO_SELECTION = -1


class Prompter:
    """Reads answers from the user.

    Menus are numbered from 1, with ``0`` meaning "cancel".  An answer that is
    not one of the listed numbers counts as no selection.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def text(self, question: str) -> str:
        """Ask for a non-empty line of text, repeating until one is given."""
        while True:
            answer = Prompt.ask(question, console=self.console).strip()
            if answer:
                return answer
            print_warning("A value is required.")

    def select(self, options: Sequence[str], question: str) -> int:
        """Show a numbered menu and return the zero-based index picked.

        Returns:
            The option index, or ``NO_SELECTION`` when the answer is ``0``,
            empty, or not a listed number.
        """
        self.console.print()
        for number, label in enumerate(options, start=1):
            self.console.print(f"  [bold]\\[{number}][/bold] {escape(label)}")
        self.console.print("  [dim]\\[0] CANCEL[/dim]")
        answer = Prompt.ask(
            f"{question} (1-{len(options)}, 0 to cancel)",
            console=self.console,
            default="",
            show_default=False,
        ).strip()
        if not answer.isdigit():
            return NO_SELECTION
        index = int(answer) - 1
        if 0 <= index < len(options):
            return index
        return NO_SELECTION

    def confirm(self, question: str) -> bool:
        """Ask a strict yes/no question; re-asks until ``y`` or ``n`` is given."""
        return Confirm.ask(question, console=self.console)


def select_option(
    prompter: Prompter,
    options: Mapping[K, str],
    question: str,
    *,
    fallback: Optional[K],
    notice: str,
) -> Optional[K]:
    """Ask a menu question and map the answer onto a key of *options*.

    An invalid or missing selection is never an error: *notice* is printed and
    *fallback* is returned instead.
    """
    keys = list(options)
    index = prompter.select(list(options.values()), question)
    if 0 <= index < len(keys):
        return keys[index]
    print_warning(notice)
    return fallback
