"""Shared pytest fixtures for the stackcraft test suite.

Provides reusable fixtures for:
- A scripted stand-in for the interactive prompter
- Mocked external commands (npm / npx never actually run)
- Tool configuration pointed at a temporary directory
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Union
from unittest.mock import AsyncMock, patch

import pytest

from stackcraft.config import Config
from stackcraft.prompts import Prompter

Answer = Union[int, bool, str]


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class ScriptedPrompter(Prompter):
    """Prompter that replays a fixed list of answers in order.

    ``int`` answers feed ``select`` (``-1`` means no selection), ``bool``
    answers feed ``confirm`` and ``str`` answers feed ``text``.  Asking a
    question of the wrong kind, or running out of answers, fails the test.
    """

    def __init__(self, answers: Iterable[Answer]) -> None:
        super().__init__()
        self.answers: deque[Answer] = deque(answers)
        self.questions: list[str] = []

    def _next(self, kind: type, question: str) -> Any:
        self.questions.append(question)
        assert self.answers, f"No scripted answer left for: {question}"
        answer = self.answers.popleft()
        # bool is a subclass of int, so check it explicitly
        assert type(answer) is kind, f"Expected {kind.__name__} answer for: {question}, got {answer!r}"
        return answer

    def text(self, question: str) -> str:
        return self._next(str, question)

    def select(self, options: Sequence[str], question: str) -> int:
        return self._next(int, question)

    def confirm(self, question: str) -> bool:
        return self._next(bool, question)


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted([0, False, ...])`` -> ``ScriptedPrompter``."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_commands():
    """Replace ``run_checked`` everywhere it is used with a single AsyncMock.

    The mock records every command as ``call(cmd, cwd=..., timeout=...)``.
    """
    mock = AsyncMock(return_value=None)
    with patch("stackcraft.scaffolder.frontend.run_checked", mock), \
         patch("stackcraft.scaffolder.backend.run_checked", mock), \
         patch("stackcraft.cli.run_checked", mock):
        yield mock


@pytest.fixture
def commands_run(mock_commands: AsyncMock):
    """Callable returning the argument lists recorded by ``mock_commands`` so far."""

    def _commands() -> list[list[str]]:
        return [list(c.args[0]) for c in mock_commands.call_args_list]

    return _commands


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config that generates projects below ``tmp_path``."""
    return Config(output_dir=tmp_path)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An existing, empty project directory."""
    root = tmp_path / "demo"
    root.mkdir()
    return root
