"""Shared utility functions for stackcraft.

Provides async command execution, JSON and file writing, directory helpers and
Rich-based console reporting.  Commands are awaited one at a time by the
generators, so nothing here ever runs concurrently.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule

console = Console()


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for errors raised while generating a project."""


class CommandError(ScaffoldError):
    """Raised when an external command exits with a non-zero status or times out."""

    def __init__(self, cmd: Sequence[str], returncode: int, detail: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.detail = detail
        message = f"Command failed with exit code {returncode}: {' '.join(self.cmd)}"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: Sequence[str],
    cwd: str | Path | None = None,
    timeout: Optional[int] = None,
) -> int:
    """Run an external command and wait for it to finish.

    The child inherits the parent's streams so package-manager output and
    prompts reach the user directly.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.

    Returns:
        The exit status of the child.

    Raises:
        CommandError: If the command is still running after *timeout* seconds.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd else None,
    )

    try:
        await asyncio.wait_for(process.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandError(cmd, -1, f"Command timed out after {timeout}s") from None

    return process.returncode or 0


async def run_checked(
    cmd: Sequence[str],
    cwd: str | Path | None = None,
    timeout: Optional[int] = None,
) -> None:
    """Run *cmd* with inherited streams and raise on failure.

    Raises:
        CommandError: If the command exits non-zero or times out.
    """
    console.print(f"[dim]$ {escape(' '.join(cmd))}[/dim]")
    returncode = await run_command(cmd, cwd=cwd, timeout=timeout)
    if returncode != 0:
        raise CommandError(cmd, returncode)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def ensure_dirs(root: Path, relative_dirs: Iterable[str]) -> list[Path]:
    """Create every directory in *relative_dirs* under *root*."""
    return [ensure_dir(root / d) for d in relative_dirs]


async def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories as needed."""
    file_path = Path(path)
    await asyncio.to_thread(_write_file, file_path, content)
    return file_path


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as JSON indented by two spaces, the way npm writes manifests."""
    content = json.dumps(data, indent=2, ensure_ascii=False)
    return await write_text(path, content)


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step_header(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule announcing a generation stage."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_panel(body: str, title: str, style: str = "cyan") -> None:
    """Print *body* inside a titled panel."""
    console.print(Panel(body, title=title, border_style=style, expand=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")
