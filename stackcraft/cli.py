"""stackcraft orchestrator and command-line entry point.

Creates the project directory, runs the frontend generator, optionally runs
the backend generator, then prints run and deployment instructions.

Usage::

    stackcraft my-app
    python -m stackcraft            # asks for the project name
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from typing import Optional

from .config import BACKEND_OPTIONS, BackendChoice, Config, ProjectChoices
from .instructions import ask_deployment, print_run_instructions
from .prompts import Prompter, select_option
from .scaffolder.backend import BACKEND_DIR, BackendGenerator
from .scaffolder.frontend import FrontendError, FrontendGenerator
from .scaffolder.templates import TemplateRenderer
from .utils import (
    console,
    ensure_dir,
    print_error,
    print_info,
    print_step_header,
    print_success,
    print_warning,
    run_checked,
)

EXTRA_AUTH_LIBRARIES: list[str] = ["jsonwebtoken", "passport"]


def _raise_keyboard_interrupt(signum, frame) -> None:
    # Keeps Ctrl+C raising inside blocking prompts once asyncio.run owns the loop.
    raise KeyboardInterrupt


class ProjectCreator:
    """Drives one interactive project generation from start to finish.

    Attributes:
        config: Tool settings.
        prompter: Source of every interactive answer.
        frontend: Frontend generator (always run).
        backend: Backend generator (run only when a backend is chosen).
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or Prompter()
        renderer = renderer or TemplateRenderer()
        self.frontend = FrontendGenerator(config, self.prompter, renderer)
        self.backend = BackendGenerator(config, self.prompter, renderer)

    def ask_backend_choice(self) -> Optional[BackendChoice]:
        return select_option(
            self.prompter,
            BACKEND_OPTIONS,
            "Which backend technology would you like to use?",
            fallback=None,
            notice="No backend selected, proceeding with frontend only.",
        )

    async def create(self, project_name: Optional[str] = None) -> ProjectChoices:
        """Generate a project, asking for its name when none is given.

        Raises:
            FrontendError: If the frontend could not be generated.
            CommandError: If ``npm init`` or the extra library install fails.
        """
        console.print("[bold magenta]stackcraft[/bold magenta] full-stack project generator")
        project_name = (project_name or "").strip()
        if not project_name:
            console.print("Please enter your project name:")
            project_name = self.prompter.text("Project Name")

        print_step_header(f"Creating {project_name}")
        project_root = ensure_dir(self.config.project_path(project_name))
        timeout = self.config.command_timeout

        print_info("Initializing package.json...")
        await run_checked([self.config.npm, "init", "-y"], cwd=project_root, timeout=timeout)

        print_step_header("Frontend", color="bright_green")
        frontend = await self.frontend.generate(project_root)

        backend_choice = self.ask_backend_choice()
        tailwind = self.prompter.confirm("Would you like to add TailwindCSS for styling?")
        database_setup = (
            self.prompter.confirm("Would you like to set up a database for your backend?")
            if backend_choice is not None
            else False
        )

        backend = None
        if backend_choice is not None:
            print_step_header("Backend", color="bright_yellow")
            if backend_choice is BackendChoice.DJANGO:
                print_warning("Django scaffolding is not available; generating a Node.js backend.")
            ensure_dir(project_root / BACKEND_DIR)
            backend = await self.backend.generate(project_root)

        extra_auth_libraries = self.prompter.confirm(
            "Would you like to add additional libraries (e.g., JWT, Passport, etc.)?"
        )
        if extra_auth_libraries:
            print_info("Installing additional libraries...")
            await run_checked(
                [self.config.npm, "install", *EXTRA_AUTH_LIBRARIES],
                cwd=project_root,
                timeout=timeout,
            )
            print_success("Additional libraries installed successfully.")

        choices = ProjectChoices(
            name=project_name,
            frontend=frontend,
            backend_choice=backend_choice,
            tailwind=tailwind,
            database_setup=database_setup,
            extra_auth_libraries=extra_auth_libraries,
            backend=backend,
        )

        print_success("Project created successfully!")
        print_run_instructions(choices)
        choices.deployment = ask_deployment(self.prompter)
        return choices


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``stackcraft`` and ``python -m stackcraft``."""
    parser = argparse.ArgumentParser(
        prog="stackcraft",
        description="Interactive full-stack project generator",
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Name of the project directory to create (asked for if omitted)",
    )
    args = parser.parse_args(argv)

    previous_handler = signal.signal(signal.SIGINT, _raise_keyboard_interrupt)
    try:
        creator = ProjectCreator(Config.from_env())
        asyncio.run(creator.create(args.project_name))
    except KeyboardInterrupt:
        console.print()
        print_warning("Project creation has been canceled.")
        sys.exit(0)
    except FrontendError as exc:
        print_error(str(exc))
        sys.exit(1)
    except Exception as exc:
        print_error(f"Error creating the project: {exc}")
        sys.exit(1)
    finally:
        signal.signal(signal.SIGINT, previous_handler)


if __name__ == "__main__":
    main()
