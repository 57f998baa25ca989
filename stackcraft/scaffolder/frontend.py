"""Frontend scaffolding.

Asks for a frontend framework and optional libraries, runs the framework's own
project generator, installs TailwindCSS, and writes the fixed set of page,
component and styling files into ``<project>/frontend``.
"""

from __future__ import annotations

from pathlib import Path

from ..config import Config, FRONTEND_OPTIONS, FrontendChoices, FrontendFramework
from ..prompts import Prompter, select_option
from ..utils import ScaffoldError, ensure_dirs, print_info, print_success, run_checked
from .templates import TemplateRenderer, write_files

FRONTEND_DIR = "frontend"

FRONTEND_FOLDERS: list[str] = ["components", "auth", "pages", "styles", "assets"]

# Written for every framework choice.
FRONTEND_FILES: list[str] = [
    "pages/index.js",
    "components/Button.js",
    "auth/AuthForm.js",
    "tailwind.config.js",
    "styles/globals.css",
]

# Redux store provider, written only when Redux is selected.
REDUX_APP_FILE = "pages/_app.js"

TAILWIND_PACKAGES: list[str] = ["tailwindcss", "postcss", "autoprefixer"]


class FrontendError(ScaffoldError):
    """Raised when the frontend could not be generated."""


def scaffold_command(config: Config, framework: FrontendFramework) -> list[str]:
    """Return the framework generator command targeting ``frontend/``."""
    if framework is FrontendFramework.REACT:
        return [config.npx, "create-react-app", FRONTEND_DIR]
    if framework is FrontendFramework.VUE:
        return [config.npm, "init", "vue@latest", FRONTEND_DIR]
    return [config.npx, "create-next-app@latest", FRONTEND_DIR, "--use-npm"]


def render_frontend_files(
    choices: FrontendChoices, renderer: TemplateRenderer | None = None
) -> dict[str, str]:
    """Return ``{path relative to frontend/: content}`` for *choices*."""
    renderer = renderer or TemplateRenderer()
    names = list(FRONTEND_FILES)
    if choices.redux:
        names.append(REDUX_APP_FILE)
    return renderer.render_tree("frontend", names, {})


class FrontendGenerator:
    """Interactive frontend scaffolder.

    All commands and file writes target explicit paths below the project
    root; the process working directory is never changed.
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter
        self.renderer = renderer or TemplateRenderer()

    def ask_framework(self) -> FrontendFramework:
        return select_option(
            self.prompter,
            FRONTEND_OPTIONS,
            "Choose frontend framework:",
            fallback=FrontendFramework.NEXTJS,
            notice="No selection made, defaulting to Next.js.",
        )

    def ask_libraries(self, framework: FrontendFramework) -> FrontendChoices:
        return FrontendChoices(
            framework=framework,
            redux=self.prompter.confirm("Would you like to install Redux?"),
            axios=self.prompter.confirm("Would you like to install Axios?"),
            react_icons=self.prompter.confirm("Would you like to install React Icons?"),
        )

    async def generate(self, project_root: Path) -> FrontendChoices:
        """Scaffold ``<project_root>/frontend``.

        Returns:
            The choices the user made.

        Raises:
            FrontendError: If any command, template or file operation fails.
                ``KeyboardInterrupt`` is not wrapped.
        """
        try:
            return await self._generate(project_root)
        except Exception as exc:
            raise FrontendError(f"Error setting up frontend: {exc}") from exc

    async def _generate(self, project_root: Path) -> FrontendChoices:
        print_info("Setting up frontend...")
        framework = self.ask_framework()
        timeout = self.config.command_timeout

        print_info(f"Installing {FRONTEND_OPTIONS[framework]}...")
        await run_checked(
            scaffold_command(self.config, framework), cwd=project_root, timeout=timeout
        )

        frontend_root = project_root / FRONTEND_DIR
        print_info("Installing TailwindCSS and initializing config...")
        await run_checked(
            [self.config.npm, "install", *TAILWIND_PACKAGES],
            cwd=frontend_root,
            timeout=timeout,
        )
        await run_checked(
            [self.config.npx, "tailwindcss", "init"], cwd=frontend_root, timeout=timeout
        )

        choices = self.ask_libraries(framework)
        dependencies = choices.extra_dependencies()
        if dependencies:
            print_info("Installing selected dependencies...")
            await run_checked(
                [self.config.npm, "install", *dependencies],
                cwd=frontend_root,
                timeout=timeout,
            )

        print_info("Creating folder structure...")
        ensure_dirs(frontend_root, FRONTEND_FOLDERS)

        files = render_frontend_files(choices, self.renderer)
        for rel in files:
            print_info(f"Writing {rel}")
        await write_files(frontend_root, files)

        print_success("Frontend setup complete!")
        return choices
