"""Backend scaffolding.

Asks for a backend framework and a database, writes ``backend/package.json``
with the matching database client, installs it, and renders the server, user
model, auth middleware and user routes into ``<project>/backend``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from ..config import (
    BACKEND_FRAMEWORK_OPTIONS,
    DATABASE_OPTIONS,
    BackendChoices,
    BackendFramework,
    Config,
    Database,
)
from ..prompts import Prompter, select_option
from ..utils import ensure_dirs, print_error, print_info, print_success, run_checked, save_json
from .templates import TemplateRenderer, write_files

BACKEND_DIR = "backend"

CORE_DEPENDENCIES: dict[str, str] = {
    "dotenv": "^10.0.0",
    "bcryptjs": "^2.4.3",
    "jsonwebtoken": "^8.5.1",
    "express": "^4.18.2",
}

DATABASE_DEPENDENCIES: dict[Database, tuple[str, str]] = {
    Database.MONGODB: ("mongoose", "^6.7.0"),
    Database.MYSQL: ("mysql2", "^2.3.3"),
    Database.POSTGRESQL: ("pg", "^8.8.0"),
}

MONGODB_URI_PLACEHOLDER = "mongodb://localhost:27017/your_db_name"

BACKEND_FOLDERS: list[str] = [
    "config",
    "controllers",
    "middleware",
    "models",
    "routes",
    "services",
    "utils",
    "public/uploads",
    "public/assets",
    "tests",
    "logs",
]

BACKEND_FILES: list[str] = [
    ".env",
    "server.js",
    "models/user.js",
    "middleware/authMiddleware.js",
    "routes/userRoutes.js",
]


def build_manifest(choices: BackendChoices) -> dict[str, Any]:
    """Return the ``package.json`` contents for the generated backend.

    The dependencies are the fixed core set plus exactly one database client.
    """
    client, version = DATABASE_DEPENDENCIES[choices.database]
    return {
        "name": "backend",
        "version": "1.0.0",
        "main": "server.js",
        "keywords": [choices.framework.value, choices.database.value],
        "dependencies": {**CORE_DEPENDENCIES, client: version},
    }


def template_context(choices: BackendChoices) -> dict[str, Any]:
    """Variables for the backend templates.

    ``db_uri`` is the only value that lands in ``.env``; it is a placeholder
    connection string for MongoDB and empty for the SQL databases.
    """
    return {
        "framework": choices.framework.value,
        "database": choices.database.value,
        "database_label": DATABASE_OPTIONS[choices.database],
        "db_uri": MONGODB_URI_PLACEHOLDER if choices.database is Database.MONGODB else "",
    }


def render_backend_files(
    choices: BackendChoices, renderer: TemplateRenderer | None = None
) -> dict[str, str]:
    """Return ``{path relative to backend/: content}`` for *choices*."""
    renderer = renderer or TemplateRenderer()
    return renderer.render_tree("backend", BACKEND_FILES, template_context(choices))


class BackendGenerator:
    """Interactive backend scaffolder.

    Failures are reported and swallowed: whatever was written before the error
    stays on disk and the caller carries on.
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

    def ask_choices(self) -> BackendChoices:
        framework = select_option(
            self.prompter,
            BACKEND_FRAMEWORK_OPTIONS,
            "Choose backend framework:",
            fallback=BackendFramework.EXPRESS,
            notice="No selection made, defaulting to Express.",
        )
        database = select_option(
            self.prompter,
            DATABASE_OPTIONS,
            "Choose database:",
            fallback=Database.MONGODB,
            notice="No selection made, defaulting to MongoDB.",
        )
        return BackendChoices(framework=framework, database=database)

    async def generate(self, project_root: Path) -> Optional[BackendChoices]:
        """Scaffold ``<project_root>/backend``.

        Returns:
            The choices made, or ``None`` if generation failed.
        """
        try:
            return await self._generate(project_root)
        except Exception as exc:
            print_error(f"Error setting up backend: {exc}")
            return None

    async def _generate(self, project_root: Path) -> BackendChoices:
        print_info("Setting up backend...")
        choices = self.ask_choices()
        backend_root = project_root / BACKEND_DIR

        await save_json(build_manifest(choices), backend_root / "package.json")
        print_info("Installing dependencies...")
        await run_checked(
            [self.config.npm, "install"],
            cwd=backend_root,
            timeout=self.config.command_timeout,
        )

        ensure_dirs(backend_root, BACKEND_FOLDERS)

        files = render_backend_files(choices, self.renderer)
        for rel in files:
            print_info(f"Writing {rel}")
        await write_files(backend_root, files)

        print_success("Backend setup complete!")
        return choices
