"""stackcraft configuration and choice models.

Two groups of Pydantic v2 models live here:

* The *choice* models (``FrontendChoices``, ``BackendChoices``,
  ``ProjectChoices``) capture the answers given at the interactive prompts.
  They are built once per run and never revisited.
* ``Config`` holds tool settings (executable names, command timeout, output
  directory) that can be overridden from environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Menu enumerations
# ---------------------------------------------------------------------------


class FrontendFramework(str, Enum):
    NEXTJS = "nextjs"
    REACT = "react"
    VUE = "vue"


class BackendChoice(str, Enum):
    """Backend technology offered by the top-level menu."""

    EXPRESS = "express"
    NODE_MONGO = "node-mongo"
    DJANGO = "django"


class BackendFramework(str, Enum):
    EXPRESS = "express"
    KOA = "koa"
    FASTIFY = "fastify"


class Database(str, Enum):
    MONGODB = "mongodb"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"


class DeploymentTarget(str, Enum):
    HEROKU = "heroku"
    RENDER = "render"
    DIGITALOCEAN = "digitalocean"


# Menu labels, in the order they are presented.  Index 0 is the fallback for
# menus that default on an invalid selection.

FRONTEND_OPTIONS: dict[FrontendFramework, str] = {
    FrontendFramework.NEXTJS: "Next.js",
    FrontendFramework.REACT: "React",
    FrontendFramework.VUE: "Vue",
}

BACKEND_OPTIONS: dict[Optional[BackendChoice], str] = {
    BackendChoice.EXPRESS: "Express",
    BackendChoice.NODE_MONGO: "Node.js with MongoDB",
    BackendChoice.DJANGO: "Django (Python)",
    None: "None (Frontend only)",
}

BACKEND_FRAMEWORK_OPTIONS: dict[BackendFramework, str] = {
    BackendFramework.EXPRESS: "Express",
    BackendFramework.KOA: "Koa",
    BackendFramework.FASTIFY: "Fastify",
}

DATABASE_OPTIONS: dict[Database, str] = {
    Database.MONGODB: "MongoDB",
    Database.MYSQL: "MySQL",
    Database.POSTGRESQL: "PostgreSQL",
}

DEPLOYMENT_OPTIONS: dict[Optional[DeploymentTarget], str] = {
    DeploymentTarget.HEROKU: "Heroku",
    DeploymentTarget.RENDER: "Render",
    DeploymentTarget.DIGITALOCEAN: "DigitalOcean",
    None: "None (Skip deployment)",
}


# ---------------------------------------------------------------------------
# Choice models
# ---------------------------------------------------------------------------


class FrontendChoices(BaseModel):
    """Answers collected by the frontend generator."""

    framework: FrontendFramework = Field(default=FrontendFramework.NEXTJS)
    redux: bool = Field(default=False)
    axios: bool = Field(default=False)
    react_icons: bool = Field(default=False)

    def extra_dependencies(self) -> list[str]:
        """Return the npm packages for every accepted library toggle."""
        deps: list[str] = []
        if self.redux:
            deps.extend(["redux", "react-redux", "@reduxjs/toolkit"])
        if self.axios:
            deps.append("axios")
        if self.react_icons:
            deps.append("react-icons")
        return deps


class BackendChoices(BaseModel):
    """Answers collected by the backend generator."""

    framework: BackendFramework = Field(default=BackendFramework.EXPRESS)
    database: Database = Field(default=Database.MONGODB)


class ProjectChoices(BaseModel):
    """Everything the user chose during one run of the tool."""

    name: str = Field(..., min_length=1, description="Project directory name")
    frontend: Optional[FrontendChoices] = None
    backend_choice: Optional[BackendChoice] = None
    tailwind: bool = False
    database_setup: bool = False
    extra_auth_libraries: bool = False
    backend: Optional[BackendChoices] = None
    deployment: Optional[DeploymentTarget] = None


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Config(BaseModel):
    """Global stackcraft settings.

    Created once by the CLI entry point and passed to the orchestrator and
    both generators.
    """

    npm: str = Field(default="npm", min_length=1)
    npx: str = Field(default="npx", min_length=1)
    command_timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="Per-command timeout in seconds; None waits indefinitely",
    )
    output_dir: Path = Field(default=Path("."))

    def project_path(self, name: str) -> Path:
        """Directory the project called *name* is generated into."""
        return self.output_dir / name

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STACKCRAFT_NPM, STACKCRAFT_NPX, STACKCRAFT_COMMAND_TIMEOUT,
            STACKCRAFT_OUTPUT_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STACKCRAFT_NPM"):
            kwargs["npm"] = os.environ["STACKCRAFT_NPM"]
        if os.environ.get("STACKCRAFT_NPX"):
            kwargs["npx"] = os.environ["STACKCRAFT_NPX"]
        if os.environ.get("STACKCRAFT_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["STACKCRAFT_COMMAND_TIMEOUT"])
        if os.environ.get("STACKCRAFT_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STACKCRAFT_OUTPUT_DIR"])
        return cls(**kwargs)
