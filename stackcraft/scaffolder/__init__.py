"""stackcraft scaffolder -- writes the frontend and backend project trees.

Each generator asks its own questions, runs the package-manager commands it
needs, and renders Jinja2 templates into an explicit target directory.

Quick usage::

    from stackcraft.config import BackendChoices, Database
    from stackcraft.scaffolder import render_backend_files

    files = render_backend_files(BackendChoices(database=Database.MYSQL))
"""

from stackcraft.scaffolder.backend import BackendGenerator, build_manifest, render_backend_files
from stackcraft.scaffolder.frontend import (
    FrontendError,
    FrontendGenerator,
    render_frontend_files,
)
from stackcraft.scaffolder.templates import TemplateRenderer

__all__ = [
    "BackendGenerator",
    "FrontendError",
    "FrontendGenerator",
    "TemplateRenderer",
    "build_manifest",
    "render_backend_files",
    "render_frontend_files",
]
