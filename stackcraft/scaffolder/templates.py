"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``stackcraft/scaffolder/templates/`` directory and renders them with the
user's choices.  Undefined template variables raise instead of rendering as
empty strings, so every placeholder a template declares must be supplied.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..utils import write_text

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates are ``.j2`` files below the template directory; the output file
    name is the template path without the ``.j2`` suffix.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"backend/server.js.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_tree(
        self,
        template_prefix: str,
        names: Iterable[str],
        context: dict[str, Any],
    ) -> dict[str, str]:
        """Render ``<template_prefix>/<name>.j2`` for every name in *names*.

        Returns:
            Mapping of output path (relative to the generated directory) to
            rendered content, in the order given.
        """
        return {
            name: self.render(f"{template_prefix}/{name}.j2", context)
            for name in names
        }


async def write_files(root: Path, files: dict[str, str]) -> list[Path]:
    """Write every ``{relative path: content}`` entry of *files* below *root*."""
    return [await write_text(root / rel, content) for rel, content in files.items()]
