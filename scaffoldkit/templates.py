"""Template loading for generators.

Provides :class:`TemplateSource`, which reads raw template files, renders
Jinja2 templates with a variables mapping and loads JSON fragments.  The
template root is the packaged ``scaffoldkit/templates/`` directory in ``cli``
mode, or ``scripts/templates/`` of the project in the working directory in
``project`` mode.  Failures are reported and yield an empty string so a
generator can carry on.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from scaffoldkit.config import ProjectContext, TemplateMode
from scaffoldkit.fs.errors import ErrorPolicy
from scaffoldkit.utils import pretty_path

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_PROJECT_TEMPLATE_DIR = Path("scripts") / "templates"


class TemplateSource:
    """Loads and renders template files.

    Raw loads and renders share one lookup: an explicit *folder* argument,
    then ``context.template_dir``, then the directory implied by
    ``context.template_mode``.
    """

    def __init__(self, context: ProjectContext, policy: ErrorPolicy) -> None:
        self.context = context
        self.policy = policy

    def template_root(self, folder: str | Path | None = None) -> Path:
        if folder:
            return Path(folder)
        if self.context.template_dir is not None:
            return Path(self.context.template_dir)
        if self.context.template_mode is TemplateMode.PROJECT:
            return Path(os.getcwd()) / _PROJECT_TEMPLATE_DIR
        return _DEFAULT_TEMPLATE_DIR

    # -- Loading -----------------------------------------------------------

    def load_file(self, identifier: str, folder: str | Path | None = None) -> str:
        """Return the raw contents of template *identifier*."""
        name = pretty_path(identifier)
        try:
            return self._read(name, folder)
        except (OSError, UnicodeDecodeError) as exc:
            self.policy.report_failure(f"Failed to load file {name}", exc)
            return ""

    def load_template(
        self,
        identifier: str,
        variables: dict[str, Any] | None = None,
        folder: str | Path | None = None,
    ) -> str:
        """Render template *identifier* with *variables*."""
        name = pretty_path(identifier)
        try:
            template = self._environment(folder).get_template(name)
            rendered = template.render(**(variables or {}))
            if not rendered:
                raise FileNotFoundError(f"Template {name} rendered empty")
            return rendered
        except (OSError, TemplateError) as exc:
            self.policy.report_failure(f"Failed to load template {name}", exc)
            return ""

    def load_json_file(self, identifier: str, folder: str | Path | None = None) -> Any:
        """Return the parsed JSON of template *identifier*."""
        name = pretty_path(identifier)
        try:
            return json.loads(self._read(name, folder))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            self.policy.report_failure(f"Failed to load json file {name}", exc)
            return ""

    def list_templates(self, folder: str | Path | None = None) -> list[str]:
        """Return every template path under the root, sorted."""
        root = self.template_root(folder)
        if not root.is_dir():
            return []
        return sorted(
            p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()
        )

    # -- Internal ----------------------------------------------------------

    def _read(self, name: str, folder: str | Path | None) -> str:
        path = self.template_root(folder) / name
        content = path.read_text(encoding="utf-8")
        if not content:
            raise FileNotFoundError(f"File {name} is empty or missing")
        return content

    def _environment(self, folder: str | Path | None) -> Environment:
        return Environment(
            loader=FileSystemLoader(str(self.template_root(folder))),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
        )
