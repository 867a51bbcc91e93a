"""scaffoldkit configuration.

A single typed ``ProjectContext`` is created per CLI invocation and handed to
every component explicitly.  It replaces ambient process-wide state: the
active project directory, the verbosity of error reporting, the package
manager choice and the dependency lists accumulated by generators.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from scaffoldkit.utils import print_warning


class EnvironmentMode(str, Enum):
    """How much detail failures are reported with."""

    NORMAL = "normal"
    VERBOSE = "verbose"


class TemplateMode(str, Enum):
    """Where templates are loaded from when no explicit folder is given.

    ``cli`` reads the templates shipped inside the package; ``project`` reads
    ``scripts/templates/`` of the project in the current working directory.
    """

    CLI = "cli"
    PROJECT = "project"


# Values of SCAFFOLDKIT_ENV that switch on verbose error output.
_VERBOSE_ENV_VALUES = {"development", "dev", "verbose", "debug"}


class ProjectContext(BaseModel):
    """Per-invocation scaffolding context.

    Attributes:
        active_project_name: Directory name of the project being scaffolded.
            When set, logical paths resolve under ``./<name>/``.
        environment_mode: ``verbose`` appends raw errors to failure messages.
        use_yarn: ``None`` until a package manager has been chosen.
        dependencies: Production packages accumulated by generators.
        dev_dependencies: Development packages accumulated by generators.
        template_mode: Default template root selection.
        template_dir: Explicit template root overriding ``template_mode``.
    """

    active_project_name: str | None = Field(default=None)
    environment_mode: EnvironmentMode = Field(default=EnvironmentMode.NORMAL)
    use_yarn: bool | None = Field(default=None)
    dependencies: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list)
    template_mode: TemplateMode = Field(default=TemplateMode.CLI)
    template_dir: Path | None = Field(default=None)

    @property
    def verbose(self) -> bool:
        return self.environment_mode is EnvironmentMode.VERBOSE

    @property
    def project_root(self) -> Path:
        """Directory that logical paths are resolved against."""
        if self.active_project_name:
            return Path(".") / self.active_project_name
        return Path(".")

    def with_project(self, name: str | None) -> "ProjectContext":
        """Return a copy of this context scaffolding into *name*."""
        return self.model_copy(update={"active_project_name": name or None}, deep=True)

    def add_dependencies(self, names: str | list[str], dev: bool = False) -> None:
        """Accumulate package names for a later install.

        *names* may be a whitespace-separated string (``"react express"``) or
        a list.  Order is kept and duplicates are skipped.
        """
        if isinstance(names, str):
            names = names.split()
        target = self.dev_dependencies if dev else self.dependencies
        for name in names:
            if name and name not in target:
                target.append(name)

    @classmethod
    def from_env(cls) -> "ProjectContext":
        """Build a ``ProjectContext`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLDKIT_ENV, SCAFFOLDKIT_PROJECT, SCAFFOLDKIT_TEMPLATE_DIR,
            SCAFFOLDKIT_TEMPLATE_MODE.
        """
        env = os.environ.get("SCAFFOLDKIT_ENV", "").strip().lower()
        mode = EnvironmentMode.VERBOSE if env in _VERBOSE_ENV_VALUES else EnvironmentMode.NORMAL

        template_dir = os.environ.get("SCAFFOLDKIT_TEMPLATE_DIR")
        raw_mode = os.environ.get("SCAFFOLDKIT_TEMPLATE_MODE") or TemplateMode.CLI.value
        try:
            template_mode = TemplateMode(raw_mode.strip().lower())
        except ValueError:
            print_warning(
                f"Unknown SCAFFOLDKIT_TEMPLATE_MODE {raw_mode!r}, using {TemplateMode.CLI.value!r}"
            )
            template_mode = TemplateMode.CLI

        return cls(
            active_project_name=os.environ.get("SCAFFOLDKIT_PROJECT") or None,
            environment_mode=mode,
            template_mode=template_mode,
            template_dir=Path(template_dir) if template_dir else None,
        )
