"""Knex and Postgres setup for generated Node projects.

Writes a ``knexfile.js`` pointing at a local database named after the
project, creates the migrations folders, installs the knex CLI globally and
creates the database with ``createdb``.
"""

from __future__ import annotations

import os

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.errors import FailureKind, IOFailure, OperationResult
from scaffoldkit.fs.mutator import FileMutator
from scaffoldkit.fs.paths import resolve
from scaffoldkit.installer import Installer
from scaffoldkit.templates import TemplateSource
from scaffoldkit.utils import get_cwd_name

KNEXFILE = "knexfile.js"
KNEXFILE_TEMPLATE = "knexfile.js.j2"
MIGRATION_DIRS = ("db", "db/migrations")


class DatabaseSetup:
    def __init__(
        self,
        context: ProjectContext,
        mutator: FileMutator,
        templates: TemplateSource,
        installer: Installer,
    ) -> None:
        self.context = context
        self.mutator = mutator
        self.templates = templates
        self.installer = installer

    @property
    def database_name(self) -> str:
        return self.context.active_project_name or get_cwd_name()

    def modify_knex(self) -> list[OperationResult]:
        """Write ``knexfile.js`` and create ``db/migrations``.

        An existing knexfile is overwritten.  Folders that already exist are
        left alone.
        """
        content = self.templates.load_template(KNEXFILE_TEMPLATE, {"database": self.database_name})
        if not content:
            # load_template has already reported the failure.
            return [
                OperationResult.failure(
                    FailureKind.IO_FAILURE,
                    "Error modifying Knex",
                    IOFailure(f"{KNEXFILE_TEMPLATE} could not be loaded"),
                )
            ]

        results = [self.mutator.write_file(KNEXFILE, content)]
        for folder in MIGRATION_DIRS:
            if not os.path.isdir(resolve(folder, self.context)):
                results.append(self.mutator.mkdir(folder))
        return results

    def install_knex_global(self) -> list[OperationResult]:
        """Install knex globally, then create the development database."""
        results = [self.installer.install_global("knex")]
        results.append(self.create_database())
        return results

    def create_database(self) -> OperationResult:
        name = self.database_name
        cmd = ["createdb", name]
        hint = (
            "Error creating db: make sure postgres is installed and running and "
            f"try again by entering: createdb {name}"
        )
        try:
            returncode, _, stderr = self.installer.runner(cmd, capture=True)
        except OSError as exc:
            return self.mutator.policy.report_failure(hint, exc)
        if returncode != 0:
            return self.mutator.policy.report_failure(hint, IOFailure(stderr or f"exit status {returncode}"))
        return OperationResult.success(message=" ".join(cmd))
