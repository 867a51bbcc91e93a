"""One object holding every scaffolding component for a single run.

Generators receive a :class:`Toolkit` instead of wiring the file engine,
template source and installer themselves.  All components share one
``ProjectContext``, one console and one change log.
"""

from __future__ import annotations

from rich.console import Console

from scaffoldkit.config import ProjectContext
from scaffoldkit.database import DatabaseSetup
from scaffoldkit.fs.changelog import ChangeLog
from scaffoldkit.fs.errors import ErrorPolicy
from scaffoldkit.fs.manifest import ManifestPatcher
from scaffoldkit.fs.mutator import FileMutator
from scaffoldkit.fs.splicer import AskChoice, TextSplicer, ask_line_with_questionary
from scaffoldkit.installer import Confirm, Installer
from scaffoldkit.templates import TemplateSource
from scaffoldkit.utils import console as default_console


class Toolkit:
    """Wires the scaffolding components around one ``ProjectContext``.

    Attributes:
        context: Shared per-run context.
        changelog: Every status line emitted during the run.
        files: :class:`FileMutator` for writes, moves and directories.
        splicer: :class:`TextSplicer` for line insertion.
        manifest: :class:`ManifestPatcher` for ``package.json`` scripts.
        templates: :class:`TemplateSource` for template files.
        installer: :class:`Installer` for yarn / npm.
        database: :class:`DatabaseSetup` for knex and Postgres.
    """

    def __init__(
        self,
        context: ProjectContext | None = None,
        out: Console | None = None,
        ask_choice: AskChoice | None = ask_line_with_questionary,
        confirm: Confirm | None = None,
    ) -> None:
        self.context = context or ProjectContext()
        self.console = out or default_console
        self.changelog = ChangeLog(self.console)
        self.policy = ErrorPolicy(self.context, self.console)

        self.files = FileMutator(self.context, self.changelog, self.policy)
        self.splicer = TextSplicer(self.context, self.changelog, self.policy, ask_choice)
        self.manifest = ManifestPatcher(self.context, self.changelog, self.policy)
        self.templates = TemplateSource(self.context, self.policy)
        self.installer = Installer(self.context, self.policy, confirm=confirm)
        self.database = DatabaseSetup(self.context, self.files, self.templates, self.installer)
