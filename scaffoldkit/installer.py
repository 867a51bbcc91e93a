"""Package manager selection and dependency installation.

Generators accumulate package names in the ``ProjectContext``; once every
file has been written the pipeline installs them in one go with yarn or npm.
The package manager is taken from an existing lockfile when there is one,
otherwise the user is asked (only if yarn is actually available).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.errors import ErrorPolicy, IOFailure, OperationResult
from scaffoldkit.utils import print_success, run_command

Confirm = Callable[[str], "bool | None"]
Runner = Callable[..., tuple[int, str, str]]


def confirm_with_questionary(question: str) -> bool | None:
    import questionary

    return questionary.confirm(question, default=True).ask()


class Installer:
    """Runs yarn or npm for the active project."""

    def __init__(
        self,
        context: ProjectContext,
        policy: ErrorPolicy,
        confirm: Confirm | None = None,
        runner: Runner = run_command,
    ) -> None:
        self.context = context
        self.policy = policy
        self.confirm = confirm or confirm_with_questionary
        self.runner = runner

    @property
    def console(self) -> Console:
        return self.policy.console

    # -- Package manager ---------------------------------------------------

    def can_use_yarn(self) -> bool:
        """Decide from lockfiles, else probe for a yarn executable.

        A ``yarn.lock`` fixes the choice to yarn and a ``package-lock.json``
        to npm; either way ``context.use_yarn`` is updated.
        """
        root = self.context.project_root
        if (root / "yarn.lock").exists():
            self.context.use_yarn = True
            return True
        if (root / "package-lock.json").exists():
            self.context.use_yarn = False
            return False
        try:
            returncode, _, _ = self.runner(["yarnpkg", "--version"], capture=True)
        except OSError:
            return False
        return returncode == 0

    def choose_package_manager(self) -> bool:
        """Return ``True`` for yarn, asking the user when it is still open."""
        if self.context.use_yarn is None:
            yarn_available = self.can_use_yarn()
            # can_use_yarn() settles the choice itself when a lockfile exists.
            if yarn_available and self.context.use_yarn is None:
                self.context.use_yarn = bool(self.confirm("Do you want to use yarn?"))
        return bool(self.context.use_yarn)

    def install_command(self, packages: list[str], dev: bool = False) -> list[str]:
        if self.context.use_yarn:
            return ["yarn", "add", *(["--dev"] if dev else []), *packages]
        return ["npm", "install", "--save-dev" if dev else "--save", *packages]

    def global_install_command(self, package: str) -> list[str]:
        if self.context.use_yarn:
            return ["yarn", "global", "add", package]
        return ["npm", "install", "-g", package]

    # -- Installing --------------------------------------------------------

    def add_dependencies(self, names: str | list[str], dev: bool = False) -> None:
        self.context.add_dependencies(names, dev=dev)

    def install_dependencies(self, packages: str | list[str], dev: bool = False) -> OperationResult:
        """Install *packages* into the project directory."""
        if isinstance(packages, str):
            packages = packages.split()
        if not packages:
            return OperationResult.success(message="Nothing to install")
        return self._run(self.install_command(packages, dev), self.context.project_root)

    def install_global(self, package: str) -> OperationResult:
        return self._run(self.global_install_command(package), None)

    def install_all_packages(self) -> list[OperationResult]:
        """Install everything accumulated in the context."""
        results: list[OperationResult] = []
        if self.context.dependencies:
            results.append(self.install_dependencies(list(self.context.dependencies)))
        if self.context.dev_dependencies:
            results.append(self.install_dependencies(list(self.context.dev_dependencies), dev=True))
        return results

    def _run(self, cmd: list[str], cwd: Path | None) -> OperationResult:
        line = " ".join(cmd)
        self.console.print(f"[dim]$ {escape(line)}[/dim]")
        try:
            returncode, _, _ = self.runner(cmd, cwd=cwd)
        except OSError as exc:
            return self.policy.report_failure(f"Failed to run {line}", exc)
        if returncode != 0:
            return self.policy.report_failure(
                f"Failed to run {line}", IOFailure(f"exit status {returncode}")
            )
        print_success(f"Ran {line}", self.console)
        return OperationResult.success(message=line)
