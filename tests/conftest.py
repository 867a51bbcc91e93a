"""Shared pytest fixtures for the scaffoldkit test suite.

Provides reusable fixtures for:
- A temporary working directory the tests chdir into
- A recording Rich console
- Contexts, components and a fully wired Toolkit
- Sample package.json manifests
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from scaffoldkit.config import EnvironmentMode, ProjectContext
from scaffoldkit.fs.changelog import ChangeLog
from scaffoldkit.fs.errors import ErrorPolicy
from scaffoldkit.fs.manifest import ManifestPatcher
from scaffoldkit.fs.mutator import FileMutator
from scaffoldkit.fs.splicer import TextSplicer
from scaffoldkit.toolkit import Toolkit


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory that is also the current working directory."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def project_dir(workdir: Path) -> Path:
    """``./my-app`` inside the working directory, already created."""
    path = workdir / "my-app"
    path.mkdir()
    yield path


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_console() -> Console:
    """Rich console that records output instead of writing to the terminal."""
    return Console(file=io.StringIO(), record=True, width=200, color_system=None)


# ---------------------------------------------------------------------------
# Contexts & Components
# ---------------------------------------------------------------------------

@pytest.fixture
def context() -> ProjectContext:
    return ProjectContext()


@pytest.fixture
def project_context() -> ProjectContext:
    return ProjectContext(active_project_name="my-app")


@pytest.fixture
def verbose_context() -> ProjectContext:
    return ProjectContext(environment_mode=EnvironmentMode.VERBOSE)


@pytest.fixture
def changelog(recording_console: Console) -> ChangeLog:
    return ChangeLog(recording_console)


def make_components(
    context: ProjectContext,
    console: Console,
) -> tuple[FileMutator, TextSplicer, ManifestPatcher, ChangeLog]:
    changelog = ChangeLog(console)
    policy = ErrorPolicy(context, console)
    return (
        FileMutator(context, changelog, policy),
        TextSplicer(context, changelog, policy),
        ManifestPatcher(context, changelog, policy),
        changelog,
    )


@pytest.fixture
def mutator(context: ProjectContext, recording_console: Console) -> FileMutator:
    return make_components(context, recording_console)[0]


@pytest.fixture
def project_mutator(project_context: ProjectContext, recording_console: Console) -> FileMutator:
    return make_components(project_context, recording_console)[0]


@pytest.fixture
def toolkit(workdir: Path, recording_console: Console) -> Toolkit:
    """Toolkit rooted in the temporary working directory, prompts disabled."""
    return Toolkit(
        ProjectContext(),
        out=recording_console,
        ask_choice=None,
        confirm=lambda question: False,
    )


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_manifest() -> dict[str, Any]:
    """A realistic package.json with keys the tool does not model."""
    return {
        "name": "my-app",
        "version": "1.0.0",
        "private": True,
        "scripts": {"start": "node server.js"},
        "dependencies": {"express": "^4.18.2"},
        "browserslist": [">0.2%", "not dead"],
    }


@pytest.fixture
def write_manifest():
    """Return a helper writing *data* as ``package.json`` into a directory."""

    def _write(directory: Path, data: Any, trailing_newline: bool = True) -> Path:
        path = directory / "package.json"
        text = json.dumps(data, indent=2)
        path.write_text(text + ("\n" if trailing_newline else ""), encoding="utf-8")
        return path

    return _write
