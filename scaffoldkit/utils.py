"""Shared utility functions for scaffoldkit.

Provides synchronous command execution, path display helpers and Rich-based
status output.  Components write through an injectable ``Console`` so the
module-level ``console`` is only the default.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    capture: bool = False,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command to completion.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams so install output stays visible).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.

    Raises:
        OSError: If the executable cannot be started.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    completed = subprocess.run(
        cmd,
        shell=isinstance(cmd, str),
        cwd=str(cwd) if cwd else None,
        env=merged_env,
        capture_output=capture,
        text=True,
    )
    stdout = (completed.stdout or "").strip() if capture else ""
    stderr = (completed.stderr or "").strip() if capture else ""
    return (completed.returncode, stdout, stderr)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def pretty_path(path: str | Path) -> str:
    """Return *path* without leading ``./`` segments or a trailing separator.

    Examples::

        pretty_path("./test.js")          -> "test.js"
        pretty_path("./my-app/src/")      -> "my-app/src"
    """
    text = str(path)
    while text.startswith("./"):
        text = text[2:]
    if len(text) > 1:
        text = text.rstrip("/")
    return text


def get_cwd_name() -> str:
    """Return the name of the current working directory."""
    return Path(os.getcwd()).name


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[red]{escape(message)}[/red]")


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[yellow]{escape(message)}[/yellow]")
