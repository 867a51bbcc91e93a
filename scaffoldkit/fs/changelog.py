"""Change classification and status lines.

Each successful file operation emits one line of the form
``<label> <subject>``, where the label is one of the ``Classification``
values.  The labels are stable so downstream tooling can parse the output;
colours are presentation only.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.markup import escape

from scaffoldkit.utils import console as default_console


class Classification(str, Enum):
    CREATE = "create"
    MUTATE = "mutate"
    DELETE = "delete"
    MOVE = "move"
    APPEND = "append"
    INSERT = "insert"

    @property
    def color(self) -> str:
        return _COLORS[self]


_COLORS: dict[Classification, str] = {
    Classification.CREATE: "green",
    Classification.MUTATE: "yellow",
    Classification.DELETE: "red",
    Classification.MOVE: "yellow",
    Classification.APPEND: "cyan",
    Classification.INSERT: "cyan",
}


def classify(path: str) -> Classification:
    """Return ``MUTATE`` if *path* exists, else ``CREATE``.

    Must be called before the write, which would make the path exist.
    """
    return Classification.MUTATE if os.path.exists(path) else Classification.CREATE


@dataclass(frozen=True)
class ChangeEntry:
    classification: Classification
    subject: str

    def __str__(self) -> str:
        return f"{self.classification.value} {self.subject}"


class ChangeLog:
    """Prints classified status lines and keeps them in ``entries``."""

    def __init__(self, out: Console | None = None) -> None:
        self.console = out or default_console
        self.entries: list[ChangeEntry] = []

    def record(self, classification: Classification, subject: str) -> ChangeEntry:
        entry = ChangeEntry(classification, subject)
        self.entries.append(entry)
        color = classification.color
        self.console.print(f"[{color}]{classification.value}[/{color}] {escape(subject)}")
        return entry

    def note(self, classification: Classification, subject: str, message: str) -> ChangeEntry:
        """Record a change but print a caller-supplied *message* instead."""
        entry = ChangeEntry(classification, subject)
        self.entries.append(entry)
        self.console.print(escape(message))
        return entry
