"""Line-targeted text insertion.

:class:`TextSplicer` patches an existing file by inserting one new line at a
chosen position.  The position (the *locator*) is a 0-based line index, the
text of an existing line to insert after, or ``None`` to let the user pick a
line through an injected ``ask_choice`` callable.

Files are split on ``\\n`` only, so a trailing newline yields an empty last
element and ``\\r`` characters stay attached to their lines.  Joining the
lines back reproduces the original bytes exactly.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.changelog import ChangeLog, Classification
from scaffoldkit.fs.errors import (
    ErrorPolicy,
    InvalidArgument,
    MissingArgument,
    OperationResult,
)
from scaffoldkit.utils import pretty_path

AskChoice = Callable[[Sequence[str]], "str | None"]
Locator = int | str | None


@dataclass
class TextDocument:
    """A file's contents as an ordered list of lines."""

    lines: list[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text.split("\n"))

    def to_text(self) -> str:
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def index_after(self, match: str) -> int:
        """Insertion index directly after the first line equal to *match*.

        When no line matches, the index points past the end so the new line
        is appended.
        """
        try:
            return self.lines.index(match) + 1
        except ValueError:
            return len(self.lines) + 1

    def insert(self, index: int, content: str) -> None:
        """Insert *content* as a line at *index*; past-the-end appends."""
        self.lines.insert(min(index, len(self.lines)), content)

    def splice(self, content: str, locator: int | str) -> None:
        """Insert *content* at the position described by *locator*."""
        if isinstance(locator, int) and not isinstance(locator, bool):
            if locator < 0:
                raise InvalidArgument(f"Line number must not be negative, got {locator}.")
            self.insert(locator, content)
        else:
            self.insert(self.index_after(str(locator)), content)


def ask_line_with_questionary(lines: Sequence[str]) -> str | None:
    """Ask the user to pick the line to insert below."""
    import questionary

    return questionary.select(
        "Select a line to insert below",
        choices=[questionary.Choice(title=line or " ", value=line) for line in lines],
    ).ask()


class TextSplicer:
    """Inserts content into existing files without rewriting them wholesale."""

    def __init__(
        self,
        context: ProjectContext,
        changelog: ChangeLog,
        policy: ErrorPolicy,
        ask_choice: AskChoice | None = None,
    ) -> None:
        self.context = context
        self.changelog = changelog
        self.policy = policy
        self.ask_choice = ask_choice

    def insert(
        self,
        path: str | None,
        content: str | None,
        locator: Locator = None,
    ) -> OperationResult:
        """Insert *content* as a new line of the file at *path*.

        *path* is read and written as given; callers wanting project-relative
        behaviour resolve it first.
        """
        if not path:
            return self.policy.report_invalid(MissingArgument("No file specified."))
        if not content:
            return self.policy.report_invalid(MissingArgument("No string to insert specified."))

        shown = pretty_path(path)
        try:
            with open(path, encoding="utf-8", newline="") as fh:
                document = TextDocument.from_text(fh.read())

            if locator is None:
                locator = self._ask(document)
                if locator is None:
                    return self.policy.report_invalid(MissingArgument("No line selected."))

            document.splice(content, locator)

            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(document.to_text())
        except InvalidArgument as exc:
            return self.policy.report_invalid(exc)
        except (OSError, UnicodeDecodeError) as exc:
            return self.policy.report_failure(f"Failed to insert into {shown}", exc, path=path)

        self.changelog.record(Classification.INSERT, shown)
        return OperationResult.success(Classification.INSERT, path, f"insert {shown}")

    def _ask(self, document: TextDocument) -> str | None:
        if self.ask_choice is None:
            return None
        return self.ask_choice(list(document.lines))
