"""File mutation primitives.

Every code-generation path funnels its writes through :class:`FileMutator`.
Each operation validates its arguments before touching the disk, resolves
logical paths against the active project, performs one filesystem call and
reports the outcome.  Nothing is raised past the operation boundary; the
returned :class:`OperationResult` carries success or the typed failure.
"""

from __future__ import annotations

import json
import os
from typing import Any

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.changelog import ChangeLog, Classification, classify
from scaffoldkit.fs.errors import (
    ErrorPolicy,
    InvalidArgument,
    MissingArgument,
    OperationResult,
    PathRequired,
)
from scaffoldkit.fs.paths import resolve
from scaffoldkit.utils import pretty_path

# Directories left in place by move_all_files_in_dir.
RESERVED_DIRS: frozenset[str] = frozenset({"actions", "components", "store", "api"})

_RENAME_USAGE = "Function rename() requires oldName and newName to be passed as parameters"


class FileMutator:
    """Write, append, create, move and delete files for a project."""

    def __init__(
        self,
        context: ProjectContext,
        changelog: ChangeLog,
        policy: ErrorPolicy,
    ) -> None:
        self.context = context
        self.changelog = changelog
        self.policy = policy

    # -- Files -------------------------------------------------------------

    def write_file(
        self,
        path: str | None,
        content: str | None = "",
        message: str | None = None,
    ) -> OperationResult:
        """Write *content* to the resolved *path*, replacing any existing file.

        The status line says ``mutate`` when the file existed beforehand and
        ``create`` otherwise; *message* replaces it when given.
        """
        if not path:
            return self.policy.report_invalid(PathRequired("No filePath specified."))

        target = resolve(path, self.context)
        label = classify(target)
        try:
            _write_text(target, content or "")
        except OSError as exc:
            return self.policy.report_failure(f"Couldn't create file {target}", exc, path=target)
        return self._done(label, target, message)

    def write_json_file(self, path: str | None, data: Any) -> OperationResult:
        """Serialise *data* with two-space indentation and write it."""
        if not path:
            return self.policy.report_invalid(PathRequired("No filePath specified."))

        target = resolve(path, self.context)
        label = classify(target)
        try:
            _write_text(target, json.dumps(data, indent=2, ensure_ascii=False))
        except (OSError, TypeError, ValueError) as exc:
            return self.policy.report_failure(f"Failed to write to file {target}", exc, path=target)
        return self._done(label, target)

    def append_file(self, path: str | None, content: str | None) -> OperationResult:
        if not path:
            return self.policy.report_invalid(MissingArgument("File not provided."))
        if not content:
            return self.policy.report_invalid(MissingArgument("No string to append provided."))

        target = resolve(path, self.context)
        try:
            with open(target, "a", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as exc:
            return self.policy.report_failure(f"Failed to append {target}", exc, path=target)
        return self._done(Classification.APPEND, target)

    # -- Directories -------------------------------------------------------

    def mkdir(self, path: str | None = None, message: str | None = None) -> OperationResult:
        """Create one directory.

        An empty *path* creates the active project directory itself.  Parents
        are not created; a missing parent is reported as an IO failure.
        """
        try:
            target = resolve(path, self.context, directory=True)
        except InvalidArgument:
            return self.policy.report_invalid(InvalidArgument("Unable to create folder"))

        try:
            os.mkdir(target)
        except OSError as exc:
            return self.policy.report_failure(f"Error making directory {target}", exc, path=target)
        return self._done(Classification.CREATE, target, message)

    def check_scripts_folder_exist(self) -> list[OperationResult]:
        """Create ``scripts`` and ``scripts/templates`` where missing."""
        results: list[OperationResult] = []
        for folder in ("scripts", "scripts/templates"):
            if not os.path.exists(resolve(folder, self.context)):
                results.append(self.mkdir(folder))
        return results

    # -- Moving ------------------------------------------------------------

    def rename(self, old_path: str | None = None, new_path: str | None = None) -> OperationResult:
        """Move *old_path* to *new_path*.

        Both paths are used as given; they are not resolved against the
        active project.
        """
        if not old_path:
            return self.policy.report_invalid(
                MissingArgument(f"Error: First Parameter oldName is Undefined\n\t{_RENAME_USAGE}")
            )
        if not new_path:
            return self.policy.report_invalid(
                MissingArgument(f"Error: Second Parameter newName is Undefined\n\t{_RENAME_USAGE}")
            )

        try:
            os.rename(old_path, new_path)
        except OSError as exc:
            return self.policy.report_failure(f"Error renaming {old_path}", exc, path=old_path)

        subject = f"{old_path.removeprefix('./')} into {new_path.removeprefix('./')}"
        self.changelog.record(Classification.MOVE, subject)
        return OperationResult.success(Classification.MOVE, new_path, f"move {subject}")

    def move_all_files_in_dir(
        self,
        src_dir: str | None = None,
        dst_dir: str | None = None,
    ) -> OperationResult:
        """Move every entry of *src_dir* into *dst_dir*, then remove *src_dir*.

        Entries named after ``RESERVED_DIRS`` stay where they are, in which
        case the final removal fails and is reported.  A failed move is
        reported on its own and the loop carries on.
        """
        if not src_dir:
            return self.policy.report_invalid(MissingArgument("No directory to search specified."))
        if not dst_dir:
            return self.policy.report_invalid(
                MissingArgument("No directory to move files to specified.")
            )

        try:
            entries = sorted(os.listdir(src_dir))
        except OSError as exc:
            return self.policy.report_failure("Failed to read directory", exc, path=src_dir)

        children = [
            self.rename(f"{src_dir}/{entry}", f"{dst_dir}/{entry}")
            for entry in entries
            if entry not in RESERVED_DIRS
        ]

        try:
            os.rmdir(src_dir)
        except OSError as exc:
            result = self.policy.report_failure(
                f"Failed to delete {pretty_path(src_dir)}", exc, path=src_dir
            )
        else:
            result = self._done(Classification.DELETE, src_dir)
        result.children = children
        return result

    # -- Internal ----------------------------------------------------------

    def _done(
        self,
        label: Classification,
        target: str,
        message: str | None = None,
    ) -> OperationResult:
        shown = pretty_path(target)
        if message:
            self.changelog.note(label, shown, message)
            return OperationResult.success(label, target, message)
        self.changelog.record(label, shown)
        return OperationResult.success(label, target, f"{label.value} {shown}")


def _write_text(path: str, content: str) -> None:
    """Write *content* verbatim, without newline translation."""
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
