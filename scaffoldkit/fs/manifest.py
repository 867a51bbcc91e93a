"""Script registration in the project's ``package.json``.

The manifest is modelled with a typed ``scripts`` mapping and an open bag of
extra fields, so everything the tool does not know about survives a
read-modify-write cycle, in its original key order.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.changelog import ChangeLog, Classification
from scaffoldkit.fs.errors import (
    ErrorPolicy,
    FailureKind,
    ManifestMissing,
    ManifestParseFailure,
    OperationResult,
)
from scaffoldkit.fs.paths import resolve
from scaffoldkit.utils import print_warning

MANIFEST_NAME = "package.json"


class Manifest(BaseModel):
    """A ``package.json`` document."""

    model_config = ConfigDict(extra="allow")

    scripts: dict[str, str] = Field(default_factory=dict)

    _key_order: list[str] = PrivateAttr(default_factory=list)
    _trailing_newline: bool = PrivateAttr(default=False)

    @classmethod
    def parse(cls, raw: str) -> "Manifest":
        """Parse manifest text.

        Raises:
            ManifestParseFailure: Not JSON, not an object, or ``scripts`` is
                not a string-to-string mapping.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ManifestParseFailure(f"{MANIFEST_NAME} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestParseFailure(f"{MANIFEST_NAME} must contain a JSON object")
        try:
            manifest = cls.model_validate(data)
        except ValidationError as exc:
            raise ManifestParseFailure(f"{MANIFEST_NAME} has invalid scripts: {exc}") from exc
        manifest._key_order = list(data)
        manifest._trailing_newline = raw.endswith("\n")
        return manifest

    def to_dict(self) -> dict[str, Any]:
        """Return the document with its original key order."""
        fields = {"scripts": self.scripts, **(self.model_extra or {})}
        ordered = {key: fields[key] for key in self._key_order if key in fields}
        for key, value in fields.items():
            ordered.setdefault(key, value)
        return ordered

    def dumps(self) -> str:
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        return text + "\n" if self._trailing_newline else text


class ManifestPatcher:
    """Reads, updates and rewrites the active project's manifest."""

    def __init__(
        self,
        context: ProjectContext,
        changelog: ChangeLog,
        policy: ErrorPolicy,
    ) -> None:
        self.context = context
        self.changelog = changelog
        self.policy = policy

    @property
    def path(self) -> str:
        return resolve(MANIFEST_NAME, self.context)

    def load(self) -> Manifest | OperationResult:
        """Return the parsed manifest, or the reported failure."""
        path = self.path
        try:
            with open(path, encoding="utf-8") as fh:
                raw = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            return self.policy.report_failure(
                f"Couldn't read {path}", ManifestMissing(str(exc)), path=path
            )
        try:
            return Manifest.parse(raw)
        except ManifestParseFailure as exc:
            return self.policy.report_failure(f"Couldn't parse {path}", exc, path=path)

    def add_script(self, command: str, script: str) -> OperationResult:
        """Register ``scripts[command] = script``.

        An existing entry is replaced; a warning names the old body when it
        differs.
        """
        manifest = self.load()
        if isinstance(manifest, OperationResult):
            return manifest

        previous = manifest.scripts.get(command)
        if previous is not None and previous != script:
            print_warning(
                f"Replacing {command} script in {MANIFEST_NAME} (was: {previous})",
                self.policy.console,
            )
        manifest.scripts[command] = script

        path = self.path
        try:
            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(manifest.dumps())
        except OSError as exc:
            return self.policy.report_failure(
                f"Failed to write to file {path}", exc, kind=FailureKind.IO_FAILURE, path=path
            )

        subject = f"{command} script into {MANIFEST_NAME}"
        self.changelog.record(Classification.INSERT, subject)
        return OperationResult.success(Classification.INSERT, path, f"insert {subject}")

    def is_script_taken(self, command: str) -> bool:
        manifest = self.load()
        if isinstance(manifest, OperationResult):
            return False
        return command in manifest.scripts
