"""scaffoldkit file engine -- the primitives every generator writes through.

Quick usage::

    from scaffoldkit.config import ProjectContext
    from scaffoldkit.fs import ChangeLog, ErrorPolicy, FileMutator

    context = ProjectContext(active_project_name="my-app")
    changelog = ChangeLog()
    mutator = FileMutator(context, changelog, ErrorPolicy(context))
    mutator.mkdir()
    mutator.write_file("index.js", "console.log('hi')\\n")
"""

from scaffoldkit.fs.changelog import ChangeEntry, ChangeLog, Classification, classify
from scaffoldkit.fs.errors import (
    ErrorPolicy,
    FailureKind,
    InvalidArgument,
    IOFailure,
    ManifestMissing,
    ManifestParseFailure,
    MissingArgument,
    OperationResult,
    PathRequired,
    ScaffoldError,
)
from scaffoldkit.fs.manifest import Manifest, ManifestPatcher
from scaffoldkit.fs.mutator import RESERVED_DIRS, FileMutator
from scaffoldkit.fs.paths import resolve
from scaffoldkit.fs.splicer import TextDocument, TextSplicer

__all__ = [
    "ChangeEntry",
    "ChangeLog",
    "Classification",
    "ErrorPolicy",
    "FailureKind",
    "FileMutator",
    "IOFailure",
    "InvalidArgument",
    "Manifest",
    "ManifestMissing",
    "ManifestParseFailure",
    "ManifestPatcher",
    "MissingArgument",
    "OperationResult",
    "PathRequired",
    "RESERVED_DIRS",
    "ScaffoldError",
    "TextDocument",
    "TextSplicer",
    "classify",
    "resolve",
]
