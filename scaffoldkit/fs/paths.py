"""Logical path resolution.

A logical path is relative to the current working directory, or to
``./<active project>/`` while a new project is being scaffolded.  Resolution
only looks at the path and the context's project name; it never touches the
filesystem.
"""

from __future__ import annotations

from scaffoldkit.config import ProjectContext
from scaffoldkit.fs.errors import InvalidArgument, PathRequired


def resolve(
    logical_path: str | None,
    context: ProjectContext,
    *,
    directory: bool = False,
) -> str:
    """Return the on-disk path for *logical_path*.

    Args:
        logical_path: Path as given by the caller.
        context: Supplies the active project name.
        directory: Allow an empty path to stand for the project directory
            itself (``./<name>/``).

    Raises:
        InvalidArgument: Empty path and no active project name.
        PathRequired: Empty path for a file operation inside a project.
    """
    name = context.active_project_name
    if not logical_path:
        if not name:
            raise InvalidArgument("No path specified and no active project.")
        if not directory:
            raise PathRequired("No filePath specified.")
        return f"./{name}/"
    if name:
        return f"./{name}/{logical_path}"
    return f"./{logical_path}"
