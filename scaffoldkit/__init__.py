"""scaffoldkit -- the file engine behind a project-scaffolding CLI.

Generators write files, patch existing ones and register package.json
scripts through the primitives in :mod:`scaffoldkit.fs`; a
:class:`~scaffoldkit.toolkit.Toolkit` wires them around one
:class:`~scaffoldkit.config.ProjectContext`.
"""

from scaffoldkit.config import EnvironmentMode, ProjectContext, TemplateMode
from scaffoldkit.toolkit import Toolkit

__version__ = "0.1.0"

__all__ = [
    "EnvironmentMode",
    "ProjectContext",
    "TemplateMode",
    "Toolkit",
]
