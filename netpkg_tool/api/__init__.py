"""Public API for netpkg-tool"""

from .packager import Packager, package
from .exceptions import (
    NetpkgError,
    InvalidPathError,
    ConfigError,
    LogClearError,
    ProjectError,
    ProjectNotFoundError,
    AmbiguousProjectError,
    ManifestParseError,
    StageError,
)

__all__ = [
    "Packager",
    "package",
    "NetpkgError",
    "InvalidPathError",
    "ConfigError",
    "LogClearError",
    "ProjectError",
    "ProjectNotFoundError",
    "AmbiguousProjectError",
    "ManifestParseError",
    "StageError",
]
