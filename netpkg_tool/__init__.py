"""netpkg-tool - package .NET projects as AppImages.

The tool drives ``dotnet`` and ``appimagetool`` through a fixed sequence of
stages: restore, compile, transfer, package and cleanup.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .api.packager import Packager, package

# Data models
from .models import Configuration, ToolSettings, ProjectDescriptor, PipelineResult, PipelineState

# Exceptions
from .api.exceptions import (
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
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "Packager",
    "package",

    # Data models
    "Configuration",
    "ToolSettings",
    "ProjectDescriptor",
    "PipelineResult",
    "PipelineState",

    # Exceptions
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
