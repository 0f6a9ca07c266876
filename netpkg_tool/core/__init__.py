"""Core functionality for netpkg-tool"""

from .path_resolver import PathResolver
from .project_locator import ProjectLocator
from .stage_runner import Command, StageRunner
from .error_log import ErrorLog, ErrorLogEntry

__all__ = [
    "PathResolver",
    "ProjectLocator",
    "Command",
    "StageRunner",
    "ErrorLog",
    "ErrorLogEntry",
]
