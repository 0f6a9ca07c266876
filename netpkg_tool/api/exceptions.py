"""Exception definitions for netpkg-tool API"""

from ..constants import ExitCode


class NetpkgError(Exception):
    """Base exception for netpkg-tool"""

    def __init__(self, message: str, exit_code: int = ExitCode.MISSING_ARGUMENTS):
        super().__init__(message)
        self.message = message
        self.exit_code = int(exit_code)


class InvalidPathError(NetpkgError):
    """A user supplied path does not denote an existing directory"""

    def __init__(self, message: str, exit_code: int = ExitCode.MISSING_ARGUMENTS, path: str = None):
        super().__init__(message, exit_code)
        self.path = path


class ConfigError(NetpkgError):
    """Settings file error"""

    def __init__(self, message: str):
        super().__init__(message, ExitCode.INVALID_SETTINGS)


class LogClearError(NetpkgError):
    """The error log could not be removed"""

    def __init__(self, message: str):
        super().__init__(message, ExitCode.LOG_CLEAR_FAILED)


class ProjectError(NetpkgError):
    """Project manifest related error"""
    pass


class ProjectNotFoundError(ProjectError):
    """No manifest in the project directory"""

    def __init__(self, directory: str, extensions=(".csproj",)):
        kinds = "/".join(extensions)
        super().__init__(f"No {kinds} found in {directory}\n", ExitCode.NO_MANIFEST)
        self.directory = directory


class AmbiguousProjectError(ProjectError):
    """More than one manifest in the project directory"""

    def __init__(self, directory: str, candidates=None, extensions=(".csproj",)):
        kinds = "/".join(extensions)
        super().__init__(f"More than one {kinds} found in {directory}\n", ExitCode.AMBIGUOUS_MANIFEST)
        self.directory = directory
        self.candidates = list(candidates or [])


class ManifestParseError(ProjectError):
    """Manifest is not valid XML or lacks the target framework"""

    def __init__(self, message: str):
        super().__init__(message, ExitCode.UNREADABLE_MANIFEST)


class StageError(NetpkgError):
    """An external command of a pipeline stage exited non-zero"""

    def __init__(self, stage: str, message: str, exit_code: int):
        super().__init__(message, exit_code)
        self.stage = stage
