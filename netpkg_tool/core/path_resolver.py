"""Path resolution module for netpkg-tool"""

import os
from pathlib import Path
from typing import Optional, Tuple, Union

from ..api.exceptions import InvalidPathError
from ..constants import ENV_HOME, ExitCode


class PathResolver:
    """Normalizes and validates user supplied directories"""

    def __init__(self, home: Optional[Union[str, Path]] = None):
        """Initialize path resolver

        Args:
            home: Home directory used for ``~`` abbreviation (default: $HOME)
        """
        if home is None:
            home = os.environ.get(ENV_HOME) or Path.home()
        self.home = Path(home).resolve()

    def canonicalize(self, path: Union[str, Path]) -> Path:
        """Resolve a directory to its canonical absolute form

        Expands ``~``, collapses ``.``/``..`` and follows symlinks, so the
        result does not depend on the caller's working directory.

        Args:
            path: Path to resolve

        Returns:
            Canonical absolute path

        Raises:
            InvalidPathError: If the path is not an existing directory
        """
        expanded = Path(os.path.expanduser(str(path)))
        if not expanded.is_dir():
            raise InvalidPathError(
                f"{path} is not a valid folder\n",
                ExitCode.MISSING_ARGUMENTS,
                path=str(path),
            )
        return expanded.resolve()

    def is_directory(self, path: Optional[Union[str, Path]]) -> bool:
        if not path:
            return False
        return Path(os.path.expanduser(str(path))).is_dir()

    def validate_pair(
        self,
        project: Optional[str],
        destination: Optional[str]
    ) -> Tuple[Path, Path]:
        """Validate the project and destination arguments together

        Args:
            project: Project directory argument
            destination: Destination directory argument

        Returns:
            Tuple of canonical (project, destination) paths

        Raises:
            InvalidPathError: exit code 1 when an argument is missing or both
                are invalid, 3 for an invalid project, 2 for an invalid
                destination
        """
        project_ok = self.is_directory(project)
        destination_ok = self.is_directory(destination)

        if not project or not destination or not (project_ok or destination_ok):
            raise InvalidPathError(
                "You must specify a valid .NET project AND destination folder.\n",
                ExitCode.MISSING_ARGUMENTS,
            )
        if not project_ok:
            raise InvalidPathError(
                f"{project} is not a valid folder\n",
                ExitCode.INVALID_PROJECT,
                path=project,
            )
        if not destination_ok:
            raise InvalidPathError(
                f"{destination} is not a valid folder\n",
                ExitCode.INVALID_DESTINATION,
                path=destination,
            )

        return self.canonicalize(project), self.canonicalize(destination)

    def display(self, path: Union[str, Path]) -> str:
        """Render a path with the home directory abbreviated to ``~``"""
        path = Path(path)
        try:
            relative = path.relative_to(self.home)
        except ValueError:
            return str(path)

        if relative == Path('.'):
            return "~"
        return f"~/{relative}"
