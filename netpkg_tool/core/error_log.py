"""Append-only diagnostic journal"""

import logging
import os
import shlex
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from .path_resolver import PathResolver
from ..api.exceptions import LogClearError
from ..constants import APP_NAME, ERROR_LOG_FILE, RULE_WIDTH, VERBOSE_LOG_PLACEHOLDER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorLogEntry:
    """One record of the error log"""
    invocation_directory: str
    invocation_args: Sequence[str]
    error_code: int
    message: str
    timestamp_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def format(self) -> str:
        rule = "-" * RULE_WIDTH
        command = " ".join([APP_NAME, shlex.join(self.invocation_args)]).rstrip()
        now = self.timestamp_utc.strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"{rule}\n"
            f"{self.invocation_directory}$ {command}\n"
            f"Errored with code {self.error_code} - ({now}):\n"
            f"\n"
            f"{self.message.rstrip()}\n"
            f"{rule}\n"
        )


class ErrorLog:
    """The error.log file under the configuration directory"""

    def __init__(
        self,
        config_dir: Union[str, Path],
        invocation_args: Sequence[str] = (),
        path_resolver: Optional[PathResolver] = None
    ):
        self.config_dir = Path(config_dir)
        self.path = self.config_dir / ERROR_LOG_FILE
        self.invocation_args = tuple(invocation_args)
        self.path_resolver = path_resolver or PathResolver()

    def append(self, message: str, code: int, streamed: bool = False) -> Optional[ErrorLogEntry]:
        """Append one entry

        Args:
            message: Diagnostic text
            code: Exit code the process ends with
            streamed: The diagnostic was already shown live, log a placeholder

        Returns:
            The written entry, or None when the log could not be written
        """
        entry = ErrorLogEntry(
            invocation_directory=self.path_resolver.display(os.getcwd()),
            invocation_args=self.invocation_args,
            error_code=int(code),
            message=VERBOSE_LOG_PLACEHOLDER if streamed else message,
        )

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(entry.format())
        except OSError as e:
            logger.warning(f"Could not write error log {self.path}: {e}")
            return None

        return entry

    def clear(self) -> None:
        """Delete the log file, leaving the directory in place

        Raises:
            LogClearError: If the file exists and cannot be removed
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug(f"No error log at {self.path}")
        except OSError as e:
            raise LogClearError(f"Could not remove {self.path}: {e}\n")

    def read(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding='utf-8')
