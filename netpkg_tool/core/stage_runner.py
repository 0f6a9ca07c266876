"""External command execution"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..constants import COMMAND_NOT_FOUND
from ..models.result import StageResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A program, its argument vector and the directory to run it in"""
    program: str
    args: Tuple[str, ...] = field(default_factory=tuple)
    cwd: Optional[Path] = None

    @property
    def argv(self) -> List[str]:
        return [self.program, *(str(arg) for arg in self.args)]

    def __str__(self) -> str:
        return " ".join(self.argv)


class StageRunner:
    """Runs one external command at a time, synchronously"""

    def run(self, command: Command, capture_output: bool = True) -> StageResult:
        """Execute a command and wait for it to exit

        No timeout is applied.

        Args:
            command: Command to execute
            capture_output: Buffer stdout/stderr instead of streaming them

        Returns:
            StageResult with the exit code and any captured output
        """
        logger.info(f"Running: {command}" + (f" (in {command.cwd})" if command.cwd else ""))

        try:
            completed = subprocess.run(
                command.argv,
                cwd=str(command.cwd) if command.cwd else None,
                capture_output=capture_output,
                text=True,
            )
        except OSError as e:
            logger.debug(f"Could not start {command.program}: {e}")
            return StageResult(
                exit_code=COMMAND_NOT_FOUND,
                stderr=f"{command.program}: {e.strerror or e}\n",
                captured=True,
            )

        logger.debug(f"{command.program} exited with code {completed.returncode}")

        return StageResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            captured=capture_output,
        )
