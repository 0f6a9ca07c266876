"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class StageResult:
    """Outcome of one subprocess invocation"""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    captured: bool = True

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def diagnostic(self) -> str:
        """Human readable failure text, stderr preferred over stdout"""
        if self.stderr:
            return self.stderr
        return self.stdout


@dataclass(frozen=True)
class StageOutcome:
    """Tagged stage outcome: Success or Failed(code, diagnostic)

    ``streamed`` marks a diagnostic the operator already saw live.
    """

    succeeded: bool
    code: int = 0
    diagnostic: str = ""
    streamed: bool = False

    @classmethod
    def success(cls) -> 'StageOutcome':
        return cls(succeeded=True)

    @classmethod
    def failed(cls, code: int, diagnostic: str, streamed: bool = False) -> 'StageOutcome':
        return cls(succeeded=False, code=int(code), diagnostic=diagnostic, streamed=streamed)

    @classmethod
    def from_result(cls, result: StageResult, code: int) -> 'StageOutcome':
        """Classify a subprocess result against a stage error code"""
        if result.succeeded:
            return cls.success()
        return cls.failed(code, result.diagnostic, streamed=not result.captured)


class PipelineState(Enum):
    """Pipeline states, strictly linear"""
    START = "start"
    VALIDATED = "validated"
    LOCATED = "located"
    RESTORED = "restored"
    COMPILED = "compiled"
    TRANSFERRED = "transferred"
    PACKAGED = "packaged"
    CLEANED_UP = "cleaned_up"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class StageRecord:
    """One stage the pipeline invoked"""

    name: str
    argv: List[str]
    outcome: StageOutcome


@dataclass
class PipelineResult:
    """Result of a pipeline run"""

    state: PipelineState
    exit_code: int = 0
    message: str = ""
    streamed: bool = False
    output_path: Optional[Path] = None
    stages: List[StageRecord] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None
    error: Optional[Exception] = None

    @property
    def is_success(self) -> bool:
        """Check if the run reached the final state"""
        return self.state == PipelineState.DONE

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    @property
    def duration(self) -> Optional[float]:
        """Get run duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self, state: PipelineState) -> None:
        """Mark the run as finished"""
        self.end_time = datetime.now(timezone.utc)
        self.state = state

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "state": self.state.value,
            "exit_code": self.exit_code,
            "message": self.message,
            "output_path": str(self.output_path) if self.output_path else None,
            "stages": self.stage_names,
            "duration": self.duration,
        }
