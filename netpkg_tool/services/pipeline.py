"""Build pipeline orchestration

The pipeline is a strictly linear state machine::

    START -> VALIDATED -> LOCATED -> RESTORED -> COMPILED -> TRANSFERRED
          -> PACKAGED -> CLEANED_UP -> DONE

Any state may move to ABORTED, carrying the exit code of the step that
failed. Each stage is one external command; a stage either succeeds or
the run stops there. Nothing is retried and nothing is rolled back.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..__version__ import __version__
from ..api.exceptions import InvalidPathError, ProjectError
from ..constants import ExitCode
from ..core.path_resolver import PathResolver
from ..core.project_locator import ProjectLocator
from ..core.stage_runner import Command, StageRunner
from ..models.config import Configuration, ToolSettings
from ..models.project import ProjectDescriptor
from ..models.result import (
    PipelineResult,
    PipelineState,
    StageOutcome,
    StageRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_TRANSFER_HELPER = (sys.executable, "-m", "netpkg_tool.helpers.transfer")


class PipelineEvents:
    """Observer of pipeline progress; the default ignores everything"""

    def task(self, source: Path, destination: Path) -> None:
        pass

    def stage_started(self, label: str, streaming: bool) -> None:
        pass

    def stage_finished(self, label: str, succeeded: bool) -> None:
        pass

    def finished(self, output_path: Path) -> None:
        pass


@dataclass(frozen=True)
class Stage:
    """One planned pipeline step"""
    name: str
    label: str
    command: Command
    error_code: int
    reaches: PipelineState
    capture_output: bool = True


def check_app_name(app_name: str) -> None:
    """Reject output names that would leave the destination or temp root

    Raises:
        InvalidPathError: If the name is empty, ``.``/``..`` or has a separator
    """
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if app_name in ("", ".", "..") or any(sep in app_name for sep in separators):
        raise InvalidPathError(
            f"Invalid app name {app_name!r}: expected a plain file name\n",
            ExitCode.MISSING_ARGUMENTS,
            path=app_name,
        )


def configure(
    project: Optional[str],
    destination: Optional[str],
    app_name: Optional[str] = None,
    verbose: bool = False,
    skip_restore: bool = False,
    self_contained: bool = False,
    keep_temp_files: bool = False,
    raw_args: Sequence[str] = (),
    path_resolver: Optional[PathResolver] = None,
) -> Configuration:
    """Validate invocation arguments into a Configuration (START -> VALIDATED)

    Raises:
        InvalidPathError: If either directory argument is missing or invalid,
            or the output name is not a plain file name
    """
    resolver = path_resolver or PathResolver()
    project_path, destination_path = resolver.validate_pair(project, destination)
    if app_name is not None:
        check_app_name(app_name)

    return Configuration(
        project_path=project_path,
        destination_path=destination_path,
        app_name=app_name,
        verbose=verbose,
        skip_restore=skip_restore,
        self_contained=self_contained,
        keep_temp_files=keep_temp_files,
        raw_args=tuple(raw_args),
    )


class Pipeline:
    """Drives one project through restore, compile, transfer, package and cleanup"""

    def __init__(
        self,
        config: Configuration,
        settings: Optional[ToolSettings] = None,
        runner: Optional[StageRunner] = None,
        events: Optional[PipelineEvents] = None,
        locator: Optional[ProjectLocator] = None,
        tool_version: str = __version__,
    ):
        """Initialize the pipeline

        Args:
            config: Validated invocation configuration
            settings: Toolchain settings
            runner: Command runner, replaceable for tests
            events: Progress observer
            locator: Project manifest locator
            tool_version: Version passed to the transfer helper
        """
        self.config = config
        self.settings = settings or ToolSettings()
        self.runner = runner or StageRunner()
        self.events = events or PipelineEvents()
        self.locator = locator or ProjectLocator(self.settings.manifest_extensions)
        self.tool_version = tool_version
        self.state = PipelineState.VALIDATED

    def run(self) -> PipelineResult:
        """Run every stage in order

        Returns:
            PipelineResult in state DONE, or ABORTED with the failing exit code
        """
        result = PipelineResult(state=self.state)

        try:
            project = self.locator.locate(self.config.project_path)
        except ProjectError as e:
            return self._abort(result, e.exit_code, e.message, error=e)

        self._advance(result, PipelineState.LOCATED)

        if not self.config.has_custom_name:
            self.config = self.config.with_app_name(project.assembly_name)

        output_path = self.config.output_path()
        result.output_path = output_path
        self.events.task(project.project_directory, output_path)

        for stage in self.plan(project):
            outcome = self._run_stage(stage, result)
            if not outcome.succeeded:
                return self._abort(result, outcome.code, outcome.diagnostic, outcome.streamed)
            self._advance(result, stage.reaches)

        self.events.finished(output_path)
        self._advance(result, PipelineState.DONE)
        result.complete(PipelineState.DONE)
        return result

    def plan(self, project: ProjectDescriptor) -> List[Stage]:
        """Stages to run for a located project, skipped stages left out"""
        stages = []

        if self.config.skip_restore:
            logger.info("Skipping restore (--compile)")
        else:
            stages.append(self.restore_stage(project))

        stages.append(self.compile_stage(project))
        stages.append(self.transfer_stage(project))
        stages.append(self.package_stage())

        if self.config.keep_temp_files:
            logger.info(f"Keeping {self.staging_dir} (--keep)")
        else:
            stages.append(self.cleanup_stage())

        return stages

    @property
    def staging_dir(self) -> Path:
        return self.settings.staging_dir(self.config.app_name)

    def restore_stage(self, project: ProjectDescriptor) -> Stage:
        return Stage(
            name="restore",
            label="Restoring .NET project dependencies...",
            command=Command(self.settings.dotnet, ("restore",), cwd=project.project_directory),
            error_code=ExitCode.RESTORE_FAILED,
            reaches=PipelineState.RESTORED,
            capture_output=not self.config.verbose,
        )

    def compile_stage(self, project: ProjectDescriptor) -> Stage:
        args: Tuple[str, ...] = ("publish", "-c", self.settings.build_configuration)
        if self.config.self_contained:
            args += ("-r", self.settings.runtime_identifier)
        args += ("--no-restore",)

        return Stage(
            name="compile",
            label="Compiling .NET project...",
            command=Command(self.settings.dotnet, args, cwd=project.project_directory),
            error_code=ExitCode.COMPILE_FAILED,
            reaches=PipelineState.COMPILED,
            capture_output=not self.config.verbose,
        )

    def transfer_stage(self, project: ProjectDescriptor) -> Stage:
        helper = self.settings.transfer_helper or DEFAULT_TRANSFER_HELPER
        args = tuple(helper[1:]) + (
            str(project.project_directory),
            project.assembly_name,
            self.config.app_name,
            project.target_runtime_version,
            self.tool_version,
            str(self.staging_dir),
            "--configuration", self.settings.build_configuration,
        )
        if self.config.self_contained:
            args += ("--scd", self.settings.runtime_identifier)

        return Stage(
            name="transfer",
            label="Transferring files...",
            command=Command(helper[0], args),
            error_code=ExitCode.TRANSFER_FAILED,
            reaches=PipelineState.TRANSFERRED,
        )

    def package_stage(self) -> Stage:
        return Stage(
            name="package",
            label="Compressing with appimagetool...",
            command=Command(
                self.settings.appimagetool,
                ("-n", str(self.staging_dir), str(self.config.output_path())),
            ),
            error_code=ExitCode.PACKAGE_FAILED,
            reaches=PipelineState.PACKAGED,
            capture_output=not self.config.verbose,
        )

    def cleanup_stage(self) -> Stage:
        # A failing removal aborts like any other stage, even though the
        # directory may simply be gone already.
        return Stage(
            name="cleanup",
            label="Deleting temporary files...",
            command=Command("rm", ("-rf", str(self.staging_dir))),
            error_code=ExitCode.CLEANUP_FAILED,
            reaches=PipelineState.CLEANED_UP,
        )

    def _run_stage(self, stage: Stage, result: PipelineResult) -> StageOutcome:
        self.events.stage_started(stage.label, streaming=not stage.capture_output)

        stage_result = self.runner.run(stage.command, capture_output=stage.capture_output)
        outcome = StageOutcome.from_result(stage_result, stage.error_code)

        result.stages.append(StageRecord(stage.name, stage.command.argv, outcome))
        self.events.stage_finished(stage.label, outcome.succeeded)

        if not outcome.succeeded:
            logger.info(f"Stage {stage.name} failed with exit code {stage_result.exit_code}")
        return outcome

    def _advance(self, result: PipelineResult, state: PipelineState) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state
        result.state = state

    def _abort(
        self,
        result: PipelineResult,
        code: int,
        message: str,
        streamed: bool = False,
        error: Optional[Exception] = None
    ) -> PipelineResult:
        logger.debug(f"{self.state.value} -> aborted ({code})")
        self.state = PipelineState.ABORTED
        result.exit_code = int(code)
        result.message = message
        result.streamed = streamed
        result.error = error
        result.complete(PipelineState.ABORTED)
        return result
