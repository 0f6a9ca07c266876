"""Packager API for building AppImages without the CLI"""

from pathlib import Path
from typing import Optional, Union

from ..core import PathResolver, StageRunner
from ..models import PipelineResult, ToolSettings
from ..services.config_service import ConfigService
from ..services.pipeline import Pipeline, PipelineEvents, configure
from .exceptions import ProjectError, StageError


class Packager:
    """Packager class for AppImage builds"""

    def __init__(
        self,
        settings: Optional[ToolSettings] = None,
        runner: Optional[StageRunner] = None,
        events: Optional[PipelineEvents] = None
    ):
        """
        Initialize packager

        Args:
            settings: Toolchain settings (default: loaded from config.yaml and environment)
            runner: Command runner
            events: Progress observer
        """
        self.settings = settings or ConfigService().load_settings()
        self.runner = runner or StageRunner()
        self.events = events
        self.path_resolver = PathResolver()

    def package(self,
                project: Union[str, Path],
                destination: Union[str, Path],
                name: Optional[str] = None,
                **options) -> PipelineResult:
        """
        Build an AppImage from a .NET project directory

        Args:
            project: Directory holding exactly one project manifest
            destination: Directory receiving the AppImage
            name: Output name (default: the project's assembly name)
            **options: Other options
                - verbose: Stream tool output
                - skip_restore: Skip ``dotnet restore``
                - self_contained: Self-contained deployment
                - keep_temp_files: Keep the temporary AppDir

        Returns:
            PipelineResult of a completed run

        Raises:
            InvalidPathError: If a directory is missing or invalid
            ProjectError: If the manifest is missing, ambiguous or unreadable
            StageError: If an external command fails
        """
        config = configure(
            str(project),
            str(destination),
            app_name=name,
            verbose=options.get('verbose', False),
            skip_restore=options.get('skip_restore', False),
            self_contained=options.get('self_contained', False),
            keep_temp_files=options.get('keep_temp_files', False),
            path_resolver=self.path_resolver,
        )

        pipeline = Pipeline(config, self.settings, runner=self.runner, events=self.events)
        result = pipeline.run()

        if result.is_success:
            return result

        if result.error is not None:
            raise result.error

        failed = [stage for stage in result.stages if not stage.outcome.succeeded]
        if failed:
            raise StageError(failed[-1].name, result.message, result.exit_code)
        raise ProjectError(result.message, result.exit_code)


def package(project: Union[str, Path],
            destination: Union[str, Path],
            name: Optional[str] = None,
            **options) -> PipelineResult:
    """
    Convenience function for building an AppImage

    Args:
        project: Project directory
        destination: Output directory
        name: Output name
        **options: See Packager.package

    Returns:
        PipelineResult
    """
    return Packager().package(project, destination, name, **options)
