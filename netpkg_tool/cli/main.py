# netpkg_tool/cli/main.py
"""Main CLI entry point for netpkg-tool"""

import logging
import sys
from typing import Optional

import click
from rich.logging import RichHandler

from .utils.output import Presenter, console
from ..api.exceptions import NetpkgError
from ..constants import APP_NAME, LOG_FORMAT, ExitCode
from ..core import ErrorLog, PathResolver, StageRunner
from ..services.config_service import ConfigService
from ..services.pipeline import Pipeline, configure

logger = logging.getLogger(__name__)

CLEAR_LOG_FLAG = "--clear-log"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )
    logging.getLogger("netpkg_tool").setLevel(level)


class NetpkgCommand(click.Command):
    """Command that keeps the raw argument list for the error log

    Usage errors (unknown flag, ``--name`` without a value) end the run
    with exit code 1 instead of click's default 2, which is reserved for
    an invalid destination.
    """

    def parse_args(self, ctx, args):
        ctx.meta['raw_args'] = tuple(args)
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            # Options were not parsed, so --verbose/--debug are unknown here
            setup_logging()
            presenter = Presenter()
            presenter.hello()
            error_log = ErrorLog(ConfigService().config_dir, args)
            _exit_with_error(ctx, presenter, error_log, e.format_message(), ExitCode.MISSING_ARGUMENTS)


def _exit_with_error(
    ctx: click.Context,
    presenter: Presenter,
    error_log: ErrorLog,
    message: str,
    code: int,
    streamed: bool = False
) -> None:
    """Report a fatal error once, on screen and in the log, then exit"""
    if not streamed:
        presenter.error(message)
    error_log.append(message, code, streamed=streamed)
    presenter.bye()
    ctx.exit(int(code))


def _clear_log(ctx: click.Context, presenter: Presenter, error_log: ErrorLog) -> None:
    presenter.status(f"Clear log at {presenter.path_resolver.display(error_log.path)}")
    try:
        error_log.clear()
    except NetpkgError as e:
        presenter.stage_finished("clear-log", False)
        _exit_with_error(ctx, presenter, error_log, e.message, e.exit_code)
    presenter.stage_finished("clear-log", True)
    presenter.bye()
    ctx.exit(ExitCode.SUCCESS)


@click.command(
    name=APP_NAME,
    cls=NetpkgCommand,
    add_help_option=False,
    context_settings={'allow_extra_args': True},
)
@click.argument('project', required=False)
@click.argument('destination', required=False)
@click.option('-v', '--verbose', is_flag=True, help='Stream tool output instead of capturing it')
@click.option('-c', '--compile', 'skip_restore', is_flag=True, help='Skip restoring dependencies')
@click.option('-n', '--name', 'app_name', help='Set output file to a custom name')
@click.option('-s', '--scd', 'self_contained', is_flag=True, help='Self-Contained Deployment (SCD)')
@click.option('-k', '--keep', 'keep_temp_files', is_flag=True, help='Keep the temporary AppDir')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-h', '--help', 'show_help', is_flag=True, help='Help menu')
@click.option(CLEAR_LOG_FLAG, 'clear_log', is_flag=True, hidden=True)
@click.pass_context
def cli(ctx, project, destination, verbose, skip_restore, app_name, self_contained,
        keep_temp_files, debug, show_help, clear_log):
    """Package a .NET project into an AppImage

    Examples:

        netpkg-tool ~/src/MyApp ~/bin

        netpkg-tool ~/src/MyApp ~/bin --name myapp --scd
    """
    setup_logging(verbose=verbose, debug=debug)

    raw_args = ctx.meta.get('raw_args', ())
    path_resolver = PathResolver()
    presenter = Presenter(path_resolver=path_resolver)
    presenter.hello()

    if show_help or not raw_args:
        presenter.help()
        presenter.bye()
        ctx.exit(ExitCode.SUCCESS)

    config_service = ConfigService()
    error_log = ErrorLog(config_service.config_dir, raw_args, path_resolver)

    if clear_log:
        if raw_args[0] == CLEAR_LOG_FLAG:
            _clear_log(ctx, presenter, error_log)
        logger.warning(f"{CLEAR_LOG_FLAG} is only recognized as the first argument, ignoring it")

    if ctx.args:
        logger.warning(f"Ignoring extra arguments: {' '.join(ctx.args)}")

    try:
        settings = config_service.load_settings()
        config = configure(
            project,
            destination,
            app_name=app_name,
            verbose=verbose,
            skip_restore=skip_restore,
            self_contained=self_contained,
            keep_temp_files=keep_temp_files,
            raw_args=raw_args,
            path_resolver=path_resolver,
        )
    except NetpkgError as e:
        _exit_with_error(ctx, presenter, error_log, e.message, e.exit_code)

    pipeline = Pipeline(config, settings, runner=StageRunner(), events=presenter)
    result = pipeline.run()

    if not result.is_success:
        _exit_with_error(ctx, presenter, error_log, result.message, result.exit_code, result.streamed)

    presenter.bye()


def main(argv: Optional[list] = None):
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display

    click runs outside standalone mode so an interrupt reaches this
    function as ``click.Abort`` instead of being turned into exit code 1.
    """
    try:
        code = cli.main(args=argv, prog_name=APP_NAME, standalone_mode=False)

    except (click.Abort, KeyboardInterrupt):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(ExitCode.INTERRUPTED)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(int(code or ExitCode.SUCCESS))


if __name__ == "__main__":
    main()
