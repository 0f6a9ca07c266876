"""Arrange published build output into an AppDir

Run as ``python -m netpkg_tool.helpers.transfer``. The resulting layout is
what appimagetool expects::

    <staging>/AppRun
    <staging>/<app>.desktop
    <staging>/<app>.svg
    <staging>/usr/share/<app>/...   (dotnet publish output)
"""

import os
import shlex
import shutil
from pathlib import Path
from typing import Optional

import click

from ..constants import DEFAULT_BUILD_CONFIGURATION

ICON_TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64">
  <rect width="64" height="64" rx="8" fill="#512bd4"/>
  <text x="32" y="40" font-size="20" text-anchor="middle" fill="#ffffff">.NET</text>
</svg>
"""

DESKTOP_TEMPLATE = """[Desktop Entry]
Type=Application
Name={app_name}
Exec={app_name}
Icon={app_name}
Categories=Utility;
Terminal=true
Comment=Packaged with netpkg-tool v{tool_version} ({runtime})
"""


def find_publish_dir(
    project_dir: Path,
    runtime: str,
    runtime_identifier: Optional[str] = None,
    configuration: str = DEFAULT_BUILD_CONFIGURATION
) -> Path:
    """Locate the output of ``dotnet publish -c <configuration>``"""
    build_dir = project_dir / "bin" / configuration / runtime
    if runtime_identifier:
        build_dir = build_dir / runtime_identifier
    return build_dir / "publish"


def render_app_run(app_name: str, assembly_name: str, self_contained: bool) -> str:
    """Entry script of the AppDir"""
    app_dir = f'"$HERE"/usr/share/{shlex.quote(app_name)}'
    if self_contained:
        launch = f"{app_dir}/{shlex.quote(assembly_name)}"
    else:
        launch = f"dotnet {app_dir}/{shlex.quote(assembly_name + '.dll')}"

    return (
        "#!/bin/sh\n"
        'HERE="$(dirname "$(readlink -f "$0")")"\n'
        f'exec {launch} "$@"\n'
    )


def arrange(
    project_dir: Path,
    assembly_name: str,
    app_name: str,
    runtime: str,
    tool_version: str,
    staging: Path,
    runtime_identifier: Optional[str] = None,
    configuration: str = DEFAULT_BUILD_CONFIGURATION
) -> Path:
    """Build the AppDir at ``staging``, replacing any previous one

    Returns:
        The staging directory

    Raises:
        FileNotFoundError: If the publish output does not exist
    """
    publish_dir = find_publish_dir(project_dir, runtime, runtime_identifier, configuration)
    if not publish_dir.is_dir():
        raise FileNotFoundError(f"Publish output not found: {publish_dir}")

    if staging.exists():
        shutil.rmtree(staging)

    shutil.copytree(publish_dir, staging / "usr" / "share" / app_name)

    app_run = staging / "AppRun"
    app_run.write_text(render_app_run(app_name, assembly_name, bool(runtime_identifier)))
    app_run.chmod(0o755)

    (staging / f"{app_name}.desktop").write_text(
        DESKTOP_TEMPLATE.format(app_name=app_name, tool_version=tool_version, runtime=runtime)
    )
    (staging / f"{app_name}.svg").write_text(ICON_TEMPLATE)

    if runtime_identifier:
        binary = staging / "usr" / "share" / app_name / assembly_name
        if binary.exists():
            binary.chmod(binary.stat().st_mode | 0o111)

    return staging


@click.command()
@click.argument('project_dir', type=click.Path(file_okay=False, path_type=Path))
@click.argument('assembly_name')
@click.argument('app_name')
@click.argument('runtime')
@click.argument('tool_version')
@click.argument('staging', type=click.Path(file_okay=False, path_type=Path))
@click.option('--scd', 'runtime_identifier', help='Self-contained build for this runtime identifier')
@click.option('--configuration', default=DEFAULT_BUILD_CONFIGURATION, show_default=True,
              help='Build configuration passed to dotnet publish')
def transfer(project_dir, assembly_name, app_name, runtime, tool_version, staging, runtime_identifier,
             configuration):
    """Copy published output of PROJECT_DIR into the AppDir STAGING"""
    try:
        arrange(project_dir, assembly_name, app_name, runtime, tool_version, staging, runtime_identifier,
                configuration)
    except (FileNotFoundError, shutil.Error) as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"{e.filename or staging}: {e.strerror or e}")

    click.echo(f"Arranged {app_name} in {os.fspath(staging)}")


if __name__ == "__main__":
    transfer()
