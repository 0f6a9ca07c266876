# netpkg_tool/cli/utils/output.py
"""Output formatting utilities"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from ...__version__ import __version__
from ...constants import APP_NAME, PROJECT_URL, RULE_WIDTH
from ...core.path_resolver import PathResolver
from ...services.pipeline import PipelineEvents

console = Console()


class Presenter(PipelineEvents):
    """Renders pipeline progress to the terminal

    Only observes; nothing it does changes the outcome of a run.
    """

    def __init__(self, out: Optional[Console] = None, path_resolver: Optional[PathResolver] = None):
        self.console = out or console
        self.path_resolver = path_resolver or PathResolver()

    def hello(self) -> None:
        """Banner with the tool name centered in the rule"""
        title = f" {APP_NAME} v{__version__} "
        padding = max(RULE_WIDTH - len(title), 0)
        left = "-" * (padding // 2)
        right = "-" * (padding - padding // 2)
        self.console.print(
            Text.assemble("\n", left, (title, "bold cyan"), right),
            soft_wrap=True,
        )

    def bye(self) -> None:
        self.console.print("-" * RULE_WIDTH + "\n", soft_wrap=True)

    def task(self, source: Path, destination: Path) -> None:
        source = self.path_resolver.display(source)
        destination = self.path_resolver.display(destination)
        self.console.print(f"[cyan]{escape(source)} => {escape(destination)}[/cyan]", soft_wrap=True)

    def stage_started(self, label: str, streaming: bool) -> None:
        if streaming:
            self.console.print(label)
        else:
            self.console.print(label, end="")

    def stage_finished(self, label: str, succeeded: bool) -> None:
        if succeeded:
            token = ("PASS", "bold green")
        else:
            token = ("FAIL", "bold red")
        self.console.print(Text.assemble(" ", ("[ ", "bold"), token, (" ]", "bold")))

    def finished(self, output_path: Path) -> None:
        shown = self.path_resolver.display(output_path)
        self.console.print(f"[green]New AppImage created at {escape(shown)}[/green]", soft_wrap=True)

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message.rstrip())}[/red]", soft_wrap=True)

    def status(self, label: str) -> None:
        self.console.print(label, end="")

    def help(self) -> None:
        """Usage screen"""
        self.console.print(
            f"\n            [bold cyan]Usage:[/bold cyan]\n"
            f"    [bold]{APP_NAME}[/bold] "
            f"\\[[underline]Project[/underline]] "
            f"\\[[underline]Destination[/underline]] "
            f"\\[[underline]Flags[/underline]]\n\n"
            f"            [bold cyan]Flags:[/bold cyan]\n"
            f"     --verbose or -v: Verbose output\n"
            f"     --compile or -c: Skip restoring dependencies\n"
            f"        --name or -n: Set output file to a custom name\n"
            f"         --scd or -s: Self-Contained Deployment (SCD)\n"
            f"        --keep or -k: Keep /tmp/{{AppName}}.temp directory\n"
            f"        --help or -h: Help menu (this page)\n"
            f"         --clear-log: Delete the error log (first argument only)\n\n"
            f"    More information & source code available on github:\n"
            f"    {PROJECT_URL}\n"
            f"    Copyright (c) 2017 - MIT License\n",
            soft_wrap=True,
            highlight=False,
        )
