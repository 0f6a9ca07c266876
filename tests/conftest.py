"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from netpkg_tool.core.stage_runner import Command
from netpkg_tool.models import StageResult, ToolSettings

CSPROJ = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <OutputType>Exe</OutputType>
    <TargetFramework>net6.0</TargetFramework>
  </PropertyGroup>
</Project>
"""


def pytest_configure(config: pytest.Config) -> None:
    """Register suite markers."""
    config.addinivalue_line("markers", "unit: fast tests without subprocesses")
    config.addinivalue_line("markers", "integration: tests running real programs")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def stage_of(command: Command) -> str:
    """Name the pipeline stage a command belongs to."""
    if command.program == "rm":
        return "cleanup"
    if command.args[:1] == ("restore",):
        return "restore"
    if command.args[:1] == ("publish",):
        return "compile"
    if command.args[:1] == ("-n",):
        return "package"
    return "transfer"


def staging_of(command: Command) -> Path:
    """Staging directory argument of a transfer command."""
    args = list(command.args)
    for option in ("--scd", "--configuration"):
        if option in args:
            index = args.index(option)
            del args[index:index + 2]
    return Path(args[-1])


class FakeRunner:
    """StageRunner stand-in recording every invocation.

    ``failures`` maps a stage name to ``(exit_code, stdout, stderr)``.
    Transfer creates the staging directory and cleanup removes it, so the
    filesystem effects of a run can be asserted.
    """

    def __init__(self, failures: Optional[Dict[str, Tuple[int, str, str]]] = None) -> None:
        self.failures = failures or {}
        self.calls: List[Tuple[str, Command, bool]] = []

    @property
    def trace(self) -> List[str]:
        return [name for name, _, _ in self.calls]

    def command(self, stage: str) -> Command:
        for name, command, _ in self.calls:
            if name == stage:
                return command
        raise KeyError(stage)

    def run(self, command: Command, capture_output: bool = True) -> StageResult:
        stage = stage_of(command)
        self.calls.append((stage, command, capture_output))

        if stage in self.failures:
            code, stdout, stderr = self.failures[stage]
            if not capture_output:
                stdout, stderr = "", ""
            return StageResult(code, stdout, stderr, captured=capture_output)

        if stage == "transfer":
            staging_of(command).mkdir(parents=True, exist_ok=True)
        elif stage == "cleanup":
            shutil.rmtree(command.args[-1], ignore_errors=True)

        return StageResult(0, "", "", captured=capture_output)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated $HOME without netpkg-tool overrides."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for name in (
        "NETPKG_TOOL_DOTNET",
        "NETPKG_TOOL_APPIMAGETOOL",
        "NETPKG_TOOL_TRANSFER",
        "NETPKG_TOOL_TEMP_ROOT",
    ):
        monkeypatch.delenv(name, raising=False)
    return home_dir


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def settings(home: Path, temp_root: Path) -> ToolSettings:
    return ToolSettings(config_dir=home / ".netpkg-tool", temp_root=temp_root)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory with a single SDK-style manifest."""
    directory = tmp_path / "MyApp"
    directory.mkdir()
    (directory / "MyApp.csproj").write_text(CSPROJ)
    return directory


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    directory = tmp_path / "out"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunner with configured failures."""
    return FakeRunner
