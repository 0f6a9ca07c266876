"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from netpkg_tool.cli import main as cli_module

runner = CliRunner()


@pytest.fixture
def env(home: Path, temp_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated home with staging under the test's temp root."""
    monkeypatch.setenv("NETPKG_TOOL_TEMP_ROOT", str(temp_root))
    return home


@pytest.fixture
def use_runner(monkeypatch: pytest.MonkeyPatch):
    def install(fake):
        monkeypatch.setattr(cli_module, "StageRunner", lambda: fake)
        return fake
    return install


def error_log(home: Path) -> Path:
    return home / ".netpkg-tool" / "error.log"


def test_no_arguments_shows_help(env: Path) -> None:
    result = runner.invoke(cli_module.cli, [])

    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "netpkg-tool v1.0.0" in result.output


def test_help_flag_exits_before_validation(env: Path) -> None:
    result = runner.invoke(cli_module.cli, ["nowhere", "-h"])

    assert result.exit_code == 0
    assert "--compile or -c" in result.output
    assert not error_log(env).exists()


def test_missing_destination(env: Path, project_dir: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(project_dir)])

    assert result.exit_code == 1
    assert "valid .NET project AND destination" in result.output
    assert fake_runner.calls == []
    assert "Errored with code 1" in error_log(env).read_text()


def test_invalid_destination(env: Path, project_dir: Path, tmp_path: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(project_dir), str(tmp_path / "missing")])

    assert result.exit_code == 2
    assert fake_runner.calls == []


def test_invalid_project(env: Path, destination: Path, tmp_path: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(tmp_path / "missing"), str(destination)])

    assert result.exit_code == 3
    assert fake_runner.calls == []


def test_successful_run(env: Path, project_dir: Path, destination: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination)])

    assert result.exit_code == 0, result.output
    assert fake_runner.trace == ["restore", "compile", "transfer", "package", "cleanup"]
    assert "=>" in result.output
    assert result.output.count("PASS") == 5
    assert "New AppImage created at" in result.output
    assert not error_log(env).exists()


def test_flags_reach_the_pipeline(
    env: Path, project_dir: Path, destination: Path, temp_root: Path, use_runner, fake_runner
) -> None:
    use_runner(fake_runner)

    result = runner.invoke(
        cli_module.cli,
        [str(project_dir), str(destination), "-c", "--name", "foo", "-s", "-k"],
    )

    assert result.exit_code == 0, result.output
    assert fake_runner.trace == ["compile", "transfer", "package"]
    assert fake_runner.command("package").argv[-1] == str(destination.resolve() / "foo")
    assert "linux-x64" in fake_runner.command("compile").argv
    assert (temp_root / "foo.temp").is_dir()


def test_compile_failure(env: Path, project_dir: Path, destination: Path, use_runner, make_runner) -> None:
    fake = use_runner(make_runner({"compile": (1, "", "error CS0103: name does not exist")}))

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination)])

    assert result.exit_code == 21
    assert "transfer" not in fake.trace
    assert "package" not in fake.trace
    assert "FAIL" in result.output
    assert "error CS0103" in result.output
    log = error_log(env).read_text()
    assert log.count("Errored with code") == 1
    assert "Errored with code 21" in log
    assert "error CS0103" in log


def test_verbose_failure_logs_placeholder(
    env: Path, project_dir: Path, destination: Path, use_runner, make_runner
) -> None:
    use_runner(make_runner({"package": (1, "", "streamed text")}))

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination), "-v"])

    assert result.exit_code == 23
    assert "[Error message was written to verbose output]" in error_log(env).read_text()


def test_no_manifest(env: Path, tmp_path: Path, destination: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)
    empty = tmp_path / "empty"
    empty.mkdir()

    result = runner.invoke(cli_module.cli, [str(empty), str(destination)])

    assert result.exit_code == 10
    assert "No .csproj found" in result.output
    assert fake_runner.calls == []


def test_clear_log_then_failure_leaves_one_entry(
    env: Path, project_dir: Path, destination: Path, use_runner, make_runner
) -> None:
    log = error_log(env)
    log.parent.mkdir(parents=True)
    log.write_text("old entry\n" * 3)

    cleared = runner.invoke(cli_module.cli, ["--clear-log"])
    assert cleared.exit_code == 0
    assert not log.exists()
    assert log.parent.is_dir()

    use_runner(make_runner({"restore": (1, "", "restore failed")}))
    failed = runner.invoke(cli_module.cli, [str(project_dir), str(destination)])

    assert failed.exit_code == 20
    assert log.read_text().count("Errored with code") == 1


def test_clear_log_only_as_first_argument(
    env: Path, project_dir: Path, destination: Path, use_runner, fake_runner
) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination), "--clear-log"])

    assert result.exit_code == 0
    assert fake_runner.trace[-1] == "cleanup"


def test_clear_log_failure(env: Path) -> None:
    error_log(env).mkdir(parents=True)

    result = runner.invoke(cli_module.cli, ["--clear-log"])

    assert result.exit_code == 5


def test_name_without_value_is_usage_error(env: Path, project_dir: Path, destination: Path) -> None:
    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination), "-n"])

    assert result.exit_code == 1


def test_invalid_settings_file(env: Path, project_dir: Path, destination: Path) -> None:
    settings_file = env / ".netpkg-tool" / "config.yaml"
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("- not\n- a mapping\n")

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination)])

    assert result.exit_code == 4


def test_log_records_original_arguments(
    env: Path, project_dir: Path, destination: Path, use_runner, make_runner
) -> None:
    use_runner(make_runner({"transfer": (3, "", "copy failed")}))

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination), "--name", "my app"])

    assert result.exit_code == 22
    assert f"$ netpkg-tool {project_dir} {destination} --name 'my app'" in error_log(env).read_text()


def test_name_with_path_is_rejected(env: Path, project_dir: Path, destination: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    result = runner.invoke(cli_module.cli, [str(project_dir), str(destination), "-n", "../escape"])

    assert result.exit_code == 1
    assert "Invalid app name" in result.output
    assert fake_runner.calls == []
    assert "Errored with code 1" in error_log(env).read_text()


def test_usage_error_is_logged(env: Path, project_dir: Path) -> None:
    result = runner.invoke(cli_module.cli, [str(project_dir), "--bogus"])

    assert result.exit_code == 1
    assert "Errored with code 1" in error_log(env).read_text()


class InterruptingRunner:
    def run(self, command, capture_output=True):
        raise KeyboardInterrupt


def test_main_exits_130_on_interrupt(env: Path, project_dir: Path, destination: Path, use_runner) -> None:
    use_runner(InterruptingRunner())

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([str(project_dir), str(destination)])

    assert excinfo.value.code == 130


def test_main_exit_codes(env: Path, project_dir: Path, destination: Path, use_runner, fake_runner) -> None:
    use_runner(fake_runner)

    with pytest.raises(SystemExit) as success:
        cli_module.main([str(project_dir), str(destination)])
    with pytest.raises(SystemExit) as missing:
        cli_module.main([str(project_dir)])

    assert success.value.code == 0
    assert missing.value.code == 1
