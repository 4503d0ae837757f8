from pathlib import Path

import pytest

from build_size_tracker.build.domain.value_objects import BuildSettings, BuildStep, CommandResult
from build_size_tracker.build.repositories.interfaces import CommandRunner
from build_size_tracker.build.services.build_service import BuildService
from build_size_tracker.errors import BuildFailure
from build_size_tracker.git.domain.value_objects import WorkingTree

# ---------------------------------------------------------------------------
# Spy
# ---------------------------------------------------------------------------


class RecordingRunner(CommandRunner):
    """Returns scripted exit codes and records every command."""

    def __init__(self, exit_codes: dict[str, int] | None = None, stderr: str = "") -> None:
        self.exit_codes = exit_codes or {}
        self.stderr = stderr
        self.calls: list[tuple[str, Path, bool]] = []

    def run(self, command: str, cwd: Path, stream_output: bool = False) -> CommandResult:
        self.calls.append((command, cwd, stream_output))
        exit_code = self.exit_codes.get(command, 0)
        return CommandResult(
            command=command,
            exit_code=exit_code,
            stderr=self.stderr if exit_code else "",
        )


class BrokenRunner(CommandRunner):
    def run(self, command: str, cwd: Path, stream_output: bool = False) -> CommandResult:
        raise FileNotFoundError("No such file or directory: '/bin/sh'")


SETTINGS = BuildSettings(build_command="npm run zip", install_command="npm ci")

# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_build_runs_install_then_build(tmp_path):
    runner = RecordingRunner()

    BuildService(runner).build(WorkingTree(tmp_path), SETTINGS)

    assert [call[0] for call in runner.calls] == ["npm ci", "npm run zip"]
    assert all(call[1] == tmp_path.resolve() for call in runner.calls)


def test_build_removes_install_directory_first(tmp_path):
    install_dir = tmp_path / "node_modules" / "left-pad"
    install_dir.mkdir(parents=True)
    (install_dir / "index.js").write_text("module.exports = 1;")
    steps: list[BuildStep] = []

    BuildService(RecordingRunner()).build(
        WorkingTree(tmp_path), SETTINGS, on_step=lambda step, command: steps.append(step)
    )

    assert not (tmp_path / "node_modules").exists()
    assert steps == [BuildStep.CLEAN, BuildStep.INSTALL, BuildStep.BUILD]


def test_build_skips_clean_without_install_directory(tmp_path):
    steps: list[BuildStep] = []

    BuildService(RecordingRunner()).build(
        WorkingTree(tmp_path), SETTINGS, on_step=lambda step, command: steps.append(step)
    )

    assert steps == [BuildStep.INSTALL, BuildStep.BUILD]


def test_install_failure_aborts_before_build(tmp_path):
    runner = RecordingRunner(exit_codes={"npm ci": 1}, stderr="npm ERR! missing lockfile")

    with pytest.raises(BuildFailure) as exc_info:
        BuildService(runner).build(WorkingTree(tmp_path), SETTINGS)

    assert exc_info.value.step == "install"
    assert exc_info.value.exit_code == 1
    assert "missing lockfile" in exc_info.value.stderr
    assert [call[0] for call in runner.calls] == ["npm ci"]


def test_build_failure_reports_build_step(tmp_path):
    runner = RecordingRunner(exit_codes={"npm run zip": 2})

    with pytest.raises(BuildFailure) as exc_info:
        BuildService(runner).build(WorkingTree(tmp_path), SETTINGS)

    assert exc_info.value.step == "build"
    assert exc_info.value.exit_code == 2


def test_verbose_streams_output(tmp_path):
    runner = RecordingRunner()

    BuildService(runner).build(WorkingTree(tmp_path), SETTINGS, verbose=True)

    assert all(call[2] is True for call in runner.calls)


def test_command_that_cannot_start_is_a_build_failure(tmp_path):
    with pytest.raises(BuildFailure) as exc_info:
        BuildService(BrokenRunner()).build(WorkingTree(tmp_path), SETTINGS)

    assert exc_info.value.step == "install"


def test_settings_reject_empty_build_command():
    with pytest.raises(ValueError):
        BuildSettings(build_command="  ")
