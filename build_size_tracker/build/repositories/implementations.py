"""Concrete implementation of command execution using subprocess."""

import logging
import subprocess
from pathlib import Path

from build_size_tracker.build.domain.value_objects import CommandResult
from build_size_tracker.build.repositories.interfaces import CommandRunner

logger = logging.getLogger(__name__)


class SubprocessCommandRunner(CommandRunner):
    """Runs commands through the system shell, blocking until they exit."""

    def run(self, command: str, cwd: Path, stream_output: bool = False) -> CommandResult:
        logger.debug("Running %r in %s", command, cwd)
        if stream_output:
            completed = subprocess.run(command, shell=True, cwd=cwd, check=False)
            return CommandResult(command=command, exit_code=completed.returncode)

        completed = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return CommandResult(
            command=command,
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
