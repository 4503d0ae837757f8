"""Repository interfaces for running external commands."""

from abc import ABC, abstractmethod
from pathlib import Path

from build_size_tracker.build.domain.value_objects import CommandResult


class CommandRunner(ABC):
    """Interface for executing shell commands."""

    @abstractmethod
    def run(self, command: str, cwd: Path, stream_output: bool = False) -> CommandResult:
        """
        Execute a shell command and wait for it to finish.

        Args:
            command: Shell command line, executed verbatim
            cwd: Directory to run the command in
            stream_output: If True, output goes straight to the terminal
                instead of being captured

        Returns:
            CommandResult with the exit status and any captured output

        Raises:
            OSError: If the command could not be started at all
        """
        ...
