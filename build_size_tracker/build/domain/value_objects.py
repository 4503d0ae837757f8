"""Value objects for the Build domain."""

from dataclasses import dataclass
from enum import Enum


class BuildStep(str, Enum):
    """Sub-step of a build."""

    CLEAN = "clean"
    INSTALL = "install"
    BUILD = "build"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        command: The command line that was executed
        exit_code: Process exit status
        stdout: Captured standard output (empty when streamed)
        stderr: Captured standard error (empty when streamed)
    """

    command: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class BuildSettings:
    """How dependencies are installed and the project is built."""

    build_command: str
    install_command: str = "npm ci"
    install_directory: str = "node_modules"

    def __post_init__(self) -> None:
        """Validate the settings."""
        if not self.build_command.strip():
            raise ValueError("Build command cannot be empty")
        if not self.install_command.strip():
            raise ValueError("Install command cannot be empty")
