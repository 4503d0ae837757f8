"""Configuration for an evaluation run."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from build_size_tracker.build.domain.value_objects import BuildSettings
from build_size_tracker.errors import ConfigurationError

ENV_PREFIX = "BUILD_SIZE_"

DEFAULT_COMMIT_LIMIT = 1
DEFAULT_INSTALL_COMMAND = "npm ci"
DEFAULT_INSTALL_DIRECTORY = "node_modules"


def _load_env_file() -> None:
    """Load environment variables from the nearest .env file above the current directory."""
    load_dotenv(find_dotenv(usecwd=True))


def env_default(name: str, default: str | None = None) -> str | None:
    """Read a BUILD_SIZE_* variable, loading .env first."""
    _load_env_file()
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_commit_limit() -> int:
    """Read BUILD_SIZE_COMMIT_LIMIT, falling back to the default."""
    raw = env_default("COMMIT_LIMIT")
    if raw is None or not raw.strip():
        return DEFAULT_COMMIT_LIMIT
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_PREFIX}COMMIT_LIMIT must be a non-negative integer, got {raw!r}"
        ) from None


@dataclass(frozen=True)
class EvaluationConfig:
    """Options for one evaluation run.

    Attributes:
        zip_path: Path to the build artifact, relative to project_directory
        build_command: Shell command that produces the artifact
        project_directory: Git checkout to operate in
        output_directory: Where output.json and report.html are written. Relative
            paths resolve against project_directory; defaults to the current directory
        commit_limit: Number of most recent commits to evaluate; 0 means all
        verbose: Stream subprocess output to the terminal
        install_command: Clean dependency install command
        install_directory: Dependency directory removed before each install
        assume_yes: Skip the confirmation prompt
    """

    zip_path: str
    build_command: str
    project_directory: Path
    output_directory: Path | None = None
    commit_limit: int = DEFAULT_COMMIT_LIMIT
    verbose: bool = False
    install_command: str = DEFAULT_INSTALL_COMMAND
    install_directory: str = DEFAULT_INSTALL_DIRECTORY
    assume_yes: bool = False

    def __post_init__(self) -> None:
        """Validate the options."""
        if not self.zip_path:
            raise ConfigurationError("zipPath is required")
        if not self.build_command or not self.build_command.strip():
            raise ConfigurationError("buildCommand is required")
        if not self.install_command or not self.install_command.strip():
            raise ConfigurationError("installCommand cannot be empty")
        if not self.install_directory:
            raise ConfigurationError("installDirectory cannot be empty")

        project_directory = Path(self.project_directory)
        if not project_directory.exists():
            raise ConfigurationError(f"Project directory does not exist: {project_directory}")
        if not project_directory.is_dir():
            raise ConfigurationError(f"Project directory is not a directory: {project_directory}")
        object.__setattr__(self, "project_directory", project_directory)
        if self.output_directory is None:
            output_directory = Path.cwd()
        else:
            output_directory = Path(self.output_directory)
            if not output_directory.is_absolute():
                output_directory = project_directory / output_directory
        object.__setattr__(self, "output_directory", output_directory)

        if isinstance(self.commit_limit, bool) or not isinstance(self.commit_limit, int):
            raise ConfigurationError(f"commitLimit must be an integer, got {self.commit_limit!r}")
        if self.commit_limit < 0:
            raise ConfigurationError(f"commitLimit must be non-negative, got {self.commit_limit}")

    @property
    def build_settings(self) -> BuildSettings:
        return BuildSettings(
            build_command=self.build_command,
            install_command=self.install_command,
            install_directory=self.install_directory,
        )
