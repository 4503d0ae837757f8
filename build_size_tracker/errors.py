"""Error taxonomy for build size tracking."""


class BuildSizeTrackerError(Exception):
    """Base class for every error raised by the tracker."""


class ConfigurationError(BuildSizeTrackerError, ValueError):
    """A required option is missing or an option value is invalid."""


class RepositoryStateError(BuildSizeTrackerError, RuntimeError):
    """The working directory is not in a usable version-control state."""


class CheckoutError(BuildSizeTrackerError, RuntimeError):
    """A reference could not be checked out."""

    def __init__(self, ref: str, detail: str) -> None:
        self.ref = ref
        self.detail = detail
        super().__init__(f"Failed to checkout '{ref}': {detail}")


class BuildFailure(BuildSizeTrackerError, RuntimeError):
    """An install or build command exited with a non-zero status.

    Attributes:
        step: Name of the build step that failed
        exit_code: Exit status of the failing command
        stderr: Captured standard error (empty when output was streamed)
    """

    def __init__(self, step: str, exit_code: int, stderr: str = "") -> None:
        self.step = step
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Build step '{step}' failed with exit code {exit_code}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)


class ArtifactNotFoundError(BuildSizeTrackerError, FileNotFoundError):
    """The build did not produce the expected artifact."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Build artifact not found: {path}")

    def __str__(self) -> str:
        return f"Build artifact not found: {self.path}"


class ReportWriteError(BuildSizeTrackerError, OSError):
    """The JSON or HTML report could not be written."""


class ReportTemplateError(BuildSizeTrackerError, RuntimeError):
    """The HTML report template is missing, unreadable or malformed."""
