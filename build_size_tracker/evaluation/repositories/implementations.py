"""Console and no-op implementations of progress reporting and confirmation."""

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.status import Status

from build_size_tracker.build.domain.value_objects import BuildStep
from build_size_tracker.evaluation.domain.value_objects import (
    EvaluationResult,
    EvaluationRun,
    RunState,
)
from build_size_tracker.evaluation.repositories.interfaces import (
    ConfirmationPrompt,
    ProgressReporter,
)
from build_size_tracker.git.domain.value_objects import BranchName, CommitIdentifier

DEC_KB = 1000
DEC_MB = 1000 * 1000

_STEP_TITLES = {
    BuildStep.CLEAN: "Cleaning installation directory",
    BuildStep.INSTALL: "Installing dependencies",
    BuildStep.BUILD: "Building project",
}

_STAGE_MESSAGES = {
    RunState.INIT: "Reading current branch...",
    RunState.LISTING: "Listing commits...",
    RunState.RESTORING: "Restoring original branch...",
    RunState.REPORTING: "Writing reports...",
}


def human_bytes(n: int) -> str:
    if n >= DEC_MB:
        return f"{n / DEC_MB:.2f} MB"
    if n >= DEC_KB:
        return f"{n / DEC_KB:.2f} KB"
    return f"{n} B"


class NullProgressReporter(ProgressReporter):
    """Discards every notification."""

    def stage_changed(self, state: RunState) -> None:
        pass

    def commit_started(self, index: int, total: int, commit: CommitIdentifier) -> None:
        pass

    def build_step(self, step: BuildStep, command: str) -> None:
        pass

    def commit_finished(self, result: EvaluationResult) -> None:
        pass

    def commit_failed(self, commit: CommitIdentifier, error: Exception) -> None:
        pass

    def run_finished(self, run: EvaluationRun) -> None:
        pass


class RichProgressReporter(ProgressReporter):
    """Reports progress on a rich console.

    A spinner is shown while a commit is being evaluated, unless subprocess
    output is streamed to the same terminal.
    """

    def __init__(self, console: Console | None = None, spinner: bool = True) -> None:
        """
        Initialize the reporter.

        Args:
            console: Console to print to. Defaults to a new stdout console.
            spinner: Show a live spinner during each commit
        """
        self._console = console or Console()
        self._spinner = spinner
        self._status: Status | None = None
        self._prefix = ""

    def stage_changed(self, state: RunState) -> None:
        message = _STAGE_MESSAGES.get(state)
        if message:
            self._console.print(message, style="dim")

    def commit_started(self, index: int, total: int, commit: CommitIdentifier) -> None:
        self._prefix = f"[{index + 1}/{total}] {commit[:8]}"
        self._console.print(f"\n📦 {self._prefix}", style="bold blue")
        if self._spinner:
            self._status = self._console.status(f"{self._prefix} Checking out...")
            self._status.start()

    def build_step(self, step: BuildStep, command: str) -> None:
        title = _STEP_TITLES[step]
        if self._status is not None:
            self._status.update(f"{self._prefix} {title}: {escape(command)}")
        else:
            self._console.print(f"   {title}", style="bold blue")
            self._console.print(f"   Command: {escape(command)}", style="blue")

    def commit_finished(self, result: EvaluationResult) -> None:
        self._stop_spinner()
        self._console.print(
            f"   ✓ {human_bytes(result.build_size)} ({result.build_size} bytes) "
            f"- {escape(result.message)}",
            style="green",
        )

    def commit_failed(self, commit: CommitIdentifier, error: Exception) -> None:
        self._stop_spinner()
        self._console.print(f"   ✗ {commit[:8]}: {escape(str(error))}", style="red")

    def run_finished(self, run: EvaluationRun) -> None:
        self._stop_spinner()
        self._console.print(f"\n✓ Evaluated {len(run.results)} commit(s)", style="green")
        if run.original_branch:
            self._console.print(f"  Restored branch: {escape(run.original_branch)}")

    def _stop_spinner(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None


class AutoConfirmationPrompt(ConfirmationPrompt):
    """Always proceeds. Used for --yes and non-interactive runs."""

    def confirm(self, commits: tuple[CommitIdentifier, ...], branch: BranchName) -> bool:
        return True


class RichConfirmationPrompt(ConfirmationPrompt):
    """Asks on the terminal before discarding local changes."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def confirm(self, commits: tuple[CommitIdentifier, ...], branch: BranchName) -> bool:
        self._console.print(
            f"⚠️  {len(commits)} commit(s) will be checked out with --force on top of "
            f"'{escape(branch)}'. Uncommitted changes in the project directory will be lost.",
            style="yellow",
        )
        return Confirm.ask("Proceed?", default=False, console=self._console)
