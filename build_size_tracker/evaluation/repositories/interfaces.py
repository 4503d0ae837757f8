"""Interfaces for the terminal-facing collaborators of an evaluation run."""

from abc import ABC, abstractmethod

from build_size_tracker.build.domain.value_objects import BuildStep
from build_size_tracker.evaluation.domain.value_objects import (
    EvaluationResult,
    EvaluationRun,
    RunState,
)
from build_size_tracker.git.domain.value_objects import BranchName, CommitIdentifier


class ProgressReporter(ABC):
    """Receives progress notifications from the evaluation pipeline."""

    @abstractmethod
    def stage_changed(self, state: RunState) -> None:
        ...

    @abstractmethod
    def commit_started(self, index: int, total: int, commit: CommitIdentifier) -> None:
        ...

    @abstractmethod
    def build_step(self, step: BuildStep, command: str) -> None:
        ...

    @abstractmethod
    def commit_finished(self, result: EvaluationResult) -> None:
        ...

    @abstractmethod
    def commit_failed(self, commit: CommitIdentifier, error: Exception) -> None:
        ...

    @abstractmethod
    def run_finished(self, run: EvaluationRun) -> None:
        ...


class ConfirmationPrompt(ABC):
    """Asks whether to go ahead before any checkout happens."""

    @abstractmethod
    def confirm(self, commits: tuple[CommitIdentifier, ...], branch: BranchName) -> bool:
        """
        Ask for permission to evaluate the given commits.

        Args:
            commits: Commits that will be checked out, newest first
            branch: Branch that will be restored afterwards

        Returns:
            True to proceed, False to abort without touching the working tree
        """
        ...
