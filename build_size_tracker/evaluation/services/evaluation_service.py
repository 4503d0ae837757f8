"""Evaluation service driving checkout, build and measurement across commits."""

import logging

from build_size_tracker.build.services.artifact_service import ArtifactService
from build_size_tracker.build.services.build_service import BuildService
from build_size_tracker.config import EvaluationConfig
from build_size_tracker.errors import CheckoutError, RepositoryStateError
from build_size_tracker.evaluation.domain.value_objects import (
    EvaluationResult,
    EvaluationRun,
    RunState,
)
from build_size_tracker.evaluation.repositories.implementations import (
    NullProgressReporter,
)
from build_size_tracker.evaluation.repositories.interfaces import (
    ConfirmationPrompt,
    ProgressReporter,
)
from build_size_tracker.git.domain.value_objects import BranchName, WorkingTree
from build_size_tracker.git.services.git_service import GitService
from build_size_tracker.report.services.report_service import ReportService

logger = logging.getLogger(__name__)


class EvaluationService:
    """Measures the build artifact size of a range of historical commits.

    Every commit is checked out into the same working tree, so commits are
    evaluated strictly one after another. Once the first checkout has been
    issued the original branch is checked out again on every exit path.
    """

    def __init__(
        self,
        git_service: GitService,
        build_service: BuildService,
        artifact_service: ArtifactService,
        report_service: ReportService,
        reporter: ProgressReporter | None = None,
        confirmation_prompt: ConfirmationPrompt | None = None,
    ) -> None:
        """
        Initialize EvaluationService.

        Args:
            git_service: Service for branch, history and checkout operations
            build_service: Service for installing and building a checkout
            artifact_service: Service for measuring the build artifact
            report_service: Service for writing the JSON and HTML reports
            reporter: Receives progress notifications. Defaults to no output.
            confirmation_prompt: Asked before the first checkout. When None,
                the run proceeds without asking.
        """
        self._git_service = git_service
        self._build_service = build_service
        self._artifact_service = artifact_service
        self._report_service = report_service
        self._reporter = reporter or NullProgressReporter()
        self._confirmation_prompt = confirmation_prompt
        self.last_run: EvaluationRun | None = None

    def run(self, config: EvaluationConfig) -> EvaluationRun:
        """
        Evaluate the configured commits and write the reports.

        Args:
            config: Options for this run

        Returns:
            The completed EvaluationRun. If the confirmation was declined the
            run is marked cancelled and nothing was checked out or written.

        Raises:
            RepositoryStateError: If git is unavailable or no branch is checked out
            CheckoutError: If a commit or the original branch cannot be checked out
            BuildFailure: If installing or building a commit fails
            ArtifactNotFoundError: If a build does not produce the artifact
            ReportWriteError: If the reports cannot be written
        """
        working_tree = WorkingTree(config.project_directory)
        run = EvaluationRun(commit_limit=config.commit_limit)
        self.last_run = run

        self._transition(run, RunState.INIT)
        if not self._git_service.is_git_available():
            raise RepositoryStateError("git executable not found; cannot track build sizes")
        run.original_branch = self._git_service.get_current_branch(working_tree)
        logger.info("Original branch: %s", run.original_branch)

        self._transition(run, RunState.LISTING)
        run.commits = self._git_service.list_recent_commits(working_tree, config.commit_limit)
        logger.info("Selected %d commit(s) for evaluation", len(run.commits))

        if self._confirmation_prompt is not None and run.commits:
            self._transition(run, RunState.CONFIRMING)
            if not self._confirmation_prompt.confirm(run.commits, run.original_branch):
                logger.info("Evaluation declined; working tree left untouched")
                run.cancelled = True
                self._transition(run, RunState.DONE)
                return run

        if run.commits:
            self._transition(run, RunState.EVALUATING)
            evaluation_failed = True
            try:
                self._evaluate_commits(working_tree, config, run)
                evaluation_failed = False
            finally:
                self._transition(run, RunState.RESTORING)
                self._restore_branch(working_tree, run.original_branch, evaluation_failed)

        self._transition(run, RunState.REPORTING)
        run.report = self._report_service.write_reports(config.output_directory, run.results)

        self._transition(run, RunState.DONE)
        self._reporter.run_finished(run)
        return run

    def _evaluate_commits(
        self, working_tree: WorkingTree, config: EvaluationConfig, run: EvaluationRun
    ) -> None:
        settings = config.build_settings
        total = len(run.commits)

        for index, commit in enumerate(run.commits):
            self._reporter.commit_started(index, total, commit)
            try:
                self._git_service.checkout(working_tree, commit)
                if self._artifact_service.discard(working_tree, config.zip_path):
                    logger.debug("Removed stale artifact %s", config.zip_path)
                self._build_service.build(
                    working_tree,
                    settings,
                    verbose=config.verbose,
                    on_step=self._reporter.build_step,
                )
                build_size = self._artifact_service.size_of(working_tree, config.zip_path)
                commit_info = self._git_service.get_current_commit_info(working_tree)
            except Exception as e:
                self._reporter.commit_failed(commit, e)
                raise

            result = EvaluationResult.from_commit(commit_info, build_size)
            run.results.append(result)
            logger.info("%s: %d bytes", commit, build_size)
            self._reporter.commit_finished(result)

    def _restore_branch(
        self, working_tree: WorkingTree, branch: BranchName | None, evaluation_failed: bool
    ) -> None:
        """Check out the original branch, keeping an earlier error as the one raised."""
        if branch is None:
            return
        try:
            self._git_service.checkout(working_tree, branch)
        except CheckoutError:
            if not evaluation_failed:
                raise
            logger.error(
                "Could not restore branch '%s' after a failed evaluation; "
                "the working tree is left on a historical commit",
                branch,
                exc_info=True,
            )

    def _transition(self, run: EvaluationRun, state: RunState) -> None:
        logger.debug("State %s -> %s", run.state.value, state.value)
        run.state = state
        self._reporter.stage_changed(state)
