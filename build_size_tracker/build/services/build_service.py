"""Build service for reinstalling dependencies and building a checkout."""

import logging
import shutil
from collections.abc import Callable

from build_size_tracker.build.domain.value_objects import (
    BuildSettings,
    BuildStep,
    CommandResult,
)
from build_size_tracker.build.repositories.interfaces import CommandRunner
from build_size_tracker.errors import BuildFailure
from build_size_tracker.git.domain.value_objects import WorkingTree

logger = logging.getLogger(__name__)

StepListener = Callable[[BuildStep, str], None]


class BuildService:
    """Service for running the clean, install and build steps of one checkout."""

    def __init__(self, command_runner: CommandRunner) -> None:
        """
        Initialize BuildService.

        Args:
            command_runner: Executes the install and build commands
        """
        self._command_runner = command_runner

    def build(
        self,
        working_tree: WorkingTree,
        settings: BuildSettings,
        verbose: bool = False,
        on_step: StepListener | None = None,
    ) -> None:
        """
        Clean the dependency directory, reinstall dependencies and build.

        Args:
            working_tree: Checkout to build
            settings: Install and build commands
            verbose: If True, stream command output to the terminal
            on_step: Optional callback told about each step as it starts

        Raises:
            BuildFailure: If any step fails; later steps are not run
        """
        install_dir = working_tree.resolve(settings.install_directory)
        if install_dir.exists():
            self._announce(on_step, BuildStep.CLEAN, f"rm -rf {settings.install_directory}")
            try:
                shutil.rmtree(install_dir)
            except OSError as e:
                raise BuildFailure(BuildStep.CLEAN.value, -1, str(e)) from e

        self._announce(on_step, BuildStep.INSTALL, settings.install_command)
        self._run_step(working_tree, BuildStep.INSTALL, settings.install_command, verbose)

        self._announce(on_step, BuildStep.BUILD, settings.build_command)
        self._run_step(working_tree, BuildStep.BUILD, settings.build_command, verbose)

    def _run_step(
        self, working_tree: WorkingTree, step: BuildStep, command: str, verbose: bool
    ) -> CommandResult:
        try:
            result = self._command_runner.run(command, working_tree.path, stream_output=verbose)
        except OSError as e:
            raise BuildFailure(step.value, -1, str(e)) from e

        if not result.success:
            if result.stdout:
                logger.debug("%s output:\n%s", step.value, result.stdout)
            raise BuildFailure(step.value, result.exit_code, result.stderr)
        return result

    @staticmethod
    def _announce(on_step: StepListener | None, step: BuildStep, command: str) -> None:
        logger.info("%s: %s", step.value.capitalize(), command)
        if on_step is not None:
            on_step(step, command)
