#!/usr/bin/env python3
"""
Script to measure build artifact size across recent commits of a project:
- Checks out each of the most recent commits (--commit-limit, 0 for all)
- Reinstalls dependencies and runs the build command
- Records the size of the build artifact (--zip-path)
- Restores the original branch
- Writes output.json and report.html to the output directory
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console

from build_size_tracker.build.repositories.implementations import SubprocessCommandRunner
from build_size_tracker.build.services.artifact_service import ArtifactService
from build_size_tracker.build.services.build_service import BuildService
from build_size_tracker.config import (
    DEFAULT_INSTALL_COMMAND,
    DEFAULT_INSTALL_DIRECTORY,
    EvaluationConfig,
    env_commit_limit,
    env_default,
)
from build_size_tracker.errors import BuildSizeTrackerError, ConfigurationError
from build_size_tracker.evaluation.repositories.implementations import (
    AutoConfirmationPrompt,
    RichConfirmationPrompt,
    RichProgressReporter,
)
from build_size_tracker.evaluation.services.evaluation_service import EvaluationService
from build_size_tracker.git.repositories.implementations import GitRepositoryImpl
from build_size_tracker.git.services.git_service import GitService
from build_size_tracker.logging_config import get_logger, setup_logging
from build_size_tracker.report.services.report_service import ReportService

logger = get_logger("cli")


def non_negative_int(value: str) -> int:
    """argparse type for --commit-limit."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser, with defaults read from BUILD_SIZE_* variables."""
    parser = argparse.ArgumentParser(
        description="Measure the size of a project's build artifact across recent commits"
    )
    parser.add_argument(
        "--zip-path",
        "--path",
        dest="zip_path",
        type=str,
        default=env_default("ZIP_PATH"),
        help="Path to your zipped build, relative to the project root",
    )
    parser.add_argument(
        "--build-command",
        "--cmd",
        dest="build_command",
        type=str,
        default=env_default("BUILD_COMMAND"),
        help="Command to execute to build your zip file",
    )
    parser.add_argument(
        "--project-directory",
        "--dir",
        dest="project_directory",
        type=Path,
        default=env_default("PROJECT_DIRECTORY"),
        help="Path to your project's root",
    )
    parser.add_argument(
        "--output-directory",
        "--out",
        dest="output_directory",
        type=Path,
        default=env_default("OUTPUT_DIRECTORY"),
        help=(
            "Location of output.json and report.html, relative to the project root "
            "(default: current directory)"
        ),
    )
    parser.add_argument(
        "--commit-limit",
        "--limit",
        dest="commit_limit",
        type=non_negative_int,
        default=None,
        help="How many previous commits to evaluate. Use 0 to evaluate all commits (default: 1)",
    )
    parser.add_argument(
        "--install-command",
        type=str,
        default=env_default("INSTALL_COMMAND", DEFAULT_INSTALL_COMMAND),
        help=f"Clean dependency install command (default: {DEFAULT_INSTALL_COMMAND})",
    )
    parser.add_argument(
        "--install-directory",
        type=str,
        default=env_default("INSTALL_DIRECTORY", DEFAULT_INSTALL_DIRECTORY),
        help=(
            "Dependency directory removed before each install "
            f"(default: {DEFAULT_INSTALL_DIRECTORY})"
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Stream install and build output to the terminal",
    )
    parser.add_argument(
        "--yes",
        "-y",
        dest="assume_yes",
        action="store_true",
        help="Do not ask for confirmation before checking out commits",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )
    parser.add_argument(
        "--log-format",
        choices=("simple", "detailed"),
        default="simple",
        help="Log line format (default: simple)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> EvaluationConfig:
    """Build an EvaluationConfig, reporting missing required options."""
    missing = [
        flag
        for flag, value in (
            ("--zip-path", args.zip_path),
            ("--build-command", args.build_command),
            ("--project-directory", args.project_directory),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing required option(s): {', '.join(missing)}")

    commit_limit = args.commit_limit if args.commit_limit is not None else env_commit_limit()
    return EvaluationConfig(
        zip_path=args.zip_path,
        build_command=args.build_command,
        project_directory=Path(args.project_directory),
        output_directory=args.output_directory,
        commit_limit=commit_limit,
        verbose=args.verbose,
        install_command=args.install_command,
        install_directory=args.install_directory,
        assume_yes=args.assume_yes,
    )


def create_evaluation_service(config: EvaluationConfig, console: Console) -> EvaluationService:
    """Wire the services for a terminal run."""
    git_service = GitService(GitRepositoryImpl())
    if config.assume_yes or not console.is_interactive:
        prompt = AutoConfirmationPrompt()
    else:
        prompt = RichConfirmationPrompt(console)

    return EvaluationService(
        git_service=git_service,
        build_service=BuildService(SubprocessCommandRunner()),
        artifact_service=ArtifactService(),
        report_service=ReportService(),
        reporter=RichProgressReporter(console, spinner=not config.verbose),
        confirmation_prompt=prompt,
    )


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments, evaluate commits and write reports."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(
            level=args.log_level,
            quiet=args.quiet,
            verbose=args.verbose,
            format_style=args.log_format,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    console = Console()
    service = create_evaluation_service(config, console)

    print(f"📝 Tracking build size of {config.project_directory}")
    print(f"   Artifact: {config.zip_path}")
    print(f"   Build command: {config.build_command}")
    if config.commit_limit == 0:
        print("   Commits: all")
    else:
        print(f"   Commits: {config.commit_limit} most recent")

    try:
        run = service.run(config)
    except KeyboardInterrupt:
        print(
            "\n✗ Interrupted. The project directory may be left on a historical commit.",
            file=sys.stderr,
        )
        sys.exit(130)
    except BuildSizeTrackerError as e:
        logger.debug("Evaluation failed", exc_info=True)
        print(f"\n✗ Failed to track build sizes: {e}", file=sys.stderr)
        sys.exit(1)

    if run.cancelled:
        print("  (Cancelled; no commits were checked out)")
        sys.exit(0)

    if run.report is not None:
        print(f"✓ Reports written to {config.output_directory.absolute()}")
        print(f"  JSON: {run.report.json_path}")
        print(f"  HTML: {run.report.html_path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
