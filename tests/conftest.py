import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from build_size_tracker.build.domain.value_objects import CommandResult
from build_size_tracker.build.repositories.interfaces import CommandRunner
from build_size_tracker.build.services.artifact_service import ArtifactService
from build_size_tracker.build.services.build_service import BuildService
from build_size_tracker.config import EvaluationConfig
from build_size_tracker.errors import CheckoutError, RepositoryStateError
from build_size_tracker.evaluation.services.evaluation_service import EvaluationService
from build_size_tracker.git.domain.value_objects import CommitInfo, WorkingTree
from build_size_tracker.git.repositories.interfaces import GitRepository
from build_size_tracker.git.services.git_service import GitService
from build_size_tracker.report.services.report_service import ReportService

BUILD_COMMAND = "make package"
INSTALL_COMMAND = "npm ci"
ZIP_PATH = "dist/app.zip"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

def make_commits(count: int) -> tuple[CommitInfo, ...]:
    """Commits newest first; the newest has the highest number."""
    return tuple(
        CommitInfo(
            hash=f"{number:040x}",
            date=f"2024-01-{number:02d}T12:00:00+00:00",
            message=f"Commit number {number}",
            refs="HEAD -> main" if number == count else "",
            body="",
            author_name="Test User",
            author_email="test@example.com",
        )
        for number in range(count, 0, -1)
    )


class FakeGitRepository(GitRepository):
    """In-memory git checkout that records every checkout."""

    def __init__(self, commits: tuple[CommitInfo, ...], branch: str = "main") -> None:
        self.commits = commits
        self.branch = branch
        self.head = branch
        self.available = True
        self.checkouts: list[str] = []
        self.failing_refs: set[str] = set()

    def is_available(self) -> bool:
        return self.available

    def current_branch(self, working_tree: WorkingTree) -> str:
        if self.head != self.branch:
            raise RepositoryStateError("HEAD is detached")
        return self.head

    def list_commits(self, working_tree: WorkingTree) -> tuple[str, ...]:
        if not self.available:
            return ()
        return tuple(commit.hash for commit in self.commits)

    def checkout(self, working_tree: WorkingTree, ref: str) -> None:
        self.checkouts.append(ref)
        if ref in self.failing_refs:
            raise CheckoutError(ref, "pathspec did not match")
        self.head = ref

    def commit_info(self, working_tree: WorkingTree) -> CommitInfo:
        ref = self.commits[0].hash if self.head == self.branch else self.head
        return next(commit for commit in self.commits if commit.hash == ref)


class FakeCommandRunner(CommandRunner):
    """Records commands; the build command writes the artifact for the current head."""

    def __init__(self, git: FakeGitRepository, project_dir: Path) -> None:
        self.git = git
        self.project_dir = project_dir
        self.calls: list[tuple[str, Path, bool]] = []
        self.sizes = {commit.hash: 1000 * (index + 1) for index, commit in enumerate(git.commits)}
        self.fail_when: Callable[[str, str], CommandResult | None] = lambda command, head: None
        self.produce_artifact = True
        self.skip_artifact_for: set[str] = set()

    def run(self, command: str, cwd: Path, stream_output: bool = False) -> CommandResult:
        self.calls.append((command, cwd, stream_output))
        failure = self.fail_when(command, self.git.head)
        if failure is not None:
            return failure
        if (
            command == BUILD_COMMAND
            and self.produce_artifact
            and self.git.head not in self.skip_artifact_for
        ):
            artifact = self.project_dir / ZIP_PATH
            artifact.parent.mkdir(parents=True, exist_ok=True)
            artifact.write_bytes(b"x" * self.sizes[self.git.head])
        return CommandResult(command=command, exit_code=0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture()
def fake_git() -> FakeGitRepository:
    return FakeGitRepository(make_commits(3))


@pytest.fixture()
def fake_runner(fake_git: FakeGitRepository, project_dir: Path) -> FakeCommandRunner:
    return FakeCommandRunner(fake_git, project_dir)


@pytest.fixture()
def make_config(project_dir: Path, output_dir: Path):
    def _make(**overrides) -> EvaluationConfig:
        options = {
            "zip_path": ZIP_PATH,
            "build_command": BUILD_COMMAND,
            "project_directory": project_dir,
            "output_directory": output_dir,
            "commit_limit": 1,
            "install_command": INSTALL_COMMAND,
        }
        options.update(overrides)
        return EvaluationConfig(**options)

    return _make


@pytest.fixture()
def evaluation_service(fake_git: FakeGitRepository, fake_runner: FakeCommandRunner):
    return EvaluationService(
        git_service=GitService(fake_git),
        build_service=BuildService(fake_runner),
        artifact_service=ArtifactService(),
        report_service=ReportService(),
    )


# ---------------------------------------------------------------------------
# Real git repositories
# ---------------------------------------------------------------------------

def _git(repo_dir: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo_dir, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


@pytest.fixture()
def git_repo(tmp_path: Path) -> Path:
    """A git repository on branch 'main' with three commits, each changing size.txt."""
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    _git(repo_dir, "init")
    _git(repo_dir, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo_dir, "config", "user.email", "test@example.com")
    _git(repo_dir, "config", "user.name", "Test User")
    _git(repo_dir, "config", "commit.gpgsign", "false")

    for number in range(1, 4):
        (repo_dir / "size.txt").write_text(str(number * 10))
        _git(repo_dir, "add", "size.txt")
        _git(repo_dir, "commit", "-m", f"Commit number {number}", "-m", f"Body {number}")

    return repo_dir


@pytest.fixture()
def git():
    return _git
