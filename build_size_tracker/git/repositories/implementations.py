"""Concrete implementation of Git repository operations."""

import logging
import shutil
import subprocess

from build_size_tracker.errors import CheckoutError, RepositoryStateError
from build_size_tracker.git.domain.value_objects import (
    BranchName,
    CommitIdentifier,
    CommitInfo,
    WorkingTree,
)
from build_size_tracker.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)

# Unit separator keeps subjects and bodies containing "|" intact.
_FIELD_SEPARATOR = "\x1f"
_COMMIT_INFO_FORMAT = "%x1f".join(["%H", "%aI", "%s", "%D", "%an", "%ae", "%b"])


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    def __init__(self, git_executable: str = "git") -> None:
        """
        Initialize GitRepositoryImpl.

        Args:
            git_executable: Name or path of the git binary
        """
        self._git = git_executable

    def is_available(self) -> bool:
        return shutil.which(self._git) is not None

    def current_branch(self, working_tree: WorkingTree) -> BranchName:
        """
        Read the name of the currently checked-out branch.

        Args:
            working_tree: Checkout to inspect

        Returns:
            Name of the checked-out branch

        Raises:
            RepositoryStateError: If the directory is not a git checkout or
                HEAD is detached
        """
        try:
            result = self._run(working_tree, ["rev-parse", "--abbrev-ref", "HEAD"])
        except subprocess.CalledProcessError as e:
            raise RepositoryStateError(
                f"Could not read current branch in {working_tree.path}: "
                f"{(e.stderr or '').strip() or e}"
            ) from e
        except OSError as e:
            raise RepositoryStateError(f"Could not run git: {e}") from e

        branch = result.stdout.strip()
        if not branch or branch == "HEAD":
            raise RepositoryStateError(
                f"HEAD is detached in {working_tree.path}; "
                "check out a branch before tracking build sizes"
            )
        return branch

    def list_commits(self, working_tree: WorkingTree) -> tuple[CommitIdentifier, ...]:
        """
        List commits reachable from HEAD.

        Args:
            working_tree: Checkout to inspect

        Returns:
            Tuple of commit hashes ordered from newest to oldest
        """
        if not self.is_available():
            logger.warning("git executable '%s' not found; no commits to list", self._git)
            return ()

        try:
            result = self._run(working_tree, ["log", "--format=%H"])
        except subprocess.CalledProcessError as e:
            raise RepositoryStateError(
                f"Failed to list commits: {(e.stderr or '').strip() or e}"
            ) from e

        return tuple(line for line in result.stdout.splitlines() if line)

    def checkout(self, working_tree: WorkingTree, ref: str) -> None:
        """
        Force the working tree to match a reference, discarding local changes.

        Args:
            working_tree: Checkout to modify
            ref: Commit hash or branch name

        Raises:
            CheckoutError: If the reference cannot be checked out
        """
        logger.info("Checking out %s", ref)
        try:
            self._run(working_tree, ["checkout", "--force", ref])
        except subprocess.CalledProcessError as e:
            raise CheckoutError(ref, (e.stderr or "").strip() or str(e)) from e
        except OSError as e:
            raise CheckoutError(ref, str(e)) from e

    def commit_info(self, working_tree: WorkingTree) -> CommitInfo:
        """
        Get metadata for the commit currently checked out.

        Args:
            working_tree: Checkout to inspect

        Returns:
            CommitInfo of HEAD

        Raises:
            RepositoryStateError: If git log fails or returns unexpected output
        """
        try:
            result = self._run(
                working_tree, ["log", "-1", f"--format={_COMMIT_INFO_FORMAT}", "HEAD"]
            )
        except subprocess.CalledProcessError as e:
            raise RepositoryStateError(
                f"Failed to read commit info: {(e.stderr or '').strip() or e}"
            ) from e

        parts = result.stdout.split(_FIELD_SEPARATOR, 6)
        if len(parts) != 7:
            raise RepositoryStateError(f"Invalid commit format: {result.stdout!r}")

        commit_hash, date, message, refs, author_name, author_email, body = parts
        return CommitInfo(
            hash=commit_hash.strip(),
            date=date,
            message=message,
            refs=refs,
            body=body.strip(),
            author_name=author_name,
            author_email=author_email,
        )

    def _run(self, working_tree: WorkingTree, args: list[str]) -> subprocess.CompletedProcess[str]:
        """Run a git subcommand in the working tree, raising on failure."""
        return subprocess.run(
            [self._git, *args],
            cwd=working_tree.path,
            capture_output=True,
            text=True,
            check=True,
        )
