"""Git service for coordinating Git operations."""

from build_size_tracker.git.domain.value_objects import (
    BranchName,
    CommitIdentifier,
    CommitInfo,
    WorkingTree,
)
from build_size_tracker.git.repositories.interfaces import GitRepository


class GitService:
    """Service for Git operations."""

    def __init__(self, git_repository: GitRepository) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for Git operations
        """
        self._git_repository = git_repository

    def is_git_available(self) -> bool:
        """Return True if git can be invoked."""
        return self._git_repository.is_available()

    def get_current_branch(self, working_tree: WorkingTree) -> BranchName:
        """
        Get the branch to restore once evaluation is over.

        Args:
            working_tree: Checkout to inspect

        Returns:
            Name of the checked-out branch
        """
        return self._git_repository.current_branch(working_tree)

    def list_recent_commits(
        self, working_tree: WorkingTree, limit: int = 0
    ) -> tuple[CommitIdentifier, ...]:
        """
        List the most recent commits, newest first.

        Args:
            working_tree: Checkout to inspect
            limit: Maximum number of commits to return. 0 returns every commit.

        Returns:
            Tuple of commit hashes ordered from newest to oldest
        """
        if limit < 0:
            raise ValueError(f"Commit limit must be non-negative, got {limit}")

        commits = self._git_repository.list_commits(working_tree)
        if limit == 0:
            return commits
        return commits[:limit]

    def checkout(self, working_tree: WorkingTree, ref: str) -> None:
        """
        Check out a commit or branch, discarding local modifications.

        Args:
            working_tree: Checkout to modify
            ref: Commit hash or branch name
        """
        self._git_repository.checkout(working_tree, ref)

    def get_current_commit_info(self, working_tree: WorkingTree) -> CommitInfo:
        """
        Get metadata for the commit currently checked out.

        Args:
            working_tree: Checkout to inspect

        Returns:
            CommitInfo of HEAD
        """
        return self._git_repository.commit_info(working_tree)
