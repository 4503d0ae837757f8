"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod

from build_size_tracker.git.domain.value_objects import (
    BranchName,
    CommitIdentifier,
    CommitInfo,
    WorkingTree,
)


class GitRepository(ABC):
    """Interface for Git repository operations.

    Implementations act on a single shared checkout. Calls must never overlap
    for the same working tree.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the git executable can be found."""
        ...

    @abstractmethod
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
        ...

    @abstractmethod
    def list_commits(self, working_tree: WorkingTree) -> tuple[CommitIdentifier, ...]:
        """
        List commits reachable from HEAD.

        Args:
            working_tree: Checkout to inspect

        Returns:
            Tuple of commit hashes ordered from newest to oldest. Empty if
            git is not available.
        """
        ...

    @abstractmethod
    def checkout(self, working_tree: WorkingTree, ref: str) -> None:
        """
        Force the working tree to match a reference, discarding local changes.

        Args:
            working_tree: Checkout to modify
            ref: Commit hash or branch name

        Raises:
            CheckoutError: If the reference cannot be checked out
        """
        ...

    @abstractmethod
    def commit_info(self, working_tree: WorkingTree) -> CommitInfo:
        """
        Get metadata for the commit currently checked out.

        Args:
            working_tree: Checkout to inspect

        Returns:
            CommitInfo of HEAD
        """
        ...
