"""Value objects for the Git domain."""

from dataclasses import dataclass
from pathlib import Path

CommitIdentifier = str
BranchName = str


@dataclass(frozen=True)
class WorkingTree:
    """Handle on the checkout every git and build operation acts on."""

    path: Path

    def __post_init__(self) -> None:
        """Normalise the path so relative artifact paths resolve consistently."""
        object.__setattr__(self, "path", Path(self.path).resolve())

    def resolve(self, relative_path: str | Path) -> Path:
        """Resolve a path relative to the working tree root."""
        return self.path / relative_path


@dataclass(frozen=True)
class CommitInfo:
    """Metadata of a commit, as reported by git log."""

    hash: CommitIdentifier
    date: str
    message: str
    refs: str
    body: str
    author_name: str
    author_email: str
