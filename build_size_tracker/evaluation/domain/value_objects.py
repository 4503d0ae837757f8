"""Value objects for the Evaluation domain."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from build_size_tracker.git.domain.value_objects import (
    BranchName,
    CommitIdentifier,
    CommitInfo,
)


class RunState(str, Enum):
    """Stage of an evaluation run."""

    INIT = "init"
    LISTING = "listing"
    CONFIRMING = "confirming"
    EVALUATING = "evaluating"
    RESTORING = "restoring"
    REPORTING = "reporting"
    DONE = "done"


@dataclass(frozen=True)
class EvaluationResult:
    """Build size measured for one commit."""

    hash: CommitIdentifier
    date: str
    message: str
    refs: str
    body: str
    author_name: str
    author_email: str
    build_size: int

    def __post_init__(self) -> None:
        """Validate the build size."""
        if self.build_size < 0:
            raise ValueError(f"Build size cannot be negative: {self.build_size}")

    @classmethod
    def from_commit(cls, commit: CommitInfo, build_size: int) -> "EvaluationResult":
        """Combine commit metadata with a measured size."""
        return cls(
            hash=commit.hash,
            date=commit.date,
            message=commit.message,
            refs=commit.refs,
            body=commit.body,
            author_name=commit.author_name,
            author_email=commit.author_email,
            build_size=build_size,
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise to the report record, keeping attribute order."""
        return {
            "hash": self.hash,
            "date": self.date,
            "message": self.message,
            "refs": self.refs,
            "body": self.body,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "buildSize": self.build_size,
        }


@dataclass(frozen=True)
class ReportPaths:
    """Files written for a run."""

    json_path: Path
    html_path: Path


@dataclass
class EvaluationRun:
    """Accumulated state of one evaluation run."""

    commit_limit: int
    original_branch: BranchName | None = None
    commits: tuple[CommitIdentifier, ...] = ()
    results: list[EvaluationResult] = field(default_factory=list)
    state: RunState = RunState.INIT
    cancelled: bool = False
    report: ReportPaths | None = None

    @property
    def evaluated_hashes(self) -> tuple[CommitIdentifier, ...]:
        return tuple(result.hash for result in self.results)
