"""Service for measuring build artifacts."""

from pathlib import Path

from build_size_tracker.build.domain.value_objects import BuildStep
from build_size_tracker.errors import ArtifactNotFoundError, BuildFailure
from build_size_tracker.git.domain.value_objects import WorkingTree


class ArtifactService:
    """Measures the size of the archive a build produced."""

    def size_of(self, working_tree: WorkingTree, artifact_path: str | Path) -> int:
        """
        Get the size of a build artifact in bytes.

        Args:
            working_tree: Checkout the artifact was built in
            artifact_path: Path to the artifact, relative to the working tree

        Returns:
            Size of the artifact in bytes

        Raises:
            ArtifactNotFoundError: If the artifact does not exist or is not a file
        """
        path = working_tree.resolve(artifact_path)
        try:
            stat_result = path.stat()
        except FileNotFoundError:
            raise ArtifactNotFoundError(str(artifact_path)) from None

        if not path.is_file():
            raise ArtifactNotFoundError(str(artifact_path))
        return stat_result.st_size

    def discard(self, working_tree: WorkingTree, artifact_path: str | Path) -> bool:
        """
        Delete an artifact left behind by a previous build.

        Args:
            working_tree: Checkout the artifact would be built in
            artifact_path: Path to the artifact, relative to the working tree

        Returns:
            True if a file was removed
        """
        path = working_tree.resolve(artifact_path)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise BuildFailure(BuildStep.CLEAN.value, -1, f"Could not remove {artifact_path}: {e}") from e
        return True
