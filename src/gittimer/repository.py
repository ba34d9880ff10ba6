"""Git repository detection.

Answers whether the current directory is inside a git working tree, where
its top level is, and derives a short identifier used to keep timer state
for different repositories apart.
"""

import hashlib
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from gittimer.errors import NotARepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryContext:
    """A resolved repository.

    Attributes:
        root: Absolute top-level directory of the working tree.
        identifier: Stable short token derived from ``root``.
    """

    root: Path
    identifier: str


def repository_identifier_for(root: Path) -> str:
    """Hash a repository root path into a short hex identifier.

    Args:
        root: Absolute repository root

    Returns:
        16 hex digits, identical for identical roots
    """
    digest = hashlib.blake2b(str(root).encode("utf-8"), digest_size=8)
    return digest.hexdigest()


class GitRepository:
    """Queries git about the working tree containing ``cwd``."""

    def __init__(self, git_executable: str = "git", cwd: Path | str | None = None) -> None:
        self.git_executable = git_executable
        self.cwd = Path(cwd) if cwd is not None else None

    def _rev_parse(self, *args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [self.git_executable, "rev-parse", *args],
            capture_output=True,
            text=True,
            cwd=self.cwd,
        )

    def is_inside_repository(self) -> bool:
        """Check whether the working directory is inside a git working tree.

        Any failure to ask git counts as "not a repository".
        """
        try:
            result = self._rev_parse("--is-inside-work-tree")
        except OSError as e:
            logger.debug(f"Could not run {self.git_executable}: {e}")
            return False

        return result.returncode == 0 and result.stdout.strip() == "true"

    def repository_root(self) -> Path:
        """Get the absolute top-level directory of the working tree.

        Raises:
            NotARepositoryError: If git cannot report a top-level directory
        """
        try:
            result = self._rev_parse("--show-toplevel")
        except OSError as e:
            raise NotARepositoryError(f"Failed to execute {self.git_executable}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise NotARepositoryError(f"Failed to get git repository path ({detail})")

        root = Path(result.stdout.strip()).resolve()
        logger.debug(f"Repository root: {root}")
        return root

    def repository_identifier(self) -> str:
        """Get the identifier of the enclosing repository."""
        return repository_identifier_for(self.repository_root())

    def context(self) -> RepositoryContext:
        """Resolve root and identifier in a single git call."""
        root = self.repository_root()
        return RepositoryContext(root=root, identifier=repository_identifier_for(root))
