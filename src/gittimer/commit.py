"""Commit execution.

The orchestrator only talks to ``CommitExecutor``; ``GitCommitExecutor``
is the real implementation that shells out to git.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Result of a commit attempt.

    Attributes:
        success: Whether the commit was recorded.
        returncode: Exit status of the commit process.
        stdout: Captured standard output, empty when not captured.
        stderr: Captured standard error, or the launch error.
    """

    success: bool
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class CommitExecutor(ABC):
    """Abstract base class for things that can record a commit."""

    @abstractmethod
    def commit(self, message: str) -> CommitResult:
        """Commit with a complete message.

        Args:
            message: Full commit message

        Returns:
            Commit result
        """
        ...

    @abstractmethod
    def commit_with_template(self, template: Path) -> CommitResult:
        """Commit interactively, starting the editor from a template.

        Args:
            template: Path of the message template file

        Returns:
            Commit result
        """
        ...


class GitCommitExecutor(CommitExecutor):
    """Runs ``git commit`` as a subprocess."""

    def __init__(self, git_executable: str = "git", cwd: Path | str | None = None) -> None:
        self.git_executable = git_executable
        self.cwd = Path(cwd) if cwd is not None else None

    def commit(self, message: str) -> CommitResult:
        cmd = [self.git_executable, "commit", "-m", message]
        logger.debug(f"Running: {self.git_executable} commit -m <{len(message)} chars>")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, cwd=self.cwd)
        except OSError as e:
            return CommitResult(success=False, returncode=-1, stderr=f"Failed to execute git commit: {e}")

        return CommitResult(
            success=result.returncode == 0,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def commit_with_template(self, template: Path) -> CommitResult:
        # Not captured: git needs the terminal for the editor
        cmd = [self.git_executable, "commit", "--template", str(template)]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, cwd=self.cwd)
        except OSError as e:
            return CommitResult(success=False, returncode=-1, stderr=f"Failed to execute git commit: {e}")

        return CommitResult(success=result.returncode == 0, returncode=result.returncode)
