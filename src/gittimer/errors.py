"""Error types raised by git-timer.

Every error propagates up to the CLI, which prints the message and exits
with the error's ``exit_code``.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gittimer.commit import CommitResult


class GitTimerError(Exception):
    """Base class for all git-timer errors."""

    exit_code = 1


class NotARepositoryError(GitTimerError):
    """Raised when the current directory is not inside a git working tree."""

    pass


class TimerAlreadyRunningError(GitTimerError):
    """Raised when ``start`` is invoked while a timer is running."""

    pass


class NoActiveTimerError(GitTimerError):
    """Raised when ``commit`` finds neither a running nor a stopped timer."""

    pass


class CorruptStateError(GitTimerError):
    """Raised when the persisted timer file exists but cannot be used."""

    pass


class TimerIOError(GitTimerError):
    """Raised when reading, writing or removing the timer file fails."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class CommitFailedError(GitTimerError):
    """Raised when git ran but did not report success.

    The stopped timer record is left on disk so the next ``commit``
    reuses the original timing.
    """

    def __init__(self, message: str, result: "CommitResult | None" = None) -> None:
        super().__init__(message)
        self.result = result
