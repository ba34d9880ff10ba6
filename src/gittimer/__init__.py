"""git-timer - Track coding time between starting work and committing it."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("git-timer")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from gittimer.commands import commit_with_timer, show_status, start_timer
from gittimer.timer import TimerRecord, TimerState, TimerStore

__all__ = ["TimerRecord", "TimerState", "TimerStore", "start_timer", "show_status", "commit_with_timer"]
