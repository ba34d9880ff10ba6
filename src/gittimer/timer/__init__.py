"""Timer record, state machine and persistence."""

from gittimer.timer.models import TimerRecord, TimerState
from gittimer.timer.state import (
    elapsed,
    format_elapsed,
    is_running,
    is_stopped,
    started,
    stopped,
    timer_state,
)
from gittimer.timer.storage import TimerStore

__all__ = [
    # Models
    "TimerRecord",
    "TimerState",
    # State machine
    "is_running",
    "is_stopped",
    "timer_state",
    "elapsed",
    "format_elapsed",
    "started",
    "stopped",
    # Storage
    "TimerStore",
]
