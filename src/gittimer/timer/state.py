"""Timer state machine.

Pure functions over ``TimerRecord`` values. Nothing here touches the disk;
callers persist the records these functions return.

    idle --start--> running --commit--> stopped --git ok--> idle (file removed)
                                           |
                                           +--git fails--> stopped (end kept)
"""

from datetime import datetime

from gittimer.errors import CorruptStateError
from gittimer.timer.models import TimerRecord, TimerState


def local_now() -> datetime:
    """Current time with the local UTC offset attached."""
    return datetime.now().astimezone()


def is_running(record: TimerRecord) -> bool:
    return record.start is not None and record.end is None


def is_stopped(record: TimerRecord) -> bool:
    return record.start is not None and record.end is not None


def timer_state(record: TimerRecord) -> TimerState:
    """Classify a record as idle, running or stopped."""
    if record.start is None:
        return TimerState.IDLE
    if record.end is None:
        return TimerState.RUNNING
    return TimerState.STOPPED


def started(name: str | None = None, now: datetime | None = None) -> TimerRecord:
    """Build a freshly running record."""
    return TimerRecord(name=name, start=now or local_now(), end=None)


def stopped(record: TimerRecord, now: datetime | None = None) -> TimerRecord:
    """Return a copy of a running record with ``end`` stamped.

    Raises:
        CorruptStateError: If ``start`` lies after the stop time
    """
    end = now or local_now()
    try:
        return TimerRecord.model_validate({**record.model_dump(), "end": end})
    except ValueError as e:
        raise CorruptStateError(f"Cannot stop timer: {e}") from e


def elapsed(record: TimerRecord, now: datetime | None = None) -> tuple[int, int] | None:
    """Compute elapsed time as whole minutes and remaining seconds.

    A stopped record measures ``start`` to ``end``. A running record
    measures ``start`` to ``now``, so repeated calls give a live reading.

    Args:
        record: Timer record
        now: Reference time for running records (defaults to the clock)

    Returns:
        ``(minutes, seconds)`` with ``0 <= seconds < 60``, or None when idle

    Raises:
        CorruptStateError: If the duration is negative
    """
    if record.start is None:
        return None

    until = record.end if record.end is not None else (now or local_now())
    total_seconds = int((until - record.start).total_seconds())
    if total_seconds < 0:
        raise CorruptStateError(
            f"Timer start {record.start.isoformat()} lies after {until.isoformat()}"
        )

    minutes, seconds = divmod(total_seconds, 60)
    return minutes, seconds


def format_elapsed(minutes: int, seconds: int) -> str:
    return f"{minutes} minutes {seconds} seconds"


def timer_footer(minutes: int, seconds: int) -> str:
    """Footer appended to an explicit commit message."""
    return f"\n\n[Timer: {format_elapsed(minutes, seconds)}]"


def template_footer(minutes: int, seconds: int) -> str:
    """Commit template body for editor-based commits."""
    return f"\n\n# Timer: {format_elapsed(minutes, seconds)}\n#\n"
