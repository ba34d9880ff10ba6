"""Command orchestration: start, status and commit.

Each function receives the record loaded for this invocation and the store
it came from, applies one command and persists the outcome. Errors are
raised for the CLI to report.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from gittimer.commit import CommitExecutor, CommitResult
from gittimer.errors import (
    CommitFailedError,
    NoActiveTimerError,
    TimerAlreadyRunningError,
    TimerIOError,
)
from gittimer.timer import TimerRecord, TimerState, TimerStore
from gittimer.timer.state import (
    elapsed,
    format_elapsed,
    is_running,
    is_stopped,
    started,
    stopped,
    template_footer,
    timer_footer,
    timer_state,
)

logger = logging.getLogger(__name__)


@dataclass
class StatusReport:
    """Read-only view of the timer for ``status``."""

    state: TimerState
    name: str | None = None
    minutes: int = 0
    seconds: int = 0

    @property
    def message(self) -> str:
        if self.state == TimerState.IDLE:
            return "No timer running."

        label = f"Timer '{self.name}'" if self.name else "Timer"
        duration = format_elapsed(self.minutes, self.seconds)
        if self.state == TimerState.RUNNING:
            return f"{label} has been running for {duration}"
        return f"{label} has completed after {duration}"


@dataclass
class CommitOutcome:
    """What ``commit_with_timer`` did.

    Attributes:
        record: The stopped record whose timing went into the commit.
        minutes: Elapsed minutes.
        seconds: Elapsed seconds.
        reused: True if the timing came from an earlier failed attempt.
        result: Result reported by the commit executor.
    """

    record: TimerRecord
    minutes: int
    seconds: int
    reused: bool
    result: CommitResult


def start_timer(
    record: TimerRecord,
    store: TimerStore,
    name: str | None = None,
    now: datetime | None = None,
) -> TimerRecord:
    """Start a new timer.

    Args:
        record: Currently stored record
        store: Store to persist into
        name: Optional timer label
        now: Start time (defaults to the clock)

    Returns:
        The running record that was saved

    Raises:
        TimerAlreadyRunningError: If a timer is already running
    """
    logger.info("Starting git-timer")

    if is_running(record):
        label = f" '{record.name}'" if record.name else ""
        raise TimerAlreadyRunningError(
            f"Timer{label} is already running. "
            "Use 'git-timer status' to check or 'git-timer commit' to end it."
        )

    if is_stopped(record):
        logger.warning("Discarding stopped timer from a previous failed commit")

    new_record = started(name, now)
    store.save(new_record)
    return new_record


def show_status(record: TimerRecord, now: datetime | None = None) -> StatusReport:
    """Describe the timer without changing it."""
    state = timer_state(record)
    reading = elapsed(record, now)
    if reading is None:
        return StatusReport(state=state)

    minutes, seconds = reading
    return StatusReport(state=state, name=record.name, minutes=minutes, seconds=seconds)


def commit_with_timer(
    record: TimerRecord,
    store: TimerStore,
    executor: CommitExecutor,
    message: str | None = None,
    now: datetime | None = None,
) -> CommitOutcome:
    """Stop the timer and commit with the elapsed time in the message.

    A record that was already stopped by a failed attempt is reused as-is,
    so retrying never re-stamps the end time. The record is only removed
    once the commit succeeds.

    Args:
        record: Currently stored record
        store: Store the record came from
        executor: Performs the actual commit
        message: Commit message; None opens the editor with a template
        now: Stop time (defaults to the clock)

    Returns:
        Outcome of the successful commit

    Raises:
        NoActiveTimerError: If no timer was started
        CorruptStateError: If the timer start lies after the stop time
        CommitFailedError: If the commit did not succeed
    """
    logger.info("Committing with timer data")

    reused = False
    if is_stopped(record):
        logger.info("Found stopped timer data from previous commit attempt")
        reused = True
    elif is_running(record):
        record = stopped(record, now)
        store.save(record)
    else:
        raise NoActiveTimerError("No timer is currently running")

    reading = elapsed(record)
    if reading is None:
        raise NoActiveTimerError("No timer is currently running")
    minutes, seconds = reading

    if message is not None:
        result = executor.commit(f"{message}{timer_footer(minutes, seconds)}")
    else:
        result = _commit_from_template(executor, template_footer(minutes, seconds))

    if not result.success:
        raise CommitFailedError("Git commit failed. Timer data preserved.", result)

    store.remove()
    return CommitOutcome(record=record, minutes=minutes, seconds=seconds, reused=reused, result=result)


def _commit_from_template(executor: CommitExecutor, content: str) -> CommitResult:
    """Write a throwaway commit template and commit with it."""
    try:
        fd, name = tempfile.mkstemp(prefix="git-timer-", suffix=".txt")
    except OSError as e:
        raise TimerIOError(
            f"Failed to create temporary commit template file: {e}", Path(tempfile.gettempdir())
        ) from e

    template = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        return executor.commit_with_template(template)
    except OSError as e:
        raise TimerIOError(f"Failed to write commit template {template}: {e}", template) from e
    finally:
        template.unlink(missing_ok=True)
