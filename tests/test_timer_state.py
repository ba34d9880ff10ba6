"""Tests for the timer state machine."""

from datetime import datetime, timedelta, timezone

import pytest

from gittimer.errors import CorruptStateError
from gittimer.timer import TimerRecord, TimerState
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

T0 = datetime(2026, 10, 18, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))


class TestClassification:
    def test_idle(self) -> None:
        record = TimerRecord()
        assert timer_state(record) == TimerState.IDLE
        assert not is_running(record)
        assert not is_stopped(record)

    def test_running(self) -> None:
        record = TimerRecord(name="foo", start=T0)
        assert timer_state(record) == TimerState.RUNNING
        assert is_running(record)
        assert not is_stopped(record)

    def test_stopped(self) -> None:
        record = TimerRecord(start=T0, end=T0 + timedelta(minutes=3))
        assert timer_state(record) == TimerState.STOPPED
        assert not is_running(record)
        assert is_stopped(record)


class TestTransitions:
    def test_started_sets_start_and_clears_end(self) -> None:
        record = started("foo", now=T0)
        assert record.name == "foo"
        assert record.start == T0
        assert record.end is None

    def test_started_defaults_to_aware_now(self) -> None:
        record = started()
        assert record.name is None
        assert record.start is not None
        assert record.start.tzinfo is not None

    def test_stopped_keeps_start_and_name(self) -> None:
        running = started("foo", now=T0)
        done = stopped(running, now=T0 + timedelta(seconds=42))

        assert done.name == "foo"
        assert done.start == T0
        assert done.end == T0 + timedelta(seconds=42)
        # Original record untouched
        assert running.end is None

    def test_stopping_before_start_is_corrupt(self) -> None:
        running = started("foo", now=T0 + timedelta(hours=1))

        with pytest.raises(CorruptStateError):
            stopped(running, now=T0)


class TestElapsed:
    def test_idle_has_no_reading(self) -> None:
        assert elapsed(TimerRecord()) is None

    def test_stopped_uses_end(self) -> None:
        record = TimerRecord(start=T0, end=T0 + timedelta(seconds=125))
        # now is ignored once end is set
        assert elapsed(record, now=T0 + timedelta(hours=5)) == (2, 5)

    def test_running_uses_now(self) -> None:
        record = TimerRecord(start=T0)
        assert elapsed(record, now=T0 + timedelta(seconds=125)) == (2, 5)

    def test_running_reading_is_live(self) -> None:
        record = TimerRecord(start=T0)
        assert elapsed(record, now=T0 + timedelta(seconds=10)) == (0, 10)
        assert elapsed(record, now=T0 + timedelta(seconds=70)) == (1, 10)

    def test_just_started_reads_zero(self) -> None:
        record = started(now=T0)
        assert elapsed(record, now=T0) == (0, 0)

    @pytest.mark.parametrize("total", [0, 1, 59, 60, 61, 3599, 3600, 7384, 86399])
    def test_minutes_and_seconds_add_up(self, total: int) -> None:
        record = TimerRecord(start=T0, end=T0 + timedelta(seconds=total))
        minutes, seconds = elapsed(record)
        assert minutes * 60 + seconds == total
        assert 0 <= seconds < 60

    def test_fractional_seconds_are_floored(self) -> None:
        record = TimerRecord(start=T0, end=T0 + timedelta(seconds=61, milliseconds=999))
        assert elapsed(record) == (1, 1)

    def test_hours_are_counted_as_minutes(self) -> None:
        record = TimerRecord(start=T0, end=T0 + timedelta(hours=2, minutes=3, seconds=4))
        assert elapsed(record) == (123, 4)

    def test_start_in_future_is_corrupt(self) -> None:
        record = TimerRecord(start=T0 + timedelta(minutes=5))
        with pytest.raises(CorruptStateError):
            elapsed(record, now=T0)


class TestFormatting:
    def test_format_elapsed(self) -> None:
        assert format_elapsed(2, 5) == "2 minutes 5 seconds"

    def test_timer_footer(self) -> None:
        assert timer_footer(2, 5) == "\n\n[Timer: 2 minutes 5 seconds]"

    def test_template_footer_is_a_comment(self) -> None:
        footer = template_footer(0, 7)
        assert footer.startswith("\n\n")
        lines = [line for line in footer.splitlines() if line]
        assert lines == ["# Timer: 0 minutes 7 seconds", "#"]
