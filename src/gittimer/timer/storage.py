"""JSON file persistence for the timer record.

One file per repository. Writes go to a temporary file in the same
directory and are renamed over the target, so an interrupted write never
leaves a half-written record behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from gittimer.errors import CorruptStateError, TimerIOError
from gittimer.timer.models import TimerRecord

logger = logging.getLogger(__name__)


class TimerStore:
    """JSON file-based storage for a single timer record.

    Example:
        store = TimerStore("/run/user/1000/git-timer/repo-0123abcd.json")
        record = store.load()
        store.save(record)
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the timer store.

        Args:
            path: Path to the JSON state file.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Get the state file path."""
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> TimerRecord:
        """Load the timer record.

        Returns:
            The stored record, or an idle record if no file exists.

        Raises:
            CorruptStateError: If the file cannot be parsed as a timer record.
            TimerIOError: If the file exists but cannot be read.
        """
        if not self._path.exists():
            logger.info("No existing timer data found, creating new timer")
            return TimerRecord()

        logger.debug(f"Loading data from existing file: {self._path}")
        try:
            content = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"Timer file {self._path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise TimerIOError(f"Failed to read {self._path}: {e}", self._path) from e

        if not content.strip():
            logger.warning(f"Timer file {self._path} is empty, treating as no timer")
            return TimerRecord()

        try:
            record = TimerRecord.model_validate(json.loads(content))
        except ValueError as e:
            raise CorruptStateError(
                f"Failed to parse timer data in {self._path}: {e}. "
                "Fix or delete the file to continue."
            ) from e

        logger.debug("Timer data loaded successfully")
        return record

    def save(self, record: TimerRecord) -> None:
        """Atomically write the timer record.

        Args:
            record: Record to persist.

        Raises:
            TimerIOError: If the file cannot be written.
        """
        logger.debug(f"Saving timer data to {self._path}")
        content = json.dumps(record.model_dump(mode="json"), indent=2)

        temp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, self._path)
            temp_path = None
        except OSError as e:
            raise TimerIOError(f"Failed to write timer data to {self._path}: {e}", self._path) from e
        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()

        logger.debug("Timer data saved successfully")

    def remove(self) -> None:
        """Delete the state file if present.

        Raises:
            TimerIOError: If the file exists but cannot be removed.
        """
        if not self._path.exists():
            return

        logger.debug(f"Removing timer file: {self._path}")
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise TimerIOError(f"Failed to remove timer file at {self._path}: {e}", self._path) from e
        logger.debug("Timer file removed successfully")
