"""Configuration management for git-timer."""

import logging
import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gittimer.errors import TimerIOError
from gittimer.repository import RepositoryContext

logger = logging.getLogger(__name__)

TOOL_NAME = "git-timer"

# User config directory
GIT_TIMER_DIR = Path.home() / f".{TOOL_NAME}"
GIT_TIMER_ENV_FILE = GIT_TIMER_DIR / ".env"

# Last-resort state file when there is no repository to key on
LOCAL_STATE_FILE = f".{TOOL_NAME}.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_TIMER_",
        env_file=(str(GIT_TIMER_ENV_FILE),),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    runtime_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GIT_TIMER_RUNTIME_DIR", "XDG_RUNTIME_DIR"),
        description="Per-session scratch directory preferred for timer state",
    )
    git_executable: str = Field(
        default="git",
        description="git binary used for repository queries and commits",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level when --verbose is not given",
    )

    def get_runtime_dir(self) -> Path | None:
        """Get the runtime directory if it is usable.

        Returns:
            The configured directory when it is set, non-empty and writable,
            otherwise None
        """
        if not self.runtime_dir:
            logger.info("Runtime directory not available, using repository-local storage")
            return None

        path = Path(self.runtime_dir)
        if not path.is_dir() or not os.access(path, os.W_OK):
            logger.warning(f"Runtime directory {path} is not writable, using repository-local storage")
            return None

        return path


def state_filename(identifier: str) -> str:
    """Name of the state file for a repository identifier."""
    return f"repo-{identifier}.json"


def resolve_storage_path(
    runtime_dir: Path | None,
    repository: RepositoryContext | None,
    cwd: Path,
) -> Path:
    """Decide where the timer record for a repository lives.

    Args:
        runtime_dir: Usable runtime directory, or None
        repository: Repository the timer belongs to, or None outside a repository
        cwd: Current working directory

    Returns:
        Path of the JSON state file
    """
    if repository is None:
        path = cwd / LOCAL_STATE_FILE
        logger.debug(f"No repository context, using {path}")
        return path

    filename = state_filename(repository.identifier)
    if runtime_dir is not None:
        path = runtime_dir / TOOL_NAME / filename
        logger.debug(f"Using runtime directory for timer data: {path}")
        return path

    path = repository.root / f".{TOOL_NAME}" / filename
    logger.debug(f"Fallback path: {path}")
    return path


def prepare_storage_dir(path: Path, repository: RepositoryContext | None) -> None:
    """Create the directory holding ``path``.

    Inside the repository-local fallback directory a catch-all ``.gitignore``
    is written so timer state never shows up as an untracked file.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        if repository is None or path.parent != repository.root / f".{TOOL_NAME}":
            return

        gitignore = path.parent / ".gitignore"
        if not gitignore.exists():
            gitignore.write_text("*\n", encoding="utf-8")
            logger.debug(f"Wrote {gitignore}")
    except OSError as e:
        raise TimerIOError(f"Failed to create directory {path.parent}: {e}", path.parent) from e


# Global settings instance
settings = Settings()
