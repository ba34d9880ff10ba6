"""Command-line interface for git-timer.

git-timer measures how long you work on a change and writes that time into
the commit message.

    git-timer start [NAME]        Start timing (optionally labelled)
    git-timer status              Show elapsed time
    git-timer commit [-m MSG]     Stop timing and commit with the time appended

Installed on PATH, git also exposes it as ``git timer``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gittimer import __version__
from gittimer.commands import commit_with_timer, show_status, start_timer
from gittimer.commit import CommitResult, GitCommitExecutor
from gittimer.config import prepare_storage_dir, resolve_storage_path, settings
from gittimer.errors import CommitFailedError, GitTimerError, NotARepositoryError
from gittimer.repository import GitRepository, RepositoryContext
from gittimer.timer import TimerStore, is_stopped

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """Configure logging."""
    log_level = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=log_level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=err_console, show_path=verbose)],
    )


def open_store() -> tuple[TimerStore, RepositoryContext]:
    """Locate the repository and the timer store that belongs to it.

    Raises:
        NotARepositoryError: If not run inside a git working tree
    """
    repo = GitRepository(settings.git_executable)
    if not repo.is_inside_repository():
        raise NotARepositoryError(
            "Not in a git repository. Please run git-timer inside a git repository."
        )

    context = repo.context()
    path = resolve_storage_path(settings.get_runtime_dir(), context, Path.cwd())
    prepare_storage_dir(path, context)
    return TimerStore(path), context


def _print_git_output(result: CommitResult) -> None:
    if result.stdout:
        sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)


def cmd_start(args: argparse.Namespace) -> None:
    """Start a new timer."""
    store, _ = open_store()
    record = start_timer(store.load(), store, name=args.name)

    label = f" '{escape(record.name)}'" if record.name else ""
    console.print(f"git-timer: Started timer{label} at {record.start:%H:%M:%S}")


def cmd_status(args: argparse.Namespace) -> None:
    """Show the current timer."""
    store, _ = open_store()
    report = show_status(store.load())
    console.print(escape(report.message))


def cmd_commit(args: argparse.Namespace) -> None:
    """Stop the timer and commit."""
    store, _ = open_store()
    record = store.load()

    if is_stopped(record):
        console.print("[yellow]Reusing timer data from previous commit attempt[/yellow]")

    executor = GitCommitExecutor(settings.git_executable, cwd=Path.cwd())
    try:
        outcome = commit_with_timer(record, store, executor, message=args.message)
    except CommitFailedError as e:
        if e.result is not None:
            _print_git_output(e.result)
        raise

    _print_git_output(outcome.result)
    console.print(
        f"[green]Committed[/green] after {outcome.minutes} minutes {outcome.seconds} seconds"
    )


def cmd_version(args: argparse.Namespace) -> None:
    """Show version and configuration information."""
    console.print(f"[bold]git-timer[/bold] v{__version__}")
    console.print(f"Git executable: {escape(settings.git_executable)}")

    repo = GitRepository(settings.git_executable)
    if repo.is_inside_repository():
        context = repo.context()
        path = resolve_storage_path(settings.get_runtime_dir(), context, Path.cwd())
        console.print(f"Repository: {escape(str(context.root))} ({context.identifier})")
        console.print(f"State file: {escape(str(path))}")
    else:
        console.print("Repository: [dim]not inside a git repository[/dim]")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="git-timer",
        description="A coding time tracker that records elapsed time in your commits.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Show detailed output"
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # start
    start_parser = subparsers.add_parser(
        "start",
        help="Start the timer",
        description="Start timing a coding session. Fails if a timer is already running."
    )
    start_parser.add_argument(
        "name", nargs="?", default=None,
        help="Optional label for this timer"
    )
    start_parser.set_defaults(func=cmd_start)

    # status
    status_parser = subparsers.add_parser(
        "status",
        help="Show timer status"
    )
    status_parser.set_defaults(func=cmd_status)

    # commit
    commit_parser = subparsers.add_parser(
        "commit",
        help="Commit and add timer data",
        description="Stop the timer and run git commit with the elapsed time in the message.",
        epilog="""Without -m, git opens your editor with the elapsed time as a comment.
If the commit fails, the timing is kept and reused by the next commit."""
    )
    commit_parser.add_argument(
        "-m", "--message",
        help="Commit message (optional, opens editor if not provided)"
    )
    commit_parser.set_defaults(func=cmd_commit)

    # version
    version_parser = subparsers.add_parser(
        "version",
        help="Show version information"
    )
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the git-timer CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, settings.log_level)
    logger.info("git-timer starting")

    # No command given - show help
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except GitTimerError as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(e.exit_code)

    sys.exit(0)


if __name__ == "__main__":
    main()
