"""Tests for git repository detection."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from gittimer.errors import NotARepositoryError
from gittimer.repository import GitRepository, RepositoryContext, repository_identifier_for


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestIsInsideRepository:
    def test_true_when_git_says_true(self) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="true\n")) as mock_run:
            assert GitRepository().is_inside_repository() is True

        cmd = mock_run.call_args.args[0]
        assert cmd == ["git", "rev-parse", "--is-inside-work-tree"]

    def test_false_inside_git_dir(self) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="false\n")):
            assert GitRepository().is_inside_repository() is False

    def test_false_on_nonzero_exit(self) -> None:
        result = _completed(returncode=128, stderr="fatal: not a git repository")
        with patch("gittimer.repository.subprocess.run", return_value=result):
            assert GitRepository().is_inside_repository() is False

    def test_false_when_git_missing(self) -> None:
        with patch("gittimer.repository.subprocess.run", side_effect=FileNotFoundError("git")):
            assert GitRepository().is_inside_repository() is False

    def test_uses_configured_executable_and_cwd(self, tmp_path) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="true\n")) as mock_run:
            GitRepository("/opt/git/bin/git", cwd=tmp_path).is_inside_repository()

        assert mock_run.call_args.args[0][0] == "/opt/git/bin/git"
        assert mock_run.call_args.kwargs["cwd"] == tmp_path


class TestRepositoryRoot:
    def test_returns_toplevel(self) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="/srv/project\n")):
            root = GitRepository().repository_root()

        assert root == Path("/srv/project").resolve()

    def test_nonzero_exit_raises(self) -> None:
        result = _completed(returncode=128, stderr="fatal: not a git repository")
        with patch("gittimer.repository.subprocess.run", return_value=result):
            with pytest.raises(NotARepositoryError, match="not a git repository"):
                GitRepository().repository_root()

    def test_missing_git_raises(self) -> None:
        with patch("gittimer.repository.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(NotARepositoryError):
                GitRepository().repository_root()

    def test_context_bundles_root_and_identifier(self) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="/srv/project\n")):
            context = GitRepository().context()

        root = Path("/srv/project").resolve()
        assert context == RepositoryContext(root=root, identifier=repository_identifier_for(root))


class TestRepositoryIdentifier:
    def test_is_deterministic(self) -> None:
        root = Path("/srv/project")
        assert repository_identifier_for(root) == repository_identifier_for(Path("/srv/project"))

    def test_is_short_hex(self) -> None:
        identifier = repository_identifier_for(Path("/srv/project"))
        assert len(identifier) == 16
        int(identifier, 16)

    def test_differs_between_roots(self) -> None:
        assert repository_identifier_for(Path("/srv/a")) != repository_identifier_for(Path("/srv/b"))

    def test_method_matches_function(self) -> None:
        with patch("gittimer.repository.subprocess.run", return_value=_completed(stdout="/srv/project\n")):
            identifier = GitRepository().repository_identifier()

        assert identifier == repository_identifier_for(Path("/srv/project").resolve())


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestWithRealGit:
    def test_detects_repository_from_subdirectory(self, tmp_path) -> None:
        subprocess.run(["git", "init", "-q", str(tmp_path)], check=True)
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        repo = GitRepository(cwd=nested)

        assert repo.is_inside_repository()
        assert repo.repository_root() == tmp_path.resolve()

    def test_plain_directory_is_not_a_repository(self, tmp_path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        # Keep git from walking up into an enclosing repository
        with patch.dict("os.environ", {"GIT_CEILING_DIRECTORIES": str(tmp_path)}):
            repo = GitRepository(cwd=plain)
            assert not repo.is_inside_repository()
            with pytest.raises(NotARepositoryError):
                repo.repository_root()
