"""PHP source checkout and scoped temporary storage for a run."""

from __future__ import annotations

import logging
import signal
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .errors import RepositoryError
from .github_base import PHP_REPO_GITHUB

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RunWorkspace:
    """
    Temporary directory owned by one run.

    Removed on normal exit, on exceptions and on SIGINT/SIGTERM: the signal
    handlers turn the signal into SystemExit so the `with` block unwinds.
    Previous handlers are restored on exit.
    """

    def __init__(self, prefix: str = "php_dictionary_"):
        self.prefix = prefix
        self.path: Optional[Path] = None
        self._tmp: Optional[tempfile.TemporaryDirectory] = None
        self._previous: dict = {}

    def __enter__(self) -> "RunWorkspace":
        self._tmp = tempfile.TemporaryDirectory(prefix=self.prefix)
        self.path = Path(self._tmp.name)
        for signum in HANDLED_SIGNALS:
            try:
                self._previous[signum] = signal.signal(signum, self._on_signal)
            except ValueError:
                # not the main thread; rely on the context manager alone
                pass
        logger.debug("Created workspace %s", self.path)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()
        if self._tmp is not None:
            self._tmp.cleanup()
            logger.debug("Removed workspace %s", self.path)
            self._tmp = None
        return False

    @staticmethod
    def _on_signal(signum, frame):
        raise SystemExit(128 + signum)

    def file(self, name: str) -> Path:
        if self.path is None:
            raise RuntimeError("workspace is not active")
        return self.path / name


def _git(args: Sequence[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise RepositoryError("git binary not found.") from exc


def clone_php_repo(target: Path, url: str = PHP_REPO_GITHUB) -> Path:
    """Shallow clone of php-src into `target`."""
    logger.info("Cloning PHP repo ...")
    result = _git(["clone", "--depth", "1", url, str(target)])
    if result.returncode != 0:
        raise RepositoryError(f"Cloning {url} failed.\n{result.stderr}")
    logger.info("Cloning PHP repo done")
    return Path(target)


def update_php_repo(repo: Path, branch: str = "master") -> Path:
    """Bring an existing checkout up to date with its upstream branch."""
    logger.info("Updating PHP repo ...")
    # a failed checkout is tolerated; the pull below is what must succeed
    _git(["checkout", branch], cwd=repo)
    result = _git(["pull", "--depth", "1"], cwd=repo)
    if result.returncode != 0:
        raise RepositoryError(f"Updating {repo} failed.\n{result.stderr}")
    logger.info("Updating PHP repo done")
    return Path(repo)


def prepare_php_repo(existing: Optional[Path], workspace: RunWorkspace) -> Path:
    if existing is None:
        return clone_php_repo(workspace.file("php-src"))
    return update_php_repo(existing)


__all__ = ["RunWorkspace", "clone_php_repo", "update_php_repo", "prepare_php_repo"]
