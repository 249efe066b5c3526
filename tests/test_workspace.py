import os
import signal
import sys

import pytest

from crs_dictionary import repository
from crs_dictionary.errors import RepositoryError
from crs_dictionary.repository import RunWorkspace, prepare_php_repo


def test_workspace_removed_on_normal_exit():
    with RunWorkspace() as workspace:
        path = workspace.path
        workspace.file('scratch.txt').write_text('x')
        assert path.is_dir()
    assert not path.exists()


def test_workspace_removed_on_error():
    with pytest.raises(RuntimeError):
        with RunWorkspace() as workspace:
            path = workspace.path
            raise RuntimeError('boom')
    assert not path.exists()


@pytest.mark.skipif(sys.platform == 'win32', reason='POSIX signals')
def test_workspace_removed_on_sigterm():
    previous = signal.getsignal(signal.SIGTERM)
    with pytest.raises(SystemExit) as excinfo:
        with RunWorkspace() as workspace:
            path = workspace.path
            os.kill(os.getpid(), signal.SIGTERM)
    assert excinfo.value.code == 128 + signal.SIGTERM
    assert not path.exists()
    assert signal.getsignal(signal.SIGTERM) == previous


def test_file_requires_active_workspace():
    with pytest.raises(RuntimeError):
        RunWorkspace().file('x')


class FakeGit:
    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, args, cwd=None):
        self.calls.append((list(args), cwd))

        class Result:
            returncode = self.returncode
            stderr = 'fatal: unable to access'

        return Result()


def test_prepare_clones_into_workspace(monkeypatch):
    git = FakeGit()
    monkeypatch.setattr(repository, '_git', git)
    with RunWorkspace() as workspace:
        repo = prepare_php_repo(None, workspace)
        assert repo == workspace.file('php-src')
    args, _ = git.calls[0]
    assert args[:3] == ['clone', '--depth', '1']
    assert args[3] == 'https://github.com/php/php-src'


def test_prepare_updates_existing_checkout(monkeypatch, tmp_path):
    git = FakeGit()
    monkeypatch.setattr(repository, '_git', git)
    with RunWorkspace() as workspace:
        assert prepare_php_repo(tmp_path, workspace) == tmp_path
    assert [call[0] for call in git.calls] == [['checkout', 'master'], ['pull', '--depth', '1']]
    assert all(cwd == tmp_path for _, cwd in git.calls)


def test_failed_clone_is_fatal(monkeypatch):
    monkeypatch.setattr(repository, '_git', FakeGit(returncode=128))
    with RunWorkspace() as workspace:
        with pytest.raises(RepositoryError, match='unable to access'):
            prepare_php_repo(None, workspace)
