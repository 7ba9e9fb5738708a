import os
import pytest

from ukicore.constants import DIR_PERM
from ukicore.runner import RunnerResult
from ukicore.vfs import OSFS


class FakeRunner:
    """Records every command; fails them all when ``return_error`` is set."""
    def __init__(self):
        self.cmds = []
        self.return_error = None
        self.output = ''

    def run(self, cmd, *args):
        argv = [cmd, *args]
        self.cmds.append(argv)
        if self.return_error:
            return RunnerResult(argv, 1, str(self.return_error))
        return RunnerResult(argv, 0, self.output)

    def includes_cmds(self, cmds):
        missing = [c for c in cmds if c not in self.cmds]
        if missing:
            raise AssertionError(f"commands not run: {missing}; got {self.cmds}")


@pytest.fixture
def fs(tmp_path):
    root = tmp_path / "vfs"
    root.mkdir()
    fs = OSFS(str(root))
    for d in ("/tmp", "/run", "/etc"):
        fs.mkdir(d, DIR_PERM)
    return fs


@pytest.fixture
def runner():
    return FakeRunner()
