import errno, os, stat, sys
import pytest

from ukicore.runner import NOT_FOUND_EXIT, SubprocessRunner, resolve_tool
from ukicore.vfs import OSFS, ReadOnlyFS


def test_subprocess_runner_captures_combined_output():
    res = SubprocessRunner().run(sys.executable, "-c",
                                 "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)")
    assert res.exit_code == 3
    assert not res.ok
    assert "out" in res.output and "err" in res.output

def test_subprocess_runner_success():
    res = SubprocessRunner().run(sys.executable, "-c", "print('hi')")
    assert res.ok
    assert res.output.strip() == "hi"

def test_subprocess_runner_missing_tool():
    res = SubprocessRunner().run("definitely-not-a-real-tool-xyz", "a")
    assert res.exit_code == NOT_FOUND_EXIT
    assert "executable file not found in $PATH" in res.output
    assert res.cmd == ["definitely-not-a-real-tool-xyz", "a"]

def test_resolve_tool_prefers_bundle(tmp_path):
    tool = tmp_path / "mytool" / "bin" / "mytool"
    tool.parent.mkdir(parents=True)
    tool.write_text("#!/bin/sh\necho bundled\n")
    tool.chmod(0o755)
    assert resolve_tool("mytool", [str(tmp_path)]) == str(tool)
    assert resolve_tool("mytool") == ""


def test_osfs_sandbox_stays_under_root(tmp_path):
    fs = OSFS(str(tmp_path))
    assert fs.real_path("/a/b") == os.path.join(str(tmp_path), "a/b")
    assert fs.real_path("/../../etc/passwd") == os.path.join(str(tmp_path), "etc/passwd")
    assert OSFS().real_path("/etc") == "/etc"

def test_read_only_fs_rejects_writes(tmp_path):
    fs = OSFS(str(tmp_path))
    with fs.open("/f", "wb") as f:
        f.write(b"x")
    ro = ReadOnlyFS(fs)
    with ro.open("/f") as f:
        assert f.read() == b"x"
    assert ro.listdir("/") == ["f"]
    for call in (lambda: ro.open("/f", "ab"), lambda: ro.open("/g", "wb"),
                 lambda: ro.mkdir("/d"), lambda: ro.chmod("/f", 0o600),
                 lambda: ro.remove("/f"), lambda: ro.rename("/f", "/h")):
        with pytest.raises(PermissionError) as exc:
            call()
        assert exc.value.errno == errno.EROFS
    assert stat.S_ISREG(fs.stat("/f").st_mode)

def test_subprocess_runner_timeout():
    res = SubprocessRunner(timeout=0.5).run(sys.executable, "-c", "import time; time.sleep(5)")
    assert res.exit_code == -1
    assert "timed out" in res.output
