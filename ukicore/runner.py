"""External command execution behind a small capability interface."""
from __future__ import annotations
import os, shutil, subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

__all__ = ['RunnerResult', 'Runner', 'SubprocessRunner', 'resolve_tool']

NOT_FOUND_EXIT = 127


@dataclass
class RunnerResult:
    cmd: List[str] = field(default_factory=list)
    exit_code: int = 0
    output: str = ''

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Runner(Protocol):
    def run(self, cmd: str, *args: str) -> RunnerResult: ...


def resolve_tool(name: str, bundle_dirs: Sequence[str] = ()) -> str:
    """Prefer a bundled ``<dir>/<name>`` or ``<dir>/<name>/bin/<name>`` before PATH.

    Returns '' when nothing executable is found.
    """
    for base in bundle_dirs:
        for p in (os.path.join(base, name, name),
                  os.path.join(base, name, 'bin', name),
                  os.path.join(base, name)):
            if os.path.isfile(p) and os.access(p, os.X_OK):
                return p
    return shutil.which(name) or ''


class SubprocessRunner:
    """Runs commands synchronously, capturing stdout and stderr together.

    ``bundle_dirs`` are searched for the executable before PATH. ``timeout``
    is None by default, so a hung tool blocks the caller.
    """

    def __init__(self, bundle_dirs: Sequence[str] = (), timeout: Optional[float] = None,
                 cwd: Optional[str] = None):
        self.bundle_dirs = list(bundle_dirs)
        self.timeout = timeout
        self.cwd = cwd

    def run(self, cmd: str, *args: str) -> RunnerResult:
        argv = [cmd, *args]
        exe = resolve_tool(cmd, self.bundle_dirs) if os.sep not in cmd else cmd
        if not exe:
            return RunnerResult(argv, NOT_FOUND_EXIT, f'exec: "{cmd}": executable file not found in $PATH')
        try:
            proc = subprocess.run([exe, *args], stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                                  text=True, timeout=self.timeout, cwd=self.cwd, check=False)
        except FileNotFoundError as e:
            return RunnerResult(argv, NOT_FOUND_EXIT, str(e))
        except OSError as e:
            return RunnerResult(argv, 126, str(e))
        except subprocess.TimeoutExpired as e:
            out = e.output if isinstance(e.output, str) else (e.output or b'').decode(errors='replace')
            return RunnerResult(argv, -1, f"{out}timed out after {self.timeout}s")
        return RunnerResult(argv, proc.returncode, proc.stdout or '')
