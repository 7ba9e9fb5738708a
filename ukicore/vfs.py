"""Filesystem capability used by the staging helpers.

Every helper in :mod:`ukicore.file_utils` takes an ``fs`` argument instead of
calling :mod:`os` directly, so the same code runs against:

    OSFS()            the real filesystem
    OSFS(root=dir)    a sandbox: absolute paths are resolved under ``dir``
    ReadOnlyFS(fs)    any of the above, with every mutating call rejected
"""
from __future__ import annotations
import errno, os
from typing import IO, List, Optional, Protocol

__all__ = ['FS', 'OSFS', 'ReadOnlyFS']


class FS(Protocol):
    def open(self, path: str, mode: str = 'rb') -> IO: ...
    def stat(self, path: str) -> os.stat_result: ...
    def lstat(self, path: str) -> os.stat_result: ...
    def listdir(self, path: str) -> List[str]: ...
    def mkdir(self, path: str, mode: int = 0o755) -> None: ...
    def chmod(self, path: str, mode: int) -> None: ...
    def rename(self, src: str, dst: str) -> None: ...
    def remove(self, path: str) -> None: ...


class OSFS:
    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(root) if root else None

    def real_path(self, path: str) -> str:
        """Map a namespace path to the OS path backing it."""
        if not self.root:
            return path
        # normpath on the absolute form keeps '..' from climbing out of root
        rel = os.path.normpath(os.path.join('/', path)).lstrip('/')
        return os.path.join(self.root, rel)

    def open(self, path, mode='rb'):
        return open(self.real_path(path), mode)

    def stat(self, path):
        return os.stat(self.real_path(path))

    def lstat(self, path):
        return os.lstat(self.real_path(path))

    def listdir(self, path):
        return sorted(os.listdir(self.real_path(path)))

    def mkdir(self, path, mode=0o755):
        os.mkdir(self.real_path(path), mode)

    def chmod(self, path, mode):
        os.chmod(self.real_path(path), mode)

    def rename(self, src, dst):
        os.replace(self.real_path(src), self.real_path(dst))

    def remove(self, path):
        os.remove(self.real_path(path))

    def symlink(self, target: str, path: str) -> None:
        os.symlink(target, self.real_path(path))

    def __repr__(self):
        return f"OSFS(root={self.root!r})"


def _rofs_error(path: str) -> PermissionError:
    return PermissionError(errno.EROFS, os.strerror(errno.EROFS), path)


class ReadOnlyFS:
    """Wraps another FS; reads pass through, writes fail with EROFS."""

    def __init__(self, fs: FS):
        self.fs = fs

    def open(self, path, mode='rb'):
        if any(c in mode for c in 'wax+'):
            raise _rofs_error(path)
        return self.fs.open(path, mode)

    def stat(self, path):
        return self.fs.stat(path)

    def lstat(self, path):
        return self.fs.lstat(path)

    def listdir(self, path):
        return self.fs.listdir(path)

    def mkdir(self, path, mode=0o755):
        raise _rofs_error(path)

    def chmod(self, path, mode):
        raise _rofs_error(path)

    def rename(self, src, dst):
        raise _rofs_error(dst)

    def remove(self, path):
        raise _rofs_error(path)

    def symlink(self, target, path):
        raise _rofs_error(path)
