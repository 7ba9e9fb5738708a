"""Staging helpers: checksums, copies, directory skeleton and tree sizes.

All helpers go through an ``fs`` handle (see :mod:`ukicore.vfs`) and turn
OS errors into :class:`NotFound` / :class:`WriteDenied`.
"""
from __future__ import annotations
import os, stat, hashlib, uuid

from .constants import CHUNK_SIZE, DIR_PERM, ROOT_DIRS
from .errors import NotFound, WriteDenied
from .logging_utils import LogFunc, null_logger
from .vfs import FS

__all__ = [
    'calc_file_checksum', 'copy_file', 'create_dir_structure', 'dir_size',
    'mkdir_all', 'exists', 'is_dir',
]

def _reason(e: OSError) -> str:
    return e.strerror or str(e)

def exists(fs: FS, path: str) -> bool:
    try:
        fs.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True

def is_dir(fs: FS, path: str) -> bool:
    try:
        return stat.S_ISDIR(fs.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False

def _mkdir_all(fs: FS, path: str, mode: int) -> None:
    if is_dir(fs, path):
        return
    parent = os.path.dirname(path.rstrip('/'))
    if parent and parent != path:
        _mkdir_all(fs, parent, mode)
    try:
        fs.mkdir(path, mode)
    except FileExistsError:
        if not is_dir(fs, path):
            raise

def mkdir_all(fs: FS, path: str, mode: int = DIR_PERM) -> None:
    """Create ``path`` and any missing parents; existing directories are left alone."""
    try:
        _mkdir_all(fs, path, mode)
    except OSError as e:
        raise WriteDenied(f"cannot create directory {path}: {_reason(e)}", path) from e

def calc_file_checksum(fs: FS, path: str) -> str:
    """Return the lowercase hex SHA-256 of the file content, read in CHUNK_SIZE pieces."""
    h = hashlib.sha256()
    try:
        f = fs.open(path, 'rb')
    except OSError as e:
        raise NotFound(f"cannot open {path}: {_reason(e)}", path) from e
    with f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            h.update(chunk)
    return h.hexdigest()

def copy_file(fs: FS, source: str, dest: str, log_func: LogFunc = null_logger) -> str:
    """Copy ``source`` to ``dest`` (or into ``dest`` when it is a directory).

    Bytes go to a hidden sibling file first and are renamed over the target
    only once fully written, so a failed copy never leaves a truncated file.
    Mode and timestamps are not preserved. Returns the final target path.
    """
    if is_dir(fs, dest):
        dest = os.path.join(dest, os.path.basename(source))
    try:
        src = fs.open(source, 'rb')
    except OSError as e:
        raise NotFound(f"cannot open {source}: {_reason(e)}", source) from e
    # fixed-length name so a long dest basename cannot push it past NAME_MAX
    tmp = os.path.join(os.path.dirname(dest), f".{uuid.uuid4().hex}.part")
    created = False
    read_err = None
    with src:
        try:
            with fs.open(tmp, 'xb') as out:
                created = True
                while True:
                    try:
                        chunk = src.read(CHUNK_SIZE)
                    except OSError as e:
                        read_err = e
                        break
                    if not chunk:
                        break
                    out.write(chunk)
            if read_err is None:
                fs.rename(tmp, dest)
        except OSError as e:
            if created:
                _discard(fs, tmp, log_func)
            raise WriteDenied(f"cannot write {dest}: {_reason(e)}", dest) from e
    if read_err is not None:
        _discard(fs, tmp, log_func)
        raise NotFound(f"cannot read {source}: {_reason(read_err)}", source) from read_err
    log_func(f"copied {source} -> {dest}")
    return dest

def _discard(fs: FS, path: str, log_func: LogFunc) -> None:
    try:
        fs.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log_func(f"could not remove partial file {path}: {_reason(e)}")

def create_dir_structure(fs: FS, root: str, log_func: LogFunc = null_logger) -> None:
    """Create the fixed root skeleton (sys, proc, dev, tmp, boot, usr/local, oem).

    Modes are applied with chmod after creation so the umask cannot widen or
    narrow them; re-running on a finished tree is a no-op. Stops at the first
    failure and leaves directories already created in place.
    """
    for spec in ROOT_DIRS:
        target = os.path.join(root, spec.path)
        mkdir_all(fs, target, DIR_PERM)
        try:
            fs.chmod(target, spec.mode)
        except OSError as e:
            raise WriteDenied(f"cannot set mode {spec.mode:04o} on {target}: {_reason(e)}", target) from e
        log_func(f"mkdir {target} ({spec.mode:04o})")

def dir_size(fs: FS, path: str) -> int:
    """Total byte size of the regular files below ``path``.

    ``path`` itself is resolved through symlinks; entries below it are not.
    Symlinks, devices, fifos and directory entries count as zero and linked
    directories are not descended into.
    """
    try:
        st = fs.stat(path)
    except OSError as e:
        raise NotFound(f"cannot stat {path}: {_reason(e)}", path) from e
    if stat.S_ISREG(st.st_mode):
        return st.st_size
    total = 0
    pending = [path]
    while pending:
        cur = pending.pop()
        try:
            names = fs.listdir(cur)
        except OSError as e:
            raise NotFound(f"cannot list {cur}: {_reason(e)}", cur) from e
        for name in names:
            child = os.path.join(cur, name)
            try:
                cst = fs.lstat(child)
            except OSError as e:
                raise NotFound(f"cannot stat {child}: {_reason(e)}", child) from e
            if stat.S_ISDIR(cst.st_mode):
                pending.append(child)
            elif stat.S_ISREG(cst.st_mode):
                total += cst.st_size
    return total
