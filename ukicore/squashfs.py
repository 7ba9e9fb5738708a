"""Build a squashfs image from a staged root tree with the external mksquashfs."""
from __future__ import annotations
import logging
from typing import Optional, Sequence

from .constants import MKSQUASHFS, default_squashfs_options
from .errors import ExternalToolFailure
from .logging_utils import LogFunc, logger_for
from .runner import Runner

__all__ = ['create_squashfs', 'default_squashfs_options']

_default_log = logger_for(__name__, logging.DEBUG)

def create_squashfs(runner: Runner, log_func: Optional[LogFunc], source: str, dest: str,
                    options: Sequence[str] = ()) -> None:
    """Run ``mksquashfs source dest [options...]`` and wait for it.

    Options are appended verbatim and in order; flag validity is the caller's
    concern. What happens when ``dest`` already exists is left to mksquashfs
    (it appends unless ``-noappend`` is among the options).
    """
    log_func = log_func or _default_log
    args = [source, dest, *options]
    log_func(f"creating squashfs: {MKSQUASHFS} {' '.join(args)}")
    res = runner.run(MKSQUASHFS, *args)
    if not res.ok:
        log_func(f"{MKSQUASHFS} failed (exit {res.exit_code}): {res.output.strip()}")
        raise ExternalToolFailure(f"{MKSQUASHFS} failed with exit code {res.exit_code}",
                                  cmd=[MKSQUASHFS, *args], exit_code=res.exit_code, output=res.output)
    log_func(f"squashfs image written to {dest}")
