"""Fixed values shared by the staging, squashfs and cmdline helpers."""
from __future__ import annotations
from typing import List, NamedTuple

DIR_PERM = 0o755
NO_WRITE_DIR_PERM = 0o555
TEMP_DIR_PERM = 0o1777
FILE_PERM = 0o644

CHUNK_SIZE = 1024*1024

MKSQUASHFS = 'mksquashfs'

UKI_CMDLINE = ("console=ttyS0 console=tty1 net.ifnames=1 rd.immucore.oemlabel=COS_OEM "
               "rd.immucore.oempath=/oem rd.immucore.oemtimeout=2 rd.immucore.uki selinux=0")
UKI_CMDLINE_INSTALL = 'install-mode'

CMDLINE_KEY = 'cmdline'
ENV_PREFIX = 'UKI_'


class DirectorySpec(NamedTuple):
    path: str
    mode: int


# creation order matters only for error reporting: the first failure stops the run
ROOT_DIRS: List[DirectorySpec] = [
    DirectorySpec('sys', NO_WRITE_DIR_PERM),
    DirectorySpec('proc', DIR_PERM),
    DirectorySpec('dev', DIR_PERM),
    DirectorySpec('tmp', TEMP_DIR_PERM),
    DirectorySpec('boot', DIR_PERM),
    DirectorySpec('usr/local', DIR_PERM),
    DirectorySpec('oem', DIR_PERM),
]

_DEFAULT_SQUASHFS_OPTIONS = ('-b', '1024k')

def default_squashfs_options() -> List[str]:
    return list(_DEFAULT_SQUASHFS_OPTIONS)
