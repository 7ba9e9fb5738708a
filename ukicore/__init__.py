from .errors import UkiError, NotFound, WriteDenied, ExternalToolFailure, ConfigError
from .vfs import OSFS, ReadOnlyFS
from .runner import RunnerResult, SubprocessRunner
from .config import Config
from .file_utils import calc_file_checksum, copy_file, create_dir_structure, dir_size, mkdir_all
from .squashfs import create_squashfs, default_squashfs_options
from .cmdline import get_uki_cmdline
