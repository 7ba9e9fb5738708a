"""Exceptions raised by the staging and image helpers."""
from __future__ import annotations
from typing import List, Optional


class UkiError(Exception):
    """Base error. ``path`` is the file or directory involved, if any."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> dict:
        return {
            'error_type': type(self).__name__,
            'message': self.message,
            'path': self.path,
        }


class NotFound(UkiError):
    """Source file or directory is missing or cannot be opened."""


class WriteDenied(UkiError):
    """Destination cannot be created or written (e.g. read-only filesystem)."""


class ConfigError(UkiError):
    """A configuration file could not be parsed."""


class ExternalToolFailure(UkiError):
    """An external command exited non-zero or could not be launched.

    Attributes:
        cmd: the full argv that was run
        exit_code: process exit status (127 when the tool was not found)
        output: captured stdout+stderr of the process
    """

    def __init__(self, message: str, cmd: List[str], exit_code: int, output: str = ''):
        super().__init__(message)
        self.cmd = list(cmd)
        self.exit_code = exit_code
        self.output = output

    def __str__(self) -> str:
        if not self.output:
            return self.message
        return f"{self.message}: {self.output.strip()}"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(cmd=self.cmd, exit_code=self.exit_code, output=self.output)
        return d
