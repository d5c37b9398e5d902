"""Exception types raised by WineRunner."""

from __future__ import annotations


class WineRunnerError(Exception):
    """Base class for WineRunner errors."""


class InvalidPrefixError(WineRunnerError):
    """Raised when a prefix root does not contain a usable Wine install."""

    def __init__(self, path: str, missing: str) -> None:
        super().__init__(f"Invalid prefix {path}: {missing} is not a file")
        self.path = path
        self.missing = missing


class SpawnError(WineRunnerError):
    """Raised when the OS fails to create a process."""

    def __init__(self, executable: str, cause: OSError) -> None:
        super().__init__(f"Failed to launch {executable}: {cause}")
        self.executable = executable
        self.cause = cause
