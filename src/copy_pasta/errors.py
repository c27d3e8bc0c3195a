from __future__ import annotations

from pathlib import Path


class CopyPastaError(Exception):
    """Base class for errors raised by copy-pasta itself.

    Object-store failures are not wrapped; they reach the caller as whatever
    the client raised.
    """


class ConfigError(CopyPastaError):
    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to load the targets, please check if {path} exists", path)


class ConfigParseError(ConfigError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Parsing failed for {path}: {reason}", path)
        self.reason = reason


class ConfigWriteError(ConfigError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write targets to {path}: {reason}", path)
        self.reason = reason
