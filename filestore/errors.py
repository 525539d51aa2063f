"""Error kinds raised inside the file store and reported by the manager."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every failed Result."""

    MALFORMED_PATH = "malformed_path"
    INVALID_NAME = "invalid_name"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"


class FileStoreError(Exception):
    """Base class for file store failures. Carries its ErrorKind."""

    kind: ErrorKind

    def __init__(self, message: str = "A file store error occurred"):
        self.message = message
        super().__init__(self.message)


class MalformedPath(FileStoreError):
    """Path string with a leading, trailing or doubled separator."""

    kind = ErrorKind.MALFORMED_PATH


class InvalidName(FileStoreError):
    """Bare folder/file name that can't be used as a child name."""

    kind = ErrorKind.INVALID_NAME


class NotFound(FileStoreError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExists(FileStoreError):
    kind = ErrorKind.ALREADY_EXISTS


_ERRORS_BY_KIND: dict[ErrorKind, type[FileStoreError]] = {
    cls.kind: cls for cls in (MalformedPath, InvalidName, NotFound, AlreadyExists)
}


def error_for(kind: ErrorKind, message: str) -> FileStoreError:
    """Build the exception instance that matches ``kind``."""
    return _ERRORS_BY_KIND[ErrorKind(kind)](message)


__all__ = [
    "AlreadyExists",
    "ErrorKind",
    "FileStoreError",
    "InvalidName",
    "MalformedPath",
    "NotFound",
    "error_for",
]
