"""Path string helpers: splitting, name validation and joining.

Paths handed to the manager are always written without a leading
separator. Whether they are read from the root or from the current
folder is decided by the caller, not by the string itself.
"""

from __future__ import annotations

from .errors import InvalidName, MalformedPath

SEPARATOR = "/"
PARENT_ENTRY = ".."
CURRENT_ENTRY = "."
RESERVED_NAMES = frozenset({PARENT_ENTRY, CURRENT_ENTRY})


def split(path: str) -> list[str]:
    """Split ``path`` into its ordered name segments.

    ``""`` gives ``[]``. Leading, trailing and adjacent separators raise
    MalformedPath.
    """
    if not path:
        return []
    if path.startswith(SEPARATOR):
        raise MalformedPath(f"Leading {SEPARATOR!r} not allowed in path {path!r}")
    if path.endswith(SEPARATOR):
        raise MalformedPath(f"Trailing {SEPARATOR!r} not allowed in path {path!r}")
    segments = path.split(SEPARATOR)
    if "" in segments:
        raise MalformedPath(f"Adjacent {SEPARATOR!r} not allowed in path {path!r}")
    return segments


def validate_name(name: str) -> None:
    """Raise InvalidName unless ``name`` can be stored as a child name."""
    if not name:
        raise InvalidName("File or folder names can't be empty")
    if SEPARATOR in name:
        raise InvalidName(f"File or folder names can't contain {SEPARATOR!r}: {name!r}")
    if name in RESERVED_NAMES:
        raise InvalidName(f"{name!r} is reserved for navigation")


def join(parent_path: str, name: str) -> str:
    """Full path of child ``name`` below the folder at ``parent_path``."""
    base = parent_path.rstrip(SEPARATOR)
    return f"{base}{SEPARATOR}{name}"


def absolute(path: str) -> str:
    """Absolute form of a root-relative path (``"a/b"`` -> ``"/a/b"``)."""
    return join(SEPARATOR, path) if path else SEPARATOR


def extension(name: str) -> str:
    """Text after the last dot in ``name``; empty when there is none."""
    _, dot, suffix = name.rpartition(".")
    return suffix if dot else ""


__all__ = [
    "CURRENT_ENTRY",
    "PARENT_ENTRY",
    "RESERVED_NAMES",
    "SEPARATOR",
    "absolute",
    "extension",
    "join",
    "split",
    "validate_name",
]
