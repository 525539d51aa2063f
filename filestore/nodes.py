"""In-memory tree nodes: folders owning child folders and files.

Nodes are read-only to the outside world. The underscore methods are the
mutation surface used by :mod:`filestore.manager` and
:mod:`filestore.storage`.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field

from . import paths

logger = logging.getLogger(__name__)

Content = str | bytes


def content_size(content: Content) -> int:
    """Byte length of ``content`` (UTF-8 for text)."""
    if isinstance(content, bytes):
        return len(content)
    return len(content.encode("utf-8"))


@dataclass(eq=False)
class File:
    """Leaf node holding opaque content."""

    path: str
    extension: str
    _content: Content = field(default="", repr=False)
    _released: bool = field(default=False, repr=False)

    @property
    def content(self) -> Content:
        return self._content

    @property
    def size(self) -> int:
        return content_size(self._content)

    @property
    def released(self) -> bool:
        return self._released

    def _replace_content(self, content: Content) -> None:
        self._content = content

    def _release(self) -> None:
        self._content = b"" if isinstance(self._content, bytes) else ""
        self._released = True


@dataclass(eq=False)
class ReleaseCount:
    folders: int = 0
    files: int = 0


@dataclass(eq=False)
class Folder:
    """Tree node containing child folders and files.

    ``parent`` is a weak back-reference: it is used to resolve the ``..``
    entry and is never followed when the subtree is released.
    """

    path: str
    _parent_ref: weakref.ReferenceType[Folder] | None = field(default=None, repr=False)
    _folders: dict[str, Folder] = field(default_factory=dict, repr=False)
    _files: dict[str, File] = field(default_factory=dict, repr=False)
    _released: bool = field(default=False, repr=False)

    @classmethod
    def root(cls) -> Folder:
        return cls(path=paths.SEPARATOR)

    @classmethod
    def child_of(cls, parent: Folder, name: str) -> Folder:
        return cls(path=paths.join(parent.path, name), _parent_ref=weakref.ref(parent))

    @property
    def parent(self) -> Folder | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def released(self) -> bool:
        return self._released

    @property
    def folder_count(self) -> int:
        return len(self._folders)

    @property
    def file_count(self) -> int:
        return len(self._files)

    def folder_names(self) -> list[str]:
        return sorted(self._folders)

    def file_names(self) -> list[str]:
        return sorted(self._files)

    def has_folder(self, name: str) -> bool:
        return name in self._folders

    def has_file(self, name: str) -> bool:
        return name in self._files

    def get_file(self, name: str) -> File | None:
        return self._files.get(name)

    def lookup(self, segment: str) -> Folder | None:
        """Resolve one path segment from this folder, or None."""
        if segment == paths.CURRENT_ENTRY:
            return self
        if segment == paths.PARENT_ENTRY:
            return self.parent
        return self._folders.get(segment)

    # ------------------------------------------------------------------
    # mutation (manager / storage only)

    def _add_folder(self, name: str, folder: Folder) -> None:
        self._folders[name] = folder

    def _add_file(self, name: str, file: File) -> None:
        self._files[name] = file

    def _remove_folder(self, name: str) -> ReleaseCount:
        count = self._folders[name]._release()
        del self._folders[name]
        return count

    def _remove_file(self, name: str) -> None:
        self._files.pop(name)._release()

    def _release(self) -> ReleaseCount:
        """Release this folder and every descendant exactly once.

        Walks the subtree with an explicit stack, so depth is unbounded.
        """
        count = ReleaseCount()
        pending = [self]
        while pending:
            folder = pending.pop()
            pending.extend(folder._folders.values())
            for file in folder._files.values():
                file._release()
                count.files += 1
            folder._folders.clear()
            folder._files.clear()
            folder._released = True
            count.folders += 1
        logger.debug(f"Released {self.path}: {count.folders} folders, {count.files} files")
        return count


__all__ = ["Content", "File", "Folder", "ReleaseCount", "content_size"]
