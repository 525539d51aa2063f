"""
filestore.manager
-----------------
Navigation and CRUD over a FileStorage.

A FileManager holds a cursor (current folder + current path) on a storage
it does not own. Several managers can work on the same storage, each with
its own cursor; every operation runs under the storage lock.

Public operations never raise FileStoreError: failures are logged and
returned as a failed Result, and they leave the tree as it was.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from . import paths
from .errors import AlreadyExists, FileStoreError, NotFound
from .models import DeleteSummary, FileContents, FolderContents, Result
from .nodes import Content, File, Folder
from .storage import FileStorage

logger = logging.getLogger(__name__)


def _reported(action: str) -> Callable:
    """Run a manager operation under the storage lock and wrap its outcome in a Result."""

    def decorator(method: Callable) -> Callable[..., Result]:
        @functools.wraps(method)
        def wrapper(self: FileManager, *args, **kwargs) -> Result:
            with self.storage.lock:
                try:
                    value = method(self, *args, **kwargs)
                except FileStoreError as exc:
                    logger.warning(f"Error while {action}: {exc.message}")
                    return Result.failure(exc)
            return Result.success(value)

        return wrapper

    return decorator


class FileManager:
    """Takes a FileStorage and does all the CRUD operations on it.

    Args:
        storage (FileStorage): the storage to work on. The manager starts
            at its root folder.
    """

    def __init__(self, storage: FileStorage):
        self.storage = storage
        self._current: Folder = storage.root
        self._current_path: str = storage.root.path

    @property
    def current_path(self) -> str:
        return self._current_path

    @property
    def current_folder(self) -> Folder:
        return self._current

    # ------------------------------------------------------------------
    # navigation

    @_reported("changing directory")
    def change_directory(self, destination: str, relative: bool = True) -> str:
        """Move the cursor to ``destination``.

        ``destination`` never starts with the separator; ``relative``
        decides whether it is walked from the current folder or from the
        root. Use ``..`` for the parent folder. Nothing changes unless the
        whole path resolves.
        """
        if self._is_current(destination, relative) and not self._current.released:
            return self._current_path

        target = self._working_folder() if relative else self._root()
        for segment in paths.split(destination):
            next_folder = target.lookup(segment)
            if next_folder is None:
                raise NotFound(f"Destination folder {destination!r} can't be found")
            target = next_folder

        self._current = target
        self._current_path = target.path
        logger.debug(f"Changed directory to {target.path}")
        return target.path

    def _is_current(self, destination: str, relative: bool) -> bool:
        # literal comparison, no normalization
        if destination == self._current_path:
            return True
        return not relative and paths.absolute(destination) == self._current_path

    def _root(self) -> Folder:
        if self.storage.closed:
            raise NotFound("Storage has been closed")
        return self.storage.root

    def _working_folder(self) -> Folder:
        if self._current.released:
            raise NotFound(f"Current folder {self._current_path!r} no longer exists")
        return self._current

    # ------------------------------------------------------------------
    # folders

    @_reported("creating folder")
    def create_folder(self, name: str) -> str:
        """Create folder ``name`` in the current folder and return its path."""
        paths.validate_name(name)
        folder = self._working_folder()
        if folder.has_folder(name):
            raise AlreadyExists(f"Folder {name!r} already exists in {folder.path}")
        new_folder = Folder.child_of(folder, name)
        folder._add_folder(name, new_folder)
        logger.info(f"Created folder {new_folder.path}")
        return new_folder.path

    @_reported("deleting folder")
    def delete_folder(self, name: str) -> DeleteSummary:
        """Delete folder ``name`` and everything below it."""
        paths.validate_name(name)
        folder = self._working_folder()
        if not folder.has_folder(name):
            raise NotFound(f"Folder {name!r} doesn't exist in {folder.path}")
        path = paths.join(folder.path, name)
        count = folder._remove_folder(name)
        logger.info(f"Deleted folder {path} ({count.folders} folders, {count.files} files released)")
        return DeleteSummary(path=path, folders_released=count.folders, files_released=count.files)

    @_reported("reading folder")
    def read_folder_contents(self) -> FolderContents:
        return FolderContents.of(self._working_folder())

    # ------------------------------------------------------------------
    # files

    @_reported("creating file")
    def create_file(self, name: str, content: Content = "") -> FileContents:
        """Create file ``name`` in the current folder.

        A folder with the same name doesn't conflict.
        """
        paths.validate_name(name)
        folder = self._working_folder()
        if folder.has_file(name):
            raise AlreadyExists(f"File {name!r} already exists in {folder.path}")
        new_file = File(path=paths.join(folder.path, name), extension=paths.extension(name), _content=content)
        folder._add_file(name, new_file)
        logger.info(f"Created file {new_file.path} ({new_file.size} bytes)")
        return FileContents.of(new_file)

    @_reported("updating file")
    def update_file(self, name: str, content: Content) -> FileContents:
        """Replace the content of file ``name``. Path and extension stay."""
        file = self._existing_file(name)
        file._replace_content(content)
        logger.info(f"Updated file {file.path} ({file.size} bytes)")
        return FileContents.of(file)

    @_reported("reading file")
    def read_file_contents(self, name: str) -> FileContents:
        return FileContents.of(self._existing_file(name))

    @_reported("deleting file")
    def delete_file(self, name: str) -> DeleteSummary:
        file = self._existing_file(name)
        self._current._remove_file(name)
        logger.info(f"Deleted file {file.path}")
        return DeleteSummary(path=file.path, files_released=1)

    def _existing_file(self, name: str) -> File:
        paths.validate_name(name)
        folder = self._working_folder()
        file = folder.get_file(name)
        if file is None:
            raise NotFound(f"File {name!r} doesn't exist in {folder.path}")
        return file


__all__ = ["FileManager"]
