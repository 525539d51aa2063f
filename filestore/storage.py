"""The simulated disk: owner of the root folder and the whole tree."""

from __future__ import annotations

import logging
import threading

from .nodes import Folder, ReleaseCount

logger = logging.getLogger(__name__)


class FileStorage:
    """An n-ary tree file storage, think of it as one partition of a disk.

    Managers share a storage through ``lock``; the storage itself never
    changes the tree except to tear it down on ``close``.
    """

    def __init__(self) -> None:
        self._root = Folder.root()
        self.lock = threading.RLock()
        self._closed = False
        logger.info("Storage created")

    @property
    def root(self) -> Folder:
        return self._root

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> ReleaseCount:
        """Release the whole tree. Calling it again does nothing."""
        with self.lock:
            if self._closed:
                return ReleaseCount()
            count = self._root._release()
            self._closed = True
        logger.info(f"Storage deleted: released {count.folders} folders, {count.files} files")
        return count

    def __enter__(self) -> FileStorage:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["FileStorage"]
