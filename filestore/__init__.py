"""In-memory file storage and the manager that navigates and edits it."""

from .errors import AlreadyExists, ErrorKind, FileStoreError, InvalidName, MalformedPath, NotFound
from .manager import FileManager
from .models import DeleteSummary, FileContents, FolderContents, Result
from .nodes import File, Folder
from .settings import Settings, load_settings
from .storage import FileStorage

__all__ = [
    "AlreadyExists",
    "DeleteSummary",
    "ErrorKind",
    "File",
    "FileContents",
    "FileManager",
    "FileStorage",
    "FileStoreError",
    "Folder",
    "FolderContents",
    "InvalidName",
    "MalformedPath",
    "NotFound",
    "Result",
    "Settings",
    "load_settings",
]
