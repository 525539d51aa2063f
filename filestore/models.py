"""Pydantic models returned by the file manager."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .errors import ErrorKind, FileStoreError, error_for
from .nodes import File, Folder


class FolderContents(BaseModel):
    """Metadata and child names of one folder."""

    path: str
    folder_count: int = Field(..., ge=0)
    file_count: int = Field(..., ge=0)
    folders: list[str] = Field(default_factory=list, description="Child folder names, sorted")
    files: list[str] = Field(default_factory=list, description="Child file names, sorted")

    @classmethod
    def of(cls, folder: Folder) -> FolderContents:
        return cls(
            path=folder.path,
            folder_count=folder.folder_count,
            file_count=folder.file_count,
            folders=folder.folder_names(),
            files=folder.file_names(),
        )


class FileContents(BaseModel):
    """Metadata and content of one file."""

    path: str
    size: int = Field(..., ge=0, description="Content length in bytes")
    extension: str = ""
    content: str | bytes = ""

    @classmethod
    def of(cls, file: File) -> FileContents:
        return cls(path=file.path, size=file.size, extension=file.extension, content=file.content)


class DeleteSummary(BaseModel):
    """What a delete call released."""

    path: str
    folders_released: int = 0
    files_released: int = 0


class Result(BaseModel):
    """Outcome of a manager operation: a value or a tagged error."""

    ok: bool
    value: Any = None
    error: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> Result:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: FileStoreError) -> Result:
        return cls(ok=False, error=exc.kind, message=exc.message)

    def unwrap(self) -> Any:
        """Return the value, or raise the error this result carries."""
        if self.ok or self.error is None:
            return self.value
        raise error_for(self.error, self.message or self.error.value)


__all__ = ["DeleteSummary", "FileContents", "FolderContents", "Result"]
