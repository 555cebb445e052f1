"""Request and response bodies of the v1 API.

Field names are camelCase to match the stored records.
"""

from pydantic import BaseModel, Field

from projectdocs.components.documents import (
    AccessRestriction,
    FileRecord,
    Folder,
    PendingFolder,
)


class CreateFolderRequest(BaseModel):
    name: str
    parentId: str | None = None
    description: str | None = None
    restrictions: AccessRestriction | None = None


class MoveFolderRequest(BaseModel):
    """Target parent; null moves the folder to the project root."""

    parentId: str | None = None


class MoveFileRequest(BaseModel):
    folderId: str


class UploadFileRequest(BaseModel):
    """Metadata of an interactively uploaded file. No bytes are transferred."""

    name: str
    size: int = Field(default=0, ge=0)
    mimeType: str | None = None


class ImportTreeRequest(BaseModel):
    folders: list[PendingFolder]


class ImportTreeResponse(BaseModel):
    folders: list[Folder]
    files: list[FileRecord]
    folderCount: int
    fileCount: int


class TreeResponse(BaseModel):
    """Accessible children of one node plus the breadcrumb path to it."""

    projectId: str
    folderId: str | None = None
    path: list[Folder]
    folders: list[Folder]
    files: list[FileRecord]


class DeleteFolderResponse(BaseModel):
    deletedFolders: int
    deletedFiles: int


class RenameFolderRequest(BaseModel):
    name: str
