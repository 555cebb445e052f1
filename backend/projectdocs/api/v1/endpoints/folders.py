"""Folder API endpoints.

Drag-and-drop re-parenting, rename, cascading delete and file upload into a
folder.
"""

from fastapi import APIRouter

from projectdocs.api.v1.deps import StoreDep, TreeServiceDep, UserIdDep
from projectdocs.api.v1.schemas import (
    DeleteFolderResponse,
    MoveFolderRequest,
    RenameFolderRequest,
    UploadFileRequest,
)
from projectdocs.components.documents import FileRecord, Folder, resolve_requester

router = APIRouter()


@router.patch("/{folder_id}/move", response_model=Folder)
async def move_folder(
    folder_id: str,
    request: MoveFolderRequest,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> Folder:
    """Move a folder under another folder of the same project, or to the root."""
    folder = tree.get_folder(folder_id)
    requester = resolve_requester(store, user_id, folder.projectId)
    return tree.move_folder(folder_id, request.parentId, requester=requester)


@router.patch("/{folder_id}/rename", response_model=Folder)
async def rename_folder(
    folder_id: str,
    request: RenameFolderRequest,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> Folder:
    folder = tree.get_folder(folder_id)
    requester = resolve_requester(store, user_id, folder.projectId)
    return tree.rename_folder(folder_id, request.name, requester=requester)


@router.delete("/{folder_id}", response_model=DeleteFolderResponse)
async def delete_folder(
    folder_id: str,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> DeleteFolderResponse:
    """Delete a folder with all descendant folders and their files."""
    folder = tree.get_folder(folder_id)
    requester = resolve_requester(store, user_id, folder.projectId)
    result = tree.delete_folder(folder_id, requester=requester)
    return DeleteFolderResponse(deletedFolders=result.folders, deletedFiles=result.files)


@router.post("/{folder_id}/files", response_model=FileRecord, status_code=201)
async def upload_file(
    folder_id: str,
    request: UploadFileRequest,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> FileRecord:
    """Register an uploaded file in a folder.

    Rejected for ordinary folders once the project is closed.
    """
    folder = tree.get_folder(folder_id)
    requester = resolve_requester(store, user_id, folder.projectId)
    return tree.upload_file(folder_id, request.name, request.size, requester, mime_type=request.mimeType)
