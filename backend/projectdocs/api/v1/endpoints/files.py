"""File API endpoints."""

from fastapi import APIRouter

from projectdocs.api.v1.deps import StoreDep, TreeServiceDep, UserIdDep
from projectdocs.api.v1.schemas import MoveFileRequest
from projectdocs.components.documents import FileRecord, resolve_requester

router = APIRouter()


def _requester_for_file(store, tree, file_id: str, user_id: str):
    file = tree.get_file(file_id)
    folder = tree.get_folder(file.folderId)
    return resolve_requester(store, user_id, folder.projectId)


@router.patch("/{file_id}/move", response_model=FileRecord)
async def move_file(
    file_id: str,
    request: MoveFileRequest,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> FileRecord:
    """Move a file into another folder of the same project."""
    requester = _requester_for_file(store, tree, file_id, user_id)
    return tree.move_file(file_id, request.folderId, requester=requester)


@router.delete("/{file_id}")
async def delete_file(
    file_id: str,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
    hard: bool = False,
):
    """Soft-delete a file, or remove its record when hard=true."""
    requester = _requester_for_file(store, tree, file_id, user_id)
    tree.delete_file(file_id, hard=hard, requester=requester)
    return {"status": "deleted", "id": file_id}
