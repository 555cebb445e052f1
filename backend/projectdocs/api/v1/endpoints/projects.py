"""Project API endpoints.

Tree listing, folder creation, bulk import and lifecycle transitions of a
project. The caller is identified by the X-User-Id header.
"""

from fastapi import APIRouter

from projectdocs.api.v1.deps import (
    ImporterDep,
    ProjectServiceDep,
    StoreDep,
    TreeServiceDep,
    UserIdDep,
)
from projectdocs.api.v1.schemas import (
    CreateFolderRequest,
    ImportTreeRequest,
    ImportTreeResponse,
    TreeResponse,
)
from projectdocs.components.documents import (
    Folder,
    Project,
    ProjectRole,
    Requester,
    WorkerRole,
    count_tree,
    filter_accessible,
    has_project_access,
    is_privileged,
    resolve_requester,
)
from projectdocs.components.documents.models import ActivityLogEntry
from projectdocs.errors import AccessDeniedError, NotFoundError

router = APIRouter()


def require_manager(requester: Requester, project_id: str) -> None:
    """Only the project PM, administrators and the privileged role change project state."""
    if requester.projectRole == ProjectRole.pm or requester.role == WorkerRole.admin or is_privileged(requester):
        return
    raise AccessDeniedError(f"{requester.userId} may not change the state of project {project_id}")


@router.get("/{project_id}/tree", response_model=TreeResponse)
async def get_tree(
    project_id: str,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
    folderId: str | None = None,
) -> TreeResponse:
    """List the children of a node that the caller may read.

    Args:
        project_id: Project ID
        folderId: Folder to list; omitted for the project root

    Returns:
        Breadcrumb path plus accessible child folders and files
    """
    requester = resolve_requester(store, user_id, project_id)
    if not has_project_access(requester):
        raise AccessDeniedError(f"{user_id} has no access to project {project_id}")
    path: list[Folder] = []
    if folderId is not None:
        path = tree.ancestors(folderId)
        if path[0].projectId != project_id:
            raise NotFoundError("folders", folderId)
        if len(filter_accessible(path, requester)) != len(path):
            raise AccessDeniedError(f"{user_id} may not read folder {folderId}")

    listing = tree.list_children(project_id, folderId)
    return TreeResponse(
        projectId=project_id,
        folderId=folderId,
        path=path,
        folders=filter_accessible(listing.folders, requester),
        files=listing.files,
    )


@router.post("/{project_id}/folders", response_model=Folder, status_code=201)
async def create_folder(
    project_id: str,
    request: CreateFolderRequest,
    store: StoreDep,
    tree: TreeServiceDep,
    user_id: UserIdDep,
) -> Folder:
    """Create a folder at the project root or under parentId."""
    requester = resolve_requester(store, user_id, project_id)
    return tree.create_folder(
        project_id,
        request.parentId,
        request.name,
        description=request.description,
        restrictions=request.restrictions,
        requester=requester,
    )


@router.post("/{project_id}/import", response_model=ImportTreeResponse, status_code=201)
async def import_tree(
    project_id: str,
    request: ImportTreeRequest,
    store: StoreDep,
    importer: ImporterDep,
    user_id: UserIdDep,
) -> ImportTreeResponse:
    """Commit an in-memory folder tree; every created folder is final."""
    requester = resolve_requester(store, user_id, project_id)
    result = importer.import_tree(project_id, request.folders, requester)
    folder_count, file_count = count_tree(request.folders)
    return ImportTreeResponse(
        folders=result.folders,
        files=result.files,
        folderCount=folder_count,
        fileCount=file_count,
    )


@router.post("/{project_id}/close", response_model=Project)
async def close_project(
    project_id: str,
    store: StoreDep,
    projects: ProjectServiceDep,
    user_id: UserIdDep,
) -> Project:
    """Close an open project."""
    require_manager(resolve_requester(store, user_id, project_id), project_id)
    return projects.close_project(project_id, user_id)


@router.post("/{project_id}/approve", response_model=Project)
async def approve_project(
    project_id: str,
    store: StoreDep,
    projects: ProjectServiceDep,
    user_id: UserIdDep,
) -> Project:
    """Approve a closed project."""
    require_manager(resolve_requester(store, user_id, project_id), project_id)
    return projects.approve_project(project_id, user_id)


@router.get("/{project_id}/activity", response_model=list[ActivityLogEntry])
async def get_activity(project_id: str, projects: ProjectServiceDep) -> list[ActivityLogEntry]:
    """Project history, newest first."""
    return projects.list_activity(project_id)
