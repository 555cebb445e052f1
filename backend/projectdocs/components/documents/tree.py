"""Folder/file tree management.

Folders are stored as a flat collection with parent pointers (`parentId`),
never as nested objects. Listing, descendant collection, cycle checks and
integrity checks are therefore explicit walks over the folders of one
project; re-parenting is a single field update.

Files only live inside folders, never at project root.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel

from projectdocs.components.documents.access import AccessAction, can_access, has_project_access, is_privileged
from projectdocs.components.documents.activity import record_activity
from projectdocs.components.documents.models import (
    AccessRestriction,
    ActivityKind,
    FileRecord,
    FileState,
    Folder,
    Project,
    ProjectRole,
    ProjectState,
    Requester,
)
from projectdocs.errors import (
    AccessDeniedError,
    CrossProjectError,
    CycleError,
    NotFoundError,
    ProjectClosedError,
    ValidationError,
)
from projectdocs.utils import (
    build_file_url,
    generate_id,
    get_logger,
    get_timestamp_ms,
    guess_mime_type,
    sanitize_base_name,
    split_extension,
)

if TYPE_CHECKING:
    from projectdocs.components.store.provider import EntityStore

logger = get_logger(__name__)


class FolderListing(BaseModel):
    """Direct children of one tree node."""

    folders: list[Folder]
    files: list[FileRecord]


class DeleteResult(BaseModel):
    """Records removed by a cascading folder delete."""

    folders: int
    files: int


def normalize_name(name: str | None) -> str:
    """Trim a folder name; empty names are rejected."""
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Folder name cannot be empty")
    return normalized


def ensure_unique_name(
    store: EntityStore,
    project_id: str,
    parent_id: str | None,
    name: str,
    exclude_id: str | None = None,
) -> None:
    """Reject a folder name already used by a sibling (case-insensitive)."""
    lowered = name.lower()
    for sibling in store.folders.find(lambda f: f.projectId == project_id and f.parentId == parent_id):
        if sibling.id != exclude_id and sibling.name.lower() == lowered:
            raise ValidationError(f"A folder named '{name}' already exists here")


class FolderTreeService:
    """Operations on the folder/file tree of projects."""

    def __init__(
        self,
        store: EntityStore,
        id_factory: Callable[[str], str] = generate_id,
        clock: Callable[[], int] = get_timestamp_ms,
    ):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    # ==================== Lookups ====================

    def get_project(self, project_id: str) -> Project:
        project = self.store.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("projects", project_id)
        return project

    def get_folder(self, folder_id: str) -> Folder:
        folder = self.store.folders.get_by_id(folder_id)
        if folder is None:
            raise NotFoundError("folders", folder_id)
        return folder

    def get_file(self, file_id: str) -> FileRecord:
        file = self.store.files.get_by_id(file_id)
        if file is None:
            raise NotFoundError("files", file_id)
        return file

    def project_folders(self, project_id: str) -> list[Folder]:
        """Every folder of a project, in insertion order."""
        return self.store.folders.find(lambda f: f.projectId == project_id)

    # ==================== Listing ====================

    def list_children(self, project_id: str, folder_id: str | None = None) -> FolderListing:
        """Direct child folders and files of a node.

        Args:
            project_id: Project whose tree is listed
            folder_id: Folder to list, or None for the project root

        Returns:
            Child folders (sorted by order) and the folder's own files

        Raises:
            NotFoundError: If the project or folder does not exist
        """
        self.get_project(project_id)
        if folder_id is not None:
            folder = self.get_folder(folder_id)
            if folder.projectId != project_id:
                raise NotFoundError("folders", folder_id)

        children = [f for f in self.project_folders(project_id) if f.parentId == folder_id]
        children.sort(key=lambda f: (f.order, f.createdAt))

        files: list[FileRecord] = []
        if folder_id is not None:
            files = self.store.files.find(lambda a: a.folderId == folder_id and a.state != FileState.deleted)

        return FolderListing(folders=children, files=files)

    # ==================== Traversal ====================

    def descendant_ids(self, folder_id: str) -> list[str]:
        """Ids of every folder below folder_id, depth-first pre-order."""
        folder = self.get_folder(folder_id)
        folders = self.project_folders(folder.projectId)
        result: list[str] = []
        visited = {folder_id}

        def walk(parent_id: str) -> None:
            for child in folders:
                if child.parentId == parent_id and child.id not in visited:
                    visited.add(child.id)
                    result.append(child.id)
                    walk(child.id)

        walk(folder_id)
        return result

    def ancestors(self, folder_id: str) -> list[Folder]:
        """Path from the project root down to folder_id (inclusive).

        Raises:
            CycleError: If the parent chain does not terminate
        """
        folder = self.get_folder(folder_id)
        by_id = {f.id: f for f in self.project_folders(folder.projectId)}
        path = [folder]
        current = folder
        while current.parentId is not None:
            if len(path) > len(by_id):
                raise CycleError(f"Parent chain of folder {folder_id} does not terminate")
            parent = by_id.get(current.parentId)
            if parent is None:
                raise NotFoundError("folders", current.parentId)
            path.append(parent)
            current = parent
        path.reverse()
        return path

    def count_descendants(self, folder_id: str) -> tuple[int, int]:
        """(folder count, file count) below and inside folder_id."""
        descendants = self.descendant_ids(folder_id)
        folder_ids = {folder_id, *descendants}
        files = self.store.files.find(lambda a: a.folderId in folder_ids and a.state != FileState.deleted)
        return len(descendants), len(files)

    def check_integrity(self, project_id: str) -> list[str]:
        """Problems in a project's tree; an empty list means well-formed.

        Every parent chain must terminate at a root within N steps (N = folder
        count) and every parent must belong to the same project.
        """
        folders = self.project_folders(project_id)
        by_id = {f.id: f for f in folders}
        problems: list[str] = []

        for folder in folders:
            steps = 0
            current = folder
            while current.parentId is not None:
                parent = by_id.get(current.parentId)
                if parent is None:
                    if self.store.folders.exists(current.parentId):
                        problems.append(f"{current.id}: parent {current.parentId} belongs to another project")
                    else:
                        problems.append(f"{current.id}: parent {current.parentId} does not exist")
                    break
                steps += 1
                if steps > len(folders):
                    problems.append(f"{folder.id}: parent chain does not terminate")
                    break
                current = parent

        return problems

    # ==================== Folder mutations ====================

    def _require(self, folder: Folder, requester: Requester | None, action: AccessAction) -> None:
        if requester is None:
            return
        if not has_project_access(requester):
            raise AccessDeniedError(f"{requester.userId} has no access to project {folder.projectId}")
        if not can_access(folder.restrictions, requester, action):
            raise AccessDeniedError(f"{requester.userId} may not {action.value} in folder {folder.id}")

    def _may_edit_root(self, requester: Requester) -> bool:
        # The project root has no restriction; pm and collaborator members may edit it
        return is_privileged(requester) or requester.projectRole in (ProjectRole.pm, ProjectRole.collaborator)

    def _next_order(self, project_id: str, parent_id: str | None) -> int:
        siblings = [f for f in self.project_folders(project_id) if f.parentId == parent_id]
        return max((f.order for f in siblings), default=0) + 1

    def create_folder(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
        description: str | None = None,
        restrictions: AccessRestriction | None = None,
        created_by: str = "system",
        requester: Requester | None = None,
        log_activity: bool = True,
    ) -> Folder:
        """Create a folder at the project root or under parent_id.

        Raises:
            ValidationError: If the name is empty or taken by a sibling
            NotFoundError: If the project or parent does not exist
            CrossProjectError: If the parent belongs to another project
            AccessDeniedError: If the requester may not write in the parent
        """
        name = normalize_name(name)
        self.get_project(project_id)

        if parent_id is not None:
            parent = self.get_folder(parent_id)
            if parent.projectId != project_id:
                raise CrossProjectError(f"Parent folder {parent_id} belongs to project {parent.projectId}")
            self._require(parent, requester, AccessAction.write)
        elif requester is not None and not self._may_edit_root(requester):
            raise AccessDeniedError(f"{requester.userId} may not create root folders in project {project_id}")

        ensure_unique_name(self.store, project_id, parent_id, name)

        folder = Folder(
            id=self.id_factory("fld"),
            projectId=project_id,
            name=name,
            description=(description or "").strip() or None,
            parentId=parent_id,
            order=self._next_order(project_id, parent_id),
            restrictions=restrictions or AccessRestriction.public(),
            createdAt=self.clock(),
            createdBy=requester.userId if requester else created_by,
        )
        self.store.folders.create(folder)
        logger.info(f"Created folder {folder.id} '{folder.name}' in project {project_id}")

        if log_activity:
            record_activity(
                self.store,
                project_id,
                ActivityKind.folder_created,
                folder.createdBy,
                f"Folder \"{folder.name}\" created",
                details={"folderId": folder.id},
                id_factory=self.id_factory,
                clock=self.clock,
            )
        return folder

    def rename_folder(self, folder_id: str, name: str, requester: Requester | None = None) -> Folder:
        """Rename a folder."""
        name = normalize_name(name)
        folder = self.get_folder(folder_id)
        self._require(folder, requester, AccessAction.write)
        ensure_unique_name(self.store, folder.projectId, folder.parentId, name, exclude_id=folder_id)
        updated = self.store.folders.update(folder_id, {"name": name})
        if updated is None:
            raise NotFoundError("folders", folder_id)
        return updated

    def move_folder(self, folder_id: str, new_parent_id: str | None, requester: Requester | None = None) -> Folder:
        """Re-parent a folder (drag and drop).

        Args:
            folder_id: Folder to move
            new_parent_id: Destination folder, or None for the project root

        Raises:
            CycleError: If the destination is the folder itself or a descendant
            CrossProjectError: If the destination belongs to another project
            NotFoundError: If either folder does not exist
        """
        folder = self.get_folder(folder_id)
        self._require(folder, requester, AccessAction.write)

        if new_parent_id is not None:
            if new_parent_id == folder_id:
                raise CycleError(f"Folder {folder_id} cannot be its own parent")
            new_parent = self.get_folder(new_parent_id)
            if new_parent.projectId != folder.projectId:
                raise CrossProjectError(
                    f"Cannot move folder {folder_id} from project {folder.projectId} to {new_parent.projectId}"
                )
            if new_parent_id in self.descendant_ids(folder_id):
                raise CycleError(f"Cannot move folder {folder_id} under its descendant {new_parent_id}")
            self._require(new_parent, requester, AccessAction.write)

        if folder.parentId == new_parent_id:
            return folder

        ensure_unique_name(self.store, folder.projectId, new_parent_id, folder.name, exclude_id=folder_id)
        updated = self.store.folders.update(
            folder_id,
            {"parentId": new_parent_id, "order": self._next_order(folder.projectId, new_parent_id)},
        )
        if updated is None:
            raise NotFoundError("folders", folder_id)
        logger.info(f"Moved folder {folder_id}: {folder.parentId} -> {new_parent_id}")
        return updated

    def delete_folder(self, folder_id: str, requester: Requester | None = None) -> DeleteResult:
        """Delete a folder together with all descendant folders and their files.

        Runs as one store transaction: either the whole subtree disappears or
        nothing changes.
        """
        folder = self.get_folder(folder_id)
        self._require(folder, requester, AccessAction.delete)

        with self.store.transaction("folders", "files"):
            folder_ids = {folder_id, *self.descendant_ids(folder_id)}
            removed_files = self.store.files.delete_where(lambda a: a.folderId in folder_ids)
            removed_folders = self.store.folders.delete_where(lambda f: f.id in folder_ids)

        logger.info(f"Deleted folder {folder_id}: {removed_folders} folders, {removed_files} files")
        return DeleteResult(folders=removed_folders, files=removed_files)

    # ==================== File operations ====================

    def move_file(self, file_id: str, new_folder_id: str, requester: Requester | None = None) -> FileRecord:
        """Move a file into another folder of the same project.

        Raises:
            CrossProjectError: If the destination folder is in another project
            NotFoundError: If the file or a folder does not exist
        """
        file = self.get_file(file_id)
        current = self.get_folder(file.folderId)
        destination = self.get_folder(new_folder_id)
        if destination.projectId != current.projectId:
            raise CrossProjectError(
                f"Cannot move file {file_id} from project {current.projectId} to {destination.projectId}"
            )
        self._require(current, requester, AccessAction.write)
        self._require(destination, requester, AccessAction.write)

        if file.folderId == new_folder_id:
            return file

        updated = self.store.files.update(file_id, {"folderId": new_folder_id, "modifiedAt": self.clock()})
        if updated is None:
            raise NotFoundError("files", file_id)
        logger.info(f"Moved file {file_id}: {file.folderId} -> {new_folder_id}")
        return updated

    def upload_file(
        self,
        folder_id: str,
        original_name: str,
        size: int,
        requester: Requester,
        mime_type: str | None = None,
    ) -> FileRecord:
        """Register an interactively uploaded file.

        Uploading the same original name again into a folder marks the
        previous active record obsolete and bumps the version. If storing the
        new record fails the previous version stays active.

        Raises:
            ProjectClosedError: If the project is not open and the folder is not final
            AccessDeniedError: If the requester may not write in the folder
        """
        original_name = (original_name or "").strip()
        if not original_name:
            raise ValidationError("File name cannot be empty")
        if size < 0:
            raise ValidationError("File size cannot be negative")

        folder = self.get_folder(folder_id)
        project = self.get_project(folder.projectId)
        if project.state != ProjectState.open and not folder.is_final:
            raise ProjectClosedError(f"Project {project.id} is {project.state.value}; uploads are closed")
        self._require(folder, requester, AccessAction.write)

        extension = split_extension(original_name)
        base_name = sanitize_base_name(original_name)
        now = self.clock()

        # Superseding the old version and adding the new one happen together
        with self.store.transaction("files", "activity-log"):
            version = 1
            previous = self.store.files.find(
                lambda a: a.folderId == folder_id and a.originalName == original_name and a.state == FileState.active
            )
            for old in previous:
                self.store.files.update(old.id, {"state": FileState.obsolete, "modifiedAt": now})
                version = max(version, old.version + 1)

            record = FileRecord(
                id=self.id_factory("file"),
                folderId=folder_id,
                name=base_name,
                originalName=original_name,
                mimeType=mime_type or guess_mime_type(extension),
                size=size,
                extension=extension,
                url=build_file_url(base_name, extension),
                version=version,
                uploadedBy=requester.userId,
                uploadedAt=now,
                modifiedAt=now,
            )
            self.store.files.create(record)
            record_activity(
                self.store,
                project.id,
                ActivityKind.file_uploaded,
                requester.userId,
                f"Uploaded {original_name} to {folder.name}",
                details={"fileId": record.id, "folderId": folder_id, "version": version},
                id_factory=self.id_factory,
                clock=self.clock,
            )
        return record

    def delete_file(self, file_id: str, hard: bool = False, requester: Requester | None = None) -> bool:
        """Soft-delete (state=deleted) or hard-delete a file."""
        file = self.get_file(file_id)
        folder = self.get_folder(file.folderId)
        self._require(folder, requester, AccessAction.delete)
        if hard:
            return self.store.files.delete(file_id)
        return self.store.files.update(file_id, {"state": FileState.deleted, "modifiedAt": self.clock()}) is not None
