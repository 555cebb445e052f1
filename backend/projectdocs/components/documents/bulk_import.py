"""Bulk commit of an in-memory folder/file tree.

The tree is assembled client-side before it is persisted (new project
wizard, closing deliverables). Committing walks it depth-first, pre-order:
a folder record is created before its files and before any child folder,
since children store the id generated for their parent. Every created folder
is tagged with the `final` restriction.

Folder names must be unique among siblings, both against existing folders
and within the imported tree.

The whole walk runs in one store transaction: on any failure the folders,
files and activity-log collections are restored to their previous contents.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from projectdocs.components.documents.access import is_privileged
from projectdocs.components.documents.activity import record_activity
from projectdocs.components.documents.models import (
    AccessRestriction,
    ActivityKind,
    FileRecord,
    Folder,
    ProjectRole,
    ProjectState,
    Requester,
)
from projectdocs.components.documents.tree import ensure_unique_name, normalize_name
from projectdocs.errors import AccessDeniedError, NotFoundError, ValidationError
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


class PendingFile(BaseModel):
    """File chosen for upload but not yet persisted."""

    name: str
    size: int = Field(default=0, ge=0)
    mimeType: str | None = None


class PendingFolder(BaseModel):
    """Folder node of an in-memory tree."""

    name: str
    description: str | None = None
    files: list[PendingFile] = Field(default_factory=list)
    children: list["PendingFolder"] = Field(default_factory=list)


class ImportResult(BaseModel):
    """Records created by one import, in creation order."""

    folders: list[Folder] = Field(default_factory=list)
    files: list[FileRecord] = Field(default_factory=list)


def count_tree(roots: list[PendingFolder]) -> tuple[int, int]:
    """(folder count, file count) of an in-memory tree."""
    folders = 0
    files = 0
    for node in roots:
        child_folders, child_files = count_tree(node.children)
        folders += 1 + child_folders
        files += len(node.files) + child_files
    return folders, files


class BulkTreeImporter:
    """Persists in-memory folder trees into a project."""

    def __init__(
        self,
        store: EntityStore,
        id_factory: Callable[[str], str] = generate_id,
        clock: Callable[[], int] = get_timestamp_ms,
    ):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    def import_tree(self, project_id: str, roots: list[PendingFolder], actor: Requester) -> ImportResult:
        """Commit a folder tree under the project root.

        Args:
            project_id: Target project
            roots: Top-level in-memory folders
            actor: Identity recorded as creator/uploader

        Returns:
            Created folders and files

        Raises:
            NotFoundError: If the project does not exist
            AccessDeniedError: If the actor is neither a pm/collaborator member nor
                privileged, or the project is not open and the actor is not privileged
            ValidationError: If a folder or file name is empty or a folder name
                collides with a sibling
        """
        project = self.store.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("projects", project_id)
        if not is_privileged(actor) and actor.projectRole not in (ProjectRole.pm, ProjectRole.collaborator):
            raise AccessDeniedError(f"{actor.userId} may not import folders into project {project_id}")
        if project.state != ProjectState.open and not is_privileged(actor):
            raise AccessDeniedError(
                f"Project {project_id} is {project.state.value}; only the privileged role may import"
            )

        result = ImportResult()
        with self.store.transaction("folders", "files", "activity-log"):
            order = self._root_order(project_id)
            for node in roots:
                order += 1
                self._commit(project_id, None, node, order, actor, result)

            record_activity(
                self.store,
                project_id,
                ActivityKind.folder_created,
                actor.userId,
                f"Imported {len(result.folders)} folders and {len(result.files)} files",
                details={"folderIds": [f.id for f in result.folders if f.parentId is None]},
                id_factory=self.id_factory,
                clock=self.clock,
            )

        logger.info(
            f"Imported tree into project {project_id}: {len(result.folders)} folders, {len(result.files)} files"
        )
        return result

    def _root_order(self, project_id: str) -> int:
        roots = self.store.folders.find(lambda f: f.projectId == project_id and f.parentId is None)
        return max((f.order for f in roots), default=0)

    def _commit(
        self,
        project_id: str,
        parent_id: str | None,
        node: PendingFolder,
        order: int,
        actor: Requester,
        result: ImportResult,
    ) -> None:
        name = normalize_name(node.name)
        ensure_unique_name(self.store, project_id, parent_id, name)
        now = self.clock()
        folder = Folder(
            id=self.id_factory("fld"),
            projectId=project_id,
            name=name,
            description=(node.description or "").strip() or None,
            parentId=parent_id,
            order=order,
            restrictions=AccessRestriction.final(),
            createdAt=now,
            createdBy=actor.userId,
        )
        self.store.folders.create(folder)
        result.folders.append(folder)

        for pending in node.files:
            result.files.append(self._commit_file(folder.id, pending, actor, now))

        for index, child in enumerate(node.children, start=1):
            self._commit(project_id, folder.id, child, index, actor, result)

    def _commit_file(self, folder_id: str, pending: PendingFile, actor: Requester, now: int) -> FileRecord:
        original_name = pending.name.strip()
        if not original_name:
            raise ValidationError("File name cannot be empty")
        extension = split_extension(original_name)
        base_name = sanitize_base_name(original_name)
        record = FileRecord(
            id=self.id_factory("file"),
            folderId=folder_id,
            name=base_name,
            originalName=original_name,
            mimeType=pending.mimeType or guess_mime_type(extension),
            size=pending.size,
            extension=extension,
            url=build_file_url(base_name, extension),
            uploadedBy=actor.userId,
            uploadedAt=now,
            modifiedAt=now,
        )
        return self.store.files.create(record)
