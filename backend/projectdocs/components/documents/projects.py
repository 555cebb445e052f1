"""Project lifecycle, membership and closing deliverables."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel

from projectdocs.components.documents.activity import list_activity, record_activity
from projectdocs.components.documents.models import (
    ActivityKind,
    ActivityLogEntry,
    Company,
    FileRecord,
    FileState,
    Folder,
    Project,
    ProjectMember,
    ProjectRole,
    ProjectState,
    RestrictionType,
)
from projectdocs.errors import NotFoundError, ValidationError
from projectdocs.utils import generate_id, get_logger, get_timestamp_ms

if TYPE_CHECKING:
    from projectdocs.components.store.provider import EntityStore

logger = get_logger(__name__)


class FinalDocument(BaseModel):
    """A closing-deliverable folder of a closed project with its active files."""

    project: Project
    company: Company
    folder: Folder
    files: list[FileRecord]


class ProjectService:
    """Project state transitions and team management."""

    def __init__(
        self,
        store: EntityStore,
        id_factory: Callable[[str], str] = generate_id,
        clock: Callable[[], int] = get_timestamp_ms,
    ):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    def get_project(self, project_id: str) -> Project:
        project = self.store.projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("projects", project_id)
        return project

    def _log(self, project_id: str, kind: ActivityKind, user_id: str, description: str, **details) -> None:
        record_activity(
            self.store,
            project_id,
            kind,
            user_id,
            description,
            details=details or None,
            id_factory=self.id_factory,
            clock=self.clock,
        )

    def _worker_name(self, user_id: str) -> str:
        worker = self.store.workers.get_by_id(user_id)
        return worker.full_name if worker else user_id

    def create_project(
        self,
        company_id: str,
        name: str,
        created_by: str,
        description: str | None = None,
        area_ids: list[str] | None = None,
        manager_id: str | None = None,
        estimated_end_at: int | None = None,
    ) -> Project:
        """Create an open project for a company.

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the company or an area does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Project name cannot be empty")
        if self.store.companies.get_by_id(company_id) is None:
            raise NotFoundError("companies", company_id)
        for area_id in area_ids or []:
            if self.store.areas.get_by_id(area_id) is None:
                raise NotFoundError("areas", area_id)

        now = self.clock()
        members: list[ProjectMember] = []
        if manager_id:
            members.append(ProjectMember(userId=manager_id, role=ProjectRole.pm, areaId=self._first_area(manager_id), assignedAt=now))

        project = Project(
            id=self.id_factory("proj"),
            name=name,
            description=description,
            companyId=company_id,
            areaIds=list(area_ids or []),
            managerId=manager_id,
            members=members,
            startedAt=now,
            estimatedEndAt=estimated_end_at,
            createdAt=now,
            createdBy=created_by,
        )
        self.store.projects.create(project)
        self._log(project.id, ActivityKind.project_created, created_by, f"Project created by {self._worker_name(created_by)}")
        logger.info(f"Created project {project.id} '{name}' for company {company_id}")
        return project

    def close_project(self, project_id: str, actor_id: str) -> Project:
        """open -> closed. Ordinary folders stop accepting uploads."""
        project = self.get_project(project_id)
        if project.state != ProjectState.open:
            raise ValidationError(f"Project {project_id} is {project.state.value}, not open")
        updated = self.store.projects.update(project_id, {"state": ProjectState.closed, "closedAt": self.clock()})
        self._log(project_id, ActivityKind.project_closed, actor_id, f"Project closed by {self._worker_name(actor_id)}")
        logger.info(f"Closed project {project_id}")
        return updated

    def approve_project(self, project_id: str, actor_id: str) -> Project:
        """closed -> approved."""
        project = self.get_project(project_id)
        if project.state != ProjectState.closed:
            raise ValidationError(f"Project {project_id} is {project.state.value}, not closed")
        updated = self.store.projects.update(project_id, {"state": ProjectState.approved, "approvedAt": self.clock()})
        self._log(project_id, ActivityKind.project_approved, actor_id, f"Project approved by {self._worker_name(actor_id)}")
        logger.info(f"Approved project {project_id}")
        return updated

    # ==================== Members ====================

    def _first_area(self, user_id: str) -> str:
        worker = self.store.workers.get_by_id(user_id)
        if worker is None:
            raise NotFoundError("workers", user_id)
        return worker.areaIds[0] if worker.areaIds else ""

    def add_member(self, project_id: str, user_id: str, role: ProjectRole, actor_id: str) -> Project:
        """Assign a worker to the project team.

        Raises:
            ValidationError: If the worker is already a member
            NotFoundError: If the project or worker does not exist
        """
        project = self.get_project(project_id)
        if project.member(user_id) is not None:
            raise ValidationError(f"{user_id} is already a member of project {project_id}")

        member = ProjectMember(userId=user_id, role=role, areaId=self._first_area(user_id), assignedAt=self.clock())
        members = [m.model_dump() for m in project.members] + [member.model_dump()]
        updated = self.store.projects.update(project_id, {"members": members})
        self._log(
            project_id,
            ActivityKind.member_added,
            actor_id,
            f"{self._worker_name(actor_id)} added {self._worker_name(user_id)} to the team",
            memberId=user_id,
            role=role.value,
        )
        return updated

    def change_member_role(self, project_id: str, user_id: str, role: ProjectRole, actor_id: str) -> Project:
        project = self.get_project(project_id)
        if project.member(user_id) is None:
            raise NotFoundError("members", user_id)
        members = [
            {**m.model_dump(), "role": role} if m.userId == user_id else m.model_dump()
            for m in project.members
        ]
        updated = self.store.projects.update(project_id, {"members": members})
        self._log(
            project_id,
            ActivityKind.comment,
            actor_id,
            f"Role of {self._worker_name(user_id)} changed to {role.value}",
            memberId=user_id,
            role=role.value,
        )
        return updated

    def remove_member(self, project_id: str, user_id: str, actor_id: str) -> Project:
        project = self.get_project(project_id)
        if project.member(user_id) is None:
            raise NotFoundError("members", user_id)
        members = [m.model_dump() for m in project.members if m.userId != user_id]
        updated = self.store.projects.update(project_id, {"members": members})
        self._log(
            project_id,
            ActivityKind.comment,
            actor_id,
            f"{self._worker_name(user_id)} removed from the team",
            memberId=user_id,
        )
        return updated

    # ==================== Reads ====================

    def list_activity(self, project_id: str) -> list[ActivityLogEntry]:
        self.get_project(project_id)
        return list_activity(self.store, project_id)

    def final_documents(self, company_id: str | None = None, search: str | None = None) -> list[FinalDocument]:
        """Closing deliverables of closed projects.

        A folder counts as final when its restriction is `final` or its name
        contains "final". `search` matches project, company or folder names.
        """
        projects = {p.id: p for p in self.store.projects.find(lambda p: p.state == ProjectState.closed)}
        companies = {c.id: c for c in self.store.companies.get_all()}
        term = (search or "").strip().lower()

        documents: list[FinalDocument] = []
        for folder in self.store.folders.get_all():
            if folder.restrictions.type != RestrictionType.final and "final" not in folder.name.lower():
                continue
            project = projects.get(folder.projectId)
            if project is None:
                continue
            company = companies.get(project.companyId)
            if company is None:
                continue
            if company_id is not None and company.id != company_id:
                continue
            if term and not any(term in n.lower() for n in (project.name, company.name, folder.name)):
                continue
            files = self.store.files.find(lambda a: a.folderId == folder.id and a.state == FileState.active)
            documents.append(FinalDocument(project=project, company=company, folder=folder, files=files))
        return documents
