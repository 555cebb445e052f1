"""Project document data models.

Defines the persisted entities of the document manager:
- Company / Area / Position / Worker: organisation directory
- Project: belongs to a company, owns a member list and a lifecycle state
- Folder: flat parent-pointer tree node carrying an AccessRestriction
- FileRecord: metadata of a file stored inside a folder
- ActivityLogEntry: append-only project history

And the non-persisted helper types:
- Requester: identity handed to the access policy evaluator
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class WorkerRole(str, Enum):
    """Global role of a worker account."""

    admin = "admin"
    pm = "pm"
    collaborator = "collaborator"
    central_office = "central_office"


class ProjectRole(str, Enum):
    """Role of a member inside one project."""

    pm = "pm"
    collaborator = "collaborator"
    reader = "reader"


class ProjectState(str, Enum):
    """Project lifecycle: open -> closed -> approved."""

    open = "open"
    closed = "closed"
    approved = "approved"


class RestrictionType(str, Enum):
    """Access restriction variants."""

    public = "public"
    by_role = "by_role"
    by_area = "by_area"
    by_user = "by_user"
    final = "final"  # Locked closing deliverables


class FileState(str, Enum):
    """File lifecycle state."""

    active = "active"
    deleted = "deleted"
    obsolete = "obsolete"


class ActivityKind(str, Enum):
    """Kinds of activity log entries."""

    project_created = "project_created"
    file_uploaded = "file_uploaded"
    folder_created = "folder_created"
    member_added = "member_added"
    project_closed = "project_closed"
    project_approved = "project_approved"
    comment = "comment"


# Organisation directory


class Company(BaseModel):
    """Company owning areas and projects."""

    id: str
    name: str
    taxId: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    active: bool = True
    createdAt: int
    updatedAt: int


class Area(BaseModel):
    """Organisational area inside a company."""

    id: str
    companyId: str
    name: str
    description: str | None = None
    managerId: str | None = None
    active: bool = True
    createdAt: int


class Position(BaseModel):
    """Job position."""

    id: str
    name: str
    description: str | None = None
    department: str | None = None
    active: bool = True
    createdAt: int
    updatedAt: int


class Worker(BaseModel):
    """Worker account. Credentials are handled outside this service."""

    id: str
    username: str
    firstName: str
    lastName: str
    email: str
    phone: str | None = None
    role: WorkerRole
    areaIds: list[str] = Field(default_factory=list)
    active: bool = True
    createdAt: int

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}"


# Projects


class ProjectMember(BaseModel):
    """Assignment of a worker to a project."""

    userId: str
    role: ProjectRole
    areaId: str = ""
    assignedAt: int


class Project(BaseModel):
    """Project owned by a company.

    `members` never holds the same userId twice.
    """

    id: str
    name: str
    description: str | None = None
    companyId: str
    areaIds: list[str] = Field(default_factory=list)
    state: ProjectState = ProjectState.open
    managerId: str | None = None
    members: list[ProjectMember] = Field(default_factory=list)
    startedAt: int
    estimatedEndAt: int | None = None
    closedAt: int | None = None
    approvedAt: int | None = None
    createdAt: int
    createdBy: str

    @field_validator("members")
    @classmethod
    def unique_members(cls, members: list[ProjectMember]) -> list[ProjectMember]:
        user_ids = [m.userId for m in members]
        if len(user_ids) != len(set(user_ids)):
            raise ValueError("project members must have unique userId values")
        return members

    def member(self, user_id: str) -> ProjectMember | None:
        """Membership of a user, if any."""
        return next((m for m in self.members if m.userId == user_id), None)


# Folder tree


class AccessRestriction(BaseModel):
    """Access policy attached to a folder.

    Only the allowed set matching `type` is consulted; an empty set denies
    everyone.
    """

    type: RestrictionType = RestrictionType.public
    allowedRoles: list[ProjectRole] = Field(default_factory=list)
    allowedAreas: list[str] = Field(default_factory=list)
    allowedUsers: list[str] = Field(default_factory=list)

    @classmethod
    def public(cls) -> "AccessRestriction":
        return cls(type=RestrictionType.public)

    @classmethod
    def final(cls) -> "AccessRestriction":
        return cls(type=RestrictionType.final)

    @classmethod
    def by_role(cls, *roles: ProjectRole | str) -> "AccessRestriction":
        return cls(type=RestrictionType.by_role, allowedRoles=list(roles))

    @classmethod
    def by_area(cls, *area_ids: str) -> "AccessRestriction":
        return cls(type=RestrictionType.by_area, allowedAreas=list(area_ids))

    @classmethod
    def by_user(cls, *user_ids: str) -> "AccessRestriction":
        return cls(type=RestrictionType.by_user, allowedUsers=list(user_ids))


class Folder(BaseModel):
    """Folder node. `parentId` is None for project root folders."""

    id: str
    projectId: str
    name: str
    description: str | None = None
    parentId: str | None = None
    order: int = 0
    restrictions: AccessRestriction = Field(default_factory=AccessRestriction)
    createdAt: int
    createdBy: str

    @property
    def is_final(self) -> bool:
        return self.restrictions.type == RestrictionType.final


class FileRecord(BaseModel):
    """File metadata. No bytes are stored; `url` is a synthetic locator."""

    id: str
    folderId: str
    name: str
    originalName: str
    mimeType: str
    size: int = Field(ge=0)
    extension: str
    url: str
    version: int = 1
    state: FileState = FileState.active
    uploadedBy: str
    uploadedAt: int
    modifiedAt: int
    metadata: dict[str, Any] | None = None


class ActivityLogEntry(BaseModel):
    """Immutable project history entry."""

    id: str
    projectId: str
    kind: ActivityKind
    userId: str
    description: str
    details: dict[str, Any] | None = None
    createdAt: int


# Non-persisted


class Requester(BaseModel):
    """Identity evaluated against folder restrictions."""

    userId: str
    projectRole: ProjectRole | None = None
    areaIds: list[str] = Field(default_factory=list)
    role: WorkerRole | None = None
