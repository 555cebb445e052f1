"""Folder access policy evaluation.

Decides whether a requester may read, write or delete inside a folder given
the folder's AccessRestriction:

    public   -> everyone with project access
    by_role  -> requester's project role in allowedRoles
    by_area  -> requester's areas intersect allowedAreas
    by_user  -> requester's id in allowedUsers
    final    -> everyone may read; only the privileged role may write/delete

An empty allowed set denies everyone. Readers never write outside final
folders either. Callers check has_project_access before evaluating a
restriction.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from projectdocs.components.documents.models import (
    AccessRestriction,
    Folder,
    ProjectRole,
    Requester,
    RestrictionType,
)
from projectdocs.errors import NotFoundError
from projectdocs.settings import settings

if TYPE_CHECKING:
    from projectdocs.components.store.provider import EntityStore


class AccessAction(str, Enum):
    """What the requester wants to do inside the folder."""

    read = "read"
    write = "write"
    delete = "delete"


def _matches(restriction: AccessRestriction, requester: Requester) -> bool:
    if restriction.type == RestrictionType.public:
        return True
    if restriction.type == RestrictionType.by_role:
        return requester.projectRole is not None and requester.projectRole in restriction.allowedRoles
    if restriction.type == RestrictionType.by_area:
        return bool(set(requester.areaIds) & set(restriction.allowedAreas))
    if restriction.type == RestrictionType.by_user:
        return requester.userId in restriction.allowedUsers
    return False


def is_privileged(requester: Requester) -> bool:
    """True if the requester holds the role allowed to edit final folders."""
    return requester.role is not None and requester.role.value == settings.privileged_role


def has_project_access(requester: Requester) -> bool:
    """Project members and the privileged role work inside a project's tree."""
    return requester.projectRole is not None or is_privileged(requester)


def can_access(
    restriction: AccessRestriction,
    requester: Requester,
    action: AccessAction = AccessAction.read,
) -> bool:
    """Evaluate a folder restriction for a requester.

    Args:
        restriction: The folder's access restriction
        requester: Identity with project role and area memberships
        action: read (default), write or delete

    Returns:
        True if the action is allowed
    """
    if restriction.type == RestrictionType.final:
        if action == AccessAction.read:
            return True
        return is_privileged(requester)

    if not _matches(restriction, requester):
        return False
    if action != AccessAction.read and requester.projectRole == ProjectRole.reader:
        return False
    return True


def filter_accessible(
    folders: Iterable[Folder],
    requester: Requester,
    action: AccessAction = AccessAction.read,
) -> list[Folder]:
    """Folders the requester may act on, order preserved."""
    return [f for f in folders if can_access(f.restrictions, requester, action)]


def resolve_requester(store: EntityStore, user_id: str, project_id: str) -> Requester:
    """Build a Requester from the worker record and project membership.

    The project role comes from the project's member list (None when the
    worker is not a member); area ids come from the worker record.

    Raises:
        NotFoundError: If the worker or the project does not exist
    """
    worker = store.workers.get_by_id(user_id)
    if worker is None:
        raise NotFoundError("workers", user_id)
    project = store.projects.get_by_id(project_id)
    if project is None:
        raise NotFoundError("projects", project_id)

    member = project.member(user_id)
    return Requester(
        userId=worker.id,
        projectRole=member.role if member else None,
        areaIds=list(worker.areaIds),
        role=worker.role,
    )
