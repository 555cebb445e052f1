"""Project documents: models, access policy and tree services.

Service modules take an EntityStore instance; they never create one.
"""

from .access import (
    AccessAction,
    can_access,
    filter_accessible,
    has_project_access,
    is_privileged,
    resolve_requester,
)
from .bulk_import import BulkTreeImporter, ImportResult, PendingFile, PendingFolder, count_tree
from .models import (
    AccessRestriction,
    ActivityKind,
    FileRecord,
    FileState,
    Folder,
    Project,
    ProjectRole,
    ProjectState,
    Requester,
    RestrictionType,
    WorkerRole,
)
from .navigation import Breadcrumb, NavigationHistory
from .projects import FinalDocument, ProjectService
from .tree import DeleteResult, FolderListing, FolderTreeService, ensure_unique_name

__all__ = [
    "AccessAction",
    "can_access",
    "filter_accessible",
    "has_project_access",
    "is_privileged",
    "resolve_requester",
    "BulkTreeImporter",
    "ImportResult",
    "PendingFile",
    "PendingFolder",
    "count_tree",
    "AccessRestriction",
    "ActivityKind",
    "FileRecord",
    "FileState",
    "Folder",
    "Project",
    "ProjectRole",
    "ProjectState",
    "Requester",
    "RestrictionType",
    "WorkerRole",
    "Breadcrumb",
    "NavigationHistory",
    "FinalDocument",
    "ProjectService",
    "DeleteResult",
    "FolderListing",
    "FolderTreeService",
    "ensure_unique_name",
]
