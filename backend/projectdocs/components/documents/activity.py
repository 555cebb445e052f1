"""Append-only project activity log."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from projectdocs.components.documents.models import ActivityKind, ActivityLogEntry
from projectdocs.utils import generate_id, get_timestamp_ms

if TYPE_CHECKING:
    from projectdocs.components.store.provider import EntityStore


def record_activity(
    store: EntityStore,
    project_id: str,
    kind: ActivityKind,
    user_id: str,
    description: str,
    details: dict[str, Any] | None = None,
    id_factory: Callable[[str], str] = generate_id,
    clock: Callable[[], int] = get_timestamp_ms,
) -> ActivityLogEntry:
    """Append an entry to the activity log. Entries are never updated."""
    entry = ActivityLogEntry(
        id=id_factory("act"),
        projectId=project_id,
        kind=kind,
        userId=user_id,
        description=description,
        details=details,
        createdAt=clock(),
    )
    return store.activity_log.create(entry)


def list_activity(store: EntityStore, project_id: str) -> list[ActivityLogEntry]:
    """Activity of a project, newest first."""
    entries = store.activity_log.find(lambda e: e.projectId == project_id)
    return sorted(entries, key=lambda e: e.createdAt, reverse=True)
