"""Shared endpoint dependencies.

Identity is taken from the X-User-Id header; there is no real
authentication in front of this service.
"""

from typing import Annotated

from fastapi import Depends, Header

from projectdocs.components.documents import (
    BulkTreeImporter,
    FolderTreeService,
    ProjectService,
)
from projectdocs.components.store import EntityStore, get_entity_store


def get_store() -> EntityStore:
    return get_entity_store()


def get_user_id(x_user_id: Annotated[str, Header()]) -> str:
    """Id of the calling worker."""
    return x_user_id


def get_tree_service(store: EntityStore = Depends(get_store)) -> FolderTreeService:
    return FolderTreeService(store)


def get_project_service(store: EntityStore = Depends(get_store)) -> ProjectService:
    return ProjectService(store)


def get_importer(store: EntityStore = Depends(get_store)) -> BulkTreeImporter:
    return BulkTreeImporter(store)


StoreDep = Annotated[EntityStore, Depends(get_store)]
UserIdDep = Annotated[str, Depends(get_user_id)]
TreeServiceDep = Annotated[FolderTreeService, Depends(get_tree_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ImporterDep = Annotated[BulkTreeImporter, Depends(get_importer)]
