"""API v1 Router Aggregator.

Aggregates all v1 API endpoints into a single router.
"""

from fastapi import APIRouter

from projectdocs.api.v1.endpoints import documents, files, folders, health, projects

api_router = APIRouter()

# Mount endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(folders.router, prefix="/folders", tags=["Folders"])
api_router.include_router(files.router, prefix="/files", tags=["Files"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
