"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from projectdocs.api.v1.api import api_router
from projectdocs.components.store import get_entity_store, initialize
from projectdocs.errors import (
    AccessDeniedError,
    CrossProjectError,
    CycleError,
    NotFoundError,
    ProjectClosedError,
    ProjectDocsError,
    StorageUnavailable,
    ValidationError,
)
from projectdocs.settings import settings
from projectdocs.utils import setup_logging

logger = setup_logging("api")

# First match wins; DuplicateIdError falls under ValidationError
ERROR_STATUS: list[tuple[type[ProjectDocsError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (CycleError, 409),
    (CrossProjectError, 409),
    (ProjectClosedError, 409),
    (AccessDeniedError, 403),
    (StorageUnavailable, 503),
]


def status_for(exc: ProjectDocsError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_entity_store()
    if settings.seed_on_startup:
        initialize(store)
    logger.info(f"ProjectDocs API started (storage={settings.storage_type}, environment={settings.environment})")
    yield
    logger.info("ProjectDocs API shutting down")


app = FastAPI(
    title="ProjectDocs API",
    description="Project document manager: folder trees, access policies and bulk imports",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProjectDocsError)
async def handle_project_docs_error(request: Request, exc: ProjectDocsError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({status_code}): {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "status": "ok",
        "service": "ProjectDocs API",
        "version": "0.1.0",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "projectdocs.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
