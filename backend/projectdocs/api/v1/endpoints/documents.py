"""Closing deliverables of closed projects."""

from fastapi import APIRouter

from projectdocs.api.v1.deps import ProjectServiceDep
from projectdocs.components.documents import FinalDocument

router = APIRouter()


@router.get("/final", response_model=list[FinalDocument])
async def list_final_documents(
    projects: ProjectServiceDep,
    companyId: str | None = None,
    search: str | None = None,
) -> list[FinalDocument]:
    """Final folders of closed projects with their active files.

    Args:
        companyId: Only documents of this company
        search: Case-insensitive match on project, company or folder name
    """
    return projects.final_documents(company_id=companyId, search=search)
