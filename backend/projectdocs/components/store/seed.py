"""Default records written by the bootstrap routine.

A small organisation with two companies, one open and one closed project, and
a folder tree covering the by-role, by-area and final restriction kinds.
"""

from datetime import datetime, timezone

from projectdocs.components.documents.models import (
    AccessRestriction,
    ActivityKind,
    ActivityLogEntry,
    Area,
    Company,
    FileRecord,
    Folder,
    Position,
    Project,
    ProjectMember,
    ProjectRole,
    ProjectState,
    Worker,
    WorkerRole,
)


def _ms(day: str) -> int:
    """Epoch milliseconds of an ISO date (UTC midnight)."""
    return int(datetime.fromisoformat(day).replace(tzinfo=timezone.utc).timestamp() * 1000)


def build_seed(now: int) -> dict[str, list]:
    """Seed records keyed by collection name.

    Args:
        now: Timestamp used for "last updated" fields
    """
    companies = [
        Company(
            id="cmp_001",
            name="San Juan Builders",
            taxId="800123456-1",
            address="Calle 45 # 12-34, Bogota",
            phone="+51 967890123",
            email="contact@sanjuan-builders.com",
            createdAt=_ms("2024-01-01"),
            updatedAt=now,
        ),
        Company(
            id="cmp_002",
            name="Integral Consulting SA",
            taxId="900987654-2",
            address="Av. El Dorado # 68-12, Bogota",
            phone="+51 961290123",
            email="info@integral-consulting.com",
            createdAt=_ms("2024-01-15"),
            updatedAt=now,
        ),
    ]

    areas = [
        Area(id="area_001", companyId="cmp_001", name="HR", description="Human resources", createdAt=_ms("2024-01-01")),
        Area(id="area_002", companyId="cmp_001", name="Sales", description="Sales and marketing", createdAt=_ms("2024-01-01")),
        Area(id="area_003", companyId="cmp_001", name="Finance", description="Accounting and finance", createdAt=_ms("2024-01-01")),
        Area(id="area_004", companyId="cmp_001", name="Central Office", description="Control and review", createdAt=_ms("2024-01-01")),
        Area(id="area_005", companyId="cmp_002", name="Operations", description="Operations management", createdAt=_ms("2024-01-15")),
    ]

    positions = [
        Position(id="pos_001", name="Salesperson", description="Direct sales and customer care", department="Sales", createdAt=_ms("2024-01-01"), updatedAt=now),
        Position(id="pos_002", name="Sales Lead", description="Coordinates the sales team", department="Sales", createdAt=_ms("2024-01-01"), updatedAt=now),
        Position(id="pos_003", name="Customer Support", description="After-sales support", department="Sales", createdAt=_ms("2024-01-01"), updatedAt=now),
        Position(id="pos_004", name="Administrative Assistant", description="Administrative and logistics support", department="HR", createdAt=_ms("2024-01-01"), updatedAt=now),
    ]

    workers = [
        Worker(
            id="usr_001", username="admin", firstName="Juan", lastName="Perez",
            email="admin@company.com", phone="+51 923748523", role=WorkerRole.admin,
            areaIds=["area_001", "area_002", "area_003", "area_004"], createdAt=_ms("2024-01-01"),
        ),
        Worker(
            id="usr_002", username="pm.gonzalez", firstName="Maria", lastName="Gonzalez",
            email="maria.gonzalez@company.com", phone="+51 922132523", role=WorkerRole.pm,
            areaIds=["area_002"], createdAt=_ms("2024-01-05"),
        ),
        Worker(
            id="usr_003", username="c.rodriguez", firstName="Carlos", lastName="Rodriguez",
            email="carlos.rodriguez@company.com", phone="+51 923748526", role=WorkerRole.collaborator,
            areaIds=["area_002"], createdAt=_ms("2024-01-10"),
        ),
        Worker(
            id="usr_004", username="pm.lopez", firstName="Ana", lastName="Lopez",
            email="ana.lopez@company.com", phone="+51 951764273", role=WorkerRole.pm,
            areaIds=["area_003"], createdAt=_ms("2024-01-08"),
        ),
        Worker(
            id="usr_005", username="central.office", firstName="Patricia", lastName="Martinez",
            email="patricia.martinez@company.com", phone="+51 923762123", role=WorkerRole.central_office,
            areaIds=["area_004"], createdAt=_ms("2024-01-12"),
        ),
    ]

    projects = [
        Project(
            id="proj_001",
            name="New Headquarters",
            description="Construction and launch of the new main office",
            companyId="cmp_001",
            areaIds=["area_002", "area_003"],
            state=ProjectState.open,
            managerId="usr_002",
            members=[
                ProjectMember(userId="usr_002", role=ProjectRole.pm, areaId="area_002", assignedAt=_ms("2024-02-01")),
                ProjectMember(userId="usr_003", role=ProjectRole.collaborator, areaId="area_002", assignedAt=_ms("2024-02-02")),
            ],
            startedAt=_ms("2024-02-01"),
            estimatedEndAt=_ms("2024-08-31"),
            createdAt=_ms("2024-02-01"),
            createdBy="usr_001",
        ),
        Project(
            id="proj_002",
            name="Financial Management System",
            description="ERP rollout for financial control",
            companyId="cmp_002",
            areaIds=["area_003", "area_005"],
            state=ProjectState.closed,
            managerId="usr_004",
            members=[
                ProjectMember(userId="usr_004", role=ProjectRole.pm, areaId="area_003", assignedAt=_ms("2024-01-15")),
            ],
            startedAt=_ms("2024-01-15"),
            closedAt=_ms("2024-01-31"),
            createdAt=_ms("2024-01-15"),
            createdBy="usr_001",
        ),
    ]

    folders = [
        Folder(
            id="fld_001", projectId="proj_001", name="Plans",
            description="Architectural and technical drawings", order=1,
            restrictions=AccessRestriction.by_role(ProjectRole.pm, ProjectRole.collaborator),
            createdAt=_ms("2024-02-02"), createdBy="usr_002",
        ),
        Folder(
            id="fld_002", projectId="proj_001", name="Contracts",
            description="Supplier and customer contracts", order=2,
            restrictions=AccessRestriction.by_area("area_003"),
            createdAt=_ms("2024-02-02"), createdBy="usr_002",
        ),
        Folder(
            id="fld_003", projectId="proj_001", name="Final Deliverable",
            description="Closing deliverable of the project", order=3,
            restrictions=AccessRestriction.final(),
            createdAt=_ms("2024-02-02"), createdBy="usr_002",
        ),
    ]

    files = [
        FileRecord(
            id="file_001", folderId="fld_001", name="Ground_Floor_Plan",
            originalName="Ground Floor Plan.dwg", mimeType="application/acad", size=2456789,
            extension="dwg", url="/files/ground_floor_plan.dwg", uploadedBy="usr_003",
            uploadedAt=_ms("2024-02-05"), modifiedAt=_ms("2024-02-05"),
        ),
        FileRecord(
            id="file_002", folderId="fld_002", name="Main_Builder_Contract",
            originalName="Main Builder Contract.pdf", mimeType="application/pdf", size=567890,
            extension="pdf", url="/files/main_builder_contract.pdf", uploadedBy="usr_004",
            uploadedAt=_ms("2024-02-10"), modifiedAt=_ms("2024-02-10"),
        ),
    ]

    activity = [
        ActivityLogEntry(
            id="act_001", projectId="proj_001", kind=ActivityKind.project_created,
            userId="usr_001", description="Project created by Juan Perez", createdAt=_ms("2024-02-01"),
        ),
        ActivityLogEntry(
            id="act_002", projectId="proj_001", kind=ActivityKind.file_uploaded,
            userId="usr_003", description="Carlos Rodriguez uploaded a file to Plans", createdAt=_ms("2024-02-05"),
        ),
        ActivityLogEntry(
            id="act_003", projectId="proj_001", kind=ActivityKind.member_added,
            userId="usr_002", description="Maria Gonzalez added Carlos Rodriguez to the team", createdAt=_ms("2024-02-02"),
        ),
    ]

    return {
        "companies": companies,
        "areas": areas,
        "positions": positions,
        "workers": workers,
        "projects": projects,
        "folders": folders,
        "files": files,
        "activity-log": activity,
    }
