"""Tests for ProjectService: lifecycle, members, activity and final documents."""

import pytest

from projectdocs.components.documents import (
    AccessRestriction,
    ActivityKind,
    ProjectRole,
    ProjectState,
)
from projectdocs.components.documents.models import FileState
from projectdocs.errors import NotFoundError, ValidationError


class TestLifecycle:
    def test_create_project(self, project_service, seeded_store):
        project = project_service.create_project(
            "cmp_001", " Warehouse ", "usr_001", area_ids=["area_002"], manager_id="usr_002"
        )

        assert project.name == "Warehouse"
        assert project.state == ProjectState.open
        assert project.member("usr_002").role == ProjectRole.pm
        assert project.member("usr_002").areaId == "area_002"
        assert seeded_store.projects.get_by_id(project.id) == project
        assert project_service.list_activity(project.id)[0].kind == ActivityKind.project_created

    def test_create_requires_name(self, project_service):
        with pytest.raises(ValidationError):
            project_service.create_project("cmp_001", "  ", "usr_001")

    def test_create_unknown_company(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.create_project("cmp_999", "X", "usr_001")

    def test_create_unknown_area(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.create_project("cmp_001", "X", "usr_001", area_ids=["area_999"])

    def test_close_then_approve(self, project_service):
        closed = project_service.close_project("proj_001", "usr_002")
        assert closed.state == ProjectState.closed
        assert closed.closedAt is not None

        approved = project_service.approve_project("proj_001", "usr_005")
        assert approved.state == ProjectState.approved
        assert approved.approvedAt is not None

        kinds = [e.kind for e in project_service.list_activity("proj_001")[:2]]
        assert kinds == [ActivityKind.project_approved, ActivityKind.project_closed]

    def test_close_twice_rejected(self, project_service):
        project_service.close_project("proj_001", "usr_002")

        with pytest.raises(ValidationError):
            project_service.close_project("proj_001", "usr_002")

    def test_approve_open_project_rejected(self, project_service):
        with pytest.raises(ValidationError):
            project_service.approve_project("proj_001", "usr_005")


class TestMembers:
    def test_add_member(self, project_service):
        project = project_service.add_member("proj_001", "usr_004", ProjectRole.reader, "usr_002")

        member = project.member("usr_004")
        assert member.role == ProjectRole.reader
        assert member.areaId == "area_003"

    def test_add_existing_member_rejected(self, project_service):
        with pytest.raises(ValidationError):
            project_service.add_member("proj_001", "usr_003", ProjectRole.reader, "usr_002")

    def test_add_unknown_worker(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.add_member("proj_001", "usr_999", ProjectRole.reader, "usr_002")

    def test_change_role(self, project_service):
        project = project_service.change_member_role("proj_001", "usr_003", ProjectRole.pm, "usr_002")

        assert project.member("usr_003").role == ProjectRole.pm
        assert len(project.members) == 2

    def test_remove_member(self, project_service):
        project = project_service.remove_member("proj_001", "usr_003", "usr_002")

        assert project.member("usr_003") is None
        assert [m.userId for m in project.members] == ["usr_002"]

    def test_remove_non_member(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.remove_member("proj_001", "usr_004", "usr_002")


class TestActivity:
    def test_newest_first(self, project_service):
        entries = project_service.list_activity("proj_001")

        assert [e.id for e in entries] == ["act_002", "act_003", "act_001"]

    def test_unknown_project(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.list_activity("proj_999")


class TestFinalDocuments:
    @pytest.fixture
    def closed_with_deliverable(self, project_service, tree, central_office):
        project_service.close_project("proj_001", "usr_002")
        tree.upload_file("fld_003", "Closing Report.pdf", 100, central_office)
        old = tree.upload_file("fld_003", "Draft.pdf", 5, central_office)
        tree.store.files.update(old.id, {"state": FileState.obsolete})

    def test_only_closed_projects(self, project_service):
        assert project_service.final_documents() == []

    def test_final_folder_with_active_files(self, project_service, closed_with_deliverable):
        documents = project_service.final_documents()

        assert len(documents) == 1
        doc = documents[0]
        assert doc.project.id == "proj_001"
        assert doc.company.id == "cmp_001"
        assert doc.folder.id == "fld_003"
        assert [f.originalName for f in doc.files] == ["Closing Report.pdf"]

    def test_folder_named_final_counts(self, project_service, tree, closed_with_deliverable, seeded_store):
        seeded_store.folders.create(
            tree.store.folders.get_by_id("fld_001").model_copy(
                update={"id": "fld_x", "name": "Final drawings", "restrictions": AccessRestriction.public()}
            )
        )

        names = sorted(d.folder.name for d in project_service.final_documents())

        assert names == ["Final Deliverable", "Final drawings"]

    def test_filters(self, project_service, closed_with_deliverable):
        assert len(project_service.final_documents(company_id="cmp_001")) == 1
        assert project_service.final_documents(company_id="cmp_002") == []
        assert len(project_service.final_documents(search="headquarters")) == 1
        assert len(project_service.final_documents(search="SAN JUAN")) == 1
        assert project_service.final_documents(search="nothing") == []
