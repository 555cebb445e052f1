"""Tests for folder access policy evaluation."""

import pytest

from projectdocs.components.documents import (
    AccessAction,
    AccessRestriction,
    ProjectRole,
    Requester,
    WorkerRole,
    can_access,
    filter_accessible,
    has_project_access,
    resolve_requester,
)
from projectdocs.errors import NotFoundError


def requester(user_id="usr_x", project_role=None, area_ids=(), role=None) -> Requester:
    return Requester(userId=user_id, projectRole=project_role, areaIds=list(area_ids), role=role)


EVERYONE = [
    requester(),
    requester("usr_a", ProjectRole.pm, ["A1", "A2"], WorkerRole.pm),
    requester("usr_b", ProjectRole.collaborator, ["A1"], WorkerRole.collaborator),
    requester("usr_c", ProjectRole.reader, [], WorkerRole.central_office),
    requester("usr_d", None, ["A9"], WorkerRole.admin),
]


class TestRestrictionKinds:
    def test_public_allows_everyone(self):
        for r in EVERYONE:
            assert can_access(AccessRestriction.public(), r) is True

    def test_by_role(self):
        restriction = AccessRestriction.by_role(ProjectRole.pm)

        assert can_access(restriction, requester(project_role=ProjectRole.pm)) is True
        assert can_access(restriction, requester(project_role=ProjectRole.collaborator)) is False
        assert can_access(restriction, requester(project_role=None)) is False

    def test_by_user(self):
        restriction = AccessRestriction.by_user("usr_1", "usr_2")

        assert can_access(restriction, requester("usr_2")) is True
        assert can_access(restriction, requester("usr_3")) is False

    def test_final_read_allowed_for_everyone(self):
        for r in EVERYONE:
            assert can_access(AccessRestriction.final(), r, AccessAction.read) is True

    def test_final_write_only_for_privileged_role(self):
        for r in EVERYONE:
            expected = r.role == WorkerRole.central_office
            assert can_access(AccessRestriction.final(), r, AccessAction.write) is expected
            assert can_access(AccessRestriction.final(), r, AccessAction.delete) is expected


class TestEmptyAllowedSets:
    """An empty allowed set denies everyone; it never widens to public."""

    @pytest.mark.parametrize(
        "restriction",
        [
            AccessRestriction.by_role(),
            AccessRestriction.by_area(),
            AccessRestriction.by_user(),
        ],
        ids=["by_role", "by_area", "by_user"],
    )
    def test_empty_set_denies_every_requester(self, restriction):
        for r in EVERYONE:
            assert can_access(restriction, r) is False


class TestContractsScenario:
    """Folder "Contracts" restricted to area A1."""

    @pytest.fixture
    def contracts(self, tree, pm):
        return tree.create_folder(
            "proj_001", None, "Contracts A1", restrictions=AccessRestriction.by_area("A1"), requester=pm
        )

    def test_other_area_denied(self, contracts):
        assert can_access(contracts.restrictions, requester(area_ids=["A2"])) is False

    def test_same_area_allowed(self, contracts):
        assert can_access(contracts.restrictions, requester(area_ids=["A1"])) is True

    def test_overlapping_areas_allowed(self, contracts):
        assert can_access(contracts.restrictions, requester(area_ids=["A1", "A2"])) is True


class TestWriteRules:
    def test_reader_cannot_write_even_when_matched(self):
        reader = requester(project_role=ProjectRole.reader)

        assert can_access(AccessRestriction.public(), reader, AccessAction.read) is True
        assert can_access(AccessRestriction.public(), reader, AccessAction.write) is False

    def test_collaborator_can_write_when_matched(self):
        collaborator = requester(project_role=ProjectRole.collaborator)

        assert can_access(AccessRestriction.public(), collaborator, AccessAction.write) is True


class TestFilterAndResolve:
    def test_filter_accessible_preserves_order(self, seeded_store, collaborator):
        folders = seeded_store.folders.find(lambda f: f.projectId == "proj_001")

        visible = filter_accessible(folders, collaborator)

        # Contracts is limited to the Finance area
        assert [f.name for f in visible] == ["Plans", "Final Deliverable"]

    def test_resolve_requester_member(self, seeded_store):
        r = resolve_requester(seeded_store, "usr_003", "proj_001")

        assert r.projectRole == ProjectRole.collaborator
        assert r.areaIds == ["area_002"]
        assert r.role == WorkerRole.collaborator

    def test_resolve_requester_non_member(self, seeded_store):
        r = resolve_requester(seeded_store, "usr_001", "proj_001")

        assert r.projectRole is None
        assert r.role == WorkerRole.admin

    def test_resolve_unknown_worker(self, seeded_store):
        with pytest.raises(NotFoundError):
            resolve_requester(seeded_store, "usr_999", "proj_001")

    def test_resolve_unknown_project(self, seeded_store):
        with pytest.raises(NotFoundError):
            resolve_requester(seeded_store, "usr_001", "proj_999")


class TestProjectAccess:
    @pytest.mark.parametrize("project_role", [ProjectRole.pm, ProjectRole.collaborator, ProjectRole.reader])
    def test_members(self, project_role):
        assert has_project_access(requester(project_role=project_role)) is True

    def test_privileged_non_member(self):
        assert has_project_access(requester(role=WorkerRole.central_office)) is True

    def test_non_members_denied(self):
        assert has_project_access(requester(role=WorkerRole.pm)) is False
        assert has_project_access(requester(area_ids=["area_003"], role=WorkerRole.admin)) is False

    def test_resolved_outsider(self, outsider):
        assert outsider.projectRole is None
        assert has_project_access(outsider) is False
