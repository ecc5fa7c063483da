"""Tests for task API endpoints."""

import asyncio

import pytest

from app.api.v1.endpoints.tasks import create_task, delete_task, read_task, read_tasks, update_task
from app.core.errors import IncompatibleAssignment, TaskNotFound, TeamNotFound, Unauthorized
from app.schemas.task import TaskCreate, TaskUpdate
from tests.mocks.records import make_project, make_task, make_team


@pytest.fixture
def projects_db(board_db, owner_user):
    board_db.seed(
        "projects",
        make_project(id="api", name="API", owner_id=owner_user.id, team_ids=["team-1"]),
        make_project(id="loose", name="Loose", owner_id=owner_user.id),
    )
    return board_db


def _create(db, user, **fields):
    return asyncio.run(create_task(task_in=TaskCreate(**fields), current_user=user, db=db))


def _update(db, user, task_id, **fields):
    return asyncio.run(
        update_task(task_id=task_id, task_in=TaskUpdate(**fields), current_user=user, db=db)
    )


class TestCreateTask:
    def test_plain_task(self, projects_db, member_user):
        result = _create(projects_db, member_user, title="Write docs")

        assert result["owner_id"] == member_user.id
        assert result["team_id"] is None
        assert result["status"] == "todo"

    def test_project_with_single_team_assigns_team(self, projects_db, owner_user):
        result = _create(projects_db, owner_user, title="Ship", project_id="api")
        assert result["team_id"] == "team-1"

    def test_owner_can_create_in_team(self, projects_db, owner_user):
        result = _create(projects_db, owner_user, title="Ship", team_id="team-1", project_id="api")
        assert (result["team_id"], result["project_id"]) == ("team-1", "api")

    def test_tech_lead_cannot_create_in_team(self, projects_db, member_user):
        with pytest.raises(Unauthorized):
            _create(projects_db, member_user, title="Ship", team_id="team-1")
        assert projects_db.tasks.docs == []

    def test_admin_still_needs_an_owned_team(self, projects_db, admin_user):
        with pytest.raises(TeamNotFound):
            _create(projects_db, admin_user, title="Ship", team_id="team-1")

    def test_blank_links_are_treated_as_absent(self, projects_db, owner_user):
        result = _create(projects_db, owner_user, title="Ship", team_id="", project_id="  ")
        assert (result["team_id"], result["project_id"]) == (None, None)


class TestReadTasks:
    def test_filters_and_owner_scope(self, projects_db, owner_user, member_user):
        _create(projects_db, owner_user, title="A", project_id="api")
        _create(projects_db, owner_user, title="B", project_id="loose")
        _create(projects_db, member_user, title="C")

        result = asyncio.run(
            read_tasks(
                status=None, priority=None, team_id="team-1", project_id=None, skip=0, limit=100,
                current_user=owner_user, db=projects_db,
            )
        )

        assert [t["title"] for t in result] == ["A"]

    def test_read_foreign_task_is_404(self, projects_db, owner_user, member_user):
        task = _create(projects_db, owner_user, title="A")
        with pytest.raises(TaskNotFound):
            asyncio.run(read_task(task_id=task["_id"], current_user=member_user, db=projects_db))


class TestUpdateTask:
    def test_plain_fields(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A", description="old")

        result = _update(projects_db, owner_user, task["_id"], status="done", description=None)

        assert result["status"] == "done"
        assert result["description"] is None
        assert result["title"] == "A"

    def test_null_title_is_ignored(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A")
        result = _update(projects_db, owner_user, task["_id"], title=None)
        assert result["title"] == "A"

    def test_moving_to_project_of_other_team_is_incompatible(self, projects_db, owner_user):
        projects_db.seed("teams", make_team(id="team-9", name="Other", owner_id=owner_user.id))
        projects_db.seed("tasks", make_task(id="t1", owner_id=owner_user.id, team_id="team-9"))

        with pytest.raises(IncompatibleAssignment):
            _update(projects_db, owner_user, "t1", project_id="api")

        assert projects_db.tasks.docs[0]["project_id"] is None

    def test_adding_project_fills_team(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A")
        result = _update(projects_db, owner_user, task["_id"], project_id="api")
        assert result["team_id"] == "team-1"

    def test_unassign_team(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A", team_id="team-1")
        result = _update(projects_db, owner_user, task["_id"], team_id=None)
        assert result["team_id"] is None

    def test_blank_team_unassigns(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A", team_id="team-1")
        result = _update(projects_db, owner_user, task["_id"], team_id="")
        assert result["team_id"] is None

    def test_changing_team_checks_permission(self, projects_db, owner_user, member_user):
        projects_db.seed("tasks", make_task(id="t1", owner_id=member_user.id))
        with pytest.raises(Unauthorized):
            _update(projects_db, member_user, "t1", team_id="team-1")

    def test_keeping_team_needs_no_new_check(self, projects_db, member_user):
        projects_db.seed("tasks", make_task(id="t1", owner_id=member_user.id, team_id="team-1"))
        result = _update(projects_db, member_user, "t1", title="Renamed")
        assert result["title"] == "Renamed"


class TestDeleteTask:
    def test_delete(self, projects_db, owner_user):
        task = _create(projects_db, owner_user, title="A")
        asyncio.run(delete_task(task_id=task["_id"], current_user=owner_user, db=projects_db))
        assert projects_db.tasks.docs == []

    def test_delete_foreign_is_404(self, projects_db, owner_user, member_user):
        task = _create(projects_db, owner_user, title="A")
        with pytest.raises(TaskNotFound):
            asyncio.run(delete_task(task_id=task["_id"], current_user=member_user, db=projects_db))
