"""Tests for TeamRepository and UserRepository queries."""

import asyncio
from datetime import datetime, timezone

from app.repositories.teams import TeamRepository
from app.repositories.users import UserRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db
from tests.mocks.records import make_member, make_team, make_user


def _repo(repo_class, collection_name, collection):
    return repo_class(create_mock_db({collection_name: collection}))


class TestTeamRepositoryQueries:
    def test_get_owned_filters_by_owner(self):
        collection = create_mock_collection(find_one=None)
        repo = _repo(TeamRepository, "teams", collection)

        result = asyncio.run(repo.get_owned("team-1", "owner-1"))

        assert result is None
        query = collection.find_one.call_args[0][0]
        assert query == {"_id": "team-1", "owner_id": "owner-1"}

    def test_find_owned_ids_queries_in_and_owner(self):
        collection = create_mock_collection(find=[{"_id": "a"}])
        repo = _repo(TeamRepository, "teams", collection)

        result = asyncio.run(repo.find_owned_ids(["a", "b"], "owner-1"))

        assert result == ["a"]
        query, projection = collection.find.call_args[0]
        assert query == {"_id": {"$in": ["a", "b"]}, "owner_id": "owner-1"}
        assert projection == {"_id": 1}

    def test_find_owned_ids_empty_skips_query(self):
        collection = create_mock_collection()
        repo = _repo(TeamRepository, "teams", collection)

        assert asyncio.run(repo.find_owned_ids([], "owner-1")) == []
        collection.find.assert_not_called()

    def test_find_accessible_ids_includes_membership(self):
        collection = create_mock_collection(find=[])
        repo = _repo(TeamRepository, "teams", collection)

        asyncio.run(repo.find_accessible_ids("user-1"))

        query = collection.find.call_args[0][0]
        assert {"owner_id": "user-1"} in query["$or"]
        assert {"members.user_id": "user-1"} in query["$or"]

    def test_name_taken_excludes_current_team(self):
        collection = create_mock_collection(find_one=None)
        repo = _repo(TeamRepository, "teams", collection)

        asyncio.run(repo.name_taken("owner-1", "Platform", exclude_id="team-1"))

        query = collection.find_one.call_args[0][0]
        assert query["_id"] == {"$ne": "team-1"}

    def test_remove_member_pulls_by_user_id(self):
        collection = create_mock_collection()
        repo = _repo(TeamRepository, "teams", collection)
        now = datetime.now(timezone.utc)

        asyncio.run(repo.remove_member("team-1", "u1", now))

        query, update = collection.update_one.call_args[0]
        assert query == {"_id": "team-1"}
        assert update["$pull"] == {"members": {"user_id": "u1"}}
        assert update["$set"] == {"updated_at": now}


class TestTeamRepositoryInMemory:
    def test_find_owned_sorted_by_name(self, fake_db):
        fake_db.seed(
            "teams",
            make_team(id="t1", name="Zeta", owner_id="owner-1"),
            make_team(id="t2", name="Alpha", owner_id="owner-1"),
            make_team(id="t3", name="Beta", owner_id="someone-else"),
        )

        teams = asyncio.run(TeamRepository(fake_db).find_owned("owner-1"))

        assert [t.name for t in teams] == ["Alpha", "Zeta"]

    def test_member_order_preserved(self, fake_db):
        fake_db.seed("teams", make_team(id="t1", members=[make_member("a"), make_member("b")]))
        repo = TeamRepository(fake_db)
        now = datetime.now(timezone.utc)

        asyncio.run(repo.add_member("t1", make_member("c").model_dump(), now))
        asyncio.run(repo.remove_member("t1", "a", now))
        team = asyncio.run(repo.get_by_id("t1"))

        assert [m.user_id for m in team.members] == ["b", "c"]

    def test_add_member_skips_existing_member_and_owner(self, fake_db):
        fake_db.seed("teams", make_team(id="t1", owner_id="owner-1", members=[make_member("a")]))
        repo = TeamRepository(fake_db)
        now = datetime.now(timezone.utc)

        assert asyncio.run(repo.add_member("t1", make_member("a").model_dump(), now)) is False
        assert asyncio.run(repo.add_member("t1", make_member("owner-1").model_dump(), now)) is False
        assert asyncio.run(repo.add_member("t1", make_member("b").model_dump(), now)) is True

        team = asyncio.run(repo.get_by_id("t1"))
        assert [m.user_id for m in team.members] == ["a", "b"]


class TestUserRepository:
    def test_get_by_email_normalizes(self):
        collection = create_mock_collection(find_one=None)
        repo = _repo(UserRepository, "users", collection)

        asyncio.run(repo.get_by_email("  Ann@Example.COM "))

        assert collection.find_one.call_args[0][0] == {"email": "ann@example.com"}

    def test_set_global_role(self, fake_db):
        fake_db.seed("users", make_user(id="u1", email="ann@example.com"))

        user = asyncio.run(UserRepository(fake_db).set_global_role("ann@example.com", "admin"))

        assert user.global_role == "admin"

    def test_set_global_role_unknown_user(self, fake_db):
        assert asyncio.run(UserRepository(fake_db).set_global_role("x@example.com", "admin")) is None

    def test_find_by_ids_projects_public_fields(self, fake_db):
        fake_db.seed("users", make_user(id="u1", name="Ann"), make_user(id="u2"))

        docs = asyncio.run(UserRepository(fake_db).find_by_ids(["u1"]))

        assert docs == [{"_id": "u1", "name": "Ann", "email": "u1@test.com"}]
