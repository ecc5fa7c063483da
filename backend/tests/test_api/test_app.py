"""HTTP-level tests: error mapping, authentication and routing."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.core.config import settings
from app.db.mongodb import get_database
from app.main import app
from tests.mocks.records import make_member, make_team

API = settings.API_V1_STR


def _token(sub, token_type="access"):
    payload = {
        "sub": sub,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def client(fake_db, owner_user, member_user):
    fake_db.seed("users", owner_user, member_user)
    fake_db.seed(
        "teams",
        make_team(id="team-1", name="Platform", owner_id=owner_user.id, members=[make_member(member_user.id, "QA")]),
    )
    app.dependency_overrides[get_database] = lambda: fake_db
    # Startup hooks only run inside a `with` block, so no database is contacted
    yield TestClient(app)
    app.dependency_overrides.clear()


def _as(user):
    return {"Authorization": f"Bearer {_token(user.id)}"}


class TestAuthentication:
    def test_missing_token(self, client):
        assert client.get(f"{API}/teams/").status_code == 401

    def test_bad_signature(self, client, owner_user):
        token = jwt.encode({"sub": owner_user.id}, "wrong-key", algorithm="HS256")
        response = client.get(f"{API}/teams/", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_refresh_token_rejected(self, client, owner_user):
        headers = {"Authorization": f"Bearer {_token(owner_user.id, 'refresh')}"}
        assert client.get(f"{API}/teams/", headers=headers).status_code == 401

    def test_unknown_user(self, client):
        headers = {"Authorization": f"Bearer {_token('ghost')}"}
        assert client.get(f"{API}/teams/", headers=headers).status_code == 401

    def test_valid_token(self, client, owner_user):
        response = client.get(f"{API}/teams/", headers=_as(owner_user))
        assert response.status_code == 200
        assert response.json()[0]["id"] == "team-1"


class TestErrorMapping:
    def test_unauthorized_is_403(self, client, member_user):
        response = client.post(
            f"{API}/tasks/", json={"title": "Ship", "team_id": "team-1"}, headers=_as(member_user)
        )
        assert response.status_code == 403
        assert "create tasks" in response.json()["detail"]

    def test_not_found_is_404(self, client, member_user):
        response = client.delete(f"{API}/teams/team-1", headers=_as(member_user))
        assert response.status_code == 404
        assert response.json()["detail"] == "Team not found"

    def test_conflict_is_409(self, client, owner_user):
        response = client.post(f"{API}/teams/", json={"name": "Platform"}, headers=_as(owner_user))
        assert response.status_code == 409

    def test_invalid_role_is_400(self, client, owner_user):
        response = client.post(
            f"{API}/teams/team-1/members",
            json={"email": owner_user.email, "role": "Admin"},
            headers=_as(owner_user),
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid role"

    def test_incompatible_assignment_is_400(self, client, owner_user):
        headers = _as(owner_user)
        client.post(f"{API}/teams/", json={"name": "Mobile"}, headers=headers)
        project = client.post(
            f"{API}/projects/", json={"name": "API", "team_ids": ["team-1"]}, headers=headers
        ).json()
        mobile = [t for t in client.get(f"{API}/teams/", headers=headers).json() if t["name"] == "Mobile"][0]

        response = client.post(
            f"{API}/tasks/",
            json={"title": "Ship", "team_id": mobile["id"], "project_id": project["id"]},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Project is not assigned to the selected team"


class TestRoutes:
    def test_delete_team_returns_204(self, client, owner_user):
        response = client.delete(f"{API}/teams/team-1", headers=_as(owner_user))
        assert response.status_code == 204

    def test_permissions(self, client, member_user):
        response = client.get(f"{API}/permissions/", params={"team_id": "team-1"}, headers=_as(member_user))
        assert response.json() == {
            "can_create_tasks": False,
            "can_manage_projects": False,
            "is_global_admin": False,
        }

    def test_liveness(self, client):
        assert client.get("/health/live").status_code == 200

    def test_metrics(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "authorization_decisions_total" in response.text

    def test_readiness_without_database(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["components"]["database"] == "client_not_initialized"

    def test_page_size_is_capped(self, client, owner_user):
        response = client.get(f"{API}/tasks/", params={"limit": 5000}, headers=_as(owner_user))
        assert response.status_code == 422
