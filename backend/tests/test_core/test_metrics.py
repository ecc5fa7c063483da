"""Tests for metrics path normalization."""

from app.core.metrics import normalize_path


class TestNormalizePath:
    def test_uuid_replaced(self):
        path = "/api/v1/teams/550e8400-e29b-41d4-a716-446655440000/members"
        assert normalize_path(path) == "/api/v1/teams/{id}/members"

    def test_numeric_id_replaced(self):
        assert normalize_path("/api/v1/tasks/123") == "/api/v1/tasks/{id}"

    def test_uuid_member_path(self):
        team = "550e8400-e29b-41d4-a716-446655440000"
        user = "6ba7b810-9dad-11d1-80b4-00c04fd430c8"
        path = f"/api/v1/teams/{team}/members/{user}"
        assert normalize_path(path) == "/api/v1/teams/{id}/members/{id}"

    def test_static_path_unchanged(self):
        assert normalize_path("/api/v1/permissions/") == "/api/v1/permissions/"
