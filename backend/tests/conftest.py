"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any app imports to prevent
accidental connections to real databases or mail servers.
"""

import os
import sys

# Ensure the backend app is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any app code imports the settings singleton
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests"
os.environ["ALGORITHM"] = "HS256"
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_taskboard"
os.environ["SMTP_HOST"] = ""

import pytest  # noqa: E402

from tests.mocks.mongodb import FakeDatabase  # noqa: E402
from tests.mocks.records import make_user  # noqa: E402


@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def admin_user():
    """User with the global admin role."""
    return make_user(id="admin-1", name="Admin", global_role="admin")


@pytest.fixture
def owner_user():
    """Regular user who owns the teams, projects and tasks under test."""
    return make_user(id="owner-1", name="Olivia Owner")


@pytest.fixture
def member_user():
    """Regular user who is added to teams as a member."""
    return make_user(id="member-1", name="Max Member")


@pytest.fixture
def outsider_user():
    """Regular user with no relation to any team under test."""
    return make_user(id="outsider-1", name="Otto Outsider")
