"""Shared fixtures for API endpoint tests."""

from unittest.mock import AsyncMock, patch

import pytest

from tests.mocks.records import make_member, make_team


@pytest.fixture
def board_db(fake_db, admin_user, owner_user, member_user, outsider_user):
    """
    Users plus one team "team-1" owned by owner_user, with member_user as a
    Tech Lead.
    """
    fake_db.seed("users", admin_user, owner_user, member_user, outsider_user)
    fake_db.seed(
        "teams",
        make_team(
            id="team-1",
            name="Platform",
            owner_id=owner_user.id,
            members=[make_member(member_user.id, "Tech Lead")],
        ),
    )
    return fake_db


@pytest.fixture
def no_emails():
    """Keep membership endpoints from sending invitation emails."""
    mock = AsyncMock()
    mock.notify_team_member_added = AsyncMock(return_value=True)
    with patch("app.services.membership.notification_service", mock):
        yield mock
