"""
Domain services: team membership, relationship resolution and cascades.

Authorization lives in app.core.permissions.
"""

from app.services.cascade import (
    CascadeResult,
    on_project_deleted,
    on_project_teams_changed,
    on_team_deleted,
)
from app.services.membership import (
    add_member,
    create_team,
    get_owned_team,
    remove_member,
    rename_team,
)
from app.services.relationships import (
    TaskLinks,
    resolve_project_teams,
    resolve_task_links,
    resolve_task_update_links,
)

__all__ = [
    "CascadeResult",
    "TaskLinks",
    "add_member",
    "create_team",
    "get_owned_team",
    "on_project_deleted",
    "on_project_teams_changed",
    "on_team_deleted",
    "remove_member",
    "rename_team",
    "resolve_project_teams",
    "resolve_task_links",
    "resolve_task_update_links",
]
