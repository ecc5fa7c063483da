"""
API v1 Helper Functions

Shared helper functions extracted from endpoint modules for better
code organization and reusability.
"""

from app.api.v1.helpers.projects import (
    clean_project_name,
    ensure_project_name_free,
    get_owned_project,
)
from app.api.v1.helpers.tasks import build_task_filters, get_owned_task
from app.api.v1.helpers.teams import enrich_team_with_users

__all__ = [
    "build_task_filters",
    "clean_project_name",
    "enrich_team_with_users",
    "ensure_project_name_free",
    "get_owned_project",
    "get_owned_task",
]
