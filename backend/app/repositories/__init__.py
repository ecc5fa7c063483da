"""
Repositories: one class per MongoDB collection (users, teams, projects, tasks).

Services and endpoints go through these instead of touching collections.
"""

from app.repositories.base import BaseRepository
from app.repositories.projects import ProjectRepository
from app.repositories.tasks import TaskRepository
from app.repositories.teams import TeamRepository
from app.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
