"""
Shared Constants

Centralized constants used across the application to ensure consistency.
"""

from typing import List

# Global (user-level) roles
GLOBAL_ROLE_ADMIN = "admin"
GLOBAL_ROLE_PROJECT_MANAGER = "project_manager"
GLOBAL_ROLE_MEMBER = "member"

GLOBAL_ROLES: List[str] = [
    GLOBAL_ROLE_MEMBER,
    GLOBAL_ROLE_PROJECT_MANAGER,
    GLOBAL_ROLE_ADMIN,
]

# Roles assignable to a team member entry
TEAM_ROLE_MEMBER = "Member"
TEAM_ROLE_TECH_LEAD = "Tech Lead"
TEAM_ROLE_QA = "QA"

TEAM_ROLES: List[str] = [
    TEAM_ROLE_MEMBER,
    TEAM_ROLE_TECH_LEAD,
    TEAM_ROLE_QA,
]

# Role strings accepted by the team-scoped permission checks.
# NOTE: none of these can be assigned through add_member (see TEAM_ROLES), so in
# practice only team owners and global admins pass those checks.
PRIVILEGED_ROLE_ADMIN = "Admin"
PRIVILEGED_ROLE_PROJECT_MANAGER = "Project Manager"

# Field limits
TEAM_NAME_MAX_LENGTH = 100
TASK_TITLE_MAX_LENGTH = 100
TASK_DESCRIPTION_MAX_LENGTH = 500

# Listing page size
LIST_PAGE_MAX = 1000
