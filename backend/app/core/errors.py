"""
Domain Errors

Typed errors raised by the authorization and relationship services.
Each kind carries the HTTP status the API layer answers with; the mapping
to responses lives in ``app.main``.
"""


class TaskboardError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# Error kinds
# =============================================================================


class Unauthorized(TaskboardError):
    status_code = 403
    default_message = "Not enough permissions"


class NotFound(TaskboardError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(TaskboardError):
    status_code = 409
    default_message = "Conflict"


class InvalidInput(TaskboardError):
    status_code = 400
    default_message = "Invalid input"


class IncompatibleAssignment(TaskboardError):
    status_code = 400
    default_message = "Project is not assigned to the selected team"


# =============================================================================
# Specific errors
# =============================================================================


class TeamNotFound(NotFound):
    default_message = "Team not found"


class ProjectNotFound(NotFound):
    default_message = "Project not found"


class TaskNotFound(NotFound):
    default_message = "Task not found"


class UserNotFound(NotFound):
    default_message = "User not found with this email"


class MemberNotFound(NotFound):
    default_message = "User is not a member of this team"


class DuplicateMember(Conflict):
    default_message = "User is already a member of this team"


class DuplicateName(Conflict):
    default_message = "Name already exists"


class InvalidRole(InvalidInput):
    default_message = "Invalid role"


class CannotAddOwner(InvalidInput):
    default_message = "Cannot add team owner as member"
