from pydantic import BaseModel


class PermissionsResponse(BaseModel):
    can_create_tasks: bool
    can_manage_projects: bool
    is_global_admin: bool
