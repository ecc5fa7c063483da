"""
APIRouter whose routes serialize responses by field name.

Documents are stored with `_id` (the models' alias), but API clients get `id`.
"""

from typing import Any

from fastapi import APIRouter
from fastapi.routing import APIRoute


class APIRouteByFieldName(APIRoute):
    """APIRoute that always sets response_model_by_alias=False."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["response_model_by_alias"] = False
        super().__init__(*args, **kwargs)


class CustomAPIRouter(APIRouter):
    """
    Router used by every v1 endpoint module.

    Usage:
        router = CustomAPIRouter()

        @router.get("/{task_id}", response_model=TaskResponse)
        async def read_task(task_id: str): ...
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("route_class", APIRouteByFieldName)
        super().__init__(*args, **kwargs)
