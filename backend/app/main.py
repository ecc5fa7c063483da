import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api import health
from app.api.v1.endpoints import permissions, projects, tasks, teams
from app.core.config import settings
from app.core.errors import TaskboardError
from app.core.init_db import init_db
from app.core.metrics import PrometheusMiddleware, metrics_endpoint
from app.db.mongodb import close_mongo_connection, connect_to_mongo

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Taskboard API for boards, teams, projects and tasks.

    ## Features
    * **Teams**: Owner-managed teams with Member, Tech Lead and QA roles.
    * **Projects**: Projects shared with one or more of the owner's teams.
    * **Tasks**: Tasks linked to a team and/or project, kept consistent when teams or projects go away.
    * **Permissions**: Team-scoped checks for creating tasks and managing projects.

    """,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

app.add_middleware(PrometheusMiddleware)


@app.exception_handler(TaskboardError)
async def taskboard_error_handler(request: Request, exc: TaskboardError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
async def startup_event():
    await connect_to_mongo()
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    await close_mongo_connection()


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(teams.router, prefix=f"{settings.API_V1_STR}/teams", tags=["teams"])
app.include_router(projects.router, prefix=f"{settings.API_V1_STR}/projects", tags=["projects"])
app.include_router(tasks.router, prefix=f"{settings.API_V1_STR}/tasks", tags=["tasks"])
app.include_router(permissions.router, prefix=f"{settings.API_V1_STR}/permissions", tags=["permissions"])
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    return {"message": "Welcome to Taskboard API"}
