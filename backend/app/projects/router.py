import http
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from ..core.database import get_session
from ..auth.service import get_current_user
from ..models.User import User
from ..models.Token import MessageResponse
from ..models.Project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectOrderUpdate,
    ProjectResponse,
    ProjectStatus,
    ProjectUpdate,
)
from .service import (
    create_project,
    delete_project,
    get_project,
    get_projects_by_user,
    update_project,
    update_projects_order,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

def _log(method: str, path: str, code: int, user: User):
    logger.info("%s %s %s %s user=%s", method, path, code, http.HTTPStatus(code).phrase, user.id)

# Declared before /{project_id} so "order" is never read as an id
@router.put("/order", response_model=MessageResponse)
async def reorder_projects(
    order_data: ProjectOrderUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Persist the display order of the caller's projects.
    """
    update_projects_order(session, order_data.project_ids, current_user.id)
    _log("PUT", "/api/projects/order", status.HTTP_200_OK, current_user)
    return {"message": "Project order updated successfully"}

@router.get("", response_model=ProjectListResponse)
async def read_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    archived: bool | None = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    List the caller's projects, ordered for display.
    """
    projects = get_projects_by_user(session, current_user.id, status=status_filter, archived=archived)
    _log("GET", "/api/projects", status.HTTP_200_OK, current_user)
    return {"projects": projects}

@router.get("/{project_id}", response_model=ProjectResponse)
async def read_project(
    project_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return {"project": get_project(session, project_id, current_user.id)}

@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_new_project(
    project: ProjectCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_project = create_project(session, current_user.id, project)
    _log("POST", "/api/projects", status.HTTP_201_CREATED, current_user)
    return {"project": db_project, "message": "Project created successfully"}

@router.put("/{project_id}", response_model=ProjectResponse)
async def update_existing_project(
    project_id: int,
    update_data: ProjectUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Partial update. The tracker sends only {"status": ...}.
    """
    project = update_project(session, project_id, current_user.id, update_data)
    _log("PUT", f"/api/projects/{project_id}", status.HTTP_200_OK, current_user)
    return {"project": project, "message": "Project updated successfully"}

@router.delete("/{project_id}", response_model=MessageResponse)
async def remove_project(
    project_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_project(session, project_id, current_user.id)
    _log("DELETE", f"/api/projects/{project_id}", status.HTTP_200_OK, current_user)
    return {"message": "Project deleted successfully"}
