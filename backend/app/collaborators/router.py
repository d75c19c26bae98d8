import http
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from ..core.database import get_session
from ..auth.service import get_current_user
from ..models.User import User
from ..models.Token import MessageResponse
from ..models.Collaborator import (
    CollaboratorCreate,
    CollaboratorListResponse,
    CollaboratorResponse,
    CollaboratorStatsResponse,
    CollaboratorUpdate,
)
from .service import (
    count_collaborators_by_type,
    create_collaborator,
    delete_collaborator,
    get_collaborator,
    get_collaborators_by_user,
    update_collaborator,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/collaborators", tags=["collaborators"])

def _log(method: str, path: str, code: int, user: User):
    logger.info("%s %s %s %s user=%s", method, path, code, http.HTTPStatus(code).phrase, user.id)

# Declared before /{collaborator_id} so "stats" is never read as an id
@router.get("/stats/summary", response_model=CollaboratorStatsResponse)
async def read_collaborator_stats(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Number of active collaborators per type.
    """
    counts = count_collaborators_by_type(session, current_user.id)
    stats = [{"type": kind, "count": count} for kind, count in sorted(counts.items(), key=lambda item: (-item[1], item[0].value))]
    _log("GET", "/api/collaborators/stats/summary", status.HTTP_200_OK, current_user)
    return {"stats": stats}

@router.get("", response_model=CollaboratorListResponse)
async def read_collaborators(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Active collaborators, newest first.
    """
    return {"collaborators": get_collaborators_by_user(session, current_user.id)}

@router.get("/{collaborator_id}", response_model=CollaboratorResponse)
async def read_collaborator(
    collaborator_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return {"collaborator": get_collaborator(session, collaborator_id, current_user.id)}

@router.post("", response_model=CollaboratorResponse, status_code=status.HTTP_201_CREATED)
async def create_new_collaborator(
    collaborator: CollaboratorCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_collaborator = create_collaborator(session, current_user.id, collaborator)
    _log("POST", "/api/collaborators", status.HTTP_201_CREATED, current_user)
    return {"collaborator": db_collaborator, "message": "Collaborator created successfully"}

@router.put("/{collaborator_id}", response_model=CollaboratorResponse)
async def update_existing_collaborator(
    collaborator_id: int,
    update_data: CollaboratorUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    collaborator = update_collaborator(session, collaborator_id, current_user.id, update_data)
    _log("PUT", f"/api/collaborators/{collaborator_id}", status.HTTP_200_OK, current_user)
    return {"collaborator": collaborator, "message": "Collaborator updated successfully"}

@router.delete("/{collaborator_id}", response_model=MessageResponse)
async def remove_collaborator(
    collaborator_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_collaborator(session, collaborator_id, current_user.id)
    _log("DELETE", f"/api/collaborators/{collaborator_id}", status.HTTP_200_OK, current_user)
    return {"message": "Collaborator deleted successfully"}
