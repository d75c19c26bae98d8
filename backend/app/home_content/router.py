import http
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from ..core.database import get_session
from ..auth.service import get_current_user
from ..models.User import User
from ..models.HomeContent import HomeContentResponse, HomeContentUpdate
from .service import read_home_content, upsert_home_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/home-content", tags=["home-content"])

@router.get("", response_model=HomeContentResponse)
async def get_my_home_content(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Home page content with the collaborator summary. Falls back to defaults
    built from the user's name when nothing was saved yet.
    """
    return {"homeContent": read_home_content(session, current_user)}

@router.put("", response_model=HomeContentResponse)
async def update_my_home_content(
    update_data: HomeContentUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    content = upsert_home_content(session, current_user, update_data)
    logger.info("PUT /api/home-content %s %s", status.HTTP_200_OK, http.HTTPStatus(status.HTTP_200_OK).phrase)
    return {"homeContent": content, "message": "Home content updated successfully"}
