import http
import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from ..core.database import get_session
from ..auth.service import get_current_user
from ..models.User import User
from ..models.Token import MessageResponse
from ..models.Skill import SkillCreate, SkillRead, SkillUpdate
from .service import create_skill, delete_skill, get_skill_categories, get_skills_by_user, update_skill

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["skills"])

@router.get("/categories", response_model=list[str])
async def read_categories(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return get_skill_categories(session, current_user.id)

@router.get("", response_model=list[SkillRead])
async def read_skills(
    category: str | None = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return get_skills_by_user(session, current_user.id, category)

@router.post("", response_model=SkillRead, status_code=status.HTTP_201_CREATED)
async def create_new_skill(
    skill: SkillCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_skill = create_skill(session, current_user.id, skill)
    logger.info("POST /api/skills %s %s", status.HTTP_201_CREATED, http.HTTPStatus(status.HTTP_201_CREATED).phrase)
    return db_skill

@router.put("/{skill_id}", response_model=SkillRead)
async def update_existing_skill(
    skill_id: int,
    update_data: SkillUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return update_skill(session, skill_id, current_user.id, update_data)

@router.delete("/{skill_id}", response_model=MessageResponse)
async def remove_skill(
    skill_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_skill(session, skill_id, current_user.id)
    logger.info("DELETE /api/skills/%s %s %s", skill_id, status.HTTP_200_OK, http.HTTPStatus(status.HTTP_200_OK).phrase)
    return {"message": "Skill deleted successfully"}
