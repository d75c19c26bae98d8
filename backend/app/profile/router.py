from fastapi import APIRouter, Depends, status
import http
import logging
from sqlmodel import Session
from ..core.database import get_session
from ..models.User import User, ProfileResponse, ProfileUpdate
from ..models.Profile import ProfileDetail
from ..models.Experience import ExperienceCreate, ExperienceRead, ExperienceUpdate
from ..models.Education import EducationCreate, EducationRead, EducationUpdate
from ..models.Token import MessageResponse
from ..auth.service import get_current_user
from .service import (
    add_education,
    add_experience,
    delete_education,
    delete_experience,
    get_education,
    get_experiences,
    update_education,
    update_experience,
    update_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])

def _log(method: str, path: str, code: int):
    logger.info("%s %s %s %s", method, path, code, http.HTTPStatus(code).phrase)

@router.get("", response_model=ProfileDetail)
async def get_my_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Get current user profile, with its experience and education entries.
    """
    profile = ProfileResponse.model_validate(current_user).model_dump()
    profile["experiences"] = [ExperienceRead.model_validate(e) for e in get_experiences(session, current_user.id)]
    profile["education"] = [EducationRead.model_validate(e) for e in get_education(session, current_user.id)]
    _log("GET", "/api/profile", status.HTTP_200_OK)
    return profile

@router.put("", response_model=ProfileResponse)
async def update_my_profile(
    update_data: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    Updates existing profile information (name, bio, contact and social links).
    """
    user = await update_profile(session, current_user, update_data)
    _log("PUT", "/api/profile", status.HTTP_200_OK)
    return user

@router.post("/experience", response_model=ExperienceRead, status_code=status.HTTP_201_CREATED)
async def create_experience(
    experience: ExperienceCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_experience = add_experience(session, current_user.id, experience)
    _log("POST", "/api/profile/experience", status.HTTP_201_CREATED)
    return db_experience

@router.put("/experience/{experience_id}", response_model=ExperienceRead)
async def edit_experience(
    experience_id: int,
    update_data: ExperienceUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return update_experience(session, experience_id, current_user.id, update_data)

@router.delete("/experience/{experience_id}", response_model=MessageResponse)
async def remove_experience(
    experience_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_experience(session, experience_id, current_user.id)
    _log("DELETE", f"/api/profile/experience/{experience_id}", status.HTTP_200_OK)
    return {"message": "Experience deleted successfully"}

@router.post("/education", response_model=EducationRead, status_code=status.HTTP_201_CREATED)
async def create_education(
    education: EducationCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_education = add_education(session, current_user.id, education)
    _log("POST", "/api/profile/education", status.HTTP_201_CREATED)
    return db_education

@router.put("/education/{education_id}", response_model=EducationRead)
async def edit_education(
    education_id: int,
    update_data: EducationUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return update_education(session, education_id, current_user.id, update_data)

@router.delete("/education/{education_id}", response_model=MessageResponse)
async def remove_education(
    education_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_education(session, education_id, current_user.id)
    _log("DELETE", f"/api/profile/education/{education_id}", status.HTTP_200_OK)
    return {"message": "Education deleted successfully"}
