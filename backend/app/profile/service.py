from sqlmodel import Session, select
from ..core.errors import NotFoundError, ValidationError
from ..models.Education import Education, EducationCreate, EducationUpdate
from ..models.Experience import Experience, ExperienceCreate, ExperienceUpdate
from ..models.User import User, ProfileUpdate, utcnow
from ..auth.service import get_user_by_email

async def update_profile(session: Session, user: User, update_data: ProfileUpdate) -> User:
    changes = update_data.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in changes:
        email = changes["email"].strip().lower()
        other = get_user_by_email(session, email)
        if other and other.id != user.id:
            raise ValidationError("Email already registered", field="email")
        changes["email"] = email

    if "name" in changes:
        if not changes["name"].strip():
            raise ValidationError("Name is required", field="name")
        changes["name"] = changes["name"].strip()

    for key, value in changes.items():
        setattr(user, key, value)
    user.updated_at = utcnow()

    session.add(user)
    session.commit()
    session.refresh(user)
    return user

# ==========================================
# Experience and education history
# ==========================================

def _require(values: dict, fields: tuple[str, ...], message: str) -> None:
    for name in fields:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message, field=name)

def get_experiences(session: Session, user_id: int) -> list[Experience]:
    statement = select(Experience).where(Experience.user_id == user_id).order_by(Experience.start_date.desc())
    return session.exec(statement).all()

def get_experience(session: Session, experience_id: int, user_id: int) -> Experience:
    experience = session.exec(select(Experience).where(Experience.id == experience_id, Experience.user_id == user_id)).first()
    if not experience:
        raise NotFoundError("Experience not found")
    return experience

def add_experience(session: Session, user_id: int, experience: ExperienceCreate) -> Experience:
    _require(experience.model_dump(), ("title", "company", "start_date"), "Title, company, and start date are required")
    db_experience = Experience.model_validate(experience, update={"user_id": user_id})
    if db_experience.current:
        db_experience.end_date = None
    session.add(db_experience)
    session.commit()
    session.refresh(db_experience)
    return db_experience

def update_experience(session: Session, experience_id: int, user_id: int, update_data: ExperienceUpdate) -> Experience:
    experience = get_experience(session, experience_id, user_id)
    changes = update_data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key not in ("end_date", "location", "description"):
            continue
        setattr(experience, key, value)
    if experience.current:
        experience.end_date = None
    session.add(experience)
    session.commit()
    session.refresh(experience)
    return experience

def delete_experience(session: Session, experience_id: int, user_id: int) -> None:
    experience = get_experience(session, experience_id, user_id)
    session.delete(experience)
    session.commit()

def get_education(session: Session, user_id: int) -> list[Education]:
    statement = select(Education).where(Education.user_id == user_id).order_by(Education.start_date.desc())
    return session.exec(statement).all()

def get_education_entry(session: Session, education_id: int, user_id: int) -> Education:
    education = session.exec(select(Education).where(Education.id == education_id, Education.user_id == user_id)).first()
    if not education:
        raise NotFoundError("Education not found")
    return education

def add_education(session: Session, user_id: int, education: EducationCreate) -> Education:
    _require(education.model_dump(), ("degree", "institution", "start_date"), "Degree, institution, and start date are required")
    db_education = Education.model_validate(education, update={"user_id": user_id})
    session.add(db_education)
    session.commit()
    session.refresh(db_education)
    return db_education

def update_education(session: Session, education_id: int, user_id: int, update_data: EducationUpdate) -> Education:
    education = get_education_entry(session, education_id, user_id)
    for key, value in update_data.model_dump(exclude_unset=True).items():
        if value is None and key not in ("end_date", "location", "gpa", "description"):
            continue
        setattr(education, key, value)
    session.add(education)
    session.commit()
    session.refresh(education)
    return education

def delete_education(session: Session, education_id: int, user_id: int) -> None:
    education = get_education_entry(session, education_id, user_id)
    session.delete(education)
    session.commit()
