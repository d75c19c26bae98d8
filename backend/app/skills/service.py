from sqlmodel import Session, select
from ..core.errors import NotFoundError
from ..models.Skill import Skill, SkillCreate, SkillUpdate
from ..models.User import utcnow

def get_skills_by_user(session: Session, user_id: int, category: str | None = None) -> list[Skill]:
    statement = select(Skill).where(Skill.user_id == user_id)
    if category:
        statement = statement.where(Skill.category == category)
    statement = statement.order_by(Skill.display_order.asc(), Skill.name.asc())
    return session.exec(statement).all()

def get_skill_categories(session: Session, user_id: int) -> list[str]:
    statement = select(Skill.category).where(Skill.user_id == user_id).distinct().order_by(Skill.category)
    return list(session.exec(statement).all())

def get_skill(session: Session, skill_id: int, user_id: int) -> Skill:
    skill = session.exec(select(Skill).where(Skill.id == skill_id, Skill.user_id == user_id)).first()
    if not skill:
        raise NotFoundError("Skill not found")
    return skill

def create_skill(session: Session, user_id: int, skill: SkillCreate) -> Skill:
    db_skill = Skill.model_validate(skill, update={"user_id": user_id})
    session.add(db_skill)
    session.commit()
    session.refresh(db_skill)
    return db_skill

def update_skill(session: Session, skill_id: int, user_id: int, update_data: SkillUpdate) -> Skill:
    skill = get_skill(session, skill_id, user_id)
    for key, value in update_data.model_dump(exclude_unset=True).items():
        if value is None and key != "description":
            continue
        setattr(skill, key, value)
    skill.updated_at = utcnow()
    session.add(skill)
    session.commit()
    session.refresh(skill)
    return skill

def delete_skill(session: Session, skill_id: int, user_id: int) -> None:
    skill = get_skill(session, skill_id, user_id)
    session.delete(skill)
    session.commit()
