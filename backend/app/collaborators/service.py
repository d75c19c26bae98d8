from sqlalchemy import func
from sqlmodel import Session, select
from ..core.errors import NotFoundError, ValidationError
from ..models.Collaborator import (
    COLLABORATOR_GROUPS,
    Collaborator,
    CollaboratorCreate,
    CollaboratorType,
    CollaboratorUpdate,
)
from ..models.User import utcnow

NULLABLE_FIELDS = {"email", "institution", "role", "profile_url", "bio"}

def _normalize(changes: dict) -> dict:
    if "name" in changes:
        if not (changes["name"] or "").strip():
            raise ValidationError("Name is required", field="name")
        changes["name"] = changes["name"].strip()
    if changes.get("email"):
        changes["email"] = changes["email"].strip().lower()
    return changes

def get_collaborators_by_user(session: Session, user_id: int) -> list[Collaborator]:
    statement = (
        select(Collaborator)
        .where(Collaborator.user_id == user_id, Collaborator.is_active.is_(True))
        .order_by(Collaborator.created_at.desc(), Collaborator.id.desc())
    )
    return session.exec(statement).all()

def get_collaborator(session: Session, collaborator_id: int, user_id: int) -> Collaborator:
    collaborator = session.exec(
        select(Collaborator).where(Collaborator.id == collaborator_id, Collaborator.user_id == user_id)
    ).first()
    if not collaborator:
        raise NotFoundError("Collaborator not found")
    return collaborator

def create_collaborator(session: Session, user_id: int, collaborator: CollaboratorCreate) -> Collaborator:
    data = _normalize(collaborator.model_dump())
    db_collaborator = Collaborator.model_validate(data, update={"user_id": user_id})
    session.add(db_collaborator)
    session.commit()
    session.refresh(db_collaborator)
    return db_collaborator

def update_collaborator(session: Session, collaborator_id: int, user_id: int, update_data: CollaboratorUpdate) -> Collaborator:
    collaborator = get_collaborator(session, collaborator_id, user_id)
    changes = _normalize(update_data.model_dump(exclude_unset=True))
    for key, value in changes.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(collaborator, key, value)
    collaborator.updated_at = utcnow()
    session.add(collaborator)
    session.commit()
    session.refresh(collaborator)
    return collaborator

def delete_collaborator(session: Session, collaborator_id: int, user_id: int) -> None:
    collaborator = get_collaborator(session, collaborator_id, user_id)
    session.delete(collaborator)
    session.commit()

def count_collaborators_by_type(session: Session, user_id: int) -> dict[CollaboratorType, int]:
    """
    Active collaborators per type. Types with no collaborator are left out.
    """
    statement = (
        select(Collaborator.type, func.count(Collaborator.id))
        .where(Collaborator.user_id == user_id, Collaborator.is_active.is_(True))
        .group_by(Collaborator.type)
    )
    return {CollaboratorType(kind): count for kind, count in session.exec(statement).all()}

def group_collaborator_stats(counts: dict[CollaboratorType, int]) -> dict[str, dict]:
    groups = {}
    for group, types in COLLABORATOR_GROUPS.items():
        subcategories = {kind.value: counts.get(kind, 0) for kind in types}
        groups[group] = {"total": sum(subcategories.values()), "subcategories": subcategories}
    return groups
