import logging
from sqlmodel import Session, select
from ..core.errors import NotFoundError
from ..models.Project import Project, ProjectCreate, ProjectStatus, ProjectUpdate
from ..models.User import utcnow

logger = logging.getLogger(__name__)

# Fields that may be cleared with an explicit null
NULLABLE_FIELDS = {
    "short_description", "live_url", "github_url", "paper_url",
    "thumbnail_url", "banner_url", "start_date", "end_date",
}

def get_projects_by_user(
    session: Session,
    user_id: int,
    status: ProjectStatus | None = None,
    archived: bool | None = None
) -> list[Project]:
    statement = select(Project).where(Project.user_id == user_id)
    if status is not None:
        statement = statement.where(Project.status == status)
    if archived is not None:
        statement = statement.where(Project.archived == archived)
    statement = statement.order_by(Project.order.asc(), Project.created_at.desc(), Project.id.desc())
    return session.exec(statement).all()

def get_project(session: Session, project_id: int, user_id: int) -> Project:
    """
    Fetch a project owned by user_id. Projects of other users are reported as missing.
    """
    statement = select(Project).where(Project.id == project_id, Project.user_id == user_id)
    project = session.exec(statement).first()
    if not project:
        raise NotFoundError("Project not found")
    return project

def create_project(session: Session, user_id: int, project: ProjectCreate) -> Project:
    db_project = Project.model_validate(project, update={"user_id": user_id})
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    logger.info("Created project %s for user %s", db_project.id, user_id)
    return db_project

def update_project(session: Session, project_id: int, user_id: int, update_data: ProjectUpdate) -> Project:
    project = get_project(session, project_id, user_id)

    changes = {
        key: value
        for key, value in update_data.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    for key, value in changes.items():
        setattr(project, key, value)
    project.updated_at = utcnow()

    session.add(project)
    session.commit()
    session.refresh(project)
    logger.info("Updated project %s fields=%s", project.id, sorted(changes))
    return project

def update_projects_order(session: Session, project_ids: list[int], user_id: int) -> int:
    """
    Set each project's order to its position in project_ids.
    Ids that do not belong to the user are skipped. Returns the number of projects updated.
    """
    statement = select(Project).where(Project.user_id == user_id, Project.id.in_(project_ids))
    projects = {p.id: p for p in session.exec(statement).all()}

    updated = 0
    for index, project_id in enumerate(project_ids):
        project = projects.get(project_id)
        if project is None:
            continue
        project.order = index
        project.updated_at = utcnow()
        session.add(project)
        updated += 1

    session.commit()
    return updated

def delete_project(session: Session, project_id: int, user_id: int) -> None:
    project = get_project(session, project_id, user_id)
    session.delete(project)
    session.commit()
