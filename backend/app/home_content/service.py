from sqlmodel import Session, select
from ..core.errors import ValidationError
from ..collaborators.service import count_collaborators_by_type, group_collaborator_stats
from ..models.HomeContent import HomeContent, HomeContentRead, HomeContentUpdate, SOCIAL_NETWORKS, empty_social_links
from ..models.User import User, utcnow

DEFAULT_TAGLINE = "Your professional tagline here"
DEFAULT_BIO = "Tell your story here..."
REQUIRED_FIELDS = ("name", "tagline", "bio")

def get_home_content(session: Session, user_id: int) -> HomeContent | None:
    return session.exec(select(HomeContent).where(HomeContent.user_id == user_id)).first()

def default_home_content(user: User) -> HomeContent:
    """
    What the home page shows before anything has been saved. Not persisted.
    """
    return HomeContent(user_id=user.id, name=user.name, tagline=DEFAULT_TAGLINE, bio=DEFAULT_BIO)

def read_home_content(session: Session, user: User) -> HomeContentRead:
    content = get_home_content(session, user.id) or default_home_content(user)
    stats = group_collaborator_stats(count_collaborators_by_type(session, user.id))
    return HomeContentRead.model_validate(content, update={"collaborator_stats": stats})

def _merge_social_links(current: dict | None, changes: dict) -> dict:
    links = dict(current or empty_social_links())
    for network, url in changes.items():
        if network not in SOCIAL_NETWORKS:
            raise ValidationError(f"Unknown social network: {network}", field="social_links")
        links[network] = url or ""
    return links

def upsert_home_content(session: Session, user: User, update_data: HomeContentUpdate) -> HomeContentRead:
    changes = update_data.model_dump(exclude_unset=True)
    for name in REQUIRED_FIELDS:
        if name in changes and not (changes[name] or "").strip():
            raise ValidationError(f"{name.capitalize()} is required", field=name)

    content = get_home_content(session, user.id)
    if content is None:
        content = default_home_content(user)

    for key, value in changes.items():
        if key == "social_links":
            value = _merge_social_links(content.social_links, value or {})
        elif value is None and key != "profile_image_url":
            continue
        elif key in REQUIRED_FIELDS:
            value = value.strip()
        setattr(content, key, value)
    content.updated_at = utcnow()

    session.add(content)
    session.commit()
    session.refresh(content)
    return read_home_content(session, user)
