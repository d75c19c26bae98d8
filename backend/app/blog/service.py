from sqlmodel import Session, select
from ..core.errors import NotFoundError
from ..models.BlogPost import BlogPost, BlogPostCreate, BlogPostUpdate
from ..models.User import utcnow

def get_posts_by_user(session: Session, user_id: int, published: bool | None = None) -> list[BlogPost]:
    statement = select(BlogPost).where(BlogPost.user_id == user_id)
    if published is not None:
        statement = statement.where(BlogPost.published == published)
    statement = statement.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
    return session.exec(statement).all()

def get_post(session: Session, post_id: int, user_id: int) -> BlogPost:
    post = session.exec(select(BlogPost).where(BlogPost.id == post_id, BlogPost.user_id == user_id)).first()
    if not post:
        raise NotFoundError("Blog post not found")
    return post

def _stamp_publication(post: BlogPost) -> None:
    # published_at is set the first time a post goes live and kept afterwards
    if post.published and post.published_at is None:
        post.published_at = utcnow()

def create_post(session: Session, user_id: int, post: BlogPostCreate) -> BlogPost:
    db_post = BlogPost.model_validate(post, update={"user_id": user_id})
    _stamp_publication(db_post)
    session.add(db_post)
    session.commit()
    session.refresh(db_post)
    return db_post

def update_post(session: Session, post_id: int, user_id: int, update_data: BlogPostUpdate) -> BlogPost:
    post = get_post(session, post_id, user_id)
    for key, value in update_data.model_dump(exclude_unset=True).items():
        if value is None and key not in ("excerpt", "category"):
            continue
        setattr(post, key, value)
    _stamp_publication(post)
    post.updated_at = utcnow()
    session.add(post)
    session.commit()
    session.refresh(post)
    return post

def delete_post(session: Session, post_id: int, user_id: int) -> None:
    post = get_post(session, post_id, user_id)
    session.delete(post)
    session.commit()
