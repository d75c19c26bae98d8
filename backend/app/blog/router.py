import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from ..core.database import get_session
from ..auth.service import get_current_user
from ..models.User import User
from ..models.Token import MessageResponse
from ..models.BlogPost import BlogPostCreate, BlogPostRead, BlogPostUpdate
from .service import create_post, delete_post, get_post, get_posts_by_user, update_post

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog", tags=["blog"])

@router.get("", response_model=list[BlogPostRead])
async def read_posts(
    published: bool | None = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    """
    List the caller's posts, newest first.
    """
    return get_posts_by_user(session, current_user.id, published)

@router.get("/{post_id}", response_model=BlogPostRead)
async def read_post(
    post_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return get_post(session, post_id, current_user.id)

@router.post("", response_model=BlogPostRead, status_code=status.HTTP_201_CREATED)
async def create_new_post(
    post: BlogPostCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    db_post = create_post(session, current_user.id, post)
    logger.info("Created blog post %s for user %s", db_post.id, current_user.id)
    return db_post

@router.put("/{post_id}", response_model=BlogPostRead)
async def update_existing_post(
    post_id: int,
    update_data: BlogPostUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    return update_post(session, post_id, current_user.id, update_data)

@router.delete("/{post_id}", response_model=MessageResponse)
async def remove_post(
    post_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    delete_post(session, post_id, current_user.id)
    return {"message": "Blog post deleted successfully"}
