from datetime import datetime
from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel
from .User import utcnow

class BlogPostBase(SQLModel):
    title: str
    excerpt: str | None = None
    content: str
    category: str | None = None
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    read_time: int = Field(default=1, ge=1) # Minutes
    published: bool = Field(default=False)

class BlogPost(BlogPostBase, table=True):
    __tablename__ = "blog_posts"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    published_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

class BlogPostCreate(BlogPostBase):
    pass

class BlogPostUpdate(SQLModel):
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    read_time: int | None = Field(default=None, ge=1)
    published: bool | None = None

class BlogPostRead(BlogPostBase):
    id: int
    user_id: int
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
