from datetime import datetime
from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel
from .User import utcnow

class ExperienceBase(SQLModel):
    title: str
    company: str
    location: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    current: bool = Field(default=False)
    description: str | None = None
    achievements: list[str] = Field(default_factory=list, sa_column=Column(JSON))

class Experience(ExperienceBase, table=True):
    __tablename__ = "experiences"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)

class ExperienceCreate(ExperienceBase):
    pass

class ExperienceUpdate(SQLModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    current: bool | None = None
    description: str | None = None
    achievements: list[str] | None = None

class ExperienceRead(ExperienceBase):
    id: int
