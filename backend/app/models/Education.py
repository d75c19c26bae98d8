from datetime import datetime
from sqlmodel import Field, SQLModel
from .User import utcnow

class EducationBase(SQLModel):
    degree: str
    institution: str
    location: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    gpa: str | None = None
    description: str | None = None

class Education(EducationBase, table=True):
    __tablename__ = "education"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)

class EducationCreate(EducationBase):
    pass

class EducationUpdate(SQLModel):
    degree: str | None = None
    institution: str | None = None
    location: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    gpa: str | None = None
    description: str | None = None

class EducationRead(EducationBase):
    id: int
