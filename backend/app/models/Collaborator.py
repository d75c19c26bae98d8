from enum import Enum
from datetime import datetime
from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel
from .User import utcnow

class CollaboratorType(str, Enum):
    POSTDOC = "postdoc"
    JUNIOR_FACULTY = "junior_faculty"
    SENIOR_FACULTY = "senior_faculty"
    INDUSTRY_TECH = "industry_tech"
    INDUSTRY_FINANCE = "industry_finance"
    INDUSTRY_HEALTHCARE = "industry_healthcare"
    UNDERGRADUATE = "undergraduate"
    GRADUATE = "graduate"
    PROFESSIONAL_ETHICIST = "professional_ethicist"
    JOURNALIST = "journalist"

# Buckets used by the home page summary
COLLABORATOR_GROUPS = {
    "academia": (CollaboratorType.POSTDOC, CollaboratorType.JUNIOR_FACULTY, CollaboratorType.SENIOR_FACULTY),
    "industry": (CollaboratorType.INDUSTRY_TECH, CollaboratorType.INDUSTRY_FINANCE, CollaboratorType.INDUSTRY_HEALTHCARE),
    "students": (CollaboratorType.UNDERGRADUATE, CollaboratorType.GRADUATE),
    "others": (CollaboratorType.PROFESSIONAL_ETHICIST, CollaboratorType.JOURNALIST),
}

class CollaboratorBase(SQLModel):
    name: str
    email: str | None = None # Stored lower-cased
    type: CollaboratorType
    institution: str | None = None
    role: str | None = None
    profile_url: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    project_ids: list[int] = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True)

class Collaborator(CollaboratorBase, table=True):
    __tablename__ = "collaborators"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

# ==========================================
# DTOs
# ==========================================
class CollaboratorCreate(CollaboratorBase):
    pass

class CollaboratorUpdate(SQLModel):
    name: str | None = None
    email: str | None = None
    type: CollaboratorType | None = None
    institution: str | None = None
    role: str | None = None
    profile_url: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    project_ids: list[int] | None = None
    is_active: bool | None = None

class CollaboratorRead(CollaboratorBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

class CollaboratorResponse(SQLModel):
    collaborator: CollaboratorRead
    message: str | None = None

class CollaboratorListResponse(SQLModel):
    collaborators: list[CollaboratorRead]

class CollaboratorTypeCount(SQLModel):
    type: CollaboratorType
    count: int

class CollaboratorStatsResponse(SQLModel):
    stats: list[CollaboratorTypeCount]
