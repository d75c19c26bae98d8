from enum import Enum
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel
from .User import utcnow

class ProjectStatus(str, Enum):
    IDEATION = "ideation"
    RESEARCHING = "researching"
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"

class EnthusiasmLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

class ProjectBase(SQLModel):
    title: str
    description: str
    short_description: str | None = None
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING, index=True)
    technologies: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    live_url: str | None = None
    github_url: str | None = None
    paper_url: str | None = None
    thumbnail_url: str | None = None
    banner_url: str | None = None
    archived: bool = Field(default=False)
    featured: bool = Field(default=False)
    order: int = Field(default=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    open_to_collaborators: bool = Field(default=False)
    accepting_sponsors: bool = Field(default=False)
    collaborator_count: int = Field(default=1, ge=1)
    enthusiasm_level: EnthusiasmLevel = Field(default=EnthusiasmLevel.MEDIUM)

class Project(ProjectBase, table=True):
    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

# ==========================================
# DTOs
# ==========================================
class ProjectCreate(ProjectBase):
    pass

class ProjectUpdate(SQLModel):
    title: str | None = None
    description: str | None = None
    short_description: str | None = None
    status: ProjectStatus | None = None
    technologies: list[str] | None = None
    live_url: str | None = None
    github_url: str | None = None
    paper_url: str | None = None
    thumbnail_url: str | None = None
    banner_url: str | None = None
    archived: bool | None = None
    featured: bool | None = None
    order: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    open_to_collaborators: bool | None = None
    accepting_sponsors: bool | None = None
    collaborator_count: int | None = Field(default=None, ge=1)
    enthusiasm_level: EnthusiasmLevel | None = None

class ProjectRead(ProjectBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

class ProjectResponse(SQLModel):
    project: ProjectRead
    message: str | None = None

class ProjectListResponse(SQLModel):
    projects: list[ProjectRead]

class ProjectOrderUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_ids: list[int] = PydanticField(alias="projectIds")
