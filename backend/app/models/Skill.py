from enum import Enum
from datetime import datetime
from sqlmodel import Field, SQLModel
from .User import utcnow

class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

class SkillBase(SQLModel):
    name: str
    category: str
    experience_level: ExperienceLevel = Field(default=ExperienceLevel.INTERMEDIATE)
    years_of_experience: int = Field(default=0, ge=0)
    description: str | None = None
    featured: bool = Field(default=False)
    display_order: int = Field(default=0)

class Skill(SkillBase, table=True):
    __tablename__ = "skills"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

class SkillCreate(SkillBase):
    pass

class SkillUpdate(SQLModel):
    name: str | None = None
    category: str | None = None
    experience_level: ExperienceLevel | None = None
    years_of_experience: int | None = Field(default=None, ge=0)
    description: str | None = None
    featured: bool | None = None
    display_order: int | None = None

class SkillRead(SkillBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
