from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel
from .User import utcnow

DEFAULT_HEADER_TEXT = "Chronos Archive"
DEFAULT_HERO_BACKGROUND = "from-blue-50 via-indigo-50 to-purple-50"
SOCIAL_NETWORKS = ("linkedin", "github", "twitter", "bluesky")

def empty_social_links() -> dict[str, str]:
    return {network: "" for network in SOCIAL_NETWORKS}

class HomeContentBase(SQLModel):
    header_text: str = Field(default=DEFAULT_HEADER_TEXT)
    name: str
    tagline: str
    bio: str
    profile_image_url: str | None = None
    years_experience: int = Field(default=0, ge=0)
    core_expertise: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    social_links: dict[str, str] = Field(default_factory=empty_social_links, sa_column=Column(JSON))
    hero_background_color: str = Field(default=DEFAULT_HERO_BACKGROUND)

class HomeContent(HomeContentBase, table=True):
    __tablename__ = "home_content"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

# ==========================================
# DTOs
# ==========================================
class HomeContentUpdate(SQLModel):
    header_text: str | None = None
    name: str | None = None
    tagline: str | None = None
    bio: str | None = None
    profile_image_url: str | None = None
    years_experience: int | None = Field(default=None, ge=0)
    core_expertise: list[str] | None = None
    social_links: dict[str, str] | None = None
    hero_background_color: str | None = None

class CollaboratorGroup(SQLModel):
    total: int
    subcategories: dict[str, int]

# id and timestamps are empty while nothing has been saved yet
class HomeContentRead(HomeContentBase):
    id: int | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    collaborator_stats: dict[str, CollaboratorGroup] = Field(default_factory=dict)

class HomeContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    home_content: HomeContentRead = PydanticField(alias="homeContent")
    message: str | None = None
