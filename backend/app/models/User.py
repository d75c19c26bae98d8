from datetime import datetime, timezone
from sqlmodel import Field, SQLModel
from pydantic import BaseModel, EmailStr

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# ==========================================
# SQLModel (Database Entity + Base Pydantic)
# ==========================================
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, nullable=False) # Stored lower-cased
    name: str = Field(nullable=False)
    hashed_password: str = Field(nullable=False)
    is_active: bool = Field(default=True)

    # Profile
    bio: str = Field(default="")
    location: str = Field(default="")
    phone: str = Field(default="")
    linkedin: str = Field(default="")
    github: str = Field(default="")
    twitter: str = Field(default="")
    website: str = Field(default="")

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive via API on registration.
# Fields are optional here so that a missing one is reported by name.
class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None

# Properties to receive via API on login
class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None

# Identity returned alongside tokens
class UserPublic(SQLModel):
    id: int
    email: str
    name: str

# Full profile
class ProfileResponse(SQLModel):
    id: int
    email: str
    name: str
    bio: str
    location: str
    phone: str
    linkedin: str
    github: str
    twitter: str
    website: str
    created_at: datetime
    updated_at: datetime

class ProfileUpdate(SQLModel):
    name: str | None = None
    email: EmailStr | None = None
    bio: str | None = None
    location: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    twitter: str | None = None
    website: str | None = None
