from pydantic import BaseModel, ConfigDict, Field
from .User import UserPublic

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"

class TokenPayload(BaseModel):
    id: str # User ID
    type: str # "access" or "refresh"
    exp: int # Expiration time
    iat: int | None = None # Issued at time

class AuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    user: UserPublic
    message: str

class RefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")

class RefreshResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    message: str

class MessageResponse(BaseModel):
    message: str
