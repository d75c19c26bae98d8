import http
import logging
from typing import Annotated
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from ..core.database import get_session
from ..models.User import LoginRequest, RegisterRequest, User, UserPublic
from ..models.Token import AuthResponse, RefreshRequest, RefreshResponse, MessageResponse
from .service import authenticate_user, get_current_user, issue_tokens, refresh_access_token, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

def _action(method: str, path: str, code: int) -> str:
    return f"{method} {path} {code} {http.HTTPStatus(code).phrase}"

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: RegisterRequest, session: Session = Depends(get_session)):
    """
    Create an account and sign it in.
    """
    user = await register_user(session, register_data.email, register_data.password, register_data.name)
    logger.info(_action("POST", "/api/auth/register", status.HTTP_201_CREATED))
    return {**issue_tokens(user), "message": "User registered successfully"}

@router.post("/login", response_model=AuthResponse)
async def login(login_data: LoginRequest, session: Session = Depends(get_session)):
    """
    Login with email and password to get an access and a refresh token.
    """
    user = await authenticate_user(session, login_data.email, login_data.password)
    logger.info(_action("POST", "/api/auth/login", status.HTTP_200_OK))
    return {**issue_tokens(user), "message": "Login successful"}

@router.post("/refresh", response_model=RefreshResponse)
async def refresh(refresh_data: RefreshRequest, session: Session = Depends(get_session)):
    """
    Exchange a valid refresh token for a new access token bound to the same user.
    """
    access_token = await refresh_access_token(session, refresh_data.refresh_token)
    logger.info(_action("POST", "/api/auth/refresh", status.HTTP_200_OK))
    return {"accessToken": access_token, "message": "Token refreshed successfully"}

@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Logout. Tokens are stateless, so nothing is invalidated server-side.
    """
    logger.info(_action("POST", "/api/auth/logout", status.HTTP_200_OK))
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=UserPublic)
async def read_me(current_user: Annotated[User, Depends(get_current_user)]):
    """
    Identity of the bearer of the access token.
    """
    return current_user
