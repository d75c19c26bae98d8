from datetime import datetime, timedelta, timezone
from typing import Annotated
import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext
from sqlmodel import Session, select

from ..core.database import get_session
from ..core.errors import AuthenticationError, ValidationError
from ..core.settings import settings
from ..models.User import User, UserPublic
from ..models.Token import TokenPayload, TOKEN_TYPE_ACCESS, TOKEN_TYPE_REFRESH

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=102400,
    argon2__parallelism=8
)

# OAuth2 scheme (for extracting token from header).
# auto_error is off so a missing header is reported with our own error body.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password + settings.PASSWORD_PEPPER, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password + settings.PASSWORD_PEPPER)


def _create_token(user_id: int, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "id": str(user_id),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.ALGORITHM)

def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(user_id, TOKEN_TYPE_ACCESS, expires_delta)

def create_refresh_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _create_token(user_id, TOKEN_TYPE_REFRESH, expires_delta)

def decode_token(token: str, expected_type: str) -> TokenPayload:
    """
    Verify signature and expiry of a token and check that it is of the expected type.
    A refresh token is never accepted where an access token is required, and vice versa.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired.")
    except JWTError:
        raise AuthenticationError("Invalid token.")

    try:
        token_data = TokenPayload.model_validate(payload)
    except ValueError:
        raise AuthenticationError("Invalid token payload.")

    if token_data.type != expected_type:
        raise AuthenticationError("Invalid token type.")
    return token_data

def _user_id_from_payload(token_data: TokenPayload) -> int:
    try:
        return int(token_data.id)
    except ValueError:
        raise AuthenticationError("Invalid user identifier.")


async def get_current_user(token: Annotated[str | None, Depends(oauth2_scheme)], session: Session = Depends(get_session)) -> User:
    if not token:
        raise AuthenticationError("Access denied. No token provided.")

    token_data = decode_token(token, TOKEN_TYPE_ACCESS)
    user = session.get(User, _user_id_from_payload(token_data))
    if user is None:
        raise AuthenticationError("Access denied. User not found.")
    if not user.is_active:
        raise AuthenticationError("Account is inactive.")
    return user


def _require(value: str | None, field: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required", field=field)
    return value

def get_user_by_email(session: Session, email: str) -> User | None:
    statement = select(User).where(User.email == email.strip().lower())
    return session.exec(statement).first()

def issue_tokens(user: User) -> dict:
    return {
        "accessToken": create_access_token(user.id),
        "refreshToken": create_refresh_token(user.id),
        "user": UserPublic(id=user.id, email=user.email, name=user.name),
    }

async def register_user(session: Session, email: str | None, password: str | None, name: str | None) -> User:
    email = _require(email, "email", "Email")
    password = _require(password, "password", "Password")
    name = _require(name, "name", "Name")

    if get_user_by_email(session, email):
        raise ValidationError("User already exists with this email")

    user = User(
        email=email.strip().lower(),
        name=name.strip(),
        hashed_password=get_password_hash(password),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Registered user %s", user.id)
    return user

async def authenticate_user(session: Session, email: str | None, password: str | None) -> User:
    email = _require(email, "email", "Email")
    password = _require(password, "password", "Password")

    user = get_user_by_email(session, email)
    if not user or not user.is_active or not verify_password(password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")
    return user

async def refresh_access_token(session: Session, refresh_token: str | None) -> str:
    refresh_token = _require(refresh_token, "refreshToken", "Refresh token")
    try:
        token_data = decode_token(refresh_token, TOKEN_TYPE_REFRESH)
    except AuthenticationError as exc:
        logger.info("Refresh rejected: %s", exc.message)
        raise AuthenticationError("Invalid refresh token")

    user = session.get(User, _user_id_from_payload(token_data))
    if user is None or not user.is_active:
        raise AuthenticationError("Invalid refresh token")
    return create_access_token(user.id)
