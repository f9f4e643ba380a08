# ecocatalog/auth/service.py

from datetime import timedelta, datetime, timezone
from typing import Annotated, Optional
from uuid import UUID, uuid4
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import jwt
from jwt import PyJWTError

from . import models
from .. import denylist_service
from ..core.config import settings
from ..core.exceptions import UnauthorizedError, ConflictError, StorageUnavailableError
from ..entities.user import User
from ..logging import logger
from ..users.models import UserResponse
from ..users.service import UserService
from ..utils.password_utils import verify_password, get_password_hash

# --- Configuration ---
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

oauth2_bearer = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")
optional_oauth2_bearer = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


def register_user(db: Session, register_user_request: models.RegisterUserRequest) -> User:
    """Creates a new account; the e-mail address must not be taken."""
    existing_user = UserService.get_user_by_email(db, register_user_request.email)
    if existing_user:
        raise ConflictError("User already exists", context={"email": register_user_request.email})

    try:
        user = User(
            id=uuid4(),
            name=register_user_request.name,
            email=register_user_request.email,
            password_hash=get_password_hash(register_user_request.password),
            age=register_user_request.age,
            gender=register_user_request.gender,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Lost a race against a concurrent signup for the same address
        db.rollback()
        raise ConflictError("User already exists", context={"email": register_user_request.email})
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Registration failed: {e}")
        raise StorageUnavailableError("register user", e) from e

    logger.info(f"Successfully registered user: {user.email}")
    return user


def authenticate_user(email: str, password: str, db: Session) -> User:
    """Authenticates a user with email and password."""
    user = UserService.get_user_by_email(db, email)
    if not user or not user.password_hash:
        raise UnauthorizedError("Invalid credentials")

    if not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for: {email}")
        raise UnauthorizedError("Invalid credentials")

    return user


def create_access_token(email: str, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Creates a new JWT access token with a unique ID (jti)."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    encode = {
        'sub': email,
        'id': str(user_id),
        'exp': expire,
        'scope': 'access_token',
        'jti': str(uuid4()),
    }
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def build_auth_response(user: User) -> models.AuthResponse:
    access_token = create_access_token(email=user.email, user_id=user.id)
    return models.AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        token_type="bearer",
    )


def decode_token(token: str, verify_exp: bool = True) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"verify_exp": verify_exp})
    except PyJWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise UnauthorizedError("Invalid token")


def verify_token(token: str) -> models.TokenData:
    """Decodes and verifies an access token, and checks if it's denylisted."""
    payload = decode_token(token)

    # Check token scope
    if payload.get('scope') != 'access_token':
        raise UnauthorizedError("Invalid token scope")

    # Check JTI
    jti = payload.get('jti')
    if not jti:
        raise UnauthorizedError("Token is missing JTI.")

    # Check if token is denylisted
    if denylist_service.is_token_denylisted(jti):
        raise UnauthorizedError("Token has been revoked.")

    # Check user ID
    user_id = payload.get('id')
    if not user_id:
        raise UnauthorizedError("User ID not found in token.")

    try:
        UUID(user_id)
    except ValueError:
        raise UnauthorizedError("Invalid token")

    return models.TokenData(user_id=user_id, jti=jti)


def revoke_token(token: str) -> bool:
    """Denylists a token for the rest of its lifetime; False if already expired."""
    payload = decode_token(token, verify_exp=False)
    jti = payload.get('jti')
    exp = payload.get('exp')
    if not jti or not exp:
        raise UnauthorizedError("Token is malformed.")

    now = datetime.now(timezone.utc).timestamp()
    if now >= exp:
        logger.info(f"Logout with already expired token for user {payload.get('id')}.")
        return False

    denylist_service.add_token_to_denylist(jti, timedelta(seconds=int(exp - now) + 1))
    logger.info(f"User {payload.get('id')} logged out. Token JTI {jti} denylisted.")
    return True


def get_current_user(token: Annotated[str, Depends(oauth2_bearer)]) -> models.TokenData:
    """FastAPI dependency to get the current user from a token."""
    return verify_token(token)


def get_optional_user(token: Annotated[Optional[str], Depends(optional_oauth2_bearer)]) -> Optional[models.TokenData]:
    """Like ``get_current_user`` but yields None for anonymous requests."""
    if not token:
        return None
    return verify_token(token)


CurrentUser = Annotated[models.TokenData, Depends(get_current_user)]
OptionalUser = Annotated[Optional[models.TokenData], Depends(get_optional_user)]
