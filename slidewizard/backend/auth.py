import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ALGORITHM, SECRET_KEY
from .db import email_exists, get_user_by_email, store_user
from .db_models import TokenData, User, UserCreate, UserInDB

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller; ``user`` is None for the anonymous variant"""

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @classmethod
    def anonymous(cls) -> 'SessionContext':
        return cls()


def credentials_exception(detail: str = 'Could not validate credentials') -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={'WWW-Authenticate': 'Bearer'},
    )


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    to_encode.update({'exp': expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _public_user(user: UserInDB) -> User:
    return User(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def create_user(user_data: UserCreate) -> User:
    """Create a new user"""
    if email_exists(user_data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Email already registered')

    stored_user = store_user(user_data, hash_password(user_data.password))
    logger.info(f'Registered user {stored_user.id}')
    return _public_user(stored_user)


def authenticate_user(email: str, password: str) -> Optional[UserInDB]:
    """Authenticate a user by email and password"""
    user = get_user_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def resolve_session(token: Optional[str]) -> SessionContext:
    """Map a bearer token to a session; any problem yields the anonymous session"""
    if not token:
        return SessionContext.anonymous()

    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info(f'Rejected bearer token: {str(e)}')
        return SessionContext.anonymous()

    token_data = TokenData(email=payload.get('sub'))
    if not token_data.email:
        return SessionContext.anonymous()

    user = get_user_by_email(email=token_data.email)
    if user is None or not user.is_active:
        return SessionContext.anonymous()

    return SessionContext(user=_public_user(user))


def get_session_context(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> SessionContext:
    """Dependency returning the caller's session, authenticated or not"""
    return resolve_session(credentials.credentials if credentials else None)


def require_user(session: SessionContext) -> User:
    if not session.is_authenticated:
        raise credentials_exception('Unauthorized')
    return session.user


def get_current_active_user(session: SessionContext = Depends(get_session_context)) -> User:
    """Dependency to get current authenticated user"""
    return require_user(session)
