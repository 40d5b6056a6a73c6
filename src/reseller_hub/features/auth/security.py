import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
import bcrypt

from ...common.exceptions import UnauthorizedError
from ...core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from .models import UserRole
from .schemas import Principal

logger = logging.getLogger(__name__)

# auto_error is off so a missing token goes through authorize_reseller and
# yields the same 401 body as a bad one.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

def get_password_hash(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def resolve_principal(token: Optional[str]) -> Optional[Principal]:
    """Decodes a bearer token into a Principal, or None if it is unusable."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decoding error: {e}")
        return None

    sub = payload.get("sub")
    role = payload.get("role")
    if sub is None or role is None:
        logger.warning("Token is missing the sub or role claim.")
        return None
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        logger.warning(f"Token sub is not a user id: {sub!r}")
        return None
    return Principal(id=user_id, role=role)

def authorize_reseller(token: Optional[str]) -> Principal:
    """The single authorization guard shared by every reseller endpoint.

    Takes the raw bearer token and returns the calling reseller, or raises
    UnauthorizedError when the token is missing, invalid, expired or belongs
    to any other role. It never queries the database, so rejected callers
    cost nothing beyond the signature check.
    """
    principal = resolve_principal(token)
    if principal is None:
        raise UnauthorizedError()
    if principal.role != UserRole.RESELLER.value:
        logger.warning(f"User {principal.id} with role {principal.role!r} denied reseller access.")
        raise UnauthorizedError()
    return principal

async def get_current_reseller(token: Annotated[Optional[str], Depends(oauth2_scheme)]) -> Principal:
    return authorize_reseller(token)
