# backend/app/core/security.py
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import config
from .db import get_db
from .errors import AuthRequired
from ..models import Profile, RevokedToken

logger = logging.getLogger(__name__)

# OpenAPI docs only; the header is parsed by _extract_bearer_token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=config.SIGN_IN_PATH, auto_error=False)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)


# ---- Password helpers ----
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


# ---- JWT ----
def create_access_token(sub: str, role: str, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(tz=timezone.utc) + timedelta(
        minutes=expires_minutes or config.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload = {"sub": sub, "role": role, "jti": uuid.uuid4().hex, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALG)


def decode_access_token(token: str) -> dict:
    try:
        data = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALG])
    except JWTError:
        raise AuthRequired("Invalid or expired session", sign_in=config.SIGN_IN_PATH)
    if not data.get("sub") or not data.get("jti"):
        raise AuthRequired("Invalid or expired session", sign_in=config.SIGN_IN_PATH)
    return data


# ---- Lenient Authorization header parsing ----
def _bearer_token_or_none(request: Request) -> Optional[str]:
    """
    Parses the 'Authorization' header leniently:
      - extra spaces:      "Bearer   <JWT>"
      - doubled scheme:    "Bearer Bearer <JWT>"
      - quoted value:      Authorization: "Bearer <JWT>"
    """
    auth = request.headers.get("Authorization")
    if not auth:
        return None

    auth = str(auth).strip().strip('"').strip("'")
    scheme, param = get_authorization_scheme_param(auth)
    if not scheme or scheme.lower() != "bearer":
        return None

    token = (param or "").strip()
    if token.lower().startswith("bearer "):
        token = token.split(None, 1)[1].strip()

    # a JWT never contains spaces
    token = token.replace(" ", "")
    return token or None


def _extract_bearer_token(request: Request) -> str:
    token = _bearer_token_or_none(request)
    if not token:
        raise AuthRequired(sign_in=config.SIGN_IN_PATH)
    return token


def _resolve_user(db: Session, token: str) -> Profile:
    data = decode_access_token(token)
    if db.get(RevokedToken, data["jti"]) is not None:
        raise AuthRequired("Session has ended", sign_in=config.SIGN_IN_PATH)

    user = db.get(Profile, data["sub"])
    if not user or not user.is_active:
        logger.warning("token for unknown or inactive profile %s", data["sub"])
        raise AuthRequired(sign_in=config.SIGN_IN_PATH)
    return user


# ---- Current identity ----
def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(_extract_bearer_token),
) -> Profile:
    return _resolve_user(db, token)


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[Profile]:
    token = _bearer_token_or_none(request)
    if not token:
        return None
    try:
        return _resolve_user(db, token)
    except AuthRequired:
        return None


# ---- Role guard ----
def require_roles(*roles: str):
    UserDep = Annotated[Profile, Depends(get_current_user)]

    def _dep(current: UserDep) -> Profile:
        if current.role not in roles:
            raise HTTPException(status_code=403, detail="Not allowed for this role")
        return current
    return _dep
