from __future__ import annotations
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import AuthRequired, StoreError
from app.core.security import hash_password, verify_password, create_access_token, decode_access_token
from app.models import Profile, RevokedToken

logger = logging.getLogger(__name__)


def issue_session(user: Profile) -> dict:
    token = create_access_token(sub=user.id, role=user.role)
    return {"access_token": token, "token_type": "bearer", "user": user}


def register(db: Session, *, email: str, password: str, full_name: str) -> dict:
    if db.query(Profile).filter(Profile.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already registered")

    user = Profile(
        email=email,
        full_name=full_name,
        role="user",
        is_active=True,
        hashed_password=hash_password(password),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is already registered")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("signup failed for %s", email)
        raise StoreError(str(getattr(e, "orig", None) or e))

    logger.info("profile %s registered", user.id)
    return issue_session(user)


def authenticate(db: Session, *, email: str, password: str) -> dict:
    user = db.query(Profile).filter(Profile.email == email).first()
    if (not user) or (not user.is_active) or (not verify_password(password, user.hashed_password)):
        logger.warning("failed sign-in for %s", email)
        raise AuthRequired("Invalid email or password", sign_in=config.SIGN_IN_PATH)
    return issue_session(user)


def end_session(db: Session, *, token: str) -> None:
    claims = decode_access_token(token)
    if db.get(RevokedToken, claims["jti"]) is not None:
        return
    try:
        db.add(RevokedToken(
            jti=claims["jti"],
            profile_id=claims["sub"],
            revoked_at=datetime.now(timezone.utc),
        ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("sign-out failed for %s", claims["sub"])
        raise StoreError(str(getattr(e, "orig", None) or e))
    logger.info("session %s ended for %s", claims["jti"], claims["sub"])
