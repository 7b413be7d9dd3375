from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import (
    _extract_bearer_token, get_current_user, get_optional_user, require_roles
)
from ..models import Profile
from ..schemas.user import SignupIn, LoginIn, ProfileRead, Token
from ..services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_payload(session: dict) -> dict:
    return Token(
        access_token=session["access_token"],
        token_type=session["token_type"],
        user=ProfileRead.model_validate(session["user"]),
    ).model_dump(mode="json")


# ---- Endpoints ----
@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    session = auth_service.register(
        db, email=payload.email, password=payload.password, full_name=payload.full_name
    )
    return ok(_session_payload(session), status_code=status.HTTP_201_CREATED)


@router.post("/login")
def login(payload: LoginIn, db: Session = Depends(get_db)):
    session = auth_service.authenticate(db, email=payload.email, password=payload.password)
    return ok(_session_payload(session))


@router.post("/logout")
def logout(
    token: str = Depends(_extract_bearer_token),
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    auth_service.end_session(db, token=token)
    return ok({"signedOut": True, "signIn": "/auth/login"})


@router.get("/me")
def me(current: Profile = Depends(get_current_user)):
    return ok(ProfileRead.model_validate(current))


@router.get("/session")
def session(current: Optional[Profile] = Depends(get_optional_user)):
    user = ProfileRead.model_validate(current) if current else None
    return ok({"authenticated": current is not None, "user": user})


# ---- Admin only ----
@router.get("/users")
def list_users(
    current: Profile = Depends(require_roles("admin")),
    db: Session = Depends(get_db),
):
    rows: List[ProfileRead] = [
        ProfileRead.model_validate(p)
        for p in db.query(Profile).order_by(Profile.created_at.desc()).all()
    ]
    return ok(rows, meta=list_meta(rows))
