# backend/app/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.api import ok
from app.core.db import get_db
from app.core.security import get_current_user
from app.models import Profile
from app.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    summary = dashboard_summary(db)
    meta = {"welcome": current.full_name or "User"}
    return ok(summary, meta=meta)
