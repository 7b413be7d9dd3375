# backend/app/main.py
import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import config
from app.core.logging_setup import configure_logging
from app.core.db import get_db, engine, Base
from app.core.errors import AppError, AuthRequired
from app.core.api import ok, fail, UTF8JSONResponse
from app.schemas.common import field_errors
from app import models  # noqa: F401  (fills Base.metadata)

# --- Routers ---
from app.routers.auth import router as auth_router
from app.routers.suppliers import router as suppliers_router
from app.routers.products import router as products_router
from app.routers.purchase import router as purchase_router
from app.routers.dashboard import router as dashboard_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Procurement Hub", default_response_class=UTF8JSONResponse)


# -----------------------------
# Error envelope
# -----------------------------
@app.exception_handler(AppError)
async def app_error_to_envelope(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthRequired) else None
    return fail(exc.message, status_code=exc.status_code, meta=exc.meta or None, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_to_envelope(request: Request, exc: StarletteHTTPException):
    return fail(
        str(exc.detail) if exc.detail else exc.__class__.__name__,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_to_envelope(request: Request, exc: RequestValidationError):
    return fail("Invalid fields", status_code=422, meta={"fieldErrors": field_errors(exc.errors())})


# -----------------------------
# CORS (.env)
# -----------------------------
logger.info("CORS allow_origins = %s", config.CORS_ALLOW_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- startup: create missing tables in dev ----
@app.on_event("startup")
def _ensure_tables():
    if config.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine, checkfirst=True)


# ---- Health ----
@app.get("/health")
def health():
    return ok({"service": "Procurement Hub"})


@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    val = db.execute(text("SELECT 1")).scalar()
    return ok({"db": "ok", "select1": val})


# =========================
# Routers
# =========================
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(suppliers_router)
app.include_router(products_router)
app.include_router(purchase_router)
