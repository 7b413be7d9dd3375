# backend/app/core/db.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from . import config

DSN = config.DATABASE_URL
if not DSN or not DSN.strip():
    raise RuntimeError("DATABASE_URL is not set.")

url = make_url(DSN)
engine_kwargs = dict(pool_pre_ping=True)

# Dialect specific settings
backend = url.get_backend_name()  # e.g. 'sqlite', 'postgresql'
if backend.startswith("sqlite"):
    # No thread check; in-memory databases must share a single connection
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        engine_kwargs["poolclass"] = StaticPool
elif backend.startswith("postgresql"):
    engine_kwargs.update(pool_size=5, max_overflow=10)

engine = create_engine(DSN, **engine_kwargs)

if backend.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def _sqlite_fk_on(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
