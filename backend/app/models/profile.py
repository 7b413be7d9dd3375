from sqlalchemy import Column, String, Boolean, DateTime, CheckConstraint
from ..core.db import Base
from ._common import new_id, utcnow

ALLOWED_ROLES = ("admin", "user")


class Profile(Base):
    __tablename__ = "profiles"

    id              = Column(String(36),  primary_key=True, default=new_id)
    email           = Column(String(200), nullable=False, unique=True)
    full_name       = Column(String(200))
    role            = Column(String(20),  nullable=False, default="user")
    hashed_password = Column(String(255), nullable=False)
    is_active       = Column(Boolean,     nullable=False, default=True)
    created_at      = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at      = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("role in ('admin','user')", name="ck_profiles_role"),
    )
