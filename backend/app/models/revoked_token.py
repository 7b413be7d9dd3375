from sqlalchemy import Column, String, DateTime, ForeignKey
from ..core.db import Base
from ._common import utcnow


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    # JWT "jti" claim of a signed-out session
    jti        = Column(String(64), primary_key=True)
    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
