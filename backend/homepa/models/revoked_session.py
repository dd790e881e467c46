from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from homepa.core.database import Base


class RevokedSession(Base):
    """
    Session tokens invalidated by logout.

    Rows are only needed until the token would have expired anyway;
    the scheduler sweeps them after expires_at.
    """
    __tablename__ = "revoked_sessions"

    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), server_default=func.now())
