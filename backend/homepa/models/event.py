from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from homepa.core.database import Base

IMPORTANCE_LEVELS = ("low", "medium", "high", "critical")
RECURRENCE_TAGS = ("none", "daily", "weekly", "monthly")


class Event(Base):
    """
    A scheduled calendar entry owned by one user.

    Dates and times are kept as the strings the calendar works with
    (YYYY-MM-DD and HH:MM), which also sort correctly as text.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    date = Column(String(10), nullable=False, index=True)
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    is_all_day = Column(Boolean, nullable=False, default=False)
    is_no_duration = Column(Boolean, nullable=False, default=False)
    importance = Column(String, nullable=False, default="medium")
    location = Column(String, nullable=True)
    # Stored for the calendar UI; occurrences are never expanded server-side
    recurrence = Column(String, nullable=False, default="none")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", backref="events")
