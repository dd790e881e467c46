from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Text, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from homepa.core.database import Base

SUGGESTION_TYPES = ("universal", "train", "task", "event")
SUGGESTION_STATUSES = ("pending", "accepted", "rejected", "expired")


class Suggestion(Base):
    """
    A proposed action surfaced to the user.

    Status moves pending -> accepted / rejected by the user, or
    pending -> expired by the scheduler. Every non-pending status is final.
    """
    __tablename__ = "suggestions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    # Context: which sources produced it, how confident, and when
    sources = Column(JSON, nullable=False, default=list)
    confidence = Column(Float, nullable=True)
    context_timestamp = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, nullable=False, default="pending", index=True)
    # "metadata" is reserved on declarative models
    extra_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", backref="suggestions")
