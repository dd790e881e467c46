from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from homepa.core.database import Base


def empty_personal_info() -> dict:
    return {
        "preferences": {},
        "dailyRoutine": [],
        "locations": {"home": "", "work": "", "frequentPlaces": []},
    }


class User(Base):
    """
    User model representing application users.

    Stores authentication credentials and the personal-info bag used by
    suggestions (preferences, daily routine, locations).
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Always stored lowercase; unique index is the final guard against duplicates
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)
    personal_info = Column(JSON, nullable=False, default=empty_personal_info)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def to_public(self) -> dict:
        """Identity fields safe to return to clients."""
        return {"id": self.id, "email": self.email, "name": self.name}
