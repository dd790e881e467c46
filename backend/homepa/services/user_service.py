import logging
from typing import Optional, Dict, Any
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from homepa.core.security import get_password_hash, verify_password
from homepa.models.user import User, empty_personal_info

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email address is already registered"


class UserService:
    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def create_user(db: Session, email: str, password: str, name: str) -> User:
        """Create a user with a hashed password and an empty personal-info bag"""
        email = email.lower()
        # Explicit check gives a clean 409 in the common case
        if UserService.get_by_email(db, email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL_MESSAGE)

        db_user = User(
            email=email,
            name=name.strip(),
            hashed_password=get_password_hash(password),
            personal_info=empty_personal_info(),
        )
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            # Two registrations for the same email raced past the check above
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_EMAIL_MESSAGE)
        db.refresh(db_user)
        logger.info(f"Registered user {db_user.id}")
        return db_user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, otherwise None"""
        user = UserService.get_by_email(db, email)
        if user is None or not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def update_profile(
        db: Session,
        user: User,
        name: Optional[str] = None,
        personal_info: Optional[Dict[str, Any]] = None,
    ) -> User:
        if name is not None:
            user.name = name.strip()
        if personal_info is not None:
            merged = empty_personal_info()
            merged.update(user.personal_info or {})
            personal_info = dict(personal_info)
            locations = personal_info.pop("locations", None)
            merged.update(personal_info)
            if locations is not None:
                merged["locations"] = {**merged.get("locations", {}), **locations}
            # Reassign so the JSON column is flagged as changed
            user.personal_info = merged
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def change_password(db: Session, user: User, current_password: str, new_password: str) -> bool:
        """Re-hash and store a new password; False when the current one is wrong"""
        if not verify_password(current_password, user.hashed_password):
            return False
        user.hashed_password = get_password_hash(new_password)
        db.commit()
        logger.info(f"Password changed for user {user.id}")
        return True


user_service = UserService()
