import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from homepa.core.security import create_session_token, decode_session_token
from homepa.models.revoked_session import RevokedSession

logger = logging.getLogger(__name__)


class SessionService:
    """Issues, resolves and revokes cookie session tokens."""

    @staticmethod
    def issue(user_id: int) -> str:
        token, _, _ = create_session_token(user_id)
        return token

    @staticmethod
    def resolve(db: Session, token: str) -> Optional[int]:
        """
        Return the user id a token belongs to.

        None means the token is malformed, expired, or revoked.
        """
        payload = decode_session_token(token)
        if payload is None:
            return None

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None

        jti = payload.get("jti")
        if not jti:
            return None
        revoked = db.query(RevokedSession).filter(RevokedSession.jti == jti).first()
        if revoked is not None:
            return None
        return user_id

    @staticmethod
    def revoke(db: Session, token: str) -> bool:
        """Record a token as revoked so copies of the cookie stop working."""
        payload = decode_session_token(token)
        if payload is None or not payload.get("jti"):
            # Already unusable
            return False

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            user_id = None

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        db.add(RevokedSession(jti=payload["jti"], user_id=user_id, expires_at=expires_at))
        try:
            db.commit()
        except IntegrityError:
            # Logged out twice with the same cookie
            db.rollback()
            return False
        return True

    @staticmethod
    def sweep_expired(db: Session, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        deleted = (
            db.query(RevokedSession)
            .filter(RevokedSession.expires_at < now)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


session_service = SessionService()
