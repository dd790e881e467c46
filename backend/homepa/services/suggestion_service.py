import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from homepa.models.suggestion import Suggestion

logger = logging.getLogger(__name__)

# Statuses a user may move a pending suggestion into
USER_TRANSITIONS = {"accepted", "rejected"}


class SuggestionService:
    @staticmethod
    def list_suggestions(
        db: Session,
        user_id: int,
        status_filter: Optional[str] = None,
        type_filter: Optional[str] = None,
    ) -> List[Suggestion]:
        query = db.query(Suggestion).filter(Suggestion.user_id == user_id)
        if status_filter is not None:
            query = query.filter(Suggestion.status == status_filter)
        if type_filter is not None:
            query = query.filter(Suggestion.type == type_filter)
        return query.order_by(Suggestion.created_at.desc(), Suggestion.id.desc()).all()

    @staticmethod
    def get_suggestion(db: Session, user_id: int, suggestion_id: int) -> Optional[Suggestion]:
        return db.query(Suggestion).filter(
            Suggestion.id == suggestion_id,
            Suggestion.user_id == user_id
        ).first()

    @staticmethod
    def create_suggestion(
        db: Session,
        user_id: int,
        type: str,
        content: str,
        sources: Optional[List[str]] = None,
        confidence: Optional[float] = None,
        timestamp: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Suggestion:
        db_suggestion = Suggestion(
            user_id=user_id,
            type=type,
            content=content.strip(),
            sources=list(sources or []),
            confidence=confidence,
            context_timestamp=timestamp or datetime.now(timezone.utc),
            status="pending",
            extra_metadata=metadata,
        )
        db.add(db_suggestion)
        db.commit()
        db.refresh(db_suggestion)
        return db_suggestion

    @staticmethod
    def set_status(db: Session, user_id: int, suggestion_id: int, new_status: str) -> Optional[Suggestion]:
        """
        Accept or reject a pending suggestion.

        Returns None when the suggestion does not exist for this user.
        """
        db_suggestion = SuggestionService.get_suggestion(db, user_id, suggestion_id)
        if db_suggestion is None:
            return None

        if new_status not in USER_TRANSITIONS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Status must be 'accepted' or 'rejected'"
            )
        if db_suggestion.status != "pending":
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Suggestion is already {db_suggestion.status}"
            )

        db_suggestion.status = new_status
        db.commit()
        db.refresh(db_suggestion)
        return db_suggestion

    @staticmethod
    def expire_stale(db: Session, ttl_hours: int, now: Optional[datetime] = None) -> int:
        """Move pending suggestions older than ttl_hours to expired"""
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(hours=ttl_hours)
        expired = (
            db.query(Suggestion)
            .filter(Suggestion.status == "pending", Suggestion.created_at < cutoff)
            .update({Suggestion.status: "expired"}, synchronize_session=False)
        )
        db.commit()
        return expired


suggestion_service = SuggestionService()
