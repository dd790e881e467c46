from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from homepa.models.event import Event


class EventService:
    """Owner-scoped access to calendar events."""

    @staticmethod
    def list_events(
        db: Session,
        user_id: int,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> List[Event]:
        """
        Events for a user ordered by date, then start time.

        Events without a start time (all-day, no fixed time) come first
        within their date; ties fall back to creation order.
        """
        query = db.query(Event).filter(Event.user_id == user_id)
        if start is not None:
            query = query.filter(Event.date >= start)
        if end is not None:
            query = query.filter(Event.date <= end)
        return query.order_by(
            Event.date.asc(),
            Event.start_time.isnot(None).asc(),
            Event.start_time.asc(),
            Event.id.asc(),
        ).all()

    @staticmethod
    def get_event(db: Session, user_id: int, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(
            Event.id == event_id,
            Event.user_id == user_id
        ).first()

    @staticmethod
    def create_event(db: Session, user_id: int, data: Dict[str, Any]) -> Event:
        db_event = Event(user_id=user_id, **data)
        db.add(db_event)
        db.commit()
        db.refresh(db_event)
        return db_event

    @staticmethod
    def update_event(db: Session, user_id: int, event_id: int, data: Dict[str, Any]) -> Optional[Event]:
        db_event = EventService.get_event(db, user_id, event_id)
        if db_event is None:
            return None
        for field, value in data.items():
            setattr(db_event, field, value)
        db.commit()
        db.refresh(db_event)
        return db_event

    @staticmethod
    def delete_event(db: Session, user_id: int, event_id: int) -> bool:
        db_event = EventService.get_event(db, user_id, event_id)
        if db_event is None:
            return False
        db.delete(db_event)
        db.commit()
        return True


event_service = EventService()
