from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import field_validator, model_validator
from sqlalchemy.orm import Session
from homepa.core.config import settings
from homepa.core.database import get_db
from homepa.api.dependencies import get_current_user
from homepa.api.schemas import CamelModel, SuccessResponse, Timestamps, check_date, check_time
from homepa.models.user import User
from homepa.services.event_service import event_service
from homepa.services.travel_service import travel_service

router = APIRouter(prefix="/events", tags=["events"])

EVENT_NOT_FOUND_MESSAGE = "Event not found or you do not have permission"

Importance = Literal["low", "medium", "high", "critical"]
Recurrence = Literal["none", "daily", "weekly", "monthly"]


class EventBase(CamelModel):
    title: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_all_day: bool = False
    is_no_duration: bool = False
    importance: Importance = "medium"
    location: Optional[str] = None
    recurrence: Recurrence = "none"

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value.strip()

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return check_date(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: Optional[str]) -> Optional[str]:
        return check_time(value)

    @field_validator("location")
    @classmethod
    def validate_location(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @model_validator(mode="after")
    def check_consistency(self):
        if self.is_all_day and self.is_no_duration:
            raise ValueError("An event cannot be both all-day and without a fixed time")
        # HH:MM strings compare correctly as text
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValueError("End time must not be earlier than start time")
        return self


class EventCreate(EventBase):
    pass


class EventUpdate(EventBase):
    pass


class EventResponse(Timestamps):
    id: int
    user_id: int
    title: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_all_day: bool
    is_no_duration: bool
    importance: str
    location: Optional[str] = None
    recurrence: str


class TrainSuggestionResponse(CamelModel):
    event_id: int
    title: str
    location: str
    start_time: str
    importance: str
    arrival_time: str
    departure_time: str
    duration_minutes: int


def _event_fields(event: EventBase) -> dict:
    return event.model_dump(by_alias=False)


@router.get("", response_model=List[EventResponse])
def list_events(
    start: Optional[str] = Query(None, description="First date to include (YYYY-MM-DD)"),
    end: Optional[str] = Query(None, description="Last date to include (YYYY-MM-DD)"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List events for current user ordered by date and start time"""
    try:
        start = check_date(start) if start else None
        end = check_date(end) if end else None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return event_service.list_events(db, current_user.id, start=start, end=end)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    event: EventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new event"""
    return event_service.create_event(db, current_user.id, _event_fields(event))


@router.get("/train-suggestions", response_model=List[TrainSuggestionResponse])
def train_suggestions(
    date: str = Query(..., description="Day to plan trips for (YYYY-MM-DD)"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Suggested departure/arrival times for the day's events that have a location"""
    try:
        day = check_date(date)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    events = event_service.list_events(db, current_user.id, start=day, end=day)
    return travel_service.suggest_for_events(events, settings.TRAIN_TRAVEL_MINUTES)


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a specific event"""
    event = event_service.get_event(db, current_user.id, event_id)
    if not event:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND_MESSAGE)
    return event


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    event_update: EventUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace an event's fields"""
    event = event_service.update_event(db, current_user.id, event_id, _event_fields(event_update))
    if not event:
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND_MESSAGE)
    return event


@router.delete("/{event_id}", response_model=SuccessResponse)
def delete_event(
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an event"""
    if not event_service.delete_event(db, current_user.id, event_id):
        raise HTTPException(status_code=404, detail=EVENT_NOT_FOUND_MESSAGE)
    return {"success": True, "message": "Event deleted"}
