from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field, field_validator
from sqlalchemy.orm import Session
from homepa.core.database import get_db
from homepa.api.dependencies import get_current_user
from homepa.api.schemas import CamelModel, Timestamps
from homepa.models.user import User
from homepa.services.suggestion_service import suggestion_service

router = APIRouter(prefix="/suggestions", tags=["suggestions"])

SUGGESTION_NOT_FOUND_MESSAGE = "Suggestion not found or you do not have permission"

SuggestionType = Literal["universal", "train", "task", "event"]
SuggestionStatus = Literal["pending", "accepted", "rejected", "expired"]


class SuggestionContext(CamelModel):
    source: List[str] = Field(default_factory=list)
    confidence: Optional[float] = Field(None, ge=0, le=1)
    timestamp: Optional[datetime] = None


class SuggestionCreate(CamelModel):
    type: SuggestionType
    content: str
    context: SuggestionContext = Field(default_factory=SuggestionContext)
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Content is required")
        return value.strip()


class SuggestionStatusUpdate(CamelModel):
    status: Literal["accepted", "rejected"]


class SuggestionResponse(Timestamps):
    id: int
    user_id: int
    type: str
    content: str
    context: SuggestionContext
    status: str
    metadata: Optional[Dict[str, Any]] = None


def _to_response(suggestion) -> SuggestionResponse:
    # Context is flattened into columns on the model
    return SuggestionResponse(
        id=suggestion.id,
        user_id=suggestion.user_id,
        type=suggestion.type,
        content=suggestion.content,
        context=SuggestionContext(
            source=suggestion.sources or [],
            confidence=suggestion.confidence,
            timestamp=suggestion.context_timestamp,
        ),
        status=suggestion.status,
        metadata=suggestion.extra_metadata,
        created_at=suggestion.created_at,
        updated_at=suggestion.updated_at,
    )


@router.get("", response_model=List[SuggestionResponse])
def list_suggestions(
    status_filter: Optional[SuggestionStatus] = Query(None, alias="status"),
    type_filter: Optional[SuggestionType] = Query(None, alias="type"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List suggestions for current user, newest first"""
    suggestions = suggestion_service.list_suggestions(db, current_user.id, status_filter, type_filter)
    return [_to_response(s) for s in suggestions]


@router.post("", response_model=SuggestionResponse, status_code=status.HTTP_201_CREATED)
def create_suggestion(
    suggestion: SuggestionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a new pending suggestion"""
    db_suggestion = suggestion_service.create_suggestion(
        db,
        current_user.id,
        type=suggestion.type,
        content=suggestion.content,
        sources=suggestion.context.source,
        confidence=suggestion.context.confidence,
        timestamp=suggestion.context.timestamp,
        metadata=suggestion.metadata,
    )
    return _to_response(db_suggestion)


@router.patch("/{suggestion_id}", response_model=SuggestionResponse)
def update_suggestion_status(
    suggestion_id: int,
    update: SuggestionStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept or reject a pending suggestion"""
    db_suggestion = suggestion_service.set_status(db, current_user.id, suggestion_id, update.status)
    if not db_suggestion:
        raise HTTPException(status_code=404, detail=SUGGESTION_NOT_FOUND_MESSAGE)
    return _to_response(db_suggestion)
