from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field, field_validator
from sqlalchemy.orm import Session
from homepa.core.database import get_db
from homepa.api.dependencies import get_current_user
from homepa.api.schemas import CamelModel, SuccessResponse, Timestamps
from homepa.models.user import User
from homepa.services.memo_service import memo_service

router = APIRouter(prefix="/memos", tags=["memos"])

# Used for both "missing" and "owned by someone else" so ids cannot be probed
MEMO_NOT_FOUND_MESSAGE = "Memo not found or you do not have permission"


class MemoWrite(CamelModel):
    content: str
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please enter the memo content")
        return value.strip()

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> Any:
        # Non-list tags are ignored rather than rejected
        if value is None or not isinstance(value, list):
            return []
        return value


class MemoResponse(Timestamps):
    id: int
    user_id: int
    content: str
    category: str
    tags: List[str]
    is_processed: bool
    extracted_info: Optional[Dict[str, Any]] = None


@router.get("", response_model=List[MemoResponse])
def list_memos(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all memos for current user, newest first"""
    return memo_service.list_memos(db, current_user.id)


@router.post("", response_model=MemoResponse, status_code=status.HTTP_201_CREATED)
def create_memo(
    memo: MemoWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new memo"""
    return memo_service.create_memo(db, current_user.id, memo.content, memo.category, memo.tags)


@router.put("/{memo_id}", response_model=MemoResponse)
def update_memo(
    memo_id: int,
    memo: MemoWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a memo"""
    db_memo = memo_service.update_memo(db, current_user.id, memo_id, memo.content, memo.category, memo.tags)
    if not db_memo:
        raise HTTPException(status_code=404, detail=MEMO_NOT_FOUND_MESSAGE)
    return db_memo


@router.delete("/{memo_id}", response_model=SuccessResponse)
def delete_memo(
    memo_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a memo"""
    if not memo_service.delete_memo(db, current_user.id, memo_id):
        raise HTTPException(status_code=404, detail=MEMO_NOT_FOUND_MESSAGE)
    return {"success": True, "message": "Memo deleted"}
