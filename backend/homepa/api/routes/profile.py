from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import field_validator
from sqlalchemy.orm import Session
from homepa.core.database import get_db
from homepa.api.dependencies import get_current_user
from homepa.api.schemas import CamelModel, PersonalInfo, SuccessResponse, check_password_policy
from homepa.models.user import User
from homepa.services.user_service import user_service

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileResponse(CamelModel):
    id: int
    email: str
    name: str
    personal_info: PersonalInfo


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    personal_info: Optional[PersonalInfo] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Name cannot be empty")
        return value


class PasswordChange(CamelModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_policy(value)


@router.get("", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    """Current user with their personal info"""
    return current_user


@router.put("", response_model=ProfileResponse)
def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update display name and/or personal info"""
    personal_info = None
    if profile.personal_info is not None:
        # Only the keys the client sent; the rest stay as stored
        personal_info = profile.personal_info.model_dump(by_alias=True, exclude_unset=True)
    return user_service.update_profile(db, current_user, name=profile.name, personal_info=personal_info)


@router.put("/password", response_model=SuccessResponse)
def change_password(
    change: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not user_service.change_password(db, current_user, change.current_password, change.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )
    return {"success": True, "message": "Password updated"}
