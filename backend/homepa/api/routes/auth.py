import logging
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from pydantic import BaseModel, field_validator
from homepa.core.config import settings
from homepa.core.database import get_db
from homepa.api.dependencies import (
    authenticate_request,
    login_policy,
    rate_limit,
    register_policy,
)
from homepa.core.security import clear_session_cookie
from homepa.api.schemas import UserPublic, SuccessResponse, check_password_policy, normalize_email
from homepa.services.session_service import session_service
from homepa.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Same message for unknown email and wrong password, so responses
# cannot be used to find out which accounts exist
INVALID_CREDENTIALS_MESSAGE = "Incorrect email or password"
LOGIN_RATE_LIMIT_MESSAGE = "Too many login attempts. Please try again later."
REGISTER_RATE_LIMIT_MESSAGE = "Too many registration attempts. Please try again later."
LOGOUT_FAILED_MESSAGE = "Logout failed. Please try again later."


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_policy(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class AuthResponse(BaseModel):
    success: bool
    user: UserPublic


def set_session_cookie(response: Response, user_id: int) -> None:
    """Attach a fresh session token as an HTTP-only cookie"""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_service.issue(user_id),
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("register", register_policy, REGISTER_RATE_LIMIT_MESSAGE))],
)
def register(user_data: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    """Register a new user and start a session"""
    db_user = user_service.create_user(db, user_data.email, user_data.password, user_data.name)
    set_session_cookie(response, db_user.id)
    return {"success": True, "user": db_user.to_public()}


@router.post(
    "/login",
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit("login", login_policy, LOGIN_RATE_LIMIT_MESSAGE))],
)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Login and set the session cookie"""
    user = user_service.authenticate(db, credentials.email, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_MESSAGE,
        )

    set_session_cookie(response, user.id)
    logger.info(f"User {user.id} logged in")
    return {"success": True, "user": user.to_public()}


@router.get("/login")
def session_status(request: Request, db: Session = Depends(get_db)):
    """Report whether the request carries a valid session"""
    result = authenticate_request(request, db)
    if result.failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"authenticated": False},
        )
    if not result.authenticated:
        unauthenticated = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"authenticated": False},
        )
        if result.clear_cookie:
            clear_session_cookie(unauthenticated)
        return unauthenticated

    return {"authenticated": True, "user": result.user.to_public()}


@router.post("/logout", response_model=SuccessResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    """Revoke the current session and clear the cookie"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        try:
            session_service.revoke(db, token)
        except SQLAlchemyError as e:
            # The client-side session still ends
            logger.error(f"Could not revoke session: {e}", exc_info=True)
            failed = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": LOGOUT_FAILED_MESSAGE},
            )
            clear_session_cookie(failed)
            return failed
    clear_session_cookie(response)
    return {"success": True, "message": "Logged out"}
