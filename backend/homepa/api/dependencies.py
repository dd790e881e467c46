import logging
from dataclasses import dataclass
from typing import Callable, Optional
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from homepa.core.config import settings
from homepa.core.database import get_db
from homepa.core.errors import AuthenticationError
from homepa.models.user import User
from homepa.services.rate_limiter import RateLimiter, RateLimitPolicy, rate_limiter
from homepa.services.session_service import session_service
from homepa.services.user_service import user_service

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Authentication required"
INVALID_SESSION_MESSAGE = "Invalid session"
AUTH_ERROR_MESSAGE = "Authentication error"


@dataclass
class AuthResult:
    authenticated: bool
    user: Optional[User] = None
    error: Optional[str] = None
    # The cookie names a session that can never work again
    clear_cookie: bool = False
    # The lookup itself failed (store unavailable, ...)
    failed: bool = False


def authenticate_request(request: Request, db: Session) -> AuthResult:
    """
    Resolve the session cookie on a request to a user.

    Never raises: every outcome is described by the returned AuthResult.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return AuthResult(authenticated=False, error=AUTH_REQUIRED_MESSAGE)

    try:
        user_id = session_service.resolve(db, token)
        user = user_service.get_by_id(db, user_id) if user_id is not None else None
    except SQLAlchemyError:
        logger.exception("Session lookup failed")
        return AuthResult(authenticated=False, error=AUTH_ERROR_MESSAGE, failed=True)

    if user is None:
        # Deleted user, tampered/expired token, or logged-out session
        return AuthResult(authenticated=False, error=INVALID_SESSION_MESSAGE, clear_cookie=True)

    return AuthResult(authenticated=True, user=user)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Get current authenticated user from the session cookie.

    This is a FastAPI dependency used in route handlers to require authentication.
    Raises AuthenticationError (401) when there is no usable session.
    """
    result = authenticate_request(request, db)
    if not result.authenticated:
        raise AuthenticationError(result.error or AUTH_REQUIRED_MESSAGE, clear_cookie=result.clear_cookie)
    return result.user


def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter; override this dependency to plug in a shared one"""
    return rate_limiter


def get_client_key(request: Request) -> str:
    if settings.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def login_policy() -> RateLimitPolicy:
    return RateLimitPolicy(max_requests=5, window_seconds=15 * 60)


def register_policy() -> RateLimitPolicy:
    if settings.is_production:
        return RateLimitPolicy(max_requests=3, window_seconds=15 * 60)
    return RateLimitPolicy(max_requests=10, window_seconds=5 * 60)


def rate_limit(scope: str, policy: Callable[[], RateLimitPolicy], message: str):
    """Build a dependency that rejects a client once it exceeds the policy"""

    async def dependency(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
        current = policy()
        key = f"{scope}:{get_client_key(request)}"
        decision = limiter.check(key, current.max_requests, current.window_seconds)
        if not decision.allowed:
            logger.warning(f"Rate limit exceeded for {key}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=message,
                headers={"Retry-After": str(decision.retry_after(limiter.now()))},
            )

    return dependency
