import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from homepa.core.config import settings

# CryptContext handles password hashing using bcrypt
# bcrypt salts every hash, so the same password never produces the same credential
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> tuple[str, str, datetime]:
    """
    Create a signed session token for a user.

    Returns the encoded token, its session id (jti) and its expiry.
    The jti is what logout records to revoke the session.
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.SESSION_MAX_AGE_DAYS)
    expire = datetime.now(timezone.utc) + expires_delta
    jti = uuid.uuid4().hex

    to_encode = {"sub": str(user_id), "jti": jti, "exp": expire}
    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, jti, expire


def decode_session_token(token: str) -> Optional[dict]:
    """Decode and verify a session token"""
    try:
        # Verify signature and expiration automatically
        return jwt.decode(token, settings.SECRET_KEY,
                          algorithms=[settings.ALGORITHM])
    except JWTError:
        # Expired, tampered with, or signed with another key
        return None


def clear_session_cookie(response) -> None:
    """Expire the session cookie with the same attributes it was set with"""
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
