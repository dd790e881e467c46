from pydantic_settings import BaseSettings
from typing import Union


class Settings(BaseSettings):
    # Database connection string - can be overridden via .env file
    # Falls back to a local SQLite file so the API runs without a server
    DATABASE_URL: str = "sqlite:///./homepa.db"

    # "production" enables secure cookies and the strict registration limit
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Security settings
    # SECRET_KEY must be changed in production - used to sign session tokens
    # If compromised, attackers can forge sessions and impersonate any user
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"  # JWT signing algorithm - must match in security.py
    BCRYPT_ROUNDS: int = 10

    # Session cookie
    SESSION_COOKIE_NAME: str = "userId"
    SESSION_MAX_AGE_DAYS: int = 7

    # Only honour X-Forwarded-For when running behind a trusted proxy
    TRUST_PROXY_HEADERS: bool = False

    # Background jobs
    SCHEDULER_ENABLED: bool = True
    SUGGESTION_TTL_HOURS: int = 72

    # Assumed door-to-door travel time for train suggestions
    TRAIN_TRAVEL_MINUTES: int = 30

    # CORS origins - allows frontend to make requests to backend
    # Can be string (comma-separated) or list for flexibility
    CORS_ORIGINS: Union[str, list[str]
                        ] = "http://localhost:5173,http://localhost:3000"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_MAX_AGE_DAYS * 24 * 60 * 60

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS string into list"""
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return self.CORS_ORIGINS if isinstance(self.CORS_ORIGINS, list) else []

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True  # Environment variable names are case-sensitive


settings = Settings()
