# taskvibe/core/config.py
import secrets
from typing import List, Literal, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment settings
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"

    # API settings
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 1 week, same as the session TTL
    JWT_ALGORITHM: str = "HS256"

    # CORS settings
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Storage settings
    STORAGE_BACKEND: Literal["database", "memory"] = "database"
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///./taskvibe.db"

    # Gamification settings
    XP_IMMEDIATE_TASK: int = 15
    XP_MEDIUM_TASK: int = 10
    XP_DELAYED_TASK: int = 5
    XP_PER_LEVEL: int = 100
    RECENT_ACHIEVEMENTS_LIMIT: int = 3

    # Feature flags
    ENABLE_STREAKS: bool = False

    # Offline login
    OFFLINE_USER_ID: str = "offline-user"
    OFFLINE_USER_EMAIL: str = "offline@taskvibe.local"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


# Create settings instance
settings = Settings()
