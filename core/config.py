"""
TrainingMirror Configuration

Environment variables and application settings.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TrainingMirror"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",      # React dev server
        "http://localhost:5173",      # Vite dev server
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Landmarks below this visibility count as missing
    MIN_LANDMARK_VISIBILITY: float = 0.5

    # Squat thresholds (knee angle, degrees)
    SQUAT_DOWN_ANGLE: float = 100.0
    SQUAT_UP_ANGLE: float = 160.0
    SQUAT_DEEP_ANGLE: float = 70.0

    # Push-up thresholds (elbow angle, degrees)
    PUSHUP_DOWN_ANGLE: float = 70.0
    PUSHUP_UP_ANGLE: float = 160.0

    # Torso tilt from vertical (degrees)
    TORSO_TILT_THRESHOLD: float = 20.0

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()
