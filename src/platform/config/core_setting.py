from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Box Office Seating'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Booking / seat-status service (canonical store)
    BOOKING_SERVICE_BASE_URL: str = 'http://localhost:3001/api'
    BOOKING_SERVICE_TIMEOUT_SECONDS: float = 10.0

    # Provisional-mark batching
    SYNC_DEBOUNCE_SECONDS: float = 0.5
    SYNC_BATCH_THRESHOLD: int = 20
    SYNC_BATCH_GRACE_SECONDS: float = 0.05

    # Move mode single/double activation window
    MOVE_DOUBLE_ACTIVATION_WINDOW_SECONDS: float = 0.3

    # Max pending change batches per registry subscriber before dropping
    REGISTRY_SUBSCRIBER_BUFFER: int = 100

    # Optional JSON layout; the built-in theater layout is used when unset
    SEAT_LAYOUT_FILE: Optional[Path] = None

    @field_validator('BOOKING_SERVICE_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip('/')
        return v

    @field_validator('SYNC_BATCH_THRESHOLD')
    @classmethod
    def threshold_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError('SYNC_BATCH_THRESHOLD must be >= 1')
        return v


settings = Settings()  # type: ignore
