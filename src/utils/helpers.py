"""Helper functions for the application"""
import uuid
from datetime import datetime, timezone

from src.utils.config import config, Config


def get_settings() -> Config:
    """
    Get application settings/configuration.

    Returns:
        Config instance with application settings
    """
    return config


def generate_topic_id() -> str:
    """Generate a globally unique topic identifier (UUID4 string)."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """
    Attach UTC to naive datetimes read back from the database.

    SQLite drops timezone information on storage, PostgreSQL keeps it.

    Args:
        value: Datetime from a database row (may be naive)

    Returns:
        Timezone-aware datetime, or None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
