"""Base controller class for application controllers"""
from datetime import datetime
from typing import Callable, Optional

from src.utils.helpers import get_settings, generate_topic_id, utc_now
from src.utils.config import Config


class BaseController:
    """Base controller class with common functionality"""

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize base controller with app settings.

        Args:
            id_factory: Source of unique ids (defaults to UUID4 strings)
            clock: Source of timezone-aware timestamps (defaults to UTC now)
        """
        self.app_settings: Config = get_settings()
        self._id_factory = id_factory or generate_topic_id
        self._clock = clock or utc_now

    def generate_id(self) -> str:
        """Generate a new unique identifier."""
        return self._id_factory()

    def now(self) -> datetime:
        """Current timestamp from the configured clock."""
        return self._clock()
