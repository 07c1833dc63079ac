"""
Base class for allocation engine components.

Provides common functionality for clock access, logging, and bounded
arithmetic shared by the selector, forecaster and balance analyzer.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from staffmind.platform.config import Settings, get_settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def clamp(value: float, low: float, high: float) -> float:
    """Bound a value to [low, high]."""
    return max(low, min(high, value))


class SchedulerBase(ABC):
    """
    Base class for all engine components.

    Provides:
    - Injected settings and clock
    - Per-class logger
    - Common utility methods
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the component.

        Args:
            settings: Engine settings, defaults to the cached application settings
            clock: Callable returning the current datetime
        """
        self.settings = settings or get_settings()
        self.clock = clock or utcnow
        self.logger = logging.getLogger(self.__class__.__name__)

    def now(self) -> datetime:
        """Get current datetime from the configured clock."""
        return self.clock()

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """
        Main entry point for the component.

        Must be implemented by subclasses.
        """
        pass
