"""
Database connection management with bounded retries.

The store connection is owned by an explicit manager object instead of
module-level reconnect counters. Retry policy is injected through
ConnectionRetryConfig (normally read from settings), and both the
connection handle and the sleep function can be swapped out so exhaustion
can be simulated in tests.

Usage:
    from core.connection import DatabaseConnectionManager

    manager = DatabaseConnectionManager.from_settings()
    manager.ensure_connected()  # raises StoreUnavailableError when exhausted

    # Cheap single probe, no retries (health checks)
    if not manager.is_available():
        ...

Design Notes:
    - Fixed backoff between attempts; the attempt count is bounded
    - Each attempt closes the stale handle before probing with SELECT 1
    - The last underlying error is attached to StoreUnavailableError details
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, connections

from core.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionRetryConfig:
    """Retry policy for establishing the store connection."""

    max_attempts: int = 5
    """Connection attempts before giving up."""

    backoff_seconds: float = 5.0
    """Fixed wait between consecutive attempts."""


class DatabaseConnectionManager:
    """
    Owns connection establishment for one database alias.

    Attributes:
        config: Retry policy
        alias: Django database alias being managed

    Example:
        manager = DatabaseConnectionManager(max_attempts=3, backoff_seconds=0.5)
        attempts = manager.ensure_connected()
    """

    def __init__(
        self,
        max_attempts: int = 5,
        backoff_seconds: float = 5.0,
        alias: str = "default",
        connection=None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the manager.

        Args:
            max_attempts: Connection attempts before giving up (at least 1)
            backoff_seconds: Seconds to wait between attempts
            alias: Database alias from settings.DATABASES
            connection: Connection handle; defaults to django.db.connections[alias]
            sleep: Function used to wait between attempts
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.config = ConnectionRetryConfig(
            max_attempts=max_attempts,
            backoff_seconds=backoff_seconds,
        )
        self.alias = alias
        self._connection = connection
        self._sleep = sleep

    @classmethod
    def from_settings(cls, alias: str = "default", **kwargs) -> DatabaseConnectionManager:
        """Build a manager from DATABASE_CONNECT_* settings."""
        return cls(
            max_attempts=settings.DATABASE_CONNECT_MAX_ATTEMPTS,
            backoff_seconds=settings.DATABASE_CONNECT_BACKOFF_SECONDS,
            alias=alias,
            **kwargs,
        )

    @property
    def connection(self):
        if self._connection is None:
            return connections[self.alias]
        return self._connection

    def _probe(self) -> None:
        with self.connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()

    def is_available(self) -> bool:
        """Single connectivity probe without retries."""
        try:
            self._probe()
        except DatabaseError as e:
            logger.warning(f"Database '{self.alias}' probe failed: {e}")
            return False
        return True

    def ensure_connected(self) -> int:
        """
        Establish a working connection, retrying with fixed backoff.

        Returns:
            Number of attempts it took to connect

        Raises:
            StoreUnavailableError: After max_attempts consecutive failures
        """
        last_error: DatabaseError | None = None

        for attempt in range(1, self.config.max_attempts + 1):
            try:
                self.connection.close()
                self._probe()
            except DatabaseError as e:
                last_error = e
                logger.warning(
                    f"Database '{self.alias}' connection attempt "
                    f"{attempt}/{self.config.max_attempts} failed: {e}"
                )
                if attempt < self.config.max_attempts:
                    self._sleep(self.config.backoff_seconds)
                continue

            if attempt > 1:
                logger.info(f"Database '{self.alias}' connected after {attempt} attempts")
            return attempt

        logger.error(
            f"Database '{self.alias}' unavailable after "
            f"{self.config.max_attempts} attempts"
        )
        raise StoreUnavailableError(
            "Database unavailable",
            details={
                "alias": self.alias,
                "attempts": self.config.max_attempts,
                "last_error": str(last_error),
            },
        )
