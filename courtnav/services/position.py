"""
Position Provider
=================

Asks for foreground location permission, then for one high-accuracy fix.

Single-flight
-------------
While an acquisition is pending, further ``acquire()`` calls await the same
in-flight task instead of starting a new one, so the user never sees two
permission prompts.  Once it settles the next call starts over: positions
are never cached across directions sessions.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from courtnav.domain.entities import UserPosition
from courtnav.domain.errors import PermissionDenied, PositionUnavailable

logger = logging.getLogger(__name__)


class LocationBackend(ABC):
    """Platform permission system + position sensor."""

    @abstractmethod
    async def request_permission(self) -> bool:
        """Prompt for foreground location access.  True when granted."""

    @abstractmethod
    async def current_position(self) -> UserPosition:
        """Return one high-accuracy fix.  May raise ``PositionUnavailable``."""


class PositionProvider:
    def __init__(self, backend: LocationBackend, timeout_seconds: float = 15.0):
        self.backend = backend
        self.timeout_seconds = timeout_seconds
        self._inflight: Optional[asyncio.Task[UserPosition]] = None

    @property
    def pending(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def acquire(self) -> UserPosition:
        """Return the current position or raise a ``LocationError``."""
        if not self.pending:
            self._inflight = asyncio.create_task(self._acquire())
        else:
            logger.debug("Joining in-flight position request")
        # shield: one caller giving up must not cancel the shared request
        return await asyncio.shield(self._inflight)

    async def _acquire(self) -> UserPosition:
        try:
            granted = await self.backend.request_permission()
        except PositionUnavailable:
            raise
        except Exception as exc:
            logger.warning("Location permission request failed: %s", exc)
            raise PositionUnavailable() from exc
        if not granted:
            logger.info("Location permission denied")
            raise PermissionDenied()

        try:
            position = await asyncio.wait_for(
                self.backend.current_position(), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Position fix timed out after %.1fs", self.timeout_seconds
            )
            raise PositionUnavailable() from exc
        except PositionUnavailable:
            raise
        except Exception as exc:
            logger.warning("Position sensor error: %s", exc)
            raise PositionUnavailable() from exc

        logger.info(
            "Position acquired (%.5f, %.5f) ±%.0fm",
            position.coordinate.lat,
            position.coordinate.lng,
            position.accuracy_meters,
        )
        return position
