"""
Location backend driven by the connected client shell.

The host cannot read a phone's GPS itself: it sends ``requestPermission`` /
``requestPosition`` frames over the screen session and awaits the matching
``permission`` / ``position`` / ``positionError`` reply, correlated by
``requestId``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from courtnav.domain.entities import Coordinate, UserPosition
from courtnav.domain.errors import PositionUnavailable

from .position import LocationBackend

logger = logging.getLogger(__name__)

SendFrame = Callable[[dict[str, Any]], Awaitable[None]]


class RemoteLocationBackend(LocationBackend):
    def __init__(self, send: SendFrame):
        self._send = send
        self._pending: dict[str, asyncio.Future] = {}

    async def request_permission(self) -> bool:
        reply = await self._call("requestPermission")
        return bool(reply.get("granted"))

    async def current_position(self) -> UserPosition:
        reply = await self._call("requestPosition")
        if reply.get("event") == "positionError":
            raise PositionUnavailable(reply.get("message") or "Could not get your location")
        try:
            coordinate = Coordinate(float(reply["lat"]), float(reply["lng"]))
            accuracy = float(reply.get("accuracy") or 0.0)
        except (KeyError, TypeError, ValueError) as exc:
            raise PositionUnavailable(f"Invalid position fix: {exc}") from exc
        return UserPosition(
            coordinate=coordinate,
            accuracy_meters=accuracy,
            captured_at=datetime.now(timezone.utc),
        )

    def resolve(self, frame: dict[str, Any]) -> bool:
        """Hand a reply frame to its waiting request.  False if nobody waits."""
        future = self._pending.get(str(frame.get("requestId")))
        if future is None or future.done():
            logger.debug("Reply for unknown request %s", frame.get("requestId"))
            return False
        future.set_result(frame)
        return True

    def cancel_all(self) -> None:
        """Fail every outstanding request (client disconnected)."""
        for future in self._pending.values():
            if not future.done():
                future.set_exception(PositionUnavailable("Client disconnected"))
        self._pending.clear()

    async def _call(self, event: str) -> dict[str, Any]:
        request_id = uuid.uuid4().hex
        future = asyncio.get_running_loop().create_future()
        self._pending[request_id] = future
        try:
            await self._send({"event": event, "requestId": request_id})
            return await future
        finally:
            self._pending.pop(request_id, None)
