"""
Screen session: one connected client shell = one map screen.

Wires a ``NavigationStateMachine`` to a frame channel and dispatches
inbound frames by their ``event`` key::

    load / loadError / reload          surface lifecycle
    message{data}                      raw surface postMessage payload
    directions{courtId} / close / retry
    select{courtId, pan} / deselect / refresh
    permission / position / positionError   replies to location requests

Malformed or unknown frames are logged and ignored.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

from courtnav.bridge.host import HostBridge
from courtnav.bridge.surface import ScriptSurface
from courtnav.domain.content import MapContentGenerator
from courtnav.domain.entities import Court, InvalidStateTransition
from courtnav.infrastructure.repositories import CourtRepository
from courtnav.navigation.state_machine import NavigationStateMachine
from courtnav.services.position import PositionProvider
from courtnav.services.remote_location import RemoteLocationBackend
from courtnav.services.routing import RouteService

logger = logging.getLogger(__name__)

SendFrame = Callable[[dict[str, Any]], Awaitable[None]]

LOCATION_REPLIES = {"permission", "position", "positionError"}


class ScreenSession:
    def __init__(
        self,
        send: SendFrame,
        repo: CourtRepository,
        routes: RouteService,
        generator: Optional[MapContentGenerator] = None,
        position_timeout_seconds: float = 15.0,
    ):
        self._send_lock = asyncio.Lock()
        self._raw_send = send
        self.repo = repo
        self.location = RemoteLocationBackend(self.send)
        self.machine = NavigationStateMachine(
            bridge=HostBridge(ScriptSurface(self.send)),
            positions=PositionProvider(self.location, position_timeout_seconds),
            routes=routes,
            generator=generator,
            on_change=lambda snapshot: self.send(snapshot.to_dict()),
        )
        self._handlers = {
            "load": self._on_load,
            "loadError": self._on_load_error,
            "reload": self._on_reload,
            "message": self._on_message,
            "directions": self._on_directions,
            "close": self._on_close,
            "retry": self._on_retry,
            "select": self._on_select,
            "deselect": self._on_deselect,
            "refresh": self._on_refresh,
        }

    async def send(self, frame: dict[str, Any]) -> None:
        async with self._send_lock:
            await self._raw_send(frame)

    async def start(self) -> None:
        await self.machine.set_courts(await self.repo.list_active())
        await self.send(self.machine.snapshot().to_dict())

    async def close(self) -> None:
        self.location.cancel_all()
        await self.machine.dispose()

    async def handle(self, raw: str) -> None:
        try:
            frame = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring non-JSON frame")
            return
        if not isinstance(frame, dict):
            logger.warning("Ignoring non-object frame")
            return

        event = frame.get("event")
        if event in LOCATION_REPLIES:
            self.location.resolve(frame)
            return

        handler = self._handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            logger.warning("Ignoring unknown frame event %r", event)
            return
        try:
            await handler(frame)
        except InvalidStateTransition as exc:
            logger.warning("Rejected %s: %s", event, exc)

    # ── Handlers ─────────────────────────────────────────────────────

    async def _on_load(self, frame: dict[str, Any]) -> None:
        await self.machine.on_surface_loaded()

    async def _on_load_error(self, frame: dict[str, Any]) -> None:
        await self.machine.on_surface_error(str(frame.get("message") or ""))

    async def _on_reload(self, frame: dict[str, Any]) -> None:
        await self.machine.on_surface_reloading()

    async def _on_message(self, frame: dict[str, Any]) -> None:
        data = frame.get("data")
        if not isinstance(data, str):
            data = json.dumps(data)
        await self.machine.handle_bridge_message(data)

    async def _on_directions(self, frame: dict[str, Any]) -> None:
        court = self._court(frame.get("courtId"))
        if court is not None:
            await self.machine.request_directions(court)

    async def _on_close(self, frame: dict[str, Any]) -> None:
        await self.machine.close_directions()

    async def _on_retry(self, frame: dict[str, Any]) -> None:
        await self.machine.retry()

    async def _on_select(self, frame: dict[str, Any]) -> None:
        court = self._court(frame.get("courtId"))
        if court is not None:
            await self.machine.select_court(court, pan=bool(frame.get("pan")))

    async def _on_deselect(self, frame: dict[str, Any]) -> None:
        await self.machine.clear_selection()

    async def _on_refresh(self, frame: dict[str, Any]) -> None:
        await self.machine.set_courts(await self.repo.list_active())

    def _court(self, court_id: Any) -> Optional[Court]:
        for court in self.machine.courts:
            if court.id == str(court_id):
                return court
        logger.warning("Unknown court id %r", court_id)
        return None
