"""
Navigation State Machine
========================

One instance per map screen.  It owns the embedded surface (through the
host bridge) and is the only component that writes to it.

States
------
``BROWSE`` -> ``REQUESTING_POSITION`` -> ``DIRECTIONS_READY``
                                   \\-> ``DIRECTIONS_ERROR`` -> (retry) ``REQUESTING_POSITION``
Any directions state -> ``BROWSE`` on close.

Directions session
------------------
1. Destination marker is rendered immediately; position is requested.
2. On a fix the user marker is rendered at once while the route request
   runs alongside; the polyline follows when the route resolves.
3. On ``PermissionDenied`` / ``PositionUnavailable`` the error is kept for
   the UI, the destination stays on the map, no route is drawn.

Stale-result guard
------------------
``session`` is incremented on every transition.  A position or route
result carrying an older session number is discarded: closing directions
implicitly cancels whatever was still in flight.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional

from courtnav.bridge.host import HostBridge
from courtnav.bridge.messages import CourtMarkerClick
from courtnav.domain.content import MapContentGenerator, MapInput
from courtnav.domain.entities import (
    Coordinate,
    Court,
    InvalidStateTransition,
    Route,
    UserPosition,
)
from courtnav.domain.enums import NAVIGATION_TRANSITIONS, NavigationMode, NavigationState
from courtnav.domain.errors import LocationError
from courtnav.domain.formatting import format_distance, format_duration
from courtnav.services.position import PositionProvider
from courtnav.services.routing import RouteService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationSnapshot:
    """What the UI layer renders around the map."""

    state: NavigationState
    session: int
    destination: Optional[Court] = None
    user_position: Optional[UserPosition] = None
    route: Optional[Route] = None
    error: Optional[str] = None
    selected_court: Optional[Court] = None
    surface_error: Optional[str] = None

    @property
    def mode(self) -> NavigationMode:
        return self.state.mode

    @property
    def loading(self) -> bool:
        return self.state is NavigationState.REQUESTING_POSITION

    @property
    def route_pending(self) -> bool:
        return self.state is NavigationState.DIRECTIONS_READY and self.route is None

    def to_dict(self) -> dict[str, Any]:
        route = None
        if self.route is not None:
            route = {
                "distanceMeters": self.route.distance_meters,
                "durationSeconds": self.route.duration_seconds,
                "isApproximate": self.route.is_approximate,
                "distanceText": format_distance(self.route.distance_meters),
                "durationText": format_duration(self.route.duration_seconds),
            }
        return {
            "event": "state",
            "state": self.state.value,
            "mode": self.mode.value,
            "session": self.session,
            "loading": self.loading,
            "destination": self.destination.to_payload() if self.destination else None,
            "userPosition": (
                self.user_position.coordinate.to_dict() if self.user_position else None
            ),
            "route": route,
            "error": self.error,
            "selectedCourt": (
                self.selected_court.to_payload() if self.selected_court else None
            ),
            "surfaceError": self.surface_error,
        }


ChangeListener = Callable[[NavigationSnapshot], Awaitable[None]]


def _log_session_failure(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Directions session failed", exc_info=task.exception())


class NavigationStateMachine:
    def __init__(
        self,
        bridge: HostBridge,
        positions: PositionProvider,
        routes: RouteService,
        generator: Optional[MapContentGenerator] = None,
        on_change: Optional[ChangeListener] = None,
    ):
        self.bridge = bridge
        self.positions = positions
        self.routes = routes
        self.generator = generator or MapContentGenerator()
        self.on_change = on_change

        self.state = NavigationState.BROWSE
        self.session = 0
        self.courts: tuple[Court, ...] = ()
        self.destination: Optional[Court] = None
        self.user_position: Optional[UserPosition] = None
        self.route: Optional[Route] = None
        self.error: Optional[str] = None
        self.selected_court: Optional[Court] = None
        self.focus: Optional[Coordinate] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def mode(self) -> NavigationMode:
        return self.state.mode

    def snapshot(self) -> NavigationSnapshot:
        load_error = self.bridge.load_error
        return NavigationSnapshot(
            state=self.state,
            session=self.session,
            destination=self.destination,
            user_position=self.user_position,
            route=self.route,
            error=self.error,
            selected_court=self.selected_court,
            surface_error=str(load_error) if load_error else None,
        )

    # ── Inputs from the data layer / surface ─────────────────────────

    async def set_courts(self, courts: Iterable[Court]) -> None:
        self.courts = tuple(courts)
        if self.mode is NavigationMode.BROWSE:
            await self._render()

    async def on_surface_loaded(self) -> None:
        flushed = await self.bridge.mark_ready()
        if not flushed:
            await self._render()
        await self._notify()

    async def on_surface_reloading(self) -> None:
        self.bridge.mark_unloaded()

    async def on_surface_error(self, message: str) -> None:
        self.bridge.mark_failed(message)
        await self._notify()

    async def handle_bridge_message(self, raw: str) -> None:
        """Decode and apply one inbound message.  Bad input leaves state untouched."""
        message = self.bridge.receive(raw)
        if message is None:
            return
        if isinstance(message, CourtMarkerClick):
            if not await self.select_court(message.court):
                logger.debug("Ignoring marker click outside browse mode")

    # ── User actions ─────────────────────────────────────────────────

    async def select_court(self, court: Court, pan: bool = False) -> bool:
        """Open the floating detail view for *court*.  Never changes mode."""
        if self.mode is not NavigationMode.BROWSE:
            return False
        self.selected_court = court
        if pan:
            self.focus = court.coordinate
            await self._render()
        await self._notify()
        return True

    async def clear_selection(self) -> None:
        self.selected_court = None
        await self._notify()

    async def request_directions(self, court: Court) -> asyncio.Task:
        """
        Start a directions session to *court*.

        Returns the session task so callers may await the whole flow; the
        state is already ``REQUESTING_POSITION`` when this returns.
        """
        if self.state is not NavigationState.BROWSE:
            await self.close_directions()

        self.destination = court
        self.selected_court = None
        self.focus = None
        return await self._start_session()

    async def retry(self) -> asyncio.Task:
        if self.state is not NavigationState.DIRECTIONS_ERROR:
            raise InvalidStateTransition(f"Cannot retry from {self.state.value}")
        return await self._start_session()

    async def close_directions(self) -> None:
        if self.mode is NavigationMode.BROWSE:
            return
        self._transition(NavigationState.BROWSE)
        self.destination = None
        self.user_position = None
        self.route = None
        self.error = None
        await self._render()
        await self._notify()

    async def dispose(self) -> None:
        """Screen exit: invalidate any in-flight session."""
        self.session += 1
        self._task = None

    # ── Session flow ─────────────────────────────────────────────────

    async def _start_session(self) -> asyncio.Task:
        self._transition(NavigationState.REQUESTING_POSITION)
        self.user_position = None
        self.route = None
        self.error = None
        await self._render()
        await self._notify()
        self._task = asyncio.create_task(
            self._run_session(self.session, self.destination)
        )
        self._task.add_done_callback(_log_session_failure)
        return self._task

    async def _run_session(self, token: int, dest: Court) -> None:
        try:
            position = await self.positions.acquire()
        except LocationError as exc:
            if self._stale(token, "position error"):
                return
            self.error = str(exc)
            self._transition(NavigationState.DIRECTIONS_ERROR)
            await self._render()
            await self._notify()
            return

        if self._stale(token, "position"):
            return
        self.user_position = position
        self._transition(NavigationState.DIRECTIONS_READY)
        token = self.session

        route_task = asyncio.create_task(
            self.routes.route(position.coordinate, dest.coordinate)
        )
        try:
            await self._render()
            await self._notify()
        except BaseException:
            route_task.cancel()
            raise

        route = await route_task
        if self._stale(token, "route"):
            return
        self.route = route
        await self._render()
        await self._notify()

    def _stale(self, token: int, what: str) -> bool:
        if token != self.session:
            logger.info(
                "Discarding stale %s (session %d, current %d)", what, token, self.session
            )
            return True
        return False

    def _transition(self, new_state: NavigationState) -> None:
        allowed = NAVIGATION_TRANSITIONS.get(self.state, set())
        if new_state not in allowed:
            raise InvalidStateTransition(
                f"Cannot transition from {self.state.value} to {new_state.value}"
            )
        logger.info("Navigation %s -> %s", self.state.value, new_state.value)
        self.state = new_state
        self.session += 1

    # ── Output ───────────────────────────────────────────────────────

    def current_input(self) -> MapInput:
        if self.mode is NavigationMode.BROWSE:
            return MapInput(mode=NavigationMode.BROWSE, courts=self.courts, focus=self.focus)
        return MapInput(
            mode=NavigationMode.DIRECTIONS,
            destination=self.destination,
            user_position=self.user_position,
            route=self.route,
        )

    async def _render(self) -> None:
        await self.bridge.push(self.generator.generate(self.current_input()))

    async def _notify(self) -> None:
        if self.on_change is not None:
            await self.on_change(self.snapshot())
