"""Render surfaces: where a ``MapContent`` descriptor ends up."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from courtnav.domain.content import MapContent

from .renderer import to_script


class RenderSurface(ABC):
    @abstractmethod
    async def render(self, content: MapContent) -> None:
        """Replace everything currently shown with *content*."""


class ScriptSurface(RenderSurface):
    """
    Surface living on the other end of a frame channel (e.g. a WebSocket).

    Sends both the structured descriptor and the script the hosted page
    executes, so a shell can either inject the script or apply the JSON.
    """

    def __init__(self, send: Callable[[dict[str, Any]], Awaitable[None]]):
        self._send = send

    async def render(self, content: MapContent) -> None:
        await self._send(
            {"event": "render", "content": content.to_dict(), "script": to_script(content)}
        )
