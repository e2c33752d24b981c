"""
Host Bridge
===========

Owns both directions between the host and the embedded surface.

Outbound
--------
Not a message stream: each push is a complete ``MapContent`` that replaces
whatever the surface shows.  Until the surface signals its initial load,
pushes are *deferred* -- only the latest one is kept, since it supersedes
the earlier ones -- and delivered as soon as ``mark_ready`` is called.
Pushes are serialised with a lock so the surface sees them in call order.

Inbound
-------
``receive`` decodes one raw message.  Malformed input is logged and
dropped (returns ``None``); it never raises into the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from courtnav.domain.content import MapContent
from courtnav.domain.errors import BridgeDecodeError, SurfaceLoadError

from .messages import BridgeMessage, decode_message
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class HostBridge:
    def __init__(self, surface: RenderSurface):
        self.surface = surface
        self.load_error: Optional[SurfaceLoadError] = None
        self._ready = False
        self._deferred: Optional[MapContent] = None
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self._ready

    async def push(self, content: MapContent) -> bool:
        """Render *content* now if the surface is ready.  False if deferred."""
        async with self._lock:
            if not self._ready:
                self._deferred = content
                logger.debug("Surface not ready; deferring %s content", content.mode.value)
                return False
            await self.surface.render(content)
            return True

    async def mark_ready(self) -> bool:
        """Surface finished loading.  Returns True if deferred content was flushed."""
        async with self._lock:
            self._ready = True
            self.load_error = None
            content, self._deferred = self._deferred, None
            if content is None:
                return False
            await self.surface.render(content)
            return True

    def mark_unloaded(self) -> None:
        """Surface is reloading; later pushes wait for the next load signal."""
        self._ready = False

    def mark_failed(self, message: str) -> SurfaceLoadError:
        self._ready = False
        self.load_error = SurfaceLoadError(message or "Map failed to load")
        logger.error("Surface failed to load: %s", self.load_error)
        return self.load_error

    def receive(self, raw: Union[str, bytes]) -> Optional[BridgeMessage]:
        try:
            return decode_message(raw)
        except BridgeDecodeError as exc:
            logger.warning("Dropping malformed bridge message: %s", exc)
            return None
