"""
Inbound bridge messages (surface -> host).

Wire format: one JSON object per message, tagged by ``type``::

    {"type": "courtMarkerClick", "court": {...Court.to_payload()...}}

Other tags are reserved; an unknown tag is a decode error like invalid JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Union

from courtnav.domain.entities import Court
from courtnav.domain.enums import BridgeMessageType
from courtnav.domain.errors import BridgeDecodeError


@dataclass(frozen=True)
class CourtMarkerClick:
    court: Court
    type: BridgeMessageType = BridgeMessageType.COURT_MARKER_CLICK


BridgeMessage = Union[CourtMarkerClick]


def encode_message(message: BridgeMessage) -> str:
    return json.dumps({"type": message.type.value, "court": message.court.to_payload()})


def decode_message(raw: Union[str, bytes]) -> BridgeMessage:
    """Parse *raw* into a ``BridgeMessage`` or raise ``BridgeDecodeError``."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise BridgeDecodeError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise BridgeDecodeError(f"Expected an object, got {type(data).__name__}")

    try:
        kind = BridgeMessageType(data.get("type"))
    except (TypeError, ValueError) as exc:
        raise BridgeDecodeError(f"Unknown message type: {data.get('type')!r}") from exc

    if kind is BridgeMessageType.COURT_MARKER_CLICK:
        payload = data.get("court")
        if not isinstance(payload, dict):
            raise BridgeDecodeError("courtMarkerClick without a court object")
        try:
            court = Court.from_payload(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise BridgeDecodeError(f"Invalid court payload: {exc}") from exc
        return CourtMarkerClick(court=court)

    raise BridgeDecodeError(f"Unhandled message type: {kind.value}")
