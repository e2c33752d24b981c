"""Domain enumerations and state-transition rules."""

import enum


class NavigationMode(str, enum.Enum):
    BROWSE = "BROWSE"
    DIRECTIONS = "DIRECTIONS"


class NavigationState(str, enum.Enum):
    BROWSE = "BROWSE"
    REQUESTING_POSITION = "REQUESTING_POSITION"
    DIRECTIONS_READY = "DIRECTIONS_READY"
    DIRECTIONS_ERROR = "DIRECTIONS_ERROR"

    @property
    def mode(self) -> NavigationMode:
        if self is NavigationState.BROWSE:
            return NavigationMode.BROWSE
        return NavigationMode.DIRECTIONS


# State machine: maps current state -> set of valid next states
NAVIGATION_TRANSITIONS: dict[NavigationState, set[NavigationState]] = {
    NavigationState.BROWSE: {NavigationState.REQUESTING_POSITION},
    NavigationState.REQUESTING_POSITION: {
        NavigationState.DIRECTIONS_READY,
        NavigationState.DIRECTIONS_ERROR,
        NavigationState.BROWSE,
    },
    NavigationState.DIRECTIONS_READY: {NavigationState.BROWSE},
    NavigationState.DIRECTIONS_ERROR: {
        NavigationState.REQUESTING_POSITION,
        NavigationState.BROWSE,
    },
}


class MarkerKind(str, enum.Enum):
    COURT = "COURT"
    USER = "USER"
    DESTINATION = "DESTINATION"


class BridgeMessageType(str, enum.Enum):
    COURT_MARKER_CLICK = "courtMarkerClick"
