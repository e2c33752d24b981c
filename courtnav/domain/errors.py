"""
Error taxonomy for the navigation subsystem.

Only ``PermissionDenied``, ``PositionUnavailable`` and ``SurfaceLoadError``
ever reach the user.  ``RoutingServiceError`` is absorbed by the route
service and ``BridgeDecodeError`` is logged and dropped by the host bridge.
"""


class NavigationError(Exception):
    """Base class for every error raised by the navigation core."""


class LocationError(NavigationError):
    """The device position could not be obtained."""


class PermissionDenied(LocationError):
    def __init__(self, message: str = "Location permission denied"):
        super().__init__(message)


class PositionUnavailable(LocationError):
    def __init__(self, message: str = "Could not get your location"):
        super().__init__(message)


class RoutingServiceError(NavigationError):
    """The routing engine failed or returned no usable route."""


class BridgeDecodeError(NavigationError):
    """An inbound surface message could not be decoded."""


class SurfaceLoadError(NavigationError):
    """The embedded rendering surface failed to load."""
