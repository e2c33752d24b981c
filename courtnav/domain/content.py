"""
Map Content Generator
=====================

Turns the current navigation state into a **structured content descriptor**
(``MapContent``): markers, accuracy halo, route polyline, camera and the
route-info panel.  A renderer-specific adapter (see
``courtnav.bridge.renderer``) translates the descriptor into whatever the
embedded surface executes.

Rules
-----
* **Browse**: one marker per court.  Each court marker carries the exact
  ``courtMarkerClick`` payload it must post back when tapped.
* **Directions**: at most three visual elements -- user marker (+ halo),
  destination marker, route polyline.  Elements appear as their inputs
  become available; the polyline only once a route exists.
* Every call returns a complete descriptor.  The surface replaces its
  previous content with it, nothing is appended.  Identical input gives an
  equal descriptor.

Complexity: O(C) in Browse for C courts, O(G) in Directions for a route
geometry of G points.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from .distance import compass_point, initial_bearing_deg
from .entities import Coordinate, Court, Route, UserPosition
from .enums import BridgeMessageType, MarkerKind, NavigationMode
from .formatting import format_distance, format_duration

ROUTE_COLOR = "#a3e635"
COURT_ICON = "https://maps.google.com/mapfiles/ms/icons/green-dot.png"
DESTINATION_ICON = "https://maps.google.com/mapfiles/ms/icons/red-dot.png"
USER_MARKER_ID = "user"
DESTINATION_MARKER_ID = "destination"
ROUTE_POLYLINE_ID = "route"


# ── Descriptor ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Padding:
    top: int
    bottom: int
    left: int
    right: int


@dataclass(frozen=True)
class CameraBounds:
    south_west: Coordinate
    north_east: Coordinate
    padding: Padding


@dataclass(frozen=True)
class Camera:
    center: Coordinate
    zoom: int
    bounds: Optional[CameraBounds] = None


@dataclass(frozen=True)
class Marker:
    id: str
    kind: MarkerKind
    position: Coordinate
    title: str
    icon: Optional[str] = None
    icon_size: int = 40
    z_index: int = 0
    on_click: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class AccuracyHalo:
    center: Coordinate
    radius_meters: float
    color: str = ROUTE_COLOR
    fill_opacity: float = 0.2


@dataclass(frozen=True)
class Polyline:
    id: str
    path: tuple[Coordinate, ...]
    color: str = ROUTE_COLOR
    weight: int = 6
    opacity: float = 0.9
    geodesic: bool = True


@dataclass(frozen=True)
class InfoCallout:
    marker_id: str
    text: str


@dataclass(frozen=True)
class RoutePanel:
    origin_label: str
    destination_name: str
    distance_text: str
    duration_text: str
    is_approximate: bool
    heading: Optional[str] = None


@dataclass(frozen=True)
class MapContent:
    mode: NavigationMode
    camera: Camera
    markers: tuple[Marker, ...] = ()
    halo: Optional[AccuracyHalo] = None
    polyline: Optional[Polyline] = None
    callouts: tuple[InfoCallout, ...] = ()
    route_panel: Optional[RoutePanel] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Input ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MapInput:
    mode: NavigationMode
    courts: tuple[Court, ...] = ()
    destination: Optional[Court] = None
    user_position: Optional[UserPosition] = None
    route: Optional[Route] = None
    focus: Optional[Coordinate] = None


# ── Generator ─────────────────────────────────────────────────────────


@dataclass
class MapContentGenerator:
    default_center: Coordinate = field(
        default_factory=lambda: Coordinate(10.3173, 123.8854)
    )
    browse_zoom: int = 13
    directions_zoom: int = 12
    focus_zoom: int = 15
    padding: Padding = field(default_factory=lambda: Padding(50, 150, 30, 30))
    halo_radius_m: float = 50.0

    def generate(self, data: MapInput) -> MapContent:
        if data.mode is NavigationMode.DIRECTIONS:
            return self._directions(data)
        return self._browse(data)

    # -- Browse ------------------------------------------------------------

    def _browse(self, data: MapInput) -> MapContent:
        markers = tuple(self.court_marker(court) for court in data.courts)

        if data.focus is not None:
            camera = Camera(center=data.focus, zoom=self.focus_zoom)
        else:
            camera = Camera(
                center=self._mean_center(data.courts), zoom=self.browse_zoom
            )
        return MapContent(mode=NavigationMode.BROWSE, camera=camera, markers=markers)

    @staticmethod
    def court_marker(court: Court) -> Marker:
        return Marker(
            id=f"court:{court.id}",
            kind=MarkerKind.COURT,
            position=court.coordinate,
            title=court.name,
            icon=COURT_ICON,
            icon_size=40,
            on_click={
                "type": BridgeMessageType.COURT_MARKER_CLICK.value,
                "court": court.to_payload(),
            },
        )

    def _mean_center(self, courts: tuple[Court, ...]) -> Coordinate:
        if not courts:
            return self.default_center
        lat = sum(c.coordinate.lat for c in courts) / len(courts)
        lng = sum(c.coordinate.lng for c in courts) / len(courts)
        return Coordinate(lat, lng)

    # -- Directions --------------------------------------------------------

    def _directions(self, data: MapInput) -> MapContent:
        dest = data.destination
        if dest is None:
            raise ValueError("Directions content requires a destination court")

        markers: list[Marker] = []
        halo = None
        user = data.user_position

        if user is not None:
            markers.append(
                Marker(
                    id=USER_MARKER_ID,
                    kind=MarkerKind.USER,
                    position=user.coordinate,
                    title="Your Location",
                    icon=None,  # rendered as a filled circle
                    icon_size=12,
                    z_index=1000,
                )
            )
            halo = AccuracyHalo(center=user.coordinate, radius_meters=self.halo_radius_m)

        markers.append(
            Marker(
                id=DESTINATION_MARKER_ID,
                kind=MarkerKind.DESTINATION,
                position=dest.coordinate,
                title=dest.name or "Destination",
                icon=DESTINATION_ICON,
                icon_size=50,
                z_index=1001,
            )
        )
        callouts = (InfoCallout(DESTINATION_MARKER_ID, dest.name or "Destination"),)

        if user is None:
            camera = Camera(center=dest.coordinate, zoom=self.directions_zoom)
        else:
            camera = self._fit(user.coordinate, dest.coordinate)

        polyline = None
        panel = None
        if data.route is not None and user is not None:
            polyline = self._route_polyline(data.route)
            panel = self._route_panel(data.route, dest)

        return MapContent(
            mode=NavigationMode.DIRECTIONS,
            camera=camera,
            markers=tuple(markers),
            halo=halo,
            polyline=polyline,
            callouts=callouts,
            route_panel=panel,
        )

    def _fit(self, a: Coordinate, b: Coordinate) -> Camera:
        bounds = CameraBounds(
            south_west=Coordinate(min(a.lat, b.lat), min(a.lng, b.lng)),
            north_east=Coordinate(max(a.lat, b.lat), max(a.lng, b.lng)),
            padding=self.padding,
        )
        center = Coordinate((a.lat + b.lat) / 2, (a.lng + b.lng) / 2)
        return Camera(center=center, zoom=self.directions_zoom, bounds=bounds)

    @staticmethod
    def _route_polyline(route: Route) -> Polyline:
        if route.is_approximate:
            return Polyline(
                id=ROUTE_POLYLINE_ID, path=route.geometry, weight=5, opacity=0.8
            )
        return Polyline(id=ROUTE_POLYLINE_ID, path=route.geometry, weight=6, opacity=0.9)

    @staticmethod
    def _route_panel(route: Route, dest: Court) -> RoutePanel:
        heading = None
        if route.is_approximate:
            heading = compass_point(initial_bearing_deg(route.origin, route.destination))
        return RoutePanel(
            origin_label="Your Location",
            destination_name=dest.name or "Destination",
            distance_text=format_distance(route.distance_meters),
            duration_text=format_duration(route.duration_seconds),
            is_approximate=route.is_approximate,
            heading=heading,
        )
