"""
Google Maps adapter for the embedded surface.

The surface page defines ``window.courtnavApply(content)`` once; every
outbound push is just a call to it with the serialised descriptor.  Values
are never spliced into script text except through ``json.dumps``.
"""

from __future__ import annotations

import json
from string import Template
from urllib.parse import quote

from courtnav.domain.content import MapContent


def content_json(content: MapContent) -> str:
    # "</" would close an inline <script> block
    return json.dumps(content.to_dict(), separators=(",", ":")).replace("</", "<\\/")


def to_script(content: MapContent) -> str:
    return f"window.courtnavApply({content_json(content)}); true;"


_PAGE = Template(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="initial-scale=1.0, user-scalable=no">
  <style>
    html, body, #map { height: 100%; width: 100%; margin: 0; padding: 0; }
    #error { position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%);
             text-align: center; font-family: Arial, sans-serif; color: #666; display: none; }
    #route-info { position: fixed; bottom: 0; left: 0; right: 0; background: #fff;
                  padding: 20px 20px 30px; box-shadow: 0 -4px 20px rgba(0,0,0,0.15);
                  font-family: Arial, sans-serif; z-index: 1000; }
    #route-info .stats { display: flex; justify-content: space-around; background: #f5f5f5;
                         padding: 15px; border-radius: 10px; }
    #route-info .value { font-size: 22px; font-weight: bold; color: $color; text-align: center; }
    #route-info .note { text-align: center; margin-top: 10px; font-size: 11px; color: #999; }
  </style>
</head>
<body>
  <div id="map"></div>
  <div id="error"><p>Map failed to load</p><p id="error-msg"></p></div>
  <script>
    var map = null;
    var pending = null;
    var overlays = [];

    function showError(msg) {
      document.getElementById('error').style.display = 'block';
      document.getElementById('error-msg').innerText = msg;
    }
    window.onerror = function (msg) { showError(msg); return true; };
    function gm_authFailure() { showError('Maps authentication failed'); }

    function post(message) {
      var data = JSON.stringify(message);
      if (window.ReactNativeWebView && window.ReactNativeWebView.postMessage) {
        window.ReactNativeWebView.postMessage(data);
      } else if (window.parent !== window) {
        window.parent.postMessage(data, '*');
      }
    }

    function clearOverlays() {
      overlays.forEach(function (o) { o.remove(); });
      overlays = [];
    }

    function track(obj, remove) { overlays.push({ remove: remove || function () { obj.setMap(null); } }); }

    function text(tag, value, cls) {
      var el = document.createElement(tag);
      el.textContent = value;
      if (cls) el.className = cls;
      return el;
    }

    function addMarker(m, callouts) {
      var icon = m.icon
        ? { url: m.icon, scaledSize: new google.maps.Size(m.icon_size, m.icon_size) }
        : { path: google.maps.SymbolPath.CIRCLE, scale: m.icon_size, fillColor: '$color',
            fillOpacity: 1, strokeColor: '#fff', strokeWeight: 3 };
      var marker = new google.maps.Marker({
        position: m.position, map: map, title: m.title, icon: icon, zIndex: m.z_index
      });
      track(marker);
      if (m.on_click) {
        marker.addListener('click', function () { post(m.on_click); });
      }
      callouts.forEach(function (c) {
        if (c.marker_id !== m.id) return;
        var win = new google.maps.InfoWindow({ content: text('strong', c.text) });
        marker.addListener('click', function () { win.open(map, marker); });
        track(win, function () { win.close(); });
      });
    }

    function showRoutePanel(p) {
      var panel = document.createElement('div');
      panel.id = 'route-info';
      panel.appendChild(text('div', p.origin_label));
      panel.appendChild(text('div', p.destination_name));
      var stats = document.createElement('div');
      stats.className = 'stats';
      stats.appendChild(text('div', p.distance_text, 'value'));
      stats.appendChild(text('div', p.duration_text, 'value'));
      panel.appendChild(stats);
      if (p.is_approximate) {
        var note = 'Showing approximate route' + (p.heading ? ' (heading ' + p.heading + ')' : '');
        panel.appendChild(text('div', note, 'note'));
      }
      document.body.appendChild(panel);
      track(panel, function () { panel.remove(); });
    }

    window.courtnavApply = function (content) {
      if (!map) { pending = content; return; }
      clearOverlays();
      content.markers.forEach(function (m) { addMarker(m, content.callouts); });
      if (content.halo) {
        track(new google.maps.Circle({
          center: content.halo.center, radius: content.halo.radius_meters,
          fillColor: content.halo.color, fillOpacity: content.halo.fill_opacity,
          strokeColor: content.halo.color, strokeOpacity: 0.5, strokeWeight: 1, map: map
        }));
      }
      if (content.polyline) {
        track(new google.maps.Polyline({
          path: content.polyline.path, geodesic: content.polyline.geodesic,
          strokeColor: content.polyline.color, strokeOpacity: content.polyline.opacity,
          strokeWeight: content.polyline.weight, map: map
        }));
      }
      if (content.route_panel) showRoutePanel(content.route_panel);
      var cam = content.camera;
      if (cam.bounds) {
        var b = new google.maps.LatLngBounds(cam.bounds.south_west, cam.bounds.north_east);
        map.fitBounds(b, cam.bounds.padding);
      } else {
        map.setCenter(cam.center);
        map.setZoom(cam.zoom);
      }
    };

    function initMap() {
      try {
        map = new google.maps.Map(document.getElementById('map'), {
          center: { lat: $center_lat, lng: $center_lng }, zoom: $zoom,
          mapTypeControl: false, streetViewControl: false,
          fullscreenControl: false, zoomControl: true
        });
        if (pending) { var c = pending; pending = null; window.courtnavApply(c); }
      } catch (e) {
        showError(e.message);
      }
    }
  </script>
  <script src="https://maps.googleapis.com/maps/api/js?key=$api_key&callback=initMap" async defer
          onerror="showError('Failed to load Google Maps')"></script>
</body>
</html>
"""
)


def surface_page(
    api_key: str,
    center_lat: float = 10.3173,
    center_lng: float = 123.8854,
    zoom: int = 13,
    color: str = "#a3e635",
) -> str:
    """HTML document loaded once by the embedded surface."""
    return _PAGE.substitute(
        api_key=quote(api_key, safe=""),
        center_lat=center_lat,
        center_lng=center_lng,
        zoom=zoom,
        color=color,
    )
