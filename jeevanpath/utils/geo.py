# jeevanpath/utils/geo.py
"""
Geographic helpers shared by the resource index, the dispatcher and the API.

Points are persisted GeoJSON-style: {"type": "Point", "coordinates": [lng, lat]}.
Longitude always comes first.
"""

import math
from typing import List, Optional, Tuple

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km (Haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (math.sin(d_lat / 2) * math.sin(d_lat / 2) +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(d_lng / 2) * math.sin(d_lng / 2))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def geojson_point(lat: float, lng: float) -> dict:
    return {"type": "Point", "coordinates": [lng, lat]}


def point_lat_lng(point: dict) -> Tuple[float, float]:
    """(lat, lng) from a GeoJSON point."""
    lng, lat = point["coordinates"]
    return lat, lng


def bounding_box(lat: float, lng: float,
                 radius_km: float) -> Tuple[float, float, Optional[List[Tuple[float, float]]]]:
    """
    Rough (min_lat, max_lat, lng_ranges) enclosing a circle of radius_km.
    Only a prefilter: callers must still apply distance_km().

    lng_ranges is None when every longitude can be inside the circle (the box
    reaches a pole, or is wider than the globe). A box crossing ±180° comes
    back as two ranges, one on each side of the antimeridian.
    """
    # Pad by 1% so points sitting exactly on the radius are not cut off
    lat_delta = radius_km * 1.01 / KM_PER_DEGREE_LAT
    min_lat, max_lat = lat - lat_delta, lat + lat_delta
    if min_lat <= -90 or max_lat >= 90:
        return max(min_lat, -90.0), min(max_lat, 90.0), None

    # Degrees of longitude shrink toward the poles: size the box at its poleward edge
    cos_lat = math.cos(math.radians(max(abs(min_lat), abs(max_lat))))
    lng_delta = radius_km * 1.01 / (KM_PER_DEGREE_LAT * cos_lat)
    if lng_delta >= 180:
        return min_lat, max_lat, None

    min_lng, max_lng = lng - lng_delta, lng + lng_delta
    if min_lng < -180:
        return min_lat, max_lat, [(min_lng + 360, 180.0), (-180.0, max_lng)]
    if max_lng > 180:
        return min_lat, max_lat, [(min_lng, 180.0), (-180.0, max_lng - 360)]
    return min_lat, max_lat, [(min_lng, max_lng)]
