# jeevanpath/models/geo_point.py
"""
Mixin for tables that carry a geographic point.

`location` holds the GeoJSON point ([lng, lat] order). `latitude`/`longitude`
mirror it as plain indexed floats so radius searches can prefilter in SQL.
Always write through set_point() so the two never drift apart.
"""

from sqlalchemy import Column, Float, JSON
from jeevanpath.utils.geo import geojson_point


class GeoPointMixin:
    location = Column(JSON, nullable=False)
    latitude = Column(Float, nullable=False, index=True)
    longitude = Column(Float, nullable=False, index=True)

    def set_point(self, lat: float, lng: float):
        self.location = geojson_point(lat, lng)
        self.latitude = lat
        self.longitude = lng
