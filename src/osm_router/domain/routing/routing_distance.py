"""
Great-circle distances (haversine) on a sphere of radius 6371 km.

Two units, two call sites:
  • haversine_m   – edge weights, nearest-node search and routing (meters)
  • haversine_km  – standalone place-to-place advisory figure (kilometers)
"""

import math

import numpy as np

from osm_router.domain.entities.geography import Coordinate

EARTH_RADIUS_KM = 6371.0


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) * math.sin(dlat / 2)
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2)
        * math.sin(dlon / 2)
    )
    a = min(a, 1.0)
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    return EARTH_RADIUS_KM * _central_angle(a.latitude, a.longitude, b.latitude, b.longitude)


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a, b) * 1000


def haversine_m_many(origin: Coordinate, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Meters from ``origin`` to every (lats[i], lons[i])."""
    dlat = np.radians(lats - origin.latitude)
    dlon = np.radians(lons - origin.longitude)
    a = np.sin(dlat / 2) ** 2 + math.cos(math.radians(origin.latitude)) * np.cos(
        np.radians(lats)
    ) * np.sin(dlon / 2) ** 2
    # clip guards sqrt(1 - a) against rounding just above 1
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a)) * 1000
