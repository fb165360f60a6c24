"""
Cumulative distance reconstruction from GPS positions.

GPX files carry positions but no distance channel, so the running total is
built by summing great-circle (haversine) distances between consecutive
trackpoints. TCX files usually carry DistanceMeters directly; those values are
kept as-is and the haversine fallback is never invoked for them.
"""
import logging
import math
from dataclasses import replace
from typing import List, Sequence

from ridefile.analysis.timeseries import Trackpoint

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in kilometers.

    Args:
        lat1, lon1: first point in decimal degrees
        lat2, lon2: second point in decimal degrees

    Returns:
        Distance in km. Identical points return exactly 0.0.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def fill_cumulative_distance(points: Sequence[Trackpoint]) -> List[Trackpoint]:
    """
    Fill in distance_km wherever the source did not provide it.

    Rules, applied in order for each point:
      - explicit distance: kept, but never below the previous total
      - first point: 0.0
      - both this and the previous point have a position:
        previous total + haversine(previous, this)
      - otherwise: previous total carried forward

    Only consecutive pairs are ever measured. Returns new Trackpoint
    instances; the input is not modified.
    """
    filled: List[Trackpoint] = []
    for i, pt in enumerate(points):
        if i == 0:
            total = pt.distance_km if pt.distance_km is not None else 0.0
            filled.append(replace(pt, distance_km=total))
            continue

        prev = filled[i - 1]
        prev_total = prev.distance_km
        if pt.distance_km is not None:
            if pt.distance_km < prev_total:
                logger.debug(
                    "Distance went backwards at record %d (%.4f < %.4f km), holding previous",
                    i, pt.distance_km, prev_total,
                )
            total = max(prev_total, pt.distance_km)
        elif pt.has_position and prev.has_position:
            total = prev_total + haversine_km(prev.lat, prev.lon, pt.lat, pt.lon)
        else:
            total = prev_total
        filled.append(replace(pt, distance_km=total))

    return filled
