"""
Instantaneous speed by numerical differentiation of cumulative distance.

Used for GPX (no speed channel at all) and for individual TCX records that
lack a Speed reading. Records that carry a source speed are left alone.
"""
import math
from dataclasses import replace
from typing import List, Optional, Sequence

from ridefile.analysis.timeseries import Trackpoint

_SECONDS_PER_HOUR = 3600.0


def speed_between(prev: Trackpoint, cur: Trackpoint) -> Optional[float]:
    """
    km/h between two consecutive trackpoints, or None if cur is not later
    than prev (zero or negative time delta) or the result is not finite.
    """
    dt_hours = (cur.elapsed_seconds - prev.elapsed_seconds) / _SECONDS_PER_HOUR
    if dt_hours <= 0:
        return None
    speed = ((cur.distance_km or 0.0) - (prev.distance_km or 0.0)) / dt_hours
    return speed if math.isfinite(speed) else None


def derive_speed(points: Sequence[Trackpoint]) -> List[Trackpoint]:
    """
    Fill in speed_kmh (km/h) wherever it is missing.

    The first point's speed is always 0.0 since there is nothing to
    differentiate against. For later points:

        speed = (distance[i] - distance[i-1]) / ((time[i] - time[i-1]) / 3600)

    When the time delta is zero or negative (duplicate timestamps, or a record
    with no timestamp sitting at offset 0), the previous point's speed is
    carried forward instead.

    Expects distance_km to be filled already (see fill_cumulative_distance).
    Returns new Trackpoint instances.
    """
    derived: List[Trackpoint] = []
    for i, pt in enumerate(points):
        if i == 0:
            derived.append(replace(pt, speed_kmh=0.0))
            continue

        if pt.speed_kmh is not None:
            derived.append(pt)
            continue

        prev = derived[i - 1]
        speed = speed_between(prev, pt)
        if speed is None:
            speed = prev.speed_kmh
        derived.append(replace(pt, speed_kmh=speed))

    return derived
