"""
TCX trackpoint extraction (distance-bearing variant).

TCX field mapping:
  TCX source                        → Trackpoint field
  <Time>                            → elapsed_seconds (relative to first record)
  <AltitudeMeters>                  → elevation_meters (0 if absent)
  <DistanceMeters>                  → distance_km (÷ 1000, authoritative)
  <HeartRateBpm><Value>             → heart_rate_bpm (0 if absent)
  <Extensions> .../Watts            → power_watts (0 if absent)
  <Extensions> .../Speed            → speed_kmh (m/s × 3.6, authoritative)

Positions are not read; lat/lon stay None. A record without DistanceMeters
keeps distance_km=None and inherits the previous total downstream; a record
without Speed gets a derived speed.
"""
from typing import Optional
from xml.etree.ElementTree import Element

from ridefile.analysis.timeseries import Trackpoint, TrainingFileFormat
from ridefile.ingest.extractors import TrackpointExtractor
from ridefile.ingest.fields import chain, finite_or_none

ACTIVITY_EXT_V2 = "http://www.garmin.com/xmlschemas/ActivityExtension/v2"

_MS_TO_KMH = 3.6

TCX_TIME = chain("time", "Time")
TCX_ELEVATION = chain("elevation", "AltitudeMeters")
TCX_DISTANCE = chain("distance", "DistanceMeters")
TCX_HEART_RATE = chain("heart_rate", ("HeartRateBpm", "Value"))
TCX_POWER = chain("power", f"{{{ACTIVITY_EXT_V2}}}Watts", "Watts")
TCX_SPEED = chain("speed", f"{{{ACTIVITY_EXT_V2}}}Speed", "Speed")


class TcxExtractor(TrackpointExtractor):
    file_format = TrainingFileFormat.TCX
    extensions = (".tcx",)
    root_tag = "TrainingCenterDatabase"
    record_tag = "Trackpoint"
    time_field = TCX_TIME

    def read_record(self, element: Element, elapsed_seconds: float) -> Trackpoint:
        distance_m: Optional[float] = TCX_DISTANCE.read_number(element)
        speed_ms: Optional[float] = TCX_SPEED.read_number(element)
        return Trackpoint(
            elapsed_seconds=elapsed_seconds,
            elevation_meters=TCX_ELEVATION.read_float(element),
            distance_km=finite_or_none(distance_m / 1000.0) if distance_m is not None else None,
            speed_kmh=finite_or_none(speed_ms * _MS_TO_KMH) if speed_ms is not None else None,
            power_watts=TCX_POWER.read_float(element),
            heart_rate_bpm=TCX_HEART_RATE.read_float(element),
        )
