"""
GPX trackpoint extraction (position-based variant).

GPX field mapping:
  GPX source                              → Trackpoint field
  <trkpt lat="" lon="">                   → lat, lon (degrees, 0 if absent)
  <ele>                                   → elevation_meters (0 if absent)
  <time>                                  → elapsed_seconds (relative to first record)
  <extensions> .../hr                     → heart_rate_bpm (namespace varies, 0 if absent)
  <extensions> .../power | PowerInWatts   → power_watts (0 if absent)

GPX has no distance or speed channel. Both are left as None here and derived
later from positions and timestamps.
"""
import logging
from typing import Optional
from xml.etree.ElementTree import Element

from ridefile.analysis.timeseries import Trackpoint, TrainingFileFormat
from ridefile.ingest.extractors import TrackpointExtractor
from ridefile.ingest.fields import chain, parse_number

logger = logging.getLogger(__name__)

TPX_V1 = "http://www.garmin.com/xmlschemas/TrackPointExtension/v1"
TPX_V2 = "http://www.garmin.com/xmlschemas/TrackPointExtension/v2"
POWER_EXT_V1 = "http://www.garmin.com/xmlschemas/PowerExtension/v1"

GPX_TIME = chain("time", "time")
GPX_ELEVATION = chain("elevation", "ele")
GPX_HEART_RATE = chain(
    "heart_rate",
    f"{{{TPX_V1}}}hr",
    f"{{{TPX_V2}}}hr",
    "hr",
    "heartrate",
)
GPX_POWER = chain(
    "power",
    "power",
    f"{{{POWER_EXT_V1}}}PowerInWatts",
    "PowerInWatts",
)


def _coordinate(element: Element, attribute: str) -> float:
    value: Optional[float] = parse_number(element.get(attribute))
    if value is None:
        logger.debug("trkpt missing %s attribute, defaulting to 0", attribute)
        return 0.0
    return value


class GpxExtractor(TrackpointExtractor):
    file_format = TrainingFileFormat.GPX
    extensions = (".gpx",)
    root_tag = "gpx"
    record_tag = "trkpt"
    time_field = GPX_TIME

    def read_record(self, element: Element, elapsed_seconds: float) -> Trackpoint:
        return Trackpoint(
            elapsed_seconds=elapsed_seconds,
            elevation_meters=GPX_ELEVATION.read_float(element),
            lat=_coordinate(element, "lat"),
            lon=_coordinate(element, "lon"),
            power_watts=GPX_POWER.read_float(element),
            heart_rate_bpm=GPX_HEART_RATE.read_float(element),
        )
