"""
Trackpoint / Sample dataclasses and the ParsedRide result.

Trackpoint is the mutable working record the extractors emit. Its distance_km
and speed_kmh are None when the source file did not supply them; the distance
reconstructor and speed derivator fill those gaps. Once the series is complete
it is frozen into Sample instances and handed out as a ParsedRide.

Analysis functions take sequences of these plain dataclasses and return pure
results. Nothing here knows about XML or HTTP.
"""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class TrainingFileFormat(str, Enum):
    GPX = "gpx"
    TCX = "tcx"


@dataclass
class Trackpoint:
    """One record as read from the source document, before derivation."""

    elapsed_seconds: float
    elevation_meters: float = 0.0
    lat: Optional[float] = None
    lon: Optional[float] = None
    distance_km: Optional[float] = None   # None -> reconstruct from positions
    speed_kmh: Optional[float] = None     # None -> derive from distance/time
    power_watts: float = 0.0
    heart_rate_bpm: float = 0.0

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class Sample:
    """
    One finished sample of a ride.
    All channels default to 0 when the device did not record them.
    """

    elapsed_seconds: float
    elevation_meters: float
    distance_km: float           # cumulative from the first sample
    speed_kmh: float
    power_watts: float
    heart_rate_bpm: float
    lat: Optional[float] = None  # decimal degrees, GPX only
    lon: Optional[float] = None


def freeze_trackpoints(points: Sequence[Trackpoint]) -> Tuple[Sample, ...]:
    """
    Convert completed trackpoints into immutable samples.

    Any distance or speed still missing at this stage becomes 0.0.
    """
    return tuple(
        Sample(
            elapsed_seconds=pt.elapsed_seconds,
            elevation_meters=pt.elevation_meters,
            distance_km=pt.distance_km if pt.distance_km is not None else 0.0,
            speed_kmh=pt.speed_kmh if pt.speed_kmh is not None else 0.0,
            power_watts=pt.power_watts,
            heart_rate_bpm=pt.heart_rate_bpm,
            lat=pt.lat,
            lon=pt.lon,
        )
        for pt in points
    )


def samples_to_dicts(samples: Sequence[Sample]) -> List[Dict[str, Any]]:
    """Plain dicts for JSON output (API responses, CLI)."""
    return [asdict(s) for s in samples]


@dataclass(frozen=True)
class ParsedRide:
    """
    The result of ingesting one training file.

    An empty `samples` tuple is a valid outcome (no trackpoints in the file)
    and is distinct from a parse failure, which raises instead.
    """

    filename: str
    file_format: TrainingFileFormat
    samples: Tuple[Sample, ...]

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def summary(self):
        """Compute the SessionSummary for this ride."""
        from ridefile.analysis.metrics import summarize_session

        return summarize_session(self.samples)
