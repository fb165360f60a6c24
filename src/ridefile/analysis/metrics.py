"""
Session-level summary statistics over a finished ride.

Training load follows the dashboard's simplified model:
  normalized power  ≈ mean power × 1.05
  intensity factor  = NP / threshold power
  TSS               = duration_s × NP × IF / (threshold × 3600) × 100

Threshold power is fixed at 250 W. There is no per-rider FTP setting; this is
a known simplification.
"""
import math
from dataclasses import dataclass
from typing import Dict, Sequence

from ridefile.analysis.timeseries import Sample

THRESHOLD_POWER_WATTS = 250.0
NORMALIZED_POWER_FACTOR = 1.05


@dataclass(frozen=True)
class SessionSummary:
    """Aggregate statistics for one ride. All zeros for an empty ride."""

    total_distance_km: float = 0.0
    total_elevation_gain_meters: float = 0.0
    average_speed_kmh: float = 0.0
    max_power_watts: float = 0.0
    training_stress_score: int = 0
    duration_seconds: float = 0.0
    average_power_watts: float = 0.0
    normalized_power_watts: float = 0.0
    intensity_factor: float = 0.0


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def elevation_gain(samples: Sequence[Sample]) -> float:
    """Sum of positive elevation changes between consecutive samples."""
    gain = 0.0
    for prev, cur in zip(samples, samples[1:]):
        diff = cur.elevation_meters - prev.elevation_meters
        if diff > 0:
            gain += diff
    return gain


def training_stress_score(duration_seconds: float, normalized_power: float) -> int:
    """
    TSS for a ride at the fixed threshold power, rounded half-up.

    Returns 0 if the computation is not a finite number.
    """
    intensity = normalized_power / THRESHOLD_POWER_WATTS
    tss = (
        duration_seconds * normalized_power * intensity
        / (THRESHOLD_POWER_WATTS * 3600) * 100
    )
    if not math.isfinite(tss):
        return 0
    return int(math.floor(tss + 0.5))


def summarize_session(samples: Sequence[Sample]) -> SessionSummary:
    """
    Build the SessionSummary for a completed sample sequence.

    Args:
        samples: the full, ordered series (as produced by the ingest pipeline)

    Returns:
        SessionSummary; every field is 0 when samples is empty, and any
        field that is not a finite number is reported as 0.
    """
    if not samples:
        return SessionSummary()

    last = samples[-1]
    total_distance = last.distance_km
    duration = last.elapsed_seconds
    hours = duration / 3600
    avg_speed = total_distance / hours if hours > 0 else 0.0

    # huge readings overflow to inf here and are reported as 0 below
    avg_power = sum(s.power_watts for s in samples) / len(samples)
    normalized_power = avg_power * NORMALIZED_POWER_FACTOR
    intensity = normalized_power / THRESHOLD_POWER_WATTS

    return SessionSummary(
        total_distance_km=_finite(total_distance),
        total_elevation_gain_meters=_finite(elevation_gain(samples)),
        average_speed_kmh=_finite(avg_speed),
        max_power_watts=_finite(max(s.power_watts for s in samples)),
        training_stress_score=training_stress_score(duration, normalized_power),
        duration_seconds=_finite(duration),
        average_power_watts=_finite(avg_power),
        normalized_power_watts=_finite(normalized_power),
        intensity_factor=_finite(intensity),
    )


def format_summary(summary: SessionSummary) -> Dict[str, str]:
    """
    Display strings for the dashboard's stat tiles.

    Returns:
        Dict like {"distance": "42.2 km", "avg_speed": "28.4 km/h",
        "elevation_gain": "512 m", "max_power": "640 W", "tss": "87"}
    """
    return {
        "distance": f"{summary.total_distance_km:.1f} km",
        "avg_speed": f"{summary.average_speed_kmh:.1f} km/h",
        "elevation_gain": f"{math.floor(summary.total_elevation_gain_meters + 0.5):d} m",
        "max_power": f"{math.floor(summary.max_power_watts + 0.5):d} W",
        "tss": str(summary.training_stress_score),
    }
