"""Ride file upload routes."""
import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from ridefile.analysis.metrics import format_summary
from ridefile.analysis.timeseries import samples_to_dicts
from ridefile.config import Settings, get_settings
from ridefile.ingest.errors import MalformedDocumentError, UnsupportedFormatError
from ridefile.ingest.pipeline import NO_TRACKPOINTS_MESSAGE, read_training_file
from ridefile.ingest.sniffer import sniff_format, supported_extensions

logger = logging.getLogger(__name__)

router = APIRouter()

PARSE_FAILED_MESSAGE = "Failed to parse file. Ensure it is a valid GPX or TCX."


class SamplePayload(BaseModel):
    elapsed_seconds: float
    elevation_meters: float
    distance_km: float
    speed_kmh: float
    power_watts: float
    heart_rate_bpm: float
    lat: Optional[float] = None
    lon: Optional[float] = None


class SummaryPayload(BaseModel):
    total_distance_km: float
    total_elevation_gain_meters: float
    average_speed_kmh: float
    max_power_watts: float
    training_stress_score: int
    duration_seconds: float
    average_power_watts: float
    normalized_power_watts: float
    intensity_factor: float


class RideUploadResponse(BaseModel):
    filename: str
    format: str
    sample_count: int
    samples: List[SamplePayload]
    summary: SummaryPayload
    display: Dict[str, str]
    message: Optional[str] = None


class _LimitedUpload:
    """Wraps UploadFile so the pipeline's read enforces the size limit."""

    def __init__(self, upload: UploadFile, max_bytes: int):
        self.filename = upload.filename or ""
        self._upload = upload
        self._max_bytes = max_bytes

    async def read(self) -> bytes:
        content = await self._upload.read(self._max_bytes + 1)
        if len(content) > self._max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File exceeds the {self._max_bytes} byte upload limit",
            )
        return content


@router.get("/formats", response_model=List[str])
def list_formats():
    """File extensions accepted by /rides/upload."""
    return supported_extensions()


@router.post("/upload", response_model=RideUploadResponse)
async def upload_ride(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
):
    """
    Parse an uploaded GPX/TCX file into a time series plus summary.

    An empty file (no trackpoints) is a 200 with a message, not an error.
    """
    try:
        sniff_format(file.filename or "")
        ride = await read_training_file(_LimitedUpload(file, settings.max_upload_bytes))
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=415, detail=str(exc))
    except MalformedDocumentError as exc:
        logger.warning("Rejected malformed upload %s: %s", exc.filename, exc)
        raise HTTPException(status_code=422, detail=PARSE_FAILED_MESSAGE)

    summary = ride.summary()
    return RideUploadResponse(
        filename=ride.filename,
        format=ride.file_format.value,
        sample_count=len(ride.samples),
        samples=[SamplePayload(**s) for s in samples_to_dicts(ride.samples)],
        summary=SummaryPayload(**asdict(summary)),
        display=format_summary(summary),
        message=NO_TRACKPOINTS_MESSAGE if ride.is_empty else None,
    )
