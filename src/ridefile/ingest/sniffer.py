"""
Format sniffing: pick the extractor for an uploaded file.

Selection is by case-insensitive file extension only, and happens before the
content is parsed, so an unsupported upload never reaches the XML parser.
"""
from typing import Dict, List

from ridefile.ingest.errors import UnsupportedFormatError
from ridefile.ingest.extractors import TrackpointExtractor
from ridefile.ingest.gpx import GpxExtractor
from ridefile.ingest.tcx import TcxExtractor

_EXTRACTORS: Dict[str, TrackpointExtractor] = {}


def register_extractor(extractor: TrackpointExtractor) -> None:
    for ext in extractor.extensions:
        _EXTRACTORS[ext.lower()] = extractor


register_extractor(GpxExtractor())
register_extractor(TcxExtractor())


def supported_extensions() -> List[str]:
    """Registered extensions, e.g. [".gpx", ".tcx"]."""
    return sorted(_EXTRACTORS)


def sniff_format(filename: str) -> TrackpointExtractor:
    """
    Return the extractor registered for filename's extension.

    Raises:
        UnsupportedFormatError: if no extractor handles the extension
    """
    lowered = filename.lower()
    for ext, extractor in _EXTRACTORS.items():
        if lowered.endswith(ext):
            return extractor
    raise UnsupportedFormatError(
        f"Unsupported file format: {filename!r} (expected one of {', '.join(supported_extensions())})",
        filename=filename,
    )
