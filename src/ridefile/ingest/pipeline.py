"""
Training-file ingestion pipeline.

    raw bytes → sniff format → parse XML → extract trackpoints
              → fill cumulative distance → derive speed → freeze → ParsedRide

Everything after the initial read is synchronous and works on the fully
materialized content. Each call builds its own trackpoints; nothing is shared
between invocations.
"""
import logging
import xml.etree.ElementTree as ET
from typing import Protocol

from ridefile.analysis.distance import fill_cumulative_distance
from ridefile.analysis.speed import derive_speed
from ridefile.analysis.timeseries import ParsedRide, freeze_trackpoints
from ridefile.ingest.errors import MalformedDocumentError
from ridefile.ingest.fields import local_name
from ridefile.ingest.sniffer import sniff_format

logger = logging.getLogger(__name__)

NO_TRACKPOINTS_MESSAGE = "No trackpoints found in file."


class AsyncUpload(Protocol):
    """Anything shaped like starlette's UploadFile."""

    filename: str

    async def read(self) -> bytes: ...


def parse_document(content: bytes, filename: str = "") -> ET.Element:
    """
    Parse raw bytes as XML and return the root element.

    Raises:
        MalformedDocumentError: if the content is not well-formed XML
    """
    try:
        return ET.fromstring(content)
    except ET.ParseError as exc:
        raise MalformedDocumentError(
            f"Failed to parse {filename or 'document'} as XML: {exc}",
            filename=filename,
        ) from exc


def parse_training_file(filename: str, content: bytes) -> ParsedRide:
    """
    Turn an uploaded GPX/TCX file into a ParsedRide.

    Args:
        filename: original file name; its extension selects the format
        content: the complete file content

    Returns:
        ParsedRide. Its samples tuple is empty when the file holds no
        trackpoints; that is not an error.

    Raises:
        UnsupportedFormatError: extension is not .gpx or .tcx (content untouched)
        MalformedDocumentError: content is not parsable XML
    """
    extractor = sniff_format(filename)
    root = parse_document(content, filename=filename)

    if local_name(root.tag) != extractor.root_tag:
        logger.warning(
            "%s: root element <%s> is not the expected <%s>, extracting anyway",
            filename, local_name(root.tag), extractor.root_tag,
        )

    points = extractor.extract(root)
    points = fill_cumulative_distance(points)
    points = derive_speed(points)
    ride = ParsedRide(
        filename=filename,
        file_format=extractor.file_format,
        samples=freeze_trackpoints(points),
    )

    if ride.is_empty:
        logger.info("%s: no trackpoints found", filename)
    else:
        logger.info(
            "%s: parsed %d %s trackpoints (%.2f km)",
            filename, len(ride.samples), extractor.file_format.value,
            ride.samples[-1].distance_km,
        )
    return ride


async def read_training_file(upload: AsyncUpload) -> ParsedRide:
    """
    Read an upload's bytes and run the pipeline over them.

    The read is the only await; if the caller is cancelled there, nothing
    has been produced and nothing needs undoing.
    """
    content = await upload.read()
    return parse_training_file(upload.filename or "", content)
