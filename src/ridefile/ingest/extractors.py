"""
TrackpointExtractor: the one capability both file formats implement.

An extractor walks a parsed document and produces one Trackpoint per recorded
point, in document order. The time origin (first record's instant) is captured
here and passed explicitly into each offset computation, so subclasses only
have to read their format's fields.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterator, List, Optional, Tuple
from xml.etree.ElementTree import Element

from ridefile.analysis.timeseries import Trackpoint, TrainingFileFormat
from ridefile.ingest.fields import FieldChain, iter_matching, local_name

logger = logging.getLogger(__name__)


def elapsed_since(origin: Optional[datetime], instant: Optional[datetime]) -> float:
    """
    Seconds from origin to instant.

    A record without a timestamp gets offset 0, the same as the origin record.
    That collision is the established behavior for undated records; they are
    not interpolated.
    """
    if origin is None or instant is None:
        return 0.0
    return (instant - origin).total_seconds()


class TrackpointExtractor(ABC):
    """Base class for format-specific trackpoint extraction."""

    file_format: TrainingFileFormat
    extensions: Tuple[str, ...] = ()
    root_tag: str = ""           # expected local name of the document root
    record_tag: str = ""         # local name of one trackpoint element
    time_field: FieldChain

    def iter_records(self, root: Element) -> Iterator[Element]:
        """All trackpoint elements in document order, any namespace."""
        if local_name(root.tag) == self.record_tag:
            yield root
        yield from iter_matching(root, self.record_tag)

    def extract(self, root: Element) -> List[Trackpoint]:
        """
        Read every trackpoint from the document.

        Missing fields degrade to defaults; no single record can abort
        extraction. Returns an empty list if the document has no trackpoints.
        """
        points: List[Trackpoint] = []
        origin: Optional[datetime] = None

        for index, element in enumerate(self.iter_records(root)):
            instant = self.time_field.read_instant(element)
            if instant is None:
                logger.debug("%s record %d has no usable timestamp, offset 0", self.file_format.value, index)
            elif origin is None:
                origin = instant
            points.append(self.read_record(element, elapsed_since(origin, instant)))

        return points

    @abstractmethod
    def read_record(self, element: Element, elapsed_seconds: float) -> Trackpoint:
        """Build a Trackpoint from one record element."""
