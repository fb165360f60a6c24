"""Shared test fixtures."""
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1"'
    ' xmlns:gpxtpx="http://www.garmin.com/xmlschemas/TrackPointExtension/v1"'
    ' xmlns:ns3="http://www.garmin.com/xmlschemas/TrackPointExtension/v2">'
    "<trk><trkseg>"
)
GPX_FOOTER = "</trkseg></trk></gpx>"

TCX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<TrainingCenterDatabase xmlns="http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"'
    ' xmlns:ns3="http://www.garmin.com/xmlschemas/ActivityExtension/v2">'
    '<Activities><Activity Sport="Biking"><Lap><Track>'
)
TCX_FOOTER = "</Track></Lap></Activity></Activities></TrainingCenterDatabase>"


def _gpx_trkpt(pt: Dict) -> str:
    attrs = ""
    if "lat" in pt:
        attrs += f' lat="{pt["lat"]}"'
    if "lon" in pt:
        attrs += f' lon="{pt["lon"]}"'
    body = ""
    if "ele" in pt:
        body += f"<ele>{pt['ele']}</ele>"
    if "time" in pt:
        body += f"<time>{pt['time']}</time>"
    ext = ""
    if "power" in pt:
        ext += f"<power>{pt['power']}</power>"
    if "hr" in pt:
        ext += f"<gpxtpx:TrackPointExtension><gpxtpx:hr>{pt['hr']}</gpxtpx:hr></gpxtpx:TrackPointExtension>"
    if "ns3_hr" in pt:
        ext += f"<ns3:TrackPointExtension><ns3:hr>{pt['ns3_hr']}</ns3:hr></ns3:TrackPointExtension>"
    if ext:
        body += f"<extensions>{ext}</extensions>"
    return f"<trkpt{attrs}>{body}</trkpt>"


def _tcx_trackpoint(pt: Dict) -> str:
    body = ""
    if "time" in pt:
        body += f"<Time>{pt['time']}</Time>"
    if "alt" in pt:
        body += f"<AltitudeMeters>{pt['alt']}</AltitudeMeters>"
    if "dist_m" in pt:
        body += f"<DistanceMeters>{pt['dist_m']}</DistanceMeters>"
    if "hr" in pt:
        body += f"<HeartRateBpm><Value>{pt['hr']}</Value></HeartRateBpm>"
    ext = ""
    if "speed_ms" in pt:
        ext += f"<ns3:Speed>{pt['speed_ms']}</ns3:Speed>"
    if "watts" in pt:
        ext += f"<ns3:Watts>{pt['watts']}</ns3:Watts>"
    if ext:
        body += f"<Extensions><ns3:TPX>{ext}</ns3:TPX></Extensions>"
    return f"<Trackpoint>{body}</Trackpoint>"


@pytest.fixture
def make_gpx() -> Callable[[List[Dict]], bytes]:
    """
    Build GPX bytes from point dicts. Recognized keys:
    lat, lon, ele, time, power, hr (TrackPointExtension v1), ns3_hr (v2).
    Omitted keys produce omitted elements.
    """
    def _make(points: List[Dict], header: Optional[str] = None) -> bytes:
        xml = (header or GPX_HEADER) + "".join(_gpx_trkpt(p) for p in points) + GPX_FOOTER
        return xml.encode("utf-8")
    return _make


@pytest.fixture
def make_tcx() -> Callable[[List[Dict]], bytes]:
    """
    Build TCX bytes from point dicts. Recognized keys:
    time, alt, dist_m, hr, speed_ms, watts.
    """
    def _make(points: List[Dict]) -> bytes:
        xml = TCX_HEADER + "".join(_tcx_trackpoint(p) for p in points) + TCX_FOOTER
        return xml.encode("utf-8")
    return _make


@pytest.fixture
def sample_gpx_bytes() -> bytes:
    return (FIXTURES_DIR / "sample_ride.gpx").read_bytes()


@pytest.fixture
def sample_tcx_bytes() -> bytes:
    return (FIXTURES_DIR / "sample_ride.tcx").read_bytes()
