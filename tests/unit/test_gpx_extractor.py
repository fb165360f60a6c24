"""Tests for GPX trackpoint extraction."""
import xml.etree.ElementTree as ET

import pytest

from ridefile.ingest.gpx import GpxExtractor


@pytest.fixture
def extract(make_gpx):
    def _extract(points):
        return GpxExtractor().extract(ET.fromstring(make_gpx(points)))
    return _extract


class TestGpxExtractorFields:
    def test_reads_all_fields(self, extract):
        pts = extract([
            {"lat": 47.6, "lon": -122.3, "ele": 50.5, "time": "2025-06-01T07:00:00Z", "power": 210, "hr": 131},
        ])
        assert len(pts) == 1
        pt = pts[0]
        assert pt.lat == 47.6
        assert pt.lon == -122.3
        assert pt.elevation_meters == 50.5
        assert pt.power_watts == 210.0
        assert pt.heart_rate_bpm == 131.0
        assert pt.elapsed_seconds == 0.0

    def test_distance_and_speed_left_for_derivation(self, extract):
        pt = extract([{"lat": 1, "lon": 1, "time": "2025-06-01T07:00:00Z"}])[0]
        assert pt.distance_km is None
        assert pt.speed_kmh is None

    def test_heart_rate_from_v2_namespace(self, extract):
        pt = extract([{"lat": 0, "lon": 0, "ns3_hr": 144}])[0]
        assert pt.heart_rate_bpm == 144.0

    def test_missing_optional_fields_default_to_zero(self, extract):
        pt = extract([{"lat": 10, "lon": 20}])[0]
        assert pt.elevation_meters == 0.0
        assert pt.power_watts == 0.0
        assert pt.heart_rate_bpm == 0.0

    def test_missing_coordinates_default_to_zero(self, extract):
        pt = extract([{"ele": 5, "time": "2025-06-01T07:00:00Z"}])[0]
        assert pt.lat == 0.0
        assert pt.lon == 0.0

    def test_garbage_numeric_text_defaults(self, extract):
        pt = extract([{"lat": "north", "lon": 3, "ele": "high", "power": "lots"}])[0]
        assert pt.lat == 0.0
        assert pt.lon == 3.0
        assert pt.elevation_meters == 0.0
        assert pt.power_watts == 0.0


class TestGpxExtractorTime:
    def test_offsets_relative_to_first_record(self, extract):
        pts = extract([
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:00Z"},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:10Z"},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:01:00.5Z"},
        ])
        assert [p.elapsed_seconds for p in pts] == [0.0, 10.0, 60.5]

    def test_record_without_timestamp_gets_offset_zero(self, extract):
        """Undated records collide with the origin; they are not interpolated."""
        pts = extract([
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:00Z"},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:10Z"},
            {"lat": 0, "lon": 0},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:30Z"},
        ])
        assert [p.elapsed_seconds for p in pts] == [0.0, 10.0, 0.0, 30.0]

    def test_origin_taken_from_first_dated_record(self, extract):
        pts = extract([
            {"lat": 0, "lon": 0},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:05Z"},
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:15Z"},
        ])
        assert [p.elapsed_seconds for p in pts] == [0.0, 0.0, 10.0]

    def test_no_timestamps_at_all(self, extract):
        pts = extract([{"lat": 0, "lon": 0}, {"lat": 0, "lon": 1}])
        assert [p.elapsed_seconds for p in pts] == [0.0, 0.0]

    def test_timezone_offsets_are_normalized(self, extract):
        pts = extract([
            {"lat": 0, "lon": 0, "time": "2025-06-01T07:00:00Z"},
            {"lat": 0, "lon": 0, "time": "2025-06-01T09:00:20+02:00"},
        ])
        assert pts[1].elapsed_seconds == 20.0


class TestGpxExtractorTraversal:
    def test_document_order_preserved_across_segments(self):
        xml = (
            '<gpx xmlns="http://www.topografix.com/GPX/1/1"><trk>'
            '<trkseg><trkpt lat="1" lon="0"/><trkpt lat="2" lon="0"/></trkseg>'
            '<trkseg><trkpt lat="3" lon="0"/></trkseg>'
            "</trk></gpx>"
        )
        pts = GpxExtractor().extract(ET.fromstring(xml))
        assert [p.lat for p in pts] == [1.0, 2.0, 3.0]

    def test_no_trackpoints_is_empty_list(self):
        xml = '<gpx xmlns="http://www.topografix.com/GPX/1/1"><wpt lat="1" lon="1"/></gpx>'
        assert GpxExtractor().extract(ET.fromstring(xml)) == []

    def test_un_namespaced_document(self):
        xml = '<gpx><trk><trkseg><trkpt lat="5" lon="6"><ele>7</ele></trkpt></trkseg></trk></gpx>'
        pts = GpxExtractor().extract(ET.fromstring(xml))
        assert pts[0].lat == 5.0
        assert pts[0].elevation_meters == 7.0
